"""
Core module for US Legal Search MCP.

Provides the unified exception hierarchy shared by source clients and the
MCP tool layer.
"""

from .exceptions import (
    # API errors
    APIError,
    CredentialRequiredError,
    # Data errors
    DataError,
    # Base
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    # Validation errors
    InvalidParameterError,
    InvalidQueryError,
    LegalSearchError,
    NetworkError,
    NotFoundError,
    ParseError,
    ServiceUnavailableError,
    UpstreamClientError,
    UpstreamTimeoutError,
    ValidationError,
)

__all__ = [
    "APIError",
    "CredentialRequiredError",
    "DataError",
    "ErrorCategory",
    "ErrorContext",
    "ErrorSeverity",
    "InvalidParameterError",
    "InvalidQueryError",
    "LegalSearchError",
    "NetworkError",
    "NotFoundError",
    "ParseError",
    "ServiceUnavailableError",
    "UpstreamClientError",
    "UpstreamTimeoutError",
    "ValidationError",
]
