"""
Error types for US Legal Search.

Source clients raise the upstream errors internally and resolve them to an
empty result at their public boundary, so none of these reach the
aggregator. The MCP tool layer raises the validation errors while coercing
arguments and renders them as the tool's text.

    LegalSearchError
    ├── APIError                    upstream answered badly or not at all
    │   ├── CredentialRequiredError     403 from a keyed endpoint
    │   ├── NetworkError                transport failure
    │   │   └── UpstreamTimeoutError
    │   ├── ServiceUnavailableError     5xx
    │   └── UpstreamClientError         other 4xx
    ├── ValidationError             unusable tool argument
    │   ├── InvalidQueryError
    │   └── InvalidParameterError
    └── DataError                   payload problems
        ├── NotFoundError
        └── ParseError
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Any


class ErrorSeverity(Enum):
    WARNING = auto()  # bad input, caller can fix it
    ERROR = auto()
    CRITICAL = auto()
    TRANSIENT = auto()  # upstream hiccup, same call may work later


class ErrorCategory(Enum):
    API = "api"
    AUTH = "auth"
    VALIDATION = "validation"
    DATA = "data"
    NETWORK = "network"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Where an error happened and what the caller can do about it."""

    tool_name: str | None = None
    service: str | None = None
    operation: str | None = None
    input_value: Any = None
    suggestion: str | None = None
    example: str | None = None
    status_code: int | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


# Serialized key -> ErrorContext attribute, emitted only when set
_CONTEXT_KEYS = (
    ("tool", "tool_name"),
    ("service", "service"),
    ("status_code", "status_code"),
    ("suggestion", "suggestion"),
    ("example", "example"),
)


class LegalSearchError(Exception):
    """Base exception carrying an ErrorContext, a severity and a category."""

    def __init__(
        self,
        message: str,
        *,
        context: ErrorContext | None = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        category: ErrorCategory = ErrorCategory.API,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.context = context or ErrorContext()
        self.severity = severity
        self.category = category
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready summary; context keys appear only when populated."""
        data: dict[str, Any] = {
            "error": str(self),
            "category": self.category.value,
            "severity": self.severity.name.lower(),
            "retryable": self.retryable,
        }
        for key, attribute in _CONTEXT_KEYS:
            value = getattr(self.context, attribute)
            if value is not None and value != "":
                data[key] = value
        return data


# =============================================================================
# Upstream errors
# =============================================================================


class APIError(LegalSearchError):
    """
    An upstream service failed.

    When ``service`` is given the message is prefixed with it and it is
    recorded in the context together with ``status_code``.
    """

    def __init__(
        self,
        message: str,
        *,
        service: str | None = None,
        status_code: int | None = None,
        context: ErrorContext | None = None,
        category: ErrorCategory = ErrorCategory.API,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        retryable: bool = True,
    ) -> None:
        ctx = context or ErrorContext()
        if service is not None:
            ctx = replace(ctx, service=service)
            message = f"{service}: {message}"
        if status_code is not None:
            ctx = replace(ctx, status_code=status_code)
        super().__init__(message, context=ctx, severity=severity, category=category, retryable=retryable)


class CredentialRequiredError(APIError):
    """403 from an endpoint that needs an API key."""

    def __init__(
        self,
        service: str,
        *,
        signup_url: str | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = context or ErrorContext()
        if not ctx.suggestion:
            hint = f"Get an API key at {signup_url}" if signup_url else "Configure an API key for this service"
            ctx = replace(ctx, suggestion=hint)
        super().__init__(
            "API key required",
            service=service,
            status_code=403,
            context=ctx,
            category=ErrorCategory.AUTH,
            retryable=False,
        )
        self.signup_url = signup_url


class NetworkError(APIError):
    def __init__(
        self,
        message: str = "Network connection failed",
        *,
        service: str = "upstream",
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message, service=service, context=context, category=ErrorCategory.NETWORK)


class UpstreamTimeoutError(NetworkError):
    def __init__(
        self,
        timeout: float | None = None,
        *,
        service: str = "upstream",
        context: ErrorContext | None = None,
    ) -> None:
        message = "Connection timeout" if timeout is None else f"Connection timeout after {timeout:.0f}s"
        super().__init__(message, service=service, context=context)
        self.severity = ErrorSeverity.TRANSIENT
        self.timeout = timeout


class ServiceUnavailableError(APIError):
    """5xx from the upstream."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        *,
        service: str = "upstream",
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(
            message,
            service=service,
            status_code=status_code,
            context=context,
            severity=ErrorSeverity.TRANSIENT,
        )


class UpstreamClientError(APIError):
    """4xx other than 403 and 404; repeating the same request will not help."""

    def __init__(
        self,
        status_code: int,
        reason: str = "",
        *,
        service: str = "upstream",
        context: ErrorContext | None = None,
    ) -> None:
        message = f"HTTP {status_code} - {reason}" if reason else f"HTTP {status_code}"
        super().__init__(message, service=service, status_code=status_code, context=context, retryable=False)


# =============================================================================
# Tool argument errors
# =============================================================================


class ValidationError(LegalSearchError):
    def __init__(self, message: str, *, context: ErrorContext | None = None) -> None:
        super().__init__(
            message,
            context=context,
            severity=ErrorSeverity.WARNING,
            category=ErrorCategory.VALIDATION,
        )


class InvalidQueryError(ValidationError):
    def __init__(
        self,
        query: str | None,
        reason: str = "Query cannot be empty",
        *,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = context or ErrorContext()
        ctx = replace(
            ctx,
            input_value=query,
            suggestion=ctx.suggestion or "Pass a non-empty search phrase",
            example=ctx.example or 'search_all_legal(query="clean water")',
        )
        super().__init__(f"Invalid query: {reason}", context=ctx)


class InvalidParameterError(ValidationError):
    """A tool argument that cannot be coerced; ``expected`` describes valid values."""

    def __init__(
        self,
        param_name: str,
        value: Any,
        expected: str,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = replace(context or ErrorContext(), input_value=value, suggestion=f"Expected {expected}")
        super().__init__(f"Invalid parameter '{param_name}': {value!r} (expected {expected})", context=ctx)
        self.param_name = param_name


# =============================================================================
# Payload errors
# =============================================================================


class DataError(LegalSearchError):
    def __init__(self, message: str, *, context: ErrorContext | None = None) -> None:
        super().__init__(message, context=context, category=ErrorCategory.DATA)


class NotFoundError(DataError):
    """404, or a lookup whose identifier matched nothing."""

    def __init__(
        self,
        resource: str,
        identifier: str | None = None,
        *,
        context: ErrorContext | None = None,
    ) -> None:
        ctx = context or ErrorContext()
        ctx = replace(
            ctx,
            input_value=identifier,
            status_code=404,
            suggestion=ctx.suggestion or "Check the identifier and try again",
        )
        message = f"{resource} not found: {identifier}" if identifier else f"{resource} not found"
        super().__init__(message, context=ctx)


class ParseError(DataError):
    """Upstream body that is not a JSON object."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        prefix = f"Parse error ({source})" if source else "Parse error"
        super().__init__(f"{prefix}: {message}", context=context)
