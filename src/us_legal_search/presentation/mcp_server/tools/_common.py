"""
Shared helpers for MCP tools.

- InputNormalizer: lenient coercion of agent-supplied arguments, raising
  ValidationError when a value cannot be used
- ResponseFormatter: uniform error and empty-result text
- tool_error_boundary: decorator that turns any failure inside a tool into
  its textual response, so a tool call never raises into the protocol layer
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from typing_extensions import ParamSpec

from us_legal_search.core.exceptions import (
    InvalidParameterError,
    InvalidQueryError,
    ValidationError,
)

logger = logging.getLogger(__name__)

P = ParamSpec("P")

DEFAULT_LIMIT = 20
MAX_LIMIT = 50
MIN_CONGRESS = 100
MAX_CONGRESS = 120
CHAMBERS = ("House", "Senate")
BILL_TYPES = ("hr", "s", "hjres", "sjres", "hconres", "sconres", "hres", "sres")
MAX_US_CODE_TITLE = 54


def _coerce_int(name: str, value: Any, expected: str) -> int:
    if isinstance(value, bool):
        raise InvalidParameterError(name, value, expected)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    raise InvalidParameterError(name, value, expected)


class InputNormalizer:
    """Coerce tool arguments; every method raises ValidationError on unusable input."""

    @staticmethod
    def normalize_query(query: Any) -> str:
        if query is None or not isinstance(query, str):
            raise InvalidQueryError(None if query is None else str(query), "Query must be a string")
        query = query.strip()
        if not query:
            raise InvalidQueryError(query)
        return query

    @staticmethod
    def normalize_limit(limit: Any, default: int = DEFAULT_LIMIT, max_val: int = MAX_LIMIT) -> int:
        """None → default; numbers and digit strings are clamped to [1, max_val]."""
        if limit is None or limit == "":
            return default
        value = _coerce_int("limit", limit, f"an integer between 1 and {max_val}")
        return max(1, min(value, max_val))

    @staticmethod
    def normalize_congress(congress: Any) -> int | None:
        if congress is None or congress == "":
            return None
        expected = f"a Congress number between {MIN_CONGRESS} and {MAX_CONGRESS}"
        value = _coerce_int("congress", congress, expected)
        if not MIN_CONGRESS <= value <= MAX_CONGRESS:
            raise InvalidParameterError("congress", congress, expected)
        return value

    @staticmethod
    def normalize_chamber(chamber: Any) -> str | None:
        if chamber is None or chamber == "":
            return None
        if isinstance(chamber, str):
            for name in CHAMBERS:
                if chamber.strip().lower() == name.lower():
                    return name
        raise InvalidParameterError("chamber", chamber, "'House' or 'Senate'")

    @staticmethod
    def normalize_court(court: Any) -> str | None:
        if court is None:
            return None
        if not isinstance(court, str):
            raise InvalidParameterError("court", court, "a CourtListener court id such as 'scotus'")
        return court.strip().lower() or None

    @staticmethod
    def normalize_bill_type(bill_type: Any) -> str:
        expected = "one of " + ", ".join(BILL_TYPES)
        if not isinstance(bill_type, str):
            raise InvalidParameterError("bill_type", bill_type, expected)
        value = bill_type.replace(".", "").replace(" ", "").lower()
        if value not in BILL_TYPES:
            raise InvalidParameterError("bill_type", bill_type, expected)
        return value

    @staticmethod
    def normalize_positive_int(name: str, value: Any) -> int:
        number = _coerce_int(name, value, "a positive integer")
        if number < 1:
            raise InvalidParameterError(name, value, "a positive integer")
        return number

    @staticmethod
    def normalize_us_code_title(title: Any, required: bool = True) -> int | None:
        if title is None or title == "":
            if required:
                raise InvalidParameterError("title", title, f"a US Code title between 1 and {MAX_US_CODE_TITLE}")
            return None
        expected = f"a US Code title between 1 and {MAX_US_CODE_TITLE}"
        value = _coerce_int("title", title, expected)
        if not 1 <= value <= MAX_US_CODE_TITLE:
            raise InvalidParameterError("title", title, expected)
        return value

    @staticmethod
    def normalize_identifier(name: str, value: Any) -> str:
        """Non-empty string identifier (document numbers, section numbers)."""
        if isinstance(value, int) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str) or not value.strip():
            raise InvalidParameterError(name, value, "a non-empty identifier")
        return value.strip()


class ResponseFormatter:
    """Textual responses shared by all tools."""

    @staticmethod
    def error(error: BaseException | str, tool_name: str) -> str:
        message = str(error) or type(error).__name__
        return f"Error executing tool {tool_name}: {message}"

    @staticmethod
    def validation_error(error: ValidationError, tool_name: str) -> str:
        lines = [f"Invalid input for {tool_name}: {error}"]
        if error.context.suggestion:
            lines.append(f"Suggestion: {error.context.suggestion}")
        if error.context.example:
            lines.append(f"Example: {error.context.example}")
        return "\n".join(lines)

    @staticmethod
    def not_found(what: str, suggestion: str | None = None) -> str:
        text = f"No {what} found."
        if suggestion:
            text = f"{text} {suggestion}"
        return text


def tool_error_boundary(
    tool_name: str,
) -> Callable[[Callable[P, Awaitable[str]]], Callable[P, Awaitable[str]]]:
    """
    Render validation failures and unexpected exceptions as the tool's text.

    ``functools.wraps`` keeps the signature visible to FastMCP for schema
    generation.
    """

    def decorator(func: Callable[P, Awaitable[str]]) -> Callable[P, Awaitable[str]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> str:
            try:
                return await func(*args, **kwargs)
            except ValidationError as e:
                logger.info(f"{tool_name}: rejected input: {e.to_dict()}")
                return ResponseFormatter.validation_error(e, tool_name)
            except Exception as e:
                logger.exception(f"{tool_name} failed: {e}")
                return ResponseFormatter.error(e, tool_name)

        return wrapper

    return decorator


__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "InputNormalizer",
    "ResponseFormatter",
    "tool_error_boundary",
]
