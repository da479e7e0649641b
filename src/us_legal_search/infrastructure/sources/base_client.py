"""
Base API Client - Common HTTP request pattern for all legal data sources.

Eliminates duplicated request/normalize/rank code across the five source
clients by providing:
- httpx.AsyncClient management with a bounded timeout on every request
- Typed error classification (credential required, timeout, refused, 4xx, 5xx)
- A safe request wrapper that logs and resolves every failure to None
- SourceAdapter: the shared over-fetch → normalize → score → floor → truncate
  algorithm, parametrized per source by class-level configuration

Failures are never retried: a failed upstream call degrades to an empty
result plus a log line. ``asyncio.CancelledError`` is never caught, so a
cancelled tool call cancels its in-flight requests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Sequence
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar

import httpx
from typing_extensions import Self

from us_legal_search.application.search.relevance import rank_by_relevance
from us_legal_search.config import DEFAULT_REQUEST_TIMEOUT, DEFAULT_USER_AGENT
from us_legal_search.core.exceptions import (
    CredentialRequiredError,
    LegalSearchError,
    NetworkError,
    NotFoundError,
    ParseError,
    ServiceUnavailableError,
    UpstreamClientError,
    UpstreamTimeoutError,
)
from us_legal_search.infrastructure.sources.field_mapping import as_list

if TYPE_CHECKING:
    from us_legal_search.application.search.relevance import WeightTable

logger = logging.getLogger(__name__)


class KeyedRecord(Protocol):
    @property
    def key(self) -> Hashable: ...


RecordT = TypeVar("RecordT", bound=KeyedRecord)
ItemT = TypeVar("ItemT", bound=KeyedRecord)


class BaseAPIClient:
    """
    Base class for upstream API clients.

    Provides common infrastructure:
    - httpx.AsyncClient management
    - Default query parameters (e.g. ``api_key``) via ``_default_params()``
    - Consistent error classification and logging

    Subclasses should set ``_service_name`` and, for credentialed services,
    ``_signup_url``. A 403 from such a service means a missing or rejected
    key and is logged with the signup URL; elsewhere it is a plain client error.

    Example:
        class MyClient(BaseAPIClient):
            _service_name = "MyAPI"

            def __init__(self):
                super().__init__(base_url="https://api.example.com")

            async def get_item(self, item_id: str) -> dict | None:
                return await self._make_request(f"/items/{item_id}")
    """

    _service_name: str = "API"
    _signup_url: str | None = None

    def __init__(
        self,
        base_url: str = "",
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        headers: dict[str, str] | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize base client.

        Args:
            base_url: Base URL for the API (optional, can pass full URLs)
            timeout: Default timeout ceiling in seconds for every request
            headers: Default headers for all requests
            user_agent: User-Agent header value
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        default_headers = {"User-Agent": user_agent, "Accept": "application/json"}
        default_headers.update(headers or {})
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            headers=default_headers,
            follow_redirects=True,
            transport=transport,
            limits=httpx.Limits(
                max_connections=20,
                max_keepalive_connections=10,
                keepalive_expiry=30.0,
            ),
        )

    def _build_url(self, url: str) -> str:
        """Build full URL from path or full URL."""
        if url.startswith(("http://", "https://")):
            return url
        return f"{self._base_url}{url}"

    def _default_params(self) -> dict[str, Any]:
        """Query parameters added to every request. Override for credentials."""
        return {}

    async def _fetch_json(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """
        GET a JSON object, raising a typed error on any failure.

        Args:
            url: Full URL or path (appended to base_url)
            params: Query parameters (None values are dropped)
            headers: Additional headers for this request
            timeout: Per-call timeout override in seconds

        Raises:
            CredentialRequiredError: HTTP 403 from a service with a signup URL
            NotFoundError: HTTP 404
            UpstreamClientError: other HTTP 4xx, including 403 from a keyless service
            ServiceUnavailableError: HTTP 5xx
            UpstreamTimeoutError: request timed out
            NetworkError: connection refused or other transport failure
            ParseError: body is not a JSON object
        """
        full_url = self._build_url(url)
        merged = {**self._default_params(), **(params or {})}
        query = {key: value for key, value in merged.items() if value is not None}
        request_timeout = timeout if timeout is not None else self._timeout

        try:
            response = await self._client.get(
                full_url,
                params=query,
                headers=headers or {},
                timeout=request_timeout,
            )
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(request_timeout, service=self._service_name) from e
        except httpx.ConnectError as e:
            raise NetworkError(
                "Connection refused. The API endpoint may be down.",
                service=self._service_name,
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(str(e) or type(e).__name__, service=self._service_name) from e

        status = response.status_code
        if status == 403 and self._signup_url:
            raise CredentialRequiredError(self._service_name, signup_url=self._signup_url)
        if status == 404:
            raise NotFoundError(f"{self._service_name} resource", full_url)
        if 400 <= status < 500:
            raise UpstreamClientError(status, response.reason_phrase, service=self._service_name)
        if status >= 500:
            raise ServiceUnavailableError(
                f"HTTP {status} {response.reason_phrase}".strip(),
                service=self._service_name,
                status_code=status,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ParseError("response is not valid JSON", source=self._service_name) from e

        if not isinstance(data, dict):
            raise ParseError(f"expected a JSON object, got {type(data).__name__}", source=self._service_name)
        return data

    async def _make_request(
        self,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any] | None:
        """
        Safe variant of ``_fetch_json``: log the failure and return None.

        Each failure category gets its own diagnostic so operators can tell
        a missing key from a dead endpoint.
        """
        try:
            return await self._fetch_json(url, params=params, headers=headers, timeout=timeout)
        except CredentialRequiredError as e:
            logger.warning(f"{e}. {e.context.suggestion}")
        except NotFoundError as e:
            logger.debug(str(e))
        except UpstreamTimeoutError as e:
            logger.error(f"{e}. The API may be temporarily unavailable.")
        except NetworkError as e:
            logger.error(str(e))
        except ServiceUnavailableError as e:
            logger.error(f"{e}. Upstream server error.")
        except UpstreamClientError as e:
            logger.error(f"API error: {e}")
        except LegalSearchError as e:
            logger.error(f"{self._service_name} request failed: {e}")
        except Exception as e:
            logger.exception(f"{self._service_name} request failed unexpectedly: {e}")
        return None

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()


class SourceAdapter(BaseAPIClient, Generic[RecordT]):
    """
    Base class for clients that return ranked canonical records.

    Per-source behaviour is configuration, not control flow:

        _weights            WeightTable for local re-scoring (None = keep upstream order)
        _over_fetch_factor  multiplier on the caller's limit for the upstream request
        _fetch_cap          hard cap on the upstream page size

    A search requests ``fetch_size(limit)`` candidates, normalizes them with
    ``_normalize_all`` and hands them to ``_rank``.
    """

    _weights: WeightTable | None = None
    _over_fetch_factor: int = 1
    _fetch_cap: int = 100

    def fetch_size(self, limit: int) -> int:
        """Upstream page size for a caller limit: min(limit × factor, cap), never below limit."""
        return max(limit, min(limit * self._over_fetch_factor, self._fetch_cap))

    def _normalize_all(
        self,
        items: Any,
        normalizer: Callable[[Any], ItemT | None],
    ) -> list[ItemT]:
        """
        Normalize raw upstream items, skipping unusable ones.

        Duplicate identities within one batch keep the first occurrence.
        """
        records: list[ItemT] = []
        seen: set[Hashable] = set()
        for item in as_list(items):
            record = normalizer(item)
            if record is None:
                logger.debug(f"{self._service_name}: skipping unusable item {item!r:.80}")
                continue
            if record.key in seen:
                logger.debug(f"{self._service_name}: dropping duplicate {record.key!r}")
                continue
            seen.add(record.key)
            records.append(record)
        return records

    def _rank(self, records: Sequence[RecordT], query: str, limit: int) -> list[RecordT]:
        """Apply the shared relevance floor policy, or plain truncation when unweighted."""
        if limit <= 0:
            return []
        if self._weights is None:
            return list(records[:limit])
        return rank_by_relevance(records, query, self._weights, limit)
