"""
US Code API Integration

Provides sections of the United States Code from the Office of the Law
Revision Counsel.

API Documentation: https://uscode.house.gov/

The US Code service is slow and intermittently unavailable, so searches get
their own timeout (``LegalSearchSettings.us_code_timeout``, 30s by default)
and any 4xx answer degrades to an empty result with the status logged.
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import TYPE_CHECKING, Any

from us_legal_search.application.search.relevance import STATUTE_WEIGHTS
from us_legal_search.config import LegalSearchSettings
from us_legal_search.domain.entities import StatutoryProvision
from us_legal_search.infrastructure.sources.base_client import SourceAdapter
from us_legal_search.infrastructure.sources.field_mapping import (
    STATUTE_FIELDS,
    as_int,
    as_str,
    resolve_fields,
)

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)


def normalize_provision(raw: Any) -> StatutoryProvision | None:
    """Normalize one US Code section; None without a numeric title and a section."""
    fields = resolve_fields(raw, STATUTE_FIELDS)
    title = as_int(fields.get("title"))
    section = as_str(fields.get("section"))
    if title is None or not section:
        return None

    return StatutoryProvision(
        title=title,
        section=section,
        text=as_str(fields.get("text")),
        heading=as_str(fields.get("heading")),
        url=as_str(fields.get("url")),
        last_updated=as_str(fields.get("last_updated")),
        source=as_str(fields.get("source")),
    )


class USCodeClient(SourceAdapter[StatutoryProvision]):
    """
    US Code API client.

    Usage:
        client = USCodeClient()
        sections = await client.search_code("wiretap", title=18, limit=5)
        provision = await client.get_section(42, "1983")
    """

    _service_name = "US Code"
    _weights = STATUTE_WEIGHTS
    _over_fetch_factor = 3
    _fetch_cap = 100

    def __init__(
        self,
        settings: LegalSearchSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or LegalSearchSettings()
        super().__init__(
            base_url=self._settings.us_code_base_url,
            timeout=self._settings.request_timeout,
            user_agent=self._settings.user_agent,
            transport=transport,
        )

    async def search_code(
        self,
        query: str,
        title: int | None = None,
        limit: int = 20,
        *,
        timeout: float | None = None,
    ) -> list[StatutoryProvision]:
        """
        Search US Code sections, re-ranked by local relevance.

        Args:
            query: Free-text query
            title: Optional US Code title number (e.g. 42)
            limit: Maximum sections to return
            timeout: Per-call timeout override (defaults to the US Code timeout)

        Returns:
            Up to ``limit`` sections, most relevant first. Never raises.
        """
        params = {"q": query, "limit": self.fetch_size(limit), "title": title}
        data = await self._make_request(
            "/search",
            params=params,
            timeout=timeout if timeout is not None else self._settings.us_code_timeout,
        )
        if data is None:
            return []

        provisions = self._normalize_all(data.get("results"), normalize_provision)
        return self._rank(provisions, query, limit)

    async def get_section(
        self,
        title: int,
        section: str,
        *,
        timeout: float | None = None,
    ) -> StatutoryProvision | None:
        """Get one section by title and section identifier (e.g. ``"1401a"``)."""
        path = f"/title/{title}/section/{urllib.parse.quote(str(section), safe='')}"
        data = await self._make_request(
            path,
            timeout=timeout if timeout is not None else self._settings.us_code_timeout,
        )
        if data is None:
            return None

        provision = normalize_provision(data)
        if provision is None:
            logger.debug(f"US Code: section payload for {title} U.S.C. {section} had no identity")
        return provision
