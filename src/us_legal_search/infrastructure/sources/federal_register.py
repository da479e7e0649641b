"""
Federal Register API Integration

Provides rules, proposed rules, notices and presidential documents from the
Office of the Federal Register.

API Documentation: https://www.federalregister.gov/developers/documentation/api/v1

Features:
- Full-text document search with local relevance re-ranking
- Most recently published documents
- Document detail lookup (with body sections when the upstream has them)

No API key is required.
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import TYPE_CHECKING, Any

from us_legal_search.application.search.relevance import DOCUMENT_WEIGHTS
from us_legal_search.config import LegalSearchSettings
from us_legal_search.domain.entities import DocumentSection, RegulatoryDocument
from us_legal_search.infrastructure.sources.base_client import SourceAdapter
from us_legal_search.infrastructure.sources.field_mapping import (
    DOCUMENT_FIELDS,
    as_list,
    as_str,
    as_str_tuple,
    resolve_fields,
)

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)

# Fields requested from the list endpoint; the upstream omits most of these by default
DOCUMENT_LIST_FIELDS = (
    "document_number",
    "title",
    "abstract",
    "publication_date",
    "effective_on",
    "agencies",
    "agency_names",
    "type",
    "pdf_url",
    "html_url",
    "json_url",
)


def _agency_names(raw: dict[str, Any]) -> tuple[str, ...] | None:
    names = as_str_tuple(raw.get("agency_names"))
    if names:
        return names
    # Newer payloads only carry agencies[{name, ...}]
    return as_str_tuple(raw.get("agencies")) or names


def _sections(value: Any) -> tuple[DocumentSection, ...] | None:
    if not isinstance(value, list):
        return None
    return tuple(
        DocumentSection(title=as_str(section.get("title")), content=as_str(section.get("content")))
        for section in as_list(value)
        if isinstance(section, dict)
    )


def normalize_document(raw: Any) -> RegulatoryDocument | None:
    """Normalize one Federal Register document; None without number or title."""
    if not isinstance(raw, dict):
        return None

    fields = resolve_fields(raw, DOCUMENT_FIELDS)
    document_number = as_str(fields.get("document_number"))
    title = as_str(fields.get("title"))
    if not document_number or not title:
        return None

    return RegulatoryDocument(
        document_number=document_number,
        title=title,
        abstract=as_str(fields.get("abstract")),
        publication_date=as_str(fields.get("publication_date")),
        effective_date=as_str(fields.get("effective_date")),
        agency_names=_agency_names(raw),
        document_type=as_str(fields.get("document_type")),
        pdf_url=as_str(fields.get("pdf_url")),
        html_url=as_str(fields.get("html_url")),
        json_url=as_str(fields.get("json_url")),
        sections=_sections(raw.get("sections")),
    )


class FederalRegisterClient(SourceAdapter[RegulatoryDocument]):
    """
    Federal Register API client.

    Usage:
        client = FederalRegisterClient()
        docs = await client.search_documents("emissions standards", limit=10)
    """

    _service_name = "Federal Register"
    _weights = DOCUMENT_WEIGHTS
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
            base_url=self._settings.federal_register_base_url,
            timeout=self._settings.request_timeout,
            user_agent=self._settings.user_agent,
            transport=transport,
        )

    def _list_params(self, per_page: int, order: str) -> dict[str, Any]:
        return {
            "per_page": per_page,
            "order": order,
            "fields[]": list(DOCUMENT_LIST_FIELDS),
        }

    async def search_documents(
        self,
        query: str,
        limit: int = 20,
        *,
        timeout: float | None = None,
    ) -> list[RegulatoryDocument]:
        """
        Search Federal Register documents, re-ranked by local relevance.

        Args:
            query: Free-text query
            limit: Maximum documents to return
            timeout: Per-call timeout override in seconds

        Returns:
            Up to ``limit`` documents, most relevant first
        """
        params = self._list_params(self.fetch_size(limit), "relevance")
        params["conditions[term]"] = query

        data = await self._make_request("/documents.json", params=params, timeout=timeout)
        if data is None:
            return []

        documents = self._normalize_all(data.get("results"), normalize_document)
        return self._rank(documents, query, limit)

    async def get_recent_documents(
        self,
        limit: int = 20,
        *,
        timeout: float | None = None,
    ) -> list[RegulatoryDocument]:
        """Newest documents first (no scoring)."""
        params = self._list_params(limit, "newest")
        data = await self._make_request("/documents.json", params=params, timeout=timeout)
        if data is None:
            return []
        return self._normalize_all(data.get("results"), normalize_document)[:limit]

    async def get_document(
        self,
        document_number: str,
        *,
        timeout: float | None = None,
    ) -> RegulatoryDocument | None:
        """Get one document by number, or None if unavailable."""
        path = f"/documents/{urllib.parse.quote(document_number, safe='')}.json"
        data = await self._make_request(path, timeout=timeout)
        if data is None:
            return None
        return normalize_document(data)
