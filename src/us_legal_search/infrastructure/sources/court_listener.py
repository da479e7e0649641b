"""
CourtListener API Integration

Provides federal and state court opinions from the Free Law Project.

API Documentation: https://www.courtlistener.com/help/api/rest/

CourtListener serves the same fields under two naming conventions
(``caseName`` on search results, ``case_name`` on some REST resources).
Both are resolved through ``OPINION_FIELDS``, camelCase first.

Credentials:
- Optional. With ``COURT_LISTENER_API_KEY`` set, requests carry
  ``Authorization: Token <key>`` and get higher rate limits
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from us_legal_search.application.search.relevance import OPINION_WEIGHTS
from us_legal_search.config import LegalSearchSettings
from us_legal_search.domain.entities import CourtOpinion
from us_legal_search.infrastructure.sources.base_client import SourceAdapter
from us_legal_search.infrastructure.sources.field_mapping import (
    OPINION_FIELDS,
    as_int,
    as_dict,
    as_str,
    resolve_field,
    resolve_fields,
)

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)

COURT_LISTENER_SITE = "https://www.courtlistener.com"
COURT_LISTENER_SIGNUP_URL = "https://www.courtlistener.com/api/"

_CLUSTER_PATH = re.compile(r"/clusters/(\d+)/?$")


def cluster_id(value: Any) -> int | None:
    """Cluster id from an opinion's ``cluster`` link (URL or bare id)."""
    number = as_int(value)
    if number is not None:
        return number
    text = as_str(value)
    if text is None:
        return None
    match = _CLUSTER_PATH.search(text)
    return int(match.group(1)) if match else None


def merge_cluster(opinion: dict[str, Any], cluster: dict[str, Any]) -> dict[str, Any]:
    """Fill fields the opinion resource lacks from its cluster; opinion values win."""
    merged = dict(opinion)
    for name, value in cluster.items():
        if merged.get(name) in (None, ""):
            merged[name] = value
    return merged


def opinion_url(absolute_url: Any, opinion_id: int) -> str:
    """Public page for an opinion; relative upstream paths are made absolute."""
    url = as_str(absolute_url)
    if not url:
        return f"{COURT_LISTENER_SITE}/opinion/{opinion_id}/"
    if url.startswith("/"):
        return f"{COURT_LISTENER_SITE}{url}"
    return url


def _citation(value: Any) -> str | None:
    # Search results carry a list of reporter citations
    if isinstance(value, list):
        return "; ".join(text for text in map(as_str, value) if text) or None
    return as_str(value)


def _judges(value: Any) -> tuple[str, ...] | None:
    if isinstance(value, list):
        return tuple(text for text in map(as_str, value) if text)
    text = as_str(value)
    if text is None:
        return None
    return tuple(name.strip() for name in text.split(",") if name.strip())


def normalize_opinion(raw: Any) -> CourtOpinion | None:
    """Normalize one CourtListener opinion; None without an id or case name."""
    fields = resolve_fields(raw, OPINION_FIELDS)
    opinion_id = as_int(fields.get("id"))
    if opinion_id is None:
        return None
    case_name = as_str(fields.get("case_name"))
    if not case_name:
        return None

    return CourtOpinion(
        id=opinion_id,
        case_name=case_name,
        url=opinion_url(fields.get("absolute_url"), opinion_id),
        case_name_full=as_str(fields.get("case_name_full")),
        date_filed=as_str(fields.get("date_filed")),
        date_modified=as_str(fields.get("date_modified")),
        court=as_str(fields.get("court")),
        court_id=as_str(fields.get("court_id")),
        jurisdiction=as_str(fields.get("jurisdiction")),
        citation=_citation(fields.get("citation")),
        citation_count=as_int(fields.get("citation_count")),
        precedential_status=as_str(fields.get("precedential_status")),
        download_url=as_str(fields.get("download_url")),
        plain_text=as_str(fields.get("plain_text")),
        html=as_str(fields.get("html")),
        html_lawbox=as_str(fields.get("html_lawbox")),
        html_columbia=as_str(fields.get("html_columbia")),
        html_anon_2020=as_str(fields.get("html_anon_2020")),
        judges=_judges(fields.get("judges")),
        docket=as_str(fields.get("docket")),
        docket_number=as_str(fields.get("docket_number")),
        slug=as_str(fields.get("slug")),
    )


class CourtListenerClient(SourceAdapter[CourtOpinion]):
    """
    CourtListener API client.

    Usage:
        client = CourtListenerClient()
        opinions = await client.search_opinions("qualified immunity", court="scotus", limit=5)
    """

    _service_name = "CourtListener"
    _signup_url = COURT_LISTENER_SIGNUP_URL
    _weights = OPINION_WEIGHTS
    _over_fetch_factor = 3
    _fetch_cap = 100

    def __init__(
        self,
        settings: LegalSearchSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or LegalSearchSettings()
        self._api_key = self._settings.court_listener_api_key
        headers = {"Authorization": f"Token {self._api_key}"} if self._api_key else None
        super().__init__(
            base_url=self._settings.court_listener_base_url,
            timeout=self._settings.request_timeout,
            headers=headers,
            user_agent=self._settings.user_agent,
            transport=transport,
        )

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    async def search_opinions(
        self,
        query: str,
        court: str | None = None,
        limit: int = 20,
        *,
        timeout: float | None = None,
    ) -> list[CourtOpinion]:
        """
        Search court opinions, re-ranked by local relevance.

        Args:
            query: Free-text query
            court: Optional CourtListener court id (e.g. "scotus", "ca9")
            limit: Maximum opinions to return
            timeout: Per-call timeout override in seconds
        """
        params = {
            "q": query,
            "type": "o",
            "page_size": self.fetch_size(limit),
            "court": court,
        }
        data = await self._make_request("/search/", params=params, timeout=timeout)
        if data is None:
            return []

        opinions = self._normalize_all(data.get("results"), normalize_opinion)
        return self._rank(opinions, query, limit)

    async def get_recent_opinions(
        self,
        court: str | None = None,
        limit: int = 20,
        *,
        timeout: float | None = None,
    ) -> list[CourtOpinion]:
        """Most recently filed opinions (no scoring)."""
        params = {
            "type": "o",
            "order_by": "dateFiled desc",
            "page_size": limit,
            "court": court,
        }
        data = await self._make_request("/search/", params=params, timeout=timeout)
        if data is None:
            return []
        return self._normalize_all(data.get("results"), normalize_opinion)[:limit]

    async def get_opinion(
        self,
        opinion_id: int,
        *,
        timeout: float | None = None,
    ) -> CourtOpinion | None:
        """
        Get one opinion by numeric id, or None if unavailable.

        The ``/opinions/`` resource holds the text but not the case name,
        filing date or judges; those live on the linked cluster, which is
        fetched when the opinion itself lacks a case name.
        """
        data = await self._make_request(f"/opinions/{int(opinion_id)}/", timeout=timeout)
        if data is None:
            return None
        if resolve_field(data, OPINION_FIELDS["case_name"]) is None:
            data = await self._with_cluster(data, timeout=timeout)
        return normalize_opinion(data)

    async def _with_cluster(self, opinion: dict[str, Any], *, timeout: float | None = None) -> dict[str, Any]:
        number = cluster_id(opinion.get("cluster"))
        if number is None:
            logger.warning(f"CourtListener opinion {opinion.get('id')} has no cluster link")
            return opinion
        cluster = await self._make_request(f"/clusters/{number}/", timeout=timeout)
        return merge_cluster(opinion, as_dict(cluster))
