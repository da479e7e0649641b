"""
Regulations.gov API Integration

Provides public comments submitted on federal rulemaking dockets.

API Documentation: https://open.gsa.gov/api/regulationsgov/

Comments come back in upstream order (newest first). Comment text is not
scored locally: the search endpoint returns only a title and a truncated
body, which is too little to rank on.

Credentials:
- ``api_key`` is required by the upstream; without one it answers 403, the
  client logs the signup URL and returns an empty list
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import TYPE_CHECKING, Any

from us_legal_search.config import LegalSearchSettings
from us_legal_search.domain.entities import PublicComment
from us_legal_search.infrastructure.sources.base_client import SourceAdapter
from us_legal_search.infrastructure.sources.field_mapping import (
    COMMENT_FIELDS,
    as_dict,
    as_str,
    resolve_fields,
)

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)

REGULATIONS_GOV_SIGNUP_URL = "https://open.gsa.gov/api/regulationsgov/"

# The upstream rejects page[size] below 5
MIN_PAGE_SIZE = 5


def normalize_comment(raw: Any) -> PublicComment | None:
    """Normalize one JSON:API comment resource ({id, attributes, links})."""
    if not isinstance(raw, dict):
        return None
    comment_id = as_str(raw.get("id"))
    if not comment_id:
        return None

    fields = resolve_fields(as_dict(raw.get("attributes")), COMMENT_FIELDS)
    return PublicComment(
        id=comment_id,
        comment=as_str(fields.get("comment")),
        title=as_str(fields.get("title")),
        posted_date=as_str(fields.get("posted_date")),
        agency_id=as_str(fields.get("agency_id")),
        document_id=as_str(fields.get("document_id")),
        submitter_name=as_str(fields.get("submitter_name")),
        organization=as_str(fields.get("organization")),
        url=as_str(as_dict(raw.get("links")).get("self")),
    )


class RegulationsGovClient(SourceAdapter[PublicComment]):
    """
    Regulations.gov API client.

    Usage:
        client = RegulationsGovClient(LegalSearchSettings(regulations_gov_api_key="..."))
        comments = await client.search_comments("net neutrality", limit=5)
    """

    _service_name = "Regulations.gov"
    _signup_url = REGULATIONS_GOV_SIGNUP_URL

    def __init__(
        self,
        settings: LegalSearchSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or LegalSearchSettings()
        self._api_key = self._settings.regulations_gov_api_key
        super().__init__(
            base_url=self._settings.regulations_gov_base_url,
            timeout=self._settings.request_timeout,
            user_agent=self._settings.user_agent,
            transport=transport,
        )

    def _default_params(self) -> dict[str, Any]:
        if self._api_key:
            return {"api_key": self._api_key}
        return {}

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    async def search_comments(
        self,
        query: str,
        limit: int = 20,
        *,
        timeout: float | None = None,
    ) -> list[PublicComment]:
        """
        Search public comments, newest first.

        Args:
            query: Free-text query
            limit: Maximum comments to return
            timeout: Per-call timeout override in seconds
        """
        params = {
            "filter[searchTerm]": query,
            "page[size]": max(limit, MIN_PAGE_SIZE),
            "sort": "-postedDate",
        }
        data = await self._make_request("/comments", params=params, timeout=timeout)
        if data is None:
            return []

        comments = self._normalize_all(data.get("data"), normalize_comment)
        return self._rank(comments, query, limit)

    async def get_comment(
        self,
        comment_id: str,
        *,
        timeout: float | None = None,
    ) -> PublicComment | None:
        """Get one comment with its full body, or None if unavailable."""
        path = f"/comments/{urllib.parse.quote(comment_id, safe='')}"
        data = await self._make_request(path, timeout=timeout)
        if data is None:
            return None
        return normalize_comment(data.get("data"))
