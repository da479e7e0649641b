"""
Congress.gov API Integration

Provides bills, roll-call votes and committees from the Library of
Congress API.

API Documentation: https://api.congress.gov/

Features:
- Bill search with local relevance re-ranking (title, summary, subjects)
- Most recent bills per Congress
- Bill detail lookup by congress/type/number
- Roll-call votes and committee listings

Credentials:
- Bill listings work without a key at low rate limits
- Votes and committees answer 403 without a key; the client logs a
  "credential required" diagnostic and returns an empty list
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import TYPE_CHECKING, Any

from us_legal_search.application.search.relevance import BILL_WEIGHTS
from us_legal_search.config import LegalSearchSettings
from us_legal_search.domain.entities import (
    Committee,
    LatestAction,
    LegislativeBill,
    LegislativeVote,
    Sponsor,
    Subcommittee,
    VoteMember,
)
from us_legal_search.infrastructure.sources.base_client import SourceAdapter
from us_legal_search.infrastructure.sources.field_mapping import (
    COMMITTEE_FIELDS,
    VOTE_FIELDS,
    as_dict,
    as_int,
    as_str,
    as_str_tuple,
    resolve_fields,
)

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)

CONGRESS_SIGNUP_URL = "https://api.congress.gov/sign-up/"


# =============================================================================
# Normalizers
# =============================================================================


def normalize_sponsor(raw: Any) -> Sponsor | None:
    if not isinstance(raw, dict):
        return None
    return Sponsor(
        bioguide_id=as_str(raw.get("bioguideId")),
        first_name=as_str(raw.get("firstName")),
        last_name=as_str(raw.get("lastName")),
        party=as_str(raw.get("party")),
        state=as_str(raw.get("state")),
    )


def _sponsors(value: Any) -> tuple[Sponsor, ...] | None:
    if not isinstance(value, list):
        return None
    return tuple(sponsor for sponsor in map(normalize_sponsor, value) if sponsor is not None)


def _summary_text(value: Any) -> str | None:
    # List endpoints embed {"text": ...}; some payloads carry a bare string
    if isinstance(value, dict):
        return as_str(value.get("text"))
    return as_str(value)


def normalize_bill(raw: Any) -> LegislativeBill | None:
    """Normalize one Congress.gov bill object; None if it has no identity or title."""
    if not isinstance(raw, dict):
        return None

    bill_type = as_str(raw.get("type"))
    number = as_str(raw.get("number"))
    title = as_str(raw.get("title"))
    if not bill_type or not number or not title:
        return None

    latest_action = None
    action = as_dict(raw.get("latestAction"))
    if action:
        latest_action = LatestAction(
            action_date=as_str(action.get("actionDate")),
            text=as_str(action.get("text")),
        )

    return LegislativeBill(
        congress=as_int(raw.get("congress")),
        bill_type=bill_type,
        number=number,
        title=title,
        short_title=as_str(raw.get("shortTitle")),
        summary=_summary_text(raw.get("summary")),
        url=as_str(raw.get("url")),
        introduced_date=as_str(raw.get("introducedDate")),
        latest_action=latest_action,
        subjects=as_str_tuple(raw.get("subjects")),
        sponsors=_sponsors(raw.get("sponsors")),
    )


def normalize_vote(raw: Any) -> LegislativeVote | None:
    """Normalize one roll-call vote; None without a roll number."""
    if not isinstance(raw, dict):
        return None

    fields = resolve_fields(raw, VOTE_FIELDS)
    roll_number = as_int(fields.get("roll_number"))
    if roll_number is None:
        return None

    members = None
    if isinstance(raw.get("members"), list):
        members = tuple(
            VoteMember(
                member=normalize_sponsor(as_dict(entry.get("member"))) or Sponsor(),
                vote_position=as_str(entry.get("votePosition")),
            )
            for entry in raw["members"]
            if isinstance(entry, dict)
        )

    return LegislativeVote(
        roll_number=roll_number,
        chamber=as_str(fields.get("chamber")),
        congress=as_int(fields.get("congress")),
        session=as_int(fields.get("session")),
        url=as_str(fields.get("url")),
        vote_date=as_str(fields.get("vote_date")),
        vote_question=as_str(fields.get("vote_question")),
        vote_result=as_str(fields.get("vote_result")),
        vote_title=as_str(fields.get("vote_title")),
        vote_type=as_str(fields.get("vote_type")),
        members=members,
    )


def normalize_committee(raw: Any) -> Committee | None:
    """Normalize one committee with one level of subcommittees."""
    fields = resolve_fields(raw, COMMITTEE_FIELDS)
    system_code = as_str(fields.get("system_code"))
    if not system_code:
        return None

    subcommittees = None
    if isinstance(raw.get("subcommittees"), list):
        subcommittees = tuple(
            Subcommittee(
                system_code=str(sub["systemCode"]),
                name=as_str(sub.get("name")),
                url=as_str(sub.get("url")),
            )
            for sub in raw["subcommittees"]
            if isinstance(sub, dict) and as_str(sub.get("systemCode"))
        )

    return Committee(
        system_code=system_code,
        name=as_str(fields.get("name")),
        url=as_str(fields.get("url")),
        chamber=as_str(fields.get("chamber")),
        committee_type=as_str(fields.get("committee_type")),
        subcommittees=subcommittees,
    )


# =============================================================================
# Client
# =============================================================================


class CongressClient(SourceAdapter[LegislativeBill]):
    """
    Congress.gov API client.

    Usage:
        client = CongressClient(LegalSearchSettings(congress_api_key="..."))
        bills = await client.search_bills("clean water", congress=118, limit=10)
    """

    _service_name = "Congress.gov"
    _signup_url = CONGRESS_SIGNUP_URL
    _weights = BILL_WEIGHTS
    _over_fetch_factor = 5
    _fetch_cap = 250

    def __init__(
        self,
        settings: LegalSearchSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or LegalSearchSettings()
        self._api_key = self._settings.congress_api_key
        super().__init__(
            base_url=self._settings.congress_base_url,
            timeout=self._settings.request_timeout,
            user_agent=self._settings.user_agent,
            transport=transport,
        )

    def _default_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"format": "json"}
        if self._api_key:
            params["api_key"] = self._api_key
        return params

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    async def search_bills(
        self,
        query: str,
        congress: int | None = None,
        limit: int = 20,
        *,
        timeout: float | None = None,
    ) -> list[LegislativeBill]:
        """
        Search bills and resolutions, re-ranked by local relevance.

        Args:
            query: Free-text query
            congress: Optional Congress number (e.g. 118)
            limit: Maximum bills to return
            timeout: Per-call timeout override in seconds

        Returns:
            Up to ``limit`` bills, most relevant first
        """
        params = {
            "q": query,
            "limit": self.fetch_size(limit),
            "congress": congress,
        }
        data = await self._make_request("/bill", params=params, timeout=timeout)
        if data is None:
            return []

        bills = self._normalize_all(data.get("bills"), normalize_bill)
        return self._rank(bills, query, limit)

    async def get_recent_bills(
        self,
        congress: int | None = None,
        limit: int = 20,
        *,
        timeout: float | None = None,
    ) -> list[LegislativeBill]:
        """Most recent bills in upstream order (no scoring)."""
        params = {"limit": limit, "congress": congress}
        data = await self._make_request("/bill", params=params, timeout=timeout)
        if data is None:
            return []
        return self._normalize_all(data.get("bills"), normalize_bill)[:limit]

    async def get_bill(
        self,
        congress: int,
        bill_type: str,
        number: int | str,
        *,
        timeout: float | None = None,
    ) -> LegislativeBill | None:
        """Get one bill by its natural key, or None if unavailable."""
        path = "/bill/{}/{}/{}".format(
            congress,
            urllib.parse.quote(bill_type.lower(), safe=""),
            urllib.parse.quote(str(number), safe=""),
        )
        data = await self._make_request(path, timeout=timeout)
        if data is None:
            return None
        return normalize_bill(data.get("bill"))

    async def search_votes(
        self,
        congress: int | None = None,
        chamber: str | None = None,
        limit: int = 20,
        *,
        timeout: float | None = None,
    ) -> list[LegislativeVote]:
        """Roll-call votes (requires an API key)."""
        params = {"limit": limit, "congress": congress, "chamber": chamber}
        data = await self._make_request("/vote", params=params, timeout=timeout)
        if data is None:
            return []

        return self._normalize_all(data.get("votes"), normalize_vote)[:limit]

    async def get_committees(
        self,
        congress: int | None = None,
        chamber: str | None = None,
        limit: int | None = None,
        *,
        timeout: float | None = None,
    ) -> list[Committee]:
        """Congressional committees (requires an API key)."""
        params = {"congress": congress, "chamber": chamber, "limit": limit}
        data = await self._make_request("/committee", params=params, timeout=timeout)
        if data is None:
            return []

        return self._normalize_all(data.get("committees"), normalize_committee)
