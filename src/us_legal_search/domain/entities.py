"""
Canonical Records - Normalized Models for US Legal Data Sources

Every source client normalizes its upstream payload into one of these
records. Records are immutable, created per request and discarded once the
tool response is rendered.

Architecture Decision:
    We use frozen dataclasses instead of Pydantic for:
    1. Lightweight - no validation layer between upstream JSON and ranking
    2. Immutability - records are values, list fields are tuples
    3. Simplicity - easy to construct in tests

Optional fields are ``None`` when the upstream omitted them. ``to_dict()``
drops those keys, so a serialized record only carries fields the upstream
actually populated.

Example:
    >>> bill = LegislativeBill(congress=118, bill_type="HR", number="815", title="Clean Water Act")
    >>> bill.display_id
    'HR 815'
    >>> "short_title" in bill.to_dict()
    False
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None."""
    return {key: value for key, value in data.items() if value is not None}


def _dicts(items: tuple[Any, ...] | None) -> list[dict[str, Any]] | None:
    if items is None:
        return None
    return [item.to_dict() for item in items]


# =============================================================================
# Congress.gov
# =============================================================================


@dataclass(frozen=True)
class Sponsor:
    """Member identity as reported by Congress.gov."""

    bioguide_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    party: str | None = None
    state: str | None = None

    @property
    def display_name(self) -> str:
        name = " ".join(part for part in (self.first_name, self.last_name) if part) or "Unknown"
        if self.party and self.state:
            return f"{name} ({self.party}-{self.state})"
        return name

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "bioguide_id": self.bioguide_id,
                "first_name": self.first_name,
                "last_name": self.last_name,
                "party": self.party,
                "state": self.state,
            }
        )


@dataclass(frozen=True)
class LatestAction:
    action_date: str | None = None
    text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"action_date": self.action_date, "text": self.text})


@dataclass(frozen=True)
class LegislativeBill:
    """A bill or resolution (identity: congress + type + number)."""

    congress: int | None
    bill_type: str
    number: str
    title: str
    short_title: str | None = None
    summary: str | None = None
    url: str | None = None
    introduced_date: str | None = None
    latest_action: LatestAction | None = None
    subjects: tuple[str, ...] | None = None
    sponsors: tuple[Sponsor, ...] | None = None

    @property
    def key(self) -> tuple[int | None, str, str]:
        return (self.congress, self.bill_type.upper(), self.number)

    @property
    def display_id(self) -> str:
        return f"{self.bill_type} {self.number}"

    @property
    def latest_action_text(self) -> str | None:
        return self.latest_action.text if self.latest_action else None

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "congress": self.congress,
                "type": self.bill_type,
                "number": self.number,
                "title": self.title,
                "short_title": self.short_title,
                "summary": self.summary,
                "url": self.url,
                "introduced_date": self.introduced_date,
                "latest_action": self.latest_action.to_dict() if self.latest_action else None,
                "subjects": list(self.subjects) if self.subjects is not None else None,
                "sponsors": _dicts(self.sponsors),
            }
        )


@dataclass(frozen=True)
class VoteMember:
    member: Sponsor
    vote_position: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"member": self.member.to_dict(), "vote_position": self.vote_position})


@dataclass(frozen=True)
class LegislativeVote:
    """A roll-call vote (identity: chamber + congress + session + roll number)."""

    roll_number: int
    chamber: str | None = None
    congress: int | None = None
    session: int | None = None
    url: str | None = None
    vote_date: str | None = None
    vote_question: str | None = None
    vote_result: str | None = None
    vote_title: str | None = None
    vote_type: str | None = None
    members: tuple[VoteMember, ...] | None = None

    @property
    def key(self) -> tuple[str | None, int | None, int | None, int]:
        return (self.chamber, self.congress, self.session, self.roll_number)

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "roll_number": self.roll_number,
                "chamber": self.chamber,
                "congress": self.congress,
                "session": self.session,
                "url": self.url,
                "vote_date": self.vote_date,
                "vote_question": self.vote_question,
                "vote_result": self.vote_result,
                "vote_title": self.vote_title,
                "vote_type": self.vote_type,
                "members": _dicts(self.members),
            }
        )


@dataclass(frozen=True)
class Subcommittee:
    system_code: str
    name: str | None = None
    url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"system_code": self.system_code, "name": self.name, "url": self.url})


@dataclass(frozen=True)
class Committee:
    system_code: str
    name: str | None = None
    url: str | None = None
    chamber: str | None = None
    committee_type: str | None = None
    subcommittees: tuple[Subcommittee, ...] | None = None

    @property
    def key(self) -> str:
        return self.system_code

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "system_code": self.system_code,
                "name": self.name,
                "url": self.url,
                "chamber": self.chamber,
                "committee_type": self.committee_type,
                "subcommittees": _dicts(self.subcommittees),
            }
        )


# =============================================================================
# Federal Register
# =============================================================================


@dataclass(frozen=True)
class DocumentSection:
    title: str | None = None
    content: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"title": self.title, "content": self.content})


@dataclass(frozen=True)
class RegulatoryDocument:
    """A Federal Register document (identity: document number)."""

    document_number: str
    title: str
    abstract: str | None = None
    publication_date: str | None = None
    effective_date: str | None = None
    agency_names: tuple[str, ...] | None = None
    document_type: str | None = None
    pdf_url: str | None = None
    html_url: str | None = None
    json_url: str | None = None
    sections: tuple[DocumentSection, ...] | None = None

    @property
    def key(self) -> str:
        return self.document_number

    @property
    def primary_agency(self) -> str | None:
        return self.agency_names[0] if self.agency_names else None

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "document_number": self.document_number,
                "title": self.title,
                "abstract": self.abstract,
                "publication_date": self.publication_date,
                "effective_date": self.effective_date,
                "agency_names": list(self.agency_names) if self.agency_names is not None else None,
                "document_type": self.document_type,
                "pdf_url": self.pdf_url,
                "html_url": self.html_url,
                "json_url": self.json_url,
                "sections": _dicts(self.sections),
            }
        )


# =============================================================================
# US Code
# =============================================================================


@dataclass(frozen=True)
class StatutoryProvision:
    """
    A US Code section (identity: title + section).

    ``section`` is a string: identifiers such as ``"1401a"`` or ``"300gg-11"``
    are common.
    """

    title: int
    section: str
    text: str | None = None
    heading: str | None = None
    url: str | None = None
    last_updated: str | None = None
    source: str | None = None

    @property
    def key(self) -> tuple[int, str]:
        return (self.title, self.section)

    @property
    def citation(self) -> str:
        return f"{self.title} U.S.C. § {self.section}"

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "title": self.title,
                "section": self.section,
                "text": self.text,
                "heading": self.heading,
                "url": self.url,
                "last_updated": self.last_updated,
                "source": self.source,
            }
        )


# =============================================================================
# Regulations.gov
# =============================================================================


@dataclass(frozen=True)
class PublicComment:
    """A public comment on a regulatory docket (identity: comment id)."""

    id: str
    comment: str | None = None
    title: str | None = None
    posted_date: str | None = None
    agency_id: str | None = None
    document_id: str | None = None
    submitter_name: str | None = None
    organization: str | None = None
    url: str | None = None

    @property
    def key(self) -> str:
        return self.id

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "id": self.id,
                "comment": self.comment,
                "title": self.title,
                "posted_date": self.posted_date,
                "agency_id": self.agency_id,
                "document_id": self.document_id,
                "submitter_name": self.submitter_name,
                "organization": self.organization,
                "url": self.url,
            }
        )


# =============================================================================
# CourtListener
# =============================================================================


@dataclass(frozen=True)
class CourtOpinion:
    """A court opinion from CourtListener (identity: numeric id)."""

    id: int
    case_name: str
    url: str
    case_name_full: str | None = None
    date_filed: str | None = None
    date_modified: str | None = None
    court: str | None = None
    court_id: str | None = None
    jurisdiction: str | None = None
    citation: str | None = None
    citation_count: int | None = None
    precedential_status: str | None = None
    download_url: str | None = None
    plain_text: str | None = None
    html: str | None = None
    html_lawbox: str | None = None
    html_columbia: str | None = None
    html_anon_2020: str | None = None
    judges: tuple[str, ...] | None = None
    docket: str | None = None
    docket_number: str | None = None
    slug: str | None = None

    @property
    def key(self) -> int:
        return self.id

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "id": self.id,
                "case_name": self.case_name,
                "case_name_full": self.case_name_full,
                "date_filed": self.date_filed,
                "date_modified": self.date_modified,
                "court": self.court,
                "court_id": self.court_id,
                "jurisdiction": self.jurisdiction,
                "citation": self.citation,
                "citation_count": self.citation_count,
                "precedential_status": self.precedential_status,
                "url": self.url,
                "download_url": self.download_url,
                "plain_text": self.plain_text,
                "html": self.html,
                "html_lawbox": self.html_lawbox,
                "html_columbia": self.html_columbia,
                "html_anon_2020": self.html_anon_2020,
                "judges": list(self.judges) if self.judges is not None else None,
                "docket": self.docket,
                "docket_number": self.docket_number,
                "slug": self.slug,
            }
        )


# =============================================================================
# Aggregate
# =============================================================================


@dataclass(frozen=True)
class SearchAllResult:
    """Composite result of a multi-source search; always exactly four sources."""

    bills: tuple[LegislativeBill, ...] = ()
    regulations: tuple[RegulatoryDocument, ...] = ()
    code_sections: tuple[StatutoryProvision, ...] = ()
    comments: tuple[PublicComment, ...] = ()

    @property
    def total(self) -> int:
        return len(self.bills) + len(self.regulations) + len(self.code_sections) + len(self.comments)

    def counts(self) -> dict[str, int]:
        return {
            "bills": len(self.bills),
            "regulations": len(self.regulations),
            "code_sections": len(self.code_sections),
            "comments": len(self.comments),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "bills": [bill.to_dict() for bill in self.bills],
            "regulations": [doc.to_dict() for doc in self.regulations],
            "code_sections": [section.to_dict() for section in self.code_sections],
            "comments": [comment.to_dict() for comment in self.comments],
        }
