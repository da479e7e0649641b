"""
Declarative field-name mapping for upstream payloads.

Some upstreams expose the same field under more than one naming convention
(CourtListener serves both ``caseName`` and ``case_name`` depending on the
endpoint and API version). Each canonical field maps to an ordered tuple of
source names; ``resolve_field`` returns the first one present.

"Present" means the key exists and the value is neither ``None`` nor an
empty string. ``0`` and ``False`` are real values and are kept.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

FieldAliases = Mapping[str, tuple[str, ...]]


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


def resolve_field(raw: Any, names: tuple[str, ...], default: Any = None) -> Any:
    """Return the first present value among ``names``, else ``default``."""
    if not isinstance(raw, Mapping):
        return default
    for name in names:
        value = raw.get(name)
        if _is_present(value):
            return value
    return default


def resolve_fields(raw: Any, aliases: FieldAliases) -> dict[str, Any]:
    """Resolve every canonical field of an alias table (absent fields are omitted)."""
    resolved: dict[str, Any] = {}
    for canonical, names in aliases.items():
        value = resolve_field(raw, names)
        if value is not None:
            resolved[canonical] = value
    return resolved


def as_list(value: Any) -> list[Any]:
    """Safe navigation for payload lists: anything that is not a list becomes []."""
    if isinstance(value, list):
        return value
    return []


def as_dict(value: Any) -> dict[str, Any]:
    """Safe navigation for payload objects."""
    if isinstance(value, dict):
        return value
    return {}


def as_str(value: Any) -> str | None:
    """Stringify a scalar; None and empty strings stay absent."""
    if not _is_present(value):
        return None
    if isinstance(value, (dict, list)):
        return None
    return str(value)


def as_int(value: Any) -> int | None:
    """Coerce ints and digit strings; anything else is absent."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def as_str_tuple(value: Any, *, key: str = "name") -> tuple[str, ...] | None:
    """
    Normalize a payload list of strings or ``{key: ...}`` objects.

    Returns None when the upstream omitted the list entirely.
    """
    if not isinstance(value, list):
        return None
    names: list[str] = []
    for item in value:
        if isinstance(item, dict):
            item = item.get(key)
        text = as_str(item)
        if text is not None:
            names.append(text)
    return tuple(names)


# =============================================================================
# Alias Tables
# =============================================================================

OPINION_FIELDS: FieldAliases = {
    "id": ("id",),
    "case_name": ("caseName", "case_name"),
    "case_name_full": ("caseNameFull", "case_name_full"),
    "date_filed": ("dateFiled", "date_filed"),
    "date_modified": ("dateModified", "date_modified"),
    "court": ("court", "court_name"),
    "court_id": ("courtId", "court_id"),
    "jurisdiction": ("jurisdiction", "court_jurisdiction"),
    "citation": ("citation",),
    "citation_count": ("citationCount", "citation_count", "citeCount"),
    "precedential_status": ("precedentialStatus", "precedential_status", "status"),
    "absolute_url": ("absoluteUrl", "absolute_url"),
    "download_url": ("downloadUrl", "download_url"),
    "plain_text": ("plainText", "plain_text"),
    "html": ("html",),
    "html_lawbox": ("htmlLawbox", "html_lawbox"),
    "html_columbia": ("htmlColumbia", "html_columbia"),
    "html_anon_2020": ("htmlAnon2020", "html_anon_2020"),
    "judges": ("judges", "judge"),
    "docket": ("docket", "docket_id"),
    "docket_number": ("docketNumber", "docket_number"),
    "slug": ("slug",),
}

DOCUMENT_FIELDS: FieldAliases = {
    "document_number": ("document_number",),
    "title": ("title",),
    "abstract": ("abstract",),
    "publication_date": ("publication_date",),
    "effective_date": ("effective_on", "effective_date"),
    "document_type": ("type", "document_type"),
    "pdf_url": ("pdf_url",),
    "html_url": ("html_url",),
    "json_url": ("json_url",),
}

COMMENT_FIELDS: FieldAliases = {
    "comment": ("comment",),
    "title": ("title",),
    "posted_date": ("postedDate",),
    "agency_id": ("agencyId",),
    "document_id": ("documentId", "commentOnDocumentId"),
    "submitter_name": ("submitterName",),
    "organization": ("organization",),
}

COMMITTEE_FIELDS: FieldAliases = {
    "system_code": ("systemCode",),
    "name": ("name",),
    "url": ("url",),
    "chamber": ("chamber",),
    "committee_type": ("committeeTypeCode", "committeeType"),
}

STATUTE_FIELDS: FieldAliases = {
    "title": ("title", "titleNumber"),
    "section": ("section", "sectionNumber"),
    "text": ("text", "content"),
    "heading": ("heading", "sectionHeading"),
    "url": ("url",),
    "last_updated": ("last_updated", "lastUpdated"),
    "source": ("source",),
}

VOTE_FIELDS: FieldAliases = {
    "roll_number": ("rollNumber",),
    "chamber": ("chamber",),
    "congress": ("congress",),
    "session": ("session", "sessionNumber"),
    "url": ("url",),
    "vote_date": ("voteDate",),
    "vote_question": ("voteQuestion",),
    "vote_result": ("voteResult", "result"),
    "vote_title": ("voteTitle",),
    "vote_type": ("voteType",),
}
