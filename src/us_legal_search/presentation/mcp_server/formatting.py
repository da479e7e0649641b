"""
Result Formatting - canonical records to agent-readable text.

List tools answer in Markdown (numbered entries with the identifying line
and a link). Detail tools answer with the record's JSON so every populated
field reaches the agent.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from us_legal_search.domain.entities import (
    Committee,
    CourtOpinion,
    LegislativeBill,
    LegislativeVote,
    PublicComment,
    RegulatoryDocument,
    SearchAllResult,
    StatutoryProvision,
)

T = TypeVar("T")

# Entries shown per group in the search_all_legal summary
TOP_RESULTS_PER_GROUP = 3


def _or(value: Any, fallback: str) -> str:
    return str(value) if value not in (None, "") else fallback


def format_bill(bill: LegislativeBill) -> str:
    lines = [
        f"**{bill.title}**",
        f"   {bill.display_id} - {_or(bill.latest_action_text, 'No status')}",
    ]
    if bill.url:
        lines.append(f"   {bill.url}")
    return "\n".join(lines)


def format_document(doc: RegulatoryDocument) -> str:
    lines = [
        f"**{doc.title}**",
        f"   {doc.document_number} - {_or(doc.primary_agency, 'Unknown agency')}",
    ]
    if doc.publication_date:
        lines.append(f"   Published: {doc.publication_date}")
    if doc.html_url:
        lines.append(f"   {doc.html_url}")
    return "\n".join(lines)


def format_provision(provision: StatutoryProvision) -> str:
    heading = f" - {provision.heading}" if provision.heading else ""
    lines = [f"**{provision.citation}**{heading}"]
    if provision.url:
        lines.append(f"   {provision.url}")
    return "\n".join(lines)


def format_comment(comment: PublicComment) -> str:
    author = comment.organization or comment.submitter_name or "Anonymous"
    lines = [
        f"**{_or(comment.title, comment.id)}**",
        f"   {author} - {_or(comment.posted_date, 'Unknown date')}",
    ]
    if comment.document_id:
        lines.append(f"   On document: {comment.document_id}")
    if comment.url:
        lines.append(f"   {comment.url}")
    return "\n".join(lines)


def format_opinion(opinion: CourtOpinion) -> str:
    lines = [
        f"**{opinion.case_name}**",
        f"   Court: {_or(opinion.court or opinion.court_id, 'Unknown court')} - {_or(opinion.date_filed, 'Unknown date')}",
    ]
    if opinion.citation:
        lines.append(f"   {opinion.citation}")
    if opinion.precedential_status:
        lines.append(f"   {opinion.precedential_status}")
    lines.append(f"   {opinion.url}")
    return "\n".join(lines)


def format_vote(vote: LegislativeVote) -> str:
    title = vote.vote_title or vote.vote_question or f"Roll call {vote.roll_number}"
    lines = [
        f"**{title}**",
        f"   {_or(vote.chamber, 'Unknown chamber')} - {_or(vote.vote_date, 'Unknown date')}",
        f"   Result: {_or(vote.vote_result, 'Unknown')}",
    ]
    if vote.url:
        lines.append(f"   {vote.url}")
    return "\n".join(lines)


def format_committee(committee: Committee) -> str:
    lines = [
        f"**{_or(committee.name, committee.system_code)}**",
        f"   {_or(committee.chamber, 'N/A')} - {_or(committee.committee_type, 'N/A')}",
    ]
    if committee.url:
        lines.append(f"   {committee.url}")
    return "\n".join(lines)


def format_list(heading: str, records: Sequence[T], render: Callable[[T], str]) -> str:
    """Numbered Markdown list under a bold heading with a result count."""
    parts = [f"**{heading}**", "", f"Found {len(records)} result(s)"]
    for index, record in enumerate(records, start=1):
        parts.append("")
        parts.append(f"{index}. {render(record)}")
    return "\n".join(parts)


def format_search_all(query: str, result: SearchAllResult) -> str:
    """Per-source counts followed by the top entries of each group."""
    parts = [
        f'**Comprehensive US Legal Search Results for "{query}"**',
        "",
        f"- Bills: {len(result.bills)}",
        f"- Regulations: {len(result.regulations)}",
        f"- Code Sections: {len(result.code_sections)}",
        f"- Comments: {len(result.comments)}",
    ]

    groups: list[tuple[str, Sequence[Any], Callable[[Any], str]]] = [
        ("Bills", result.bills, format_bill),
        ("Regulations", result.regulations, format_document),
        ("Code Sections", result.code_sections, format_provision),
        ("Public Comments", result.comments, format_comment),
    ]
    for label, records, render in groups:
        if not records:
            continue
        parts.extend(["", f"**Top {label}:**"])
        for index, record in enumerate(records[:TOP_RESULTS_PER_GROUP], start=1):
            parts.append("")
            parts.append(f"{index}. {render(record)}")

    if result.total == 0:
        parts.extend(["", "No results from any source. Try broader terms."])
    return "\n".join(parts)


def format_record_json(record: Any) -> str:
    """Full record as pretty JSON (absent fields omitted)."""
    return json.dumps(record.to_dict(), indent=2, ensure_ascii=False)
