"""
Tests for Markdown and JSON rendering of records.
"""

from __future__ import annotations

import json

from us_legal_search.domain.entities import (
    Committee,
    CourtOpinion,
    LatestAction,
    LegislativeBill,
    LegislativeVote,
    PublicComment,
    RegulatoryDocument,
    SearchAllResult,
    StatutoryProvision,
)
from us_legal_search.presentation.mcp_server.formatting import (
    format_bill,
    format_comment,
    format_committee,
    format_document,
    format_list,
    format_opinion,
    format_provision,
    format_record_json,
    format_search_all,
    format_vote,
)


class TestRecordRenderers:
    """Tests for one-record renderers."""

    def test_bill(self):
        bill = LegislativeBill(
            congress=118,
            bill_type="HR",
            number="815",
            title="Clean Water Act",
            url="https://api.congress.gov/v3/bill/118/hr/815",
            latest_action=LatestAction(text="Referred to committee."),
        )
        assert format_bill(bill) == (
            "**Clean Water Act**\n"
            "   HR 815 - Referred to committee.\n"
            "   https://api.congress.gov/v3/bill/118/hr/815"
        )

    def test_document_without_agency(self):
        text = format_document(RegulatoryDocument(document_number="2024-1", title="Rule"))
        assert "2024-1 - Unknown agency" in text

    def test_provision(self):
        text = format_provision(StatutoryProvision(title=42, section="1983", heading="Civil action"))
        assert text == "**42 U.S.C. § 1983** - Civil action"

    def test_comment_falls_back_to_id(self):
        text = format_comment(PublicComment(id="C-1", organization="Sierra Club"))
        assert text.startswith("**C-1**\n   Sierra Club - Unknown date")

    def test_opinion(self):
        opinion = CourtOpinion(
            id=1,
            case_name="Roe v. Wade",
            url="https://www.courtlistener.com/opinion/1/",
            court_id="scotus",
            citation="410 U.S. 113",
        )
        text = format_opinion(opinion)
        assert "Court: scotus - Unknown date" in text
        assert "410 U.S. 113" in text
        assert text.endswith("https://www.courtlistener.com/opinion/1/")

    def test_vote_and_committee(self):
        assert format_vote(LegislativeVote(roll_number=17)).startswith("**Roll call 17**")
        assert format_committee(Committee(system_code="hsag00")).startswith("**hsag00**")


class TestListAndJson:
    """Tests for list and detail output."""

    def test_empty_list(self):
        assert format_list("Heading", [], str) == "**Heading**\n\nFound 0 result(s)"

    def test_numbered(self):
        text = format_list("H", ["a", "b"], str.upper)
        assert text.endswith("1. A\n\n2. B")

    def test_json_omits_absent_fields(self):
        data = json.loads(format_record_json(StatutoryProvision(title=42, section="1983")))
        assert data == {"title": 42, "section": "1983"}

    def test_json_keeps_unicode(self):
        text = format_record_json(StatutoryProvision(title=42, section="1983", heading="§ heading"))
        assert "§ heading" in text


class TestSearchAll:
    """Tests for the aggregate summary."""

    def test_top_three_per_group(self):
        bills = tuple(
            LegislativeBill(congress=118, bill_type="HR", number=str(n), title=f"Bill {n}") for n in range(5)
        )
        text = format_search_all("water", SearchAllResult(bills=bills))
        assert "- Bills: 5" in text
        assert "**Bill 2**" in text
        assert "**Bill 3**" not in text
        assert "Top Regulations" not in text

    def test_empty(self):
        text = format_search_all("water", SearchAllResult())
        assert text.endswith("No results from any source. Try broader terms.")
