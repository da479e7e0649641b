"""
Tests for MCP Tools.

Tools are captured from their register_* functions with a fake ``mcp``
whose ``tool()`` decorator records each function, and run against a
container whose source clients are mocks.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from dependency_injector import providers

from us_legal_search.container import build_container
from us_legal_search.domain.entities import (
    CourtOpinion,
    LegislativeBill,
    PublicComment,
    SearchAllResult,
    StatutoryProvision,
)
from us_legal_search.presentation.mcp_server.tools import register_all_tools
from us_legal_search.presentation.mcp_server.tools.legislation import CONGRESS_KEY_HINT
from us_legal_search.presentation.mcp_server.tools.regulations import REGULATIONS_KEY_HINT


def _capture_tools(container):
    tools = {}
    mcp = MagicMock()
    mcp.tool = lambda: lambda func: (tools.__setitem__(func.__name__, func), func)[1]
    register_all_tools(mcp, container)
    return tools


@pytest.fixture
def clients():
    congress = MagicMock(has_api_key=True)
    congress.search_bills = AsyncMock(return_value=[])
    congress.get_recent_bills = AsyncMock(return_value=[])
    congress.get_bill = AsyncMock(return_value=None)
    congress.search_votes = AsyncMock(return_value=[])
    congress.get_committees = AsyncMock(return_value=[])

    federal_register = MagicMock()
    federal_register.search_documents = AsyncMock(return_value=[])
    federal_register.get_recent_documents = AsyncMock(return_value=[])
    federal_register.get_document = AsyncMock(return_value=None)

    us_code = MagicMock()
    us_code.search_code = AsyncMock(return_value=[])
    us_code.get_section = AsyncMock(return_value=None)

    regulations = MagicMock(has_api_key=True)
    regulations.search_comments = AsyncMock(return_value=[])
    regulations.get_comment = AsyncMock(return_value=None)

    court_listener = MagicMock()
    court_listener.search_opinions = AsyncMock(return_value=[])
    court_listener.get_recent_opinions = AsyncMock(return_value=[])
    court_listener.get_opinion = AsyncMock(return_value=None)

    aggregator = MagicMock()
    aggregator.search_all = AsyncMock(return_value=SearchAllResult())

    return {
        "congress": congress,
        "federal_register": federal_register,
        "us_code": us_code,
        "regulations": regulations,
        "court_listener": court_listener,
        "aggregator": aggregator,
    }


@pytest.fixture
def tools(settings, clients):
    container = build_container(settings)
    for name, mock in clients.items():
        getattr(container, name).override(providers.Object(mock))
    return _capture_tools(container)


class TestRegistration:
    """Tests for tool registration."""

    async def test_all_tools_registered(self, tools):
        assert set(tools) == {
            "search_congress_bills",
            "get_recent_bills",
            "get_bill_details",
            "search_congress_votes",
            "get_congress_committees",
            "search_federal_register",
            "get_recent_regulations",
            "get_federal_register_document",
            "search_public_comments",
            "get_public_comment",
            "search_us_code",
            "get_us_code_section",
            "search_court_opinions",
            "get_recent_court_opinions",
            "get_court_opinion",
            "search_all_legal",
        }


# =============================================================================
# Legislation
# =============================================================================


class TestLegislationTools:
    """Tests for Congress.gov tools."""

    async def test_search_bills(self, tools, clients):
        clients["congress"].search_bills.return_value = [
            LegislativeBill(congress=118, bill_type="HR", number="815", title="Clean Water Act")
        ]
        text = await tools["search_congress_bills"](query="clean water", congress="118", limit="5")

        clients["congress"].search_bills.assert_awaited_once_with("clean water", congress=118, limit=5)
        assert "Found 1 result(s)" in text
        assert "**Clean Water Act**" in text
        assert "HR 815 - No status" in text

    async def test_limit_clamped(self, tools, clients):
        await tools["search_congress_bills"](query="water", limit=500)
        assert clients["congress"].search_bills.call_args.kwargs["limit"] == 50

    async def test_empty_query_rejected(self, tools, clients):
        text = await tools["search_congress_bills"](query="  ")
        assert text.startswith("Invalid input for search_congress_bills")
        clients["congress"].search_bills.assert_not_awaited()

    async def test_bad_congress_rejected(self, tools):
        text = await tools["search_congress_bills"](query="water", congress=42)
        assert "Invalid parameter 'congress'" in text

    async def test_bill_details_not_found(self, tools):
        text = await tools["get_bill_details"](congress=118, bill_type="HR", bill_number="9999")
        assert text.startswith("No bill HR 9999 in Congress 118 found.")

    async def test_bill_details_json(self, tools, clients):
        clients["congress"].get_bill.return_value = LegislativeBill(
            congress=118, bill_type="HR", number="815", title="Clean Water Act"
        )
        text = await tools["get_bill_details"](congress="118", bill_type="H.R.", bill_number=815)
        clients["congress"].get_bill.assert_awaited_once_with(118, "hr", 815)
        assert json.loads(text)["title"] == "Clean Water Act"

    async def test_bill_details_requires_congress(self, tools):
        text = await tools["get_bill_details"](congress="", bill_type="hr", bill_number=1)
        assert "Invalid parameter 'congress'" in text

    async def test_votes_key_hint_without_key(self, tools, clients):
        clients["congress"].has_api_key = False
        text = await tools["search_congress_votes"](chamber="house")
        clients["congress"].search_votes.assert_awaited_once_with(congress=None, chamber="House", limit=20)
        assert CONGRESS_KEY_HINT in text

    async def test_committees_no_hint_with_key(self, tools):
        text = await tools["get_congress_committees"]()
        assert CONGRESS_KEY_HINT not in text
        assert "Found 0 result(s)" in text

    async def test_unexpected_failure_becomes_text(self, tools, clients):
        clients["congress"].get_recent_bills.side_effect = RuntimeError("kaboom")
        text = await tools["get_recent_bills"]()
        assert text == "Error executing tool get_recent_bills: kaboom"


# =============================================================================
# Regulations / Statutes / Courts
# =============================================================================


class TestRegulationTools:
    """Tests for Federal Register and Regulations.gov tools."""

    async def test_document_not_found(self, tools):
        text = await tools["get_federal_register_document"](document_number="2024-00000")
        assert text.startswith("No Federal Register document 2024-00000 found.")

    async def test_recent_regulations_limit(self, tools, clients):
        await tools["get_recent_regulations"](limit=3)
        clients["federal_register"].get_recent_documents.assert_awaited_once_with(limit=3)

    async def test_comments_key_hint(self, tools, clients):
        clients["regulations"].has_api_key = False
        text = await tools["search_public_comments"](query="net neutrality")
        assert REGULATIONS_KEY_HINT in text

    async def test_comments_listed(self, tools, clients):
        clients["regulations"].search_comments.return_value = [
            PublicComment(id="C-1", title="My comment", url="https://api.regulations.gov/v4/comments/C-1")
        ]
        text = await tools["search_public_comments"](query="net neutrality")
        assert "**My comment**" in text
        assert REGULATIONS_KEY_HINT not in text

    async def test_public_comment_json(self, tools, clients):
        clients["regulations"].get_comment.return_value = PublicComment(
            id="C-1", comment="Full body", organization="Sierra Club"
        )
        text = await tools["get_public_comment"](comment_id=" C-1 ")
        clients["regulations"].get_comment.assert_awaited_once_with("C-1")
        assert json.loads(text) == {"id": "C-1", "comment": "Full body", "organization": "Sierra Club"}

    async def test_public_comment_not_found_without_key(self, tools, clients):
        clients["regulations"].has_api_key = False
        text = await tools["get_public_comment"](comment_id="C-404")
        assert text.startswith("No public comment C-404 found.")
        assert REGULATIONS_KEY_HINT in text

    async def test_public_comment_requires_id(self, tools, clients):
        text = await tools["get_public_comment"](comment_id="  ")
        assert text.startswith("Invalid input for get_public_comment")
        clients["regulations"].get_comment.assert_not_awaited()


class TestStatuteTools:
    """Tests for US Code tools."""

    async def test_search_with_title(self, tools, clients):
        await tools["search_us_code"](query="wiretap", title="18")
        clients["us_code"].search_code.assert_awaited_once_with("wiretap", title=18, limit=20)

    async def test_section_json(self, tools, clients):
        clients["us_code"].get_section.return_value = StatutoryProvision(title=42, section="1983", heading="Civil action")
        text = await tools["get_us_code_section"](title=42, section=1983)
        clients["us_code"].get_section.assert_awaited_once_with(42, "1983")
        assert json.loads(text)["heading"] == "Civil action"

    async def test_invalid_title(self, tools):
        text = await tools["get_us_code_section"](title=99, section="1")
        assert "Invalid parameter 'title'" in text


class TestCourtTools:
    """Tests for CourtListener tools."""

    async def test_search_court_normalized(self, tools, clients):
        clients["court_listener"].search_opinions.return_value = [
            CourtOpinion(id=1, case_name="Roe v. Wade", url="https://www.courtlistener.com/opinion/1/")
        ]
        text = await tools["search_court_opinions"](query="privacy", court="SCOTUS")
        clients["court_listener"].search_opinions.assert_awaited_once_with("privacy", court="scotus", limit=20)
        assert "**Roe v. Wade**" in text

    async def test_opinion_not_found(self, tools):
        text = await tools["get_court_opinion"](opinion_id="42")
        assert text.startswith("No court opinion 42 found.")

    async def test_opinion_id_invalid(self, tools):
        text = await tools["get_court_opinion"](opinion_id="abc")
        assert text.startswith("Invalid input for get_court_opinion")


# =============================================================================
# Aggregate
# =============================================================================


class TestSearchAllTool:
    """Tests for search_all_legal."""

    async def test_default_limit(self, tools, clients):
        await tools["search_all_legal"](query="clean water")
        clients["aggregator"].search_all.assert_awaited_once_with("clean water", limit=10)

    async def test_empty_result_text(self, tools):
        text = await tools["search_all_legal"](query="clean water")
        assert "- Bills: 0" in text
        assert "No results from any source" in text

    async def test_counts(self, tools, clients):
        clients["aggregator"].search_all.return_value = SearchAllResult(
            bills=(LegislativeBill(congress=118, bill_type="S", number="1", title="Water Act"),),
            comments=(PublicComment(id="C-1"), PublicComment(id="C-2")),
        )
        text = await tools["search_all_legal"](query="water", limit=20)
        assert "- Bills: 1" in text
        assert "- Comments: 2" in text
        assert "**Top Bills:**" in text
        assert "No results from any source" not in text
