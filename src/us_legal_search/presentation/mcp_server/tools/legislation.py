"""
Legislation MCP Tools (Congress.gov)

- search_congress_bills: bill search, re-ranked by relevance
- get_recent_bills: latest bills for a Congress
- get_bill_details: one bill by congress/type/number
- search_congress_votes: roll-call votes (API key required)
- get_congress_committees: committees (API key required)
"""

import logging
from typing import Union

from mcp.server.fastmcp import FastMCP

from us_legal_search.container import ApplicationContainer
from us_legal_search.core.exceptions import InvalidParameterError
from us_legal_search.infrastructure.sources.congress import CONGRESS_SIGNUP_URL

from ..formatting import format_bill, format_committee, format_list, format_record_json, format_vote
from ._common import InputNormalizer, ResponseFormatter, tool_error_boundary

logger = logging.getLogger(__name__)

CONGRESS_KEY_HINT = (
    "Note: Congress.gov votes and committees require an API key. "
    f"Set CONGRESS_API_KEY (get one at {CONGRESS_SIGNUP_URL})."
)


def _with_key_hint(text: str, count: int, has_key: bool) -> str:
    if count == 0 and not has_key:
        return f"{text}\n\n{CONGRESS_KEY_HINT}"
    return text


def register_legislation_tools(mcp: FastMCP, container: ApplicationContainer) -> None:
    """Register Congress.gov tools with the MCP server."""

    @mcp.tool()
    @tool_error_boundary("search_congress_bills")
    async def search_congress_bills(
        query: str,
        congress: Union[int, str, None] = None,
        limit: Union[int, str] = 20,
    ) -> str:
        """
        Search Congress.gov bills and resolutions.

        Results are re-ranked locally: title and short-title matches weigh
        most, then summary and latest action; matching subjects add a bonus.

        Args:
            query: Search terms (e.g. "clean water infrastructure")
            congress: Congress number between 100 and 120 (e.g. 118)
            limit: Maximum results (1-50, default 20)
        """
        query = InputNormalizer.normalize_query(query)
        congress_number = InputNormalizer.normalize_congress(congress)
        limit = InputNormalizer.normalize_limit(limit)

        bills = await container.congress().search_bills(query, congress=congress_number, limit=limit)
        return format_list(f'Congress Bills Search Results for "{query}"', bills, format_bill)

    @mcp.tool()
    @tool_error_boundary("get_recent_bills")
    async def get_recent_bills(
        congress: Union[int, str, None] = None,
        limit: Union[int, str] = 20,
    ) -> str:
        """
        Get the most recent bills, newest first.

        Args:
            congress: Congress number between 100 and 120 (default: current)
            limit: Maximum results (1-50, default 20)
        """
        congress_number = InputNormalizer.normalize_congress(congress)
        limit = InputNormalizer.normalize_limit(limit)

        bills = await container.congress().get_recent_bills(congress=congress_number, limit=limit)
        heading = f"Recent Bills in Congress {congress_number}" if congress_number else "Recent Bills"
        return format_list(heading, bills, format_bill)

    @mcp.tool()
    @tool_error_boundary("get_bill_details")
    async def get_bill_details(
        congress: Union[int, str],
        bill_type: str,
        bill_number: Union[int, str],
    ) -> str:
        """
        Get full details for one bill.

        Args:
            congress: Congress number between 100 and 120 (e.g. 118)
            bill_type: hr, s, hjres, sjres, hconres, sconres, hres or sres
            bill_number: Bill number (e.g. 815)
        """
        congress_number = InputNormalizer.normalize_congress(congress)
        if congress_number is None:
            raise InvalidParameterError("congress", congress, "a Congress number between 100 and 120")
        bill_type = InputNormalizer.normalize_bill_type(bill_type)
        number = InputNormalizer.normalize_positive_int("bill_number", bill_number)

        bill = await container.congress().get_bill(congress_number, bill_type, number)
        if bill is None:
            return ResponseFormatter.not_found(
                f"bill {bill_type.upper()} {number} in Congress {congress_number}",
                "Use search_congress_bills to find valid bill numbers.",
            )
        return format_record_json(bill)

    @mcp.tool()
    @tool_error_boundary("search_congress_votes")
    async def search_congress_votes(
        congress: Union[int, str, None] = None,
        chamber: str | None = None,
        limit: Union[int, str] = 20,
    ) -> str:
        """
        List roll-call votes. Requires CONGRESS_API_KEY.

        Args:
            congress: Congress number between 100 and 120
            chamber: "House" or "Senate"
            limit: Maximum results (1-50, default 20)
        """
        congress_number = InputNormalizer.normalize_congress(congress)
        chamber_name = InputNormalizer.normalize_chamber(chamber)
        limit = InputNormalizer.normalize_limit(limit)

        client = container.congress()
        votes = await client.search_votes(congress=congress_number, chamber=chamber_name, limit=limit)
        text = format_list("Congress Votes", votes, format_vote)
        return _with_key_hint(text, len(votes), client.has_api_key)

    @mcp.tool()
    @tool_error_boundary("get_congress_committees")
    async def get_congress_committees(
        congress: Union[int, str, None] = None,
        chamber: str | None = None,
    ) -> str:
        """
        List congressional committees. Requires CONGRESS_API_KEY.

        Args:
            congress: Congress number between 100 and 120
            chamber: "House" or "Senate"
        """
        congress_number = InputNormalizer.normalize_congress(congress)
        chamber_name = InputNormalizer.normalize_chamber(chamber)

        client = container.congress()
        committees = await client.get_committees(congress=congress_number, chamber=chamber_name)
        text = format_list("Congress Committees", committees, format_committee)
        return _with_key_hint(text, len(committees), client.has_api_key)
