"""
Court Opinion MCP Tools (CourtListener)

- search_court_opinions: opinion search, re-ranked by relevance
- get_recent_court_opinions: most recently filed opinions
- get_court_opinion: one opinion by id
"""

import logging
from typing import Union

from mcp.server.fastmcp import FastMCP

from us_legal_search.container import ApplicationContainer

from ..formatting import format_list, format_opinion, format_record_json
from ._common import InputNormalizer, ResponseFormatter, tool_error_boundary

logger = logging.getLogger(__name__)


def register_court_tools(mcp: FastMCP, container: ApplicationContainer) -> None:
    """Register CourtListener tools with the MCP server."""

    @mcp.tool()
    @tool_error_boundary("search_court_opinions")
    async def search_court_opinions(
        query: str,
        court: str | None = None,
        limit: Union[int, str] = 20,
    ) -> str:
        """
        Search federal and state court opinions (CourtListener).

        Args:
            query: Search terms (e.g. "qualified immunity excessive force")
            court: Optional court id (e.g. "scotus", "ca9", "nysd")
            limit: Maximum results (1-50, default 20)
        """
        query = InputNormalizer.normalize_query(query)
        court = InputNormalizer.normalize_court(court)
        limit = InputNormalizer.normalize_limit(limit)

        opinions = await container.court_listener().search_opinions(query, court=court, limit=limit)
        return format_list(f'Court Opinions Search Results for "{query}"', opinions, format_opinion)

    @mcp.tool()
    @tool_error_boundary("get_recent_court_opinions")
    async def get_recent_court_opinions(
        court: str | None = None,
        limit: Union[int, str] = 20,
    ) -> str:
        """
        Get the most recently filed court opinions.

        Args:
            court: Optional court id (e.g. "scotus")
            limit: Maximum results (1-50, default 20)
        """
        court = InputNormalizer.normalize_court(court)
        limit = InputNormalizer.normalize_limit(limit)

        opinions = await container.court_listener().get_recent_opinions(court=court, limit=limit)
        return format_list("Recent Court Opinions", opinions, format_opinion)

    @mcp.tool()
    @tool_error_boundary("get_court_opinion")
    async def get_court_opinion(opinion_id: Union[int, str]) -> str:
        """
        Get one court opinion by its CourtListener id.

        Args:
            opinion_id: Numeric opinion id (from search results)
        """
        opinion_id = InputNormalizer.normalize_positive_int("opinion_id", opinion_id)

        opinion = await container.court_listener().get_opinion(opinion_id)
        if opinion is None:
            return ResponseFormatter.not_found(
                f"court opinion {opinion_id}",
                "Use search_court_opinions to find valid opinion ids.",
            )
        return format_record_json(opinion)
