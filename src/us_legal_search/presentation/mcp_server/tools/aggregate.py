"""
Multi-source MCP Tool

- search_all_legal: bills, regulations, code sections and comments in one call
"""

import logging
from typing import Union

from mcp.server.fastmcp import FastMCP

from us_legal_search.container import ApplicationContainer

from ..formatting import format_search_all
from ._common import InputNormalizer, tool_error_boundary

logger = logging.getLogger(__name__)

SEARCH_ALL_DEFAULT_LIMIT = 10


def register_aggregate_tools(mcp: FastMCP, container: ApplicationContainer) -> None:
    """Register the cross-source search tool with the MCP server."""

    @mcp.tool()
    @tool_error_boundary("search_all_legal")
    async def search_all_legal(query: str, limit: Union[int, str] = SEARCH_ALL_DEFAULT_LIMIT) -> str:
        """
        Search Congress.gov, the Federal Register, the US Code and
        Regulations.gov at once.

        The limit is split evenly: each source returns up to ceil(limit / 4)
        results. A source that fails contributes no results; the others are
        still returned. Court opinions are not included (use
        search_court_opinions).

        Args:
            query: Search terms (e.g. "clean water")
            limit: Overall result budget (1-50, default 10)
        """
        query = InputNormalizer.normalize_query(query)
        limit = InputNormalizer.normalize_limit(limit, default=SEARCH_ALL_DEFAULT_LIMIT)

        result = await container.aggregator().search_all(query, limit=limit)
        return format_search_all(query, result)
