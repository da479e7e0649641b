"""
US Code MCP Tools

- search_us_code: section search, re-ranked by relevance
- get_us_code_section: one section by title and section number
"""

import logging
from typing import Union

from mcp.server.fastmcp import FastMCP

from us_legal_search.container import ApplicationContainer

from ..formatting import format_list, format_provision, format_record_json
from ._common import InputNormalizer, ResponseFormatter, tool_error_boundary

logger = logging.getLogger(__name__)


def register_statute_tools(mcp: FastMCP, container: ApplicationContainer) -> None:
    """Register US Code tools with the MCP server."""

    @mcp.tool()
    @tool_error_boundary("search_us_code")
    async def search_us_code(
        query: str,
        title: Union[int, str, None] = None,
        limit: Union[int, str] = 20,
    ) -> str:
        """
        Search the United States Code.

        The US Code service can be slow; searches allow up to 30 seconds.

        Args:
            query: Search terms (e.g. "civil rights deprivation")
            title: Optional US Code title number (1-54, e.g. 42)
            limit: Maximum results (1-50, default 20)
        """
        query = InputNormalizer.normalize_query(query)
        title_number = InputNormalizer.normalize_us_code_title(title, required=False)
        limit = InputNormalizer.normalize_limit(limit)

        sections = await container.us_code().search_code(query, title=title_number, limit=limit)
        return format_list(f'US Code Search Results for "{query}"', sections, format_provision)

    @mcp.tool()
    @tool_error_boundary("get_us_code_section")
    async def get_us_code_section(title: Union[int, str], section: Union[str, int]) -> str:
        """
        Get the text of one US Code section.

        Args:
            title: US Code title number (1-54, e.g. 42)
            section: Section identifier (e.g. "1983" or "300gg-11")
        """
        title_number = InputNormalizer.normalize_us_code_title(title)
        section = InputNormalizer.normalize_identifier("section", section)

        provision = await container.us_code().get_section(title_number, section)
        if provision is None:
            return ResponseFormatter.not_found(
                f"section {title_number} U.S.C. § {section}",
                "Check the title and section number.",
            )
        return format_record_json(provision)
