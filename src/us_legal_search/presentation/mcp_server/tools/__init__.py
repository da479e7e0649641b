"""
US Legal Search MCP Tools

Legislation (5):
- search_congress_bills, get_recent_bills, get_bill_details
- search_congress_votes, get_congress_committees

Regulations (4):
- search_federal_register, get_recent_regulations, get_federal_register_document
- search_public_comments

Statutes (2):
- search_us_code, get_us_code_section

Courts (3):
- search_court_opinions, get_recent_court_opinions, get_court_opinion

Aggregate (1):
- search_all_legal

Usage:
    from .tools import register_all_tools
    register_all_tools(mcp, container)
"""

from mcp.server.fastmcp import FastMCP

from us_legal_search.container import ApplicationContainer

from .aggregate import register_aggregate_tools
from .courts import register_court_tools
from .legislation import register_legislation_tools
from .regulations import register_regulation_tools
from .statutes import register_statute_tools


def register_all_tools(mcp: FastMCP, container: ApplicationContainer) -> None:
    """Register every tool, each bound to the container's clients."""
    register_legislation_tools(mcp, container)
    register_regulation_tools(mcp, container)
    register_statute_tools(mcp, container)
    register_court_tools(mcp, container)
    register_aggregate_tools(mcp, container)


__all__ = [
    "register_aggregate_tools",
    "register_all_tools",
    "register_court_tools",
    "register_legislation_tools",
    "register_regulation_tools",
    "register_statute_tools",
]
