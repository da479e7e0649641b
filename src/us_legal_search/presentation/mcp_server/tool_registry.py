"""
Tool Registry - central list of every MCP tool, grouped by category.

Usage:
    from .tool_registry import register_all_mcp_tools, list_registered_tools

    register_all_mcp_tools(mcp, container)
    tools = list_registered_tools()
"""

from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from us_legal_search.container import ApplicationContainer

logger = logging.getLogger(__name__)


# ============================================================================
# Tool Categories
# ============================================================================

TOOL_CATEGORIES: dict[str, dict[str, Any]] = {
    "legislation": {
        "name": "Legislation",
        "description": "Congress.gov bills, votes and committees",
        "tools": [
            "search_congress_bills",
            "get_recent_bills",
            "get_bill_details",
            "search_congress_votes",
            "get_congress_committees",
        ],
    },
    "regulations": {
        "name": "Regulations",
        "description": "Federal Register documents and Regulations.gov comments",
        "tools": [
            "search_federal_register",
            "get_recent_regulations",
            "get_federal_register_document",
            "search_public_comments",
            "get_public_comment",
        ],
    },
    "statutes": {
        "name": "Statutes",
        "description": "United States Code",
        "tools": ["search_us_code", "get_us_code_section"],
    },
    "courts": {
        "name": "Courts",
        "description": "CourtListener court opinions",
        "tools": [
            "search_court_opinions",
            "get_recent_court_opinions",
            "get_court_opinion",
        ],
    },
    "aggregate": {
        "name": "Multi-source",
        "description": "One query across bills, regulations, code and comments",
        "tools": ["search_all_legal"],
    },
}


# ============================================================================
# Registration
# ============================================================================


def register_all_mcp_tools(mcp: FastMCP, container: ApplicationContainer) -> dict[str, int]:
    """
    Register all MCP tools and check them against TOOL_CATEGORIES.

    Returns:
        Tool count per category
    """
    from .tools import register_all_tools

    logger.info("Registering legal search tools...")
    register_all_tools(mcp, container)

    report = validate_tool_registry(mcp)
    if not report["valid"]:
        logger.warning(
            f"Tool registry mismatch: missing={report['missing']} extra={report['extra']}"
            + (f" ({report['error']})" if "error" in report else "")
        )

    return {cat_id: len(tools) for cat_id, tools in list_registered_tools().items()}


def list_registered_tools() -> dict[str, list[str]]:
    """All defined tools, grouped by category id."""
    return {cat_id: list(cat_info["tools"]) for cat_id, cat_info in TOOL_CATEGORIES.items()}


# ============================================================================
# Validation
# ============================================================================


def registered_tool_names(mcp: FastMCP) -> set[str] | None:
    """Tool names FastMCP holds, or None when its tool manager is unreachable."""
    manager = getattr(mcp, "_tool_manager", None)
    if manager is None:
        return None
    return {tool.name for tool in manager.list_tools()}


def validate_tool_registry(mcp: FastMCP) -> dict[str, Any]:
    """
    Compare TOOL_CATEGORIES with the tools registered on ``mcp``.

    ``valid`` is True only when both sides name exactly the same tools.
    """
    defined = {name for tools in list_registered_tools().values() for name in tools}
    registered = registered_tool_names(mcp)
    if registered is None:
        return {
            "registered": [],
            "missing": sorted(defined),
            "extra": [],
            "valid": False,
            "error": "FastMCP tool manager not reachable",
        }

    missing = sorted(defined - registered)
    extra = sorted(registered - defined)
    return {
        "registered": sorted(registered),
        "missing": missing,
        "extra": extra,
        "valid": not missing and not extra,
    }


__all__ = [
    "TOOL_CATEGORIES",
    "list_registered_tools",
    "register_all_mcp_tools",
    "registered_tool_names",
    "validate_tool_registry",
]
