"""
US Legal Search MCP Server

Usage as standalone server:
    python -m us_legal_search.presentation.mcp_server

Or in mcp.json:
    {
        "servers": {
            "us-legal-search": {
                "type": "stdio",
                "command": "us-legal-search-mcp",
                "env": {"CONGRESS_API_KEY": "...", "REGULATIONS_GOV_API_KEY": "..."}
            }
        }
    }

Usage for integration:
    from us_legal_search.container import build_container
    from us_legal_search.presentation.mcp_server import register_all_tools

    register_all_tools(your_mcp_server, build_container())
"""

from __future__ import annotations

from .server import create_server, main
from .tools import register_all_tools

__all__ = ["create_server", "main", "register_all_tools"]
