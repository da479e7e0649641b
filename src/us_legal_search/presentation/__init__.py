"""Presentation layer: the MCP tool server."""
