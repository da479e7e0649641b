"""
US Legal Search MCP Server

Exposes Congress.gov, the Federal Register, the US Code, Regulations.gov and
CourtListener as MCP tools over stdio.

Wiring:
- container: one ApplicationContainer per server, holding the source clients
- tool_registry.py / tools/: tool definitions, grouped by source
- formatting.py: text rendering of canonical records
- instructions.py: the usage guide sent to agents on connect
"""

from __future__ import annotations

import logging
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp import FastMCP

from us_legal_search.config import LegalSearchSettings
from us_legal_search.container import ApplicationContainer, build_container, close_clients

from .instructions import SERVER_INSTRUCTIONS
from .tool_registry import register_all_mcp_tools

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

logger = logging.getLogger(__name__)

DEFAULT_SERVER_NAME = "us-legal-search"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Set by create_server()
_container: ApplicationContainer | None = None


def get_container() -> ApplicationContainer:
    """Container of the most recently created server."""
    if _container is None:
        raise RuntimeError("No container yet: call create_server() first")
    return _container


def _make_lifespan(
    container: ApplicationContainer,
) -> Callable[[FastMCP[Any]], AbstractAsyncContextManager[ApplicationContainer]]:
    """Lifespan that closes every source client when the server stops."""

    @asynccontextmanager
    async def lifespan(server: FastMCP[Any]) -> AsyncIterator[ApplicationContainer]:
        logger.info(f"{server.name}: serving")
        try:
            yield container
        finally:
            await close_clients(container)
            logger.info(f"{server.name}: source clients closed")

    return lifespan


def create_server(
    settings: LegalSearchSettings | None = None,
    name: str = DEFAULT_SERVER_NAME,
) -> FastMCP:
    """
    Build a FastMCP server with every legal search tool registered.

    Args:
        settings: Credentials and timeouts; read from the environment when omitted
        name: Server name announced to clients
    """
    global _container

    _container = build_container(settings)
    mcp = FastMCP(
        name,
        instructions=SERVER_INSTRUCTIONS,
        lifespan=_make_lifespan(_container),
    )

    stats = register_all_mcp_tools(mcp, _container)
    logger.info(f"{name} ready: {sum(stats.values())} tools {stats}")
    return mcp


def main() -> None:
    """Console entry point: stdio transport, logs on stderr."""
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    create_server(LegalSearchSettings.from_env()).run()


if __name__ == "__main__":
    main()
