"""
Regulatory MCP Tools (Federal Register, Regulations.gov)

- search_federal_register: document search, re-ranked by relevance
- get_recent_regulations: newest Federal Register documents
- get_federal_register_document: one document with its sections
- search_public_comments: public comments on rulemaking dockets
- get_public_comment: one comment with its full text
"""

import logging
from typing import Union

from mcp.server.fastmcp import FastMCP

from us_legal_search.container import ApplicationContainer
from us_legal_search.infrastructure.sources.regulations_gov import REGULATIONS_GOV_SIGNUP_URL

from ..formatting import format_comment, format_document, format_list, format_record_json
from ._common import InputNormalizer, ResponseFormatter, tool_error_boundary

logger = logging.getLogger(__name__)

REGULATIONS_KEY_HINT = (
    "Note: Regulations.gov requires an API key. "
    f"Set REGULATIONS_GOV_API_KEY (get one at {REGULATIONS_GOV_SIGNUP_URL})."
)


def register_regulation_tools(mcp: FastMCP, container: ApplicationContainer) -> None:
    """Register Federal Register and Regulations.gov tools with the MCP server."""

    @mcp.tool()
    @tool_error_boundary("search_federal_register")
    async def search_federal_register(query: str, limit: Union[int, str] = 20) -> str:
        """
        Search Federal Register rules, proposed rules and notices.

        Args:
            query: Search terms (e.g. "vehicle emissions standards")
            limit: Maximum results (1-50, default 20)
        """
        query = InputNormalizer.normalize_query(query)
        limit = InputNormalizer.normalize_limit(limit)

        documents = await container.federal_register().search_documents(query, limit=limit)
        return format_list(f'Federal Register Search Results for "{query}"', documents, format_document)

    @mcp.tool()
    @tool_error_boundary("get_recent_regulations")
    async def get_recent_regulations(limit: Union[int, str] = 20) -> str:
        """
        Get the most recently published Federal Register documents.

        Args:
            limit: Maximum results (1-50, default 20)
        """
        limit = InputNormalizer.normalize_limit(limit)

        documents = await container.federal_register().get_recent_documents(limit=limit)
        return format_list("Recent Federal Register Documents", documents, format_document)

    @mcp.tool()
    @tool_error_boundary("get_federal_register_document")
    async def get_federal_register_document(document_number: str) -> str:
        """
        Get one Federal Register document by its document number.

        Args:
            document_number: Federal Register document number (e.g. "2024-01234")
        """
        document_number = InputNormalizer.normalize_identifier("document_number", document_number)

        document = await container.federal_register().get_document(document_number)
        if document is None:
            return ResponseFormatter.not_found(
                f"Federal Register document {document_number}",
                "Use search_federal_register to find valid document numbers.",
            )
        return format_record_json(document)

    @mcp.tool()
    @tool_error_boundary("search_public_comments")
    async def search_public_comments(query: str, limit: Union[int, str] = 20) -> str:
        """
        Search public comments on federal regulations (Regulations.gov), newest first.

        Requires REGULATIONS_GOV_API_KEY.

        Args:
            query: Search terms (e.g. "net neutrality")
            limit: Maximum results (1-50, default 20)
        """
        query = InputNormalizer.normalize_query(query)
        limit = InputNormalizer.normalize_limit(limit)

        client = container.regulations()
        comments = await client.search_comments(query, limit=limit)
        text = format_list(f'Public Comments Search Results for "{query}"', comments, format_comment)
        if not comments and not client.has_api_key:
            text = f"{text}\n\n{REGULATIONS_KEY_HINT}"
        return text

    @mcp.tool()
    @tool_error_boundary("get_public_comment")
    async def get_public_comment(comment_id: str) -> str:
        """
        Get one public comment with its full text, submitter and organization.

        Requires REGULATIONS_GOV_API_KEY.

        Args:
            comment_id: Regulations.gov comment id (e.g. "EPA-HQ-OW-2024-0001-0042")
        """
        comment_id = InputNormalizer.normalize_identifier("comment_id", comment_id)

        client = container.regulations()
        comment = await client.get_comment(comment_id)
        if comment is None:
            text = ResponseFormatter.not_found(
                f"public comment {comment_id}",
                "Use search_public_comments to find valid comment ids.",
            )
            if not client.has_api_key:
                text = f"{text}\n\n{REGULATIONS_KEY_HINT}"
            return text
        return format_record_json(comment)
