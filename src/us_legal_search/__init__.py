"""
US Legal Search - Search Library for US Federal Legal Data

Searches Congress.gov, the Federal Register, the US Code, Regulations.gov
and CourtListener, normalizes their payloads into canonical records and
re-ranks results by keyword relevance. Ships an MCP server exposing every
operation as a tool.

Usage:
    from us_legal_search import CongressClient, LegalSearchSettings

    async with CongressClient(LegalSearchSettings.from_env()) as congress:
        bills = await congress.search_bills("clean water", limit=10)

    for bill in bills:
        print(f"{bill.display_id}: {bill.title}")

Features:
    - Relevance re-ranking with field weighting and a relevance floor
    - Concurrent multi-source search (search_all)
    - Failures degrade to empty results with a logged diagnostic
"""

from .application.search import LegalSearchAggregator, per_source_limit, score_text
from .config import LegalSearchSettings
from .domain import (
    Committee,
    CourtOpinion,
    LegislativeBill,
    LegislativeVote,
    PublicComment,
    RegulatoryDocument,
    SearchAllResult,
    StatutoryProvision,
)
from .infrastructure.sources import (
    CongressClient,
    CourtListenerClient,
    FederalRegisterClient,
    RegulationsGovClient,
    USCodeClient,
)

__version__ = "1.0.0"

__all__ = [
    # Clients
    "CongressClient",
    "CourtListenerClient",
    "FederalRegisterClient",
    "RegulationsGovClient",
    "USCodeClient",
    # Search
    "LegalSearchAggregator",
    "per_source_limit",
    "score_text",
    # Configuration
    "LegalSearchSettings",
    # Records
    "Committee",
    "CourtOpinion",
    "LegislativeBill",
    "LegislativeVote",
    "PublicComment",
    "RegulatoryDocument",
    "SearchAllResult",
    "StatutoryProvision",
]
