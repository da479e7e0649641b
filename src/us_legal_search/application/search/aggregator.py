"""
Multi-Source Legal Search - One query against four sources concurrently.

``search_all`` splits the caller's limit evenly across Congress.gov bills,
Federal Register documents, US Code sections and Regulations.gov comments,
runs the four searches in parallel and returns them grouped by source.

Each group keeps its own source's ranking. Scores are not comparable across
sources, so there is no cross-source re-ranking.

A failing source contributes an empty group; the other groups are
unaffected. Court opinions are served by their own tools and are not part
of the aggregate.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any, TypeVar

from us_legal_search.domain.entities import SearchAllResult

if TYPE_CHECKING:
    from us_legal_search.infrastructure.sources import (
        CongressClient,
        CourtListenerClient,
        FederalRegisterClient,
        RegulationsGovClient,
        USCodeClient,
    )

logger = logging.getLogger(__name__)

T = TypeVar("T")

SOURCE_COUNT = 4


def per_source_limit(limit: int) -> int:
    """ceil(limit / 4): what each of the four sources is asked for."""
    if limit <= 0:
        return 0
    return math.ceil(limit / SOURCE_COUNT)


class LegalSearchAggregator:
    """
    Concurrent search across the legal data sources.

    Usage:
        aggregator = LegalSearchAggregator(congress, federal_register, us_code, regulations)
        result = await aggregator.search_all("clean water", limit=20)
        result.counts()  # {"bills": 5, "regulations": 5, ...}
    """

    def __init__(
        self,
        congress: CongressClient,
        federal_register: FederalRegisterClient,
        us_code: USCodeClient,
        regulations: RegulationsGovClient,
        court_listener: CourtListenerClient | None = None,
    ) -> None:
        self.congress = congress
        self.federal_register = federal_register
        self.us_code = us_code
        self.regulations = regulations
        # Held for the court tools; search_all does not query it
        self.court_listener = court_listener

    async def search_all(
        self,
        query: str,
        limit: int = 20,
        *,
        deadline: float | None = None,
    ) -> SearchAllResult:
        """
        Search bills, regulations, code sections and comments concurrently.

        Args:
            query: Free-text query passed to every source
            limit: Overall size hint; each source gets ceil(limit / 4)
            deadline: Optional per-source time limit in seconds

        Returns:
            SearchAllResult with exactly four groups (empty on failure)
        """
        each = per_source_limit(limit)
        if each == 0:
            return SearchAllResult()

        sources: dict[str, Awaitable[list[Any]]] = {
            "bills": self.congress.search_bills(query, limit=each),
            "regulations": self.federal_register.search_documents(query, limit=each),
            "code_sections": self.us_code.search_code(query, limit=each),
            "comments": self.regulations.search_comments(query, limit=each),
        }

        outcomes = await asyncio.gather(
            *(self._bounded(awaitable, deadline) for awaitable in sources.values()),
            return_exceptions=True,
        )

        groups: dict[str, tuple[Any, ...]] = {}
        for name, outcome in zip(sources, outcomes):
            if isinstance(outcome, Exception):
                logger.error(f"search_all: {name} failed: {type(outcome).__name__}: {outcome}")
                groups[name] = ()
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                groups[name] = tuple(outcome[:each])

        result = SearchAllResult(**groups)
        logger.info(f"search_all '{query}': {result.total} results {result.counts()}")
        return result

    @staticmethod
    async def _bounded(awaitable: Awaitable[T], deadline: float | None) -> T:
        if deadline is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=deadline)
