"""
Search application layer.

- relevance: lexical scorer, per-entity weight tables, relevance floor
- aggregator: concurrent multi-source search
"""

from .aggregator import LegalSearchAggregator, per_source_limit
from .relevance import (
    BILL_WEIGHTS,
    DOCUMENT_WEIGHTS,
    OPINION_WEIGHTS,
    RELEVANCE_FLOOR,
    STATUTE_WEIGHTS,
    WeightTable,
    query_terms,
    rank_by_relevance,
    rank_candidates,
    score_bill,
    score_document,
    score_opinion,
    score_record,
    score_statute,
    score_text,
)

__all__ = [
    "BILL_WEIGHTS",
    "DOCUMENT_WEIGHTS",
    "OPINION_WEIGHTS",
    "RELEVANCE_FLOOR",
    "STATUTE_WEIGHTS",
    "LegalSearchAggregator",
    "WeightTable",
    "per_source_limit",
    "query_terms",
    "rank_by_relevance",
    "rank_candidates",
    "score_bill",
    "score_document",
    "score_opinion",
    "score_record",
    "score_statute",
    "score_text",
]
