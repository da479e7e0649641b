"""
Lexical Relevance Scoring for Upstream Search Results.

Upstream full-text search over government corpora is noisy, and some
sources (US Code, Regulations.gov) return no ranking signal at all. This
module re-scores candidates locally with field weighting
(title > summary > incidental mentions) and applies the relevance floor
policy shared by every source client.

Scoring:
    score_text(text, query)
        +10  the whole query appears verbatim (case-insensitive)
        +n   per query term present, n = min(occurrences, 3)
        +5   every query term matched
    Terms are whitespace-separated, lowercased, and shorter than 3
    characters are ignored.

    score_record(record, query, table)
        Σ score_text(field) × weight over the table's text fields
        + flat bonus per tag that contains ANY query term (once per tag)

Scores are unnormalized: they only rank candidates within one response,
never across sources.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Minimum score for a candidate to be preferred during truncation
RELEVANCE_FLOOR = 5

_EXACT_MATCH_BONUS = 10
_ALL_TERMS_BONUS = 5
_MAX_OCCURRENCES_PER_TERM = 3
_MIN_TERM_LENGTH = 3


def query_terms(query: str) -> list[str]:
    """Lowercase whitespace-split terms, dropping terms of 2 characters or fewer."""
    if not query:
        return []
    return [term for term in query.lower().split() if len(term) >= _MIN_TERM_LENGTH]


def score_text(text: str | None, query: str | None) -> int:
    """
    Score one text field against a free-text query.

    Returns a non-negative integer, 0 when either input is empty or the
    query has no usable terms.
    """
    if not text or not query:
        return 0

    terms = query_terms(query)
    if not terms:
        return 0

    lower_text = text.lower()
    score = 0

    if query.lower() in lower_text:
        score += _EXACT_MATCH_BONUS

    matched = 0
    for term in terms:
        occurrences = lower_text.count(term)
        if occurrences:
            matched += 1
            score += min(occurrences, _MAX_OCCURRENCES_PER_TERM)

    if matched == len(terms):
        score += _ALL_TERMS_BONUS

    return score


# =============================================================================
# Entity-Level Scoring
# =============================================================================


@dataclass(frozen=True)
class WeightTable:
    """
    Per-entity field weights.

    Attributes:
        text_fields: Ordered (attribute, multiplier) pairs scored with score_text
        tag_field: Attribute holding a sequence of tags (subjects, agencies, ...)
        tag_bonus: Flat bonus per tag containing any query term
    """

    text_fields: tuple[tuple[str, float], ...] = ()
    tag_field: str | None = None
    tag_bonus: float = 0.0
    name: str = field(default="record", compare=False)


BILL_WEIGHTS = WeightTable(
    text_fields=(
        ("title", 4.0),
        ("short_title", 4.0),
        ("summary", 2.0),
        ("latest_action_text", 1.5),
    ),
    tag_field="subjects",
    tag_bonus=20.0,
    name="bill",
)

DOCUMENT_WEIGHTS = WeightTable(
    text_fields=(
        ("title", 3.0),
        ("abstract", 2.0),
    ),
    tag_field="agency_names",
    tag_bonus=10.0,
    name="document",
)

STATUTE_WEIGHTS = WeightTable(
    text_fields=(
        ("heading", 3.0),
        ("text", 2.0),
    ),
    name="statute",
)

OPINION_WEIGHTS = WeightTable(
    text_fields=(
        ("case_name", 3.0),
        ("case_name_full", 2.0),
    ),
    tag_field="judges",
    tag_bonus=5.0,
    name="opinion",
)


def _tag_score(tags: Iterable[Any] | None, terms: list[str], bonus: float) -> float:
    if not tags or not terms:
        return 0.0
    score = 0.0
    for tag in tags:
        tag_lower = str(tag).lower()
        if any(term in tag_lower for term in terms):
            score += bonus
    return score


def score_record(record: Any, query: str, table: WeightTable) -> float:
    """Combine weighted text-field scores and tag bonuses for one record."""
    score = 0.0
    for attribute, weight in table.text_fields:
        text = getattr(record, attribute, None)
        if text:
            score += score_text(text, query) * weight

    if table.tag_field:
        score += _tag_score(getattr(record, table.tag_field, None), query_terms(query), table.tag_bonus)

    return score


def score_bill(bill: Any, query: str) -> float:
    return score_record(bill, query, BILL_WEIGHTS)


def score_document(document: Any, query: str) -> float:
    return score_record(document, query, DOCUMENT_WEIGHTS)


def score_statute(provision: Any, query: str) -> float:
    return score_record(provision, query, STATUTE_WEIGHTS)


def score_opinion(opinion: Any, query: str) -> float:
    return score_record(opinion, query, OPINION_WEIGHTS)


# =============================================================================
# Ranking + Relevance Floor
# =============================================================================


def rank_candidates(records: Sequence[T], query: str, table: WeightTable) -> list[tuple[float, T]]:
    """
    Score and sort candidates, highest first.

    The sort is stable: ties keep the upstream order.
    """
    scored = [(score_record(record, query, table), record) for record in records]
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return scored


def rank_by_relevance(
    records: Sequence[T],
    query: str,
    table: WeightTable,
    limit: int,
    floor: float = RELEVANCE_FLOOR,
) -> list[T]:
    """
    Re-rank upstream candidates and truncate to ``limit``.

    Candidates scoring at least ``floor`` are preferred. When fewer than
    ``limit`` of them exist, the top of the full sorted list is returned
    instead, so a sparse upstream still yields min(limit, len(records))
    results. Scores are not attached to the returned records.
    """
    if limit <= 0 or not records:
        return []

    scored = rank_candidates(records, query, table)

    if logger.isEnabledFor(logging.DEBUG):
        preview = ", ".join(f"{_label(record)[:40]} (score: {score:g})" for score, record in scored[:5])
        logger.debug(f"{table.name} relevance scores (top 5): {preview}")

    relevant = [record for score, record in scored if score >= floor]
    if len(relevant) >= limit:
        return relevant[:limit]

    return [record for _, record in scored[:limit]]


def _label(record: Any) -> str:
    for attribute in ("title", "case_name", "section", "id"):
        value = getattr(record, attribute, None)
        if value:
            return str(value)
    return repr(record)
