"""Keyword ranking and facet filtering over search index rows.

Scores are ascending: lower is better. Each field has a fixed weight and
a row takes the best (minimum) weight of any field it matches, over every
synonym expansion of the query.
"""

from dataclasses import dataclass

from waypoint.derive import era
from waypoint.models import IndexRow
from waypoint.search.state import FilterState
from waypoint.utils import normalize_text, title_sort_key

__all__ = [
    "EXACT_TITLE_SCORE",
    "TITLE_SCORE",
    "CREATOR_SCORE",
    "SUBJECT_SCORE",
    "COLLECTION_SCORE",
    "COMBINED_SCORE",
    "FALLBACK_SCORE",
    "SYNONYMS",
    "SearchHit",
    "expand_query",
    "score_row",
    "search",
    "apply_filters",
    "run_search",
]

EXACT_TITLE_SCORE = -1.0
TITLE_SCORE = 0.05
CREATOR_SCORE = 0.2
SUBJECT_SCORE = 0.35
COLLECTION_SCORE = 0.5
COMBINED_SCORE = 0.75
FALLBACK_SCORE = 1.0

# Normalized term -> alternative phrasings tried as extra query variants
SYNONYMS: dict[str, tuple[str, ...]] = {
    "patristics": ("church fathers",),
    "church fathers": ("patristics",),
    "monasticism": ("monastic", "monks"),
    "monks": ("monasticism",),
    "scripture": ("bible",),
    "bible": ("scripture",),
    "liturgy": ("worship",),
    "mysticism": ("contemplation",),
    "autobiography": ("memoir",),
    "memoir": ("autobiography",),
}


@dataclass(frozen=True)
class SearchHit:
    """Row paired with its rank score."""

    row: IndexRow
    score: float


def expand_query(query: str, synonyms: dict[str, tuple[str, ...]] = SYNONYMS) -> list[str]:
    """Normalize a query and add its synonym variants.

    Parameters
    ----------
    query : str
        Raw query text.
    synonyms : dict[str, tuple[str, ...]], optional
        Synonym table, by default ``SYNONYMS``.

    Returns
    -------
    list[str]
        The normalized query first, then each distinct variant; empty when
        the query normalizes to nothing.
    """
    normalized = normalize_text(query)
    if not normalized:
        return []
    variants = [normalized]
    for term, alternatives in synonyms.items():
        if term in normalized:
            for alternative in alternatives:
                variant = normalized.replace(term, alternative)
                if variant not in variants:
                    variants.append(variant)
    return variants


def _score_variant(row: IndexRow, variant: str) -> float | None:
    title = normalize_text(row.title)
    if title == variant:
        return EXACT_TITLE_SCORE
    if variant in title:
        return TITLE_SCORE
    if any(variant in normalize_text(creator) for creator in row.creators):
        return CREATOR_SCORE
    if any(variant in normalize_text(subject) for subject in row.subjects):
        return SUBJECT_SCORE
    if row.collection and variant in normalize_text(row.collection):
        return COLLECTION_SCORE

    haystack = normalize_text(
        " ".join([row.title, *row.creators, *row.subjects, *row.genres, row.collection or ""])
    )
    tokens = variant.split()
    if tokens and all(token in haystack for token in tokens):
        return COMBINED_SCORE
    return None


def score_row(row: IndexRow, variants: list[str]) -> float | None:
    """Best score of a row over all query variants, or None if no field matches."""
    scores = [s for s in (_score_variant(row, v) for v in variants) if s is not None]
    return min(scores) if scores else None


def search(rows: list[IndexRow], query: str) -> list[SearchHit]:
    """Rank rows against a keyword query.

    An empty query ranks every row 0 and keeps the given order. Otherwise
    only matching rows are returned, ordered by ascending score then
    ascending title; when nothing matches, every row is returned at
    ``FALLBACK_SCORE`` rather than an empty result.

    Parameters
    ----------
    rows : list[IndexRow]
        Candidate rows in catalog order.
    query : str
        Raw query text.

    Returns
    -------
    list[SearchHit]
        Ranked hits.
    """
    variants = expand_query(query)
    if not variants:
        return [SearchHit(row, 0) for row in rows]

    hits = []
    for row in rows:
        score = score_row(row, variants)
        if score is not None:
            hits.append(SearchHit(row, score))
    if not hits:
        hits = [SearchHit(row, FALLBACK_SCORE) for row in rows]

    return sorted(hits, key=lambda hit: (hit.score, title_sort_key(hit.row.title)))


def apply_filters(rows: list[IndexRow], state: FilterState) -> list[IndexRow]:
    """Keep rows satisfying every active facet constraint.

    Collection, genre and era must match exactly; every required subject
    must be present (AND); the author filter is a normalized substring of
    any creator.
    """
    required = state.required_subjects()
    author = normalize_text(state.author)

    def keep(row: IndexRow) -> bool:
        if state.collection and row.collection != state.collection:
            return False
        if required and not all(subject in row.subjects for subject in required):
            return False
        if author and not any(author in normalize_text(c) for c in row.creators):
            return False
        if state.genre and state.genre not in row.genres:
            return False
        if state.era and era(row.year) != state.era:
            return False
        return True

    return [row for row in rows if keep(row)]


def run_search(rows: list[IndexRow], state: FilterState) -> list[SearchHit]:
    """Filter then rank: the full update step of the search page."""
    return search(apply_filters(rows, state), state.query)
