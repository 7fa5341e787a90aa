"""Relatedness scoring between catalog rows."""

from collections.abc import Iterable
from typing import Any

from waypoint.utils import title_sort_key

__all__ = [
    "SUBJECT_WEIGHT",
    "GENRE_WEIGHT",
    "COLLECTION_WEIGHT",
    "RELATED_LIMIT",
    "relatedness",
    "related",
]

SUBJECT_WEIGHT = 3
GENRE_WEIGHT = 4
COLLECTION_WEIGHT = 2
RELATED_LIMIT = 4


def _values(item: Any, name: str) -> set[str]:
    if isinstance(item, dict):
        return set(item.get(name) or [])
    return set(getattr(item, name, None) or [])


def _collection(item: Any) -> str | None:
    if isinstance(item, dict):
        return item.get("collection")
    return getattr(item, "collection", None)


def relatedness(a: Any, b: Any) -> int:
    """Score how related two rows are.

    +3 per shared subject, +4 per shared derived genre, +2 when both share
    the same non-null collection. Symmetric in its arguments.

    Parameters
    ----------
    a, b : IndexRow | dict
        Rows (or related payloads) carrying subjects, genres, collection.

    Returns
    -------
    int
        Non-negative score.
    """
    score = SUBJECT_WEIGHT * len(_values(a, "subjects") & _values(b, "subjects"))
    score += GENRE_WEIGHT * len(_values(a, "genres") & _values(b, "genres"))
    collection = _collection(a)
    if collection and collection == _collection(b):
        score += COLLECTION_WEIGHT
    return score


def related(current: Any, candidates: Iterable[Any], limit: int = RELATED_LIMIT) -> list[Any]:
    """Top related rows for ``current``.

    Excludes ``current`` itself (by id) and zero scores; orders by
    descending score, then ascending title.
    """
    current_id = current.get("id") if isinstance(current, dict) else getattr(current, "id", None)
    scored = []
    for candidate in candidates:
        if getattr(candidate, "id", None) == current_id:
            continue
        score = relatedness(current, candidate)
        if score > 0:
            scored.append((score, candidate))
    scored.sort(key=lambda pair: (-pair[0], title_sort_key(pair[1].title)))
    return [candidate for _, candidate in scored[:limit]]
