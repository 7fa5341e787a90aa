"""Facet option lists and counts.

Options are hydrated once from the full index, not the filtered subset, so
selectors stay stable while filters are applied.
"""

from collections import Counter
from dataclasses import dataclass, field

from waypoint.derive import ERAS, era
from waypoint.models import IndexRow
from waypoint.utils import title_sort_key

__all__ = ["Facets", "hydrate_facets", "compute_facet_counts"]


@dataclass(frozen=True)
class Facets:
    """Selector options for the search page."""

    collections: list[str] = field(default_factory=list)
    subjects: list[str] = field(default_factory=list)
    genres: list[str] = field(default_factory=list)
    eras: list[str] = field(default_factory=list)


def _unique_sorted(values) -> list[str]:
    return sorted({v for v in values if v}, key=lambda v: (title_sort_key(v), v))


def hydrate_facets(rows: list[IndexRow]) -> Facets:
    """Derive selector options from the full index.

    Eras follow chronological order and only list eras that occur.
    """
    present_eras = {era(row.year) for row in rows}
    return Facets(
        collections=_unique_sorted(row.collection for row in rows),
        subjects=_unique_sorted(s for row in rows for s in row.subjects),
        genres=_unique_sorted(g for row in rows for g in row.genres),
        eras=[label for label in ERAS if label in present_eras],
    )


def compute_facet_counts(rows: list[IndexRow]) -> dict[str, dict[str, int]]:
    """Count rows per subject, collection, language and quality grade."""
    counts: dict[str, Counter[str]] = {
        "subjects": Counter(),
        "collection": Counter(),
        "language": Counter(),
        "quality": Counter(),
    }
    for row in rows:
        counts["subjects"].update(set(row.subjects))
        if row.collection:
            counts["collection"][row.collection] += 1
        if row.lang:
            counts["language"][row.lang] += 1
        if row.quality:
            counts["quality"][row.quality] += 1
    return {facet: dict(sorted(counter.items())) for facet, counter in counts.items()}
