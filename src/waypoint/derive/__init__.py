"""Derivation layer: pure functions computing fields and groupings.

- periods: publication year -> era label
- vocabulary: explicit + subject-inferred genre set
- scoring: relatedness score and top-N related rows
- shelves: fiction/non-fiction shelves, genre browser, catalog stats
- rotation: hero selection and seeded rotation order
"""

from waypoint.derive.periods import ERAS, era
from waypoint.derive.rotation import seeded_order, spotlight
from waypoint.derive.scoring import RELATED_LIMIT, related, relatedness
from waypoint.derive.shelves import (
    CatalogStats,
    GenreGroup,
    Shelf,
    build_shelves,
    catalog_stats,
    genre_browser,
    is_fiction,
)
from waypoint.derive.vocabulary import GENRE_HINTS, derive_genres, genres, infer_genres

__all__ = [
    "ERAS",
    "GENRE_HINTS",
    "RELATED_LIMIT",
    "CatalogStats",
    "GenreGroup",
    "Shelf",
    "build_shelves",
    "catalog_stats",
    "derive_genres",
    "era",
    "genre_browser",
    "genres",
    "infer_genres",
    "is_fiction",
    "related",
    "relatedness",
    "seeded_order",
    "spotlight",
]
