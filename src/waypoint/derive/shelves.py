"""Home page groupings: shelves, genre browser and catalog statistics."""

import re
from collections import Counter
from dataclasses import dataclass, field

from waypoint.models import IndexRow

__all__ = [
    "FICTION_GENRES",
    "FICTION_PATTERN",
    "Shelf",
    "GenreGroup",
    "CatalogStats",
    "is_fiction",
    "build_shelves",
    "genre_browser",
    "catalog_stats",
]

FICTION_GENRES: frozenset[str] = frozenset({"Fiction", "Novel", "Romance", "Drama", "Poetry"})
FICTION_PATTERN = re.compile(
    r"\b(fiction|novels?|romances?|drama|poetry|poems?|stories|tales|plays)\b",
    re.IGNORECASE,
)

SHELF_TITLES: dict[str, str] = {
    "fiction": "Stories, drama & verse",
    "nonfiction": "History, thought & belief",
}


@dataclass(frozen=True)
class Shelf:
    """Horizontally scrollable run of rows on the home page."""

    key: str
    title: str
    rows: list[IndexRow] = field(default_factory=list)


@dataclass(frozen=True)
class GenreGroup:
    """One genre of the browser with its total and embedded members."""

    name: str
    count: int
    rows: list[IndexRow] = field(default_factory=list)


@dataclass(frozen=True)
class CatalogStats:
    """Aggregate counts shown in the home page hero.

    Attributes
    ----------
    records : int
        Number of records.
    subjects : int
        Distinct subject headings.
    collections : int
        Distinct non-null collections.
    languages : int
        Distinct non-null language codes.
    min_year : int | None
        Earliest publication year.
    max_year : int | None
        Latest publication year.
    """

    records: int
    subjects: int
    collections: int
    languages: int
    min_year: int | None
    max_year: int | None


def is_fiction(row: IndexRow) -> bool:
    """Bucket a row as fiction from its genres, falling back to subject text."""
    if any(genre in FICTION_GENRES for genre in row.genres):
        return True
    return bool(FICTION_PATTERN.search(" ".join(row.subjects)))


def build_shelves(rows: list[IndexRow], size: int) -> list[Shelf]:
    """Split rows into fiction and non-fiction shelves.

    Parameters
    ----------
    rows : list[IndexRow]
        Rows in catalog order.
    size : int
        Maximum rows per shelf.

    Returns
    -------
    list[Shelf]
        Non-empty shelves, fiction first.
    """
    fiction = [row for row in rows if is_fiction(row)]
    nonfiction = [row for row in rows if not is_fiction(row)]
    shelves = []
    for key, members in (("fiction", fiction), ("nonfiction", nonfiction)):
        if members:
            shelves.append(Shelf(key=key, title=SHELF_TITLES[key], rows=members[:size]))
    return shelves


def genre_browser(rows: list[IndexRow], top_k: int, per_genre: int) -> list[GenreGroup]:
    """Top-K genres by record count, ties broken alphabetically.

    Parameters
    ----------
    rows : list[IndexRow]
        Rows in catalog order.
    top_k : int
        Number of genres to keep.
    per_genre : int
        Maximum member rows embedded per genre.

    Returns
    -------
    list[GenreGroup]
        Groups in display order.
    """
    counts = Counter(genre for row in rows for genre in set(row.genres))
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:top_k]
    return [
        GenreGroup(
            name=name,
            count=count,
            rows=[row for row in rows if name in row.genres][:per_genre],
        )
        for name, count in ranked
    ]


def catalog_stats(rows: list[IndexRow]) -> CatalogStats:
    """Compute aggregate catalog statistics."""
    years = [row.year for row in rows if row.year is not None]
    return CatalogStats(
        records=len(rows),
        subjects=len({subject for row in rows for subject in row.subjects}),
        collections=len({row.collection for row in rows if row.collection}),
        languages=len({row.lang for row in rows if row.lang}),
        min_year=min(years) if years else None,
        max_year=max(years) if years else None,
    )
