"""Genre derivation from explicit labels and subject keywords."""

from collections.abc import Iterable
from typing import Any

__all__ = ["GENRE_HINTS", "infer_genres", "derive_genres", "genres"]

# Matched case-insensitively as substrings of each subject; the hint is the label
GENRE_HINTS: tuple[str, ...] = (
    "Fiction",
    "Novel",
    "Romance",
    "Drama",
    "Poetry",
    "Biography",
    "Memoir",
    "Theology",
    "History",
    "Philosophy",
    "Autobiography",
)


def infer_genres(subjects: Iterable[str], hints: tuple[str, ...] = GENRE_HINTS) -> list[str]:
    """Infer genre labels from subject headings.

    Parameters
    ----------
    subjects : Iterable[str]
        Subject headings.
    hints : tuple[str, ...], optional
        Hint vocabulary, by default ``GENRE_HINTS``.

    Returns
    -------
    list[str]
        Labels in order of first match (subject order, then hint order).
    """
    found: list[str] = []
    for subject in subjects:
        lowered = subject.lower()
        for hint in hints:
            if hint.lower() in lowered and hint not in found:
                found.append(hint)
    return found


def derive_genres(
    explicit: Iterable[str],
    subjects: Iterable[str],
    record_type: str | None = None,
) -> list[str]:
    """Union explicit and inferred genres, falling back to the record type.

    Parameters
    ----------
    explicit : Iterable[str]
        Explicit genre labels.
    subjects : Iterable[str]
        Subject headings to infer from.
    record_type : str | None, optional
        Resource type used when no genre is found.

    Returns
    -------
    list[str]
        Ordered set of genre labels.
    """
    result: list[str] = []
    for label in [*explicit, *infer_genres(subjects)]:
        if label and label not in result:
            result.append(label)
    if not result and record_type:
        result.append(record_type[:1].upper() + record_type[1:])
    return result


def genres(item: Any) -> list[str]:
    """Derived genre set of a Record or an IndexRow.

    Re-deriving from an index row is a fixed point: the row already holds
    the derived set, and inference only re-adds labels it contains.
    """
    return derive_genres(
        getattr(item, "genres", None) or [],
        getattr(item, "subjects", None) or [],
        getattr(item, "type", None),
    )
