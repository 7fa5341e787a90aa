"""Era classification from publication year."""

__all__ = ["ERAS", "ERA_BOUNDARIES", "era"]

# Inclusive upper bound -> label, in ascending order
ERA_BOUNDARIES: tuple[tuple[int, str], ...] = (
    (500, "Ancient"),
    (1500, "Medieval"),
    (1650, "Renaissance"),
    (1800, "Early Modern"),
    (1945, "Modern"),
)

ERAS: tuple[str, ...] = tuple(label for _, label in ERA_BOUNDARIES) + ("Contemporary",)


def era(year: int | None) -> str | None:
    """Classify a publication year into one of ``ERAS``.

    Parameters
    ----------
    year : int | None
        Publication year; None when absent or unparseable.

    Returns
    -------
    str | None
        Era label, or None for a missing year.
    """
    if year is None or isinstance(year, bool):
        return None
    for upper, label in ERA_BOUNDARIES:
        if year <= upper:
            return label
    return ERAS[-1]
