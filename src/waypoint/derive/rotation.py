"""Hero spotlight selection and its deterministic rotation order.

The browser rotates the spotlight by shuffling with a seeded linear
congruential generator keyed on the current date; ``seeded_order`` is the
same generator so the order for a given key can be reproduced and tested.
"""

from waypoint.models import IndexRow

__all__ = ["MODULUS", "spotlight", "seeded_order"]

MODULUS = 2147483647


def spotlight(rows: list[IndexRow], size: int) -> list[IndexRow]:
    """First ``size`` rows in catalog order."""
    return rows[:size]


def seeded_order(length: int, key: str) -> list[int]:
    """Fisher-Yates shuffle of ``range(length)`` driven by a string seed.

    Parameters
    ----------
    length : int
        Number of items.
    key : str
        Seed text (the browser uses the ISO date, e.g. "2026-10-17").

    Returns
    -------
    list[int]
        Permutation of ``range(length)``.
    """
    if length <= 0:
        return []
    seed = 0
    for char in key:
        seed = (seed * 31 + ord(char)) % MODULUS
    if seed == 0:
        seed = 1

    indices = list(range(length))
    state = seed
    for i in range(length - 1, 0, -1):
        state = (state * 1103515245 + 12345) % MODULUS
        j = state % (i + 1)
        indices[i], indices[j] = indices[j], indices[i]
    return indices
