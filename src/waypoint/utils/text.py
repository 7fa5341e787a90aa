"""Text normalization helpers shared by the loader, derivation and search."""

import re
import unicodedata

__all__ = ["strip_accents", "normalize_text", "title_sort_key", "safe_slug"]

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def strip_accents(text: str) -> str:
    """Remove diacritical marks for cross-locale matching.

    Parameters
    ----------
    text : str
        Input text with potential diacritics.

    Returns
    -------
    str
        Text with diacritical marks removed.
    """
    nfd = unicodedata.normalize("NFD", text)
    stripped = "".join(c for c in nfd if unicodedata.category(c) != "Mn")
    return unicodedata.normalize("NFC", stripped)


def normalize_text(text: str | None) -> str:
    """Lowercase, strip diacritics and collapse whitespace.

    This is the normalization applied to both queries and record fields
    before any substring comparison.
    """
    if not text:
        return ""
    text = strip_accents(str(text)).lower()
    return " ".join(text.split())


def title_sort_key(title: str | None) -> str:
    """Locale-neutral sort key for titles."""
    return strip_accents(title or "").casefold()


def safe_slug(value: str) -> str:
    """Reduce a value to a lowercase, hyphen-separated DOM-safe token."""
    return _SLUG_RE.sub("-", strip_accents(value).lower()).strip("-")
