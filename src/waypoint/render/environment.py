"""Jinja2 environment and template filters shared by every page."""

import re
from functools import cache

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

from waypoint.models import IndexRow
from waypoint.utils import safe_slug

__all__ = ["NAV_LINKS", "with_base", "base_path_for", "row_meta", "get_environment"]

NAV_LINKS: tuple[tuple[str, str], ...] = (
    ("index.html", "Home"),
    ("search/", "Search"),
    ("policies.html", "Policies"),
)

_ABSOLUTE_RE = re.compile(r"^[a-z][a-z0-9+.-]*:", re.IGNORECASE)


def with_base(target: str | None, base_path: str) -> str | None:
    """Prefix a site-relative target with the page's base path.

    Absolute URLs, protocol-relative URLs and fragments are returned
    unchanged; leading slashes are dropped so every link stays relative.
    """
    if not target:
        return target
    if _ABSOLUTE_RE.match(target) or target.startswith("//") or target.startswith("#"):
        return target
    return f"{base_path}{target.lstrip('/')}"


def base_path_for(page_path: str) -> str:
    """Relative prefix from a page back to the site root.

    Parameters
    ----------
    page_path : str
        Output path of the page relative to the site root, e.g.
        "record/rb-1/index.html".

    Returns
    -------
    str
        "" for top-level pages, otherwise "../" per directory level.
    """
    return "../" * page_path.count("/")


def row_meta(row: IndexRow) -> str:
    """Card byline: creators joined by commas, then the year."""
    parts = []
    if row.creators:
        parts.append(", ".join(row.creators))
    if row.year is not None:
        parts.append(str(row.year))
    return " · ".join(parts)


@cache
def get_environment() -> Environment:
    """Build the shared template environment (autoescaped HTML)."""
    env = Environment(
        loader=PackageLoader("waypoint", "render/templates"),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["with_base"] = with_base
    env.filters["slug"] = safe_slug
    env.filters["row_meta"] = row_meta
    return env
