"""HTML page rendering with Jinja2 templates."""

from waypoint.render.environment import base_path_for, with_base
from waypoint.render.jsonld import build_book_jsonld
from waypoint.render.pages import (
    SiteContext,
    page_path_for,
    render_home,
    render_policies,
    render_record,
    render_redirect,
    render_search,
)

__all__ = [
    "SiteContext",
    "base_path_for",
    "build_book_jsonld",
    "page_path_for",
    "render_home",
    "render_policies",
    "render_record",
    "render_redirect",
    "render_search",
    "with_base",
]
