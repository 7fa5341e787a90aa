"""Page rendering: pure functions from catalog data to HTML strings.

Each ``render_*`` function returns the complete document for one page;
``page_path_for`` gives the output path it belongs at. Nothing here
touches the filesystem.
"""

from dataclasses import dataclass
from typing import Any

from waypoint.derive import (
    RELATED_LIMIT,
    build_shelves,
    catalog_stats,
    era,
    genre_browser,
    related,
    spotlight,
)
from waypoint.models import IndexRow, Record
from waypoint.render.environment import NAV_LINKS, base_path_for, get_environment, with_base
from waypoint.render.jsonld import build_book_jsonld
from waypoint.search.facets import compute_facet_counts

__all__ = [
    "SiteContext",
    "DOWNLOAD_LABELS",
    "SPOTLIGHT_SLICE",
    "page_path_for",
    "render_home",
    "render_record",
    "render_search",
    "render_policies",
    "render_redirect",
]

DOWNLOAD_LABELS: dict[str, str] = {
    "html": "Read Online",
    "epub": "Download EPUB",
    "pdf": "Download PDF",
}

# Spotlight cards visible at once; the client rotates through the rest
SPOTLIGHT_SLICE = 4

HOME_DESCRIPTION = "A pre-built static library site with dependable metadata and multi-format downloads."
SEARCH_DESCRIPTION = "Search open-access records by keyword, author, subject, collection, genre, and era."
POLICIES_DESCRIPTION = "Rights, preservation, and acquisition policies."


@dataclass(frozen=True)
class SiteContext:
    """Values shared by every page of one build.

    Attributes
    ----------
    site_name : str
        Name shown in the header, titles and footer.
    generated_at : str
        Footer generation timestamp.
    copyright_year : int
        Year printed in the footer.
    """

    site_name: str
    generated_at: str
    copyright_year: int


def page_path_for(kind: str, record: Record | None = None) -> str:
    """Output path (relative to the site root) of a page.

    Parameters
    ----------
    kind : str
        'home', 'record', 'search' or 'policies'.
    record : Record | None, optional
        Required for 'record' pages.

    Raises
    ------
    ValueError
        If the kind is unknown or a record page lacks its record.
    """
    if kind == "home":
        return "index.html"
    if kind == "search":
        return "search/index.html"
    if kind == "policies":
        return "policies.html"
    if kind == "record":
        if record is None:
            raise ValueError("record pages need a record")
        permalink = record.permalink or f"record/{record.id}/"
        return f"{permalink}index.html"
    raise ValueError(f"Unknown page kind: {kind!r}")


def _base_context(site: SiteContext, page_path: str, description: str, active_nav: str) -> dict[str, Any]:
    return {
        "site_name": site.site_name,
        "generated_at": site.generated_at,
        "copyright_year": site.copyright_year,
        "base_path": base_path_for(page_path),
        "description": description,
        "nav_links": NAV_LINKS,
        "active_nav": active_nav,
    }


def _card_payload(row: IndexRow, abstracts: dict[str, str]) -> dict[str, Any]:
    payload = row.to_dict()
    if abstracts.get(row.id):
        payload["abstract"] = abstracts[row.id]
    return payload


def render_home(
    rows: list[IndexRow],
    site: SiteContext,
    abstracts: dict[str, str] | None = None,
    spotlight_size: int = 8,
    shelf_size: int = 12,
    genre_top_k: int = 6,
    genre_members: int = 12,
) -> str:
    """Render the home page.

    Parameters
    ----------
    rows : list[IndexRow]
        Index rows in catalog order.
    site : SiteContext
        Shared page values.
    abstracts : dict[str, str] | None, optional
        Abstract text keyed by record id, shown on card backs.
    spotlight_size : int, optional
        Rows embedded for hero rotation.
    shelf_size : int, optional
        Maximum rows per shelf.
    genre_top_k : int, optional
        Genres shown in the browser.
    genre_members : int, optional
        Rows embedded per genre.

    Returns
    -------
    str
        HTML document.
    """
    abstracts = abstracts or {}
    featured = spotlight(rows, spotlight_size)
    groups = genre_browser(rows, genre_top_k, genre_members)
    facet_counts = compute_facet_counts(rows)

    context = _base_context(site, page_path_for("home"), HOME_DESCRIPTION, "Home")
    context.update(
        stats=catalog_stats(rows),
        language_counts=facet_counts["language"],
        quality_counts=facet_counts["quality"],
        spotlight=featured,
        spotlight_slice=SPOTLIGHT_SLICE,
        spotlight_payload=[_card_payload(row, abstracts) for row in featured],
        shelves=build_shelves(rows, shelf_size),
        genre_groups=groups,
        group_payloads={g.name: [row.to_dict() for row in g.rows] for g in groups},
        abstracts=abstracts,
    )
    return get_environment().get_template("home.html").render(context)


def _metadata_rows(record: Record, era_label: str | None) -> list[tuple[str, str, str | None]]:
    year = str(record.year) if record.year is not None else (str(record.date_raw or "") or "—")
    year_label = f"{year} ({era_label})" if era_label else year
    return [
        ("Year", year_label, None),
        ("Language", record.language or "—", None),
        ("Collection", record.collection or "—", None),
        ("Type", record.type or "—", None),
        ("Rights", record.rights or "—", None),
        ("Source", record.source_url or "—", record.source_url),
    ]


def render_record(
    record: Record,
    row: IndexRow,
    index_rows: list[IndexRow],
    site: SiteContext,
    related_limit: int = RELATED_LIMIT,
) -> str:
    """Render one record detail page.

    Parameters
    ----------
    record : Record
        Record to render.
    row : IndexRow
        Its index row (carries the derived genres).
    index_rows : list[IndexRow]
        Full index, used for the pre-rendered related panel.
    site : SiteContext
        Shared page values.
    related_limit : int, optional
        Maximum related titles.

    Returns
    -------
    str
        HTML document.
    """
    page_path = page_path_for("record", record)
    base_path = base_path_for(page_path)
    description = (record.abstract or record.title)[:300]

    download_urls = {fmt: with_base(href, base_path) for fmt, href in record.available_downloads()}
    downloads = [
        (fmt, DOWNLOAD_LABELS.get(fmt, fmt.upper()), href) for fmt, href in download_urls.items()
    ]
    contributors = ", ".join(c.label() for c in record.contributors)
    byline_parts = [", ".join(record.creators), contributors]
    if record.year is not None:
        byline_parts.append(str(record.year))

    context = _base_context(site, page_path, description, "")
    context.update(
        record=record,
        row=row,
        byline=" · ".join(part for part in byline_parts if part),
        downloads=downloads,
        metadata_rows=_metadata_rows(record, era(record.year)),
        related=related(row, index_rows, limit=related_limit),
        related_payload={
            "id": row.id,
            "subjects": row.subjects,
            "genres": row.genres,
            "collection": row.collection,
        },
        reader_src=download_urls.get("html"),
        jsonld=build_book_jsonld(record, with_base(record.permalink, base_path), download_urls),
    )
    return get_environment().get_template("record.html").render(context)


def render_search(site: SiteContext) -> str:
    """Render the search shell; results are produced in the browser."""
    context = _base_context(site, page_path_for("search"), SEARCH_DESCRIPTION, "Search")
    return get_environment().get_template("search.html").render(context)


def render_policies(site: SiteContext) -> str:
    """Render the static policies page."""
    context = _base_context(site, page_path_for("policies"), POLICIES_DESCRIPTION, "Policies")
    return get_environment().get_template("policies.html").render(context)


def render_redirect(target: str) -> str:
    """Render a meta-refresh stub pointing at ``target``."""
    return get_environment().get_template("redirect.html").render(target=target)
