"""Catalog record data models for waypoint.

This module defines the canonical in-memory form of a catalog item and the
narrow projection of it that is shipped to the browser. Every downstream
module consumes records in one of these two shapes.
"""

from dataclasses import asdict, dataclass, field
from typing import Any

# Download formats in display order
DOWNLOAD_FORMATS: tuple[str, ...] = ("html", "epub", "pdf")


@dataclass(frozen=True)
class Contributor:
    """Named contributor to an edition.

    Attributes
    ----------
    name : str
        Display name.
    role : str
        Role label (e.g., 'translator', 'editor').
    """

    name: str
    role: str

    def label(self) -> str:
        """Return the "Name (role)" form used in page metadata."""
        return f"{self.name} ({self.role})" if self.role else self.name


@dataclass(frozen=True)
class Record:
    """Canonical catalog record.

    Attributes
    ----------
    id : str
        Stable record identifier, unique across a loaded set.
    title : str
        Display title.
    creators : list[str]
        Creator names in source order.
    subjects : list[str]
        Subject headings.
    collection : str | None
        Collection label.
    genres : list[str]
        Explicit genre labels (inferred genres are derived, not stored).
    year : int | None
        Publication year, None when the date could not be parsed.
    date_raw : Any
        Date value exactly as it appeared in the source document.
    language : str | None
        Language code, passed through literally.
    abstract : str | None
        Abstract or summary text.
    quality_grade : str | None
        Editorial quality grade (A–C).
    rights : str
        Rights statement.
    source_url : str | None
        URL of the source scan or edition.
    downloads : dict[str, str]
        Relative download paths keyed by format (html, epub, pdf).
    contributors : list[Contributor]
        Contributors with roles.
    citation : dict[str, str]
        Citation strings keyed by citation style.
    type : str | None
        Resource type (e.g., 'book', 'treatise').
    permalink : str
        Derived trailing-slash relative path of the detail page.
    source_file : str
        Basename of the metadata document the record was read from.
    """

    id: str
    title: str
    rights: str
    permalink: str
    creators: list[str] = field(default_factory=list)
    subjects: list[str] = field(default_factory=list)
    collection: str | None = None
    genres: list[str] = field(default_factory=list)
    year: int | None = None
    date_raw: Any = None
    language: str | None = None
    abstract: str | None = None
    quality_grade: str | None = None
    source_url: str | None = None
    downloads: dict[str, str] = field(default_factory=dict)
    contributors: list[Contributor] = field(default_factory=list)
    citation: dict[str, str] = field(default_factory=dict)
    type: str | None = None
    source_file: str = ""

    def available_downloads(self) -> list[tuple[str, str]]:
        """List (format, path) pairs for formats actually present.

        Returns
        -------
        list[tuple[str, str]]
            Known formats first in display order, then any extra formats
            in alphabetical order.
        """
        present = [(fmt, self.downloads[fmt]) for fmt in DOWNLOAD_FORMATS if self.downloads.get(fmt)]
        extras = sorted(
            (fmt, path) for fmt, path in self.downloads.items() if fmt not in DOWNLOAD_FORMATS and path
        )
        return present + extras

    def to_dict(self) -> dict[str, Any]:
        """Convert record to dictionary for JSON serialization."""
        data = asdict(self)
        if data["date_raw"] is not None and not isinstance(data["date_raw"], (int, str)):
            data["date_raw"] = str(data["date_raw"])
        return data


@dataclass(frozen=True)
class IndexRow:
    """Search index row: the only form of the catalog shipped to the browser.

    Attributes
    ----------
    id : str
        Record identifier.
    title : str
        Display title.
    creators : list[str]
        Creator names.
    subjects : list[str]
        Subject headings.
    genres : list[str]
        Derived genre set.
    collection : str | None
        Collection label.
    year : int | None
        Publication year.
    lang : str | None
        Language code.
    quality : str | None
        Quality grade.
    permalink : str
        Relative path of the detail page.
    """

    id: str
    title: str
    creators: list[str]
    subjects: list[str]
    genres: list[str]
    collection: str | None
    year: int | None
    lang: str | None
    quality: str | None
    permalink: str

    def to_dict(self) -> dict[str, Any]:
        """Convert row to the wire-format dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "IndexRow":
        """Rebuild a row from its wire form, tolerating absent optional fields.

        Parameters
        ----------
        data : dict[str, Any]
            One object of the published index array.

        Returns
        -------
        IndexRow
            Reconstructed row.
        """
        record_id = str(data.get("id", ""))
        return cls(
            id=record_id,
            title=data.get("title") or "",
            creators=list(data.get("creators") or []),
            subjects=list(data.get("subjects") or []),
            genres=list(data.get("genres") or []),
            collection=data.get("collection"),
            year=data.get("year"),
            lang=data.get("lang"),
            quality=data.get("quality"),
            permalink=data.get("permalink") or f"record/{record_id}/",
        )
