"""Base types and utilities for reading record metadata documents.

Two document shapes are accepted: a JSON object per file, or a Markdown
file whose YAML front matter carries the metadata (the body becomes the
abstract when no explicit abstract is given).
"""

import datetime
import json
import re
from pathlib import Path
from typing import Any

import yaml

from waypoint.models import Contributor, Record

SUPPORTED_EXTENSIONS: dict[str, str] = {
    ".json": "json",
    ".md": "markdown",
    ".markdown": "markdown",
}

FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\n(.*?)\n---[ \t]*(?:\n|\Z)", re.DOTALL)
WHOLE_YEAR_RE = re.compile(r"\s*(-?\d{1,4})\s*")
YEAR_IN_TEXT_RE = re.compile(r"(?<!\w)-?\d{3,4}(?!\w)")

# Files the build writes itself; record pages may neither replace them nor
# nest under them.
RESERVED_SITE_PATHS: frozenset[str] = frozenset(
    {
        "index.html",
        "search.html",
        "policies.html",
        "sw.js",
        "search/index.html",
        "search/index.json",
        "policies/index.html",
        "record/index.html",
    }
)
RESERVED_SITE_DIRS: frozenset[str] = frozenset({"assets"})

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "RESERVED_SITE_PATHS",
    "RESERVED_SITE_DIRS",
    "DocumentError",
    "detect_encoding",
    "normalize_line_endings",
    "split_front_matter",
    "parse_document",
    "is_safe_record_id",
    "is_safe_permalink",
    "normalize_permalink",
    "reserved_path_conflict",
    "parse_year",
    "record_id_of",
    "build_record",
]


class DocumentError(ValueError):
    """Raised when a metadata document cannot be parsed at all."""


def detect_encoding(file_bytes: bytes) -> str:
    """Detect encoding of file bytes using deterministic strategy.

    Parameters
    ----------
    file_bytes : bytes
        Complete file content as bytes.

    Returns
    -------
    str
        'utf-8-sig' when a BOM is present, 'utf-8' when the bytes decode,
        'latin-1' otherwise.
    """
    if file_bytes.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"

    try:
        file_bytes.decode("utf-8")
        return "utf-8"
    except UnicodeDecodeError:
        pass

    return "latin-1"


def normalize_line_endings(content: str) -> str:
    """Normalize line endings to LF."""
    content = content.replace("\r\n", "\n")
    return content.replace("\r", "\n")


def split_front_matter(markdown: str) -> tuple[dict[str, Any], str]:
    """Split a Markdown document into front matter metadata and body.

    Parameters
    ----------
    markdown : str
        Full document text with LF line endings.

    Returns
    -------
    tuple[dict[str, Any], str]
        (metadata, body).

    Raises
    ------
    DocumentError
        If the front matter block is missing, is not valid YAML, or does
        not describe a mapping.
    """
    match = FRONT_MATTER_RE.match(markdown)
    if not match:
        raise DocumentError("Missing front matter block")
    try:
        metadata = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        raise DocumentError(f"Invalid front matter: {e}") from e
    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise DocumentError("Front matter is not a mapping")
    body = markdown[match.end() :].strip()
    return metadata, body


def parse_document(content: str, source_format: str) -> tuple[dict[str, Any], str]:
    """Parse decoded document text into a metadata mapping.

    Parameters
    ----------
    content : str
        Decoded document text.
    source_format : str
        'json' or 'markdown'.

    Returns
    -------
    tuple[dict[str, Any], str]
        (metadata, body); body is empty for JSON documents.

    Raises
    ------
    DocumentError
        If the document is malformed.
    """
    if source_format == "markdown":
        return split_front_matter(content)

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise DocumentError(f"Invalid JSON at line {e.lineno}: {e.msg}") from e
    if not isinstance(data, dict):
        raise DocumentError("Top-level JSON value is not an object")
    return data, ""


def _unsafe_segment(segment: str) -> bool:
    return segment in ("", ".", "..", "index.html") or "\\" in segment or "\x00" in segment


def is_safe_record_id(record_id: str) -> bool:
    """True when ``record/<id>/`` stays a single directory below ``record/``."""
    return "/" not in record_id and not _unsafe_segment(record_id)


def is_safe_permalink(value: str) -> bool:
    """True when an explicit permalink names a directory inside the site.

    Leading and trailing slashes are tolerated; empty, ``.`` and ``..``
    segments, backslashes and ``index.html`` segments are not.
    """
    clean = value.strip().strip("/")
    return bool(clean) and not any(_unsafe_segment(segment) for segment in clean.split("/"))


def normalize_permalink(value: Any, record_id: str) -> str:
    """Normalize an explicit permalink or derive the default one.

    Parameters
    ----------
    value : Any
        Explicit permalink from ``identifiers.permalink`` (may be None).
    record_id : str
        Record identifier used for the default scheme.

    Returns
    -------
    str
        Relative path without leading slash and with a trailing slash.
        Missing, blank or unsafe values (see ``is_safe_permalink``) fall
        back to ``record/<id>/``.
    """
    if not isinstance(value, str) or not is_safe_permalink(value):
        return f"record/{record_id}/"
    return value.strip().strip("/") + "/"


def reserved_path_conflict(permalink: str) -> str | None:
    """Return the build-owned path a record permalink would clobber, if any.

    Parameters
    ----------
    permalink : str
        Normalized permalink (trailing slash, no leading slash).

    Returns
    -------
    str | None
        The reserved file or directory hit by ``<permalink>index.html``,
        or None when the page path is free.
    """
    if f"{permalink}index.html" in RESERVED_SITE_PATHS:
        return f"{permalink}index.html"
    segments = permalink.strip("/").split("/")
    if segments[0] in RESERVED_SITE_DIRS:
        return f"{segments[0]}/"
    for end in range(1, len(segments) + 1):
        prefix = "/".join(segments[:end])
        if prefix in RESERVED_SITE_PATHS:
            return prefix
    return None


def parse_year(value: Any) -> int | None:
    """Extract a publication year from a date value.

    Parameters
    ----------
    value : Any
        int, ``datetime.date`` or free text such as "c. 1890" or "-400".

    Returns
    -------
    int | None
        Parsed year, or None when nothing year-like is present. Free text
        yields either the whole string as a signed year ("-400", "73") or
        the first standalone 3-4 digit number ("c. 400"); "12th century"
        has neither.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.year
    if isinstance(value, str):
        whole = WHOLE_YEAR_RE.fullmatch(value)
        if whole:
            return int(whole.group(1))
        match = YEAR_IN_TEXT_RE.search(value)
        if match:
            return int(match.group(0))
    return None


def record_id_of(data: dict[str, Any]) -> str | None:
    """Return the record identifier, accepting ``record_id`` or ``id``."""
    for key in ("record_id", "id"):
        value = data.get(key)
        if value is not None and str(value).strip():
            return str(value).strip()
    return None


def _string_or_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def _string_map(value: Any) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(k): str(v).strip() for k, v in value.items() if v is not None and str(v).strip()}


def _contributors(value: Any) -> list[Contributor]:
    contributors: list[Contributor] = []
    if not isinstance(value, list):
        return contributors
    for item in value:
        if isinstance(item, dict) and item.get("name"):
            contributors.append(Contributor(name=str(item["name"]), role=str(item.get("role") or "")))
        elif isinstance(item, str) and item.strip():
            contributors.append(Contributor(name=item.strip(), role=""))
    return contributors


def build_record(data: dict[str, Any], body: str, source_file: str) -> Record:
    """Build a Record from a validated metadata mapping.

    Required fields are assumed present (see ``validation``); optional
    fields degrade to empty defaults.

    Parameters
    ----------
    data : dict[str, Any]
        Parsed document metadata.
    body : str
        Markdown body, used as abstract fallback.
    source_file : str
        Basename of the source document.

    Returns
    -------
    Record
        Canonical record with derived permalink.
    """
    record_id = record_id_of(data) or ""
    identifiers = data.get("identifiers") if isinstance(data.get("identifiers"), dict) else {}
    abstract = _string_or_none(data.get("abstract")) or _string_or_none(data.get("summary"))

    return Record(
        id=record_id,
        title=str(data.get("title", "")).strip(),
        rights=str(data.get("rights", "")).strip(),
        permalink=normalize_permalink(identifiers.get("permalink"), record_id),
        creators=_string_list(data.get("creators")),
        subjects=_string_list(data.get("subjects")),
        collection=_string_or_none(data.get("collection")),
        genres=_string_list(data.get("genres")),
        year=parse_year(data.get("date")),
        date_raw=data.get("date"),
        language=_string_or_none(data.get("language")),
        abstract=abstract or (body or None),
        quality_grade=_string_or_none(data.get("quality_grade")),
        source_url=_string_or_none(data.get("source_url")),
        downloads=_string_map(data.get("downloads")),
        contributors=_contributors(data.get("contributors")),
        citation=_string_map(data.get("citation")),
        type=_string_or_none(data.get("type")),
        source_file=source_file,
    )
