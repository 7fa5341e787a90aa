"""schema.org ``Book`` metadata embedded in record pages."""

from typing import Any

from waypoint.models import Record

__all__ = ["ENCODING_FORMATS", "build_book_jsonld"]

ENCODING_FORMATS: dict[str, str] = {
    "html": "text/html",
    "pdf": "application/pdf",
    "epub": "application/epub+zip",
}


def build_book_jsonld(record: Record, url: str, download_urls: dict[str, str]) -> dict[str, Any]:
    """Build the JSON-LD document for a record page.

    Parameters
    ----------
    record : Record
        Record being rendered.
    url : str
        URL of the record page as linked from the site.
    download_urls : dict[str, str]
        Resolved download links keyed by format.

    Returns
    -------
    dict[str, Any]
        JSON-LD mapping; absent optional values are omitted.
    """
    doc: dict[str, Any] = {
        "@context": "https://schema.org",
        "@type": "Book",
        "@id": url,
        "url": url,
        "name": record.title,
        "author": [{"@type": "Person", "name": name} for name in record.creators],
        "isAccessibleForFree": True,
        "license": record.rights,
    }
    if record.language:
        doc["inLanguage"] = record.language
    if record.year is not None:
        doc["datePublished"] = str(record.year)
    if record.abstract:
        doc["description"] = record.abstract
    if record.subjects:
        doc["keywords"] = record.subjects

    offers = [
        {
            "@type": "Offer",
            "url": href,
            "itemOffered": {"@type": "DigitalDocument", "encodingFormat": ENCODING_FORMATS[fmt]},
        }
        for fmt, href in download_urls.items()
        if fmt in ENCODING_FORMATS
    ]
    if offers:
        doc["offers"] = offers
    return doc
