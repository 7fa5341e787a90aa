"""Content digests for written site files.

Every artifact the build writes is hashed in memory, so the digests of two
builds can be compared without reading the output trees back.
"""

import hashlib

__all__ = ["format_sha256", "calculate_bytes_digest"]


def format_sha256(hex_digest: str) -> str:
    """Prefix a hex digest with "sha256:"."""
    return f"sha256:{hex_digest}"


def calculate_bytes_digest(data: bytes) -> str:
    """SHA-256 of a file's bytes before they are written.

    Parameters
    ----------
    data : bytes
        Encoded file content.

    Returns
    -------
    str
        Digest in the form "sha256:<hex>".
    """
    return format_sha256(hashlib.sha256(data).hexdigest())
