"""Bundled JSON Schemas for published artifacts."""

import json
from functools import cache
from importlib import resources
from typing import Any

__all__ = ["load_schema"]


@cache
def load_schema(name: str) -> dict[str, Any]:
    """Load a bundled schema by file stem (e.g. "search_index").

    Raises
    ------
    FileNotFoundError
        If no schema with that name is bundled.
    """
    resource = resources.files(__package__).joinpath(f"{name}.schema.json")
    if not resource.is_file():
        raise FileNotFoundError(f"Schema not bundled: {name}")
    return json.loads(resource.read_text(encoding="utf-8"))
