"""Search filter state, its URL codec and the action reducer.

The browser holds exactly one ``FilterState``. Every user action produces
a new value through ``dispatch`` and triggers one re-render; the value is
mirrored to the page URL with ``state_to_query_string`` (history replace)
and restored with ``state_from_query_string``.
"""

from dataclasses import dataclass, replace
from urllib.parse import parse_qs, urlencode

__all__ = [
    "FILTER_FIELDS",
    "URL_PARAMS",
    "FilterState",
    "state_from_query_string",
    "state_to_query_string",
    "dispatch",
]

# Single-valued state fields that map one-to-one onto an action name
FILTER_FIELDS: tuple[str, ...] = ("query", "collection", "subject", "genre", "author", "era")

# State field -> URL parameter
URL_PARAMS: dict[str, str] = {
    "query": "q",
    "collection": "collection",
    "subject": "subject",
    "genre": "genre",
    "author": "author",
    "era": "era",
}


@dataclass(frozen=True)
class FilterState:
    """Serializable search state.

    Attributes
    ----------
    query : str
        Free-text keyword query.
    collection : str
        Exact collection filter.
    subject : str
        Subject chosen in the subject selector.
    genre : str
        Exact genre filter.
    author : str
        Creator substring filter.
    era : str
        Era label filter.
    selected_subjects : tuple[str, ...]
        Additional subjects that must all be present.
    """

    query: str = ""
    collection: str = ""
    subject: str = ""
    genre: str = ""
    author: str = ""
    era: str = ""
    selected_subjects: tuple[str, ...] = ()

    def required_subjects(self) -> list[str]:
        """Every subject a row must carry (AND semantics), without duplicates."""
        required: list[str] = []
        for subject in (self.subject, *self.selected_subjects):
            if subject and subject not in required:
                required.append(subject)
        return required

    def is_empty(self) -> bool:
        """True when no filter or query is active."""
        return self == FilterState()


def state_from_query_string(query_string: str) -> FilterState:
    """Decode a URL query string into a filter state.

    ``subject`` is repeatable: its first value fills the subject selector,
    the rest become ``selected_subjects``.

    Parameters
    ----------
    query_string : str
        Query string with or without the leading "?".

    Returns
    -------
    FilterState
        Decoded state; unknown parameters are ignored.
    """
    params = parse_qs(query_string.lstrip("?"), keep_blank_values=False)

    def first(name: str) -> str:
        values = params.get(name) or [""]
        return values[0].strip()

    subjects: list[str] = []
    for value in params.get("subject", []):
        value = value.strip()
        if value and value not in subjects:
            subjects.append(value)

    return FilterState(
        query=first("q"),
        collection=first("collection"),
        subject=subjects[0] if subjects else "",
        genre=first("genre"),
        author=first("author"),
        era=first("era"),
        selected_subjects=tuple(subjects[1:]),
    )


def state_to_query_string(state: FilterState) -> str:
    """Encode a filter state as a URL query string (without "?").

    Empty fields are omitted, so the empty state encodes to "".
    """
    pairs: list[tuple[str, str]] = []
    for field_name in ("query", "collection"):
        value = getattr(state, field_name)
        if value:
            pairs.append((URL_PARAMS[field_name], value))
    pairs.extend(("subject", subject) for subject in state.required_subjects())
    for field_name in ("genre", "author", "era"):
        value = getattr(state, field_name)
        if value:
            pairs.append((URL_PARAMS[field_name], value))
    return urlencode(pairs)


def dispatch(state: FilterState, action: str, value: str = "") -> FilterState:
    """Apply one user action to a state, returning the new state.

    Parameters
    ----------
    state : FilterState
        Current state.
    action : str
        One of ``FILTER_FIELDS`` (set that field), "toggle_subject",
        "remove" (clear the field named by ``value``, or one selected
        subject given as "subject:<name>"), or "clear".
    value : str, optional
        Action argument.

    Returns
    -------
    FilterState
        New state.

    Raises
    ------
    ValueError
        If the action or the field to remove is unknown.
    """
    if action in FILTER_FIELDS:
        return replace(state, **{action: value.strip()})

    if action == "toggle_subject":
        if value in state.selected_subjects:
            return replace(
                state, selected_subjects=tuple(s for s in state.selected_subjects if s != value)
            )
        if not value or value == state.subject:
            return state
        return replace(state, selected_subjects=(*state.selected_subjects, value))

    if action == "remove":
        if value.startswith("subject:"):
            name = value.split(":", 1)[1]
            if state.subject == name:
                return replace(state, subject="")
            return replace(
                state, selected_subjects=tuple(s for s in state.selected_subjects if s != name)
            )
        if value not in FILTER_FIELDS:
            raise ValueError(f"Unknown filter field: {value!r}")
        return replace(state, **{value: ""})

    if action == "clear":
        return FilterState()

    raise ValueError(f"Unknown action: {action!r}")
