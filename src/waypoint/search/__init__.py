"""Search and facet engine over the published index.

This is the reference implementation of the rules the browser applies in
``assets/js/search.js``: filter state and URL codec, keyword ranking with
synonym expansion, AND-semantics facet filters, and facet hydration.
"""

from waypoint.search.facets import Facets, compute_facet_counts, hydrate_facets
from waypoint.search.ranking import (
    FALLBACK_SCORE,
    SYNONYMS,
    SearchHit,
    apply_filters,
    expand_query,
    run_search,
    score_row,
    search,
)
from waypoint.search.state import (
    FilterState,
    dispatch,
    state_from_query_string,
    state_to_query_string,
)

__all__ = [
    "FALLBACK_SCORE",
    "SYNONYMS",
    "Facets",
    "FilterState",
    "SearchHit",
    "apply_filters",
    "compute_facet_counts",
    "dispatch",
    "expand_query",
    "hydrate_facets",
    "run_search",
    "score_row",
    "search",
    "state_from_query_string",
    "state_to_query_string",
]
