"""
Query building logic for the core module.

Turns an abstract Query into the JSON body expected by CKAN's datastore_search action.
"""

from .models import Filter, Query, SortField

TERM_FILTER = "term"
DEFAULT_LIMIT = 10


def build_filters(filters: list[Filter]) -> dict:
    # only term filters are supported by datastore_search, the others are dropped
    # a field filtered twice keeps the last term
    return {f.field: f.term for f in filters if f.type == TERM_FILTER}


def build_sort(sort: list[SortField]) -> str | None:
    if not sort:
        return None
    return ",".join(f"{s.field} {s.order or ''}" for s in sort)


def to_remote_request(query: Query | dict, resource_id: str) -> dict:
    """
    Build a datastore_search request body for `resource_id`.

    >>> to_remote_request(Query(text="cat"), "R1")
    {'resource_id': 'R1', 'q': 'cat', 'filters': {}, 'limit': 10, 'offset': 0}
    """
    if isinstance(query, dict):
        query = Query.from_dict(query)
    data = {
        "resource_id": resource_id,
        "q": query.text,
        "filters": build_filters(query.filters),
        "limit": query.page_size or DEFAULT_LIMIT,
        "offset": query.page_offset or 0,
    }
    sort = build_sort(query.sort)
    if sort is not None:
        data["sort"] = sort
    return data
