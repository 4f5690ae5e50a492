"""
Resource-related request handlers.
"""

from aiohttp import web

from ckan_datastore import config
from ckan_datastore.backend import CkanBackend
from ckan_datastore.core.exceptions import (
    InvalidURL,
    MalformedResponse,
    QueryException,
    TransportError,
)
from ckan_datastore.core.models import Dataset
from ckan_datastore.utils import build_link_with_page, build_query, url_for


def _get_backend(request) -> CkanBackend:
    """Get a CkanBackend on the app's session and endpoint."""
    return CkanBackend(request.app["csession"], request.app["endpoint"])


def _dataset(request) -> Dataset:
    return Dataset(id=request.match_info["rid"], endpoint=request.app["endpoint"])


def raise_query_exception(e: Exception):
    """Turn a ckan_datastore error into the matching HTTP error."""
    if isinstance(e, TransportError):
        # no status means the CKAN instance could not be reached at all
        status = e.status if e.status and e.status >= 400 else 502
        raise QueryException(status, None, "CKAN error", e.message)
    if isinstance(e, MalformedResponse):
        raise QueryException(502, None, "Malformed CKAN response", str(e))
    if isinstance(e, InvalidURL):
        raise QueryException(400, None, "Invalid resource", str(e))
    raise e


def build_next_page(page_size: int, offset: int, total: int, default_next: str) -> str | None:
    """Build next page URL for pagination."""
    return default_next if page_size + offset < total else None


async def handle_resource_list(request):
    """Handle resource listing requests."""
    try:
        result = await _get_backend(request).list_resources()
    except (TransportError, MalformedResponse) as e:
        raise_query_exception(e)
    return web.json_response(result.get("records", []) if result else [])


async def handle_resource_meta(request):
    """Handle resource fields requests."""
    resource_id = request.match_info["rid"]
    try:
        resource = await _get_backend(request).fetch(_dataset(request))
    except (TransportError, MalformedResponse, InvalidURL) as e:
        raise_query_exception(e)
    return web.json_response(
        {
            "fields": resource["fields"],
            "links": [
                {
                    "href": url_for(request, "data", rid=resource_id, _external=True),
                    "type": "GET",
                    "rel": "data",
                },
            ],
        }
    )


async def handle_resource_data(request):
    """Handle resource data requests."""
    resource_id = request.match_info["rid"]
    raw_query_string = request.rel_url.raw_query_string
    query_string = raw_query_string.split("&") if raw_query_string else []
    try:
        page = int(request.query.get("page", "1"))
        page_size = int(request.query.get("page_size", config.PAGE_SIZE_DEFAULT))
        query = build_query(query_string, page, page_size)
    except ValueError as e:
        raise QueryException(400, None, "Invalid query string", f"Malformed query: {e}")

    try:
        result = await _get_backend(request).query(query, _dataset(request))
    except (TransportError, MalformedResponse, InvalidURL) as e:
        raise_query_exception(e)

    next = build_link_with_page(request, query_string, page + 1, query.page_size)
    prev = build_link_with_page(request, query_string, page - 1, query.page_size)
    body = {
        "data": result.hits,
        "fields": result.fields,
        "links": {
            "meta": url_for(request, "meta", rid=resource_id, _external=True),
            "next": build_next_page(
                page_size=query.page_size,
                offset=query.page_offset,
                total=result.total,
                default_next=next,
            ),
            "prev": prev if page > 1 else None,
        },
        "meta": {"page": page, "page_size": query.page_size, "total": result.total},
    }
    return web.json_response(body)
