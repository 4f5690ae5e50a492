from importlib.metadata import PackageNotFoundError, version
from urllib.parse import unquote_plus

from aiohttp.web_request import Request

from ckan_datastore import config
from ckan_datastore.core.models import Filter, Query, SortField


def external_url(url) -> str:
    return f"{config.SCHEME}://{config.SERVER_NAME}{url}"


def build_link_with_page(
    request: Request, query_string: list[str], page: int, page_size: int
) -> str:
    q = [
        string
        for string in query_string
        if string.split("=", 1)[0] not in ["page", "page_size"]
    ]
    q.extend([f"page={page}", f"page_size={page_size}"])
    rebuilt_q = "&".join(q)
    return external_url(f"{request.path}?{rebuilt_q}")


def url_for(request: Request, route: str, *args, **kwargs) -> str:
    router = request.app.router
    if kwargs.pop("_external", None):
        return external_url(router[route].url_for(**kwargs))
    return str(router[route].url_for(**kwargs))


def build_offset(page: int, page_size: int) -> int:
    if page < 1:
        raise ValueError(f"Page should be at least 1, got {page}")
    if page_size < 1:
        raise ValueError(f"Page size should be at least 1, got {page_size}")
    if page_size > config.PAGE_SIZE_MAX:
        raise ValueError(f"Page size exceeds allowed maximum: {config.PAGE_SIZE_MAX}")
    return page_size * (page - 1) if page > 1 else 0


def get_column_and_operator(argument: str) -> tuple[str, str]:
    # handling headers with "__"
    *column_split, operator = argument.split("__")
    return "__".join(column_split), operator.lower()


def build_query(request_arg: list[str], page: int = 1, page_size: int | None = None) -> Query:
    """
    Build a Query from raw query string arguments.

    Filters are expected to have the syntax `<column_name>__exact=<value>`,
    sorts `<column_name>__sort=asc|desc` and the free text is given by `q=<text>`.
    """
    page_size = page_size or config.PAGE_SIZE_DEFAULT
    query = Query(page_size=page_size, page_offset=build_offset(page, page_size))
    for arg in request_arg:
        _split = arg.split("=", 1)
        if len(_split) != 2:
            raise ValueError(f"argument '{arg}' could not be parsed")
        argument, value = unquote_plus(_split[0]), unquote_plus(_split[1])
        if argument in ["page", "page_size"]:  # processed by the caller
            continue
        if argument == "q":
            query.text = value
            continue
        if "__" not in argument:
            raise ValueError(f"argument '{arg}' could not be parsed")
        column, operator = get_column_and_operator(argument)
        if operator == "exact":
            query.filters.append(Filter(type="term", field=column, term=value))
        elif operator == "sort":
            if value not in ["asc", "desc"]:
                raise ValueError(f"sort order '{value}' should be asc or desc")
            query.sort.append(SortField(field=column, order=value))
        else:
            raise ValueError(f"argument '{arg}' could not be parsed")
    return query


async def get_app_version() -> str:
    """Get the version from the installed package metadata."""
    try:
        return version("ckan-datastore")
    except PackageNotFoundError:
        return "unknown"
