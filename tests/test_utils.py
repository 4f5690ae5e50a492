import pytest
from aiohttp.test_utils import make_mocked_request

from ckan_datastore.core.models import Filter, SortField
from ckan_datastore.utils import build_link_with_page, build_offset, build_query, external_url


def test_build_link_with_page():
    request = make_mocked_request("GET", "/api/test?foo=bar")
    link = build_link_with_page(request, query_string=["foo=1", "bar=3"], page=2, page_size=10)
    assert link == external_url("/api/test?foo=1&bar=3&page=2&page_size=10")


@pytest.mark.parametrize(
    "page,page_size,expected",
    [
        (1, 20, 0),
        (2, 20, 20),
        (4, 5, 15),
    ],
)
def test_build_offset(page, page_size, expected):
    assert build_offset(page, page_size) == expected


@pytest.mark.parametrize(
    "page,page_size",
    [
        (1, 1000),
        (1, -5),
        (3, -5),
        (0, 20),
        (-1, 20),
    ],
)
def test_build_offset_invalid(page, page_size):
    with pytest.raises(ValueError):
        build_offset(page, page_size)


def test_build_link_with_page_keeps_columns_starting_with_page():
    request = make_mocked_request("GET", "/api/test")
    link = build_link_with_page(
        request,
        query_string=["pages__exact=12", "page=1", "page_size=10", "page_count__sort=asc"],
        page=2,
        page_size=10,
    )
    assert link == external_url(
        "/api/test?pages__exact=12&page_count__sort=asc&page=2&page_size=10"
    )


def test_build_query_column_starting_with_page():
    query = build_query(["pages__exact=12"])
    assert query.filters == [Filter(type="term", field="pages", term="12")]


def test_build_query():
    query = build_query(
        ["q=grand+lyon", "name__exact=Lyon", "population__sort=desc", "page=2", "page_size=5"],
        page=2,
        page_size=5,
    )
    assert query.text == "grand lyon"
    assert query.page_size == 5
    assert query.page_offset == 5
    assert query.filters == [Filter(type="term", field="name", term="Lyon")]
    assert query.sort == [SortField(field="population", order="desc")]


def test_build_query_column_with_double_underscore():
    query = build_query(["code__insee__exact=69123"])
    assert query.filters == [Filter(type="term", field="code__insee", term="69123")]


def test_build_query_defaults():
    query = build_query([])
    assert query.text is None
    assert query.page_size == 10
    assert query.page_offset == 0


@pytest.mark.parametrize(
    "args",
    [
        ["name"],
        ["name=Lyon"],
        ["name__contains=Ly"],
        ["name__sort=up"],
    ],
)
def test_build_query_invalid(args):
    with pytest.raises(ValueError):
        build_query(args)
