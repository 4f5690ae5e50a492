import aiohttp
import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer
from aioresponses import aioresponses

from ckan_datastore import config
from ckan_datastore.app import app_factory

CKAN_ENDPOINT = "https://ckan.example.com/api"
SEARCH_URL = f"{CKAN_ENDPOINT}/3/action/datastore_search"
RESOURCE_ID = "aaaaaaaa-1111-bbbb-2222-cccccccccccc"
UNKNOWN_RESOURCE_ID = "aaaaaaaa-1111-bbbb-2222-cccccccccccA"
RESOURCE_URL = f"https://ckan.example.com/dataset/some-dataset/resource/{RESOURCE_ID}"

REMOTE_FIELDS = [
    {"id": "_id", "type": "int4"},
    {"id": "name", "type": "text"},
    {"id": "population", "type": "int8"},
    {"id": "area", "type": "float8"},
    {"id": "founded", "type": "timestamp"},
]
REMOTE_RECORDS = [
    {"_id": 1, "name": "Paris", "population": 2102650, "area": 105.4, "founded": None},
    {"_id": 2, "name": "Lyon", "population": 522250, "area": 47.87, "founded": None},
]


def search_payload(records=None, fields=None, total=None) -> dict:
    records = REMOTE_RECORDS if records is None else records
    return {
        "help": f"{CKAN_ENDPOINT}/3/action/help_show?name=datastore_search",
        "success": True,
        "result": {
            "resource_id": RESOURCE_ID,
            "fields": REMOTE_FIELDS if fields is None else fields,
            "records": records,
            "total": len(records) if total is None else total,
            "limit": 10,
            "offset": 0,
        },
    }


def not_found_payload() -> dict:
    return {
        "success": False,
        "error": {"__type": "Not Found Error", "message": "Not found: Resource not found"},
    }


def sent_bodies(rmock) -> list:
    """JSON bodies of every request caught by aioresponses."""
    return [call.kwargs.get("json") for calls in rmock.requests.values() for call in calls]


@pytest.fixture(autouse=True)
def setup():
    config.override(API_ENDPOINT=CKAN_ENDPOINT, PAGE_SIZE_DEFAULT=10, PAGE_SIZE_MAX=100)


@pytest.fixture
def rmock():
    # passthrough for local requests (aiohttp TestServer)
    with aioresponses(passthrough=["http://127.0.0.1"]) as m:
        yield m


@pytest_asyncio.fixture
async def client():
    async with aiohttp.ClientSession() as session:
        yield session


@pytest_asyncio.fixture
async def fake_client():
    app = await app_factory(endpoint=CKAN_ENDPOINT)
    async with TestClient(TestServer(app)) as client:
        yield client


@pytest.fixture
def base_url():
    yield f"{config.SCHEME}://{config.SERVER_NAME}"
