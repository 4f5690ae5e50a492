"""
Tabular backend on top of a CKAN DataStore.

A dataset is located on a CKAN instance in one of these ways, checked in order:

* it has an `endpoint` attribute pointing to the CKAN API, and its `id` is the resource id;
* its `url` attribute points to the resource page on the CKAN instance
  (e.g. http://demo.ckan.org/dataset/some-dataset/resource/eb23e809),
  the endpoint and id are then computed from it;
* its `id` is a resource id on the backend's default endpoint.
"""

import logging

from aiohttp import ClientSession

from ckan_datastore import config
from ckan_datastore.core.data_access import DataStore
from ckan_datastore.core.exceptions import MalformedResponse
from ckan_datastore.core.locator import resolve
from ckan_datastore.core.models import Dataset, NormalizedResult, Query
from ckan_datastore.core.normalize import normalize_fields, normalize_response
from ckan_datastore.core.query_builder import to_remote_request

logger = logging.getLogger(__name__)


class CkanBackend:
    __type__ = "ckan"

    def __init__(self, session: ClientSession, endpoint: str | None = None):
        self.session = session
        self.endpoint = (endpoint or config.API_ENDPOINT).rstrip("/")

    def _datastore(self, dataset: Dataset | dict) -> tuple[DataStore, str]:
        target = resolve(dataset, default_endpoint=self.endpoint)
        return DataStore(self.session, target.endpoint), target.resource_id

    async def fetch(self, dataset: Dataset | dict) -> dict:
        """Get the fields of a dataset, without any record."""
        datastore, resource_id = self._datastore(dataset)
        results = await datastore.search({"resource_id": resource_id, "limit": 0})
        if not isinstance(results, dict) or "fields" not in results:
            raise MalformedResponse(f"no fields in datastore_search result for {resource_id}")
        return {
            "fields": normalize_fields(results["fields"]),
            "use_memory_store": False,
        }

    async def query(self, query: Query | dict, dataset: Dataset | dict) -> NormalizedResult:
        datastore, resource_id = self._datastore(dataset)
        data = to_remote_request(query, resource_id)
        logger.debug(f"querying {resource_id} on {datastore.endpoint}")
        return normalize_response(await datastore.search(data))

    async def list_resources(self, dataset: Dataset | dict | None = None) -> dict:
        """List the DataStore resources of the dataset's CKAN instance, or of the default one."""
        endpoint = resolve(dataset, default_endpoint=self.endpoint).endpoint if dataset else None
        return await DataStore(self.session, endpoint or self.endpoint).list_resources()
