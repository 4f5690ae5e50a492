"""
Data access layer for the core module.

Simple wrapper around the CKAN DataStore API (v3 actions), over an aiohttp session.
"""

import logging

import aiohttp
from aiohttp import ClientSession

from .. import config
from .exceptions import MalformedResponse, handle_exception
from .models import Query
from .query_builder import to_remote_request

logger = logging.getLogger(__name__)

TABLE_METADATA_RESOURCE = "_table_metadata"


class DataStore:
    """Handles datastore_search calls against one CKAN API endpoint."""

    def __init__(self, session: ClientSession, endpoint: str | None = None):
        self.session = session
        self.endpoint = (endpoint or config.API_ENDPOINT).rstrip("/")

    @property
    def search_url(self) -> str:
        return f"{self.endpoint}/3/action/datastore_search"

    async def _request(self, method: str, url: str, resource_id: str | None = None, **kwargs):
        """
        Perform a single request and return the `result` member of the CKAN envelope.

        Raises:
            ResourceNotFound: if the CKAN instance answers 404
            TransportError: on any other HTTP error, unsuccessful action or network failure
        """
        logger.debug(f"{method} {url}")
        timeout = aiohttp.ClientTimeout(total=config.REQUEST_TIMEOUT)
        try:
            async with self.session.request(method, url, timeout=timeout, **kwargs) as res:
                if not res.ok:
                    try:
                        detail = await res.json(content_type=None)
                    except ValueError:
                        detail = await res.text()
                    if isinstance(detail, dict) and "error" in detail:
                        detail = detail["error"]
                    handle_exception(res.status, "CKAN error", detail or res.reason, resource_id)
                try:
                    body = await res.json(content_type=None)
                except ValueError:
                    raise MalformedResponse(f"{url} did not answer with JSON")
        except (aiohttp.ClientError, TimeoutError) as e:
            logger.warning(f"{method} {url} failed: {e!r}")
            handle_exception(None, "CKAN unreachable", str(e) or repr(e), resource_id)
        if not isinstance(body, dict):
            raise MalformedResponse(f"{url} did not answer with a CKAN action envelope")
        if not body.get("success", True):
            handle_exception(res.status, "CKAN error", body.get("error"), resource_id)
        return body.get("result")

    async def search(self, data: dict) -> dict:
        """
        Raw datastore_search action.

        Args:
            data: the request body, e.g. {"resource_id": ..., "limit": 0}

        Returns:
            The action result, holding `fields`, `records` and `total`
        """
        return await self._request(
            "POST", self.search_url, resource_id=data.get("resource_id"), json=data
        )

    async def query(self, query: Query | dict, resource_id: str) -> dict:
        """Run an abstract query and return its `total` and `hits`."""
        results = await self.search(to_remote_request(query, resource_id))
        if not isinstance(results, dict) or not {"total", "records"} <= results.keys():
            raise MalformedResponse(
                f"no total or records in datastore_search result for {resource_id}"
            )
        return {"total": results["total"], "hits": results["records"]}

    async def list_resources(self) -> dict:
        """List the resources of the DataStore, from its table metadata."""
        return await self._request(
            "GET", self.search_url, params={"resource_id": TABLE_METADATA_RESOURCE}
        )
