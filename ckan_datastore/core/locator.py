"""
Resolve a dataset descriptor into the CKAN endpoint and resource id to query.
"""

from .exceptions import InvalidURL
from .models import Dataset, ResourceTarget

# a resource url looks like {endpoint base}/dataset/{dataset}/resource/{resource_id}
RESOURCE_URL_TRAILING_SEGMENTS = 4


def parse_resource_url(url: str) -> ResourceTarget:
    """
    Parse a regular CKAN resource URL into an API endpoint and a resource id.

    >>> parse_resource_url("http://demo.ckan.org/dataset/some-dataset/resource/eb23e809")
    ResourceTarget(endpoint='http://demo.ckan.org/api', resource_id='eb23e809')
    """
    parts = url.split("/")
    base = parts[: len(parts) - RESOURCE_URL_TRAILING_SEGMENTS]
    if len(parts) <= RESOURCE_URL_TRAILING_SEGMENTS or not "/".join(base):
        raise InvalidURL(f"'{url}' is not a CKAN resource url")
    resource_id = parts[-1]
    if not resource_id:
        raise InvalidURL(f"'{url}' has no resource id")
    return ResourceTarget(endpoint="/".join(base) + "/api", resource_id=resource_id)


def resolve(dataset: Dataset | dict, default_endpoint: str | None = None) -> ResourceTarget:
    """
    Find the request target for a dataset, checked in order:
    its endpoint and id, its resource url, then its id on the default endpoint.
    """
    if isinstance(dataset, dict):
        dataset = Dataset.from_dict(dataset)
    if dataset.endpoint:
        return ResourceTarget(endpoint=dataset.endpoint.rstrip("/"), resource_id=dataset.id)
    if dataset.url:
        return parse_resource_url(dataset.url)
    if dataset.id and default_endpoint:
        return ResourceTarget(endpoint=default_endpoint.rstrip("/"), resource_id=dataset.id)
    raise InvalidURL("dataset has neither an endpoint, a resource url nor an id")
