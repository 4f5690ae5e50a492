"""
Core module for ckan_datastore.

This module contains the translation logic between abstract tabular queries
and the CKAN DataStore API, separated from the HTTP layer.
"""

from .data_access import DataStore
from .exceptions import (
    CkanError,
    InvalidURL,
    MalformedResponse,
    QueryException,
    ResourceNotFound,
    TransportError,
    handle_exception,
)
from .locator import parse_resource_url, resolve
from .models import Dataset, Filter, NormalizedResult, Query, ResourceTarget, SortField
from .normalize import CKAN_TYPES_MAP, normalize_field_type, normalize_fields, normalize_response
from .query_builder import to_remote_request

__all__ = [
    "DataStore",
    "Dataset",
    "Filter",
    "NormalizedResult",
    "Query",
    "ResourceTarget",
    "SortField",
    "CKAN_TYPES_MAP",
    "normalize_field_type",
    "normalize_fields",
    "normalize_response",
    "parse_resource_url",
    "resolve",
    "to_remote_request",
    "CkanError",
    "TransportError",
    "ResourceNotFound",
    "InvalidURL",
    "MalformedResponse",
    "QueryException",
    "handle_exception",
]
