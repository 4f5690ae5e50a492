"""
Map datastore_search results to the canonical tabular shape.
"""

from types import MappingProxyType

from .exceptions import MalformedResponse
from .models import NormalizedResult

# postgres types reported by the DataStore, anything else is kept as is
CKAN_TYPES_MAP = MappingProxyType(
    {
        "int4": "integer",
        "int8": "integer",
        "float8": "float",
    }
)

REQUIRED_KEYS = ("fields", "records", "total")


def normalize_field_type(field_type: str) -> str:
    if field_type in CKAN_TYPES_MAP:
        return CKAN_TYPES_MAP[field_type]
    return field_type


def normalize_fields(fields: list[dict]) -> list[dict]:
    # copies, the remote payload is left untouched
    return [{**f, "type": normalize_field_type(f.get("type"))} for f in fields]


def normalize_response(remote: dict) -> NormalizedResult:
    if not isinstance(remote, dict):
        raise MalformedResponse("datastore_search result is not an object")
    missing = [key for key in REQUIRED_KEYS if key not in remote]
    if missing:
        raise MalformedResponse(f"datastore_search result is missing {', '.join(missing)}")
    return NormalizedResult(
        fields=normalize_fields(remote["fields"]),
        total=remote["total"],
        hits=remote["records"],
    )
