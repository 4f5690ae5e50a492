"""
Exception handling for the core module.

Errors raised while talking to a CKAN instance surface to the caller as they
are: nothing here retries or recovers.
"""

import json

import sentry_sdk
from aiohttp import web


class CkanError(Exception):
    """Base class for every error raised by ckan_datastore."""


class TransportError(CkanError):
    """The CKAN instance could not be reached or answered with an error."""

    def __init__(self, status: int | None, message: str | dict) -> None:
        self.status = status
        self.message = message
        super().__init__(f"{status}: {message}" if status is not None else str(message))


class ResourceNotFound(TransportError):
    """The CKAN instance answered 404 for the requested resource."""


class InvalidURL(CkanError, ValueError):
    """A resource URL (or dataset descriptor) cannot be turned into a request target."""


class MalformedResponse(CkanError):
    """A datastore_search result misses one of `fields`, `records` or `total`."""


class QueryException(web.HTTPException):
    """Re-raise a CKAN error as aiohttp exception"""

    def __init__(self, status, error_code, title, detail) -> None:
        self.status_code = status
        error_body = {"errors": [{"code": error_code, "title": title, "detail": detail}]}
        super().__init__(content_type="application/json", text=json.dumps(error_body))


def handle_exception(
    status: int | None, title: str, detail: str | dict, resource_id: str | None = None
):
    """Report an upstream failure to Sentry, then raise it as a TransportError."""
    if sentry_sdk.get_client().is_active():
        with sentry_sdk.new_scope() as scope:
            sentry_tags: dict = {
                "status": status,
                "title": title,
            }
            if resource_id:
                sentry_tags["resource_id"] = resource_id
            scope.set_tags(sentry_tags)
            scope.set_extra("detail", detail)
            sentry_sdk.capture_exception(Exception(detail))
    if status == 404:
        raise ResourceNotFound(status, detail)
    raise TransportError(status, detail)
