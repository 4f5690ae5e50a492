"""
Request handlers for the API module.
"""

from .resource_handlers import (
    handle_resource_data,
    handle_resource_list,
    handle_resource_meta,
)

__all__ = [
    "handle_resource_list",
    "handle_resource_meta",
    "handle_resource_data",
]
