"""
Resource-related route definitions.
"""

from aiohttp import web

from ..handlers.resource_handlers import (
    handle_resource_data,
    handle_resource_list,
    handle_resource_meta,
)

routes = web.RouteTableDef()


@routes.get(r"/api/resources/", name="resources")
async def resource_list(request):
    """List the DataStore resources."""
    return await handle_resource_list(request)


@routes.get(r"/api/resources/{rid}/", name="meta")
async def resource_meta(request):
    """Get resource fields."""
    return await handle_resource_meta(request)


@routes.get(r"/api/resources/{rid}/data/", name="data")
async def resource_data(request):
    """Get resource data as JSON."""
    return await handle_resource_data(request)
