"""
Main API application factory.

This module creates the aiohttp application with all routes and middleware.
"""

import logging
import os
from datetime import datetime, timezone

import aiohttp_cors
import sentry_sdk
from aiohttp import ClientSession, web

from ckan_datastore import config
from ckan_datastore.core.sentry import get_sentry_kwargs
from ckan_datastore.utils import get_app_version

from .routes.resources import routes as resource_routes

logger = logging.getLogger(__name__)


async def health_handler(request):
    """Handle health check requests."""
    start_time = request.app["start_time"]
    current_time = datetime.now(timezone.utc)
    uptime_seconds = (current_time - start_time).total_seconds()
    return web.json_response(
        {
            "status": "ok",
            "version": request.app["app_version"],
            "endpoint": request.app["endpoint"],
            "uptime_seconds": uptime_seconds,
        }
    )


async def app_factory(endpoint: str | None = None):
    """Create and configure the aiohttp application."""

    async def on_startup(app):
        app["csession"] = ClientSession()
        app["start_time"] = datetime.now(timezone.utc)
        app["app_version"] = await get_app_version()
        logger.info(f"Serving CKAN DataStore at {app['endpoint']}")

    async def on_cleanup(app):
        await app["csession"].close()

    app = web.Application()
    app["endpoint"] = (endpoint or config.API_ENDPOINT).rstrip("/")

    # Add all routes
    app.add_routes(resource_routes)
    app.router.add_get("/health/", health_handler)

    # Setup startup and cleanup
    app.on_startup.append(on_startup)
    app.on_cleanup.append(on_cleanup)

    # Setup CORS
    cors = aiohttp_cors.setup(
        app,
        defaults={
            "*": aiohttp_cors.ResourceOptions(
                allow_credentials=True, expose_headers="*", allow_headers="*"
            )
        },
    )
    for route in list(app.router.routes()):
        cors.add(route)

    return app


def run():
    """Run the application."""
    logging.basicConfig(level=logging.INFO)
    if config.SENTRY_DSN:
        sentry_sdk.init(**get_sentry_kwargs())
    web.run_app(app_factory(), path=os.environ.get("CKAN_DATASTORE_APP_SOCKET_PATH"))
