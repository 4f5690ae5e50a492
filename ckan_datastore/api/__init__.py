"""
API module for ckan_datastore.

Exposes the CKAN backend of the configured endpoint as REST endpoints.
"""

from .app import app_factory

__all__ = ["app_factory"]
