"""Python client for the website API."""

from labsite.client.api_client import EntityApi, LabsiteClient
from labsite.client.cache import EntityCache

__all__ = ["EntityApi", "EntityCache", "LabsiteClient"]
