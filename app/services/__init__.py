"""Services for the proposal deck system."""

from .cache import CatalogCache, get_catalog_cache
from .fetcher import ResourceFetcher
from .sheets_client import SheetsClient, normalize_range
from .catalog import CatalogService, get_catalog_service
from .session import SessionContext

__all__ = [
    "CatalogCache",
    "get_catalog_cache",
    "ResourceFetcher",
    "SheetsClient",
    "normalize_range",
    "CatalogService",
    "get_catalog_service",
    "SessionContext",
]
