from .fetcher import HttpxCatalogFetcher
from .store import CatalogStore
from .translator import (
    base_path_from_url,
    resolve_url,
    station_from_entry,
    translate_catalog,
)

__all__ = [
    "CatalogStore",
    "HttpxCatalogFetcher",
    "base_path_from_url",
    "resolve_url",
    "station_from_entry",
    "translate_catalog",
]
