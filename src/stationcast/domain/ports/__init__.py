from .catalog_reader import CatalogReaderPort
from .catalog_source import CatalogFetcherPort

__all__ = [
    "CatalogFetcherPort",
    "CatalogReaderPort",
]
