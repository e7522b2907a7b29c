from .browse_catalog import BrowseCatalogUseCase
from .catalog_coordinator import CatalogCoordinator

__all__ = ["BrowseCatalogUseCase", "CatalogCoordinator"]
