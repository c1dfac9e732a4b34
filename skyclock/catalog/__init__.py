from .base import CatalogProvider
from .local import LocalCsvCatalogProvider
from .memory import InMemoryCatalogProvider


def get_catalog_provider(config) -> CatalogProvider:
    backend = config.catalog_backend
    if backend == "local":
        return LocalCsvCatalogProvider(data_dir=config.catalog_data_dir)
    if backend == "memory":
        return InMemoryCatalogProvider()
    raise ValueError(f"Unsupported catalog backend: {backend}")


__all__ = [
    "CatalogProvider",
    "LocalCsvCatalogProvider",
    "InMemoryCatalogProvider",
    "get_catalog_provider",
]
