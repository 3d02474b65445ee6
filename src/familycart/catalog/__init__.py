"""Reference catalog of products, meals and stores."""

from familycart.catalog.catalog import Catalog
from familycart.catalog.loader import catalog_from_dict, load_catalog

__all__ = ["Catalog", "catalog_from_dict", "load_catalog"]
