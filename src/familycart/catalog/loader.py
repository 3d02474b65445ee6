"""Catalog loading from YAML files or plain dicts.

The file format mirrors the dataclasses in ``familycart.planner.models``:

    stores:
      - id: greenmart
        name: GreenMart
        delivery_fee: 4.99
        checkout_url: https://greenmart.example/checkout
    products:
      - id: rice
        name: Long-grain rice
        unit: kg
        allergens: []
        category: garnish
        prices: {greenmart: 2.10, quickshop: 2.35}
    meals:
      - id: rice-bowl
        title: Rice bowl
        tags: [budget, vegetarian]
        products:
          - {product_id: rice, units_per_serving: 0.1}
        steps: [Cook the rice.]
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml

from familycart.catalog.catalog import Catalog
from familycart.planner.models import (
    CatalogError,
    Meal,
    MealProduct,
    Product,
    RetailStore,
)

SAMPLE_CATALOG_PATH = Path(__file__).parent / "data" / "sample_catalog.yaml"


def _require(data: dict[str, Any], key: str, kind: str) -> Any:
    if key not in data:
        raise CatalogError(f"{kind} entry is missing '{key}': {data!r}")
    return data[key]


def parse_store(data: dict[str, Any]) -> RetailStore:
    """Build a RetailStore from a dict."""
    return RetailStore(
        id=str(_require(data, "id", "Store")),
        name=str(_require(data, "name", "Store")),
        delivery_fee=float(data.get("delivery_fee", 0.0)),
        checkout_url=str(data.get("checkout_url", "")),
    )


def parse_product(data: dict[str, Any]) -> Product:
    """Build a Product from a dict."""
    prices = _require(data, "prices", "Product") or {}
    return Product(
        id=str(_require(data, "id", "Product")),
        name=str(_require(data, "name", "Product")),
        unit=str(data.get("unit", "pcs")),
        allergens=frozenset(data.get("allergens") or []),
        category=str(data.get("category", "basic")),
        prices={str(store_id): float(price) for store_id, price in prices.items()},
    )


def parse_meal(data: dict[str, Any]) -> Meal:
    """Build a Meal from a dict."""
    products = tuple(
        MealProduct(
            product_id=str(_require(entry, "product_id", "Meal product")),
            units_per_serving=float(_require(entry, "units_per_serving", "Meal product")),
        )
        for entry in data.get("products") or []
    )
    calories = data.get("calories")
    return Meal(
        id=str(_require(data, "id", "Meal")),
        title=str(_require(data, "title", "Meal")),
        description=str(data.get("description", "")),
        minutes=int(data.get("minutes", 0)),
        tags=tuple(data.get("tags") or []),
        products=products,
        steps=tuple(data.get("steps") or []),
        calories=int(calories) if calories is not None else None,
    )


def catalog_from_dict(data: dict[str, Any], validate: bool = True) -> Catalog:
    """Build a Catalog from the parsed YAML structure.

    Args:
        data: Dict with ``stores``, ``products`` and ``meals`` lists
        validate: Check referential integrity

    Returns:
        Catalog instance

    Raises:
        CatalogError: If an entry is malformed or references are dangling.
    """
    if not isinstance(data, dict):
        raise CatalogError("Catalog must be a mapping with stores, products and meals")

    try:
        stores = [parse_store(entry) for entry in data.get("stores") or []]
        products = [parse_product(entry) for entry in data.get("products") or []]
        meals = [parse_meal(entry) for entry in data.get("meals") or []]
    except (TypeError, ValueError, AttributeError) as e:
        raise CatalogError(f"Malformed catalog entry: {e}") from e

    return Catalog(products=products, meals=meals, stores=stores, validate=validate)


def load_catalog(path: Optional[Path] = None, validate: bool = True) -> Catalog:
    """Load a catalog from a YAML file.

    Args:
        path: Path to a catalog YAML file. If None, loads the bundled sample.
        validate: Check referential integrity

    Returns:
        Catalog instance
    """
    if path is None:
        path = SAMPLE_CATALOG_PATH

    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise CatalogError(f"Invalid YAML in {path}: {e}") from e

    return catalog_from_dict(data, validate=validate)
