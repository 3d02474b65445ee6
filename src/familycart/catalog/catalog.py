"""Read-only reference catalog of products, meals and stores."""

from __future__ import annotations

from typing import Iterable, Optional

from familycart.planner.models import (
    CatalogError,
    Meal,
    NotFoundError,
    Product,
    RetailStore,
)


class Catalog:
    """Indexed, immutable view over the reference data the planner reads.

    A catalog is built once per process and passed explicitly to the planner,
    so tests can substitute a small synthetic one.
    """

    def __init__(
        self,
        products: Iterable[Product],
        meals: Iterable[Meal],
        stores: Iterable[RetailStore],
        validate: bool = True,
    ):
        """Initialize the catalog.

        Args:
            products: Product reference data
            meals: Meal reference data, in display order
            stores: Retail stores
            validate: Raise CatalogError if meals reference unknown products

        Raises:
            CatalogError: On duplicate ids or, with validate=True, dangling
                product references.
        """
        self._products = _index("product", products)
        self._meals = _index("meal", meals)
        self._stores = _index("store", stores)

        if validate:
            problems = self.validate()
            if problems:
                raise CatalogError("; ".join(problems))

    @property
    def products(self) -> tuple[Product, ...]:
        return tuple(self._products.values())

    @property
    def meals(self) -> tuple[Meal, ...]:
        return tuple(self._meals.values())

    @property
    def stores(self) -> tuple[RetailStore, ...]:
        return tuple(self._stores.values())

    def get_product(self, product_id: str) -> Product:
        """Look up a product.

        Raises:
            NotFoundError: If the product id is unknown.
        """
        product = self._products.get(product_id)
        if product is None:
            raise NotFoundError(f"Product {product_id} not found", product_id)
        return product

    def find_store(self, store_id: str) -> Optional[RetailStore]:
        """Look up a store, returning None when it is unknown."""
        return self._stores.get(store_id)

    def get_meal(self, meal_id: str) -> Meal:
        """Look up a meal.

        Raises:
            NotFoundError: If the meal id is unknown.
        """
        meal = self._meals.get(meal_id)
        if meal is None:
            raise NotFoundError(f"Meal {meal_id} not found", meal_id)
        return meal

    def validate(self) -> list[str]:
        """Check referential integrity.

        Returns:
            Human-readable problem descriptions (empty if the catalog is sound)
        """
        problems = []
        for meal in self._meals.values():
            for entry in meal.products:
                if entry.product_id not in self._products:
                    problems.append(
                        f"Meal {meal.id} references unknown product {entry.product_id}"
                    )
        for product in self._products.values():
            if not product.prices:
                problems.append(f"Product {product.id} has no store prices")
            for store_id in product.prices:
                if store_id not in self._stores:
                    problems.append(
                        f"Product {product.id} is priced at unknown store {store_id}"
                    )
        return problems

    def __repr__(self) -> str:
        return (
            f"Catalog(products={len(self._products)}, meals={len(self._meals)}, "
            f"stores={len(self._stores)})"
        )


def _index(kind: str, items: Iterable) -> dict:
    index: dict = {}
    for item in items:
        if item.id in index:
            raise CatalogError(f"Duplicate {kind} id: {item.id}")
        index[item.id] = item
    return index
