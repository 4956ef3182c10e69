"""Application service: Add Product use case."""

from __future__ import annotations

from shopcore.application.dto import VariantSpec
from shopcore.domain.exceptions import InvalidInputError
from shopcore.domain.model.product import Product, Variant
from shopcore.domain.model.value_objects import Money
from shopcore.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        category_id: str,
        variants: list[VariantSpec],
        description: str = "",
        brand: str = "",
    ) -> Product:
        """Add a new product with its variants to the catalog."""
        if not variants:
            raise InvalidInputError("A product needs at least one variant")

        if name and self._product_repo.get_by_name(name.strip()) is not None:
            raise InvalidInputError(f"Product '{name.strip()}' already exists")

        # Auto-assign ID based on existing numeric ids; imported ids are left alone
        numeric_ids = [int(p.id) for p in self._product_repo.list_all() if p.id.isdigit()]
        next_id = str(max(numeric_ids, default=0) + 1)

        product = Product.create(
            id=next_id,
            name=name,
            category_id=category_id,
            variants=[
                Variant(name=v.name, value=v.value, price=Money.of(v.price), stock=v.stock)
                for v in variants
            ],
            description=description,
            brand=brand,
        )
        self._product_repo.save(product)
        return product
