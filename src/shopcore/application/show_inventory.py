"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from shopcore.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class InventoryLineDTO:
    product_name: str
    variant: str
    price: str
    stock: int
    availability: str


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[InventoryLineDTO]:
        """One line per variant; availability is the product-level flag."""
        return [
            InventoryLineDTO(
                product_name=product.name,
                variant=f"{variant.name}: {variant.value}",
                price=str(variant.price),
                stock=variant.stock,
                availability=product.availability.value,
            )
            for product in self._product_repo.list_all()
            for variant in product.variants
        ]
