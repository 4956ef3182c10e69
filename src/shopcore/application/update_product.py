"""Application service: Update Variant Price use case."""

from __future__ import annotations

from shopcore.domain.exceptions import ProductNotFoundError
from shopcore.domain.model.value_objects import Money
from shopcore.domain.model.variant_selector import VariantSelector
from shopcore.domain.repository.product_repository import ProductRepository


class UpdateVariantPriceHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, variant_value: str | None, new_price: str) -> None:
        """Update a variant's price.

        This does NOT affect any existing orders — their line items
        captured a price snapshot at creation time.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        selector = (
            VariantSelector.by_value(variant_value)
            if variant_value
            else VariantSelector.first_variant()
        )
        product.update_variant_price(selector, Money.of(new_price))
        self._product_repo.save(product)
