"""Application service: Set Stock use case.

Sets the absolute stock of one variant (a stock count, not an order), going
through the ledger so the write is version-checked like any other.
"""

from __future__ import annotations

from shopcore.domain.exceptions import ProductNotFoundError
from shopcore.domain.model.product import Variant
from shopcore.domain.model.variant_selector import VariantSelector
from shopcore.domain.repository.product_repository import ProductRepository
from shopcore.domain.service.stock_ledger import StockLedger


class SetStockHandler:

    def __init__(self, product_repo: ProductRepository, ledger: StockLedger) -> None:
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(self, product_name: str, variant_value: str | None, stock: int) -> Variant:
        product = self._product_repo.get_by_name(product_name)
        if product is None:
            raise ProductNotFoundError(product_name)

        selector = (
            VariantSelector.by_value(variant_value)
            if variant_value
            else VariantSelector.first_variant()
        )
        return self._ledger.set_stock(product.id, selector, stock)
