"""Domain service: Stock Ledger.

Owns every change to per-variant stock.  Each call is a single
read-modify-write on one product, made conditional on the product's
version so two concurrent writers cannot both win with stale stock.  A
lost race re-reads the product and tries again.

There is no multi-product transaction; callers that touch several products
compensate on failure instead.
"""

from __future__ import annotations

import logging
from typing import Callable

from shopcore.domain.exceptions import (
    ConcurrentModificationError,
    InsufficientStockError,
    LedgerOperationFailure,
    ProductNotFoundError,
)
from shopcore.domain.model.product import Product, Variant
from shopcore.domain.model.variant_selector import VariantSelector
from shopcore.domain.repository.product_repository import ProductRepository

DEFAULT_MAX_RETRIES = 3

_module_logger = logging.getLogger("shopcore.ledger")


class StockLedger:

    def __init__(
        self,
        product_repo: ProductRepository,
        max_retries: int = DEFAULT_MAX_RETRIES,
        logger: logging.Logger | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._max_retries = max_retries
        self._log = logger or _module_logger

    def deduct(self, product_id: str, selector: VariantSelector, quantity: int) -> Variant:
        """Remove ``quantity`` from the selected variant, clamping at zero."""
        variant = self._mutate(
            product_id, lambda p: p.deduct_stock(selector, quantity)
        )
        self._log.info(
            "Deducted %d from product %s variant %s, new stock: %d",
            quantity, product_id, variant.label, variant.stock,
        )
        return variant

    def deduct_exact(
        self, product_id: str, selector: VariantSelector, quantity: int
    ) -> Variant:
        """Remove exactly ``quantity`` or fail without writing.

        The availability check and the decrement happen against the same
        product version, so a concurrent order cannot slip in between.
        """

        def apply(product: Product) -> Variant:
            variant = product.deduct_stock_exact(selector, quantity)
            if variant is None:
                current = product.resolve_variant(selector)
                available = current.stock if current else 0
                label = current.label if current else selector.label
                raise InsufficientStockError([
                    f'Insufficient stock for "{product.name}" ({label}): '
                    f"requested {quantity}, available {available}"
                ])
            return variant

        variant = self._mutate(product_id, apply)
        self._log.info(
            "Deducted %d from product %s variant %s, new stock: %d",
            quantity, product_id, variant.label, variant.stock,
        )
        return variant

    def restore(self, product_id: str, selector: VariantSelector, quantity: int) -> Variant:
        """Put ``quantity`` back on the selected variant."""
        variant = self._mutate(
            product_id, lambda p: p.restore_stock(selector, quantity)
        )
        self._log.info(
            "Restored %d to product %s variant %s, new stock: %d",
            quantity, product_id, variant.label, variant.stock,
        )
        return variant

    def set_stock(self, product_id: str, selector: VariantSelector, stock: int) -> Variant:
        return self._mutate(product_id, lambda p: p.set_stock(selector, stock))

    # --- Internal helpers -----------------------------------------------------

    def _mutate(self, product_id: str, apply: Callable[[Product], Variant]) -> Variant:
        for attempt in range(1, self._max_retries + 1):
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)

            was_in_stock = product.in_stock
            variant = apply(product)
            try:
                self._product_repo.save(product)
            except ConcurrentModificationError:
                self._log.debug(
                    "Product %s changed underneath us (attempt %d/%d), retrying",
                    product_id, attempt, self._max_retries,
                )
                continue

            if was_in_stock and not product.in_stock:
                self._log.info("Product %s is now out of stock", product.name)
            return variant

        raise LedgerOperationFailure(
            f"Could not update stock for product '{product_id}' after "
            f"{self._max_retries} attempts"
        )
