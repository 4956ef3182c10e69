"""Application service: Create Order use case (the order assembler).

Turns a cart into persisted line items and an order, then takes the
ordered quantities out of stock.

Steps:
1. Reject malformed input (empty cart, blank product id, bad quantity,
   missing shipping fields).
2. Pre-flight stock check over the whole cart; every shortfall is reported.
3. Build and persist one line item per cart entry with a price snapshot.
4. Re-read the persisted line items and compute the order total.
5. Persist the order.  A failure in 3-5 deletes whatever was written.
6. Deduct stock per cart entry with a conditional decrement.  If another
   order took the stock since step 2, everything is undone and
   InsufficientStockError is raised.  Other ledger failures are logged and
   the order stands.
"""

from __future__ import annotations

import logging

from shopcore.application.dto import CartEntry, OrderDTO, ShippingDetails
from shopcore.domain.exceptions import (
    DomainException,
    InsufficientStockError,
    InvalidInputError,
    PersistenceError,
    ProductNotFoundError,
)
from shopcore.domain.model.order import LineItem, Order
from shopcore.domain.model.product import Product
from shopcore.domain.model.value_objects import Money, Quantity
from shopcore.domain.model.variant_selector import VariantSelector
from shopcore.domain.repository.line_item_repository import LineItemRepository
from shopcore.domain.repository.order_repository import OrderRepository
from shopcore.domain.repository.product_repository import ProductRepository
from shopcore.domain.service.stock_ledger import StockLedger
from shopcore.domain.service.stock_validator import StockValidator

DEFAULT_COUNTRY = "Bhutan"

_module_logger = logging.getLogger("shopcore.orders")


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        line_item_repo: LineItemRepository,
        product_repo: ProductRepository,
        ledger: StockLedger,
        default_country: str = DEFAULT_COUNTRY,
        logger: logging.Logger | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._line_item_repo = line_item_repo
        self._product_repo = product_repo
        self._ledger = ledger
        self._default_country = default_country
        self._log = logger or _module_logger

    def handle(
        self,
        cart: list[CartEntry],
        shipping: ShippingDetails,
        user_id: str,
    ) -> OrderDTO:
        self._check_cart(cart)
        if not user_id or not user_id.strip():
            raise InvalidInputError("Order owner is required")
        shipping_info = shipping.to_domain(self._default_country)

        validation = StockValidator(self._product_repo).validate(cart)
        if not validation.valid:
            raise InsufficientStockError(validation.errors)

        written_ids: list[int] = []
        order: Order | None = None
        try:
            for entry in cart:
                item = self._build_line_item(entry)
                self._line_item_repo.save(item)
                written_ids.append(item.id)

            persisted = [self._reload_line_item(item_id) for item_id in written_ids]
            order = Order.create(user_id=user_id, line_items=persisted, shipping=shipping_info)
            self._order_repo.save(order)
        except Exception:
            self._discard(order, written_ids)
            raise

        self._log.info("Order #%s created for user %s, total %s",
                       order.id, order.user_id, order.total_price)
        self._deduct_stock(order, cart, written_ids)
        return OrderDTO.from_domain(order, persisted)

    # --- Validation -----------------------------------------------------------

    @staticmethod
    def _check_cart(cart: list[CartEntry]) -> None:
        if not cart:
            raise InvalidInputError("No order items provided")
        for entry in cart:
            if not isinstance(entry.product_id, str) or not entry.product_id.strip():
                raise InvalidInputError(
                    f"Invalid product ID: {entry.product_id!r}. "
                    f"Please refresh your cart and try again."
                )
            Quantity(entry.quantity)

    # --- Line items -----------------------------------------------------------

    def _build_line_item(self, entry: CartEntry) -> LineItem:
        product = self._product_repo.get_by_id(entry.product_id)
        if product is None:
            raise ProductNotFoundError(entry.product_id)

        unit_price = self._unit_price(entry, product)
        variant = product.resolve_variant(entry.variant)
        snapshot = VariantSelector(
            name=variant.name if variant else entry.variant.name,
            value=variant.value if variant else entry.variant.value,
            price=unit_price,
        )
        return LineItem(
            id=self._line_item_repo.next_id(),
            product_id=product.id,
            product_name=product.name,
            variant=snapshot,
            quantity=Quantity(entry.quantity),
            unit_price=unit_price,
        )

    @staticmethod
    def _unit_price(entry: CartEntry, product: Product) -> Money:
        """Price the customer saw if the cart carries one, else the catalog price.

        The catalog price is the selected variant's; an empty selector
        resolves to the first variant.
        """
        if entry.variant.price is not None:
            return entry.variant.price
        variant = product.resolve_variant(entry.variant)
        if variant is not None:
            return variant.price
        raise InvalidInputError(f"No price available for product: {product.name}")

    def _reload_line_item(self, item_id: int) -> LineItem:
        item = self._line_item_repo.get_by_id(item_id)
        if item is None:
            raise PersistenceError(f"Line item {item_id} was not persisted")
        return item

    # --- Stock ----------------------------------------------------------------

    def _deduct_stock(self, order: Order, cart: list[CartEntry], written_ids: list[int]) -> None:
        deducted: list[CartEntry] = []
        for entry in cart:
            try:
                self._ledger.deduct_exact(entry.product_id, entry.variant, entry.quantity)
            except InsufficientStockError:
                self._log.warning(
                    "Order #%s: stock ran out before it could be deducted, rolling back",
                    order.id,
                )
                self._restore(deducted)
                self._discard(order, written_ids)
                raise
            except DomainException as exc:
                self._log.error("Order #%s: could not deduct stock for product %s: %s",
                                order.id, entry.product_id, exc)
                continue
            deducted.append(entry)

    def _restore(self, entries: list[CartEntry]) -> None:
        for entry in entries:
            try:
                self._ledger.restore(entry.product_id, entry.variant, entry.quantity)
            except DomainException as exc:
                self._log.error("Could not restore stock for product %s: %s",
                                entry.product_id, exc)

    # --- Compensation ---------------------------------------------------------

    def _discard(self, order: Order | None, line_item_ids: list[int]) -> None:
        if order is not None and order.id is not None:
            self._order_repo.delete(order.id)
        for item_id in line_item_ids:
            self._line_item_repo.delete(item_id)
