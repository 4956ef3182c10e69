"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from shopcore.domain.model.order import LineItem, Order, ShippingInfo
from shopcore.domain.model.variant_selector import VariantSelector


@dataclass(frozen=True)
class CartEntry:
    """Input: one cart line (product, chosen variant, quantity)."""

    product_id: str
    quantity: int
    variant: VariantSelector = field(default_factory=VariantSelector)


@dataclass(frozen=True)
class ShippingDetails:
    """Input: shipping/contact fields as typed by the customer."""

    address1: str
    city: str
    phone: str
    address2: str = ""
    zip: str = ""
    country: str | None = None

    def to_domain(self, default_country: str) -> ShippingInfo:
        return ShippingInfo(
            address1=self.address1,
            address2=self.address2,
            city=self.city,
            zip=self.zip,
            country=self.country or default_country,
            phone=self.phone,
        )


@dataclass(frozen=True)
class VariantSpec:
    """Input: a variant for a new catalog product."""

    name: str
    value: str
    price: str
    stock: int = 0


@dataclass(frozen=True)
class LineItemDTO:
    """Output: a single line item as displayed to the user."""

    id: int
    product_id: str
    product_name: str
    variant: str
    quantity: int
    unit_price: str  # formatted, e.g. "Nu. 100.00"
    line_total: str

    @staticmethod
    def from_domain(item: LineItem) -> LineItemDTO:
        return LineItemDTO(
            id=item.id,
            product_id=item.product_id,
            product_name=item.product_name,
            variant=item.variant.label,
            quantity=item.quantity.value,
            unit_price=str(item.unit_price),
            line_total=str(item.line_total),
        )


@dataclass(frozen=True)
class OrderDTO:
    """Output: an order as displayed to the user.

    ``items`` is only filled by queries that load line items.
    """

    id: int
    order_number: str
    user_id: str
    status: str
    payment_status: str
    is_verified: bool
    payment_journal_number: str | None
    payment_proof_image: str | None
    shipping: str
    total: str
    date_ordered: str
    items: list[LineItemDTO] = field(default_factory=list)

    @staticmethod
    def from_domain(order: Order, items: list[LineItem] | None = None) -> OrderDTO:
        s = order.shipping
        address = ", ".join(
            part for part in (s.address1, s.address2, s.city, s.zip, s.country) if part
        )
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            order_number=order.order_number,
            user_id=order.user_id,
            status=order.status.value,
            payment_status=order.payment_status.value,
            is_verified=order.is_verified,
            payment_journal_number=order.payment_journal_number,
            payment_proof_image=order.payment_proof_image,
            shipping=f"{address} (tel. {s.phone})",
            total=str(order.total_price),
            date_ordered=order.date_ordered.strftime("%Y-%m-%d %H:%M UTC"),
            items=[LineItemDTO.from_domain(i) for i in items or []],
        )
