"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items (they are stored as
separate records and referenced by id).  It carries two independent status
axes:

- fulfillment status: Pending -> Processing -> Shipped -> Delivered, or
  Cancelled.  There is no enforced graph; any state can be set from any
  state.  Entering or leaving Cancelled moves stock.
- payment status: pending / review / verified / rejected, plus the
  ``is_verified`` flag.

State transitions mutate the aggregate and return the side effects the
caller has to carry out.  They never reach out to repositories.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from shopcore.domain.exceptions import InvalidInputError
from shopcore.domain.model.side_effects import (
    Notification,
    NotificationKind,
    SideEffect,
    StockAdjustment,
    StockDirection,
)
from shopcore.domain.model.value_objects import Money, Quantity
from shopcore.domain.model.variant_selector import VariantSelector


class FulfillmentStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, raw: str) -> FulfillmentStatus:
        try:
            return cls(raw)
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise InvalidInputError(f"Invalid status. Must be one of: {valid}") from None


class PaymentStatus(Enum):
    PENDING = "pending"
    REVIEW = "review"
    VERIFIED = "verified"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, raw: str) -> PaymentStatus:
        try:
            return cls(raw)
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise InvalidInputError(
                f"Invalid payment status. Must be one of: {valid}"
            ) from None


_PAYMENT_NOTIFICATIONS = {
    PaymentStatus.VERIFIED: NotificationKind.PAYMENT_VERIFIED,
    PaymentStatus.REJECTED: NotificationKind.PAYMENT_REJECTED,
    PaymentStatus.REVIEW: NotificationKind.PAYMENT_REVIEW,
}


@dataclass(frozen=True)
class LineItem:
    """Snapshot of one ordered variant.

    Immutable once created: the variant labels and ``unit_price`` are
    copied from the catalog at order time, so later price changes never
    leak into existing orders.
    """

    id: int
    product_id: str
    product_name: str
    variant: VariantSelector
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class ShippingInfo:
    address1: str
    city: str
    phone: str
    country: str
    address2: str = ""
    zip: str = ""

    def __post_init__(self) -> None:
        for field_name in ("address1", "city", "phone", "country"):
            value = getattr(self, field_name)
            if not value or not value.strip():
                raise InvalidInputError(f"Shipping {field_name} is required")


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders.  The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    orders without re-validating.
    """

    id: int | None
    user_id: str
    line_item_ids: list[int]
    shipping: ShippingInfo
    total_price: Money
    status: FulfillmentStatus = FulfillmentStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    is_verified: bool = False
    payment_journal_number: str | None = None
    payment_proof_image: str | None = None
    date_ordered: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: str,
        line_items: list[LineItem],
        shipping: ShippingInfo,
    ) -> Order:
        """Create a new order; the total is computed once, here."""
        if not user_id or not user_id.strip():
            raise InvalidInputError("Order owner is required")
        if not line_items:
            raise InvalidInputError("Order must contain at least one item")

        total = Money.zero(line_items[0].unit_price.currency)
        for item in line_items:
            total = total + item.line_total

        return Order(
            id=None,
            user_id=user_id.strip(),
            line_item_ids=[item.id for item in line_items],
            shipping=shipping,
            total_price=total,
        )

    # --- Fulfillment transitions ----------------------------------------------

    def change_status(self, new_status: FulfillmentStatus) -> list[SideEffect]:
        """Move to ``new_status``.

        Entering Cancelled puts the stock back; leaving Cancelled takes it
        again.  A notification goes out whenever the status really changes.
        """
        old_status = self.status
        self.status = new_status

        effects: list[SideEffect] = []
        cancelled = FulfillmentStatus.CANCELLED
        if new_status is cancelled and old_status is not cancelled:
            effects.append(StockAdjustment(self._require_id(), StockDirection.RESTORE))
        elif old_status is cancelled and new_status is not cancelled:
            effects.append(StockAdjustment(self._require_id(), StockDirection.DEDUCT))

        if new_status is not old_status:
            effects.append(
                Notification(
                    order_id=self._require_id(),
                    kind=NotificationKind.ORDER_STATUS_CHANGE,
                    context={
                        "order_number": self.order_number,
                        "old_status": old_status.value,
                        "new_status": new_status.value,
                    },
                )
            )
        return effects

    # --- Payment transitions --------------------------------------------------

    def submit_payment(self, journal_number: str, proof_ref: str) -> list[SideEffect]:
        """Customer confirms payment: always goes back to review.

        Journal-number uniqueness is a cross-order rule and is checked by
        the application handler before saving.
        """
        if not journal_number or not journal_number.strip():
            raise InvalidInputError("Payment journal number is required")
        if not proof_ref or not proof_ref.strip():
            raise InvalidInputError("Payment proof image is required")

        old_status = self.payment_status
        self.payment_journal_number = journal_number.strip()
        self.payment_proof_image = proof_ref
        self.payment_status = PaymentStatus.REVIEW
        self.is_verified = False
        return self._payment_effects(old_status)

    def verify_payment(
        self,
        payment_status: PaymentStatus | None = None,
        verified: bool | None = None,
    ) -> list[SideEffect]:
        """Admin review of a payment.  ``verified=True`` wins over the status."""
        old_status = self.payment_status
        if payment_status is not None:
            self.payment_status = payment_status
        if verified is not None:
            self.is_verified = verified
        if verified is True:
            self.payment_status = PaymentStatus.VERIFIED
        return self._payment_effects(old_status)

    # --- Computed properties --------------------------------------------------

    @property
    def order_number(self) -> str:
        """Short reference shown to customers."""
        return f"{self._require_id():08d}"[-8:]

    @property
    def is_cancelled(self) -> bool:
        return self.status is FulfillmentStatus.CANCELLED

    # --- Internal helpers -----------------------------------------------------

    def _payment_effects(self, old_status: PaymentStatus) -> list[SideEffect]:
        new_status = self.payment_status
        if new_status is old_status:
            return []
        kind = _PAYMENT_NOTIFICATIONS.get(new_status)
        if kind is None:
            return []
        return [
            Notification(
                order_id=self._require_id(),
                kind=kind,
                context={"order_number": self.order_number},
            )
        ]

    def _require_id(self) -> int:
        if self.id is None:
            raise InvalidInputError("Order has not been saved yet")
        return self.id
