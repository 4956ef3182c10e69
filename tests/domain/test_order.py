"""Unit tests for the Order aggregate and its two status machines.

Transitions are pure: they change the aggregate and hand back the side
effects, without touching any repository or collaborator.
"""

import pytest

from shopcore.domain.exceptions import InvalidInputError
from shopcore.domain.model.order import (
    FulfillmentStatus,
    LineItem,
    Order,
    PaymentStatus,
    ShippingInfo,
)
from shopcore.domain.model.side_effects import (
    Notification,
    NotificationKind,
    StockAdjustment,
    StockDirection,
)
from shopcore.domain.model.value_objects import Money, Quantity
from shopcore.domain.model.variant_selector import VariantSelector


def _shipping() -> ShippingInfo:
    return ShippingInfo(address1="Norzin Lam", city="Thimphu", phone="17123456", country="Bhutan")


def _item(item_id: int = 1, qty: int = 1, price: str = "100") -> LineItem:
    return LineItem(
        id=item_id,
        product_id="1",
        product_name="Kira",
        variant=VariantSelector(name="Size", value="L", price=Money.of(price)),
        quantity=Quantity(qty),
        unit_price=Money.of(price),
    )


def _saved_order(**kwargs) -> Order:
    order = Order.create("u1", [_item()], _shipping())
    order.id = 42
    for key, value in kwargs.items():
        setattr(order, key, value)
    return order


class TestOrderCreation:

    def test_total_is_sum_of_line_items(self):
        order = Order.create("u1", [_item(1, 3, "100"), _item(2, 2, "25.50")], _shipping())
        assert order.total_price == Money.of("351.00")
        assert order.line_item_ids == [1, 2]

    def test_initial_statuses(self):
        order = Order.create("u1", [_item()], _shipping())
        assert order.id is None  # assigned by repository
        assert order.status is FulfillmentStatus.PENDING
        assert order.payment_status is PaymentStatus.PENDING
        assert order.is_verified is False

    def test_no_items_rejected(self):
        with pytest.raises(InvalidInputError, match="at least one item"):
            Order.create("u1", [], _shipping())

    def test_owner_required(self):
        with pytest.raises(InvalidInputError, match="owner"):
            Order.create(" ", [_item()], _shipping())

    def test_line_total(self):
        assert _item(qty=3, price="15").line_total == Money.of("45")

    def test_order_number_is_zero_padded(self):
        assert _saved_order().order_number == "00000042"


class TestShippingInfo:

    @pytest.mark.parametrize("missing", ["address1", "city", "phone", "country"])
    def test_required_fields(self, missing):
        fields = dict(address1="a", city="c", phone="p", country="Bhutan")
        fields[missing] = "  "
        with pytest.raises(InvalidInputError, match=f"Shipping {missing} is required"):
            ShippingInfo(**fields)


class TestFulfillmentTransitions:

    def test_cancel_restores_stock_and_notifies(self):
        order = _saved_order()
        effects = order.change_status(FulfillmentStatus.CANCELLED)

        assert order.status is FulfillmentStatus.CANCELLED
        assert effects[0] == StockAdjustment(42, StockDirection.RESTORE)
        assert effects[1] == Notification(
            order_id=42,
            kind=NotificationKind.ORDER_STATUS_CHANGE,
            context={"order_number": "00000042", "old_status": "Pending", "new_status": "Cancelled"},
        )

    def test_uncancel_deducts_stock(self):
        order = _saved_order(status=FulfillmentStatus.CANCELLED)
        effects = order.change_status(FulfillmentStatus.PROCESSING)
        assert StockAdjustment(42, StockDirection.DEDUCT) in effects

    def test_ordinary_transition_only_notifies(self):
        order = _saved_order(status=FulfillmentStatus.PROCESSING)
        effects = order.change_status(FulfillmentStatus.SHIPPED)
        assert len(effects) == 1
        assert effects[0].kind is NotificationKind.ORDER_STATUS_CHANGE

    def test_any_state_reachable(self):
        order = _saved_order(status=FulfillmentStatus.DELIVERED)
        order.change_status(FulfillmentStatus.PENDING)
        assert order.status is FulfillmentStatus.PENDING

    def test_same_status_has_no_effects(self):
        order = _saved_order(status=FulfillmentStatus.SHIPPED)
        assert order.change_status(FulfillmentStatus.SHIPPED) == []

    def test_cancel_twice_restores_once(self):
        order = _saved_order()
        order.change_status(FulfillmentStatus.CANCELLED)
        assert order.change_status(FulfillmentStatus.CANCELLED) == []

    def test_parse_unknown_status(self):
        with pytest.raises(InvalidInputError, match="Must be one of: Pending"):
            FulfillmentStatus.parse("Lost")


class TestPaymentSubmission:

    def test_submit_moves_to_review(self):
        order = _saved_order()
        effects = order.submit_payment(" JRN-1 ", "file:///proof.png")

        assert order.payment_status is PaymentStatus.REVIEW
        assert order.is_verified is False
        assert order.payment_journal_number == "JRN-1"
        assert order.payment_proof_image == "file:///proof.png"
        assert [e.kind for e in effects] == [NotificationKind.PAYMENT_REVIEW]

    def test_resubmission_downgrades_verified_order(self):
        order = _saved_order(payment_status=PaymentStatus.VERIFIED, is_verified=True)
        order.submit_payment("JRN-2", "proof")
        assert order.payment_status is PaymentStatus.REVIEW
        assert order.is_verified is False

    def test_resubmission_while_in_review_does_not_notify(self):
        order = _saved_order(payment_status=PaymentStatus.REVIEW)
        assert order.submit_payment("JRN-2", "proof") == []

    def test_journal_number_required(self):
        with pytest.raises(InvalidInputError, match="journal number is required"):
            _saved_order().submit_payment("", "proof")

    def test_proof_required(self):
        with pytest.raises(InvalidInputError, match="proof image is required"):
            _saved_order().submit_payment("JRN-1", "")


class TestPaymentVerification:

    def test_verified_flag_wins_over_status(self):
        order = _saved_order(payment_status=PaymentStatus.REVIEW)
        effects = order.verify_payment(payment_status=PaymentStatus.REJECTED, verified=True)

        assert order.payment_status is PaymentStatus.VERIFIED
        assert order.is_verified is True
        assert [e.kind for e in effects] == [NotificationKind.PAYMENT_VERIFIED]

    def test_reject(self):
        order = _saved_order(payment_status=PaymentStatus.REVIEW)
        effects = order.verify_payment(payment_status=PaymentStatus.REJECTED)
        assert order.payment_status is PaymentStatus.REJECTED
        assert [e.kind for e in effects] == [NotificationKind.PAYMENT_REJECTED]

    def test_back_to_pending_is_silent(self):
        order = _saved_order(payment_status=PaymentStatus.REVIEW)
        assert order.verify_payment(payment_status=PaymentStatus.PENDING) == []

    def test_unchanged_status_is_silent(self):
        order = _saved_order(payment_status=PaymentStatus.VERIFIED, is_verified=True)
        assert order.verify_payment(verified=True) == []

    def test_unverify_keeps_status(self):
        order = _saved_order(payment_status=PaymentStatus.VERIFIED, is_verified=True)
        order.verify_payment(verified=False)
        assert order.is_verified is False
        assert order.payment_status is PaymentStatus.VERIFIED

    def test_parse_unknown_payment_status(self):
        with pytest.raises(InvalidInputError, match="Invalid payment status"):
            PaymentStatus.parse("paid")
