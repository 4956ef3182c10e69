"""Integration tests for the SetFulfillmentStatus use case."""

import pytest

from shopcore.application.create_order import CreateOrderHandler
from shopcore.application.dto import CartEntry, ShippingDetails
from shopcore.application.side_effects import SideEffectDispatcher
from shopcore.application.update_order_status import SetFulfillmentStatusHandler
from shopcore.domain.exceptions import InvalidInputError, OrderNotFoundError
from shopcore.domain.model.product import Product, Variant
from shopcore.domain.model.side_effects import NotificationKind
from shopcore.domain.model.user import User
from shopcore.domain.model.value_objects import Money
from shopcore.domain.model.variant_selector import VariantSelector
from shopcore.domain.service.stock_ledger import StockLedger
from tests.fakes import (
    FailingNotifier,
    FakeLineItemRepository,
    FakeOrderRepository,
    FakeProductRepository,
    FakeUserRepository,
    RecordingNotifier,
)

TOKEN = "ExponentPushToken[abc123]"


def _setup(notifier=None):
    """Place one order for 3 x Size L (stock 5) and return the pieces."""
    product_repo = FakeProductRepository([
        Product.create(
            id="1", name="Gho", category_id="textiles",
            variants=[Variant(name="Size", value="L", price=Money.of("100"), stock=5)],
        )
    ])
    order_repo = FakeOrderRepository()
    line_item_repo = FakeLineItemRepository()
    user_repo = FakeUserRepository([User(id="u1", name="Pema", push_token=TOKEN)])
    ledger = StockLedger(product_repo)
    notifier = notifier or RecordingNotifier()
    dispatcher = SideEffectDispatcher(line_item_repo, user_repo, ledger, notifier)

    dto = CreateOrderHandler(order_repo, line_item_repo, product_repo, ledger).handle(
        [CartEntry("1", 3, VariantSelector.by_value("L"))],
        ShippingDetails(address1="Norzin Lam", city="Thimphu", phone="17123456"),
        "u1",
    )
    handler = SetFulfillmentStatusHandler(order_repo, dispatcher)
    return handler, dto.id, order_repo, product_repo, notifier


def _stock(product_repo) -> int:
    return product_repo.get_by_id("1").variants[0].stock


class TestSetFulfillmentStatus:

    def test_ordinary_change_persists_and_notifies(self):
        handler, order_id, order_repo, product_repo, notifier = _setup()
        dto = handler.handle(order_id, "Shipped")

        assert dto.status == "Shipped"
        assert order_repo.get_by_id(order_id).status.value == "Shipped"
        assert _stock(product_repo) == 2
        token, kind, context = notifier.sent[0]
        assert token == TOKEN
        assert kind is NotificationKind.ORDER_STATUS_CHANGE
        assert context["old_status"] == "Pending"
        assert context["new_status"] == "Shipped"

    def test_cancel_and_uncancel_round_trip(self):
        handler, order_id, _, product_repo, _ = _setup()
        assert _stock(product_repo) == 2

        handler.handle(order_id, "Cancelled")
        assert _stock(product_repo) == 5

        handler.handle(order_id, "Processing")
        assert _stock(product_repo) == 2

    def test_repeated_cancel_restores_once(self):
        handler, order_id, _, product_repo, notifier = _setup()
        handler.handle(order_id, "Cancelled")
        handler.handle(order_id, "Cancelled")

        assert _stock(product_repo) == 5
        assert len(notifier.sent) == 1

    def test_unchanged_status_sends_nothing(self):
        handler, order_id, _, _, notifier = _setup()
        handler.handle(order_id, "Pending")
        assert notifier.sent == []

    def test_notification_failure_does_not_undo_change(self):
        notifier = FailingNotifier()
        handler, order_id, order_repo, _, _ = _setup(notifier)

        dto = handler.handle(order_id, "Delivered")

        assert dto.status == "Delivered"
        assert order_repo.get_by_id(order_id).status.value == "Delivered"
        assert notifier.attempts == 1

    def test_invalid_status(self):
        handler, order_id, order_repo, _, _ = _setup()
        with pytest.raises(InvalidInputError, match="Invalid status"):
            handler.handle(order_id, "Lost")
        assert order_repo.get_by_id(order_id).status.value == "Pending"

    def test_unknown_order(self):
        handler, _, _, _, _ = _setup()
        with pytest.raises(OrderNotFoundError):
            handler.handle(999, "Shipped")
