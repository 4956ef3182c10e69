"""Tests for SideEffectDispatcher: best-effort stock moves and notifications."""

import logging

from shopcore.application.side_effects import SideEffectDispatcher
from shopcore.domain.model.order import LineItem, Order, ShippingInfo
from shopcore.domain.model.product import Product, Variant
from shopcore.domain.model.side_effects import (
    Notification,
    NotificationKind,
    StockAdjustment,
    StockDirection,
)
from shopcore.domain.model.user import User
from shopcore.domain.model.value_objects import Money, Quantity
from shopcore.domain.model.variant_selector import VariantSelector
from shopcore.domain.service.stock_ledger import StockLedger
from tests.fakes import (
    FailingNotifier,
    FakeLineItemRepository,
    FakeProductRepository,
    FakeUserRepository,
    RecordingNotifier,
)


def _setup(users=None, notifier=None):
    product_repo = FakeProductRepository([
        Product.create(
            id="1", name="Gho", category_id="textiles",
            variants=[Variant(name="Size", value="L", price=Money.of("100"), stock=2)],
        ),
        Product.create(
            id="2", name="Tea", category_id="grocery",
            variants=[Variant(name="Weight", value="250g", price=Money.of("25"), stock=2)],
        ),
    ])
    line_item_repo = FakeLineItemRepository()
    ids = []
    for product_id, name, value in [("1", "Gho", "L"), ("404", "Gone", "X"), ("2", "Tea", "250g")]:
        item = LineItem(
            id=line_item_repo.next_id(),
            product_id=product_id,
            product_name=name,
            variant=VariantSelector(value=value),
            quantity=Quantity(1),
            unit_price=Money.of("10"),
        )
        line_item_repo.save(item)
        ids.append(item.id)

    order = Order(
        id=7, user_id="u1", line_item_ids=ids + [99],
        shipping=ShippingInfo(address1="a", city="c", phone="p", country="Bhutan"),
        total_price=Money.of("30"),
    )
    notifier = notifier or RecordingNotifier()
    dispatcher = SideEffectDispatcher(
        line_item_repo,
        FakeUserRepository(users if users is not None else [User("u1", "Pema", "ExponentPushToken[a]")]),
        StockLedger(product_repo),
        notifier,
    )
    return dispatcher, order, product_repo, notifier


class TestStockAdjustments:

    def test_each_line_item_adjusted_independently(self, caplog):
        dispatcher, order, product_repo, _ = _setup()

        with caplog.at_level(logging.WARNING, logger="shopcore.side_effects"):
            dispatcher.dispatch(order, [StockAdjustment(7, StockDirection.RESTORE)])

        # Product 404 and line item 99 fail; the others still go through
        assert product_repo.get_by_id("1").variants[0].stock == 3
        assert product_repo.get_by_id("2").variants[0].stock == 3
        assert "line item 99 is missing" in caplog.text
        assert "could not restore stock for Gone" in caplog.text

    def test_deduct_direction(self):
        dispatcher, order, product_repo, _ = _setup()
        dispatcher.adjust_stock(order, StockDirection.DEDUCT)
        assert product_repo.get_by_id("1").variants[0].stock == 1


class TestNotifications:

    def _status_change(self) -> Notification:
        return Notification(7, NotificationKind.ORDER_STATUS_CHANGE, {"order_number": "00000007"})

    def test_sent_to_owner_token(self):
        dispatcher, order, _, notifier = _setup()
        dispatcher.dispatch(order, [self._status_change()])
        assert notifier.sent == [
            ("ExponentPushToken[a]", NotificationKind.ORDER_STATUS_CHANGE, {"order_number": "00000007"})
        ]

    def test_skipped_without_token(self):
        dispatcher, order, _, notifier = _setup(users=[User("u1", "Pema")])
        dispatcher.dispatch(order, [self._status_change()])
        assert notifier.sent == []

    def test_skipped_for_unknown_user(self):
        dispatcher, order, _, notifier = _setup(users=[])
        dispatcher.dispatch(order, [self._status_change()])
        assert notifier.sent == []

    def test_failure_is_logged_and_remaining_effects_run(self, caplog):
        notifier = FailingNotifier()
        dispatcher, order, product_repo, _ = _setup(notifier=notifier)

        with caplog.at_level(logging.ERROR, logger="shopcore.side_effects"):
            dispatcher.dispatch(order, [
                self._status_change(),
                StockAdjustment(7, StockDirection.RESTORE),
            ])

        assert notifier.attempts == 1
        assert "push notification order_status_change failed" in caplog.text
        assert product_repo.get_by_id("1").variants[0].stock == 3
