"""Integration tests for the ConfirmPayment and VerifyPayment use cases."""

import pytest

from shopcore.application.confirm_payment import ConfirmPaymentHandler
from shopcore.application.side_effects import SideEffectDispatcher
from shopcore.application.verify_payment import VerifyPaymentHandler
from shopcore.domain.exceptions import (
    DuplicateJournalNumberError,
    InvalidInputError,
    OrderNotFoundError,
)
from shopcore.domain.model.order import (
    LineItem,
    Order,
    PaymentStatus,
    ShippingInfo,
)
from shopcore.domain.model.side_effects import NotificationKind
from shopcore.domain.model.user import User
from shopcore.domain.model.value_objects import Money, Quantity
from shopcore.domain.model.variant_selector import VariantSelector
from shopcore.domain.service.stock_ledger import StockLedger
from tests.fakes import (
    FakeLineItemRepository,
    FakeOrderRepository,
    FakeProductRepository,
    FakeUserRepository,
    RecordingNotifier,
)


def _place_order(order_repo: FakeOrderRepository, line_item_repo: FakeLineItemRepository) -> int:
    item = LineItem(
        id=line_item_repo.next_id(),
        product_id="1",
        product_name="Gho",
        variant=VariantSelector(name="Size", value="L", price=Money.of("100")),
        quantity=Quantity(1),
        unit_price=Money.of("100"),
    )
    line_item_repo.save(item)
    order = Order.create(
        "u1", [item],
        ShippingInfo(address1="Norzin Lam", city="Thimphu", phone="17123456", country="Bhutan"),
    )
    order_repo.save(order)
    return order.id


def _setup():
    order_repo = FakeOrderRepository()
    line_item_repo = FakeLineItemRepository()
    notifier = RecordingNotifier()
    dispatcher = SideEffectDispatcher(
        line_item_repo,
        FakeUserRepository([User(id="u1", name="Pema", push_token="ExponentPushToken[x]")]),
        StockLedger(FakeProductRepository()),
        notifier,
    )
    confirm = ConfirmPaymentHandler(order_repo, dispatcher)
    verify = VerifyPaymentHandler(order_repo, dispatcher)
    first = _place_order(order_repo, line_item_repo)
    second = _place_order(order_repo, line_item_repo)
    return confirm, verify, order_repo, notifier, first, second


class TestConfirmPayment:

    def test_moves_to_review(self):
        confirm, _, order_repo, notifier, first, _ = _setup()
        dto = confirm.handle(first, "JRN-001", "file:///uploads/payment-proof-1.png")

        assert dto.payment_status == "review"
        assert dto.is_verified is False
        saved = order_repo.get_by_id(first)
        assert saved.payment_journal_number == "JRN-001"
        assert saved.payment_proof_image == "file:///uploads/payment-proof-1.png"
        assert notifier.kinds == [NotificationKind.PAYMENT_REVIEW]

    def test_duplicate_journal_number_rejected(self):
        confirm, _, order_repo, _, first, second = _setup()
        confirm.handle(first, "JRN-001", "proof-a")

        with pytest.raises(DuplicateJournalNumberError, match="JRN-001"):
            confirm.handle(second, "JRN-001", "proof-b")

        untouched = order_repo.get_by_id(second)
        assert untouched.payment_status is PaymentStatus.PENDING
        assert untouched.payment_journal_number is None

    def test_same_order_may_resubmit_its_journal_number(self):
        confirm, _, _, _, first, _ = _setup()
        confirm.handle(first, "JRN-001", "proof-a")
        dto = confirm.handle(first, "JRN-001", "proof-b")
        assert dto.payment_proof_image == "proof-b"

    def test_resubmission_after_verification_goes_back_to_review(self, caplog):
        confirm, verify, _, _, first, _ = _setup()
        confirm.handle(first, "JRN-001", "proof-a")
        verify.handle(first, verified=True)

        with caplog.at_level("WARNING", logger="shopcore.payments"):
            dto = confirm.handle(first, "JRN-002", "proof-b")

        assert dto.payment_status == "review"
        assert dto.is_verified is False
        assert "already verified" in caplog.text

    def test_missing_journal_number(self):
        confirm, _, _, _, first, _ = _setup()
        with pytest.raises(InvalidInputError, match="journal number is required"):
            confirm.handle(first, "   ", "proof")

    def test_unknown_order(self):
        confirm, _, _, _, _, _ = _setup()
        with pytest.raises(OrderNotFoundError):
            confirm.handle(404, "JRN-001", "proof")


class TestVerifyPayment:

    def test_verified_flag_wins(self):
        confirm, verify, order_repo, notifier, first, _ = _setup()
        confirm.handle(first, "JRN-001", "proof")

        dto = verify.handle(first, payment_status="rejected", verified=True)

        assert dto.payment_status == "verified"
        assert dto.is_verified is True
        assert order_repo.get_by_id(first).payment_status is PaymentStatus.VERIFIED
        assert notifier.kinds[-1] is NotificationKind.PAYMENT_VERIFIED

    def test_reject_notifies(self):
        confirm, verify, _, notifier, first, _ = _setup()
        confirm.handle(first, "JRN-001", "proof")
        verify.handle(first, payment_status="rejected")
        assert notifier.kinds == [
            NotificationKind.PAYMENT_REVIEW,
            NotificationKind.PAYMENT_REJECTED,
        ]

    def test_no_change_no_notification(self):
        _, verify, _, notifier, first, _ = _setup()
        verify.handle(first, payment_status="pending")
        assert notifier.sent == []

    def test_invalid_payment_status(self):
        _, verify, _, _, first, _ = _setup()
        with pytest.raises(InvalidInputError, match="Invalid payment status"):
            verify.handle(first, payment_status="paid")
