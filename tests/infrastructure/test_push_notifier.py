"""Tests for the push notifier and its message templates."""

import pytest

from shopcore.domain.exceptions import NotificationFailure
from shopcore.domain.model.side_effects import NotificationKind
from shopcore.infrastructure.notifications.push_notifier import PushNotifier, is_push_token
from shopcore.infrastructure.notifications.templates import render


class TestPushToken:

    @pytest.mark.parametrize("token", ["ExponentPushToken[abc]", "ExpoPushToken[a-b_c]"])
    def test_valid(self, token):
        assert is_push_token(token)

    @pytest.mark.parametrize("token", ["", "abc", "ExponentPushToken[]", "FcmToken[abc]"])
    def test_invalid(self, token):
        assert not is_push_token(token)


class TestPushNotifier:

    def test_builds_message(self):
        sent = []
        notifier = PushNotifier(transport=sent.append)
        notifier.notify(
            "ExponentPushToken[abc]",
            NotificationKind.ORDER_STATUS_CHANGE,
            {"order_number": "00000042", "old_status": "Processing", "new_status": "Shipped"},
        )

        [message] = sent
        assert message["to"] == "ExponentPushToken[abc]"
        assert message["title"] == "Order Shipped"
        assert "#00000042 has been shipped" in message["body"]
        assert message["data"]["type"] == "order_status_change"
        assert message["data"]["new_status"] == "Shipped"

    def test_rejects_invalid_token(self):
        sent = []
        with pytest.raises(NotificationFailure, match="not a valid Expo push token"):
            PushNotifier(transport=sent.append).notify(
                "device-123", NotificationKind.PAYMENT_REVIEW, {"order_number": "1"}
            )
        assert sent == []

    def test_transport_error_becomes_notification_failure(self):
        def broken(message):
            raise ConnectionError("timeout")

        with pytest.raises(NotificationFailure, match="timeout"):
            PushNotifier(transport=broken).notify(
                "ExpoPushToken[abc]", NotificationKind.PAYMENT_VERIFIED, {"order_number": "1"}
            )

    def test_default_transport_logs(self, caplog):
        with caplog.at_level("INFO", logger="shopcore.notifications"):
            PushNotifier().notify(
                "ExpoPushToken[abc]", NotificationKind.PAYMENT_REJECTED, {"order_number": "7"}
            )
        assert "Payment Issue" in caplog.text


class TestTemplates:

    def test_unknown_status_uses_generic_message(self):
        title, body = render(
            NotificationKind.ORDER_STATUS_CHANGE,
            {"order_number": "00000001", "old_status": "Shipped", "new_status": "Pending"},
        )
        assert title == "Order Update"
        assert body == "Your order #00000001 status has been updated to Pending."

    def test_payment_review(self):
        title, body = render(NotificationKind.PAYMENT_REVIEW, {"order_number": "00000003"})
        assert title == "Payment Under Review"
        assert "#00000003" in body
