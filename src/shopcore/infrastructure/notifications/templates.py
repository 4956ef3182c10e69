"""Title/body templates for customer push notifications."""

from __future__ import annotations

from shopcore.domain.model.side_effects import NotificationKind

_STATUS_MESSAGES = {
    "Processing": (
        "Order Being Processed",
        "Your order #{order_number} is now being processed.",
    ),
    "Shipped": (
        "Order Shipped",
        "Great news! Your order #{order_number} has been shipped and is on its way.",
    ),
    "Delivered": (
        "Order Delivered",
        "Your order #{order_number} has been delivered. Enjoy your purchase!",
    ),
    "Cancelled": (
        "Order Cancelled",
        "Your order #{order_number} has been cancelled. "
        "Contact support if you have questions.",
    ),
}

_GENERIC_STATUS_MESSAGE = (
    "Order Update",
    "Your order #{order_number} status has been updated to {new_status}.",
)

_PAYMENT_MESSAGES = {
    NotificationKind.PAYMENT_VERIFIED: (
        "Payment Verified",
        "Your payment for order #{order_number} has been verified. Thank you!",
    ),
    NotificationKind.PAYMENT_REJECTED: (
        "Payment Issue",
        "There was an issue verifying your payment for order #{order_number}. "
        "Please contact support.",
    ),
    NotificationKind.PAYMENT_REVIEW: (
        "Payment Under Review",
        "Your payment for order #{order_number} is being reviewed. "
        "We'll update you shortly.",
    ),
}


def render(kind: NotificationKind, context: dict[str, str]) -> tuple[str, str]:
    """Return ``(title, body)`` for a notification."""
    if kind is NotificationKind.ORDER_STATUS_CHANGE:
        title, body = _STATUS_MESSAGES.get(context.get("new_status", ""), _GENERIC_STATUS_MESSAGE)
    else:
        title, body = _PAYMENT_MESSAGES[kind]
    return title, body.format(**context)
