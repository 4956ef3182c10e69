"""Side effects emitted by order state transitions.

Transitions on the Order aggregate only describe what has to happen next.
The application layer (``SideEffectDispatcher``) carries the effects out
against the stock ledger and the notifier.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class StockDirection(Enum):
    DEDUCT = "deduct"
    RESTORE = "restore"


class NotificationKind(Enum):
    ORDER_STATUS_CHANGE = "order_status_change"
    PAYMENT_VERIFIED = "payment_verified"
    PAYMENT_REJECTED = "payment_rejected"
    PAYMENT_REVIEW = "payment_review"


@dataclass(frozen=True)
class StockAdjustment:
    """Apply ``direction`` to every line item of the order."""

    order_id: int
    direction: StockDirection


@dataclass(frozen=True)
class Notification:
    """Tell the order's owner about a change."""

    order_id: int
    kind: NotificationKind
    context: dict[str, str] = field(default_factory=dict)


SideEffect = Union[StockAdjustment, Notification]
