"""Executes the side effects returned by order transitions.

Everything here is best-effort.  By the time effects run, the order
itself has been saved; a failing stock adjustment or notification is
logged and the remaining effects still run.
"""

from __future__ import annotations

import logging

from shopcore.domain.exceptions import DomainException
from shopcore.domain.model.order import Order
from shopcore.domain.model.side_effects import (
    Notification,
    SideEffect,
    StockAdjustment,
    StockDirection,
)
from shopcore.domain.notifier import Notifier
from shopcore.domain.repository.line_item_repository import LineItemRepository
from shopcore.domain.repository.user_repository import UserRepository
from shopcore.domain.service.stock_ledger import StockLedger

_module_logger = logging.getLogger("shopcore.side_effects")


class SideEffectDispatcher:

    def __init__(
        self,
        line_item_repo: LineItemRepository,
        user_repo: UserRepository,
        ledger: StockLedger,
        notifier: Notifier,
        logger: logging.Logger | None = None,
    ) -> None:
        self._line_item_repo = line_item_repo
        self._user_repo = user_repo
        self._ledger = ledger
        self._notifier = notifier
        self._log = logger or _module_logger

    def dispatch(self, order: Order, effects: list[SideEffect]) -> None:
        for effect in effects:
            if isinstance(effect, StockAdjustment):
                self.adjust_stock(order, effect.direction)
            elif isinstance(effect, Notification):
                self.notify(order, effect)

    def adjust_stock(self, order: Order, direction: StockDirection) -> None:
        """Apply ``direction`` to each line item independently."""
        self._log.info("Order #%s: %s stock for %d line item(s)",
                       order.id, direction.value, len(order.line_item_ids))
        for item_id in order.line_item_ids:
            item = self._line_item_repo.get_by_id(item_id)
            if item is None:
                self._log.warning("Order #%s: line item %s is missing, skipped",
                                  order.id, item_id)
                continue
            try:
                if direction is StockDirection.RESTORE:
                    self._ledger.restore(item.product_id, item.variant, item.quantity.value)
                else:
                    self._ledger.deduct(item.product_id, item.variant, item.quantity.value)
            except DomainException as exc:
                self._log.error("Order #%s: could not %s stock for %s: %s",
                                order.id, direction.value, item.product_name, exc)

    def notify(self, order: Order, notification: Notification) -> None:
        """Send to the order's owner if they registered a push token."""
        user = self._user_repo.get_by_id(order.user_id)
        if user is None or not user.push_token:
            self._log.debug("Order #%s: no push token for user %s, %s not sent",
                            order.id, order.user_id, notification.kind.value)
            return
        try:
            self._notifier.notify(user.push_token, notification.kind, notification.context)
        except Exception:
            self._log.exception("Order #%s: push notification %s failed",
                                order.id, notification.kind.value)
