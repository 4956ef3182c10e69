"""Application service: Delete Order use case.

Stock held by the order goes back first (unless the order is already
Cancelled, which has put it back), then the line items and the order are
removed.
"""

from __future__ import annotations

import logging

from shopcore.application.side_effects import SideEffectDispatcher
from shopcore.domain.exceptions import OrderNotFoundError
from shopcore.domain.model.side_effects import StockDirection
from shopcore.domain.repository.line_item_repository import LineItemRepository
from shopcore.domain.repository.order_repository import OrderRepository

_module_logger = logging.getLogger("shopcore.orders")


class DeleteOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        line_item_repo: LineItemRepository,
        dispatcher: SideEffectDispatcher,
        logger: logging.Logger | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._line_item_repo = line_item_repo
        self._dispatcher = dispatcher
        self._log = logger or _module_logger

    def handle(self, order_id: int) -> None:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        if not order.is_cancelled:
            self._log.info("Restoring stock before deleting order #%s", order_id)
            self._dispatcher.adjust_stock(order, StockDirection.RESTORE)

        for item_id in order.line_item_ids:
            self._line_item_repo.delete(item_id)
        self._order_repo.delete(order_id)
        self._log.info("Order #%s deleted", order_id)
