"""Application service: Show Order use case (query)."""

from __future__ import annotations

import logging

from shopcore.application.dto import OrderDTO
from shopcore.domain.exceptions import OrderNotFoundError
from shopcore.domain.model.order import LineItem
from shopcore.domain.repository.line_item_repository import LineItemRepository
from shopcore.domain.repository.order_repository import OrderRepository

_module_logger = logging.getLogger("shopcore.orders")


class ShowOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        line_item_repo: LineItemRepository,
        logger: logging.Logger | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._line_item_repo = line_item_repo
        self._log = logger or _module_logger

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        items: list[LineItem] = []
        for item_id in order.line_item_ids:
            item = self._line_item_repo.get_by_id(item_id)
            if item is None:
                self._log.warning("Order #%s references missing line item %s",
                                  order_id, item_id)
                continue
            items.append(item)
        return OrderDTO.from_domain(order, items)
