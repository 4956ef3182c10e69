"""Application service: Set Fulfillment Status use case.

Any status can be set from any status.  Entering Cancelled puts the
order's stock back, leaving Cancelled takes it again; the owner is
notified of every real change.  Stock and notification effects run after
the order is saved and never undo the status change.
"""

from __future__ import annotations

import logging

from shopcore.application.dto import OrderDTO
from shopcore.application.side_effects import SideEffectDispatcher
from shopcore.domain.exceptions import OrderNotFoundError
from shopcore.domain.model.order import FulfillmentStatus
from shopcore.domain.repository.order_repository import OrderRepository

_module_logger = logging.getLogger("shopcore.orders")


class SetFulfillmentStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        dispatcher: SideEffectDispatcher,
        logger: logging.Logger | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._dispatcher = dispatcher
        self._log = logger or _module_logger

    def handle(self, order_id: int, new_status: str) -> OrderDTO:
        status = FulfillmentStatus.parse(new_status)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        old_status = order.status
        effects = order.change_status(status)
        self._order_repo.save(order)
        self._log.info("Order #%s status %s -> %s",
                       order_id, old_status.value, status.value)

        self._dispatcher.dispatch(order, effects)
        return OrderDTO.from_domain(order)
