"""Application service: Verify Payment use case (admin)."""

from __future__ import annotations

import logging

from shopcore.application.dto import OrderDTO
from shopcore.application.side_effects import SideEffectDispatcher
from shopcore.domain.exceptions import OrderNotFoundError
from shopcore.domain.model.order import PaymentStatus
from shopcore.domain.repository.order_repository import OrderRepository

_module_logger = logging.getLogger("shopcore.payments")


class VerifyPaymentHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        dispatcher: SideEffectDispatcher,
        logger: logging.Logger | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._dispatcher = dispatcher
        self._log = logger or _module_logger

    def handle(
        self,
        order_id: int,
        payment_status: str | None = None,
        verified: bool | None = None,
    ) -> OrderDTO:
        """Set the payment status and/or the verified flag.

        ``verified=True`` always ends in ``verified``, even if another
        status was passed alongside it.
        """
        status = PaymentStatus.parse(payment_status) if payment_status is not None else None

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        effects = order.verify_payment(payment_status=status, verified=verified)
        self._order_repo.save(order)
        self._log.info("Order #%s payment status %s (verified=%s)",
                       order_id, order.payment_status.value, order.is_verified)

        self._dispatcher.dispatch(order, effects)
        return OrderDTO.from_domain(order)
