"""Application service: Confirm Payment use case.

The customer submits the bank journal number and a proof image.  The
order goes to ``review`` and loses its verified flag, whatever its
payment status was before.  A journal number may only ever belong to
one order; that is checked right before the write.
"""

from __future__ import annotations

import logging

from shopcore.application.dto import OrderDTO
from shopcore.application.side_effects import SideEffectDispatcher
from shopcore.domain.exceptions import DuplicateJournalNumberError, OrderNotFoundError
from shopcore.domain.model.order import PaymentStatus
from shopcore.domain.repository.order_repository import OrderRepository

_module_logger = logging.getLogger("shopcore.payments")


class ConfirmPaymentHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        dispatcher: SideEffectDispatcher,
        logger: logging.Logger | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._dispatcher = dispatcher
        self._log = logger or _module_logger

    def handle(self, order_id: int, journal_number: str, proof_ref: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        previous = order.payment_status
        effects = order.submit_payment(journal_number, proof_ref)

        clash = self._order_repo.find_by_journal_number(
            order.payment_journal_number, exclude_order_id=order_id  # type: ignore[arg-type]
        )
        if clash is not None:
            raise DuplicateJournalNumberError(journal_number.strip())

        if previous is PaymentStatus.VERIFIED:
            self._log.warning(
                "Order #%s was already verified; resubmitted payment puts it back in review",
                order_id,
            )
        self._order_repo.save(order)
        self._log.info("Order #%s payment submitted with journal number %s",
                       order_id, order.payment_journal_number)

        self._dispatcher.dispatch(order, effects)
        return OrderDTO.from_domain(order)
