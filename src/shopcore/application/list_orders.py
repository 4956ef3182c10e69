"""Application service: List Orders use case (query)."""

from __future__ import annotations

from shopcore.application.dto import OrderDTO
from shopcore.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, user_id: str | None = None) -> list[OrderDTO]:
        """All orders, or one user's orders, newest first."""
        if user_id is None:
            orders = self._order_repo.list_all()
        else:
            orders = self._order_repo.list_by_user(user_id)
        return [OrderDTO.from_domain(order) for order in orders]
