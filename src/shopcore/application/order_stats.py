"""Application service: order statistics (query)."""

from __future__ import annotations

from shopcore.domain.model.value_objects import Money
from shopcore.domain.repository.order_repository import OrderRepository


class OrderStatsHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def total_sales(self) -> list[Money]:
        """Sum of all order totals, one amount per currency (sorted by code).

        With no orders at all this is a single zero in the default currency.
        """
        totals: dict[str, Money] = {}
        for order in self._order_repo.list_all():
            currency = order.total_price.currency
            totals[currency] = totals.get(currency, Money.zero(currency)) + order.total_price
        if not totals:
            return [Money.zero()]
        return [totals[currency] for currency in sorted(totals)]

    def order_count(self) -> int:
        return len(self._order_repo.list_all())
