"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcore.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Order]:
        """Return a user's orders, newest first."""

    @abstractmethod
    def find_by_journal_number(
        self, journal_number: str, exclude_order_id: int | None = None
    ) -> Order | None:
        """Return another order already carrying ``journal_number``, if any."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order (assigns an ID to new orders)."""

    @abstractmethod
    def delete(self, order_id: int) -> None:
        """Remove an order; removing a missing one is a no-op."""
