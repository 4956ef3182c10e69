"""Abstract repository for order line items."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcore.domain.model.order import LineItem


class LineItemRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Reserve and return a fresh line item ID."""

    @abstractmethod
    def get_by_id(self, item_id: int) -> LineItem | None:
        """Return a line item by its ID, or None if not found."""

    @abstractmethod
    def save(self, item: LineItem) -> None:
        """Persist a line item."""

    @abstractmethod
    def delete(self, item_id: int) -> None:
        """Remove a line item; removing a missing one is a no-op."""
