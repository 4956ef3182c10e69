"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from shopcore.domain.model.order import (
    FulfillmentStatus,
    Order,
    PaymentStatus,
    ShippingInfo,
)
from shopcore.domain.model.value_objects import Money
from shopcore.domain.repository.order_repository import OrderRepository
from shopcore.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._file.load()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        return self._newest_first(self._to_domain(raw) for raw in self._file.load())

    def list_by_user(self, user_id: str) -> list[Order]:
        return self._newest_first(
            self._to_domain(raw) for raw in self._file.load() if raw["user"] == user_id
        )

    def find_by_journal_number(
        self, journal_number: str, exclude_order_id: int | None = None
    ) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == exclude_order_id:
                continue
            if raw.get("payment_journal_number") == journal_number:
                return self._to_domain(raw)
        return None

    def save(self, order: Order) -> None:
        with self._file.locked():
            orders = self._file.load()

            if order.id is None:
                order.id = self.next_id()

            # Upsert: replace if exists, otherwise append
            replaced = False
            for i, raw in enumerate(orders):
                if raw["id"] == order.id:
                    orders[i] = self._to_raw(order)
                    replaced = True
                    break
            if not replaced:
                orders.append(self._to_raw(order))

            self._file.persist(orders)

    def delete(self, order_id: int) -> None:
        with self._file.locked():
            orders = self._file.load()
            remaining = [raw for raw in orders if raw["id"] != order_id]
            if len(remaining) != len(orders):
                self._file.persist(remaining)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _newest_first(orders) -> list[Order]:
        return sorted(orders, key=lambda o: o.date_ordered, reverse=True)

    @staticmethod
    def _to_raw(order: Order) -> dict:
        s = order.shipping
        return {
            "id": order.id,
            "user": order.user_id,
            "orderItems": list(order.line_item_ids),
            "shippingAddress1": s.address1,
            "shippingAddress2": s.address2,
            "city": s.city,
            "zip": s.zip,
            "country": s.country,
            "phone": s.phone,
            "status": order.status.value,
            "totalPrice": str(order.total_price.amount),
            "currency": order.total_price.currency,
            "payment_status": order.payment_status.value,
            "is_verified": order.is_verified,
            "payment_journal_number": order.payment_journal_number,
            "payment_proof_image": order.payment_proof_image,
            "dateOrdered": order.date_ordered.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        return Order(
            id=raw["id"],
            user_id=raw["user"],
            line_item_ids=list(raw["orderItems"]),
            shipping=ShippingInfo(
                address1=raw["shippingAddress1"],
                address2=raw.get("shippingAddress2", ""),
                city=raw["city"],
                zip=raw.get("zip", ""),
                country=raw["country"],
                phone=raw["phone"],
            ),
            total_price=Money(Decimal(raw["totalPrice"]), raw.get("currency", "BTN")),
            status=FulfillmentStatus(raw["status"]),
            payment_status=PaymentStatus(raw.get("payment_status", "pending")),
            is_verified=raw.get("is_verified", False),
            payment_journal_number=raw.get("payment_journal_number"),
            payment_proof_image=raw.get("payment_proof_image"),
            date_ordered=datetime.fromisoformat(raw["dateOrdered"]),
        )
