"""JSON-file-backed implementation of LineItemRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from shopcore.domain.model.order import LineItem
from shopcore.domain.model.value_objects import Money, Quantity
from shopcore.domain.model.variant_selector import VariantSelector
from shopcore.domain.repository.line_item_repository import LineItemRepository
from shopcore.infrastructure.persistence.json_file import JsonFile


class JsonLineItemRepository(LineItemRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)
        # IDs handed out but not yet saved; keeps next_id() unique until save()
        self._reserved: set[int] = set()

    # --- LineItemRepository interface -----------------------------------------

    def next_id(self) -> int:
        with self._file.locked():
            used = {raw["id"] for raw in self._file.load()} | self._reserved
            new_id = max(used, default=0) + 1
            self._reserved.add(new_id)
            return new_id

    def get_by_id(self, item_id: int) -> LineItem | None:
        for raw in self._file.load():
            if raw["id"] == item_id:
                return self._to_domain(raw)
        return None

    def save(self, item: LineItem) -> None:
        with self._file.locked():
            records = [raw for raw in self._file.load() if raw["id"] != item.id]
            records.append(self._to_raw(item))
            self._file.persist(records)
            self._reserved.discard(item.id)

    def delete(self, item_id: int) -> None:
        with self._file.locked():
            records = self._file.load()
            remaining = [raw for raw in records if raw["id"] != item_id]
            if len(remaining) != len(records):
                self._file.persist(remaining)
            self._reserved.discard(item_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(item: LineItem) -> dict:
        variant = item.variant
        return {
            "id": item.id,
            "product": item.product_id,
            "product_name": item.product_name,
            "quantity": item.quantity.value,
            "selectedFeature": {
                "name": variant.name,
                "value": variant.value,
                "price": str(variant.price.amount) if variant.price else None,
            },
            "unitPrice": str(item.unit_price.amount),
            "currency": item.unit_price.currency,
        }

    @staticmethod
    def _to_domain(raw: dict) -> LineItem:
        currency = raw.get("currency", "BTN")
        feature = raw.get("selectedFeature") or {}
        price = feature.get("price")
        return LineItem(
            id=raw["id"],
            product_id=raw["product"],
            product_name=raw.get("product_name", ""),
            variant=VariantSelector(
                name=feature.get("name"),
                value=feature.get("value"),
                price=Money(Decimal(price), currency) if price is not None else None,
            ),
            quantity=Quantity(raw["quantity"]),
            unit_price=Money(Decimal(raw["unitPrice"]), currency),
        )
