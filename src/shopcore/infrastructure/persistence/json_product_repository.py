"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from shopcore.domain.exceptions import ConcurrentModificationError
from shopcore.domain.model.product import Availability, Dimension, Product, Variant
from shopcore.domain.model.value_objects import Money
from shopcore.domain.repository.product_repository import ProductRepository
from shopcore.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_name(self, name: str) -> Product | None:
        for raw in self._file.load():
            if raw["name"].lower() == name.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, product: Product) -> None:
        with self._file.locked():
            records = self._file.load()
            index = next(
                (i for i, raw in enumerate(records) if raw["id"] == product.id), None
            )
            stored_version = records[index].get("version", 0) if index is not None else 0
            if stored_version != product.version:
                raise ConcurrentModificationError(
                    f"Product '{product.id}' is at version {stored_version}, "
                    f"write was based on version {product.version}"
                )

            product.version += 1
            raw = self._to_raw(product)
            if index is None:
                records.append(raw)
            else:
                records[index] = raw
            self._file.persist(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "brand": product.brand,
            "image": product.image,
            "category": product.category_id,
            "dimension": product.dimension.value,
            "inStock": product.availability.value,
            "version": product.version,
            "dateCreated": product.created_at.isoformat(),
            "features": [
                {
                    "name": v.name,
                    "value": v.value,
                    "price": str(v.price.amount),
                    "currency": v.price.currency,
                    "stock": v.stock,
                }
                for v in product.variants
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            category_id=raw["category"],
            description=raw.get("description", ""),
            brand=raw.get("brand", ""),
            image=raw.get("image", ""),
            dimension=Dimension(raw.get("dimension", Dimension.QUANTITY.value)),
            availability=Availability(raw["inStock"]),
            version=raw.get("version", 0),
            created_at=datetime.fromisoformat(raw["dateCreated"]),
            variants=[
                Variant(
                    name=f["name"],
                    value=f["value"],
                    price=Money(Decimal(f["price"]), f["currency"]),
                    stock=f.get("stock", 0),
                )
                for f in raw.get("features", [])
            ],
        )
