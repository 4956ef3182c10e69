"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock moves, products are added and removed from the catalog.
Each product owns an ordered list of variants; stock is tracked per variant.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from shopcore.domain.exceptions import InvalidInputError, LedgerOperationFailure
from shopcore.domain.model.value_objects import Money
from shopcore.domain.model.variant_selector import VariantSelector


class Availability(Enum):
    IN_STOCK = "In Stock"
    OUT_OF_STOCK = "Out of Stock"


class Dimension(Enum):
    QUANTITY = "quantity"
    LENGTH = "length"


@dataclass
class Variant:
    """A priced, stocked option of a product, e.g. Size / Large."""

    name: str
    value: str
    price: Money
    stock: int = 0

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise InvalidInputError(
                f"Stock for variant {self.name}/{self.value} cannot be negative"
            )

    @property
    def label(self) -> str:
        return self.value or self.name


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - every variant's ``stock`` is >= 0
    - ``availability`` is IN_STOCK iff the summed variant stock is > 0;
      it is recomputed after every stock mutation

    ``version`` is bumped by the repository on every successful write and
    is what conditional writes compare against.
    """

    id: str
    name: str
    category_id: str
    variants: list[Variant] = field(default_factory=list)
    description: str = ""
    brand: str = ""
    image: str = ""
    dimension: Dimension = Dimension.QUANTITY
    availability: Availability = Availability.IN_STOCK
    version: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        id: str,
        name: str,
        category_id: str,
        variants: list[Variant],
        description: str = "",
        brand: str = "",
    ) -> Product:
        if not name or not name.strip():
            raise InvalidInputError("Product name is required")
        if not category_id or not category_id.strip():
            raise InvalidInputError("Product category is required")
        product = Product(
            id=id,
            name=name.strip(),
            category_id=category_id.strip(),
            variants=list(variants),
            description=description,
            brand=brand,
        )
        product.refresh_availability()
        return product

    # --- Stock ----------------------------------------------------------------

    @property
    def total_stock(self) -> int:
        return sum(v.stock for v in self.variants)

    @property
    def in_stock(self) -> bool:
        return self.availability is Availability.IN_STOCK

    def refresh_availability(self) -> None:
        self.availability = (
            Availability.IN_STOCK if self.total_stock > 0 else Availability.OUT_OF_STOCK
        )

    def resolve_variant(self, selector: VariantSelector) -> Variant | None:
        return selector.resolve(self.variants)

    def deduct_stock(self, selector: VariantSelector, quantity: int) -> Variant:
        """Take ``quantity`` from the selected variant, floored at zero."""
        variant = self._require_variant(selector)
        variant.stock = max(0, variant.stock - quantity)
        self.refresh_availability()
        return variant

    def deduct_stock_exact(self, selector: VariantSelector, quantity: int) -> Variant | None:
        """Take exactly ``quantity`` or nothing.

        Returns None, leaving the product untouched, when the selected
        variant holds less than ``quantity``.
        """
        variant = self._require_variant(selector)
        if variant.stock < quantity:
            return None
        variant.stock -= quantity
        self.refresh_availability()
        return variant

    def restore_stock(self, selector: VariantSelector, quantity: int) -> Variant:
        variant = self._require_variant(selector)
        variant.stock += quantity
        self.refresh_availability()
        return variant

    def set_stock(self, selector: VariantSelector, stock: int) -> Variant:
        if stock < 0:
            raise InvalidInputError("Stock cannot be negative")
        variant = self._require_variant(selector)
        variant.stock = stock
        self.refresh_availability()
        return variant

    # --- Pricing --------------------------------------------------------------

    def update_variant_price(self, selector: VariantSelector, new_price: Money) -> Variant:
        """Change a variant's price.

        This does NOT affect any existing orders because line items
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise InvalidInputError("Variant price must be greater than zero")
        variant = self._require_variant(selector)
        variant.price = new_price
        return variant

    # --- Internal helpers -----------------------------------------------------

    def _require_variant(self, selector: VariantSelector) -> Variant:
        variant = self.resolve_variant(selector)
        if variant is None:
            raise LedgerOperationFailure(f"No variants found for product: {self.name}")
        return variant
