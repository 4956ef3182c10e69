"""Variant selection policy.

A cart entry names the variant it wants with a ``VariantSelector``: any of
the label pair (name, value) and the price seen by the customer.  Resolving a
selector against a product walks ``MATCH_PRECEDENCE`` in order and stops at
the first strategy that finds a variant.  ``FIRST_VARIANT`` is the fallback
and always matches when the product has at least one variant.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from shopcore.domain.model.value_objects import Money

if TYPE_CHECKING:
    from shopcore.domain.model.product import Variant


class MatchStrategy(Enum):
    BY_VALUE = "by_value"
    BY_NAME = "by_name"
    BY_PRICE = "by_price"
    FIRST_VARIANT = "first_variant"


MATCH_PRECEDENCE: tuple[MatchStrategy, ...] = (
    MatchStrategy.BY_VALUE,
    MatchStrategy.BY_NAME,
    MatchStrategy.BY_PRICE,
    MatchStrategy.FIRST_VARIANT,
)


@dataclass(frozen=True)
class VariantSelector:
    """Snapshot of the variant a customer picked.

    Also stored on line items, so it doubles as the label/price record
    captured at order time.
    """

    name: str | None = None
    value: str | None = None
    price: Money | None = None

    # --- Constructors ---------------------------------------------------------

    @classmethod
    def by_value(cls, value: str) -> VariantSelector:
        return cls(value=value)

    @classmethod
    def by_name(cls, name: str) -> VariantSelector:
        return cls(name=name)

    @classmethod
    def by_price(cls, price: Money) -> VariantSelector:
        return cls(price=price)

    @classmethod
    def first_variant(cls) -> VariantSelector:
        return cls()

    # --- Resolution -----------------------------------------------------------

    @property
    def label(self) -> str:
        return self.value or self.name or (str(self.price) if self.price else "default")

    def resolve(self, variants: list[Variant]) -> Variant | None:
        variant, _ = self.resolve_with_strategy(variants)
        return variant

    def resolve_with_strategy(
        self, variants: list[Variant]
    ) -> tuple[Variant | None, MatchStrategy | None]:
        """Return the matching variant and the strategy that found it."""
        for strategy in MATCH_PRECEDENCE:
            variant = self._apply(strategy, variants)
            if variant is not None:
                return variant, strategy
        return None, None

    def _apply(self, strategy: MatchStrategy, variants: list[Variant]) -> Variant | None:
        if strategy is MatchStrategy.FIRST_VARIANT:
            return variants[0] if variants else None

        if strategy is MatchStrategy.BY_VALUE:
            wanted, attr = self.value, "value"
        elif strategy is MatchStrategy.BY_NAME:
            wanted, attr = self.name, "name"
        else:
            wanted, attr = self.price, "price"

        if wanted is None:
            return None
        for variant in variants:
            if getattr(variant, attr) == wanted:
                return variant
        return None
