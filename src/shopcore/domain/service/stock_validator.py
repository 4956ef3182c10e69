"""Domain service: Stock Validator.

Pre-flight check over a whole cart.  Reads only; every problem found is
reported, so the customer can fix the cart in one go.  A variant listed
more than once is checked against the sum of its quantities.  Nothing is
reserved: the order assembler re-checks while deducting.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Protocol

from shopcore.domain.model.product import Product
from shopcore.domain.model.variant_selector import VariantSelector
from shopcore.domain.repository.product_repository import ProductRepository


class StockRequest(Protocol):
    product_id: str
    variant: VariantSelector
    quantity: int


@dataclass(frozen=True)
class StockValidation:
    valid: bool
    errors: list[str] = field(default_factory=list)


class StockValidator:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def validate(self, requests: Iterable[StockRequest]) -> StockValidation:
        """Check every request; quantities for the same variant are added up.

        Problems are reported in cart order, one per missing product and one
        per short variant.
        """
        findings: list[str | tuple[str, int]] = []
        products: dict[str, Product] = {}
        demand: dict[tuple[str, int], int] = {}

        for request in requests:
            product = products.get(request.product_id)
            if product is None:
                product = self._product_repo.get_by_id(request.product_id)
                if product is None:
                    findings.append(f"Product not found: {request.product_id}")
                    continue
                products[product.id] = product

            variant = product.resolve_variant(request.variant)
            if variant is None:
                findings.append(f"No variants found for product: {product.name}")
                continue

            index = next(i for i, v in enumerate(product.variants) if v is variant)
            key = (product.id, index)
            if key not in demand:
                demand[key] = 0
                findings.append(key)
            demand[key] += request.quantity

        errors: list[str] = []
        for finding in findings:
            if isinstance(finding, str):
                errors.append(finding)
                continue
            product = products[finding[0]]
            variant = product.variants[finding[1]]
            requested = demand[finding]
            if variant.stock < requested:
                errors.append(
                    f'Insufficient stock for "{product.name}" ({variant.label}): '
                    f"requested {requested}, available {variant.stock}"
                )

        return StockValidation(valid=not errors, errors=errors)
