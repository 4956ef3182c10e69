"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Validation-class errors (``ValidationError`` and its subclasses) are raised
before any write.  ``LedgerOperationFailure`` and ``NotificationFailure``
describe secondary effects; the application layer logs them and carries on.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidInputError(ValidationError):
    """Malformed or missing input (empty cart, bad id, unknown status...)."""


class InsufficientStockError(ValidationError):
    """One or more cart entries cannot be covered by current stock."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("Insufficient stock: " + "; ".join(self.errors))


class DuplicateJournalNumberError(ValidationError):
    """The payment journal number is already attached to another order."""

    def __init__(self, journal_number: str) -> None:
        self.journal_number = journal_number
        super().__init__(
            f"Journal number '{journal_number}' has already been used for another order"
        )


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product not found: '{product_id}'")


class OrderNotFoundError(EntityNotFoundError):

    def __init__(self, order_id: int) -> None:
        self.order_id = order_id
        super().__init__(f"Order #{order_id} not found")


class ConcurrentModificationError(DomainException):
    """A conditional write found a newer version than the one it read."""


class PersistenceError(DomainException):
    """A record that was just written cannot be read back."""


class LedgerOperationFailure(DomainException):
    """A stock mutation could not be applied."""


class NotificationFailure(DomainException):
    """A notification could not be handed to the delivery service."""
