"""Mapping of domain errors onto click errors."""

from __future__ import annotations

import click

from shopcore.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InsufficientStockError,
)


class NotFoundError(click.ClickException):
    """A referenced order or product does not exist."""

    exit_code = 3


def as_click_error(exc: DomainException) -> click.ClickException:
    if isinstance(exc, InsufficientStockError):
        lines = "\n".join(f"  - {error}" for error in exc.errors)
        return click.ClickException(f"Insufficient stock\n{lines}")
    if isinstance(exc, EntityNotFoundError):
        return NotFoundError(str(exc))
    return click.ClickException(str(exc))
