"""Entry point for the ``shopcore`` command."""

from __future__ import annotations

import logging
import sys

import click

from shopcore.infrastructure.cli.inventory_commands import inventory_set, inventory_show
from shopcore.infrastructure.cli.order_commands import (
    order_confirm_payment,
    order_create,
    order_delete,
    order_list,
    order_show,
    order_stats,
    order_status,
    order_verify_payment,
)
from shopcore.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_update_price,
)
from shopcore.infrastructure.cli.user_commands import user_add
from shopcore.infrastructure.config import ConfigError, load_settings
from shopcore.infrastructure.logging_config import configure_logging

logger = logging.getLogger("shopcore.cli")


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """shopcore — storefront order management"""
    if ctx.obj is None:
        try:
            ctx.obj = load_settings()
        except ConfigError as exc:
            raise click.ClickException(str(exc))
    configure_logging(ctx.obj)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def inventory() -> None:
    """Manage variant stock."""


@cli.group()
def user() -> None:
    """Register notification recipients."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_show)
order.add_command(order_list)
order.add_command(order_status)
order.add_command(order_delete)
order.add_command(order_confirm_payment)
order.add_command(order_verify_payment)
order.add_command(order_stats)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update_price)
inventory.add_command(inventory_set)
inventory.add_command(inventory_show)
user.add_command(user_add)


def main() -> None:
    """Console-script entry: hide internals of unexpected errors in production."""
    try:
        cli(standalone_mode=True)
    except Exception as exc:
        logger.exception("Unexpected error")
        try:
            production = load_settings().is_production
        except ConfigError:
            production = True
        if production:
            click.echo("Error: An unexpected error occurred. Please try again later.", err=True)
        else:
            click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
