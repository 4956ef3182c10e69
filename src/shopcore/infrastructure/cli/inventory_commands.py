"""CLI commands for variant stock."""

from __future__ import annotations

import click

from shopcore.application.set_stock import SetStockHandler
from shopcore.application.show_inventory import ShowInventoryHandler
from shopcore.domain.exceptions import DomainException
from shopcore.infrastructure.bootstrap import product_repository, stock_ledger
from shopcore.infrastructure.cli.errors import as_click_error
from shopcore.infrastructure.config import Settings


@click.command("set")
@click.option("--product", required=True, help="Product name.")
@click.option("--variant", default=None, help="Variant value (default: first variant).")
@click.option("--quantity", required=True, type=click.IntRange(min=0),
              help="Units in stock.")
@click.pass_obj
def inventory_set(
    settings: Settings, product: str, variant: str | None, quantity: int
) -> None:
    """Set the stock level of a product variant."""
    handler = SetStockHandler(
        product_repo=product_repository(settings),
        ledger=stock_ledger(settings),
    )

    try:
        updated = handler.handle(product_name=product, variant_value=variant, stock=quantity)
    except DomainException as exc:
        raise as_click_error(exc)

    click.echo(f"Stock for '{product}' ({updated.label}) set to {updated.stock}")


@click.command("show")
@click.pass_obj
def inventory_show(settings: Settings) -> None:
    """Show current stock per variant."""
    handler = ShowInventoryHandler(product_repo=product_repository(settings))
    lines = handler.handle()

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'Product':<20} {'Variant':<16} {'Price':>12} {'Stock':>7}  Availability")
    click.echo("-" * 72)
    for line in lines:
        click.echo(
            f"{line.product_name:<20} {line.variant:<16} {line.price:>12} "
            f"{line.stock:>7}  {line.availability}"
        )
