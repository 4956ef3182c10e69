"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from shopcore.application.add_product import AddProductHandler
from shopcore.application.dto import VariantSpec
from shopcore.application.update_product import UpdateVariantPriceHandler
from shopcore.domain.exceptions import DomainException
from shopcore.infrastructure.bootstrap import product_repository
from shopcore.infrastructure.cli.errors import as_click_error
from shopcore.infrastructure.config import Settings


def _parse_variant(raw: str) -> VariantSpec:
    """Parse 'Size:Large:100[:5]' (name : value : price [: stock])."""
    parts = [p.strip() for p in raw.split(":")]
    if len(parts) not in (3, 4):
        raise click.BadParameter(
            f"Invalid variant '{raw}'. Expected 'Name:Value:Price[:Stock]'."
        )
    stock = 0
    if len(parts) == 4:
        try:
            stock = int(parts[3])
        except ValueError:
            raise click.BadParameter(f"Invalid stock '{parts[3]}' for variant '{raw}'.")
    return VariantSpec(name=parts[0], value=parts[1], price=parts[2], stock=stock)


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--category", required=True, help="Category ID.")
@click.option("--variant", "variants", multiple=True, required=True,
              help="Variant as 'Name:Value:Price[:Stock]'; repeat for more.")
@click.option("--description", default="", help="Short description.")
@click.option("--brand", default="", help="Brand.")
@click.pass_obj
def product_add(
    settings: Settings,
    name: str,
    category: str,
    variants: tuple[str, ...],
    description: str,
    brand: str,
) -> None:
    """Add a new product to the catalog."""
    specs = [_parse_variant(v) for v in variants]
    handler = AddProductHandler(product_repo=product_repository(settings))

    try:
        product = handler.handle(
            name=name, category_id=category, variants=specs,
            description=description, brand=brand,
        )
    except DomainException as exc:
        raise as_click_error(exc)

    click.echo(
        f"Product #{product.id} '{product.name}' added with "
        f"{len(product.variants)} variant(s) ({product.availability.value})"
    )


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products in the catalog."""
    products = product_repository(settings).list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Variants':>8} {'Stock':>7}  Availability")
    click.echo("-" * 58)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<20} {len(p.variants):>8} {p.total_stock:>7}  "
            f"{p.availability.value}"
        )


@click.command("update-price")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--variant", default=None, help="Variant value (default: first variant).")
@click.option("--price", required=True, help="New price (e.g. 120.00).")
@click.pass_obj
def product_update_price(
    settings: Settings, product_id: str, variant: str | None, price: str
) -> None:
    """Update a variant's price."""
    handler = UpdateVariantPriceHandler(product_repo=product_repository(settings))

    try:
        handler.handle(product_id=product_id, variant_value=variant, new_price=price)
    except DomainException as exc:
        raise as_click_error(exc)

    click.echo(f"Product #{product_id} price updated to {price}")
