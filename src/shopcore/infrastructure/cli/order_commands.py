"""CLI commands for the Order aggregate."""

from __future__ import annotations

from pathlib import Path

import click

from shopcore.application.confirm_payment import ConfirmPaymentHandler
from shopcore.application.create_order import CreateOrderHandler
from shopcore.application.delete_order import DeleteOrderHandler
from shopcore.application.dto import CartEntry, OrderDTO, ShippingDetails
from shopcore.application.list_orders import ListOrdersHandler
from shopcore.application.order_stats import OrderStatsHandler
from shopcore.application.show_order import ShowOrderHandler
from shopcore.application.update_order_status import SetFulfillmentStatusHandler
from shopcore.application.verify_payment import VerifyPaymentHandler
from shopcore.domain.exceptions import DomainException
from shopcore.domain.model.order import FulfillmentStatus, PaymentStatus
from shopcore.domain.model.variant_selector import VariantSelector
from shopcore.infrastructure.bootstrap import (
    line_item_repository,
    order_repository,
    product_repository,
    proof_storage,
    side_effect_dispatcher,
    stock_ledger,
)
from shopcore.infrastructure.cli.errors import as_click_error
from shopcore.infrastructure.config import Settings


def _parse_items(raw: str) -> list[CartEntry]:
    """Parse '1:3,2:1:Large' (product id : qty [: variant value]) into CartEntry list."""
    entries: list[CartEntry] = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        parts = chunk.split(":")
        if len(parts) not in (2, 3):
            raise click.BadParameter(
                f"Invalid item format '{chunk}'. Expected 'ProductId:Quantity[:Variant]'."
            )
        product_id, qty_str = parts[0].strip(), parts[1].strip()
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        variant = (
            VariantSelector.by_value(parts[2].strip())
            if len(parts) == 3
            else VariantSelector.first_variant()
        )
        entries.append(CartEntry(product_id=product_id, quantity=qty, variant=variant))
    return entries


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  [{dto.order_number}]  (status={dto.status})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Created:  {dto.date_ordered}")
    click.echo(f"Ship to:  {dto.shipping}")
    verified = "verified" if dto.is_verified else "not verified"
    click.echo(f"Payment:  {dto.payment_status} ({verified})")
    if dto.payment_journal_number:
        click.echo(f"Journal:  {dto.payment_journal_number}")
    click.echo()

    if dto.items:
        click.echo(f"  {'Product':<20} {'Variant':<10} {'Qty':>5} {'Price':>12} {'Total':>12}")
        click.echo(f"  {'-'*63}")
        for item in dto.items:
            click.echo(
                f"  {item.product_name:<20} {item.variant:<10} {item.quantity:>5} "
                f"{item.unit_price:>12} {item.line_total:>12}"
            )
        click.echo(f"  {'-'*63}")
    click.echo(f"  {'Order Total':<37} {dto.total:>25}")


@click.command("create")
@click.option("--user", "user_id", required=True, help="Owning user ID.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty[:Variant],...'.")
@click.option("--address1", required=True, help="Shipping address line 1.")
@click.option("--address2", default="", help="Shipping address line 2.")
@click.option("--city", required=True, help="City.")
@click.option("--zip", "zip_code", default="", help="Postal code.")
@click.option("--country", default=None, help="Country (defaults to the configured one).")
@click.option("--phone", required=True, help="Contact phone number.")
@click.pass_obj
def order_create(
    settings: Settings,
    user_id: str,
    items: str,
    address1: str,
    address2: str,
    city: str,
    zip_code: str,
    country: str | None,
    phone: str,
) -> None:
    """Place an order from a cart (deducts stock)."""
    cart = _parse_items(items)
    shipping = ShippingDetails(
        address1=address1, address2=address2, city=city,
        zip=zip_code, country=country, phone=phone,
    )

    handler = CreateOrderHandler(
        order_repo=order_repository(settings),
        line_item_repo=line_item_repository(settings),
        product_repo=product_repository(settings),
        ledger=stock_ledger(settings),
        default_country=settings.default_country,
    )

    try:
        dto = handler.handle(cart, shipping, user_id)
    except DomainException as exc:
        raise as_click_error(exc)

    click.echo(f"Order #{dto.id} created.")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(settings: Settings, order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repository(settings), line_item_repository(settings))

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise as_click_error(exc)

    _display_order(dto)


@click.command("list")
@click.option("--user", "user_id", default=None, help="Only this user's orders.")
@click.pass_obj
def order_list(settings: Settings, user_id: str | None) -> None:
    """List orders, newest first."""
    orders = ListOrdersHandler(order_repository(settings)).handle(user_id)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'User':<12} {'Status':<12} {'Payment':<10} {'Total':>14}")
    click.echo("-" * 58)
    for dto in orders:
        click.echo(
            f"{dto.id:<6} {dto.user_id:<12} {dto.status:<12} "
            f"{dto.payment_status:<10} {dto.total:>14}"
        )


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--set", "new_status", required=True,
    type=click.Choice([s.value for s in FulfillmentStatus]),
    help="New fulfillment status.",
)
@click.pass_obj
def order_status(settings: Settings, order_id: int, new_status: str) -> None:
    """Change an order's fulfillment status."""
    handler = SetFulfillmentStatusHandler(
        order_repo=order_repository(settings),
        dispatcher=side_effect_dispatcher(settings),
    )

    try:
        dto = handler.handle(order_id, new_status)
    except DomainException as exc:
        raise as_click_error(exc)

    click.echo(f"Order #{dto.id} status is now {dto.status}.")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
@click.confirmation_option(prompt="Delete this order and its line items?")
@click.pass_obj
def order_delete(settings: Settings, order_id: int) -> None:
    """Delete an order (puts its stock back unless it was cancelled)."""
    handler = DeleteOrderHandler(
        order_repo=order_repository(settings),
        line_item_repo=line_item_repository(settings),
        dispatcher=side_effect_dispatcher(settings),
    )

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise as_click_error(exc)

    click.echo(f"Order #{order_id} deleted and stock restored.")


@click.command("confirm-payment")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--journal", "journal_number", required=True, help="Bank journal number.")
@click.option(
    "--proof", required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Payment proof image (png/jpg).",
)
@click.pass_obj
def order_confirm_payment(
    settings: Settings, order_id: int, journal_number: str, proof: Path
) -> None:
    """Submit a payment journal number and proof image."""
    handler = ConfirmPaymentHandler(
        order_repo=order_repository(settings),
        dispatcher=side_effect_dispatcher(settings),
    )

    try:
        proof_ref = proof_storage(settings).store(proof)
        dto = handler.handle(order_id, journal_number, proof_ref)
    except DomainException as exc:
        raise as_click_error(exc)

    click.echo(f"Payment for order #{dto.id} submitted, now in {dto.payment_status}.")


@click.command("verify-payment")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--status", "payment_status", default=None,
    type=click.Choice([s.value for s in PaymentStatus]),
    help="New payment status.",
)
@click.option("--verified/--unverified", default=None, help="Set the verified flag.")
@click.pass_obj
def order_verify_payment(
    settings: Settings, order_id: int, payment_status: str | None, verified: bool | None
) -> None:
    """Review a submitted payment (admin)."""
    if payment_status is None and verified is None:
        raise click.ClickException("Give --status and/or --verified/--unverified")

    handler = VerifyPaymentHandler(
        order_repo=order_repository(settings),
        dispatcher=side_effect_dispatcher(settings),
    )

    try:
        dto = handler.handle(order_id, payment_status=payment_status, verified=verified)
    except DomainException as exc:
        raise as_click_error(exc)

    click.echo(
        f"Order #{dto.id} payment is {dto.payment_status} "
        f"({'verified' if dto.is_verified else 'not verified'})."
    )


@click.command("stats")
@click.pass_obj
def order_stats(settings: Settings) -> None:
    """Show order count and total sales."""
    handler = OrderStatsHandler(order_repository(settings))
    click.echo(f"Orders:      {handler.order_count()}")
    totals = ", ".join(str(total) for total in handler.total_sales())
    click.echo(f"Total sales: {totals}")
