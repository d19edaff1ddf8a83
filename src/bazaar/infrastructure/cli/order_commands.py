"""CLI commands for checkout and the Order aggregate."""

from __future__ import annotations

import click

from bazaar.application.checkout import CheckoutHandler
from bazaar.application.dto import OrderDTO
from bazaar.application.show_order import ListOrdersHandler, ShowOrderHandler
from bazaar.application.transition_order import TransitionOrderHandler
from bazaar.domain.exceptions import DomainException
from bazaar.domain.model.order import OrderStatus
from bazaar.domain.service.pricing import DeliveryMethod
from bazaar.infrastructure.bootstrap import (
    delivery_fees,
    order_repository,
    payment_gateway,
    settings,
)
from bazaar.infrastructure.cli.context import Identity, pass_identity


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Buyer: {dto.buyer_id}   Business: {dto.seller_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Delivery: {dto.delivery_method}" + (f" to {dto.delivery_address}" if dto.delivery_address else ""))
    click.echo()
    click.echo(f"  {'Item':<20} {'Qty':>5} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*51}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<20} {item.quantity:>5} {item.unit_price:>12} {item.line_total:>12}"
        )
    click.echo(f"  {'-'*51}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>24}")
    click.echo(f"  {'Delivery fee':<27} {dto.delivery_fee:>24}")
    click.echo(f"  {'Service charge':<27} {dto.commission:>24}")
    click.echo(f"  {'Order Total':<27} {dto.total:>24}")


@click.command("checkout")
@click.option("--seller", "seller_id", required=True, help="Business to check out with.")
@click.option(
    "--delivery",
    "delivery_method",
    default=DeliveryMethod.PICKUP.value,
    show_default=True,
    type=click.Choice([m.value for m in DeliveryMethod]),
    help="Delivery method.",
)
@click.option("--address", default=None, help="Delivery address (not needed for pickup).")
@click.option("--notes", default=None, help="Delivery instructions.")
@click.option("--line", "line_ids", multiple=True, type=int, help="Only these cart lines (repeatable).")
@pass_identity
def checkout(
    identity: Identity,
    seller_id: str,
    delivery_method: str,
    address: str | None,
    notes: str | None,
    line_ids: tuple[int, ...],
) -> None:
    """Place an order for one business's items in your cart."""
    actor = identity.actor()

    try:
        session = identity.cart_session()
        handler = CheckoutHandler(
            order_repo=order_repository(),
            cart_repo=session.repository,
            payment_gateway=payment_gateway(),
            delivery_fees=delivery_fees(),
            default_commission_percent=settings().DEFAULT_COMMISSION_PERCENT,
        )
        dto = handler.handle(
            actor,
            seller_id,
            delivery_method,
            address=address,
            notes=notes,
            line_ids=list(line_ids) or None,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Order placed.")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@pass_identity
def order_show(identity: Identity, order_id: int) -> None:
    """Show details of an existing order."""
    try:
        dto = ShowOrderHandler(order_repository()).handle(identity.actor(), order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@pass_identity
def order_list(identity: Identity) -> None:
    """List your orders (placed, or received as a business)."""
    try:
        orders = ListOrdersHandler(order_repository()).handle(identity.actor())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Status':<12} {'Buyer':<14} {'Business':<14} {'Total':>12}")
    click.echo("-" * 62)
    for o in orders:
        click.echo(f"{o.id:<6} {o.status:<12} {o.buyer_id:<14} {o.seller_id:<14} {o.total:>12}")


@click.command("advance")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--to",
    "target",
    required=True,
    type=click.Choice([s.value for s in OrderStatus]),
    help="New status.",
)
@click.option("--reason", default=None, help="Cancellation reason.")
@pass_identity
def order_advance(identity: Identity, order_id: int, target: str, reason: str | None) -> None:
    """Move an order to its next status (confirm, ship, deliver, cancel, ...)."""
    try:
        dto = TransitionOrderHandler(order_repository()).handle(
            identity.actor(), order_id, target, reason=reason
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} is now {dto.status}.")
