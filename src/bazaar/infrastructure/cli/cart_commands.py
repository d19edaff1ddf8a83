"""CLI commands for the cart."""

from __future__ import annotations

import click

from bazaar.application.add_to_cart import AddToCartHandler
from bazaar.application.show_cart import ShowCartHandler
from bazaar.application.update_cart import (
    ClearCartHandler,
    RemoveCartLineHandler,
    SetCartQuantityHandler,
)
from bazaar.domain.exceptions import DomainException
from bazaar.domain.model.cart import ProductRef, ServiceRef
from bazaar.infrastructure.bootstrap import catalog_repository
from bazaar.infrastructure.cli.context import Identity, pass_identity


@click.command("add")
@click.option("--product", "product_id", default=None, help="Product ID.")
@click.option("--service", "service_id", default=None, help="Service ID.")
@click.option("--qty", "quantity", default=1, show_default=True, type=int, help="Quantity to add.")
@click.option("--notes", default=None, help="Notes for the seller.")
@pass_identity
def cart_add(
    identity: Identity,
    product_id: str | None,
    service_id: str | None,
    quantity: int,
    notes: str | None,
) -> None:
    """Add a product or a service to the cart."""
    if bool(product_id) == bool(service_id):
        raise click.UsageError("Pass exactly one of --product or --service.")
    item = ProductRef(product_id) if product_id else ServiceRef(service_id)  # type: ignore[arg-type]

    try:
        session = identity.cart_session()
        handler = AddToCartHandler(session.repository, catalog_repository())
        line = handler.handle(session.owner_id, item, quantity=quantity, notes=notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Added {quantity} x {line.name} (line #{line.id}, now {line.quantity} in cart)")


@click.command("list")
@pass_identity
def cart_list(identity: Identity) -> None:
    """Show the cart grouped by business."""
    try:
        session = identity.cart_session()
        cart = ShowCartHandler(session.repository).handle(session.owner_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not cart.sellers:
        click.echo("Your cart is empty.")
        return

    for group in cart.sellers:
        click.echo(f"Business: {group.seller_id}")
        click.echo(f"  {'Line':<6} {'Item':<24} {'Qty':>5} {'Price':>12} {'Total':>12}")
        click.echo(f"  {'-'*63}")
        for line in group.lines:
            click.echo(
                f"  #{line.id:<5} {line.name:<24} {line.quantity:>5} "
                f"{line.unit_price:>12} {line.line_total:>12}"
            )
        click.echo(f"  {'Subtotal':<37} {group.subtotal:>26}")
        click.echo()
    click.echo(f"Cart total ({cart.item_count} items): {cart.total}")


@click.command("set")
@click.option("--line", "line_id", required=True, type=int, help="Cart line ID.")
@click.option("--qty", "quantity", required=True, type=int, help="New quantity (0 removes).")
@pass_identity
def cart_set(identity: Identity, line_id: int, quantity: int) -> None:
    """Change the quantity of a cart line."""
    try:
        session = identity.cart_session()
        line = SetCartQuantityHandler(session.repository).handle(session.owner_id, line_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if line is None:
        click.echo(f"Line #{line_id} removed.")
    else:
        click.echo(f"Line #{line_id} now {line.quantity} x {line.name}.")


@click.command("remove")
@click.option("--line", "line_id", required=True, type=int, help="Cart line ID.")
@pass_identity
def cart_remove(identity: Identity, line_id: int) -> None:
    """Remove a line from the cart."""
    try:
        session = identity.cart_session()
        RemoveCartLineHandler(session.repository).handle(session.owner_id, line_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Line #{line_id} removed.")


@click.command("clear")
@pass_identity
def cart_clear(identity: Identity) -> None:
    """Empty the cart."""
    try:
        session = identity.cart_session()
        ClearCartHandler(session.repository).handle(session.owner_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Cart cleared.")
