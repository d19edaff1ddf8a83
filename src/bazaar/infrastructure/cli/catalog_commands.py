"""CLI commands for catalog items that shoppers can add to a cart."""

from __future__ import annotations

import click

from bazaar.application.add_catalog_item import AddCatalogItemHandler
from bazaar.domain.exceptions import DomainException
from bazaar.infrastructure.bootstrap import catalog_repository
from bazaar.infrastructure.cli.context import Identity, pass_identity


@click.command("add")
@click.option(
    "--kind",
    default="product",
    show_default=True,
    type=click.Choice(["product", "service"]),
)
@click.option("--name", required=True, help="Item name.")
@click.option("--price", required=True, help="Unit price (e.g. 1500).")
@click.option("--commission", default=None, help="Commission rate in percent.")
@pass_identity
def catalog_add(
    identity: Identity, kind: str, name: str, price: str, commission: str | None
) -> None:
    """List a product or service for your business."""
    handler = AddCatalogItemHandler(catalog_repo=catalog_repository())

    try:
        item = handler.handle(identity.actor(), kind, name, price, commission)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{item.ref.kind.title()} #{item.ref.id} '{item.name}' listed at {item.unit_price}")


@click.command("list")
def catalog_list() -> None:
    """List every catalog item."""
    try:
        items = catalog_repository().list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not items:
        click.echo("No catalog items found.")
        return

    click.echo(f"{'Kind':<8} {'ID':<6} {'Business':<14} {'Name':<20} {'Price':>12}")
    click.echo("-" * 64)
    for i in items:
        state = "" if i.available else "  (unavailable)"
        click.echo(
            f"{i.ref.kind:<8} {i.ref.id:<6} {i.seller_id:<14} {i.name:<20} {str(i.unit_price):>12}{state}"
        )
