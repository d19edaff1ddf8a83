from __future__ import annotations

import logging

import click

from bazaar.domain.model.actor import Role
from bazaar.infrastructure.bootstrap import settings
from bazaar.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_list,
    cart_remove,
    cart_set,
)
from bazaar.infrastructure.cli.catalog_commands import catalog_add, catalog_list
from bazaar.infrastructure.cli.context import Identity
from bazaar.infrastructure.cli.earnings_commands import (
    earnings_show,
    withdrawal_list,
    withdrawal_process,
    withdrawal_request,
)
from bazaar.infrastructure.cli.job_commands import job_advance, job_list, job_request
from bazaar.infrastructure.cli.order_commands import (
    checkout,
    order_advance,
    order_list,
    order_show,
)


@click.group()
@click.option(
    "--role",
    default=Role.CUSTOMER.value,
    show_default=True,
    envvar="BAZAAR_ROLE",
    type=click.Choice([r.value for r in Role]),
    help="Who you are acting as.",
)
@click.option("--profile", "profile_id", default=None, envvar="BAZAAR_PROFILE", help="Your customer or business id.")
@click.option("--user", "user_id", default=None, envvar="BAZAAR_USER", help="Your user account id.")
@click.option("--device", "device_id", default="local", show_default=True, envvar="BAZAAR_DEVICE", help="Device id for an anonymous cart.")
@click.pass_context
def cli(
    ctx: click.Context,
    role: str,
    profile_id: str | None,
    user_id: str | None,
    device_id: str,
) -> None:
    """Bazaar — marketplace carts, orders, jobs and payouts"""
    logging.basicConfig(
        level=settings().LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = Identity(
        role=Role(role),
        profile_id=profile_id,
        user_id=user_id,
        device_id=device_id,
    )


@cli.group()
def cart() -> None:
    """Manage your cart."""


@cli.group()
def order() -> None:
    """View and progress orders."""


@cli.group()
def job() -> None:
    """Request and progress service jobs."""


@cli.group()
def earnings() -> None:
    """Business earnings."""


@cli.group()
def withdrawal() -> None:
    """Request and process payouts."""


@cli.group()
def catalog() -> None:
    """Manage catalog items."""


# Register subcommands
cli.add_command(checkout)
cart.add_command(cart_add)
cart.add_command(cart_list)
cart.add_command(cart_set)
cart.add_command(cart_remove)
cart.add_command(cart_clear)
order.add_command(order_show)
order.add_command(order_list)
order.add_command(order_advance)
job.add_command(job_request)
job.add_command(job_list)
job.add_command(job_advance)
earnings.add_command(earnings_show)
withdrawal.add_command(withdrawal_request)
withdrawal.add_command(withdrawal_list)
withdrawal.add_command(withdrawal_process)
catalog.add_command(catalog_add)
catalog.add_command(catalog_list)
