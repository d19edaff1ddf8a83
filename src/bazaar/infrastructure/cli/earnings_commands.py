"""CLI commands for seller earnings and withdrawals."""

from __future__ import annotations

import click

from bazaar.application.compute_earnings import ComputeEarningsHandler
from bazaar.application.withdrawals import (
    ListWithdrawalsHandler,
    ProcessWithdrawalHandler,
    RequestWithdrawalHandler,
)
from bazaar.domain.exceptions import DomainException
from bazaar.domain.model.actor import Role
from bazaar.domain.model.withdrawal import BankDetails, WithdrawalStatus
from bazaar.infrastructure.bootstrap import (
    clearance_policy,
    job_repository,
    order_repository,
    withdrawal_repository,
)
from bazaar.infrastructure.cli.context import Identity, pass_identity


def _earnings_handler() -> ComputeEarningsHandler:
    return ComputeEarningsHandler(
        order_repo=order_repository(),
        job_repo=job_repository(),
        withdrawal_repo=withdrawal_repository(),
        clearance=clearance_policy(),
    )


@click.command("show")
@click.option("--seller", "seller_id", default=None, help="Business to report on (admin only).")
@pass_identity
def earnings_show(identity: Identity, seller_id: str | None) -> None:
    """Show revenue, commission and balances for a business."""
    actor = identity.actor()
    if actor.role == Role.ADMIN:
        if seller_id is None:
            raise click.UsageError("Pass --seller to choose a business.")
    else:
        try:
            actor.require(Role.BUSINESS, "view earnings")
        except DomainException as exc:
            raise click.ClickException(str(exc))
        if seller_id not in (None, actor.profile_id):
            raise click.ClickException("Only an admin can view another business's earnings")
        seller_id = actor.profile_id

    try:
        snapshot = _earnings_handler().handle(seller_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Earnings for {snapshot.seller_id}")
    click.echo(f"  {'Orders delivered':<24} {snapshot.order_count:>16}")
    click.echo(f"  {'Jobs completed':<24} {snapshot.job_count:>16}")
    click.echo(f"  {'Order revenue':<24} {str(snapshot.order_revenue):>16}")
    click.echo(f"  {'Job revenue':<24} {str(snapshot.job_revenue):>16}")
    click.echo(f"  {'Commission':<24} {str(snapshot.total_commission):>16}")
    click.echo(f"  {'Net revenue':<24} {str(snapshot.net_revenue):>16}")
    click.echo(f"  {'-'*41}")
    click.echo(f"  {'Available':<24} {str(snapshot.available_balance):>16}")
    click.echo(f"  {'Pending clearance':<24} {str(snapshot.pending_balance):>16}")
    click.echo(f"  {'Withdrawn':<24} {str(snapshot.total_withdrawn):>16}")
    click.echo(f"  {'Awaiting payout':<24} {str(snapshot.outstanding_withdrawals):>16}")
    click.echo(f"  {'Withdrawable now':<24} {str(snapshot.withdrawable):>16}")


@click.command("request")
@click.option("--amount", required=True, help="Amount to withdraw (e.g. 2500).")
@click.option("--bank", "bank_name", required=True, help="Bank name.")
@click.option("--account-number", required=True)
@click.option("--account-name", required=True)
@pass_identity
def withdrawal_request(
    identity: Identity,
    amount: str,
    bank_name: str,
    account_number: str,
    account_name: str,
) -> None:
    """Ask for part of your available balance to be paid out."""
    try:
        bank_details = BankDetails(bank_name, account_number, account_name)
        request = RequestWithdrawalHandler(
            withdrawal_repo=withdrawal_repository(),
            earnings=_earnings_handler(),
        ).handle(identity.actor(), amount, bank_details)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Withdrawal #{request.id} of {request.amount} requested.")


@click.command("list")
@pass_identity
def withdrawal_list(identity: Identity) -> None:
    """List withdrawal requests (all of them for an admin)."""
    try:
        requests = ListWithdrawalsHandler(withdrawal_repository()).handle(identity.actor())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not requests:
        click.echo("No withdrawals found.")
        return

    click.echo(f"{'ID':<6} {'Business':<14} {'Status':<12} {'Amount':>14}  Bank")
    click.echo("-" * 64)
    for r in requests:
        click.echo(
            f"{r.id:<6} {r.seller_id:<14} {r.status.value:<12} {str(r.amount):>14}  "
            f"{r.bank_details.bank_name} {r.bank_details.account_number}"
        )


@click.command("process")
@click.option("--id", "withdrawal_id", required=True, type=int, help="Withdrawal ID.")
@click.option(
    "--to",
    "target",
    required=True,
    type=click.Choice([s.value for s in WithdrawalStatus if s != WithdrawalStatus.PENDING]),
    help="New status.",
)
@click.option("--notes", default=None, help="Notes kept with the request.")
@pass_identity
def withdrawal_process(
    identity: Identity, withdrawal_id: int, target: str, notes: str | None
) -> None:
    """Move a withdrawal to processing, completed or rejected (admin)."""
    try:
        request = ProcessWithdrawalHandler(withdrawal_repository()).handle(
            identity.actor(), withdrawal_id, target, notes=notes
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Withdrawal #{request.id} is now {request.status.value}.")
