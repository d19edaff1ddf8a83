"""CLI commands for the Job aggregate."""

from __future__ import annotations

import click

from bazaar.application.request_job import RequestJobHandler
from bazaar.application.transition_job import ListJobsHandler, TransitionJobHandler
from bazaar.domain.exceptions import DomainException
from bazaar.domain.model.job import Job, JobStatus
from bazaar.infrastructure.bootstrap import job_repository
from bazaar.infrastructure.cli.context import Identity, pass_identity


def _display_job(job: Job) -> None:
    click.echo(f"Job #{job.id}  (status={job.status.value})")
    click.echo(f"Title:    {job.title}")
    click.echo(f"Buyer: {job.buyer_id}   Business: {job.seller_id}")
    if job.location:
        click.echo(f"Location: {job.location}")
    click.echo(f"Budget:   {job.budget}")
    if job.quoted_price is not None:
        click.echo(f"Quote:    {job.quoted_price}")
    if job.final_price is not None:
        click.echo(f"Final:    {job.final_price}")


@click.command("request")
@click.option("--seller", "seller_id", required=True, help="Business to ask.")
@click.option("--title", required=True, help="What you need done.")
@click.option("--description", default=None)
@click.option("--location", default=None)
@click.option("--service", "service_id", default=None, help="Catalog service ID, if any.")
@click.option("--budget-min", default=None, help="Lowest budget (e.g. 5000).")
@click.option("--budget-max", default=None, help="Highest budget.")
@pass_identity
def job_request(
    identity: Identity,
    seller_id: str,
    title: str,
    description: str | None,
    location: str | None,
    service_id: str | None,
    budget_min: str | None,
    budget_max: str | None,
) -> None:
    """Request a service from a business."""
    try:
        job = RequestJobHandler(job_repository()).handle(
            identity.actor(),
            seller_id,
            title,
            description=description,
            location=location,
            service_id=service_id,
            budget_min=budget_min,
            budget_max=budget_max,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Job #{job.id} requested.")
    _display_job(job)


@click.command("list")
@pass_identity
def job_list(identity: Identity) -> None:
    """List your jobs."""
    try:
        jobs = ListJobsHandler(job_repository()).handle(identity.actor())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not jobs:
        click.echo("No jobs found.")
        return

    for job in jobs:
        price = job.final_price or job.quoted_price
        click.echo(f"#{job.id:<5} {job.status.value:<10} {job.title:<30} {str(price or '-'):>12}")


@click.command("advance")
@click.option("--id", "job_id", required=True, type=int, help="Job ID.")
@click.option(
    "--to",
    "target",
    required=True,
    type=click.Choice([s.value for s in JobStatus]),
    help="New status.",
)
@click.option("--price", "quoted_price", default=None, help="Quoted price (when quoting).")
@click.option("--final-price", default=None, help="Final price (when completing).")
@click.option("--reason", default=None, help="Cancellation reason.")
@pass_identity
def job_advance(
    identity: Identity,
    job_id: int,
    target: str,
    quoted_price: str | None,
    final_price: str | None,
    reason: str | None,
) -> None:
    """Quote, accept, start, complete, reject or cancel a job."""
    try:
        job = TransitionJobHandler(job_repository()).handle(
            identity.actor(),
            job_id,
            target,
            quoted_price=quoted_price,
            final_price=final_price,
            reason=reason,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_job(job)
