"""Application service: Request Job use case.

Service requests don't go through the cart; a customer asks a business
directly and the job starts in ``requested``.
"""

from __future__ import annotations

import logging

from bazaar.domain.model.actor import Actor, Role
from bazaar.domain.model.job import BudgetRange, Job
from bazaar.domain.model.value_objects import Money
from bazaar.domain.repository.job_repository import JobRepository

logger = logging.getLogger(__name__)


class RequestJobHandler:

    def __init__(self, job_repo: JobRepository) -> None:
        self._job_repo = job_repo

    def handle(
        self,
        actor: Actor,
        seller_id: str,
        title: str,
        description: str | None = None,
        location: str | None = None,
        service_id: str | None = None,
        budget_min: str | None = None,
        budget_max: str | None = None,
    ) -> Job:
        actor.require(Role.CUSTOMER, "request a job")

        budget = BudgetRange(
            minimum=Money.of(budget_min) if budget_min is not None else None,
            maximum=Money.of(budget_max) if budget_max is not None else None,
        )
        job = Job.request(
            buyer_id=actor.profile_id,
            seller_id=seller_id,
            title=title,
            description=description,
            location=location,
            service_id=service_id,
            budget=budget,
        )
        job = self._job_repo.add(job)
        logger.info("Job #%s requested by %s from %s", job.id, actor.profile_id, seller_id)
        return job
