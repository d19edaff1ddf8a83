"""Application service: Job status changes (quote, accept, start, complete, ...)."""

from __future__ import annotations

import logging

from bazaar.domain.exceptions import EntityNotFoundError, InvalidTransitionError
from bazaar.domain.model.actor import Actor, Role
from bazaar.domain.model.job import Job, JobStatus
from bazaar.domain.model.value_objects import Money
from bazaar.domain.repository.job_repository import JobRepository

logger = logging.getLogger(__name__)


class TransitionJobHandler:

    def __init__(self, job_repo: JobRepository) -> None:
        self._job_repo = job_repo

    def handle(
        self,
        actor: Actor,
        job_id: int,
        target: JobStatus | str,
        quoted_price: str | None = None,
        final_price: str | None = None,
        reason: str | None = None,
    ) -> Job:
        """Apply one status change.

        Args:
            quoted_price: Required when a business quotes (``requested -> quoted``).
            final_price: Optional on completion; defaults to the quote.
        """
        target = _parse_status(target)

        job = self._job_repo.get_by_id(job_id)
        if job is None:
            raise EntityNotFoundError(f"Job #{job_id} not found")

        expected = job.status
        try:
            job.transition(
                target,
                actor,
                quoted_price=Money.of(quoted_price) if quoted_price is not None else None,
                final_price=Money.of(final_price) if final_price is not None else None,
                reason=reason,
            )
        except InvalidTransitionError:
            logger.warning(
                "Rejected job #%s %s -> %s by %s %s",
                job_id, expected.value, target.value, actor.role.value, actor.profile_id,
            )
            raise

        if not self._job_repo.update_if_status(job, expected):
            logger.warning("Stale write on job #%s (expected %s)", job_id, expected.value)
            raise InvalidTransitionError.stale_state(f"Job #{job_id}", expected.value)

        logger.info(
            "Job #%s %s -> %s by %s %s",
            job_id, expected.value, target.value, actor.role.value, actor.profile_id,
        )
        return job


class ListJobsHandler:

    def __init__(self, job_repo: JobRepository) -> None:
        self._job_repo = job_repo

    def handle(self, actor: Actor) -> list[Job]:
        if actor.role == Role.BUSINESS:
            return self._job_repo.list_by_seller(actor.profile_id)
        return self._job_repo.list_by_buyer(actor.profile_id)


def _parse_status(raw: JobStatus | str) -> JobStatus:
    if isinstance(raw, JobStatus):
        return raw
    try:
        return JobStatus(raw.strip().lower())
    except ValueError:
        raise InvalidTransitionError(f"Unknown job status '{raw}'") from None
