"""Integration tests for the job use cases."""

import pytest

from bazaar.application.request_job import RequestJobHandler
from bazaar.application.transition_job import ListJobsHandler, TransitionJobHandler
from bazaar.domain.exceptions import (
    EntityNotFoundError,
    InvalidTransitionError,
    ValidationError,
)
from bazaar.domain.model.actor import Actor
from bazaar.domain.model.job import JobStatus
from bazaar.domain.model.value_objects import Money
from tests.fakes import FakeJobRepository

BUYER = Actor.customer("buyer-1")
SELLER = Actor.business("S")


def _setup() -> tuple[TransitionJobHandler, FakeJobRepository, int]:
    job_repo = FakeJobRepository()
    job = RequestJobHandler(job_repo).handle(
        BUYER, "S", "Install ceiling fan", location="Lekki", budget_min="5000", budget_max="9000"
    )
    return TransitionJobHandler(job_repo), job_repo, job.id


class TestRequestJob:

    def test_request_is_stored(self):
        _, job_repo, job_id = _setup()
        job = job_repo.get_by_id(job_id)
        assert job.status == JobStatus.REQUESTED
        assert job.budget.minimum == Money.of("5000")

    def test_only_customers_request(self):
        with pytest.raises(ValidationError, match="Only a customer"):
            RequestJobHandler(FakeJobRepository()).handle(SELLER, "S", "Anything")

    def test_inverted_budget_rejected(self):
        with pytest.raises(ValidationError, match="above maximum"):
            RequestJobHandler(FakeJobRepository()).handle(
                BUYER, "S", "Anything", budget_min="10", budget_max="5"
            )


class TestTransitionJob:

    def test_quote_accept_start_complete(self):
        handler, job_repo, job_id = _setup()
        handler.handle(SELLER, job_id, "quoted", quoted_price="7000")
        handler.handle(BUYER, job_id, "accepted")
        handler.handle(SELLER, job_id, "ongoing")
        job = handler.handle(SELLER, job_id, "completed", final_price="7500")

        assert job.status == JobStatus.COMPLETED
        assert job_repo.get_by_id(job_id).final_price == Money.of("7500")
        assert job_repo.get_by_id(job_id).quoted_price == Money.of("7000")

    def test_quote_without_price_leaves_job_requested(self):
        handler, job_repo, job_id = _setup()
        with pytest.raises(ValidationError):
            handler.handle(SELLER, job_id, "quoted")
        assert job_repo.get_by_id(job_id).status == JobStatus.REQUESTED

    def test_bad_price_text(self):
        handler, _, job_id = _setup()
        with pytest.raises(ValidationError, match="Invalid money amount"):
            handler.handle(SELLER, job_id, "quoted", quoted_price="lots")

    def test_unknown_status(self):
        handler, _, job_id = _setup()
        with pytest.raises(InvalidTransitionError, match="Unknown job status"):
            handler.handle(SELLER, job_id, "paused")

    def test_missing_job(self):
        handler, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            handler.handle(SELLER, 99, "rejected")

    def test_buyer_cancels(self):
        handler, _, job_id = _setup()
        job = handler.handle(BUYER, job_id, "cancelled", reason="no longer needed")
        assert job.status == JobStatus.CANCELLED
        assert job.cancellation_reason == "no longer needed"

    def test_buyer_cannot_cancel_once_quoted(self):
        handler, job_repo, job_id = _setup()
        handler.handle(SELLER, job_id, "quoted", quoted_price="7000")
        with pytest.raises(InvalidTransitionError, match="allowed: accepted"):
            handler.handle(BUYER, job_id, "cancelled")
        assert job_repo.get_by_id(job_id).status == JobStatus.QUOTED

    def test_second_concurrent_caller_gets_stale_error(self):
        handler, job_repo, job_id = _setup()

        class RacingRepository(FakeJobRepository):
            """Lets the buyer cancel the request just before our write."""

            def update_if_status(self, job, expected):
                other = job_repo.get_by_id(job.id)
                other.transition(JobStatus.CANCELLED, BUYER, reason="found someone else")
                job_repo.update_if_status(other, expected)
                return job_repo.update_if_status(job, expected)

            def get_by_id(self, job_id):
                return job_repo.get_by_id(job_id)

        with pytest.raises(InvalidTransitionError) as excinfo:
            TransitionJobHandler(RacingRepository()).handle(
                SELLER, job_id, "quoted", quoted_price="7000"
            )
        assert excinfo.value.stale
        stored = job_repo.get_by_id(job_id)
        assert stored.status == JobStatus.CANCELLED
        assert stored.quoted_price is None


class TestListJobs:

    def test_each_side_sees_its_jobs(self):
        _, job_repo, _ = _setup()
        assert len(ListJobsHandler(job_repo).handle(BUYER)) == 1
        assert len(ListJobsHandler(job_repo).handle(SELLER)) == 1
        assert ListJobsHandler(job_repo).handle(Actor.customer("buyer-2")) == []
