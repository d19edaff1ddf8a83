"""Unit tests for the Job aggregate."""

import pytest

from bazaar.domain.exceptions import InvalidTransitionError, ValidationError
from bazaar.domain.model.actor import Actor
from bazaar.domain.model.job import BudgetRange, Job, JobStatus
from bazaar.domain.model.value_objects import Money

BUYER = Actor.customer("buyer-1")
SELLER = Actor.business("S")
ADMIN = Actor.admin("ops-1")


def _make_job(status: JobStatus = JobStatus.REQUESTED, quote: str | None = None) -> Job:
    job = Job.request("buyer-1", "S", "Fix the sink", location="Yaba")
    job.id = 1
    job.status = status
    if quote is not None:
        job.quoted_price = Money.of(quote)
    return job


class TestJobRequest:

    def test_starts_requested_without_price(self):
        job = Job.request("buyer-1", "S", "  Fix the sink ", description="  ")
        assert job.status == JobStatus.REQUESTED
        assert job.title == "Fix the sink"
        assert job.description is None
        assert job.quoted_price is None
        assert str(job.budget) == "open"

    def test_title_required(self):
        with pytest.raises(ValidationError, match="title is required"):
            Job.request("buyer-1", "S", " ")

    def test_budget_bounds_checked(self):
        with pytest.raises(ValidationError, match="above maximum"):
            BudgetRange(Money.of("9000"), Money.of("5000"))

    def test_budget_display(self):
        assert str(BudgetRange(Money.of("5000"), Money.of("9000"))) == "₦5,000.00 - ₦9,000.00"
        assert str(BudgetRange(maximum=Money.of("100"))) == "up to ₦100.00"


class TestJobLifecycle:

    def test_full_happy_path(self):
        job = _make_job()
        job.transition(JobStatus.QUOTED, SELLER, quoted_price=Money.of("7500"))
        job.transition(JobStatus.ACCEPTED, BUYER)
        job.transition(JobStatus.ONGOING, SELLER)
        job.transition(JobStatus.COMPLETED, SELLER)
        assert job.status == JobStatus.COMPLETED
        assert job.final_price == Money.of("7500")
        assert job.started_at is not None
        assert job.completed_at is not None
        assert job.is_terminal

    def test_final_price_overrides_quote(self):
        job = _make_job(JobStatus.ONGOING, quote="7500")
        job.transition(JobStatus.COMPLETED, SELLER, final_price=Money.of("8000"))
        assert job.final_price == Money.of("8000")

    def test_quote_requires_price(self):
        job = _make_job()
        with pytest.raises(ValidationError, match="greater than zero"):
            job.transition(JobStatus.QUOTED, SELLER)
        assert job.status == JobStatus.REQUESTED

    def test_zero_quote_rejected(self):
        job = _make_job()
        with pytest.raises(ValidationError, match="greater than zero"):
            job.transition(JobStatus.QUOTED, SELLER, quoted_price=Money.zero())

    def test_price_on_non_quote_move_rejected(self):
        job = _make_job(JobStatus.ACCEPTED, quote="100")
        with pytest.raises(InvalidTransitionError, match="quote can only be given"):
            job.transition(JobStatus.ONGOING, SELLER, quoted_price=Money.of("200"))
        assert job.quoted_price == Money.of("100")

    def test_final_price_only_on_completion(self):
        job = _make_job(JobStatus.ACCEPTED, quote="100")
        with pytest.raises(ValidationError, match="final price can only be set"):
            job.transition(JobStatus.ONGOING, SELLER, final_price=Money.of("200"))

    def test_buyer_cannot_quote(self):
        with pytest.raises(InvalidTransitionError):
            _make_job().transition(JobStatus.QUOTED, BUYER, quoted_price=Money.of("1"))

    def test_seller_cannot_accept_own_quote(self):
        with pytest.raises(InvalidTransitionError):
            _make_job(JobStatus.QUOTED, quote="100").transition(JobStatus.ACCEPTED, SELLER)

    def test_cannot_start_before_acceptance(self):
        with pytest.raises(InvalidTransitionError):
            _make_job(JobStatus.QUOTED, quote="100").transition(JobStatus.ONGOING, SELLER)


class TestJobExits:

    @pytest.mark.parametrize("status", [JobStatus.REQUESTED, JobStatus.ACCEPTED])
    def test_buyer_may_cancel_before_work_starts(self, status):
        job = _make_job(status)
        job.transition(JobStatus.CANCELLED, BUYER, reason="found someone else")
        assert job.status == JobStatus.CANCELLED
        assert job.cancellation_reason == "found someone else"

    def test_buyer_cannot_cancel_ongoing(self):
        with pytest.raises(InvalidTransitionError):
            _make_job(JobStatus.ONGOING).transition(JobStatus.CANCELLED, BUYER)

    def test_buyer_cannot_cancel_a_quote(self):
        job = _make_job(JobStatus.QUOTED, quote="100")
        with pytest.raises(InvalidTransitionError, match="allowed: accepted"):
            job.transition(JobStatus.CANCELLED, BUYER)
        assert job.status == JobStatus.QUOTED

    @pytest.mark.parametrize("status", [JobStatus.QUOTED, JobStatus.ACCEPTED])
    def test_seller_rejects_only_fresh_requests(self, status):
        job = _make_job(status, quote="100")
        with pytest.raises(InvalidTransitionError):
            job.transition(JobStatus.REJECTED, SELLER)
        assert job.status == status
        assert job.rejected_at is None

    def test_seller_rejects_request(self):
        job = _make_job()
        job.transition(JobStatus.REJECTED, SELLER)
        assert job.rejected_at is not None

    def test_admin_marks_ongoing_disputed(self):
        job = _make_job(JobStatus.ONGOING)
        job.transition(JobStatus.DISPUTED, ADMIN)
        assert job.status == JobStatus.DISPUTED
        assert job.disputed_at is not None

    @pytest.mark.parametrize(
        "terminal",
        [JobStatus.COMPLETED, JobStatus.CANCELLED, JobStatus.REJECTED, JobStatus.DISPUTED],
    )
    def test_terminal_states_never_move(self, terminal):
        job = _make_job(terminal)
        for target in JobStatus:
            for actor in (BUYER, SELLER, ADMIN):
                with pytest.raises(InvalidTransitionError):
                    job.transition(target, actor)

    def test_other_seller_rejected(self):
        with pytest.raises(InvalidTransitionError, match="does not belong"):
            _make_job().transition(JobStatus.REJECTED, Actor.business("other"))


class TestJobCommission:

    def test_jobs_carry_no_commission(self):
        job = _make_job(JobStatus.ONGOING, quote="5000")
        job.transition(JobStatus.COMPLETED, SELLER)
        assert job.commission.is_zero
