"""Job aggregate — a service request negotiated between buyer and seller.

Unlike an Order, a Job starts without a price: the seller quotes, the buyer
accepts, and the price is only fixed (``final_price``) on completion.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from bazaar.domain.exceptions import InvalidTransitionError, ValidationError
from bazaar.domain.model.actor import Actor, Role
from bazaar.domain.model.lifecycle import TransitionTable
from bazaar.domain.model.value_objects import DEFAULT_CURRENCY, Money


class JobStatus(Enum):
    REQUESTED = "requested"
    QUOTED = "quoted"
    ACCEPTED = "accepted"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    REJECTED = "rejected"
    DISPUTED = "disputed"


JOB_TRANSITIONS: TransitionTable[JobStatus] = TransitionTable(
    "Job",
    {
        (JobStatus.REQUESTED, Role.BUSINESS): {JobStatus.QUOTED, JobStatus.REJECTED},
        (JobStatus.ACCEPTED, Role.BUSINESS): {JobStatus.ONGOING},
        (JobStatus.ONGOING, Role.BUSINESS): {JobStatus.COMPLETED},
        (JobStatus.REQUESTED, Role.CUSTOMER): {JobStatus.CANCELLED},
        (JobStatus.QUOTED, Role.CUSTOMER): {JobStatus.ACCEPTED},
        (JobStatus.ACCEPTED, Role.CUSTOMER): {JobStatus.CANCELLED},
        (JobStatus.ACCEPTED, Role.ADMIN): {JobStatus.DISPUTED},
        (JobStatus.ONGOING, Role.ADMIN): {JobStatus.DISPUTED},
    },
    terminal={
        JobStatus.COMPLETED,
        JobStatus.CANCELLED,
        JobStatus.REJECTED,
        JobStatus.DISPUTED,
    },
)

# Timestamp field stamped on arrival in each status.
_STAMPS = {
    JobStatus.QUOTED: "quoted_at",
    JobStatus.ACCEPTED: "accepted_at",
    JobStatus.ONGOING: "started_at",
    JobStatus.COMPLETED: "completed_at",
    JobStatus.CANCELLED: "cancelled_at",
    JobStatus.REJECTED: "rejected_at",
    JobStatus.DISPUTED: "disputed_at",
}


@dataclass(frozen=True)
class BudgetRange:
    """The buyer's indicative budget. Either bound may be open."""

    minimum: Money | None = None
    maximum: Money | None = None

    def __post_init__(self) -> None:
        if self.minimum is not None and self.maximum is not None and self.minimum > self.maximum:
            raise ValidationError(
                f"Budget minimum {self.minimum} is above maximum {self.maximum}"
            )

    def __str__(self) -> str:
        if self.minimum is not None and self.maximum is not None:
            return f"{self.minimum} - {self.maximum}"
        if self.minimum is not None:
            return f"from {self.minimum}"
        if self.maximum is not None:
            return f"up to {self.maximum}"
        return "open"


@dataclass
class Job:
    """Aggregate root for service requests."""

    id: int | None
    buyer_id: str
    seller_id: str
    title: str
    description: str | None = None
    location: str | None = None
    service_id: str | None = None
    budget: BudgetRange = field(default_factory=BudgetRange)
    quoted_price: Money | None = None
    final_price: Money | None = None
    status: JobStatus = JobStatus.REQUESTED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    quoted_at: datetime | None = None
    accepted_at: datetime | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None
    rejected_at: datetime | None = None
    disputed_at: datetime | None = None
    cancellation_reason: str | None = None

    @staticmethod
    def request(
        buyer_id: str,
        seller_id: str,
        title: str,
        description: str | None = None,
        location: str | None = None,
        service_id: str | None = None,
        budget: BudgetRange | None = None,
    ) -> Job:
        """Open a new service request in ``requested`` status."""
        if not buyer_id or not seller_id:
            raise ValidationError("A job needs both a buyer and a seller")
        if not title or not title.strip():
            raise ValidationError("Job title is required")
        return Job(
            id=None,
            buyer_id=buyer_id,
            seller_id=seller_id,
            title=title.strip(),
            description=_clean(description),
            location=_clean(location),
            service_id=service_id or None,
            budget=budget or BudgetRange(),
        )

    # --- State transitions ----------------------------------------------------

    def transition(
        self,
        target: JobStatus,
        actor: Actor,
        *,
        quoted_price: Money | None = None,
        final_price: Money | None = None,
        reason: str | None = None,
        now: datetime | None = None,
    ) -> None:
        """Move to ``target`` on behalf of ``actor``.

        Quoting requires ``quoted_price``; completion fixes ``final_price``
        (the quote unless given). Prices are validated before anything is
        changed so a failed call leaves the job untouched.
        """
        self._check_party(actor)
        JOB_TRANSITIONS.check(self.status, target, actor.role)

        if quoted_price is not None and target != JobStatus.QUOTED:
            raise InvalidTransitionError("A quote can only be given on a requested job")
        if final_price is not None and target != JobStatus.COMPLETED:
            raise ValidationError("A final price can only be set when completing a job")

        if target == JobStatus.QUOTED:
            if quoted_price is None or quoted_price.is_zero:
                raise ValidationError("A quote needs a price greater than zero")
            self.quoted_price = quoted_price
        elif target == JobStatus.COMPLETED:
            price = final_price if final_price is not None else self.quoted_price
            if price is None:
                raise ValidationError("A final price is required to complete this job")
            self.final_price = price
        elif target == JobStatus.CANCELLED and reason:
            self.cancellation_reason = reason.strip()

        self.status = target
        setattr(self, _STAMPS[target], now or datetime.now(timezone.utc))

    def allowed_transitions(self, actor: Actor) -> frozenset[JobStatus]:
        if not self._is_party(actor):
            return frozenset()
        return JOB_TRANSITIONS.allowed(self.status, actor.role)

    # --- Computed properties --------------------------------------------------

    @property
    def is_terminal(self) -> bool:
        return JOB_TRANSITIONS.is_terminal(self.status)

    @property
    def commission(self) -> Money:
        """Jobs carry no platform commission."""
        currency = self.final_price.currency if self.final_price else DEFAULT_CURRENCY
        return Money.zero(currency)

    # --- Internal helpers -----------------------------------------------------

    def _is_party(self, actor: Actor) -> bool:
        if actor.role == Role.ADMIN:
            return True
        if actor.role == Role.BUSINESS:
            return actor.profile_id == self.seller_id
        return actor.profile_id == self.buyer_id

    def _check_party(self, actor: Actor) -> None:
        if not self._is_party(actor):
            raise InvalidTransitionError(
                f"Job #{self.id} does not belong to this {actor.role.value}"
            )


def _clean(value: str | None) -> str | None:
    return value.strip() if value and value.strip() else None
