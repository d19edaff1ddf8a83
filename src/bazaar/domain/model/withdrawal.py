"""WithdrawalRequest aggregate — a seller asking to be paid out."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from bazaar.domain.exceptions import ValidationError
from bazaar.domain.model.actor import Actor, Role
from bazaar.domain.model.lifecycle import TransitionTable
from bazaar.domain.model.value_objects import Money


class WithdrawalStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    REJECTED = "rejected"


WITHDRAWAL_TRANSITIONS: TransitionTable[WithdrawalStatus] = TransitionTable(
    "Withdrawal",
    {
        (WithdrawalStatus.PENDING, Role.ADMIN): {
            WithdrawalStatus.PROCESSING,
            WithdrawalStatus.REJECTED,
        },
        (WithdrawalStatus.PROCESSING, Role.ADMIN): {
            WithdrawalStatus.COMPLETED,
            WithdrawalStatus.REJECTED,
        },
    },
    terminal={WithdrawalStatus.COMPLETED, WithdrawalStatus.REJECTED},
)

# Requests that still hold funds back from the seller.
OUTSTANDING = frozenset({WithdrawalStatus.PENDING, WithdrawalStatus.PROCESSING})


@dataclass(frozen=True)
class BankDetails:
    bank_name: str
    account_number: str
    account_name: str

    def __post_init__(self) -> None:
        missing = [
            label
            for label, value in (
                ("bank name", self.bank_name),
                ("account number", self.account_number),
                ("account name", self.account_name),
            )
            if not value or not value.strip()
        ]
        if missing:
            raise ValidationError(f"Bank details are missing: {', '.join(missing)}")


@dataclass
class WithdrawalRequest:
    id: int | None
    seller_id: str
    amount: Money
    bank_details: BankDetails
    status: WithdrawalStatus = WithdrawalStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    processed_at: datetime | None = None
    processed_by: str | None = None
    admin_notes: str | None = None

    @staticmethod
    def create(seller_id: str, amount: Money, bank_details: BankDetails) -> WithdrawalRequest:
        if not seller_id:
            raise ValidationError("A withdrawal needs a seller")
        if amount.is_zero:
            raise ValidationError("Withdrawal amount must be greater than zero")
        return WithdrawalRequest(
            id=None, seller_id=seller_id, amount=amount, bank_details=bank_details
        )

    @property
    def is_outstanding(self) -> bool:
        return self.status in OUTSTANDING

    def transition(
        self,
        target: WithdrawalStatus,
        actor: Actor,
        *,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> None:
        """Administrative status change, audited with who/when/notes."""
        WITHDRAWAL_TRANSITIONS.check(self.status, target, actor.role)
        self.status = target
        self.processed_at = now or datetime.now(timezone.utc)
        self.processed_by = actor.user_id
        if notes and notes.strip():
            self.admin_notes = notes.strip()
