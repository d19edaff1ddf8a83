"""Domain service: seller earnings.

Derives an EarningsSnapshot by scanning a seller's finished transactions.
Only ``delivered`` Orders and ``completed`` Jobs count. Whether a sale's
money has cleared the platform's hold is decided by a ClearancePolicy;
cleared net revenue, less what has already been paid out, is available
for withdrawal, the rest is pending.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from bazaar.domain.model.earnings import EarningsSnapshot
from bazaar.domain.model.job import Job, JobStatus
from bazaar.domain.model.order import Order, OrderStatus
from bazaar.domain.model.value_objects import DEFAULT_CURRENCY, Money
from bazaar.domain.model.withdrawal import WithdrawalRequest, WithdrawalStatus


class ClearancePolicy(ABC):

    @abstractmethod
    def is_cleared(self, completed_at: datetime | None) -> bool:
        """True if a sale completed at ``completed_at`` may be paid out."""


class HoldPeriodPolicy(ClearancePolicy):
    """Funds clear a fixed period after the sale completes."""

    def __init__(
        self,
        hold_period: timedelta,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._hold_period = hold_period
        self._clock = clock

    def is_cleared(self, completed_at: datetime | None) -> bool:
        if completed_at is None:
            return False
        return completed_at + self._hold_period <= self._clock()


class EarningsCalculator:

    def __init__(self, clearance: ClearancePolicy, currency: str = DEFAULT_CURRENCY) -> None:
        self._clearance = clearance
        self._currency = currency

    def compute(
        self,
        seller_id: str,
        orders: Iterable[Order],
        jobs: Iterable[Job],
        withdrawals: Iterable[WithdrawalRequest],
    ) -> EarningsSnapshot:
        order_revenue = job_revenue = commission = Decimal("0")
        cleared_net = pending_net = Decimal("0")
        order_count = job_count = 0

        for order in orders:
            if order.seller_id != seller_id or order.status != OrderStatus.DELIVERED:
                continue
            order_count += 1
            order_revenue += order.total.amount
            commission += order.commission.amount
            net = order.total.amount - order.commission.amount
            if self._clearance.is_cleared(order.completed_at):
                cleared_net += net
            else:
                pending_net += net

        for job in jobs:
            if job.seller_id != seller_id or job.status != JobStatus.COMPLETED:
                continue
            if job.final_price is None:
                continue
            job_count += 1
            job_revenue += job.final_price.amount
            if self._clearance.is_cleared(job.completed_at):
                cleared_net += job.final_price.amount
            else:
                pending_net += job.final_price.amount

        withdrawn = outstanding = Decimal("0")
        for request in withdrawals:
            if request.seller_id != seller_id:
                continue
            if request.status == WithdrawalStatus.COMPLETED:
                withdrawn += request.amount.amount
            elif request.is_outstanding:
                outstanding += request.amount.amount

        return EarningsSnapshot(
            seller_id=seller_id,
            order_revenue=self._money(order_revenue),
            job_revenue=self._money(job_revenue),
            total_commission=self._money(commission),
            available_balance=self._money(max(cleared_net - withdrawn, Decimal("0"))),
            pending_balance=self._money(pending_net),
            total_withdrawn=self._money(withdrawn),
            outstanding_withdrawals=self._money(outstanding),
            order_count=order_count,
            job_count=job_count,
        )

    def _money(self, amount: Decimal) -> Money:
        return Money(amount, self._currency)
