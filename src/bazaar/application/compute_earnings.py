"""Application service: Compute Earnings use case (query).

Recomputed from scratch on every call; there is no stored running total
that could drift from the orders and jobs it summarises.
"""

from __future__ import annotations

from bazaar.domain.model.earnings import EarningsSnapshot
from bazaar.domain.repository.job_repository import JobRepository
from bazaar.domain.repository.order_repository import OrderRepository
from bazaar.domain.repository.withdrawal_repository import WithdrawalRepository
from bazaar.domain.service.earnings_calculator import ClearancePolicy, EarningsCalculator


class ComputeEarningsHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        job_repo: JobRepository,
        withdrawal_repo: WithdrawalRepository,
        clearance: ClearancePolicy,
    ) -> None:
        self._order_repo = order_repo
        self._job_repo = job_repo
        self._withdrawal_repo = withdrawal_repo
        self._calculator = EarningsCalculator(clearance)

    def handle(self, seller_id: str) -> EarningsSnapshot:
        return self._calculator.compute(
            seller_id,
            orders=self._order_repo.list_by_seller(seller_id),
            jobs=self._job_repo.list_by_seller(seller_id),
            withdrawals=self._withdrawal_repo.list_by_seller(seller_id),
        )
