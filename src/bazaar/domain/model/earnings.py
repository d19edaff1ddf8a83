"""EarningsSnapshot — a seller's balances, derived on demand.

Nothing here is stored; the ledger recomputes it from finished Orders, Jobs
and Withdrawal Requests every time.
"""

from __future__ import annotations

from dataclasses import dataclass

from bazaar.domain.model.value_objects import Money


@dataclass(frozen=True)
class EarningsSnapshot:
    seller_id: str
    order_revenue: Money
    job_revenue: Money
    total_commission: Money
    available_balance: Money
    pending_balance: Money
    total_withdrawn: Money
    outstanding_withdrawals: Money
    order_count: int
    job_count: int

    @property
    def gross_revenue(self) -> Money:
        return self.order_revenue + self.job_revenue

    @property
    def net_revenue(self) -> Money:
        return self.gross_revenue - self.total_commission

    @property
    def withdrawable(self) -> Money:
        """What a new withdrawal request may still claim."""
        if self.outstanding_withdrawals >= self.available_balance:
            return Money.zero(self.available_balance.currency)
        return self.available_balance - self.outstanding_withdrawals
