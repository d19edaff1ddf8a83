"""Unit tests for the earnings calculator and clearance policy."""

from datetime import datetime, timedelta, timezone

from bazaar.domain.model.cart import ProductRef
from bazaar.domain.model.job import Job, JobStatus
from bazaar.domain.model.order import Order, OrderLineItem, OrderStatus
from bazaar.domain.model.value_objects import Money, Quantity
from bazaar.domain.model.withdrawal import BankDetails, WithdrawalRequest, WithdrawalStatus
from bazaar.domain.service.earnings_calculator import EarningsCalculator, HoldPeriodPolicy
from bazaar.domain.service.pricing import DeliveryMethod, PriceBreakdown

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def _order(
    seller_id: str = "S",
    status: OrderStatus = OrderStatus.DELIVERED,
    subtotal: str = "2000",
    commission: str = "300",
    delivered_at: datetime | None = NOW - timedelta(days=10),
) -> Order:
    order = Order.create(
        buyer_id="buyer-1",
        seller_id=seller_id,
        items=[
            OrderLineItem(ProductRef("A"), "Item A", Money.of(subtotal), Quantity(1)),
        ],
        pricing=PriceBreakdown(Money.of(subtotal), Money.of("300"), Money.of(commission)),
        delivery_method=DeliveryMethod.STANDARD,
        delivery_address="12 Marina Rd",
    )
    order.status = status
    order.delivered_at = delivered_at if status == OrderStatus.DELIVERED else None
    return order


def _job(status: JobStatus = JobStatus.COMPLETED, price: str = "5000") -> Job:
    job = Job.request("buyer-1", "S", "Paint the fence")
    job.status = status
    if status == JobStatus.COMPLETED:
        job.final_price = Money.of(price)
        job.completed_at = NOW - timedelta(days=10)
    return job


def _withdrawal(amount: str, status: WithdrawalStatus, seller_id: str = "S") -> WithdrawalRequest:
    request = WithdrawalRequest.create(
        seller_id, Money.of(amount), BankDetails("GTBank", "0123456789", "Ada Stores")
    )
    request.status = status
    return request


def _calculator(hold_days: int = 0) -> EarningsCalculator:
    return EarningsCalculator(HoldPeriodPolicy(timedelta(days=hold_days), clock=lambda: NOW))


class TestRevenue:

    def test_only_delivered_orders_count(self):
        orders = [
            _order(),
            _order(status=OrderStatus.SHIPPED),
            _order(status=OrderStatus.CANCELLED),
            _order(status=OrderStatus.REFUNDED),
        ]
        snapshot = _calculator().compute("S", orders, [], [])
        assert snapshot.order_count == 1
        # total 2600 = 2000 + 300 delivery + 300 commission
        assert snapshot.order_revenue == Money.of("2600")
        assert snapshot.total_commission == Money.of("300")
        assert snapshot.net_revenue == Money.of("2300")

    def test_only_completed_jobs_count(self):
        jobs = [_job(), _job(JobStatus.ONGOING), _job(JobStatus.DISPUTED)]
        snapshot = _calculator().compute("S", [], jobs, [])
        assert snapshot.job_count == 1
        assert snapshot.job_revenue == Money.of("5000")
        assert snapshot.available_balance == Money.of("5000")

    def test_other_sellers_ignored(self):
        snapshot = _calculator().compute("S", [_order(seller_id="T")], [], [])
        assert snapshot.order_count == 0
        assert snapshot.gross_revenue.is_zero

    def test_no_activity_is_all_zero(self):
        snapshot = _calculator().compute("S", [], [], [])
        assert snapshot.available_balance.is_zero
        assert snapshot.withdrawable.is_zero


class TestClearance:

    def test_recent_sales_are_pending_during_hold(self):
        recent = _order(delivered_at=NOW - timedelta(days=2))
        old = _order(delivered_at=NOW - timedelta(days=10))
        snapshot = _calculator(hold_days=7).compute("S", [recent, old], [], [])
        assert snapshot.available_balance == Money.of("2300")
        assert snapshot.pending_balance == Money.of("2300")

    def test_no_hold_clears_immediately(self):
        snapshot = _calculator().compute("S", [_order(delivered_at=NOW)], [], [])
        assert snapshot.available_balance == Money.of("2300")
        assert snapshot.pending_balance.is_zero


class TestWithdrawals:

    def test_completed_withdrawals_reduce_available(self):
        withdrawals = [_withdrawal("1000", WithdrawalStatus.COMPLETED)]
        snapshot = _calculator().compute("S", [], [_job()], withdrawals)
        assert snapshot.total_withdrawn == Money.of("1000")
        assert snapshot.available_balance == Money.of("4000")

    def test_outstanding_withdrawals_reduce_withdrawable_only(self):
        withdrawals = [
            _withdrawal("2000", WithdrawalStatus.PENDING),
            _withdrawal("500", WithdrawalStatus.PROCESSING),
            _withdrawal("9999", WithdrawalStatus.REJECTED),
        ]
        snapshot = _calculator().compute("S", [], [_job()], withdrawals)
        assert snapshot.available_balance == Money.of("5000")
        assert snapshot.outstanding_withdrawals == Money.of("2500")
        assert snapshot.withdrawable == Money.of("2500")

    def test_withdrawable_never_negative(self):
        withdrawals = [_withdrawal("6000", WithdrawalStatus.PENDING)]
        snapshot = _calculator().compute("S", [], [_job()], withdrawals)
        assert snapshot.withdrawable.is_zero
