"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache

from bazaar.domain.model.value_objects import Money
from bazaar.domain.service.earnings_calculator import HoldPeriodPolicy
from bazaar.domain.service.pricing import DeliveryMethod
from bazaar.infrastructure.payment import ApprovingPaymentGateway
from bazaar.infrastructure.persistence.json_cart_repository import JsonCartRepository
from bazaar.infrastructure.persistence.json_catalog_repository import (
    JsonCatalogRepository,
)
from bazaar.infrastructure.persistence.json_job_repository import JsonJobRepository
from bazaar.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from bazaar.infrastructure.persistence.json_withdrawal_repository import (
    JsonWithdrawalRepository,
)
from bazaar.infrastructure.settings import Settings, get_settings


@lru_cache(maxsize=1)
def settings() -> Settings:
    return get_settings()


def device_cart_repository() -> JsonCartRepository:
    return JsonCartRepository(settings().DATA_DIR / "device_cart.json")


def cart_repository() -> JsonCartRepository:
    return JsonCartRepository(settings().DATA_DIR / "cart.json")


def catalog_repository() -> JsonCatalogRepository:
    return JsonCatalogRepository(settings().DATA_DIR / "catalog.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().DATA_DIR / "orders.json")


def job_repository() -> JsonJobRepository:
    return JsonJobRepository(settings().DATA_DIR / "jobs.json")


def withdrawal_repository() -> JsonWithdrawalRepository:
    return JsonWithdrawalRepository(settings().DATA_DIR / "withdrawals.json")


def payment_gateway() -> ApprovingPaymentGateway:
    return ApprovingPaymentGateway()


def delivery_fees() -> dict[DeliveryMethod, Money]:
    s = settings()
    return {
        DeliveryMethod.PICKUP: Money(s.PICKUP_FEE),
        DeliveryMethod.STANDARD: Money(s.STANDARD_DELIVERY_FEE),
        DeliveryMethod.EXPRESS: Money(s.EXPRESS_DELIVERY_FEE),
    }


def clearance_policy() -> HoldPeriodPolicy:
    return HoldPeriodPolicy(timedelta(days=settings().HOLD_PERIOD_DAYS))
