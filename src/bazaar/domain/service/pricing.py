"""Domain service: checkout pricing and platform commission.

Pure functions; no repositories, no clock. Given the lines being bought and
the chosen delivery method, produces the amounts an Order will carry.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Protocol

from bazaar.domain.exceptions import ValidationError
from bazaar.domain.model.value_objects import Money, Quantity

DEFAULT_COMMISSION_PERCENT = Decimal("10")


class DeliveryMethod(Enum):
    PICKUP = "pickup"
    STANDARD = "standard"
    EXPRESS = "express"

    @staticmethod
    def parse(raw: str | DeliveryMethod) -> DeliveryMethod:
        if isinstance(raw, DeliveryMethod):
            return raw
        try:
            return DeliveryMethod((raw or "").strip().lower())
        except ValueError:
            options = ", ".join(m.value for m in DeliveryMethod)
            raise ValidationError(
                f"Unknown delivery method '{raw}' (choose one of: {options})"
            ) from None

    @property
    def needs_address(self) -> bool:
        return self is not DeliveryMethod.PICKUP


DEFAULT_DELIVERY_FEES: Mapping[DeliveryMethod, Money] = {
    DeliveryMethod.PICKUP: Money.of("0"),
    DeliveryMethod.STANDARD: Money.of("300"),
    DeliveryMethod.EXPRESS: Money.of("500"),
}


class PricedLine(Protocol):
    """Anything with a price, a quantity and an optional commission rate."""

    unit_price: Money
    quantity: Quantity
    commission_percent: Decimal | None


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Money
    delivery_fee: Money
    commission: Money

    @property
    def total(self) -> Money:
        return self.subtotal + self.delivery_fee + self.commission


def validate_delivery(method: DeliveryMethod, address: str | None) -> str | None:
    """Check the method/address combination and return the address to store.

    Pickup never stores an address; every other method requires one.
    """
    if not method.needs_address:
        return None
    if not address or not address.strip():
        raise ValidationError(
            f"A delivery address is required for {method.value} delivery"
        )
    return address.strip()


def average_commission_percent(
    lines: Sequence[PricedLine],
    default_percent: Decimal = DEFAULT_COMMISSION_PERCENT,
) -> Decimal:
    """Arithmetic mean of per-line rates (not weighted by line value)."""
    if not lines:
        return Decimal("0")
    rates = [
        line.commission_percent if line.commission_percent is not None else default_percent
        for line in lines
    ]
    return sum(rates, Decimal("0")) / len(rates)


def compute_checkout(
    lines: Sequence[PricedLine],
    delivery_method: DeliveryMethod,
    fees: Mapping[DeliveryMethod, Money] = DEFAULT_DELIVERY_FEES,
    default_commission_percent: Decimal = DEFAULT_COMMISSION_PERCENT,
) -> PriceBreakdown:
    """Compute subtotal, delivery fee, commission and total.

    An empty ``lines`` yields an all-zero breakdown; callers must refuse
    to turn that into an Order.
    """
    if not lines:
        zero = Money.zero()
        return PriceBreakdown(subtotal=zero, delivery_fee=zero, commission=zero)

    currency = lines[0].unit_price.currency
    subtotal = Money.zero(currency)
    for line in lines:
        subtotal = subtotal + line.unit_price * line.quantity.value

    try:
        fee = fees[delivery_method]
    except KeyError:
        raise ValidationError(
            f"No delivery fee configured for {delivery_method.value}"
        ) from None

    rate = average_commission_percent(lines, default_commission_percent)
    commission = subtotal.percent(rate).round_to_unit()

    return PriceBreakdown(
        subtotal=subtotal,
        delivery_fee=Money(fee.amount, currency),
        commission=commission,
    )
