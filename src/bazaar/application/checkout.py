"""Application service: Checkout use case.

Turns one seller's share of a buyer's cart into a single pending Order.
A cart spanning several sellers is checked out once per seller.

Ordering matters: the Order is built and validated before any payment
is taken, nothing is written until payment has succeeded, and the cart
lines are only removed after the Order is stored, so a failed checkout
never charges for nothing or loses items.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping, Sequence
from decimal import Decimal

from bazaar.application.dto import OrderDTO, order_to_dto
from bazaar.domain.exceptions import (
    DomainException,
    InvalidLineError,
    PaymentFailedError,
    ValidationError,
)
from bazaar.domain.model.actor import Actor, Role
from bazaar.domain.model.cart import CartLine
from bazaar.domain.model.order import Order, OrderLineItem
from bazaar.domain.model.value_objects import Money
from bazaar.domain.repository.cart_repository import CartRepository
from bazaar.domain.repository.order_repository import OrderRepository
from bazaar.domain.service.payment import PaymentGateway
from bazaar.domain.service.pricing import (
    DEFAULT_COMMISSION_PERCENT,
    DEFAULT_DELIVERY_FEES,
    DeliveryMethod,
    compute_checkout,
    validate_delivery,
)

logger = logging.getLogger(__name__)


class CheckoutHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        cart_repo: CartRepository,
        payment_gateway: PaymentGateway,
        delivery_fees: Mapping[DeliveryMethod, Money] = DEFAULT_DELIVERY_FEES,
        default_commission_percent: Decimal = DEFAULT_COMMISSION_PERCENT,
    ) -> None:
        self._order_repo = order_repo
        self._cart_repo = cart_repo
        self._payment_gateway = payment_gateway
        self._delivery_fees = delivery_fees
        self._default_commission_percent = default_commission_percent

    def handle(
        self,
        actor: Actor,
        seller_id: str,
        delivery_method: str | DeliveryMethod,
        address: str | None = None,
        notes: str | None = None,
        line_ids: Sequence[int] | None = None,
    ) -> OrderDTO:
        """Check out the buyer's lines for ``seller_id``.

        Steps:
        1. Select the lines (given IDs, or all of this seller's lines)
           and check they all belong to ``seller_id``.
        2. Validate the delivery method / address combination.
        3. Price the lines.
        4. Snapshot the lines into a new pending Order, which validates it.
        5. Confirm payment of the total, then store the Order.
        6. Remove exactly those lines from the cart.
        """
        actor.require(Role.CUSTOMER, "check out")
        buyer_id = actor.profile_id

        lines = self._select_lines(buyer_id, seller_id, line_ids)

        method = DeliveryMethod.parse(delivery_method)
        stored_address = validate_delivery(method, address)

        pricing = compute_checkout(
            lines, method, self._delivery_fees, self._default_commission_percent
        )

        order = Order.create(
            buyer_id=buyer_id,
            seller_id=seller_id,
            items=[
                OrderLineItem(
                    item=line.item,
                    name=line.name,
                    unit_price=line.unit_price,
                    quantity=line.quantity,
                )
                for line in lines
            ],
            pricing=pricing,
            delivery_method=method,
            delivery_address=stored_address,
            notes=notes,
        )

        reference = f"chk-{uuid.uuid4().hex[:12]}"
        if not self._payment_gateway.confirm(buyer_id, pricing.total, reference):
            logger.warning(
                "Payment %s declined for buyer %s (%s)", reference, buyer_id, pricing.total
            )
            raise PaymentFailedError(
                f"Payment of {pricing.total} was declined; your cart has not been changed"
            )

        order = self._order_repo.add(order)
        logger.info(
            "Order #%s placed by %s with %s: %s (payment %s)",
            order.id, buyer_id, seller_id, order.total, reference,
        )

        try:
            self._cart_repo.remove_many([line.id for line in lines])  # type: ignore[misc]
        except DomainException:
            # The order stands; leftover lines only mean the buyer sees them again.
            logger.exception(
                "Order #%s placed but its cart lines could not be removed", order.id
            )

        return order_to_dto(order)

    def _select_lines(
        self,
        buyer_id: str,
        seller_id: str,
        line_ids: Sequence[int] | None,
    ) -> list[CartLine]:
        if not seller_id:
            raise ValidationError("Choose which business to check out with")

        cart = self._cart_repo.list_for_owner(buyer_id)

        if line_ids is None:
            lines = [line for line in cart if line.seller_id == seller_id]
        else:
            by_id = {line.id: line for line in cart}
            missing = [line_id for line_id in line_ids if line_id not in by_id]
            if missing:
                raise InvalidLineError(
                    f"Cart line(s) {', '.join(f'#{i}' for i in missing)} are not in your cart"
                )
            lines = [by_id[line_id] for line_id in dict.fromkeys(line_ids)]

        if not lines:
            raise ValidationError(
                f"Your cart has no items from business '{seller_id}' to check out"
            )

        others = sorted({line.seller_id for line in lines if line.seller_id != seller_id})
        if others:
            raise ValidationError(
                "An order can only contain items from one business; "
                f"check out {', '.join(others)} separately"
            )
        return lines
