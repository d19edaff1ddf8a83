"""Application service: Order status changes.

One entry point for every actor. The aggregate decides whether the move
is legal; the repository's conditional write makes sure two callers can't
both advance the same order from the same starting status.
"""

from __future__ import annotations

import logging

from bazaar.application.dto import OrderDTO, order_to_dto
from bazaar.domain.exceptions import EntityNotFoundError, InvalidTransitionError
from bazaar.domain.model.actor import Actor
from bazaar.domain.model.order import OrderStatus
from bazaar.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class TransitionOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        actor: Actor,
        order_id: int,
        target: OrderStatus | str,
        reason: str | None = None,
    ) -> OrderDTO:
        target = _parse_status(target)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        expected = order.status
        try:
            order.transition(target, actor, reason=reason)
        except InvalidTransitionError:
            logger.warning(
                "Rejected order #%s %s -> %s by %s %s",
                order_id, expected.value, target.value, actor.role.value, actor.profile_id,
            )
            raise

        if not self._order_repo.update_if_status(order, expected):
            logger.warning("Stale write on order #%s (expected %s)", order_id, expected.value)
            raise InvalidTransitionError.stale_state(f"Order #{order_id}", expected.value)

        logger.info(
            "Order #%s %s -> %s by %s %s",
            order_id, expected.value, target.value, actor.role.value, actor.profile_id,
        )
        return order_to_dto(order)


def _parse_status(raw: OrderStatus | str) -> OrderStatus:
    if isinstance(raw, OrderStatus):
        return raw
    try:
        return OrderStatus(raw.strip().lower())
    except ValueError:
        raise InvalidTransitionError(f"Unknown order status '{raw}'") from None
