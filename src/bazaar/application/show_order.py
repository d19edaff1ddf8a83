"""Application services: Show Order / List Orders (queries)."""

from __future__ import annotations

from bazaar.application.dto import OrderDTO, order_to_dto
from bazaar.domain.exceptions import EntityNotFoundError
from bazaar.domain.model.actor import Actor, Role
from bazaar.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, actor: Actor, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None or not _visible_to(actor, order.buyer_id, order.seller_id):
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order_to_dto(order)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, actor: Actor) -> list[OrderDTO]:
        """A business sees orders placed with it; a customer sees their own."""
        if actor.role == Role.BUSINESS:
            orders = self._order_repo.list_by_seller(actor.profile_id)
        else:
            orders = self._order_repo.list_by_buyer(actor.profile_id)
        return [order_to_dto(order) for order in orders]


def _visible_to(actor: Actor, buyer_id: str, seller_id: str) -> bool:
    if actor.role == Role.ADMIN:
        return True
    if actor.role == Role.BUSINESS:
        return actor.profile_id == seller_id
    return actor.profile_id == buyer_id
