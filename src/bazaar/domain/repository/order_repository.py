"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bazaar.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> Order:
        """Persist a new order, assigning its ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def update_if_status(self, order: Order, expected: OrderStatus) -> bool:
        """Write ``order`` only if the stored status is still ``expected``.

        Returns False (and writes nothing) when another caller got there first.
        """

    @abstractmethod
    def list_by_seller(self, seller_id: str) -> list[Order]:
        """Return every order placed with a seller."""

    @abstractmethod
    def list_by_buyer(self, buyer_id: str) -> list[Order]:
        """Return every order placed by a buyer."""
