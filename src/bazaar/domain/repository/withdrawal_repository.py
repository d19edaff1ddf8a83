"""Abstract repository for WithdrawalRequest aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bazaar.domain.model.value_objects import Money
from bazaar.domain.model.withdrawal import WithdrawalRequest, WithdrawalStatus


class WithdrawalRepository(ABC):

    @abstractmethod
    def add_within_limit(self, request: WithdrawalRequest, available: Money) -> bool:
        """Persist ``request`` only if it fits the seller's balance.

        Atomically checks that ``request.amount`` plus the seller's stored
        outstanding (pending + processing) requests does not exceed
        ``available``. Returns False and stores nothing otherwise.
        """

    @abstractmethod
    def get_by_id(self, withdrawal_id: int) -> WithdrawalRequest | None:
        """Return a request by its ID, or None if not found."""

    @abstractmethod
    def update_if_status(self, request: WithdrawalRequest, expected: WithdrawalStatus) -> bool:
        """Write ``request`` only if the stored status is still ``expected``."""

    @abstractmethod
    def list_by_seller(self, seller_id: str) -> list[WithdrawalRequest]:
        """Return a seller's requests, oldest first."""

    @abstractmethod
    def list_all(self) -> list[WithdrawalRequest]:
        """Return every request (administrative view)."""
