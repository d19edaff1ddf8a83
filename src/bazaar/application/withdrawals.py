"""Application services: request and process seller withdrawals."""

from __future__ import annotations

import logging

from bazaar.application.compute_earnings import ComputeEarningsHandler
from bazaar.domain.exceptions import (
    EntityNotFoundError,
    InsufficientBalanceError,
    InvalidTransitionError,
)
from bazaar.domain.model.actor import Actor, Role
from bazaar.domain.model.value_objects import Money
from bazaar.domain.model.withdrawal import (
    BankDetails,
    WithdrawalRequest,
    WithdrawalStatus,
)
from bazaar.domain.repository.withdrawal_repository import WithdrawalRepository

logger = logging.getLogger(__name__)


class RequestWithdrawalHandler:

    def __init__(
        self,
        withdrawal_repo: WithdrawalRepository,
        earnings: ComputeEarningsHandler,
    ) -> None:
        self._withdrawal_repo = withdrawal_repo
        self._earnings = earnings

    def handle(self, actor: Actor, amount: str, bank_details: BankDetails) -> WithdrawalRequest:
        """Ask for ``amount`` to be paid out to ``bank_details``.

        The request must fit inside the available balance less whatever
        is already pending or processing. The final check happens inside
        the store so two simultaneous requests can't both squeeze through.
        """
        actor.require(Role.BUSINESS, "request a withdrawal")
        seller_id = actor.profile_id

        request = WithdrawalRequest.create(seller_id, Money.of(amount), bank_details)
        snapshot = self._earnings.handle(seller_id)

        if request.amount > snapshot.withdrawable or not self._withdrawal_repo.add_within_limit(
            request, snapshot.available_balance
        ):
            logger.warning(
                "Withdrawal of %s by %s refused (withdrawable %s)",
                request.amount, seller_id, snapshot.withdrawable,
            )
            raise InsufficientBalanceError(request.amount, snapshot.withdrawable)

        logger.info("Withdrawal #%s of %s requested by %s", request.id, request.amount, seller_id)
        return request


class ProcessWithdrawalHandler:
    """Administrative status changes on a withdrawal request."""

    def __init__(self, withdrawal_repo: WithdrawalRepository) -> None:
        self._withdrawal_repo = withdrawal_repo

    def handle(
        self,
        actor: Actor,
        withdrawal_id: int,
        target: WithdrawalStatus | str,
        notes: str | None = None,
    ) -> WithdrawalRequest:
        actor.require(Role.ADMIN, "process withdrawals")
        if not isinstance(target, WithdrawalStatus):
            try:
                target = WithdrawalStatus(target.strip().lower())
            except ValueError:
                raise InvalidTransitionError(f"Unknown withdrawal status '{target}'") from None

        request = self._withdrawal_repo.get_by_id(withdrawal_id)
        if request is None:
            raise EntityNotFoundError(f"Withdrawal #{withdrawal_id} not found")

        expected = request.status
        request.transition(target, actor, notes=notes)
        if not self._withdrawal_repo.update_if_status(request, expected):
            logger.warning(
                "Stale write on withdrawal #%s (expected %s)", withdrawal_id, expected.value
            )
            raise InvalidTransitionError.stale_state(f"Withdrawal #{withdrawal_id}", expected.value)

        logger.info(
            "Withdrawal #%s %s -> %s by %s",
            withdrawal_id, expected.value, target.value, actor.user_id,
        )
        return request


class ListWithdrawalsHandler:

    def __init__(self, withdrawal_repo: WithdrawalRepository) -> None:
        self._withdrawal_repo = withdrawal_repo

    def handle(self, actor: Actor) -> list[WithdrawalRequest]:
        if actor.role == Role.ADMIN:
            return self._withdrawal_repo.list_all()
        actor.require(Role.BUSINESS, "view withdrawals")
        return self._withdrawal_repo.list_by_seller(actor.profile_id)
