"""JSON-file-backed implementation of WithdrawalRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from bazaar.domain.model.value_objects import Money
from bazaar.domain.model.withdrawal import (
    OUTSTANDING,
    BankDetails,
    WithdrawalRequest,
    WithdrawalStatus,
)
from bazaar.domain.repository.withdrawal_repository import WithdrawalRepository
from bazaar.infrastructure.persistence.json_store import (
    JsonFileStore,
    dt_from_raw,
    dt_to_raw,
    money_from_raw,
    money_to_raw,
    next_id,
)

_OUTSTANDING_VALUES = {status.value for status in OUTSTANDING}


class JsonWithdrawalRepository(WithdrawalRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    def add_within_limit(self, request: WithdrawalRequest, available: Money) -> bool:
        with self._store.transaction() as records:
            outstanding = sum(
                (
                    Decimal(raw["amount"]["amount"])
                    for raw in records
                    if raw["seller_id"] == request.seller_id
                    and raw["status"] in _OUTSTANDING_VALUES
                ),
                Decimal("0"),
            )
            if outstanding + request.amount.amount > available.amount:
                return False
            request.id = next_id(records)
            records.append(self._to_raw(request))
        return True

    def get_by_id(self, withdrawal_id: int) -> WithdrawalRequest | None:
        for raw in self._store.read():
            if raw["id"] == withdrawal_id:
                return self._to_domain(raw)
        return None

    def update_if_status(self, request: WithdrawalRequest, expected: WithdrawalStatus) -> bool:
        with self._store.transaction() as records:
            for i, raw in enumerate(records):
                if raw["id"] == request.id:
                    if raw["status"] != expected.value:
                        return False
                    records[i] = self._to_raw(request)
                    return True
        return False

    def list_by_seller(self, seller_id: str) -> list[WithdrawalRequest]:
        return [self._to_domain(r) for r in self._store.read() if r["seller_id"] == seller_id]

    def list_all(self) -> list[WithdrawalRequest]:
        return [self._to_domain(r) for r in self._store.read()]

    @staticmethod
    def _to_raw(request: WithdrawalRequest) -> dict:
        return {
            "id": request.id,
            "seller_id": request.seller_id,
            "amount": money_to_raw(request.amount),
            "bank_name": request.bank_details.bank_name,
            "account_number": request.bank_details.account_number,
            "account_name": request.bank_details.account_name,
            "status": request.status.value,
            "created_at": dt_to_raw(request.created_at),
            "processed_at": dt_to_raw(request.processed_at),
            "processed_by": request.processed_by,
            "admin_notes": request.admin_notes,
        }

    @staticmethod
    def _to_domain(raw: dict) -> WithdrawalRequest:
        return WithdrawalRequest(
            id=raw["id"],
            seller_id=raw["seller_id"],
            amount=money_from_raw(raw["amount"]),
            bank_details=BankDetails(
                bank_name=raw["bank_name"],
                account_number=raw["account_number"],
                account_name=raw["account_name"],
            ),
            status=WithdrawalStatus(raw["status"]),
            created_at=dt_from_raw(raw["created_at"]),
            processed_at=dt_from_raw(raw.get("processed_at")),
            processed_by=raw.get("processed_by"),
            admin_notes=raw.get("admin_notes"),
        )
