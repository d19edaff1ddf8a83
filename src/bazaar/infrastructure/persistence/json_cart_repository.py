"""JSON-file-backed implementation of CartRepository.

Used for both cart backends: the device-local anonymous cart and the
persisted buyer cart are simply two files.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from pathlib import Path

from bazaar.domain.model.cart import CartLine, item_ref
from bazaar.domain.model.value_objects import Quantity
from bazaar.domain.repository.cart_repository import CartRepository
from bazaar.infrastructure.persistence.json_store import (
    JsonFileStore,
    dt_from_raw,
    dt_to_raw,
    money_from_raw,
    money_to_raw,
    next_id,
)


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- CartRepository interface ---------------------------------------------

    def add_or_increment(self, line: CartLine) -> CartLine:
        with self._store.transaction() as records:
            for raw in records:
                if self._key(raw) == (line.owner_id, line.seller_id, line.item.kind, line.item.id):
                    raw["quantity"] += line.quantity.value
                    return self._to_domain(raw)
            raw = self._to_raw(line)
            raw["id"] = next_id(records)
            records.append(raw)
            return self._to_domain(raw)

    def get_by_id(self, line_id: int) -> CartLine | None:
        for raw in self._store.read():
            if raw["id"] == line_id:
                return self._to_domain(raw)
        return None

    def set_quantity(self, line_id: int, quantity: int) -> CartLine | None:
        if quantity <= 0:
            self.remove(line_id)
            return None
        Quantity(quantity)
        with self._store.transaction() as records:
            for raw in records:
                if raw["id"] == line_id:
                    raw["quantity"] = quantity
                    return self._to_domain(raw)
        return None

    def remove(self, line_id: int) -> None:
        self.remove_many([line_id])

    def remove_many(self, line_ids: Iterable[int]) -> None:
        doomed = set(line_ids)
        with self._store.transaction() as records:
            records[:] = [raw for raw in records if raw["id"] not in doomed]

    def clear(self, owner_id: str) -> None:
        with self._store.transaction() as records:
            records[:] = [raw for raw in records if raw["owner_id"] != owner_id]

    def list_for_owner(self, owner_id: str) -> list[CartLine]:
        return [
            self._to_domain(raw) for raw in self._store.read() if raw["owner_id"] == owner_id
        ]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _key(raw: dict) -> tuple[str, str, str, str]:
        return (raw["owner_id"], raw["seller_id"], raw["item_kind"], raw["item_id"])

    @staticmethod
    def _to_raw(line: CartLine) -> dict:
        return {
            "id": line.id,
            "owner_id": line.owner_id,
            "seller_id": line.seller_id,
            "item_kind": line.item.kind,
            "item_id": line.item.id,
            "name": line.name,
            "unit_price": money_to_raw(line.unit_price),
            "quantity": line.quantity.value,
            "commission_percent": (
                str(line.commission_percent) if line.commission_percent is not None else None
            ),
            "notes": line.notes,
            "created_at": dt_to_raw(line.created_at),
        }

    @staticmethod
    def _to_domain(raw: dict) -> CartLine:
        rate = raw.get("commission_percent")
        return CartLine(
            id=raw["id"],
            owner_id=raw["owner_id"],
            seller_id=raw["seller_id"],
            item=item_ref(raw["item_kind"], raw["item_id"]),
            name=raw["name"],
            unit_price=money_from_raw(raw["unit_price"]),
            quantity=Quantity(raw["quantity"]),
            commission_percent=Decimal(rate) if rate is not None else None,
            notes=raw.get("notes"),
            created_at=dt_from_raw(raw["created_at"]),
        )
