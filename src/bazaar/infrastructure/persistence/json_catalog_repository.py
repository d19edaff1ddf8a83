"""JSON-file-backed implementation of CatalogRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from bazaar.domain.model.cart import CatalogItem, ItemRef, item_ref
from bazaar.domain.repository.catalog_repository import CatalogRepository
from bazaar.infrastructure.persistence.json_store import (
    JsonFileStore,
    money_from_raw,
    money_to_raw,
)


class JsonCatalogRepository(CatalogRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    def get(self, ref: ItemRef) -> CatalogItem | None:
        for raw in self._store.read():
            if raw["kind"] == ref.kind and raw["id"] == ref.id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[CatalogItem]:
        return [self._to_domain(raw) for raw in self._store.read()]

    def save(self, item: CatalogItem) -> None:
        with self._store.transaction() as records:
            records[:] = [
                raw
                for raw in records
                if not (raw["kind"] == item.ref.kind and raw["id"] == item.ref.id)
            ]
            records.append(self._to_raw(item))

    @staticmethod
    def _to_raw(item: CatalogItem) -> dict:
        return {
            "kind": item.ref.kind,
            "id": item.ref.id,
            "seller_id": item.seller_id,
            "name": item.name,
            "unit_price": money_to_raw(item.unit_price),
            "commission_percent": (
                str(item.commission_percent) if item.commission_percent is not None else None
            ),
            "available": item.available,
        }

    @staticmethod
    def _to_domain(raw: dict) -> CatalogItem:
        rate = raw.get("commission_percent")
        return CatalogItem(
            ref=item_ref(raw["kind"], raw["id"]),
            seller_id=raw["seller_id"],
            name=raw["name"],
            unit_price=money_from_raw(raw["unit_price"]),
            commission_percent=Decimal(rate) if rate is not None else None,
            available=raw.get("available", True),
        )
