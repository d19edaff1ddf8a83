"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from pathlib import Path

from bazaar.domain.model.cart import item_ref
from bazaar.domain.model.order import Order, OrderLineItem, OrderStatus
from bazaar.domain.model.value_objects import Quantity
from bazaar.domain.repository.order_repository import OrderRepository
from bazaar.domain.service.pricing import DeliveryMethod
from bazaar.infrastructure.persistence.json_store import (
    JsonFileStore,
    dt_from_raw,
    dt_to_raw,
    money_from_raw,
    money_to_raw,
    next_id,
)

_STAMPS = (
    "created_at",
    "confirmed_at",
    "processing_at",
    "shipped_at",
    "delivered_at",
    "cancelled_at",
    "refunded_at",
)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> Order:
        with self._store.transaction() as records:
            order.id = next_id(records)
            records.append(self._to_raw(order))
        return order

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._store.read():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def update_if_status(self, order: Order, expected: OrderStatus) -> bool:
        with self._store.transaction() as records:
            for i, raw in enumerate(records):
                if raw["id"] == order.id:
                    if raw["status"] != expected.value:
                        return False
                    records[i] = self._to_raw(order)
                    return True
        return False

    def list_by_seller(self, seller_id: str) -> list[Order]:
        return [self._to_domain(r) for r in self._store.read() if r["seller_id"] == seller_id]

    def list_by_buyer(self, buyer_id: str) -> list[Order]:
        return [self._to_domain(r) for r in self._store.read() if r["buyer_id"] == buyer_id]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        raw = {
            "id": order.id,
            "buyer_id": order.buyer_id,
            "seller_id": order.seller_id,
            "status": order.status.value,
            "items": [
                {
                    "item_kind": item.item.kind,
                    "item_id": item.item.id,
                    "name": item.name,
                    "quantity": item.quantity.value,
                    "unit_price": money_to_raw(item.unit_price),
                }
                for item in order.items
            ],
            "subtotal": money_to_raw(order.subtotal),
            "delivery_fee": money_to_raw(order.delivery_fee),
            "commission": money_to_raw(order.commission),
            "total": money_to_raw(order.total),
            "delivery_method": order.delivery_method.value,
            "delivery_address": order.delivery_address,
            "notes": order.notes,
            "cancellation_reason": order.cancellation_reason,
        }
        for stamp in _STAMPS:
            raw[stamp] = dt_to_raw(getattr(order, stamp))
        return raw

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderLineItem(
                item=item_ref(i["item_kind"], i["item_id"]),
                name=i["name"],
                unit_price=money_from_raw(i["unit_price"]),
                quantity=Quantity(i["quantity"]),
            )
            for i in raw["items"]
        ]
        # "total" is stored for readers of the file; it is always recomputed.
        return Order(
            id=raw["id"],
            buyer_id=raw["buyer_id"],
            seller_id=raw["seller_id"],
            items=items,
            subtotal=money_from_raw(raw["subtotal"]),
            delivery_fee=money_from_raw(raw["delivery_fee"]),
            commission=money_from_raw(raw["commission"]),
            delivery_method=DeliveryMethod(raw["delivery_method"]),
            delivery_address=raw.get("delivery_address"),
            notes=raw.get("notes"),
            status=OrderStatus(raw["status"]),
            cancellation_reason=raw.get("cancellation_reason"),
            **{stamp: dt_from_raw(raw.get(stamp)) for stamp in _STAMPS},
        )
