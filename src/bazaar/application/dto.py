"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from bazaar.domain.model.cart import CartLine
from bazaar.domain.model.order import Order


@dataclass(frozen=True)
class CartLineDTO:
    id: int
    seller_id: str
    item_kind: str
    item_id: str
    name: str
    quantity: int
    unit_price: str  # formatted, e.g. "₦500.00"
    line_total: str
    notes: str | None


@dataclass(frozen=True)
class SellerCartDTO:
    """All of a buyer's lines for one seller, with a running subtotal."""

    seller_id: str
    lines: list[CartLineDTO]
    subtotal: str
    item_count: int


@dataclass(frozen=True)
class CartDTO:
    owner_id: str
    sellers: list[SellerCartDTO]
    total: str
    item_count: int


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    buyer_id: str
    seller_id: str
    status: str
    items: list[OrderLineItemDTO]
    subtotal: str
    delivery_fee: str
    commission: str
    total: str
    delivery_method: str
    delivery_address: str | None
    created_at: str


def cart_line_to_dto(line: CartLine) -> CartLineDTO:
    return CartLineDTO(
        id=line.id,  # type: ignore[arg-type]
        seller_id=line.seller_id,
        item_kind=line.item.kind,
        item_id=line.item.id,
        name=line.name,
        quantity=line.quantity.value,
        unit_price=str(line.unit_price),
        line_total=str(line.line_total),
        notes=line.notes,
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        buyer_id=order.buyer_id,
        seller_id=order.seller_id,
        status=order.status.value,
        items=[
            OrderLineItemDTO(
                name=item.name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        subtotal=str(order.subtotal),
        delivery_fee=str(order.delivery_fee),
        commission=str(order.commission),
        total=str(order.total),
        delivery_method=order.delivery_method.value,
        delivery_address=order.delivery_address,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
