"""Cart lines and the item references they point at.

A cart line holds a quantity of exactly one product *or* one service from
one seller. The "exactly one" rule is carried by the ``ItemRef`` variant
rather than two nullable id fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Union

from bazaar.domain.exceptions import InvalidLineError, ValidationError
from bazaar.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class ProductRef:
    id: str

    kind = "product"


@dataclass(frozen=True)
class ServiceRef:
    id: str

    kind = "service"


ItemRef = Union[ProductRef, ServiceRef]


def item_ref(kind: str, item_id: str) -> ItemRef:
    """Build an ItemRef from its serialized ``kind``/``id`` pair."""
    if not item_id:
        raise InvalidLineError("A cart line needs a product or service id")
    if kind == ProductRef.kind:
        return ProductRef(item_id)
    if kind == ServiceRef.kind:
        return ServiceRef(item_id)
    raise InvalidLineError(f"Unknown item kind '{kind}' (expected product or service)")


@dataclass(frozen=True)
class CatalogItem:
    """What the catalog knows about an item at add-to-cart time."""

    ref: ItemRef
    seller_id: str
    name: str
    unit_price: Money
    commission_percent: Decimal | None = None
    available: bool = True


@dataclass
class CartLine:
    """One (owner, seller, item) entry in a cart.

    ``owner_id`` is the device id for anonymous carts and the buyer id
    for persisted ones. Name, price and commission rate are copied from
    the catalog when the line is first added.
    """

    id: int | None
    owner_id: str
    seller_id: str
    item: ItemRef
    name: str
    unit_price: Money
    quantity: Quantity
    commission_percent: Decimal | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        owner_id: str,
        catalog_item: CatalogItem,
        quantity: int,
        notes: str | None = None,
    ) -> CartLine:
        """Build a new, unsaved line, rejecting malformed input."""
        if not owner_id:
            raise InvalidLineError("A cart line needs an owner")
        if catalog_item is None or not isinstance(catalog_item.ref, (ProductRef, ServiceRef)):
            raise InvalidLineError("A cart line needs a product or service")
        if not catalog_item.seller_id:
            raise InvalidLineError(f"'{catalog_item.name}' has no seller")
        if not catalog_item.available:
            raise InvalidLineError(f"'{catalog_item.name}' is not available right now")
        try:
            qty = Quantity(quantity)
        except ValidationError as exc:
            raise InvalidLineError(f"Invalid quantity for '{catalog_item.name}': {exc}") from exc

        return CartLine(
            id=None,
            owner_id=owner_id,
            seller_id=catalog_item.seller_id,
            item=catalog_item.ref,
            name=catalog_item.name,
            unit_price=catalog_item.unit_price,
            quantity=qty,
            commission_percent=catalog_item.commission_percent,
            notes=notes.strip() if notes and notes.strip() else None,
        )

    @property
    def key(self) -> tuple[str, str, ItemRef]:
        """Dedupe key: at most one line per (owner, seller, item)."""
        return (self.owner_id, self.seller_id, self.item)

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    def reowned(self, owner_id: str) -> CartLine:
        """Unsaved copy of this line belonging to ``owner_id``."""
        return replace(self, id=None, owner_id=owner_id)
