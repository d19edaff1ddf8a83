"""Application service: Add Catalog Item use case.

The catalog belongs to the surrounding marketplace; this exists so a
business can list something that shoppers can then put in a cart.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from bazaar.domain.exceptions import ValidationError
from bazaar.domain.model.actor import Actor, Role
from bazaar.domain.model.cart import CatalogItem, item_ref
from bazaar.domain.model.value_objects import Money
from bazaar.domain.repository.catalog_repository import CatalogRepository


class AddCatalogItemHandler:

    def __init__(self, catalog_repo: CatalogRepository) -> None:
        self._catalog_repo = catalog_repo

    def handle(
        self,
        actor: Actor,
        kind: str,
        name: str,
        price: str,
        commission_percent: str | None = None,
    ) -> CatalogItem:
        """List a new product or service for the acting business."""
        actor.require(Role.BUSINESS, "list catalog items")
        if not name or not name.strip():
            raise ValidationError("Item name is required")

        unit_price = Money.of(price)
        if unit_price.is_zero:
            raise ValidationError("Item price must be greater than zero")

        rate = None
        if commission_percent is not None:
            try:
                rate = Decimal(str(commission_percent))
            except InvalidOperation as exc:
                raise ValidationError(f"Invalid commission rate: {commission_percent!r}") from exc
            if not Decimal("0") <= rate <= Decimal("100"):
                raise ValidationError("Commission rate must be between 0 and 100")

        # Auto-assign ID based on existing items
        existing = self._catalog_repo.list_all()
        numeric = [int(i.ref.id) for i in existing if i.ref.id.isdigit()]
        next_id = str(max(numeric) + 1) if numeric else "1"

        item = CatalogItem(
            ref=item_ref(kind, next_id),
            seller_id=actor.profile_id,
            name=name.strip(),
            unit_price=unit_price,
            commission_percent=rate,
        )
        self._catalog_repo.save(item)
        return item
