"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from bazaar.application.dto import CartDTO, SellerCartDTO, cart_line_to_dto
from bazaar.domain.model.cart import CartLine
from bazaar.domain.model.value_objects import Money
from bazaar.domain.repository.cart_repository import CartRepository


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, owner_id: str) -> CartDTO:
        """List the cart grouped by seller, in the order sellers were first added."""
        groups: dict[str, list[CartLine]] = {}
        for line in self._cart_repo.list_for_owner(owner_id):
            groups.setdefault(line.seller_id, []).append(line)

        sellers: list[SellerCartDTO] = []
        total: Money | None = None
        item_count = 0
        for seller_id, lines in groups.items():
            subtotal = Money.zero(lines[0].unit_price.currency)
            for line in lines:
                subtotal = subtotal + line.line_total
            count = sum(line.quantity.value for line in lines)
            sellers.append(
                SellerCartDTO(
                    seller_id=seller_id,
                    lines=[cart_line_to_dto(line) for line in lines],
                    subtotal=str(subtotal),
                    item_count=count,
                )
            )
            total = subtotal if total is None else total + subtotal
            item_count += count

        return CartDTO(
            owner_id=owner_id,
            sellers=sellers,
            total=str(total if total is not None else Money.zero()),
            item_count=item_count,
        )
