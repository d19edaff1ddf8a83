"""Application service: Add To Cart use case."""

from __future__ import annotations

import logging

from bazaar.application.dto import CartLineDTO, cart_line_to_dto
from bazaar.domain.exceptions import EntityNotFoundError, InvalidLineError
from bazaar.domain.model.cart import CartLine, ItemRef, ProductRef, ServiceRef
from bazaar.domain.repository.cart_repository import CartRepository
from bazaar.domain.repository.catalog_repository import CatalogRepository

logger = logging.getLogger(__name__)


class AddToCartHandler:

    def __init__(self, cart_repo: CartRepository, catalog_repo: CatalogRepository) -> None:
        self._cart_repo = cart_repo
        self._catalog_repo = catalog_repo

    def handle(
        self,
        owner_id: str,
        item: ItemRef | None,
        quantity: int = 1,
        notes: str | None = None,
        seller_id: str | None = None,
    ) -> CartLineDTO:
        """Add ``quantity`` of a product or service to the owner's cart.

        Name, price and commission rate are read from the catalog now and
        kept on the line. Adding an item already in the cart increases its
        quantity instead of creating a second line.
        """
        if not isinstance(item, (ProductRef, ServiceRef)):
            raise InvalidLineError("Choose a product or a service to add to the cart")

        catalog_item = self._catalog_repo.get(item)
        if catalog_item is None:
            raise EntityNotFoundError(f"No {item.kind} with ID '{item.id}' in the catalog")
        if seller_id is not None and seller_id != catalog_item.seller_id:
            raise InvalidLineError(
                f"'{catalog_item.name}' is not sold by business '{seller_id}'"
            )

        line = CartLine.create(owner_id, catalog_item, quantity, notes)
        stored = self._cart_repo.add_or_increment(line)
        logger.info(
            "Cart %s: %s %s x%d (line #%s now x%d)",
            owner_id, item.kind, item.id, quantity, stored.id, stored.quantity.value,
        )
        return cart_line_to_dto(stored)
