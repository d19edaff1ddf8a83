"""Application services: change quantity, remove a line, clear a cart.

Every handler checks the line belongs to the caller's cart; someone
else's line is reported as not found.
"""

from __future__ import annotations

import logging

from bazaar.application.dto import CartLineDTO, cart_line_to_dto
from bazaar.domain.exceptions import EntityNotFoundError
from bazaar.domain.model.cart import CartLine
from bazaar.domain.repository.cart_repository import CartRepository

logger = logging.getLogger(__name__)


def _owned_line(cart_repo: CartRepository, owner_id: str, line_id: int) -> CartLine:
    line = cart_repo.get_by_id(line_id)
    if line is None or line.owner_id != owner_id:
        raise EntityNotFoundError(f"Cart line #{line_id} not found")
    return line


class SetCartQuantityHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, owner_id: str, line_id: int, quantity: int) -> CartLineDTO | None:
        """Set a line's quantity. Zero or less removes the line (returns None)."""
        _owned_line(self._cart_repo, owner_id, line_id)
        updated = self._cart_repo.set_quantity(line_id, quantity)
        if updated is None:
            logger.info("Cart %s: line #%d removed", owner_id, line_id)
            return None
        logger.info("Cart %s: line #%d set to x%d", owner_id, line_id, quantity)
        return cart_line_to_dto(updated)


class RemoveCartLineHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, owner_id: str, line_id: int) -> None:
        _owned_line(self._cart_repo, owner_id, line_id)
        self._cart_repo.remove(line_id)
        logger.info("Cart %s: line #%d removed", owner_id, line_id)


class ClearCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, owner_id: str) -> None:
        self._cart_repo.clear(owner_id)
        logger.info("Cart %s cleared", owner_id)
