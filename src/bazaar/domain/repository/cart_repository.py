"""Abstract repository for cart lines.

One interface, two backends: an anonymous (device-local) store keyed by
device id, and a persisted store keyed by buyer id. Implementations must
apply ``add_or_increment`` as a single atomic operation on the dedupe key
so concurrent adds never produce duplicate lines or lost increments.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from bazaar.domain.model.cart import CartLine


class CartRepository(ABC):

    @abstractmethod
    def add_or_increment(self, line: CartLine) -> CartLine:
        """Insert ``line``, or add its quantity to the line with the same key.

        Returns the stored line.
        """

    @abstractmethod
    def get_by_id(self, line_id: int) -> CartLine | None:
        """Return a line by its ID, or None if not found."""

    @abstractmethod
    def set_quantity(self, line_id: int, quantity: int) -> CartLine | None:
        """Overwrite a line's quantity; ``quantity <= 0`` deletes it.

        Returns the updated line, or None when the line is gone.
        """

    @abstractmethod
    def remove(self, line_id: int) -> None:
        """Delete one line. Deleting a missing line is a no-op."""

    @abstractmethod
    def remove_many(self, line_ids: Iterable[int]) -> None:
        """Delete several lines in one store operation."""

    @abstractmethod
    def clear(self, owner_id: str) -> None:
        """Delete every line owned by ``owner_id``."""

    @abstractmethod
    def list_for_owner(self, owner_id: str) -> list[CartLine]:
        """Return the owner's lines, oldest first."""
