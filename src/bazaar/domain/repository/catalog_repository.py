"""Abstract repository for the catalog collaborator.

Defined in the domain layer so the domain never depends on
infrastructure. The engine only reads from it when an item is added to a
cart; checkout works from the cart's copy.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bazaar.domain.model.cart import CatalogItem, ItemRef


class CatalogRepository(ABC):

    @abstractmethod
    def get(self, ref: ItemRef) -> CatalogItem | None:
        """Return the catalog entry for a product or service, or None."""

    @abstractmethod
    def list_all(self) -> list[CatalogItem]:
        """Return every catalog entry."""

    @abstractmethod
    def save(self, item: CatalogItem) -> None:
        """Persist a new or updated catalog entry."""
