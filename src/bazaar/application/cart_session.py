"""Cart session: which cart backend a caller is using, and the login merge.

Before sign-in a shopper's cart lives in the anonymous store under their
device id. After sign-in it lives in the persisted store under their buyer
id. ``CartSession`` hides that choice from the cart handlers, and
``MergeCartHandler`` moves the anonymous lines across exactly once.
"""

from __future__ import annotations

import logging

from bazaar.domain.exceptions import ValidationError
from bazaar.domain.repository.cart_repository import CartRepository

logger = logging.getLogger(__name__)


class MergeCartHandler:

    def __init__(self, anonymous_repo: CartRepository, persisted_repo: CartRepository) -> None:
        self._anonymous_repo = anonymous_repo
        self._persisted_repo = persisted_repo

    def handle(self, device_id: str, buyer_id: str) -> int:
        """Upsert every anonymous line into the buyer's cart, then drop it.

        Uses the same add-or-increment rule as an interactive add. Each
        anonymous line is removed right after its upsert, so if an upsert
        fails the lines merged before it are already gone from the device
        cart and a repeat run picks up only the rest. A run on an empty
        device cart changes nothing.

        The upsert and the removal are two separate writes. If the removal
        of a line fails after its upsert succeeded, that line is in both
        carts and a repeat run adds its quantity again.

        Returns the number of lines merged.
        """
        if not device_id or not buyer_id:
            raise ValidationError("Merging a cart needs a device id and a buyer id")

        merged = 0
        for line in self._anonymous_repo.list_for_owner(device_id):
            self._persisted_repo.add_or_increment(line.reowned(buyer_id))
            self._anonymous_repo.remove(line.id)  # type: ignore[arg-type]
            merged += 1

        if merged:
            logger.info("Merged %d device cart line(s) from %s into buyer %s", merged, device_id, buyer_id)
        return merged


class CartSession:
    """Resolves the cart backend and owner id for one shopper."""

    def __init__(
        self,
        anonymous_repo: CartRepository,
        persisted_repo: CartRepository,
        device_id: str,
        buyer_id: str | None = None,
    ) -> None:
        if not device_id:
            raise ValidationError("A cart session needs a device id")
        self._anonymous_repo = anonymous_repo
        self._persisted_repo = persisted_repo
        self._device_id = device_id
        self._buyer_id = buyer_id

    @property
    def is_authenticated(self) -> bool:
        return self._buyer_id is not None

    @property
    def repository(self) -> CartRepository:
        return self._persisted_repo if self.is_authenticated else self._anonymous_repo

    @property
    def owner_id(self) -> str:
        return self._buyer_id if self._buyer_id is not None else self._device_id

    def authenticate(self, buyer_id: str) -> int:
        """Switch to the buyer's persisted cart, merging the device cart into it.

        Calling it again for the same buyer re-runs a merge that finds nothing.
        """
        if self._buyer_id is not None and self._buyer_id != buyer_id:
            raise ValidationError("This session already belongs to another buyer")
        merged = MergeCartHandler(self._anonymous_repo, self._persisted_repo).handle(
            self._device_id, buyer_id
        )
        self._buyer_id = buyer_id
        return merged
