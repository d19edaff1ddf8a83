"""Order aggregate — a goods purchase from one seller.

The Order is an aggregate root that owns its line items.
All business invariants are enforced here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from bazaar.domain.exceptions import InvalidTransitionError, ValidationError
from bazaar.domain.model.actor import Actor, Role
from bazaar.domain.model.cart import ItemRef
from bazaar.domain.model.lifecycle import TransitionTable
from bazaar.domain.model.value_objects import Money, Quantity
from bazaar.domain.service.pricing import DeliveryMethod, PriceBreakdown


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


ORDER_TRANSITIONS: TransitionTable[OrderStatus] = TransitionTable(
    "Order",
    {
        (OrderStatus.PENDING, Role.BUSINESS): {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
        (OrderStatus.CONFIRMED, Role.BUSINESS): {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
        (OrderStatus.PROCESSING, Role.BUSINESS): {OrderStatus.SHIPPED},
        (OrderStatus.SHIPPED, Role.BUSINESS): {OrderStatus.DELIVERED},
        (OrderStatus.PENDING, Role.CUSTOMER): {OrderStatus.CANCELLED},
        (OrderStatus.SHIPPED, Role.CUSTOMER): {OrderStatus.DELIVERED},
        (OrderStatus.CONFIRMED, Role.ADMIN): {OrderStatus.REFUNDED},
        (OrderStatus.PROCESSING, Role.ADMIN): {OrderStatus.REFUNDED},
        (OrderStatus.SHIPPED, Role.ADMIN): {OrderStatus.REFUNDED},
    },
    terminal={OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.REFUNDED},
)


@dataclass(frozen=True)
class OrderLineItem:
    """Snapshot of a purchased item, copied from the cart at checkout.

    Later catalog edits never reach an existing order.
    """

    item: ItemRef
    name: str
    unit_price: Money
    quantity: Quantity

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_LINE_ITEMS = 50


@dataclass
class Order:
    """Aggregate root for goods purchases.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    buyer_id: str
    seller_id: str
    items: list[OrderLineItem]
    subtotal: Money
    delivery_fee: Money
    commission: Money
    delivery_method: DeliveryMethod
    delivery_address: str | None = None
    notes: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    confirmed_at: datetime | None = None
    processing_at: datetime | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None
    refunded_at: datetime | None = None
    cancellation_reason: str | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        buyer_id: str,
        seller_id: str,
        items: list[OrderLineItem],
        pricing: PriceBreakdown,
        delivery_method: DeliveryMethod,
        delivery_address: str | None = None,
        notes: str | None = None,
    ) -> Order:
        """Create a new pending order, enforcing all invariants."""
        if not buyer_id or not seller_id:
            raise ValidationError("An order needs both a buyer and a seller")

        if not items:
            raise ValidationError("Order must contain at least one item")

        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        subtotal = items[0].line_total
        for item in items[1:]:
            subtotal = subtotal + item.line_total
        if subtotal != pricing.subtotal:
            raise ValidationError(
                f"Priced subtotal {pricing.subtotal} does not match items ({subtotal})"
            )

        return Order(
            id=None,
            buyer_id=buyer_id,
            seller_id=seller_id,
            items=list(items),
            subtotal=pricing.subtotal,
            delivery_fee=pricing.delivery_fee,
            commission=pricing.commission,
            delivery_method=delivery_method,
            delivery_address=delivery_address,
            notes=notes.strip() if notes and notes.strip() else None,
        )

    # --- State transitions ----------------------------------------------------

    def transition(
        self,
        target: OrderStatus,
        actor: Actor,
        *,
        reason: str | None = None,
        now: datetime | None = None,
    ) -> None:
        """Move to ``target`` on behalf of ``actor``.

        Stamps ``<target>_at``. Raises InvalidTransitionError and leaves
        the order untouched when the move is illegal for this actor.
        """
        self._check_party(actor)
        ORDER_TRANSITIONS.check(self.status, target, actor.role)

        self.status = target
        setattr(self, f"{target.value}_at", now or datetime.now(timezone.utc))
        if target == OrderStatus.CANCELLED and reason:
            self.cancellation_reason = reason.strip()

    def allowed_transitions(self, actor: Actor) -> frozenset[OrderStatus]:
        if not self._is_party(actor):
            return frozenset()
        return ORDER_TRANSITIONS.allowed(self.status, actor.role)

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        return self.subtotal + self.delivery_fee + self.commission

    @property
    def is_terminal(self) -> bool:
        return ORDER_TRANSITIONS.is_terminal(self.status)

    @property
    def completed_at(self) -> datetime | None:
        """When the sale counts towards seller earnings."""
        if self.status == OrderStatus.DELIVERED:
            return self.delivered_at
        return None

    # --- Internal helpers -----------------------------------------------------

    def _is_party(self, actor: Actor) -> bool:
        if actor.role == Role.ADMIN:
            return True
        if actor.role == Role.BUSINESS:
            return actor.profile_id == self.seller_id
        return actor.profile_id == self.buyer_id

    def _check_party(self, actor: Actor) -> None:
        if not self._is_party(actor):
            raise InvalidTransitionError(
                f"Order #{self.id} does not belong to this {actor.role.value}"
            )
