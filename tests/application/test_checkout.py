"""Integration tests for the Checkout use case.

Uses in-memory fake repositories — no file I/O.
"""

from decimal import Decimal

import pytest

from bazaar.application.add_to_cart import AddToCartHandler
from bazaar.application.checkout import CheckoutHandler
from bazaar.domain.exceptions import (
    InvalidLineError,
    PaymentFailedError,
    StoreUnavailableError,
    ValidationError,
)
from bazaar.domain.model.actor import Actor
from bazaar.domain.model.cart import CatalogItem, ProductRef
from bazaar.domain.model.order import OrderStatus
from bazaar.domain.model.value_objects import Money
from tests.fakes import (
    FailingOrderRepository,
    FakeCartRepository,
    FakeCatalogRepository,
    FakeOrderRepository,
    FakePaymentGateway,
    UnavailableRemovalCartRepository,
)

BUYER = Actor.customer("buyer-1")

CATALOG = FakeCatalogRepository([
    CatalogItem(ProductRef("A"), "S", "Item A", Money.of("500"), Decimal("10")),
    CatalogItem(ProductRef("B"), "S", "Item B", Money.of("1000"), Decimal("20")),
    CatalogItem(ProductRef("C"), "T", "Item C", Money.of("700"), Decimal("10")),
])


def _setup(
    order_repo: FakeOrderRepository | None = None,
    cart_repo: FakeCartRepository | None = None,
    approve: bool = True,
) -> tuple[CheckoutHandler, FakeOrderRepository, FakeCartRepository, FakePaymentGateway]:
    """Fill buyer-1's cart with 2xA, 1xB (seller S) and 1xC (seller T)."""
    order_repo = order_repo or FakeOrderRepository()
    cart_repo = cart_repo or FakeCartRepository()
    gateway = FakePaymentGateway(approve=approve)

    add = AddToCartHandler(cart_repo, CATALOG)
    add.handle("buyer-1", ProductRef("A"), 2)
    add.handle("buyer-1", ProductRef("B"), 1)
    add.handle("buyer-1", ProductRef("C"), 1)

    handler = CheckoutHandler(order_repo, cart_repo, gateway)
    return handler, order_repo, cart_repo, gateway


def _seller_lines(cart_repo: FakeCartRepository, seller_id: str) -> list:
    return [line for line in cart_repo.list_for_owner("buyer-1") if line.seller_id == seller_id]


class TestCheckoutHappyPath:

    def test_prices_and_places_pending_order(self):
        handler, order_repo, cart_repo, gateway = _setup()
        dto = handler.handle(BUYER, "S", "standard", address="12 Marina Rd")

        assert dto.status == "pending"
        assert dto.subtotal == "₦2,000.00"
        assert dto.delivery_fee == "₦300.00"
        assert dto.commission == "₦300.00"
        assert dto.total == "₦2,600.00"
        assert dto.delivery_address == "12 Marina Rd"
        assert [i.name for i in dto.items] == ["Item A", "Item B"]

        assert order_repo.get_by_id(dto.id).status == OrderStatus.PENDING
        assert gateway.charges[0][1] == Money.of("2600")

    def test_only_that_sellers_lines_leave_the_cart(self):
        handler, _, cart_repo, _ = _setup()
        handler.handle(BUYER, "S", "pickup")
        assert _seller_lines(cart_repo, "S") == []
        assert len(_seller_lines(cart_repo, "T")) == 1

    def test_pickup_stores_no_address(self):
        handler, _, _, _ = _setup()
        dto = handler.handle(BUYER, "S", "pickup", address="ignored")
        assert dto.delivery_address is None
        assert dto.delivery_fee == "₦0.00"

    def test_selected_lines_only(self):
        handler, _, cart_repo, _ = _setup()
        line_a = _seller_lines(cart_repo, "S")[0]
        dto = handler.handle(BUYER, "S", "pickup", line_ids=[line_a.id])
        assert dto.subtotal == "₦1,000.00"
        assert len(_seller_lines(cart_repo, "S")) == 1

    def test_each_seller_checks_out_separately(self):
        handler, order_repo, cart_repo, _ = _setup()
        first = handler.handle(BUYER, "S", "pickup")
        second = handler.handle(BUYER, "T", "pickup")
        assert first.seller_id == "S"
        assert second.seller_id == "T"
        assert cart_repo.list_for_owner("buyer-1") == []
        assert len(order_repo.list_by_buyer("buyer-1")) == 2


class TestCheckoutValidation:

    def test_no_lines_for_seller(self):
        handler, order_repo, _, _ = _setup()
        with pytest.raises(ValidationError, match="no items from business 'X'"):
            handler.handle(BUYER, "X", "pickup")
        assert order_repo.list_by_buyer("buyer-1") == []

    def test_mixed_sellers_rejected(self):
        handler, _, cart_repo, _ = _setup()
        ids = [line.id for line in cart_repo.list_for_owner("buyer-1")]
        with pytest.raises(ValidationError, match="only contain items from one business"):
            handler.handle(BUYER, "S", "pickup", line_ids=ids)
        assert len(cart_repo.list_for_owner("buyer-1")) == 3

    def test_unknown_line_rejected(self):
        handler, _, _, _ = _setup()
        with pytest.raises(InvalidLineError, match="#99"):
            handler.handle(BUYER, "S", "pickup", line_ids=[99])

    def test_address_required_for_delivery(self):
        handler, order_repo, cart_repo, gateway = _setup()
        with pytest.raises(ValidationError, match="address is required"):
            handler.handle(BUYER, "S", "express")
        assert gateway.charges == []
        assert len(cart_repo.list_for_owner("buyer-1")) == 3

    def test_unknown_delivery_method(self):
        handler, _, _, _ = _setup()
        with pytest.raises(ValidationError, match="Unknown delivery method"):
            handler.handle(BUYER, "S", "teleport")

    def test_only_customers_check_out(self):
        handler, _, _, _ = _setup()
        with pytest.raises(ValidationError, match="Only a customer"):
            handler.handle(Actor.business("S"), "S", "pickup")


class TestCheckoutAtomicity:

    def test_declined_payment_keeps_cart_and_creates_nothing(self):
        handler, order_repo, cart_repo, _ = _setup(approve=False)
        with pytest.raises(PaymentFailedError, match="declined"):
            handler.handle(BUYER, "S", "pickup")
        assert order_repo.list_by_buyer("buyer-1") == []
        assert len(cart_repo.list_for_owner("buyer-1")) == 3

    def test_store_failure_on_order_keeps_cart(self):
        handler, _, cart_repo, _ = _setup(order_repo=FailingOrderRepository())
        with pytest.raises(StoreUnavailableError) as excinfo:
            handler.handle(BUYER, "S", "pickup")
        assert excinfo.value.retryable
        assert len(cart_repo.list_for_owner("buyer-1")) == 3

    def test_cart_cleanup_failure_still_returns_order(self, caplog):
        handler, order_repo, cart_repo, _ = _setup(
            cart_repo=UnavailableRemovalCartRepository()
        )
        dto = handler.handle(BUYER, "S", "pickup")
        assert order_repo.get_by_id(dto.id) is not None
        assert len(cart_repo.list_for_owner("buyer-1")) == 3
        assert "could not be removed" in caplog.text

    def test_invalid_order_is_rejected_before_payment(self):
        catalog = FakeCatalogRepository([
            CatalogItem(ProductRef(f"P{i}"), "S", f"Item {i}", Money.of("10"))
            for i in range(51)
        ])
        cart_repo = FakeCartRepository()
        add = AddToCartHandler(cart_repo, catalog)
        for i in range(51):
            add.handle("buyer-1", ProductRef(f"P{i}"), 1)
        order_repo = FakeOrderRepository()
        gateway = FakePaymentGateway()
        handler = CheckoutHandler(order_repo, cart_repo, gateway)

        with pytest.raises(ValidationError, match="Maximum 50 items"):
            handler.handle(BUYER, "S", "pickup")

        assert gateway.charges == []
        assert order_repo.list_by_buyer("buyer-1") == []
        assert len(cart_repo.list_for_owner("buyer-1")) == 51
