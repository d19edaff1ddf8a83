"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from bazaar.domain.exceptions import ValidationError
from bazaar.domain.model.value_objects import Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation_defaults_to_naira(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "NGN"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_int(self):
        assert Money.of(10).amount == Decimal("10")

    def test_of_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten naira")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)  # type: ignore[arg-type]

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_subtraction_going_negative_rejected(self):
        with pytest.raises(ValidationError, match="negative amount"):
            Money.of("5") - Money.of("10")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("7.50") * 1.5  # type: ignore[operator]

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money.of("1", "NGN") + Money.of("1", "USD")

    def test_comparisons(self):
        assert Money.of("3") < Money.of("5")
        assert Money.of("5") >= Money.of("5")

    def test_percent_is_unrounded(self):
        assert Money.of("2000").percent(Decimal("15")) == Money.of("300")
        assert Money.of("5").percent(Decimal("15")).amount == Decimal("0.75")

    def test_round_to_unit_rounds_half_up(self):
        assert Money.of("2.5").round_to_unit() == Money.of("3")
        assert Money.of("2.49").round_to_unit() == Money.of("2")

    def test_display_uses_currency_symbol_and_separators(self):
        assert str(Money.of("2600")) == "₦2,600.00"
        assert str(Money.of("9.5", "USD")) == "$9.50"

    def test_unknown_currency_displays_code(self):
        assert str(Money.of("1", "GHS")) == "GHS 1.00"

    def test_zero(self):
        assert Money.zero().is_zero
        assert not Money.of("0.01").is_zero


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_positive(self):
        assert Quantity(3).value == 3

    @pytest.mark.parametrize("bad", [0, -1])
    def test_non_positive_rejected(self, bad):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(bad)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)

    def test_addition(self):
        assert Quantity(2) + Quantity(3) == Quantity(5)
