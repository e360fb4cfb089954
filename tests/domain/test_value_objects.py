"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(500)
        assert m.amount == 500
        assert m.currency == "SEK"

    def test_of_factory_from_string(self):
        assert Money.of("250") == Money(250)

    def test_of_factory_from_decimal(self):
        assert Money.of(Decimal("49.00")) == Money(49)

    def test_of_factory_fraction_rejected(self):
        with pytest.raises(ValidationError, match="must be whole"):
            Money.of("9.50")

    def test_of_factory_garbage_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("lots")

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be an int"):
            Money(10.5)

    def test_bool_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be an int"):
            Money(True)

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(-1)

    def test_addition(self):
        assert Money(500) + Money(49) == Money(549)

    def test_multiplication_by_int(self):
        assert Money(150) * 3 == Money(450)

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money(150) * 1.5

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(10, "SEK") + Money(5, "EUR")

    def test_str_formatting(self):
        assert str(Money(500)) == "500 SEK"

    def test_minor_units(self):
        assert Money(500).to_minor_units() == 50000
        assert Money.zero().to_minor_units() == 0

    def test_comparison_operators(self):
        assert Money(499) < Money(500)
        assert Money(500) >= Money(500)
        assert Money(501) > Money(500)
        assert Money(500) <= Money(500)

    def test_zero(self):
        assert Money.zero("EUR") == Money(0, "EUR")


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid(self):
        assert Quantity(3).value == 3

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(-2)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(2.5)

    def test_str(self):
        assert str(Quantity(4)) == "4"
