"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from ordering.domain.exceptions import ValidationError
from ordering.domain.model.value_objects import Money


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_int(self):
        assert Money.of(10).amount == Decimal("10")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten dollars")

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)  # type: ignore[arg-type]

    def test_negative_amount_allowed(self):
        m = Money.of("-1")
        assert m.is_negative

    def test_currency_is_normalised(self):
        assert Money.of("1", "eur").currency == "EUR"

    @pytest.mark.parametrize("currency", ["US", "DOLLAR", "U1D", ""])
    def test_invalid_currency_rejected(self, currency):
        with pytest.raises(ValidationError, match="3-letter"):
            Money(Decimal("1"), currency)

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_subtraction_may_go_negative(self):
        result = Money.of("5") - Money.of("10")
        assert result == Money.of("-5")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiplication_by_decimal(self):
        assert Money.of("10") * Decimal("0.25") == Money.of("2.50")

    def test_multiplication_by_bool_rejected(self):
        with pytest.raises(TypeError):
            Money.of("10") * True

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money.of("10", "USD") + Money.of("5", "EUR")

    def test_comparison(self):
        assert Money.of("5") < Money.of("6")
        assert Money.of("6") >= Money.of("6")
        assert not Money.of("7") <= Money.of("6")

    def test_comparison_across_currencies_rejected(self):
        with pytest.raises(ValidationError):
            Money.of("5", "USD") < Money.of("6", "EUR")

    def test_equality_includes_currency(self):
        assert Money.of("5", "USD") != Money.of("5", "EUR")

    def test_zero(self):
        assert Money.zero().is_zero
        assert Money.zero("GBP").currency == "GBP"

    def test_rounded_half_up(self):
        assert Money.of("1.005").rounded() == Money.of("1.01")
        assert Money.of("1.004").rounded() == Money.of("1.00")

    def test_str_usd(self):
        assert str(Money.of("12.5")) == "$12.50"

    def test_str_other_currency(self):
        assert str(Money.of("12.5", "EUR")) == "12.50 EUR"

    def test_immutable(self):
        m = Money.of("1")
        with pytest.raises(AttributeError):
            m.amount = Decimal("2")  # type: ignore[misc]
