#!/usr/bin/env python3
"""Tests for Money primitive type."""

from decimal import Decimal

import pytest

from finance_tracker.core.errors import ValidationError
from finance_tracker.core.money import Money


class TestMoneyConstruction:
    """Test Money class construction."""

    @pytest.mark.currency
    def test_from_cents(self):
        m = Money.from_cents(1234)
        assert m.to_cents() == 1234

    @pytest.mark.currency
    def test_from_amount_string(self):
        """Test parsing from amount strings."""
        assert Money.from_amount("$12.34").to_cents() == 1234
        assert Money.from_amount("1,234.56").to_cents() == 123456

    @pytest.mark.currency
    def test_from_amount_float_is_exact(self):
        """0.1 + 0.2 style inputs land on exact minor units."""
        assert Money.from_amount(0.1) + Money.from_amount(0.2) == Money.from_amount("0.30")

    @pytest.mark.currency
    def test_from_amount_rounds_half_up(self):
        assert Money.from_amount("0.005").to_cents() == 1
        assert Money.from_amount(Decimal("2.675")).to_cents() == 268
        assert Money.from_amount("-0.005").to_cents() == -1

    @pytest.mark.currency
    @pytest.mark.parametrize("bad", ["abc", float("nan"), float("inf"), "", True, None])
    def test_from_amount_rejects_non_numbers(self, bad):
        with pytest.raises(ValidationError):
            Money.from_amount(bad)

    @pytest.mark.currency
    def test_sum_of_empty_is_zero(self):
        assert Money.sum([]) == Money.zero()


class TestMoneyArithmetic:
    """Test Money arithmetic operations."""

    @pytest.mark.currency
    def test_addition_and_subtraction(self):
        a = Money.from_cents(100)
        b = Money.from_cents(30)
        assert (a + b).to_cents() == 130
        assert (a - b).to_cents() == 70
        assert (b - a).is_negative()

    @pytest.mark.currency
    def test_multiplication_and_negation(self):
        m = Money.from_cents(50)
        assert (m * 3).to_cents() == 150
        assert (-m).to_cents() == -50
        assert (-m).abs() == m

    @pytest.mark.currency
    def test_zero_is_falsy(self):
        assert not Money.zero()
        assert Money.from_cents(1)


class TestMoneyDisplay:
    """Test Money formatting."""

    @pytest.mark.currency
    def test_str_is_plain_amount(self):
        assert str(Money.from_cents(123456)) == "1234.56"
        assert str(Money.from_cents(-5)) == "-0.05"

    @pytest.mark.currency
    def test_format_groups_thousands(self):
        assert Money.from_cents(123456).format() == "1,234.56"
        assert Money.from_cents(123456).format("SGD") == "SGD 1,234.56"

    @pytest.mark.currency
    def test_to_decimal(self):
        assert Money.from_cents(1050).to_decimal() == Decimal("10.50")

    @pytest.mark.currency
    def test_comparisons_and_hash(self):
        a = Money.from_cents(100)
        b = Money.from_cents(200)
        assert a < b <= b
        assert b > a >= a
        assert len({a, Money.from_cents(100)}) == 1
