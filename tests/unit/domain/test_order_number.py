"""
Unit tests for OrderNumber value object and Luhn check.

Usage:
    pytest tests/unit/domain/test_order_number.py
"""

import pytest

from comptable.domain.value_objects.order_number import OrderNumber, luhn_valid


class TestLuhn:
    """Unit tests for luhn_valid."""

    # ================================================================
    # Valid Numbers
    # ================================================================

    @pytest.mark.parametrize(
        "digits",
        ["79927398713", "4561261212345467", "12345678903", "0", "00", "18"],
    )
    def test_valid_checksums(self, digits):
        assert luhn_valid(digits)

    # ================================================================
    # Invalid Numbers
    # ================================================================

    @pytest.mark.parametrize(
        "digits",
        ["79927398710", "4561261212345464", "12345678901", "19"],
    )
    def test_invalid_checksums(self, digits):
        assert not luhn_valid(digits)

    @pytest.mark.parametrize("digits", ["", "12a4", " 18", "-18", "１８"])
    def test_non_digit_input_rejected(self, digits):
        """Empty strings, signs, spaces and non-ASCII digits never pass."""
        assert not luhn_valid(digits)


class TestOrderNumber:
    """Unit tests for OrderNumber value object."""

    def test_valid_number(self):
        number = OrderNumber("79927398713")
        assert number.value == "79927398713"
        assert str(number) == "79927398713"

    def test_leading_zeros_preserved(self):
        assert str(OrderNumber("0018")) == "0018"

    def test_empty_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            OrderNumber("")

    def test_non_digits_rejected(self):
        with pytest.raises(ValueError, match="digits only"):
            OrderNumber("7992739871x")

    def test_single_digit_rejected(self):
        """A lone 0 passes Luhn but is too short to be an order number."""
        with pytest.raises(ValueError, match="at least"):
            OrderNumber("0")

    def test_longest_number_accepted(self):
        assert len(str(OrderNumber("0" * 62 + "18"))) == 64

    def test_overlong_number_rejected(self):
        """Leading zeros keep the checksum valid, so only length fails."""
        with pytest.raises(ValueError, match="at most"):
            OrderNumber("0" * 63 + "18")

    def test_bad_checksum_rejected(self):
        with pytest.raises(ValueError, match="Luhn"):
            OrderNumber("79927398710")

    def test_immutable(self):
        number = OrderNumber("79927398713")
        with pytest.raises(AttributeError):
            number.value = "18"

    def test_equality_by_value(self):
        assert OrderNumber("79927398713") == OrderNumber("79927398713")
