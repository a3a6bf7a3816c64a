"""Tests for wei/Gwei/ETH conversion and display formatting."""

from decimal import Decimal

import pytest

from base_gas.errors import InvalidAmount
from base_gas.units import (
    MAX_WEI,
    format_thousands,
    format_usdc,
    parse_ether,
    to_ether,
    to_gwei,
    trim_trailing_zeros,
    wei_to_usdc,
)


class TestToGwei:
    def test_whole_gwei(self):
        assert to_gwei(10**9) == "1"

    def test_fractional_gwei(self):
        assert to_gwei(1.5 * 10**9) == "1.5"
        assert to_gwei("1500000000") == "1.5"

    def test_three_decimals_from_one_gwei(self):
        assert to_gwei(1_234_567_890) == "1.235"

    def test_no_decimals_from_a_thousand_gwei(self):
        assert to_gwei(1_234_500_000_000) == "1235"
        assert to_gwei(1_234_567 * 10**9) == "1234567"

    def test_six_decimals_below_one_gwei(self):
        assert to_gwei(12_000_000) == "0.012"
        assert to_gwei(12_345) == "0.000012"

    def test_zero(self):
        assert to_gwei(0) == "0"

    def test_hex_and_decimal_input(self):
        assert to_gwei("0x3b9aca00") == "1"
        assert to_gwei(Decimal("2000000000")) == "2"


class TestToEther:
    def test_one_ether(self):
        assert to_ether(10**18) == "1"

    def test_tenth_of_ether(self):
        assert to_ether(10**17) == "0.1"

    def test_six_decimals_from_a_milliether(self):
        assert to_ether(10**15) == "0.001"
        assert to_ether(1_234_567_890_000_000_000) == "1.234568"

    def test_nine_decimals_below_a_milliether(self):
        assert to_ether(252_000_000_000) == "0.000000252"
        assert to_ether(42 * 10**12) == "0.000042"

    def test_dust_rounds_to_zero(self):
        assert to_ether(1) == "0"
        assert to_ether(0) == "0"

    def test_large_amounts_keep_every_digit(self):
        assert to_ether(123_456_789 * 10**18) == "123456789"
        assert "e" not in to_ether(MAX_WEI).lower()

    @pytest.mark.parametrize(
        "amount",
        [0, 1, 999, 10**9, 21_000 * 11_000_000, 10**15 - 1, 10**15, 10**17, 3 * 10**18 + 7, 10**30],
    )
    def test_output_is_already_trimmed(self, amount):
        out = to_ether(amount)
        assert trim_trailing_zeros(out) == out
        assert not ("." in out and out.endswith("0"))
        assert not out.endswith(".")


class TestInvalidAmounts:
    @pytest.mark.parametrize(
        "amount",
        [-1, "-5", "abc", "", "1.5", 1.5, float("nan"), Decimal("0.5"), True, None, [], "0x", MAX_WEI + 1],
    )
    def test_rejected(self, amount):
        with pytest.raises(InvalidAmount):
            to_ether(amount)
        with pytest.raises(InvalidAmount):
            to_gwei(amount)


class TestFormatThousands:
    def test_grouping(self):
        assert format_thousands(21000) == "21,000"
        assert format_thousands(1234567) == "1,234,567"

    def test_small_numbers_unchanged(self):
        assert format_thousands(0) == "0"
        assert format_thousands(999) == "999"

    @pytest.mark.parametrize("value", [-1, 1.5, "21000", True])
    def test_rejects_non_integers(self, value):
        with pytest.raises(InvalidAmount):
            format_thousands(value)


class TestTrimTrailingZeros:
    @pytest.mark.parametrize(
        "raw,trimmed",
        [
            ("1.000", "1"),
            ("1.500", "1.5"),
            ("0.000000", "0"),
            ("0.000120", "0.00012"),
            ("100", "100"),
            ("2.", "2"),
        ],
    )
    def test_trims_fraction_only(self, raw, trimmed):
        assert trim_trailing_zeros(raw) == trimmed

    @pytest.mark.parametrize("raw", ["1.000", "10.10", "100", "0.0", "7"])
    def test_idempotent(self, raw):
        once = trim_trailing_zeros(raw)
        assert trim_trailing_zeros(once) == once


class TestParseEther:
    def test_exact_conversion(self):
        assert parse_ether("0.1") == 10**17
        assert parse_ether("1.5") == 1_500_000_000_000_000_000
        assert parse_ether("0.000000000000000001") == 1
        assert parse_ether(2) == 2 * 10**18

    def test_zero_allowed(self):
        assert parse_ether("0") == 0

    def test_trailing_zeros_past_wei_are_fine(self):
        assert parse_ether("0.1000000000000000000000") == 10**17

    def test_exponent_extremes(self):
        assert parse_ether("1e-18") == 1
        assert parse_ether("1e59") == 10**77
        with pytest.raises(InvalidAmount, match="18 decimal places"):
            parse_ether("1e-999999999")
        with pytest.raises(InvalidAmount, match="uint256"):
            parse_ether("1e999999999")

    @pytest.mark.parametrize(
        "value",
        ["1e-19", "0.0000000000000000001", "1e-999999999", "1e999999999", "1e60", "-1", "abc", "", "nan", "inf", True],
    )
    def test_rejected(self, value):
        with pytest.raises(InvalidAmount):
            parse_ether(value)


class TestUsdc:
    def test_conversion(self):
        assert wei_to_usdc(10**18, 3500.25) == pytest.approx(3500.25)
        assert format_usdc(wei_to_usdc(231_000_000_000, 2000.0)) == "0.000462"

    def test_missing_rate(self):
        assert wei_to_usdc(10**18, None) is None
        assert format_usdc(None) == "N/A"
        assert format_usdc(float("inf")) == "N/A"

    def test_six_decimals(self):
        assert format_usdc(1.5) == "1.500000"
