"""
Tests for label field validators.

Covers:
- GTIN-14 Mod10 check digit validation
- Expiry date shape detection and future-date rule
- SKU, product and quantity checks
"""

from datetime import date

import pytest

from dun_labels.validators import (
    calculate_check_digit_mod10,
    normalize_expiry,
    parse_expiry,
    validate_expiry_date,
    validate_gtin14,
    validate_product,
    validate_quantity,
    validate_sku,
)


class TestGTIN14:
    """Tests for GTIN-14 validation."""

    def test_valid_reference_gtin(self):
        assert validate_gtin14("27898971826272")

    def test_check_digit_off_by_one(self):
        assert not validate_gtin14("27898971826273")

    def test_wrong_length(self):
        assert not validate_gtin14("1234")
        assert not validate_gtin14("278989718262720")

    def test_non_digit_character(self):
        assert not validate_gtin14("1234567890123A")

    def test_empty_and_non_string(self):
        assert not validate_gtin14("")
        assert not validate_gtin14(None)
        assert not validate_gtin14(27898971826272)

    def test_whitespace_is_removed(self):
        assert validate_gtin14(" 2789 8971 8262 72 ")

    def test_group_separator_is_not_whitespace(self):
        # GS (0x1D) is the GS1 field separator and must not be stripped
        assert not validate_gtin14("2789897182627\x1d2")
        assert not validate_gtin14("27898971826272\x1d")

    def test_non_ascii_digits_rejected(self):
        # Arabic-Indic digits pass str.isdigit() but are not GTIN digits
        assert not validate_gtin14("٢٧٨٩٨٩٧١٨٢٦٢٧٢")

    def test_check_digit_zero(self):
        payload = "1000000000000"
        gtin = payload + str(calculate_check_digit_mod10(payload))
        assert gtin.endswith("7")
        assert validate_gtin14(gtin)

    @pytest.mark.parametrize("digit", "0123456789")
    def test_only_one_check_digit_is_valid(self, digit):
        gtin = "2789897182627" + digit
        assert validate_gtin14(gtin) == (digit == "2")

    def test_deterministic(self):
        results = {validate_gtin14("06285096000842") for _ in range(5)}
        assert results == {True}


class TestCheckDigit:
    """Tests for the Mod10 helper."""

    def test_mod10_gtin14(self):
        assert calculate_check_digit_mod10("2789897182627") == 2
        assert calculate_check_digit_mod10("0628509600084") == 2

    def test_mod10_rejects_non_numeric(self):
        with pytest.raises(ValueError):
            calculate_check_digit_mod10("12A4")
        with pytest.raises(ValueError):
            calculate_check_digit_mod10("")


class TestExpiryDate:
    """Tests for expiry date validation."""

    def test_optional_field(self, today):
        assert validate_expiry_date(None, today=today)
        assert validate_expiry_date("", today=today)

    @pytest.mark.parametrize("value", ["20260331", "2026-03-31", "31/03/2026"])
    def test_accepted_formats_in_future(self, value, today):
        assert validate_expiry_date(value, today=today)

    def test_past_date(self, today):
        assert not validate_expiry_date("20200101", today=today)

    def test_same_day_rejected(self):
        assert not validate_expiry_date("2025-01-15", today=date(2025, 1, 15))
        assert validate_expiry_date("2025-01-16", today=date(2025, 1, 15))

    @pytest.mark.parametrize("value", [
        "2026/03/31",
        "31-03-2026",
        "260331",
        "2026-3-31",
        "31/03/26",
        "March 31 2026",
    ])
    def test_unknown_shapes(self, value, today):
        assert not validate_expiry_date(value, today=today)

    def test_impossible_calendar_date(self, today):
        assert not validate_expiry_date("2026-02-30", today=today)
        assert not validate_expiry_date("20261301", today=today)

    @pytest.mark.parametrize("value", ["２０２７０３３１", "٢٠٢٧-٠٣-٣١", "３１/０３/２０２７"])
    def test_non_ascii_digits_rejected(self, value, today):
        assert not validate_expiry_date(value, today=today)
        assert parse_expiry(value) is None

    def test_defaults_to_current_date(self):
        assert validate_expiry_date("2999-12-31")
        assert not validate_expiry_date("2000-01-01")

    def test_ddmmyyyy_field_order(self):
        assert parse_expiry("01/02/2026") == ("DD/MM/YYYY", date(2026, 2, 1))
        assert parse_expiry("20260201") == ("YYYYMMDD", date(2026, 2, 1))


class TestNormalizeExpiry:
    """Accepted shapes are rewritten as ISO dates."""

    @pytest.mark.parametrize("value", ["20260331", "2026-03-31", "31/03/2026", " 31/03/2026 "])
    def test_to_iso(self, value):
        assert normalize_expiry(value) == "2026-03-31"

    def test_empty(self):
        assert normalize_expiry(None) is None
        assert normalize_expiry("   ") is None

    def test_unparsable_kept(self):
        assert normalize_expiry("31-03-2026") == "31-03-2026"


class TestFieldValidators:
    """Tests for SKU, product and quantity."""

    def test_sku(self):
        assert validate_sku("D24")
        assert not validate_sku(" D2 ")
        assert not validate_sku("")
        assert not validate_sku(None)

    def test_product(self):
        assert validate_product("Pasta")
        assert validate_product("ab")
        assert not validate_product(" a ")
        assert not validate_product(None)

    @pytest.mark.parametrize("value, expected", [
        (24, True),
        (1, True),
        (24.0, True),
        (0, False),
        (-3, False),
        (2.5, False),
        (True, False),
        ("24", False),
        (None, False),
        (float("nan"), False),
    ])
    def test_quantity(self, value, expected):
        assert validate_quantity(value) is expected
