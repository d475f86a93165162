"""
Tests for expiry date conversions.
"""

from datetime import date

import pytest

from gs1_decoder.validators import (
    expiration_to_yymmdd,
    format_expiration,
    parse_expiration,
)


class TestFormatExpiration:
    """YYMMDD -> MM/DD/YYYY."""

    def test_end_of_year(self):
        assert format_expiration("251231") == "12/31/2025"

    def test_start_of_century(self):
        assert format_expiration("000101") == "01/01/2000"

    def test_no_century_pivot(self):
        """Every YY is read as 20YY, including values a pivot would put in 19YY."""
        assert format_expiration("990615") == "06/15/2099"

    def test_no_calendar_check(self):
        assert format_expiration("991399") == "13/99/2099"

    @pytest.mark.parametrize("value", ["", "25123", "2512311", "25-12-31"])
    def test_wrong_length(self, value):
        assert format_expiration(value) is None

    @pytest.mark.parametrize("value", ["25AB31", " 51231", "+51231", "２５１２３１"])
    def test_non_digits(self, value):
        assert format_expiration(value) is None

    def test_none(self):
        assert format_expiration(None) is None


class TestParseExpiration:
    """MM/DD/YYYY -> date, used for expiry status."""

    def test_valid(self):
        assert parse_expiration("12/31/2025") == date(2025, 12, 31)

    def test_out_of_calendar(self):
        assert parse_expiration("13/99/2099") is None

    def test_empty(self):
        assert parse_expiration("") is None
        assert parse_expiration(None) is None


class TestExpirationToYYMMDD:
    """MM/DD/YYYY -> YYMMDD, used for re-encoding."""

    def test_inverse_of_format(self):
        for raw in ("251231", "000101", "991399"):
            assert expiration_to_yymmdd(format_expiration(raw)) == raw

    def test_year_outside_2000s(self):
        assert expiration_to_yymmdd("12/31/1999") is None
        assert expiration_to_yymmdd("01/01/2100") is None

    @pytest.mark.parametrize("value", ["", None, "12-31-2025", "1/31/2025", "AB/31/2025"])
    def test_malformed(self, value):
        assert expiration_to_yymmdd(value) is None
