"""
Integration tests for the bracketed "(AI)value" format and format dispatch.

Covers:
- Round trip of each AI value
- Whitespace trimming of captured values
- Agreement with the positional decoder on equivalent encodings
- Empty and missing input
"""

import pytest

from gs1_decoder import DecodedRecord, decode, decode_bracketed
from gs1_decoder.core.decoder import GS1Decoder


class TestBracketedScenarios:
    """Well-formed bracketed input."""

    def test_full_record(self):
        """
        (01)00312345678906(17)251231(10)LOT42(21)SN99
        Expected: every field decoded, expiry as MM/DD/YYYY
        """
        record = decode("(01)00312345678906(17)251231(10)LOT42(21)SN99")

        assert record.to_dict() == {
            "gtin": "00312345678906",
            "expiration": "12/31/2025",
            "lot": "LOT42",
            "serial": "SN99",
        }

    def test_group_order_does_not_matter(self):
        record = decode("(21)SN99(10)LOT42(17)251231(01)00312345678906")

        assert record == DecodedRecord(
            gtin="00312345678906",
            lot="LOT42",
            serial="SN99",
            expiration="12/31/2025",
        )

    def test_lot_may_contain_tag_digits(self):
        """Brackets delimit the value, so "21" inside a lot is just data."""
        record = decode("(10)AB21CD(21)XYZ")

        assert record.lot == "AB21CD"
        assert record.serial == "XYZ"

    def test_values_are_trimmed(self):
        record = decode("(10) LOT42 (21)  SN99  ")

        assert record.lot == "LOT42"
        assert record.serial == "SN99"

    def test_missing_ais_are_absent(self):
        record = decode("(01)00312345678906")

        assert record.gtin == "00312345678906"
        assert record.lot is None
        assert record.serial is None
        assert record.expiration is None

    def test_weight_group_ignored(self):
        record = decode("(01)00312345678906(310)000250(10)L1")

        assert record.to_dict() == {"gtin": "00312345678906", "lot": "L1"}

    def test_invalid_expiry_is_absent(self):
        record = decode("(17)25AB31(10)L1")

        assert record.expiration is None
        assert record.lot == "L1"


class TestBracketedEdgeCases:
    """Truncated and partial bracketed input."""

    def test_empty_variable_group_absorbs_next_group(self):
        """
        A variable group needs at least one character, so an empty (10)
        captures the following group as its value. (21) still matches on
        its own because each AI is searched independently.
        """
        record = decode("(10)(21)SN1")

        assert record.lot == "(21)SN1"
        assert record.serial == "SN1"

    def test_short_fixed_group_not_matched(self):
        record = decode("(01)12345")

        assert record.gtin is None

    def test_bare_tag(self):
        record = decode_bracketed("(21)")

        assert record.is_empty

    def test_each_ai_matched_independently(self):
        """Every AI is searched across the whole string; the first hit wins."""
        record = decode("(10)A(10)B")

        assert record.lot == "A"

    def test_any_parenthesis_selects_bracketed_format(self):
        """Input with a stray "(" is not scanned positionally."""
        record = decode("0100312345678906(")

        assert record.is_empty


class TestFormatAgreement:
    """Bracketed and positional encodings of the same data decode the same."""

    @pytest.mark.parametrize(
        "bracketed, positional",
        [
            ("(01)00312345678906(17)251231", "010031234567890617251231"),
            ("(01)00312345678906(21)1234", "0100312345678906211234"),
            (
                "(01)00312345678906(17)251231(10)LOT42(21)SN99",
                "01003123456789061725123110LOT4221SN99",
            ),
        ],
    )
    def test_equivalent_encodings(self, bracketed, positional):
        assert decode(bracketed) == decode(positional)


class TestEmptyInput:
    """Empty input is not an error."""

    @pytest.mark.parametrize("barcode", ["", "   ", "\n\t", None])
    def test_empty_input(self, barcode):
        record = decode(barcode)

        assert record == DecodedRecord()
        assert record.is_empty

    def test_decoder_instance_matches_module_function(self):
        decoder = GS1Decoder()
        barcode = "(01)00312345678906(17)000101"

        assert decoder.decode(barcode) == decode(barcode)
        assert decoder.decode(barcode).expiration == "01/01/2000"
