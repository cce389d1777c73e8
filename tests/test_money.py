"""Tests for amounts, totals, currency, tax and payment terms."""

import pytest

from hotel_parser.extraction.fields import extract_fields
from hotel_parser.extraction.money import (
    detect_currency,
    extract_payment_terms,
    extract_tax_info,
    extract_total_amount,
    parse_amount,
    parse_words,
)
from hotel_parser.text.normalizer import normalize


class TestParseAmount:
    """Tests for single-amount parsing."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("12,000", 12000),
            ("3,60,000", 360000),
            ("₹4,000,000", 4000000),
            ("Rs. 12000", 12000),
            ("USD 1,250.50", 1250.5),
            ("1.5M", 1500000),
            ("500K", 500000),
            ("4.5 lakh", 450000),
            ("2 crore", 20000000),
            ("four lakh fifty thousand", 450000),
        ],
    )
    def test_formats(self, raw: str, expected: float) -> None:
        assert parse_amount(raw) == expected

    def test_unparseable(self) -> None:
        assert parse_amount("") is None
        assert parse_amount("to be confirmed") is None


class TestParseWords:
    """Tests for spelled-out numbers."""

    def test_hundreds(self) -> None:
        assert parse_words("one hundred twenty") == 120

    def test_indian_scales(self) -> None:
        assert parse_words("two crore fifty lakh") == 25_000_000

    def test_unknown_word(self) -> None:
        assert parse_words("many") is None


class TestExtractTotalAmount:
    """Tests for choosing the contract total."""

    def test_ocr_corrupted_total(self) -> None:
        text = normalize("Grand Total: ₹4,OOO,OOO")
        assert extract_total_amount(text, extract_fields(text)) == 4000000

    def test_ocr_corrupted_total_with_mixed_glyphs(self) -> None:
        text = normalize("Grand Total: ₹1lS,OOO")
        assert extract_total_amount(text, extract_fields(text)) == 115000

    def test_largest_candidate_wins(self) -> None:
        text = "Subtotal: 3,00,000\nGST: 54,000\nGrand Total: 3,54,000"
        assert extract_total_amount(text, extract_fields(text)) == 354000

    def test_room_count_is_not_a_total(self) -> None:
        text = "Total rooms: 30\nTotal Amount: INR 5,40,000"
        assert extract_total_amount(text, extract_fields(text)) == 540000

    def test_spelled_out_total(self) -> None:
        assert extract_total_amount("Amount in words: Five lakh only") == 500000

    def test_no_total(self) -> None:
        assert extract_total_amount("Rates on request") is None


class TestDetectCurrency:
    """Tests for currency detection."""

    def test_rupees(self) -> None:
        assert detect_currency("Rate INR 12000, deposit ₹5000") == "INR"

    def test_dollars(self) -> None:
        assert detect_currency("Rate USD 500, deposit $200") == "USD"

    def test_none(self) -> None:
        assert detect_currency("No prices listed") is None


class TestTaxAndPayment:
    """Tests for tax summaries and payment terms."""

    def test_tax_rates_with_inclusion_note(self) -> None:
        text = "GST 18% applicable. Service charge 10%. Rates are exclusive of taxes."
        assert extract_tax_info(text) == "GST 18%; Service Charge 10%; Exclusive of taxes"

    def test_inclusion_note_only(self) -> None:
        assert extract_tax_info("All rates inclusive of all taxes.") == "Inclusive of taxes"

    def test_no_tax_information(self) -> None:
        assert extract_tax_info("Rooms available") is None

    def test_labeled_payment_terms(self) -> None:
        fields = {"payment terms": "50% advance, balance on arrival"}
        assert extract_payment_terms("", fields) == "50% advance, balance on arrival"

    def test_payment_lines(self) -> None:
        text = "50% advance at signing.\nBalance 15 days before arrival.\nThank you."
        assert (
            extract_payment_terms(text)
            == "50% advance at signing. Balance 15 days before arrival."
        )
