"""Tests for table detection and row tokenization."""

from hotel_parser.extraction.tables import (
    is_well_formed_number,
    parse_table_rows,
    split_merged_columns,
    tokenize_row,
)


class TestNumberTokens:
    """Tests for numeric token validation."""

    def test_plain_and_grouped(self) -> None:
        assert is_well_formed_number("12000")
        assert is_well_formed_number("12,000.50")
        assert is_well_formed_number("3,60,000")

    def test_inconsistent_grouping(self) -> None:
        assert not is_well_formed_number("12,00")
        assert not is_well_formed_number("3012,000360,000")


class TestSplitMergedColumns:
    """Tests for recovering OCR-merged columns."""

    def test_recovers_quantity_rate_total(self) -> None:
        assert split_merged_columns("3012,000360,000") == [30.0, 12000.0, 360000.0]

    def test_implausible_token(self) -> None:
        assert split_merged_columns("99999") is None


class TestTokenizeRow:
    """Tests for splitting one table line."""

    def test_plain_row(self) -> None:
        row = tokenize_row("Deluxe Room 30 12000 360000")
        assert row.description == "Deluxe Room"
        assert row.numbers == [30, 12000, 360000]

    def test_indian_grouping_and_currency(self) -> None:
        row = tokenize_row("Premium Suite | 10 | Rs.25,000 | 2,50,000")
        assert row.description == "Premium Suite"
        assert row.numbers == [10, 25000, 250000]

    def test_dates_and_parentheticals_are_masked(self) -> None:
        row = tokenize_row("Deluxe Room (Garden View) 10 April 2026 30 12000")
        assert row.description == "Deluxe Room"
        assert row.numbers == [30, 12000]

    def test_merged_token(self) -> None:
        row = tokenize_row("Deluxe 3012,000360,000")
        assert row.numbers == [30, 12000, 360000]

    def test_single_number_is_not_a_row(self) -> None:
        assert tokenize_row("Deluxe Room 30") is None

    def test_numbers_without_description(self) -> None:
        assert tokenize_row("30 12000 360000") is None


class TestParseTableRows:
    """Tests for table region detection."""

    def test_rows_after_header_until_total(self) -> None:
        text = (
            "Room Type Rooms Rate Total\n"
            "Deluxe Room 30 12000 360000\n"
            "Premium Suite 10 25,000 2,50,000\n"
            "Grand Total 6,10,000\n"
            "Executive Room 5 9000 45000"
        )
        rows = parse_table_rows(text)
        assert [row.description for row in rows] == ["Deluxe Room", "Premium Suite"]

    def test_section_break_leaves_table(self) -> None:
        text = (
            "Description Qty Rate Amount\n"
            "Airport Transfer 2 1500 3000\n"
            "Terms and Conditions\n"
            "Clause 4 applies 12 times"
        )
        rows = parse_table_rows(text)
        assert [row.description for row in rows] == ["Airport Transfer"]

    def test_fallback_without_header(self) -> None:
        rows = parse_table_rows("Welcome letter\nDeluxe Room 30 12000 360000\n")
        assert len(rows) == 1
        assert rows[0].description == "Deluxe Room"
        assert rows[0].numbers == [30, 12000, 360000]

    def test_no_rows(self) -> None:
        assert parse_table_rows("Nothing tabular here") == []
