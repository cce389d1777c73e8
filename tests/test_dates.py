"""Tests for date recognition and check-in/check-out extraction."""

from datetime import date, timedelta

import pytest

from hotel_parser.extraction.dates import (
    FUTURE_WINDOW_YEARS,
    PAST_WINDOW_DAYS,
    extract_date_range,
    find_dates,
    in_window,
    infer_day_first,
    is_indian_context,
    normalize_date_string,
    parse_date,
)

TODAY = date(2026, 1, 15)


class TestParseDate:
    """Tests for single-date parsing."""

    @pytest.mark.parametrize(
        "raw",
        [
            "10 April 2026",
            "10th April, 2026",
            "April 10, 2026",
            "Apr 10 2026",
            "2026-04-10",
            "10-Apr-26",
            "10 of April 2026",
        ],
    )
    def test_named_and_iso_forms(self, raw: str) -> None:
        assert parse_date(raw, TODAY) == date(2026, 4, 10)

    def test_day_above_twelve_disambiguates(self) -> None:
        assert parse_date("13/04/2026", TODAY, day_first=False) == date(2026, 4, 13)
        assert parse_date("04/13/2026", TODAY, day_first=True) == date(2026, 4, 13)

    def test_ambiguous_numeric_uses_context(self) -> None:
        assert parse_date("05/04/2026", TODAY, day_first=True) == date(2026, 4, 5)
        assert parse_date("05/04/2026", TODAY, day_first=False) == date(2026, 5, 4)

    def test_short_numeric_year(self) -> None:
        assert parse_date("20/04/26", TODAY) == date(2026, 4, 20)

    def test_year_omitted_uses_next_occurrence(self) -> None:
        assert parse_date("10 March", TODAY) == date(2026, 3, 10)
        assert parse_date("5 January", TODAY) == date(2027, 1, 5)

    def test_invalid_calendar_date(self) -> None:
        assert parse_date("31 February 2026", TODAY) is None

    def test_no_date(self) -> None:
        assert parse_date("no dates here", TODAY) is None

    def test_normalize_date_string(self) -> None:
        assert normalize_date_string("April 10, 2026", TODAY) == "2026-04-10"
        assert normalize_date_string("soon", TODAY) == ""


class TestDateWindow:
    """Dates outside the plausible horizon are discarded."""

    def test_window_bounds(self) -> None:
        assert in_window(TODAY - timedelta(days=PAST_WINDOW_DAYS), TODAY)
        assert not in_window(TODAY - timedelta(days=PAST_WINDOW_DAYS + 1), TODAY)
        assert in_window(date(TODAY.year + FUTURE_WINDOW_YEARS, 1, 15), TODAY)
        assert not in_window(date(TODAY.year + FUTURE_WINDOW_YEARS, 1, 16), TODAY)

    def test_out_of_window_dates_are_dropped(self) -> None:
        text = "Established 12 March 1998. Stay 10 April 2026. Lease to 1 May 2045."
        values = [m.value for m in find_dates(text, TODAY)]
        assert values == [date(2026, 4, 10)]

    def test_every_returned_date_is_in_window(self) -> None:
        text = (
            "01/02/2019 10 April 2026 2026-13-01 2031-06-30 "
            "December 25, 2040 13 April 2026 29/02/2028"
        )
        for match in find_dates(text, TODAY):
            assert in_window(match.value, TODAY)


class TestFindDates:
    """Tests for scanning text for dates."""

    def test_reading_order_and_spans(self) -> None:
        text = "From April 13, 2026 back to 2026-04-10"
        matches = find_dates(text, TODAY)
        assert [m.value for m in matches] == [date(2026, 4, 13), date(2026, 4, 10)]
        assert text[matches[1].start : matches[1].end] == "2026-04-10"

    def test_indian_context_detection(self) -> None:
        assert is_indian_context("Rate: ₹12,000 per night")
        assert is_indian_context("Venue in Udaipur")
        assert is_indian_context("GSTIN applies")
        assert not is_indian_context("Rate: $120 per night in Paris")

    def test_day_first_inferred_from_unambiguous_day(self) -> None:
        assert infer_day_first("Check-in: 10/04/2026\nCheck-out: 13/04/2026")

    def test_month_first_inferred_from_unambiguous_day(self) -> None:
        assert not infer_day_first("Check-in: 04/10/2026 Check-out: 04/13/2026 in Jaipur")

    def test_ambiguous_dates_fall_back_to_context(self) -> None:
        assert infer_day_first("Check-in: 05/04/2026, rate ₹12,000")
        assert not infer_day_first("Check-in: 05/04/2026, rate $120")


class TestExtractDateRange:
    """Tests for the check-in/check-out cascade."""

    def test_labeled_fields(self) -> None:
        fields = {"check-in": "10 April 2026", "check-out": "13 April 2026"}
        assert extract_date_range("", fields, TODAY) == ("2026-04-10", "2026-04-13")

    def test_labels_in_prose(self) -> None:
        text = "Arrival on 10 April 2026 and departure on 13 April 2026."
        assert extract_date_range(text, {}, TODAY) == ("2026-04-10", "2026-04-13")

    def test_day_span_with_month(self) -> None:
        assert extract_date_range("Wedding dates: 10-13 April 2026", {}, TODAY) == (
            "2026-04-10",
            "2026-04-13",
        )

    def test_month_day_span(self) -> None:
        assert extract_date_range("Event: April 10 - 13, 2026", {}, TODAY) == (
            "2026-04-10",
            "2026-04-13",
        )

    def test_two_dates_joined_by_to(self) -> None:
        assert extract_date_range("Stay 10/04/2026 to 13/04/2026 in Jaipur", {}, TODAY) == (
            "2026-04-10",
            "2026-04-13",
        )

    def test_one_day_month_order_per_document(self) -> None:
        text = "Venue: Dubai Marina Hotel\nCheck-in: 10/04/2026\nCheck-out: 13/04/2026"
        assert extract_date_range(text, {}, TODAY) == ("2026-04-10", "2026-04-13")

    def test_month_first_document(self) -> None:
        text = "Venue: Miami Beach Resort\nCheck-in: 04/10/2026\nCheck-out: 04/13/2026"
        assert extract_date_range(text, {}, TODAY) == ("2026-04-10", "2026-04-13")

    def test_check_in_plus_nights(self) -> None:
        text = "Check-in: 10 April 2026 for 4 nights"
        assert extract_date_range(text, {}, TODAY) == ("2026-04-10", "2026-04-14")

    def test_positional_fallback_uses_last_two_dates(self) -> None:
        text = "Issued 5 February 2026. Welcome 10 April 2026. Farewell 13 April 2026."
        assert extract_date_range(text, {}, TODAY) == ("2026-04-10", "2026-04-13")

    def test_single_date_defaults_to_three_nights(self) -> None:
        assert extract_date_range("Event on 10 April 2026", {}, TODAY) == (
            "2026-04-10",
            "2026-04-13",
        )

    def test_reversed_labels_are_swapped(self) -> None:
        fields = {"check-in": "13 April 2026", "check-out": "10 April 2026"}
        assert extract_date_range("", fields, TODAY) == ("2026-04-10", "2026-04-13")

    def test_no_dates(self) -> None:
        assert extract_date_range("Rooms and rates only", {}, TODAY) == ("", "")
