"""Tests for attrition and cancellation rule extraction."""

from datetime import date

from hotel_parser.extraction.attrition import DEFAULT_RELEASE_PERCENT, extract_attrition_rules

TODAY = date(2026, 1, 15)


class TestPhrasings:
    """Each supported phrasing yields a rule."""

    def test_days_prior_then_percent(self) -> None:
        rules = extract_attrition_rules(
            "30 days prior to arrival, 30% release permitted without penalty.",
            check_in="2026-04-10",
            today=TODAY,
        )
        assert len(rules) == 1
        assert rules[0].release_percent == 30
        assert rules[0].release_date == "2026-03-11"

    def test_within_days_incur_charge(self) -> None:
        rules = extract_attrition_rules(
            "Cancellation within 30 days of the event will incur a 30% charge",
            today=TODAY,
        )
        assert len(rules) == 1
        assert rules[0].release_percent == 30
        assert rules[0].release_date == ""
        assert "within 30 days" in rules[0].description

    def test_date_then_percent_schedule(self) -> None:
        text = (
            "Attrition schedule:\n"
            "15 February 2026 - 20% release of unsold rooms\n"
            "10 March 2026 - 50% release"
        )
        rules = extract_attrition_rules(text, today=TODAY)
        assert [(r.release_date, r.release_percent) for r in rules] == [
            ("2026-02-15", 20),
            ("2026-03-10", 50),
        ]

    def test_release_days_defaults_to_full_block(self) -> None:
        rules = extract_attrition_rules(
            "Release of unsold inventory 21 days before arrival.",
            check_in="2026-04-10",
            today=TODAY,
        )
        assert rules[0].release_percent == DEFAULT_RELEASE_PERCENT
        assert rules[0].release_date == "2026-03-20"

    def test_penalty_of_percent(self) -> None:
        rules = extract_attrition_rules("Cancellation penalty of 50% applies.", today=TODAY)
        assert rules[0].release_percent == 50
        assert rules[0].release_date == ""

    def test_percent_is_clamped(self) -> None:
        rules = extract_attrition_rules("Attrition: 150% charge on no-shows", today=TODAY)
        assert rules[0].release_percent == 100


class TestWindow:
    """Tests for the attrition section window."""

    def test_percentages_before_section_are_ignored(self) -> None:
        text = (
            "Payment: 50% advance 45 days before arrival.\n"
            "Cancellation policy: penalty of 25% applies."
        )
        rules = extract_attrition_rules(text, today=TODAY)
        assert [r.release_percent for r in rules] == [25]

    def test_no_rules(self) -> None:
        assert extract_attrition_rules("No special terms apply.", today=TODAY) == []
