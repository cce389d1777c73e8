"""Tests for completeness scoring."""

import pytest

from hotel_parser.schemas import (
    PLACEHOLDER_LOCATION,
    PLACEHOLDER_VENUE,
    AttritionRule,
    RoomLine,
)
from hotel_parser.validation.confidence import (
    DATES_PENALTY,
    EVENT_NAME_PENALTY,
    LOCATION_PENALTY,
    MAX_SCORE,
    NO_ROOMS_PENALTY,
    UNDATED_ATTRITION_PENALTY,
    VENUE_PENALTY,
    ZERO_RATE_PENALTY,
    score_contract,
    score_invite,
)

COMPLETE = {
    "venue": "Grand Horizon Hotel",
    "location": "Jaipur, Rajasthan",
    "check_in": "2026-04-10",
    "check_out": "2026-04-13",
    "rooms": [RoomLine(room_type="Deluxe Room", rate=12000, quantity=30)],
    "attrition_rules": [
        AttritionRule(release_date="2026-03-11", release_percent=30, description="30% release")
    ],
    "event_name": "Sharma-Kapoor Wedding",
}


class TestScoreContract:
    """Tests for contract scoring."""

    def setup_method(self) -> None:
        self.fields = dict(COMPLETE)

    def test_complete_extraction(self) -> None:
        report = score_contract(**self.fields)
        assert report.score == MAX_SCORE
        assert report.warnings == []

    @pytest.mark.parametrize(
        ("field", "value", "penalty"),
        [
            ("venue", PLACEHOLDER_VENUE, VENUE_PENALTY),
            ("venue", "", VENUE_PENALTY),
            ("check_out", "", DATES_PENALTY),
            ("rooms", [], NO_ROOMS_PENALTY),
            ("rooms", [RoomLine(room_type="Suite", rate=0)], ZERO_RATE_PENALTY),
            ("event_name", None, EVENT_NAME_PENALTY),
            ("location", PLACEHOLDER_LOCATION, LOCATION_PENALTY),
        ],
    )
    def test_single_penalty(self, field: str, value: object, penalty: int) -> None:
        self.fields[field] = value
        report = score_contract(**self.fields)
        assert report.score == MAX_SCORE - penalty
        assert len(report.warnings) == 1

    def test_undated_attrition(self) -> None:
        self.fields["attrition_rules"] = [AttritionRule(release_percent=50)]
        report = score_contract(**self.fields)
        assert report.score == MAX_SCORE - UNDATED_ATTRITION_PENALTY

    def test_empty_extraction(self) -> None:
        report = score_contract("", "", "", "", [], [], None)
        expected = MAX_SCORE - (
            VENUE_PENALTY + DATES_PENALTY + NO_ROOMS_PENALTY + EVENT_NAME_PENALTY + LOCATION_PENALTY
        )
        assert report.score == expected
        assert len(report.warnings) == 5

    def test_more_fields_never_lower_the_score(self) -> None:
        sparse = score_contract("", "", "", "", [], [], None)
        partial = score_contract("Grand Horizon Hotel", "", "2026-04-10", "2026-04-13", [], [], None)
        full = score_contract(**self.fields)
        assert sparse.score <= partial.score <= full.score


class TestScoreInvite:
    """Tests for invitation scoring."""

    def test_complete_invite(self) -> None:
        report = score_invite("Kapoor Wedding", "2026-04-10", "2026-04-13", "Udaipur")
        assert report.score == MAX_SCORE

    def test_missing_everything(self) -> None:
        report = score_invite("", None, None, None)
        assert report.score == MAX_SCORE - (EVENT_NAME_PENALTY + DATES_PENALTY + LOCATION_PENALTY)
        assert len(report.warnings) == 3
