"""Completeness scoring for parse results.

Starts at 100 and subtracts a fixed penalty for every missing or
placeholder field. The score is advisory and never gates a result.
"""

from dataclasses import dataclass, field

from hotel_parser.schemas import (
    PLACEHOLDER_LOCATION,
    PLACEHOLDER_VENUE,
    AttritionRule,
    RoomLine,
)
from hotel_parser.utils.logger import get_logger

logger = get_logger(__name__)

MAX_SCORE = 100
VENUE_PENALTY = 20
DATES_PENALTY = 15
NO_ROOMS_PENALTY = 15
ZERO_RATE_PENALTY = 10
UNDATED_ATTRITION_PENALTY = 5
EVENT_NAME_PENALTY = 10
LOCATION_PENALTY = 5


@dataclass
class ConfidenceReport:
    """Score plus the warnings explaining each deduction."""

    score: int = MAX_SCORE
    warnings: list[str] = field(default_factory=list)

    def penalize(self, points: int, warning: str) -> None:
        self.score -= points
        self.warnings.append(warning)

    def clamp(self) -> "ConfidenceReport":
        self.score = max(0, min(MAX_SCORE, self.score))
        return self


def _missing(value: str | None, placeholder: str | None = None) -> bool:
    return not value or not value.strip() or value == placeholder


def score_contract(
    venue: str | None,
    location: str | None,
    check_in: str | None,
    check_out: str | None,
    rooms: list[RoomLine],
    attrition_rules: list[AttritionRule],
    event_name: str | None,
) -> ConfidenceReport:
    """Score a contract extraction.

    ``rooms`` must be the extracted rooms before the placeholder room is
    substituted, so that an empty inventory is penalized.
    """
    report = ConfidenceReport()
    if _missing(venue, PLACEHOLDER_VENUE):
        report.penalize(VENUE_PENALTY, "Venue name could not be identified")
    if _missing(check_in) or _missing(check_out):
        report.penalize(DATES_PENALTY, "Check-in/check-out dates are incomplete")
    if not rooms:
        report.penalize(NO_ROOMS_PENALTY, "No room types found; a placeholder room was added")
    elif any(room.rate == 0 for room in rooms):
        report.penalize(ZERO_RATE_PENALTY, "One or more room types have no rate")
    if any(not rule.release_date for rule in attrition_rules):
        report.penalize(UNDATED_ATTRITION_PENALTY, "Some attrition rules have no release date")
    if _missing(event_name):
        report.penalize(EVENT_NAME_PENALTY, "Event name not found")
    if _missing(location, PLACEHOLDER_LOCATION):
        report.penalize(LOCATION_PENALTY, "Location could not be identified")

    report.clamp()
    logger.info("Contract confidence %d with %d warning(s)", report.score, len(report.warnings))
    return report


def score_invite(
    event_name: str | None,
    check_in: str | None,
    check_out: str | None,
    location: str | None,
) -> ConfidenceReport:
    """Score an invitation extraction."""
    report = ConfidenceReport()
    if _missing(event_name):
        report.penalize(EVENT_NAME_PENALTY, "Event name not found")
    if _missing(check_in) or _missing(check_out):
        report.penalize(DATES_PENALTY, "Event dates are incomplete")
    if _missing(location, PLACEHOLDER_LOCATION):
        report.penalize(LOCATION_PENALTY, "Location could not be identified")
    report.clamp()
    logger.info("Invite confidence %d with %d warning(s)", report.score, len(report.warnings))
    return report
