"""Attrition and cancellation rule extraction.

Nine phrasings are tried in order and the first one that yields any rule
wins. Day-relative phrasings ("30 days prior to arrival") are converted to
absolute dates when the check-in date is already known.
"""

import re
from collections.abc import Callable
from datetime import date, timedelta

from hotel_parser.schemas import AttritionRule
from hotel_parser.utils.logger import get_logger

from .dates import DATE_TOKEN, infer_day_first, parse_date

logger = get_logger(__name__)

MAX_DESCRIPTION_LENGTH = 200
DEFAULT_RELEASE_PERCENT = 100

_SECTION_START = re.compile(
    r"attrition|release\s*schedule|cancellation|cut-?\s*off", re.IGNORECASE
)
_PCT = r"(?<![\d.])(\d{1,3}(?:\.\d+)?)\s*%"
_DAYS = r"(?<!\d)(\d{1,3})\s*days?"
_FLAGS = re.IGNORECASE

_DATE_THEN_PERCENT = re.compile(
    rf"({DATE_TOKEN})[^\n]*?{_PCT}\s*(?:release|cancel\w*|retention|of\b|charge|penalty)", _FLAGS
)
_PERCENT_THEN_DATE = re.compile(rf"{_PCT}[^\n]*?({DATE_TOKEN})", _FLAGS)
_DAYS_THEN_PERCENT = re.compile(rf"{_DAYS}\s*(?:before|prior|ahead)[^\n]*?{_PCT}", _FLAGS)
_PERCENT_THEN_DAYS = re.compile(rf"{_PCT}[^\n]*?{_DAYS}\s*(?:before|prior|ahead)", _FLAGS)
_WITHIN_CHARGE = re.compile(
    rf"within\s+{_DAYS}[^\n]*?{_PCT}\s*(?:charge|fee|cancellation|penalty|retention)", _FLAGS
)
_WITHIN_INCUR = re.compile(
    rf"within\s+{_DAYS}[^\n]*?\b(?:incur|attract)\w*\b[^\n]*?{_PCT}", _FLAGS
)
_PENALTY_OF = re.compile(rf"(?:penalty|charge|retention|fee)\s+of\s+{_PCT}", _FLAGS)
_PERCENT_PENALTY = re.compile(
    rf"{_PCT}\s+(?:penalty|charge|retention|cancellation\s+(?:fee|charge)|fee)", _FLAGS
)
_RELEASE_DAYS = re.compile(
    rf"(?:release|cut-?\s*off)[^\n]*?{_DAYS}\s*(?:before|prior\s+to|ahead\s+of)", _FLAGS
)
_DESCRIPTION_LINE = re.compile(
    r"[^\n]*(?:release|cancel|unsold|rooms|inventory|prior|check)[^\n]*", re.IGNORECASE
)


def _clamp(percent: float) -> float:
    return max(0.0, min(100.0, percent))


def _sentence(text: str, start: int, end: int) -> str:
    line_start = text.rfind("\n", 0, start) + 1
    line_end = text.find("\n", end)
    line = text[line_start : line_end if line_end >= 0 else len(text)]
    return line.strip()[:MAX_DESCRIPTION_LENGTH]


class _RuleBuilder:
    """Shared state for the phrasing handlers."""

    def __init__(self, text: str, check_in: date | None, today: date | None) -> None:
        self.text = text
        self.check_in = check_in
        self.today = today
        self.day_first = infer_day_first(text)

    def absolute(self, raw: str) -> str:
        parsed = parse_date(raw, self.today, self.day_first)
        return parsed.isoformat() if parsed else ""

    def relative(self, days: int) -> str:
        if self.check_in is None:
            return ""
        return (self.check_in - timedelta(days=days)).isoformat()

    def rule(self, release_date: str, percent: str, description: str) -> AttritionRule:
        return AttritionRule(
            release_date=release_date,
            release_percent=_clamp(float(percent)),
            description=description.strip()[:MAX_DESCRIPTION_LENGTH],
        )

    def date_then_percent(self, m: re.Match) -> AttritionRule:
        after = self.text[m.end() : m.end() + MAX_DESCRIPTION_LENGTH]
        line = _DESCRIPTION_LINE.search(after)
        description = line.group(0) if line and line.group(0).strip() else ""
        return self.rule(
            self.absolute(m.group(1)),
            m.group(2),
            description or f"Release {m.group(2)}% of rooms",
        )

    def percent_then_date(self, m: re.Match) -> AttritionRule:
        return self.rule(self.absolute(m.group(2)), m.group(1), m.group(0))

    def days_then_percent(self, m: re.Match) -> AttritionRule:
        days, percent = int(m.group(1)), m.group(2)
        return self.rule(
            self.relative(days),
            percent,
            f"Release {percent}% of rooms {days} days prior to check-in",
        )

    def percent_then_days(self, m: re.Match) -> AttritionRule:
        percent, days = m.group(1), int(m.group(2))
        return self.rule(
            self.relative(days),
            percent,
            f"Release {percent}% of rooms {days} days prior to check-in",
        )

    def within_days(self, m: re.Match) -> AttritionRule:
        return self.rule(
            self.relative(int(m.group(1))),
            m.group(2),
            _sentence(self.text, m.start(), m.end()),
        )

    def bare_percent(self, m: re.Match) -> AttritionRule:
        return self.rule("", m.group(1), _sentence(self.text, m.start(), m.end()))

    def release_days(self, m: re.Match) -> AttritionRule:
        return self.rule(
            self.relative(int(m.group(1))),
            str(DEFAULT_RELEASE_PERCENT),
            _sentence(self.text, m.start(), m.end()),
        )


def _phrasings(builder: _RuleBuilder) -> list[tuple[re.Pattern, Callable[[re.Match], AttritionRule]]]:
    return [
        (_DATE_THEN_PERCENT, builder.date_then_percent),
        (_PERCENT_THEN_DATE, builder.percent_then_date),
        (_DAYS_THEN_PERCENT, builder.days_then_percent),
        (_PERCENT_THEN_DAYS, builder.percent_then_days),
        (_WITHIN_CHARGE, builder.within_days),
        (_WITHIN_INCUR, builder.within_days),
        (_PENALTY_OF, builder.bare_percent),
        (_PERCENT_PENALTY, builder.bare_percent),
        (_RELEASE_DAYS, builder.release_days),
    ]


def extract_attrition_rules(
    text: str, check_in: str = "", today: date | None = None
) -> list[AttritionRule]:
    """Extract attrition/cancellation rules.

    Args:
        text: Normalized document text.
        check_in: ISO check-in date used to anchor "N days before" rules.
        today: Reference date for date parsing.

    Returns:
        Rules in discovery order; a rule whose date could not be resolved
        carries an empty ``release_date``.
    """
    anchor = date.fromisoformat(check_in) if check_in else None
    start = _SECTION_START.search(text)
    window = text[start.start() :] if start else text
    builder = _RuleBuilder(window, anchor, today)

    for index, (pattern, build) in enumerate(_phrasings(builder)):
        rules = [build(match) for match in pattern.finditer(window)]
        if rules:
            logger.info("Extracted %d attrition rule(s) with phrasing %d", len(rules), index)
            return rules

    logger.debug("No attrition rules found")
    return []
