"""Date recognition and check-in/check-out range extraction.

Supports named-month, numeric, ISO, short-year, and year-omitted dates.
Ambiguous numeric dates follow one day/month order per document: any
date with a first component above 12 selects DD/MM, any with a second
component above 12 selects MM/DD, and otherwise an Indian currency or
city signal selects DD/MM. Dates outside
``[today - 1 year, today + 10 years]`` are discarded.
"""

import re
from dataclasses import dataclass
from datetime import date, timedelta

from hotel_parser.utils.logger import get_logger

from .cascade import run_cascade
from .lexicon import INDIAN_CITIES, MONTH_PATTERN, MONTHS

logger = get_logger(__name__)

PAST_WINDOW_DAYS = 365
FUTURE_WINDOW_YEARS = 10
DEFAULT_STAY_NIGHTS = 3

_ORDINAL = r"(?:\s?(?:st|nd|rd|th))?"

_ISO = re.compile(r"\b(?P<y>\d{4})[-/.](?P<m>\d{1,2})[-/.](?P<d>\d{1,2})\b")
_DAY_MONTH = re.compile(
    rf"\b(?P<d>\d{{1,2}}){_ORDINAL}[\s\-/.,]*(?:of\s+)?(?P<mon>{MONTH_PATTERN})\b\.?"
    rf"(?:[\s\-/.,]*(?P<y>\d{{4}})\b|(?:\s*'|[\-/])(?P<yy>\d{{2}})\b)?",
    re.IGNORECASE,
)
_MONTH_DAY = re.compile(
    rf"\b(?P<mon>{MONTH_PATTERN})\b\.?\s*(?P<d>\d{{1,2}}){_ORDINAL}\b"
    rf"(?:,?\s*(?P<y>\d{{4}})\b|,?\s*'(?P<yy>\d{{2}})\b)?",
    re.IGNORECASE,
)
_NUMERIC = re.compile(r"\b(?P<a>\d{1,2})[/.\-](?P<b>\d{1,2})[/.\-](?P<y>\d{4}|\d{2})\b")

# Any single date token, for use inside larger phrase patterns.
DATE_TOKEN = (
    rf"(?:\d{{4}}-\d{{1,2}}-\d{{1,2}}"
    rf"|\d{{1,2}}{_ORDINAL}[\s\-/.,]*{MONTH_PATTERN}\.?[\s\-/.,]*\d{{4}}"
    rf"|{MONTH_PATTERN}\.?\s*\d{{1,2}}{_ORDINAL},?\s*\d{{4}}"
    rf"|\d{{1,2}}[/.\-]\d{{1,2}}[/.\-](?:\d{{4}}|\d{{2}}))"
)

_INDIAN_SIGNAL = re.compile(r"₹|\b(?:inr|rs\.?|rupees?|lakhs?|lacs?|crores?|gst|gstin)\b", re.I)
_RANGE_JOINER = re.compile(r"^\s*(?:-|–|—|to|until|till|through|thru)\s*$", re.IGNORECASE)
_DAY_SPAN_MONTH = re.compile(
    rf"\b(?P<d1>\d{{1,2}}){_ORDINAL}\s*(?:-|–|to|till|until)\s*(?P<d2>\d{{1,2}}){_ORDINAL}"
    rf"\s+(?:of\s+)?(?P<mon>{MONTH_PATTERN})\b\.?,?\s*(?P<y>\d{{4}})?",
    re.IGNORECASE,
)
_MONTH_DAY_SPAN = re.compile(
    rf"\b(?P<mon>{MONTH_PATTERN})\b\.?\s*(?P<d1>\d{{1,2}}){_ORDINAL}\s*(?:-|–|to|till|until)\s*"
    rf"(?P<d2>\d{{1,2}}){_ORDINAL}\b,?\s*(?P<y>\d{{4}})?",
    re.IGNORECASE,
)
_CHECK_IN_LABEL = re.compile(r"\b(?:check[\s-]*in|arrival)\b", re.IGNORECASE)
_CHECK_OUT_LABEL = re.compile(r"\b(?:check[\s-]*out|departure)\b", re.IGNORECASE)
_NIGHTS = re.compile(r"\b(\d{1,2})\s*nights?\b", re.IGNORECASE)


@dataclass
class DateMatch:
    """A date recognised in text, with its character span."""

    value: date
    start: int
    end: int


def is_indian_context(text: str) -> bool:
    """Return True when the text carries an Indian currency or city signal."""
    if _INDIAN_SIGNAL.search(text):
        return True
    return any(city in text for city in INDIAN_CITIES)


def infer_day_first(text: str) -> bool:
    """Decide the day/month order for every ambiguous numeric date in text.

    A numeric date whose first component exceeds 12 settles the document
    on DD/MM; one whose second component exceeds 12 settles it on MM/DD.
    When no date is unambiguous, an Indian signal selects DD/MM.
    """
    month_first = False
    for match in _NUMERIC.finditer(text):
        a, b = int(match.group("a")), int(match.group("b"))
        if a > 12 and b <= 12:
            return True
        if b > 12 and a <= 12:
            month_first = True
    if month_first:
        return False
    return is_indian_context(text)


def _add_years(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        return day + timedelta(days=365 * years + years // 4)


def in_window(value: date, today: date) -> bool:
    """Check that a date lies within the plausible contract horizon."""
    lower = today - timedelta(days=PAST_WINDOW_DAYS)
    upper = _add_years(today, FUTURE_WINDOW_YEARS)
    return lower <= value <= upper


def _build(year: int | None, month: int, day: int, today: date) -> date | None:
    try:
        if year is not None:
            return date(year, month, day)
        candidate = date(today.year, month, day)
        if candidate < today:
            candidate = date(today.year + 1, month, day)
        return candidate
    except ValueError:
        return None


def _year(match: re.Match) -> int | None:
    if match.group("y"):
        return int(match.group("y"))
    if match.group("yy"):
        return 2000 + int(match.group("yy"))
    return None


def _from_iso(match: re.Match, today: date, day_first: bool) -> date | None:
    return _build(int(match.group("y")), int(match.group("m")), int(match.group("d")), today)


def _from_named(match: re.Match, today: date, day_first: bool) -> date | None:
    month = MONTHS[match.group("mon").lower()]
    return _build(_year(match), month, int(match.group("d")), today)


def _from_numeric(match: re.Match, today: date, day_first: bool) -> date | None:
    a, b = int(match.group("a")), int(match.group("b"))
    raw_year = match.group("y")
    year = int(raw_year) if len(raw_year) == 4 else 2000 + int(raw_year)

    if a > 12 and b <= 12:
        day, month = a, b
    elif b > 12 and a <= 12:
        month, day = a, b
    elif a <= 12 and b <= 12:
        day, month = (a, b) if day_first else (b, a)
    else:
        return None
    return _build(year, month, day, today)


_PATTERNS = (
    (_ISO, _from_iso),
    (_DAY_MONTH, _from_named),
    (_MONTH_DAY, _from_named),
    (_NUMERIC, _from_numeric),
)


def find_dates(
    text: str, today: date | None = None, day_first: bool | None = None
) -> list[DateMatch]:
    """Find every plausible date in text, in reading order.

    Args:
        text: Text to scan.
        today: Reference date for year inference and the sanity window.
        day_first: Force DD/MM (True) or MM/DD (False) for ambiguous
            numeric dates. Inferred from the whole text when ``None``.

    Returns:
        Non-overlapping date matches sorted by position.
    """
    today = today or date.today()
    if day_first is None:
        day_first = infer_day_first(text)

    taken: list[tuple[int, int]] = []
    found: list[DateMatch] = []
    for pattern, convert in _PATTERNS:
        for match in pattern.finditer(text):
            start, end = match.span()
            if any(start < t_end and end > t_start for t_start, t_end in taken):
                continue
            value = convert(match, today, day_first)
            if value is None or not in_window(value, today):
                continue
            taken.append((start, end))
            found.append(DateMatch(value, start, end))

    return sorted(found, key=lambda m: m.start)


def parse_date(text: str, today: date | None = None, day_first: bool = True) -> date | None:
    """Parse the first date found in a short string."""
    matches = find_dates(text, today, day_first)
    return matches[0].value if matches else None


def normalize_date_string(text: str, today: date | None = None, day_first: bool = True) -> str:
    """Convert a date string to ``YYYY-MM-DD``, or ``""`` when unparseable."""
    value = parse_date(text, today, day_first)
    return value.isoformat() if value else ""


@dataclass
class _RangeContext:
    text: str
    fields: dict[str, str]
    today: date
    day_first: bool


def _labeled_date(ctx: _RangeContext, key: str, label: re.Pattern) -> date | None:
    value = ctx.fields.get(key)
    if value:
        parsed = parse_date(value, ctx.today, ctx.day_first)
        if parsed:
            return parsed
    for match in label.finditer(ctx.text):
        snippet = ctx.text[match.end() : match.end() + 48]
        dates = find_dates(snippet, ctx.today, ctx.day_first)
        if dates and dates[0].start <= 16:
            return dates[0].value
    return None


def _explicit_range(ctx: _RangeContext) -> tuple[date, date] | None:
    for pattern in (_DAY_SPAN_MONTH, _MONTH_DAY_SPAN):
        for match in pattern.finditer(ctx.text):
            month = MONTHS[match.group("mon").lower()]
            year = int(match.group("y")) if match.group("y") else None
            first = _build(year, month, int(match.group("d1")), ctx.today)
            second = _build(year or (first.year if first else None), month,
                            int(match.group("d2")), ctx.today)
            if first and second and first < second and in_window(first, ctx.today):
                return first, second

    dates = find_dates(ctx.text, ctx.today, ctx.day_first)
    for left, right in zip(dates, dates[1:]):
        if _RANGE_JOINER.match(ctx.text[left.end : right.start]) and left.value < right.value:
            return left.value, right.value
    return None


def _stated_nights(ctx: _RangeContext) -> int | None:
    for key in ("nights", "no of nights", "number of nights", "no. of nights"):
        value = ctx.fields.get(key)
        if value and re.match(r"^\d{1,2}\b", value):
            return int(re.match(r"^\d{1,2}", value).group(0))
    match = _NIGHTS.search(ctx.text)
    return int(match.group(1)) if match else None


def _positional_fallback(ctx: _RangeContext) -> tuple[date, date] | None:
    unique = sorted({m.value for m in find_dates(ctx.text, ctx.today, ctx.day_first)})
    if len(unique) >= 3:
        # The earliest dates are usually issue/attrition dates.
        return unique[-2], unique[-1]
    if len(unique) == 2:
        return unique[0], unique[1]
    if len(unique) == 1:
        nights = _stated_nights(ctx) or DEFAULT_STAY_NIGHTS
        return unique[0], unique[0] + timedelta(days=nights)
    return None


def extract_date_range(
    text: str, fields: dict[str, str] | None = None, today: date | None = None
) -> tuple[str, str]:
    """Extract the stay's check-in and check-out dates.

    Strategies run from most to least explicit: labeled values, explicit
    ranges ("10-13 April 2026"), stated number of nights, and finally the
    positional spread of all dates in the document.

    Args:
        text: Normalized document text.
        fields: Labeled fields from :func:`extract_fields`.
        today: Reference date for year inference and the sanity window.

    Returns:
        ``(check_in, check_out)`` as ISO strings; either may be ``""``.
    """
    ctx = _RangeContext(text, fields or {}, today or date.today(), infer_day_first(text))

    check_in = _labeled_date(ctx, "check-in", _CHECK_IN_LABEL)
    check_out = _labeled_date(ctx, "check-out", _CHECK_OUT_LABEL)

    if not (check_in and check_out):
        span = run_cascade(
            "date_range",
            [
                lambda: _explicit_range(ctx),
                lambda: _nights_range(ctx, check_in),
                lambda: _later_date_range(ctx, check_in),
                lambda: None if check_in else _positional_fallback(ctx),
            ],
        )
        if span:
            check_in = check_in or span[0]
            check_out = check_out or span[1]

    if check_in and check_out:
        if check_out < check_in:
            check_in, check_out = check_out, check_in
        elif check_out == check_in:
            check_out = None

    logger.debug("Date range: %s -> %s", check_in, check_out)
    return (
        check_in.isoformat() if check_in else "",
        check_out.isoformat() if check_out else "",
    )


def _nights_range(ctx: _RangeContext, check_in: date | None) -> tuple[date, date] | None:
    if not check_in:
        return None
    nights = _stated_nights(ctx)
    if not nights:
        return None
    return check_in, check_in + timedelta(days=nights)


def _later_date_range(ctx: _RangeContext, check_in: date | None) -> tuple[date, date] | None:
    if not check_in:
        return None
    later = sorted(m.value for m in find_dates(ctx.text, ctx.today, ctx.day_first) if m.value > check_in)
    return (check_in, later[-1]) if later else None
