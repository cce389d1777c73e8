"""Labeled-field harvesting.

Builds a case-insensitive ``label -> value`` map from ``Key: Value`` lines,
``Key:`` lines followed by their value, and bare header words rendered
without any delimiter (typical of HTML-to-PDF output).
"""

import re

from hotel_parser.utils.logger import get_logger

logger = get_logger(__name__)

MAX_VALUE_LENGTH = 200

_INLINE_PAIR = re.compile(r"^([A-Za-z][A-Za-z0-9 /&().#'\-]{0,40}?)\s*[:：]\s*(\S.*)$")
_DANGLING_KEY = re.compile(r"^([A-Za-z][A-Za-z0-9 /&().#'\-]{0,40}?)\s*[:：]$")

KNOWN_HEADERS: tuple[str, ...] = (
    "hotel name",
    "hotel",
    "property",
    "property name",
    "venue",
    "venue name",
    "location",
    "address",
    "city",
    "check-in date",
    "check-out date",
    "check-in",
    "check-out",
    "check in date",
    "check out date",
    "check in",
    "check out",
    "arrival date",
    "departure date",
    "arrival",
    "departure",
    "event name",
    "event type",
    "event date",
    "event dates",
    "client",
    "client name",
    "organizer",
    "contract no",
    "contract number",
    "group code",
    "gstin",
    "total amount",
    "grand total",
    "payment terms",
    "issue date",
    "valid until",
    "expected guests",
    "number of guests",
    "no of nights",
    "nights",
    "currency",
)

_CANONICAL_KEYS: dict[str, str] = {
    "check in": "check-in",
    "checkin": "check-in",
    "check-in date": "check-in",
    "check in date": "check-in",
    "checkin date": "check-in",
    "arrival": "check-in",
    "arrival date": "check-in",
    "date of arrival": "check-in",
    "check out": "check-out",
    "checkout": "check-out",
    "check-out date": "check-out",
    "check out date": "check-out",
    "checkout date": "check-out",
    "departure": "check-out",
    "departure date": "check-out",
    "date of departure": "check-out",
}


def normalize_key(label: str) -> str:
    """Lower-case a label, collapse whitespace, and map check-in/out synonyms."""
    key = re.sub(r"\s+", " ", label.strip().lower())
    key = re.sub(r"\s*-\s*", "-", key)
    return _CANONICAL_KEYS.get(key, key)


def extract_fields(text: str) -> dict[str, str]:
    """Extract explicitly labeled values from document text.

    Args:
        text: Normalized document text.

    Returns:
        Mapping of normalized label to value; the first value seen for a
        label is kept.
    """
    fields: dict[str, str] = {}
    lines = [line.strip() for line in text.split("\n")]

    _scan_inline_pairs(lines, fields)
    _scan_dangling_keys(lines, fields)
    _scan_known_headers(lines, fields)

    logger.debug("Extracted %d labeled fields", len(fields))
    return fields


def _store(fields: dict[str, str], label: str, value: str) -> None:
    value = value.strip()
    if not value or len(value) > MAX_VALUE_LENGTH:
        return
    fields.setdefault(normalize_key(label), value)


def _next_value(lines: list[str], index: int) -> str | None:
    for line in lines[index + 1 :]:
        if line:
            return line
    return None


def _scan_inline_pairs(lines: list[str], fields: dict[str, str]) -> None:
    for line in lines:
        match = _INLINE_PAIR.match(line)
        if not match or match.group(2).startswith("//"):
            continue
        _store(fields, match.group(1), match.group(2))


def _scan_dangling_keys(lines: list[str], fields: dict[str, str]) -> None:
    for i, line in enumerate(lines):
        match = _DANGLING_KEY.match(line)
        if not match:
            continue
        value = _next_value(lines, i)
        if value and not _DANGLING_KEY.match(value):
            _store(fields, match.group(1), value)


def _scan_known_headers(lines: list[str], fields: dict[str, str]) -> None:
    headers = set(KNOWN_HEADERS)
    for i, line in enumerate(lines):
        label = re.sub(r"\s+", " ", line.lower())
        if label not in headers:
            continue
        value = _next_value(lines, i)
        if value and value.lower() not in headers and not _INLINE_PAIR.match(value):
            _store(fields, line, value)
