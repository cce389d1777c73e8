"""Event type detection and event name extraction."""

import re

from hotel_parser.utils.logger import get_logger

from .cascade import run_cascade

logger = get_logger(__name__)

DEFAULT_EVENT_TYPE = "event"
MAX_EVENT_NAME_LENGTH = 100

EVENT_TYPES: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"wedding|marriage|shaadi|vivah|nikah", re.I), "wedding"),
    (re.compile(r"conference|summit|seminar|symposium", re.I), "conference"),
    (re.compile(r"corporate|offsite|retreat|team.?building", re.I), "corporate"),
    (re.compile(r"product\s*launch|launch\s*event", re.I), "product-launch"),
    (re.compile(r"gala|dinner|cocktail|reception", re.I), "gala"),
    (re.compile(r"reunion|get.?together|meetup", re.I), "reunion"),
    (re.compile(r"engagement|ring\s*ceremony|roka|sagai", re.I), "engagement"),
    (re.compile(r"birthday|bday", re.I), "birthday"),
    (re.compile(r"anniversary", re.I), "anniversary"),
)

_EXPLICIT_NAME = re.compile(r"\b(?:event|function|ceremony)\s*(?:name)?\s*[:–—-]\s*(.+)", re.I)
_TITLED_EVENT = re.compile(
    r"(?:the\s+)?([A-Z][a-z]+(?:\s*[-&]\s*[A-Z][a-z]+)?\s+"
    r"(?:Wedding|Marriage|Conference|Summit|Gala|Celebration|Ceremony|Reception|Launch|Reunion|Offsite))"
)
_COUPLE = re.compile(r"\b([A-Z][a-z]+)\s*(?:&|\band\b|-|\bweds\b|❤)\s*([A-Z][a-z]+)\b")
_TITLE_LINE = re.compile(r"^([A-Z][A-Za-z &'\-]{5,60})$", re.MULTILINE)
_NOT_TITLE = re.compile(
    r"\b(?:hotel\s+name|check|contract|agreement|terms|conditions|dear|invoice|date|venue|rsvp)\b",
    re.IGNORECASE,
)


def detect_event_type(text: str) -> str:
    """Return the first matching event type, or ``"event"``."""
    for pattern, event_type in EVENT_TYPES:
        if pattern.search(text):
            return event_type
    return DEFAULT_EVENT_TYPE


def extract_event_name(text: str, event_type: str, fields: dict[str, str] | None = None) -> str:
    """Extract the event's name.

    Args:
        text: Normalized document text.
        event_type: Type from :func:`detect_event_type`.
        fields: Labeled fields, if already extracted.

    Returns:
        The event name, or ``""``.
    """
    fields = fields or {}

    def from_fields() -> str | None:
        return fields.get("event name") or fields.get("event") or fields.get("function")

    def from_explicit() -> str | None:
        match = _EXPLICIT_NAME.search(text)
        return match.group(1) if match else None

    def from_titled() -> str | None:
        match = _TITLED_EVENT.search(text)
        return match.group(1) if match else None

    def from_couple() -> str | None:
        if event_type != "wedding":
            return None
        match = _COUPLE.search(text)
        return f"The {match.group(1)}-{match.group(2)} Wedding" if match else None

    def from_title_line() -> str | None:
        for match in _TITLE_LINE.finditer(text):
            if not _NOT_TITLE.search(match.group(1)):
                return match.group(1)
        return None

    name = run_cascade(
        "event_name", [from_fields, from_explicit, from_titled, from_couple, from_title_line]
    )
    return name.strip()[:MAX_EVENT_NAME_LENGTH] if name else ""
