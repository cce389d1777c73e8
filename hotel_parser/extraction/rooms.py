"""Room inventory extraction.

Strategies, most to least reliable:

1. Table rows whose description names a room category, read with the
   column interpreter.
2. A catalogue of compound room-type names, reading rate, quantity, floor,
   wing and hotel from the text that follows each mention.
3. A generic ``name | rate | quantity`` delimited-row pattern.
"""

import re

from hotel_parser.schemas import RoomLine
from hotel_parser.utils.logger import get_logger

from .cascade import run_cascade
from .columns import interpret
from .tables import TableRow

logger = get_logger(__name__)

CONTEXT_CHARS = 500
MAX_ROOM_QUANTITY = 1000

ROOM_TYPES: tuple[str, ...] = (
    "Deluxe Room", "Standard Room", "Premium Suite", "Executive Suite", "Royal Suite",
    "Presidential Suite", "Superior Room", "Family Room", "Family Suite", "Luxury Suite",
    "Luxury Room", "Classic Room", "Junior Suite", "Grand Suite", "Honeymoon Suite",
    "Penthouse Suite", "Penthouse", "Pool Villa", "Villa", "Cottage", "Studio Room",
    "Studio", "Twin Room", "Double Room", "Single Room", "King Room", "Queen Room",
    "Club Room", "Garden Room", "Ocean Suite", "Lake View Room", "Premium Room",
    "Executive Room", "Heritage Room", "Palace Room",
)

_ROOM_WORDS = re.compile(
    r"\b(?:rooms?|suites?|villas?|cottages?|penthouse|studio|deluxe|superior|premium"
    r"|executive|standard|twin|double|single|king|queen|club|heritage|luxury|tent)\b",
    re.IGNORECASE,
)
_ROOM_NOUNS = re.compile(
    r"\b(?:rooms?|suites?|villas?|cottages?|penthouses?|studios?|tents?)\b", re.IGNORECASE
)
# Spaces and services named with a room noun; never guest accommodation.
_VENUE_WORDS = re.compile(
    r"\b(?:banquet|hall|ballroom|catering|venue\s+hire|room\s+service"
    r"|(?:meeting|conference|board|function|green|changing)\s+rooms?)\b",
    re.IGNORECASE,
)
_SERVICE_WORDS = re.compile(
    r"\b(?:breakfast|dinner|lunch|transfer|decor|service|spa|per\s+person|pax)\b",
    re.IGNORECASE,
)
# "with breakfast", "(incl. breakfast)", "(CP)": the meal plan sold with the room.
_MEAL_PLAN = re.compile(
    r"\s*(?:\bwith\b|\bincl(?:uding|\.)?|\+|\()\s*[^()]*?"
    r"\b(?:breakfast|meals?|dinner|lunch|half\s+board|full\s+board|cp|map|ap)\b.*$",
    re.IGNORECASE,
)

_RATE_SYMBOL = re.compile(r"[₹$€£]\s*([\d,]+(?:\.\d+)?)")
_RATE_LABEL = re.compile(r"\b(?:rs\.?|inr|usd|rate|tariff|price)\s*:?\s*([\d,]+(?:\.\d+)?)", re.I)
_QTY_LABEL = re.compile(r"\b(?:qty|quantity|no\.?\s+of\s+rooms|units?|nos?\.?|count|block)\s*:?\s*(\d+)", re.I)
_QTY_SUFFIX = re.compile(r"\b(\d+)\s*(?:rooms?|units?|nos?)\b", re.I)
_FLOOR = re.compile(r"\b(?:floor|level)\s*:?\s*([A-Za-z0-9\-–]+)", re.I)
_WING = re.compile(r"\b(?:wing|tower|block|building)\s*:\s*([A-Za-z][A-Za-z ]*?)(?:\s*[,.\n|]|$)", re.I)
_HOTEL = re.compile(r"\b(?:at|hotel|property)\s*:\s*([A-Z][A-Za-z &']+?)(?:\s*[,.\n|]|$)")

_DELIMITED_ROW = re.compile(
    r"([A-Za-z][A-Za-z ]+?)\s*(?:[|│┃,]|[-–]\s*)\s*(?:₹|\$|rs\.?)?\s*([\d,]+)"
    r"\s*(?:per\s*night|/night|/n)?\s*(?:[|│┃,]|[-–]\s*)\s*(\d+)\s*(?:rooms?|units?|nos?)?",
    re.IGNORECASE,
)


def _number(raw: str) -> float:
    return float(raw.replace(",", ""))


def is_room_description(description: str) -> bool:
    """Check whether a row description names guest accommodation.

    A leading room noun ("Deluxe Room with Breakfast") keeps the row a
    room even when an amenity follows; otherwise any service word
    ("Breakfast per room") disqualifies it.
    """
    if _VENUE_WORDS.search(description):
        return False
    noun = _ROOM_NOUNS.search(description)
    service = _SERVICE_WORDS.search(description)
    if noun and (service is None or noun.start() < service.start()):
        return True
    return bool(_ROOM_WORDS.search(description)) and service is None


def room_type_name(description: str) -> str:
    """Title-case a room description without its meal plan."""
    name = _MEAL_PLAN.sub("", description).strip(" -,:")
    return _title(name or description)


def _title(name: str) -> str:
    return " ".join(word if word.isupper() else word.capitalize() for word in name.split())


def rooms_from_rows(rows: list[TableRow]) -> list[RoomLine]:
    """Read room lines from parsed table rows."""
    rooms = []
    for row in rows:
        if not is_room_description(row.description):
            continue
        reading = interpret(row.numbers)
        if reading is None:
            continue
        rooms.append(
            RoomLine(
                room_type=room_type_name(row.description),
                rate=max(reading.rate, 0.0),
                quantity=max(reading.quantity, 1),
            )
        )
    return rooms


def _scan_context(room_type: str, context: str) -> RoomLine:
    rate = 0.0
    match = _RATE_SYMBOL.search(context) or _RATE_LABEL.search(context)
    if match:
        rate = _number(match.group(1))

    quantity = 1
    match = _QTY_LABEL.search(context) or _QTY_SUFFIX.search(context)
    if match and 0 < int(match.group(1)) < MAX_ROOM_QUANTITY:
        quantity = int(match.group(1))

    floor = _FLOOR.search(context)
    wing = _WING.search(context)
    hotel = _HOTEL.search(context)
    return RoomLine(
        room_type=room_type,
        rate=rate,
        quantity=quantity,
        floor=floor.group(1) if floor else None,
        wing=wing.group(1).strip() if wing else None,
        hotel_name=hotel.group(1).strip() if hotel else None,
    )


def rooms_from_catalogue(text: str) -> list[RoomLine]:
    """Find known room types and read the details that follow each mention."""
    rooms: list[RoomLine] = []
    lower = text.lower()
    claimed: list[tuple[int, int]] = []
    for room_type in ROOM_TYPES:
        match = re.search(rf"\b{re.escape(room_type.lower())}s?\b", lower)
        if not match:
            continue
        # "Pool Villa" already covers the "Villa" inside it.
        if any(start <= match.start() < end for start, end in claimed):
            continue
        claimed.append(match.span())
        context = text[match.start() : match.start() + CONTEXT_CHARS]
        line_end = context.find("\n\n")
        rooms.append(_scan_context(room_type, context if line_end < 0 else context[:line_end]))
    return rooms


def rooms_from_delimited_rows(text: str) -> list[RoomLine]:
    """Generic ``name | rate | quantity`` rows."""
    rooms = []
    for match in _DELIMITED_ROW.finditer(text):
        name = match.group(1).strip()
        rate = _number(match.group(2))
        quantity = int(match.group(3))
        if len(name) > 2 and rate > 100 and 0 < quantity < MAX_ROOM_QUANTITY:
            rooms.append(RoomLine(room_type=name, rate=rate, quantity=quantity))
    return rooms


def _dedupe(rooms: list[RoomLine]) -> list[RoomLine]:
    unique: dict[str, RoomLine] = {}
    for room in rooms:
        unique.setdefault(room.room_type.lower(), room)
    return list(unique.values())


def extract_rooms(text: str, rows: list[TableRow] | None = None) -> list[RoomLine]:
    """Extract the contracted room block.

    Args:
        text: Normalized document text.
        rows: Table rows from :func:`parse_table_rows`.

    Returns:
        Room lines, possibly empty. The placeholder room is added by the
        caller after scoring.
    """
    rooms = run_cascade(
        "rooms",
        [
            lambda: rooms_from_rows(rows or []),
            lambda: rooms_from_catalogue(text),
            lambda: rooms_from_delimited_rows(text),
        ],
    )
    rooms = _dedupe(rooms or [])
    logger.info("Extracted %d room line(s)", len(rooms))
    return rooms
