"""Guest add-ons versus organizer-level event services.

Guest-payable extras (transfers, spa, breakfast, Wi-Fi) become
:class:`AddOnLine`; organizer-payable items (banquet hall, catering, AV,
decoration, entertainment) become :class:`EventServiceLine`, even when
both kinds sit in the same table.
"""

import re
from dataclasses import dataclass

from hotel_parser.schemas import AddOnLine, EventServiceLine
from hotel_parser.utils.logger import get_logger

from .columns import interpret
from .rooms import is_room_description
from .tables import TableRow

logger = get_logger(__name__)


@dataclass(frozen=True)
class ServiceKeyword:
    """A catalogue entry mapping a phrase pattern to a canonical name."""

    pattern: re.Pattern
    name: str
    organizer_paid: bool


def _kw(pattern: str, name: str, organizer_paid: bool = False) -> ServiceKeyword:
    return ServiceKeyword(re.compile(pattern, re.IGNORECASE), name, organizer_paid)


SERVICE_CATALOGUE: tuple[ServiceKeyword, ...] = (
    # organizer-payable
    _kw(r"\b(?:banquet\s*hall|banquet|ballroom|function\s+hall)\b", "Banquet Hall", True),
    _kw(r"\bcatering\b|\bf\s*&\s*b\b|\bfood\s+(?:and|&)\s+beverages?\b", "Catering", True),
    _kw(r"\b(?:audio[\s-]*visual|a\s*/\s*v|av\s+(?:equipment|setup|package)|sound\s+system"
        r"|lighting|projector|led\s+wall|stage\s+setup)\b", "AV Equipment", True),
    _kw(r"\b(?:decoration|decor|floral\s+arrangements?)\b", "Decoration", True),
    _kw(r"\b(?:entertainment|dj|live\s+(?:music|band)|band)\b", "Entertainment", True),
    _kw(r"\bphotography\b|\bvideography\b", "Photography", True),
    _kw(r"\bmandap\b", "Mandap Setup", True),
    _kw(r"\bvenue\s+(?:hire|rental|charges?)\b", "Venue Hire", True),
    _kw(r"\b(?:meeting|conference|board)\s+room\b", "Meeting Room", True),
    _kw(r"\bwelcome\s*(?:dinner|drinks?|cocktail|reception)\b", "Welcome Dinner", True),
    _kw(r"\bgala\s*(?:night|dinner|event)\b", "Gala Night", True),
    _kw(r"\b(?:mehendi|mehndi|henna)\b", "Mehendi Ceremony", True),
    _kw(r"\bsangeeth?\b", "Sangeet Ceremony", True),
    _kw(r"\bhaldi\b", "Haldi Ceremony", True),
    _kw(r"\bcocktail\s*(?:party|night|evening)\b", "Cocktail Party", True),
    # guest-payable
    _kw(r"\bairport\s*(?:pick-?up|transfers?|drop|shuttle)\b", "Airport Transfer"),
    _kw(r"\bspa\s*(?:package|treatments?|sessions?|credit|access)\b", "Spa Package"),
    _kw(r"\bbreakfast\b", "Breakfast"),
    _kw(r"\bwi-?fi\b|\binternet\b", "Wi-Fi"),
    _kw(r"\b(?:gym|fitness\s+cent(?:er|re))\b", "Gym Access"),
    _kw(r"\b(?:swimming\s+pool|pool\s+access)\b", "Pool Access"),
    _kw(r"\blaundry\b", "Laundry Service"),
    _kw(r"\b(?:valet\s+)?parking\b", "Parking"),
    _kw(r"\b(?:city\s+tour|sight-?seeing)\b", "City Tour"),
    _kw(r"\bmini-?bar\b", "Mini Bar"),
    _kw(r"\broom\s+service\b", "Room Service"),
    _kw(r"\bconcierge\b", "Concierge"),
    _kw(r"\b(?:babysitting|childcare|kids\s+club)\b", "Childcare"),
    _kw(r"\b(?:boat|yacht)\s*(?:ride|trip|cruise)?\b|\bcruise\b", "Boat Trip"),
)

_INCLUDED = re.compile(
    r"complimentary|\bincluded\b|\bfree\b|no\s+(?:extra\s+)?charge|\binclusive\b|gratis|at\s+no\s+cost",
    re.IGNORECASE,
)
_THREE_DIGITS = re.compile(r"\d{3,}")
_PRICE_SYMBOL = re.compile(r"[₹$€£]\s*([\d,]+(?:\.\d+)?)|\b(?:rs\.?|inr)\s*([\d,]+(?:\.\d+)?)", re.I)
_BARE_PRICE = re.compile(r"(?<![\d.,])(\d{1,3}(?:,\d{2,3})+|\d{3,})(?![\d,]*\s*%)")


def classify(description: str) -> ServiceKeyword | None:
    """Return the catalogue entry a description belongs to, if any."""
    for keyword in SERVICE_CATALOGUE:
        if keyword.pattern.search(description):
            return keyword
    return None


def _line_around(text: str, start: int, end: int) -> str:
    line_start = text.rfind("\n", 0, start) + 1
    line_end = text.find("\n", end)
    return text[line_start : line_end if line_end >= 0 else len(text)]


def is_included(line: str, phrase: str) -> bool:
    """Complimentary wording on the line, with no price beside it."""
    if not _INCLUDED.search(line):
        return False
    return not _THREE_DIGITS.search(line.replace(phrase, " "))


def line_price(line: str) -> float:
    match = _PRICE_SYMBOL.search(line)
    if match:
        return float((match.group(1) or match.group(2)).replace(",", ""))
    match = _BARE_PRICE.search(line)
    return float(match.group(1).replace(",", "")) if match else 0.0


@dataclass
class ServiceExtraction:
    """Add-ons and event services found in one document."""

    add_ons: list[AddOnLine]
    event_services: list[EventServiceLine]


def _from_rows(rows: list[TableRow], result: ServiceExtraction, seen: set[str]) -> None:
    for row in rows:
        if is_room_description(row.description):
            continue
        keyword = classify(row.description)
        if keyword is None or keyword.name in seen:
            continue
        reading = interpret(row.numbers)
        if reading is None:
            continue
        seen.add(keyword.name)
        if keyword.organizer_paid:
            result.event_services.append(
                EventServiceLine(
                    name=keyword.name,
                    price=reading.rate,
                    quantity=reading.quantity if reading.quantity > 1 else None,
                )
            )
        else:
            result.add_ons.append(AddOnLine(name=keyword.name, price=reading.rate))


def _from_catalogue(
    text: str, result: ServiceExtraction, seen: set[str], room_lines: list[str]
) -> None:
    for keyword in SERVICE_CATALOGUE:
        if keyword.name in seen:
            continue
        match = keyword.pattern.search(text)
        if not match:
            continue
        seen.add(keyword.name)
        line = _line_around(text, match.start(), match.end())
        # A meal plan on a room row is part of the room rate.
        on_room_row = any(room_line in line for room_line in room_lines)
        included = on_room_row or is_included(line, match.group(0))
        price = 0.0 if included else line_price(line.replace(match.group(0), " "))
        if keyword.organizer_paid:
            result.event_services.append(
                EventServiceLine(name=keyword.name, price=price, is_included=included)
            )
        else:
            result.add_ons.append(AddOnLine(name=keyword.name, price=price, is_included=included))


def extract_services(text: str, rows: list[TableRow] | None = None) -> ServiceExtraction:
    """Extract add-ons and event services.

    Priced table rows are read first; the keyword catalogue then fills in
    items mentioned only in prose.

    Args:
        text: Normalized document text.
        rows: Table rows from :func:`parse_table_rows`.

    Returns:
        The two classified lists.
    """
    rows = rows or []
    room_lines = [
        row.raw_line for row in rows if row.raw_line and is_room_description(row.description)
    ]
    result = ServiceExtraction(add_ons=[], event_services=[])
    seen: set[str] = set()
    _from_rows(rows, result, seen)
    _from_catalogue(text, result, seen, room_lines)
    logger.info(
        "Extracted %d add-on(s) and %d event service(s)",
        len(result.add_ons),
        len(result.event_services),
    )
    return result
