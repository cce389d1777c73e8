"""Table region detection and row tokenization.

Walks the document line by line with a two-state machine
(outside/inside a table). Inside a table every line with at least two
numbers becomes a :class:`TableRow`. A total line ends parsing entirely:
anything after the grand total is prose.
"""

import re
from dataclasses import dataclass, field

from hotel_parser.utils.logger import get_logger

from .columns import RATE_TOLERANCE
from .dates import DATE_TOKEN

logger = get_logger(__name__)

MIN_ROW_NUMBERS = 2
MAX_QUANTITY_DIGITS = 3

HEADER_WORDS: tuple[str, ...] = (
    "room", "rooms", "type", "category", "description", "particulars", "item",
    "rate", "price", "tariff", "qty", "quantity", "nos", "units", "nights",
    "amount", "total", "inventory", "allocation", "per night", "unit",
)

_HEADER_LINE = re.compile(
    r"\b(?:room\s*type|room\s*category|category|description|particulars|item)\b"
    r".*\b(?:rate|price|tariff|qty|quantity|rooms|amount|total|nights)\b",
    re.IGNORECASE,
)
_TOTAL_LINE = re.compile(r"^\W*(?:grand\s+total|sub\s*-?\s*total|total)\b", re.IGNORECASE)
_SECTION_BREAK = re.compile(
    r"^\W*(?:terms|conditions|notes?|signature|signed|authori[sz]ed\s+signatory"
    r"|payment\s+terms|cancellation\s+policy|attrition)\b",
    re.IGNORECASE,
)
_PERCENT_STATEMENT = re.compile(
    r"^\W*\d{1,3}\s*%\s*(?:advance|deposit|cancellation|retention|release|payable)",
    re.IGNORECASE,
)
_PARENTHETICAL = re.compile(r"\([^()]*\)")
_PERCENTAGE = re.compile(r"\d+(?:\.\d+)?\s*%")
_DATE = re.compile(DATE_TOKEN, re.IGNORECASE)
_SERIAL = re.compile(r"^\s*\d{1,2}[.)]\s+(?=[A-Za-z])")
_NUMBER_TOKEN = re.compile(r"(?<!\w)(?<!\d\.)\d[\d,]*(?:\.\d+)?(?![\w])")
_DESCRIPTION_TRIM = re.compile(r"(?:\s|[:|\-–₹$€£@×]|\bx\b|\brs\.?|\binr\b)+$", re.IGNORECASE)

_PLAIN = re.compile(r"^\d+(?:\.\d+)?$")
_WESTERN_GROUPED = re.compile(r"^\d{1,3}(?:,\d{3})+(?:\.\d+)?$")
_INDIAN_GROUPED = re.compile(r"^\d{1,2}(?:,\d{2})*,\d{3}(?:\.\d+)?$")

_FALLBACK_ROW = re.compile(
    r"^\s*([A-Za-z][A-Za-z &/'().\-]{2,60}?)\s*[:|\-–]?\s*"
    r"(?:₹|rs\.?|inr|\$)?\s*(\d[\d,]*(?:\.\d+)?)\s+"
    r"(?:₹|rs\.?|inr|\$)?\s*(\d[\d,]*(?:\.\d+)?)"
    r"(?:\s+(?:₹|rs\.?|inr|\$)?\s*(\d[\d,]*(?:\.\d+)?))?\s*$",
    re.IGNORECASE | re.MULTILINE,
)


@dataclass
class TableRow:
    """One data row: a description and the numbers that follow it."""

    description: str
    numbers: list[float] = field(default_factory=list)
    raw_line: str = ""


def is_well_formed_number(token: str) -> bool:
    """Check that a numeric token is plain or consistently digit-grouped."""
    return bool(
        _PLAIN.match(token) or _WESTERN_GROUPED.match(token) or _INDIAN_GROUPED.match(token)
    )


def to_number(token: str) -> float:
    return float(token.replace(",", ""))


def _is_header(line: str) -> bool:
    if _HEADER_LINE.search(line):
        return True
    lower = line.lower()
    if lower.lstrip(" -:|").startswith("total"):
        return False
    hits = sum(1 for word in HEADER_WORDS if re.search(rf"\b{word}\b", lower))
    return hits >= 2 and len(_NUMBER_TOKEN.findall(line)) < MIN_ROW_NUMBERS


def _mask(line: str) -> str:
    line = _PARENTHETICAL.sub(" ", line)
    line = _DATE.sub(" ", line)
    line = _PERCENTAGE.sub(" ", line)
    return _SERIAL.sub("", line)


def split_merged_columns(token: str) -> list[float] | None:
    """Recover ``[quantity, rate, total]`` from one OCR-merged token.

    Tries every quantity prefix of one to three digits and every split of
    the remainder into two well-formed grouped numbers, keeping the split
    whose ``quantity * rate`` lands closest to the total.

    Args:
        token: A numeric token that failed grouping validation, e.g.
            ``"3012,000360,000"``.

    Returns:
        The three recovered numbers, or ``None`` if no split is plausible.
    """
    best: tuple[float, list[float]] | None = None
    for q_len in range(1, MAX_QUANTITY_DIGITS + 1):
        quantity_text, rest = token[:q_len], token[q_len:]
        if not quantity_text.isdigit() or not rest or not rest[0].isdigit():
            continue
        quantity = int(quantity_text)
        if quantity < 1:
            continue
        for cut in range(1, len(rest)):
            rate_text, total_text = rest[:cut], rest[cut:]
            if "," not in rate_text and "," not in total_text:
                continue
            if not (is_well_formed_number(rate_text) and is_well_formed_number(total_text)):
                continue
            rate, total = to_number(rate_text), to_number(total_text)
            if total <= 0:
                continue
            error = abs(quantity * rate - total) / total
            if error <= RATE_TOLERANCE and (best is None or error < best[0]):
                best = (error, [float(quantity), rate, total])
    return best[1] if best else None


def tokenize_row(line: str) -> TableRow | None:
    """Split a table line into description and numbers.

    Args:
        line: One line of text inside a table region.

    Returns:
        A row when the line carries at least two numbers, else ``None``.
    """
    masked = _mask(line)
    matches = list(_NUMBER_TOKEN.finditer(masked))
    if not matches:
        return None

    description = _DESCRIPTION_TRIM.sub("", masked[: matches[0].start()]).strip()
    tokens = [m.group(0).rstrip(",") for m in matches]

    if len(tokens) == 1 and not is_well_formed_number(tokens[0]):
        numbers = split_merged_columns(tokens[0])
        if numbers is None:
            return None
    else:
        numbers = [to_number(t) for t in tokens if is_well_formed_number(t)]

    if len(numbers) < MIN_ROW_NUMBERS or not description:
        return None
    return TableRow(description=description, numbers=numbers, raw_line=line)


def parse_table_rows(text: str) -> list[TableRow]:
    """Locate tabular regions and return their data rows.

    Args:
        text: Normalized document text.

    Returns:
        Rows in document order. Falls back to a permissive whole-text scan
        when no table region is detected.
    """
    rows: list[TableRow] = []
    inside = False
    blank_run = 0

    for line in text.split("\n"):
        stripped = line.strip()
        if not inside:
            if stripped and _is_header(stripped):
                inside = True
                blank_run = 0
            continue

        if not stripped:
            blank_run += 1
            if blank_run >= 2:
                inside = False
            continue
        blank_run = 0

        if _TOTAL_LINE.match(stripped):
            break
        if _SECTION_BREAK.match(stripped) or _PERCENT_STATEMENT.match(stripped):
            inside = False
            continue
        if _is_header(stripped):
            continue

        row = tokenize_row(stripped)
        if row:
            rows.append(row)

    if rows:
        logger.debug("Parsed %d table rows", len(rows))
        return rows

    fallback = _fallback_rows(text)
    logger.debug("No table header found; fallback scan produced %d rows", len(fallback))
    return fallback


def _fallback_rows(text: str) -> list[TableRow]:
    rows = []
    for match in _FALLBACK_ROW.finditer(text):
        if _TOTAL_LINE.match(match.group(0)):
            continue
        tokens = [t for t in match.groups()[1:] if t]
        if not all(is_well_formed_number(t) for t in tokens):
            continue
        rows.append(
            TableRow(
                description=match.group(1).strip(),
                numbers=[to_number(t) for t in tokens],
                raw_line=match.group(0).strip(),
            )
        )
    return rows
