"""Amounts, totals, currency, tax and payment terms."""

import re
from collections import Counter

from hotel_parser.utils.logger import get_logger

from .cascade import run_cascade

logger = get_logger(__name__)

MAX_PLAUSIBLE_AMOUNT = 1e11

_MULTIPLIERS: dict[str, float] = {
    "k": 1e3,
    "thousand": 1e3,
    "lakh": 1e5,
    "lakhs": 1e5,
    "lac": 1e5,
    "lacs": 1e5,
    "l": 1e5,
    "crore": 1e7,
    "crores": 1e7,
    "cr": 1e7,
    "m": 1e6,
    "mn": 1e6,
    "million": 1e6,
    "b": 1e9,
    "bn": 1e9,
    "billion": 1e9,
}

_WORD_UNITS: dict[str, int] = {
    "zero": 0, "one": 1, "two": 2, "three": 3, "four": 4, "five": 5, "six": 6,
    "seven": 7, "eight": 8, "nine": 9, "ten": 10, "eleven": 11, "twelve": 12,
    "thirteen": 13, "fourteen": 14, "fifteen": 15, "sixteen": 16,
    "seventeen": 17, "eighteen": 18, "nineteen": 19, "twenty": 20,
    "thirty": 30, "forty": 40, "fifty": 50, "sixty": 60, "seventy": 70,
    "eighty": 80, "ninety": 90,
}
_WORD_SCALES: dict[str, int] = {
    "thousand": 1_000,
    "lakh": 100_000,
    "lakhs": 100_000,
    "million": 1_000_000,
    "crore": 10_000_000,
    "crores": 10_000_000,
    "billion": 1_000_000_000,
}

_CURRENCY_PREFIX = r"(?:₹|\brs\.?|\binr\b|\busd\b|\bus\$|\$|€|\beur\b|£|\bgbp\b|\baed\b|\bsgd\b|\bthb\b)"
_AMOUNT = (
    r"\d[\d,]*(?:\.\d+)?"
    r"(?:\s*(?:lakhs?|lacs?|crores?|cr|k|mn|million|m|bn|billion|b)\b)?"
)
_NUMERIC_AMOUNT = re.compile(
    r"(\d[\d,]*(?:\.\d+)?)\s*(lakhs?|lacs?|crores?|cr|k|mn|million|m|bn|billion|b|l)?\b",
    re.IGNORECASE,
)
_TOTAL_LINE = re.compile(
    rf"\b(?:grand\s+total|total\s+(?:amount|contract\s+value|value|cost|payable|due)"
    rf"|net\s+payable|amount\s+payable|total)\b"
    rf"(?!\s*(?:rooms?|nights?|guests?|pax|no\b|number|inventory))[^\n\d₹$€£]{{0,30}}?"
    rf"{_CURRENCY_PREFIX}?\s*({_AMOUNT})",
    re.IGNORECASE,
)
_SPELLED_TOTAL = re.compile(
    r"\b(?:rupees|dollars|amount\s+in\s+words)\s*[:\-]?\s*([a-z\s\-]+?)\s*(?:only|\n|$)",
    re.IGNORECASE,
)
_TOTAL_KEYS = (
    "grand total",
    "total amount",
    "total contract value",
    "total value",
    "total cost",
    "total",
    "net payable",
    "amount payable",
)

_CURRENCY_SIGNALS: dict[str, re.Pattern] = {
    "INR": re.compile(r"₹|\b(?:inr|rs\.?|rupees?|lakhs?|crores?)(?=\W|\d|$)", re.I),
    "USD": re.compile(r"(?<![A-Za-z])(?:us)?\$|\busd\b|\bdollars?\b", re.I),
    "EUR": re.compile(r"€|\beur\b|\beuros?\b", re.I),
    "GBP": re.compile(r"£|\bgbp\b|\bpounds?\s+sterling\b", re.I),
    "AED": re.compile(r"\baed\b|\bdirhams?\b", re.I),
    "SGD": re.compile(r"\bsgd\b|\bs\$", re.I),
    "THB": re.compile(r"\bthb\b|\bbaht\b|฿", re.I),
}

_TAX_RATE = re.compile(
    r"\b(CGST|SGST|IGST|GST|VAT|service\s+charge|luxury\s+tax|taxes|tax)\b"
    r"[^\n%]{0,25}?(\d{1,2}(?:\.\d+)?)\s*%",
    re.IGNORECASE,
)
_TAX_INCLUSION = re.compile(r"\b(inclusive|exclusive)\s+of\s+(?:all\s+)?(?:applicable\s+)?taxes\b", re.I)
_PAYMENT_LINE = re.compile(
    r"^[^\n]*\b(?:advance|deposit|balance|payment|payable|installment|instalment)\b[^\n]*$",
    re.IGNORECASE | re.MULTILINE,
)
_PAYMENT_DETAIL = re.compile(r"\d{1,3}\s*%|\bdays?\b|\bon\s+(?:signing|arrival|check)", re.I)


def _plausible(value: float | None) -> bool:
    return value is not None and 0 < value < MAX_PLAUSIBLE_AMOUNT


def parse_words(text: str) -> float | None:
    """Parse a spelled-out number such as ``"four lakh fifty thousand"``."""
    words = re.findall(r"[a-z]+", text.lower())
    total = 0
    current = 0
    seen = False
    for word in words:
        if word in ("and", "only", "rupees", "dollars"):
            continue
        if word in _WORD_UNITS:
            current += _WORD_UNITS[word]
            seen = True
        elif word == "hundred":
            current = (current or 1) * 100
            seen = True
        elif word in _WORD_SCALES:
            total += (current or 1) * _WORD_SCALES[word]
            current = 0
            seen = True
        else:
            return None
    return float(total + current) if seen else None


def parse_amount(text: str) -> float | None:
    """Parse a money amount.

    Handles grouped digits (``12,000`` and ``3,60,000``), magnitude
    suffixes (``1.5M``, ``500K``), Indian units (``4.5 lakh``, ``2 crore``)
    and spelled-out numbers.

    Args:
        text: A short string containing one amount.

    Returns:
        The amount, or ``None`` if nothing parseable was found.
    """
    if not text:
        return None
    cleaned = re.sub(_CURRENCY_PREFIX, " ", text, flags=re.IGNORECASE)
    match = _NUMERIC_AMOUNT.search(cleaned)
    if match:
        try:
            value = float(match.group(1).replace(",", ""))
        except ValueError:
            return None
        suffix = (match.group(2) or "").lower()
        return value * _MULTIPLIERS.get(suffix, 1.0)
    return parse_words(cleaned)


def _labeled_totals(fields: dict[str, str]) -> list[float]:
    values = []
    for key in _TOTAL_KEYS:
        if key in fields:
            amount = parse_amount(fields[key])
            if _plausible(amount):
                values.append(amount)
    return values


def _line_totals(text: str) -> list[float]:
    values = []
    for match in _TOTAL_LINE.finditer(text):
        amount = parse_amount(match.group(1))
        if _plausible(amount):
            values.append(amount)
    for match in _SPELLED_TOTAL.finditer(text):
        amount = parse_words(match.group(1))
        if _plausible(amount):
            values.append(amount)
    return values


def extract_total_amount(text: str, fields: dict[str, str] | None = None) -> float | None:
    """Return the contract's total amount.

    All candidate totals are collected and the largest wins, since a grand
    total dominates itemized subtotals.
    """
    candidates = _labeled_totals(fields or {}) + _line_totals(text)
    if not candidates:
        return None
    total = max(candidates)
    logger.debug("Total amount %.2f chosen from %d candidates", total, len(candidates))
    return total


def detect_currency(text: str) -> str | None:
    """Return the ISO code of the most frequently signalled currency."""
    counts = Counter()
    for code, pattern in _CURRENCY_SIGNALS.items():
        hits = len(pattern.findall(text))
        if hits:
            counts[code] = hits
    if not counts:
        return None
    return counts.most_common(1)[0][0]


def extract_tax_info(text: str, fields: dict[str, str] | None = None) -> str | None:
    """Summarise tax rates, e.g. ``"GST 18%; Service Charge 10%"``."""
    fields = fields or {}

    def from_rates() -> str | None:
        parts: list[str] = []
        for match in _TAX_RATE.finditer(text):
            label = re.sub(r"\s+", " ", match.group(1))
            label = label.upper() if label.lower().endswith("gst") or label.lower() == "vat" else label.title()
            part = f"{label} {match.group(2)}%"
            if part not in parts:
                parts.append(part)
        if not parts:
            return None
        inclusion = _TAX_INCLUSION.search(text)
        if inclusion:
            parts.append(f"{inclusion.group(1).capitalize()} of taxes")
        return "; ".join(parts)

    def from_inclusion() -> str | None:
        inclusion = _TAX_INCLUSION.search(text)
        return f"{inclusion.group(1).capitalize()} of taxes" if inclusion else None

    return run_cascade(
        "tax_info",
        [lambda: fields.get("tax") or fields.get("taxes") or fields.get("gst"),
         from_rates,
         from_inclusion],
    )


def extract_payment_terms(text: str, fields: dict[str, str] | None = None) -> str | None:
    """Collect the payment schedule, e.g. advance and balance instalments."""
    fields = fields or {}

    def from_lines() -> str | None:
        lines = []
        for match in _PAYMENT_LINE.finditer(text):
            line = match.group(0).strip()
            if _PAYMENT_DETAIL.search(line) and line not in lines:
                lines.append(line)
            if len(lines) == 3:
                break
        return " ".join(lines)[:200] or None

    return run_cascade(
        "payment_terms",
        [lambda: fields.get("payment terms") or fields.get("payment schedule"),
         from_lines],
    )
