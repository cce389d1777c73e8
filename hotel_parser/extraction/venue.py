"""Venue (property name) and location extraction.

Venue names are collected from every strategy and scored; the best scoring
candidate wins. Location is a plain first-hit cascade.
"""

import re
from dataclasses import dataclass

from hotel_parser.utils.logger import get_logger

from .cascade import run_cascade
from .lexicon import (
    FACILITY_SUFFIXES,
    HOSPITALITY_BRANDS,
    HOSPITALITY_SUFFIXES,
    INDIAN_CITIES,
    INTERNATIONAL_CITIES,
)

logger = get_logger(__name__)

MAX_VENUE_LENGTH = 100
MAX_LOCATION_LENGTH = 80
LEADING_LINES = 5

SUFFIX_POINTS = 50
BRAND_POINTS = 30
LENGTH_POINTS = 20
POSITION_POINTS = 10
LABEL_POINTS = 40
GENERIC_PENALTY = 10

_LENGTH_WINDOW = (8, 60)
_NEAR_START_CHARS = 300

_VENUE_KEYS = ("hotel name", "property name", "venue name", "hotel", "property", "venue")
_LOCATION_KEYS = ("location", "city", "venue address", "hotel address", "address", "place")

_SUFFIX_ALT = "|".join(HOSPITALITY_SUFFIXES)
_FULL_NAME = re.compile(
    rf"(?:The[^\S\n]+)?([A-Z][A-Za-z'’]+(?:[^\S\n]+(?:[A-Z&][A-Za-z'’]*|the|of|de|le|la)){{0,8}}"
    rf"[^\S\n]+(?:{_SUFFIX_ALT})\b(?:[^\S\n]*&[^\S\n]*[A-Z][A-Za-z]+)?)"
)
_LABELED_NAME = re.compile(r"\b(?:property|venue|hotel)\s*[:–—-]\s*([^\n]{5,80})", re.IGNORECASE)
_LOCATION_LABEL = re.compile(r"\b(?:location|city|address|place)\s*[:–—-]\s*([^\n]+)", re.IGNORECASE)
_IN_AT_CITY = re.compile(r"\b(?:in|at)\s+([A-Z][a-z]+(?:,\s*[A-Z][a-z]+){0,2})")
_GENERIC_WORDS = re.compile(r"\b(?:contract|agreement|invoice|dear|proposal|quotation|terms)\b", re.I)
_FACILITY_ONLY = re.compile(rf"\b(?:{'|'.join(FACILITY_SUFFIXES)})$", re.IGNORECASE)
_SUFFIX_END = re.compile(rf"\b(?:{_SUFFIX_ALT})(?:\s*&\s*[A-Za-z]+)?$", re.IGNORECASE)
_BRAND = re.compile(rf"\b(?:{'|'.join(re.escape(b) for b in HOSPITALITY_BRANDS)})\b")


@dataclass
class VenueCandidate:
    """A candidate property name and the evidence behind it."""

    name: str
    position: int
    labeled: bool = False
    score: int = 0


def _clean(name: str) -> str:
    name = re.sub(r"\s*\n\s*", " ", name).strip()
    return name.strip(" ,.;:-|").strip()[:MAX_VENUE_LENGTH]


def _acceptable(name: str) -> bool:
    if len(name) < 5:
        return False
    return not any(marker in name for marker in ("/", "\\", "http", "@"))


def _collect_candidates(text: str, fields: dict[str, str]) -> list[VenueCandidate]:
    candidates: list[VenueCandidate] = []

    for key in _VENUE_KEYS:
        if key in fields:
            name = _clean(fields[key])
            position = text.find(fields[key])
            candidates.append(VenueCandidate(name, position if position >= 0 else 0, labeled=True))

    for pattern in (_FULL_NAME, _LABELED_NAME):
        for match in pattern.finditer(text):
            candidates.append(VenueCandidate(_clean(match.group(1)), match.start(1)))

    for match in _BRAND.finditer(text):
        line_start = text.rfind("\n", 0, match.start()) + 1
        line_end = text.find("\n", match.end())
        line = text[line_start : line_end if line_end >= 0 else len(text)]
        if len(line) <= _LENGTH_WINDOW[1]:
            candidates.append(VenueCandidate(_clean(line), line_start))

    offset = 0
    for line in text.split("\n")[:LEADING_LINES]:
        if line.strip() and (_SUFFIX_END.search(line.strip()) or _BRAND.search(line)):
            candidates.append(VenueCandidate(_clean(line), offset))
        offset += len(line) + 1

    return [c for c in candidates if _acceptable(c.name)]


def score_candidate(candidate: VenueCandidate) -> int:
    """Score a venue candidate with the additive hospitality heuristics."""
    name = candidate.name
    score = 0
    if _SUFFIX_END.search(name):
        score += SUFFIX_POINTS
    if _BRAND.search(name):
        score += BRAND_POINTS
    if _LENGTH_WINDOW[0] <= len(name) <= _LENGTH_WINDOW[1]:
        score += LENGTH_POINTS
    if candidate.position < _NEAR_START_CHARS:
        score += POSITION_POINTS
    if candidate.labeled:
        score += LABEL_POINTS
    if _GENERIC_WORDS.search(name):
        score -= GENERIC_PENALTY
    return score


def _is_facility(name: str) -> bool:
    return bool(_FACILITY_ONLY.search(name)) and not _SUFFIX_END.search(name)


def extract_venue(text: str, fields: dict[str, str] | None = None) -> str:
    """Pick the most plausible property name.

    Args:
        text: Normalized document text.
        fields: Labeled fields from :func:`extract_fields`.

    Returns:
        The venue name, or ``""`` when no candidate was found.
    """
    candidates = _collect_candidates(text, fields or {})
    if not candidates:
        logger.debug("No venue candidates found")
        return ""

    merged: dict[str, VenueCandidate] = {}
    for candidate in candidates:
        key = candidate.name.lower()
        existing = merged.get(key)
        if existing is None:
            merged[key] = candidate
        else:
            existing.labeled = existing.labeled or candidate.labeled
            existing.position = min(existing.position, candidate.position)

    pool = list(merged.values())
    properties = [c for c in pool if not _is_facility(c.name)]
    if properties:
        pool = properties

    for candidate in pool:
        candidate.score = score_candidate(candidate)
    best = max(pool, key=lambda c: (c.score, len(c.name)))
    logger.debug("Venue %r chosen (score=%d) from %d candidates", best.name, best.score, len(pool))
    return best.name


def _city_pattern() -> re.Pattern:
    cities = sorted(INDIAN_CITIES + INTERNATIONAL_CITIES, key=len, reverse=True)
    alternation = "|".join(re.escape(city) for city in cities)
    return re.compile(rf"\b(?:{alternation})\b(?:,[^\S\n]*[A-Z][A-Za-z]+(?:[^\S\n][A-Z][A-Za-z]+)?)?")


_KNOWN_CITY = _city_pattern()


def _trim_location(value: str) -> str:
    return value.strip().rstrip(".").strip()[:MAX_LOCATION_LENGTH]


def extract_location(text: str, fields: dict[str, str] | None = None) -> str:
    """Extract the venue's city or address.

    Args:
        text: Normalized document text.
        fields: Labeled fields from :func:`extract_fields`.

    Returns:
        The location, or ``""``.
    """
    fields = fields or {}

    def from_fields() -> str | None:
        for key in _LOCATION_KEYS:
            if fields.get(key):
                return _trim_location(fields[key])
        return None

    def from_label() -> str | None:
        match = _LOCATION_LABEL.search(text)
        return _trim_location(match.group(1)) if match else None

    def from_city_list() -> str | None:
        match = _KNOWN_CITY.search(text)
        return _trim_location(match.group(0)) if match else None

    def from_phrase() -> str | None:
        match = _IN_AT_CITY.search(text)
        return _trim_location(match.group(1)) if match else None

    return run_cascade("location", [from_fields, from_label, from_city_list, from_phrase]) or ""
