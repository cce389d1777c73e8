"""Hotel contract and event invitation parser.

An offline pipeline combining a PDF text layer, Tesseract OCR, and OpenCV
preprocessing with rule-based extraction to turn hotel contracts and event
invitations into structured, validated records.
"""

from hotel_parser.parser import DocumentParser, parse_contract, parse_invite
from hotel_parser.schemas import (
    AddOnLine,
    AttritionRule,
    ContactInfo,
    EventServiceLine,
    ParsedContract,
    ParsedInvite,
    ParseResult,
    RoomLine,
    ValidationResult,
)

__all__ = [
    "AddOnLine",
    "AttritionRule",
    "ContactInfo",
    "DocumentParser",
    "EventServiceLine",
    "ParseResult",
    "ParsedContract",
    "ParsedInvite",
    "RoomLine",
    "ValidationResult",
    "parse_contract",
    "parse_invite",
]
