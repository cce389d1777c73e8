"""Keyword-density gate for incoming documents.

Confirms that extracted text plausibly belongs to the expected document
class (hotel contract or event invitation) before the extraction cascade
runs, and explains rejections with the keywords that were found.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from hotel_parser.utils.logger import get_logger

logger = get_logger(__name__)

MIN_KEYWORD_MATCHES = 2

CONTRACT_KEYWORDS: tuple[str, ...] = (
    # venue / property
    "hotel", "resort", "palace", "inn", "lodge", "retreat", "accommodation", "property",
    # booking terms
    "room", "rate", "tariff", "per night", "check-in", "check-out", "checkout", "checkin",
    "booking", "reservation", "occupancy", "block", "allocation", "inventory",
    # financial
    "price", "cost", "total", "payment", "deposit", "advance", "invoice", "gst", "tax",
    # room types
    "deluxe", "suite", "standard", "premium", "executive", "royal", "presidential",
    "superior", "villa", "cottage", "twin", "double", "single",
    # services
    "guest", "night", "stay", "arrival", "departure", "amenities", "breakfast",
    "transfer", "spa", "wifi", "laundry",
    # event
    "conference", "banquet", "ballroom", "venue", "event", "wedding", "mice", "group",
    # contract language
    "agreement", "contract", "terms", "conditions", "policy", "clause",
    # attrition
    "attrition", "cancellation", "penalty", "release", "deadline", "complimentary",
    "included", "inclusions",
)

INVITE_KEYWORDS: tuple[str, ...] = (
    "wedding", "ceremony", "celebration", "invite", "invitation", "cordially",
    "pleasure", "honour", "honor", "request", "presence", "reception", "rsvp",
    "marriage", "engagement", "anniversary", "conference", "summit", "seminar",
    "workshop", "launch", "gala", "dinner", "cocktail", "event", "offsite",
    "retreat", "meetup", "reunion", "party", "festival", "concert", "date",
    "venue", "time", "join", "attend", "save the date", "together", "family",
    "friends", "guest",
)

_UNREADABLE_CONTRACT = (
    "Could not extract readable text from this file. "
    "Try a clearer scan or a text-based PDF of the hotel contract."
)
_UNREADABLE_INVITE = "Could not extract readable text from this file."


class DocumentKind(StrEnum):
    """Document classes the validator knows how to recognise."""

    CONTRACT = "contract"
    INVITE = "invite"


@dataclass
class ValidationOutcome:
    """Result of the keyword-density check."""

    is_valid: bool
    confidence: float
    matched_keywords: list[str] = field(default_factory=list)
    error: str | None = None


class DocumentValidator:
    """Keyword-density classifier for contracts and invitations.

    Args:
        kind: Document class to validate against.
    """

    _MIN_LENGTH = {DocumentKind.CONTRACT: 20, DocumentKind.INVITE: 10}
    _KEYWORDS = {DocumentKind.CONTRACT: CONTRACT_KEYWORDS, DocumentKind.INVITE: INVITE_KEYWORDS}

    def __init__(self, kind: DocumentKind) -> None:
        self.kind = kind
        self.keywords = self._KEYWORDS[kind]

    def validate(self, text: str) -> ValidationOutcome:
        """Check that text resembles the expected document class.

        Args:
            text: Normalized document text.

        Returns:
            Validation outcome with matched keywords and a rejection
            message when the text does not qualify.
        """
        if not text or len(text.strip()) < self._MIN_LENGTH[self.kind]:
            logger.info("Rejected %s: text too short", self.kind)
            return ValidationOutcome(
                is_valid=False,
                confidence=0.0,
                matched_keywords=[],
                error=(
                    _UNREADABLE_CONTRACT
                    if self.kind is DocumentKind.CONTRACT
                    else _UNREADABLE_INVITE
                ),
            )

        lower = text.lower()
        matched = [kw for kw in self.keywords if kw in lower]
        confidence = len(matched) / len(self.keywords)

        if len(matched) < MIN_KEYWORD_MATCHES:
            logger.info(
                "Rejected %s: %d keyword(s) matched %s", self.kind, len(matched), matched
            )
            return ValidationOutcome(
                is_valid=False,
                confidence=confidence,
                matched_keywords=matched,
                error=self._rejection_message(matched),
            )

        logger.info(
            "Validated %s: %d keywords matched (confidence=%.2f)",
            self.kind,
            len(matched),
            confidence,
        )
        return ValidationOutcome(is_valid=True, confidence=confidence, matched_keywords=matched)

    def _rejection_message(self, matched: list[str]) -> str:
        if self.kind is DocumentKind.INVITE:
            return (
                "This document does not appear to be an event invitation. "
                "Please upload a wedding invitation, conference flyer, or event document."
            )
        if not matched:
            return (
                "This document does not appear to be a hotel contract. "
                "No hotel, booking, or accommodation-related terms were found."
            )
        return (
            "This document has very few hotel/booking-related terms "
            f"(found: {', '.join(matched)}). It does not appear to be a hotel contract."
        )
