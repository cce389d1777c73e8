"""Contract and invitation parsing entry points.

Each parse runs acquire -> normalize -> validate -> fields/tables ->
domain extractors -> score. Every failure is reported as a
``ParseResult(success=False)``; nothing is raised to the caller.
"""

from datetime import date

from hotel_parser.acquisition.document_reader import (
    ExtractedText,
    MediaKind,
    TextAcquirer,
    resolve_media_kind,
)
from hotel_parser.acquisition.errors import AcquisitionError, UnsupportedMediaTypeError
from hotel_parser.acquisition.pdf_handler import PDFHandler
from hotel_parser.acquisition.tesseract_engine import TesseractEngine
from hotel_parser.extraction.attrition import extract_attrition_rules
from hotel_parser.extraction.colors import (
    DEFAULT_PALETTE,
    Palette,
    colors_from_image,
    colors_from_text,
)
from hotel_parser.extraction.contacts import extract_contacts, extract_signatories
from hotel_parser.extraction.dates import extract_date_range
from hotel_parser.extraction.events import detect_event_type, extract_event_name
from hotel_parser.extraction.fields import extract_fields
from hotel_parser.extraction.metadata import extract_metadata
from hotel_parser.extraction.money import (
    detect_currency,
    extract_payment_terms,
    extract_tax_info,
    extract_total_amount,
)
from hotel_parser.extraction.rooms import extract_rooms
from hotel_parser.extraction.services import extract_services
from hotel_parser.extraction.tables import parse_table_rows
from hotel_parser.extraction.venue import extract_location, extract_venue
from hotel_parser.schemas import (
    PLACEHOLDER_LOCATION,
    PLACEHOLDER_ROOM_TYPE,
    PLACEHOLDER_VENUE,
    ParsedContract,
    ParsedInvite,
    ParseResult,
    RoomLine,
    ValidationResult,
)
from hotel_parser.text.normalizer import normalize
from hotel_parser.utils.config import AppConfig
from hotel_parser.utils.logger import get_logger
from hotel_parser.validation.confidence import score_contract, score_invite
from hotel_parser.validation.document_validator import DocumentKind, DocumentValidator

logger = get_logger(__name__)

INVITE_TEXT_DESCRIPTION = "Event details extracted from uploaded document."
INVITE_IMAGE_DESCRIPTION = (
    "Colors extracted from uploaded image. Please enter event name and type manually."
)
_INTERNAL_ERROR = "An unexpected error occurred while parsing this document."


def _date_diff_nights(check_in: str, check_out: str) -> int | None:
    if not (check_in and check_out):
        return None
    return (date.fromisoformat(check_out) - date.fromisoformat(check_in)).days


class DocumentParser:
    """Parses hotel contracts and event invitations.

    Instances hold only configuration and stateless collaborators, so one
    parser may serve many documents, including concurrently.

    Args:
        config: Application configuration. Defaults are used when omitted.
        ocr_engine: OCR engine override.
        pdf_handler: PDF reader override.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        ocr_engine: TesseractEngine | None = None,
        pdf_handler: PDFHandler | None = None,
    ) -> None:
        self.config = config or AppConfig()
        self.acquirer = TextAcquirer(self.config, ocr_engine=ocr_engine, pdf_handler=pdf_handler)

    def parse_contract(
        self, payload: bytes, media_type: str, *, today: date | None = None
    ) -> ParseResult[ParsedContract]:
        """Parse a hotel contract.

        Args:
            payload: Raw document bytes.
            media_type: Declared MIME type (PDF, PNG or JPEG).
            today: Reference date for date inference; defaults to today.

        Returns:
            The parse result. ``success`` is False for unsupported input,
            unreadable files, and documents that are not hotel contracts.
        """
        try:
            kind = resolve_media_kind(media_type)
            extracted = self.acquirer.acquire(payload, kind)
            text = normalize(extracted.text)

            validation = DocumentValidator(DocumentKind.CONTRACT).validate(text)
            validation_result = ValidationResult(**vars(validation))
            if not validation.is_valid:
                return ParseResult[ParsedContract](
                    success=False, error=validation.error, validation=validation_result
                )

            data = self._extract_contract(text, extracted, today or date.today())
            return ParseResult[ParsedContract](
                success=True, data=data, validation=validation_result
            )
        except (UnsupportedMediaTypeError, AcquisitionError) as exc:
            logger.info("Contract rejected: %s", exc)
            return ParseResult[ParsedContract](success=False, error=str(exc))
        except Exception:
            logger.exception("Unexpected failure while parsing contract")
            return ParseResult[ParsedContract](success=False, error=_INTERNAL_ERROR)

    def parse_invite(
        self, payload: bytes, media_type: str, *, today: date | None = None
    ) -> ParseResult[ParsedInvite]:
        """Parse an event invitation.

        Image invitations are not gated on text validation: a palette is
        always derived from the pixels, and whatever text OCR found is used.

        Args:
            payload: Raw document bytes.
            media_type: Declared MIME type (PDF, PNG, JPEG or WebP).
            today: Reference date for date inference; defaults to today.

        Returns:
            The parse result.
        """
        try:
            kind = resolve_media_kind(media_type, allow_webp=True)
            extracted = self.acquirer.acquire(payload, kind)
            text = normalize(extracted.text)

            validation_result = None
            if kind is MediaKind.PDF:
                validation = DocumentValidator(DocumentKind.INVITE).validate(text)
                validation_result = ValidationResult(**vars(validation))
                if not validation.is_valid:
                    return ParseResult[ParsedInvite](
                        success=False, error=validation.error, validation=validation_result
                    )

            palette = colors_from_image(payload) if kind is MediaKind.IMAGE else DEFAULT_PALETTE
            data = self._extract_invite(text, extracted, palette, today or date.today())
            return ParseResult[ParsedInvite](success=True, data=data, validation=validation_result)
        except (UnsupportedMediaTypeError, AcquisitionError) as exc:
            logger.info("Invite rejected: %s", exc)
            return ParseResult[ParsedInvite](success=False, error=str(exc))
        except Exception:
            logger.exception("Unexpected failure while parsing invite")
            return ParseResult[ParsedInvite](success=False, error=_INTERNAL_ERROR)

    def _extract_contract(self, text: str, extracted: ExtractedText, today: date) -> ParsedContract:
        fields = extract_fields(text)
        rows = parse_table_rows(text)

        venue = extract_venue(text, fields)
        location = extract_location(text, fields)
        check_in, check_out = extract_date_range(text, fields, today)
        rooms = extract_rooms(text, rows)
        services = extract_services(text, rows)
        attrition_rules = extract_attrition_rules(text, check_in, today)
        event_type = detect_event_type(text)
        event_name = extract_event_name(text, event_type, fields)
        metadata = extract_metadata(text, fields, today)
        hotel_contact, agent_contact = extract_contacts(text)

        report = score_contract(
            venue, location, check_in, check_out, rooms, attrition_rules, event_name
        )
        if not rooms:
            rooms = [RoomLine(room_type=PLACEHOLDER_ROOM_TYPE, rate=0, quantity=1)]

        logger.info(
            "Parsed contract: venue=%r, %d room(s), %d rule(s), confidence=%d",
            venue,
            len(rooms),
            len(attrition_rules),
            report.score,
        )
        return ParsedContract(
            venue=venue or PLACEHOLDER_VENUE,
            location=location or PLACEHOLDER_LOCATION,
            check_in=check_in,
            check_out=check_out,
            rooms=rooms,
            add_ons=services.add_ons,
            event_services=services.event_services,
            attrition_rules=attrition_rules,
            event_name=event_name or None,
            event_type=event_type,
            client_name=metadata.client_name,
            contract_no=metadata.contract_no,
            issue_date=metadata.issue_date,
            valid_until=metadata.valid_until,
            group_code=metadata.group_code,
            gstin=metadata.gstin,
            expected_guests=metadata.expected_guests,
            nights=_date_diff_nights(check_in, check_out) or metadata.nights,
            total_amount=extract_total_amount(text, fields),
            currency=detect_currency(text),
            tax_info=extract_tax_info(text, fields),
            payment_terms=extract_payment_terms(text, fields),
            hotel_contact=hotel_contact,
            agent_contact=agent_contact,
            signatories=extract_signatories(text),
            early_check_in=metadata.early_check_in,
            late_check_out=metadata.late_check_out,
            confidence_score=report.score,
            warnings=report.warnings,
            used_ocr=extracted.used_ocr,
        )

    def _extract_invite(
        self, text: str, extracted: ExtractedText, palette: Palette, today: date
    ) -> ParsedInvite:
        if text:
            fields = extract_fields(text)
            event_type = detect_event_type(text)
            event_name = extract_event_name(text, event_type, fields)
            palette = colors_from_text(text, palette)
            venue = extract_venue(text, fields) or None
            location = extract_location(text, fields) or None
            check_in, check_out = extract_date_range(text, fields, today)
            _, agent_contact = extract_contacts(text)
            description = INVITE_TEXT_DESCRIPTION
        else:
            event_type, event_name = "event", ""
            venue = location = agent_contact = None
            check_in = check_out = ""
            description = INVITE_IMAGE_DESCRIPTION

        report = score_invite(event_name, check_in, check_out, location)
        return ParsedInvite(
            event_name=event_name,
            event_type=event_type,
            primary_color=palette.primary,
            secondary_color=palette.secondary,
            accent_color=palette.accent,
            description=description,
            venue=venue,
            location=location,
            check_in=check_in or None,
            check_out=check_out or None,
            nights=_date_diff_nights(check_in, check_out),
            agent_contact=agent_contact,
            confidence_score=report.score,
            warnings=report.warnings,
            used_ocr=extracted.used_ocr,
        )


def parse_contract(
    payload: bytes, media_type: str, *, today: date | None = None
) -> ParseResult[ParsedContract]:
    """Parse a hotel contract with the default configuration."""
    return DocumentParser().parse_contract(payload, media_type, today=today)


def parse_invite(
    payload: bytes, media_type: str, *, today: date | None = None
) -> ParseResult[ParsedInvite]:
    """Parse an event invitation with the default configuration."""
    return DocumentParser().parse_invite(payload, media_type, today=today)
