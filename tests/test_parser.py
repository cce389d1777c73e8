"""End-to-end tests for contract and invitation parsing."""

import io
from datetime import date
from unittest.mock import MagicMock, patch

import pytest
from PIL import Image

from hotel_parser.acquisition.errors import AcquisitionError
from hotel_parser.acquisition.tesseract_engine import OCRResult
from hotel_parser.extraction.colors import DARK_FALLBACK_PALETTE, DEFAULT_PALETTE
from hotel_parser.parser import (
    INVITE_IMAGE_DESCRIPTION,
    INVITE_TEXT_DESCRIPTION,
    DocumentParser,
    parse_contract,
)
from hotel_parser.schemas import PLACEHOLDER_ROOM_TYPE

TODAY = date(2026, 1, 15)

INVITE_TEXT = (
    "You are cordially invited to the Kapoor Wedding in Udaipur, Rajasthan "
    "on 12 December 2026. Kindly RSVP."
)
UNRELATED_TEXT = "The quick brown fox jumps over the lazy dog near the river bank."


def _black_png() -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (64, 64), color=(0, 0, 0)).save(buffer, format="PNG")
    return buffer.getvalue()


class TestParseContract:
    """Tests for DocumentParser.parse_contract."""

    def setup_method(self) -> None:
        self.engine = MagicMock()
        self.handler = MagicMock()
        self.parser = DocumentParser(ocr_engine=self.engine, pdf_handler=self.handler)

    def test_clean_contract(self, clean_contract_text: str) -> None:
        self.handler.extract_text_layer.return_value = clean_contract_text
        result = self.parser.parse_contract(b"%PDF", "application/pdf", today=TODAY)

        assert result.success is True
        assert result.validation.is_valid is True
        data = result.data
        assert data.venue == "Grand Horizon Hotel"
        assert data.location == "Jaipur, Rajasthan"
        assert data.check_in == "2026-04-10"
        assert data.check_out == "2026-04-13"
        assert data.nights == 3
        assert len(data.rooms) == 1
        assert data.rooms[0].room_type == "Deluxe Room"
        assert data.rooms[0].quantity == 30
        assert data.rooms[0].rate == 12000
        assert data.event_name == "Sharma-Kapoor Wedding"
        assert data.event_type == "wedding"
        assert data.total_amount == 360000
        assert data.currency == "INR"
        assert [(r.release_date, r.release_percent) for r in data.attrition_rules] == [
            ("2026-03-11", 30)
        ]
        assert data.confidence_score == 100
        assert data.warnings == []
        assert data.used_ocr is False

    def test_serializes_with_camel_case_keys(self, clean_contract_text: str) -> None:
        self.handler.extract_text_layer.return_value = clean_contract_text
        result = self.parser.parse_contract(b"%PDF", "application/pdf", today=TODAY)
        payload = result.model_dump(by_alias=True)
        assert payload["data"]["checkIn"] == "2026-04-10"
        assert payload["data"]["attritionRules"][0]["releasePercent"] == 30
        assert payload["validation"]["isValid"] is True

    @pytest.mark.parametrize(
        "removed",
        [
            ["Hotel Name: Grand Horizon Hotel"],
            ["Check-in: 10 April 2026", "Check-out: 13 April 2026"],
            ["Deluxe Room 30 12000 360000"],
        ],
    )
    def test_removing_a_field_never_raises_confidence(
        self, clean_contract_text: str, removed: list[str]
    ) -> None:
        self.handler.extract_text_layer.return_value = clean_contract_text
        full = self.parser.parse_contract(b"%PDF", "application/pdf", today=TODAY)

        reduced_text = clean_contract_text
        for line in removed:
            reduced_text = reduced_text.replace(line, "")
        self.handler.extract_text_layer.return_value = reduced_text
        reduced = self.parser.parse_contract(b"%PDF", "application/pdf", today=TODAY)

        assert reduced.success is True
        assert len(reduced.data.rooms) >= 1
        assert reduced.data.confidence_score <= full.data.confidence_score

    def test_room_row_naming_its_meal_plan(self, clean_contract_text: str) -> None:
        self.handler.extract_text_layer.return_value = clean_contract_text.replace(
            "Deluxe Room 30 12000 360000", "Deluxe Room with Breakfast 30 12000 360000"
        )
        result = self.parser.parse_contract(b"%PDF", "application/pdf", today=TODAY)
        data = result.data
        assert [(r.room_type, r.quantity, r.rate) for r in data.rooms] == [
            ("Deluxe Room", 30, 12000)
        ]
        assert [(a.name, a.price, a.is_included) for a in data.add_ons] == [
            ("Breakfast", 0, True)
        ]

    def test_stay_length_comes_from_dates(self, clean_contract_text: str) -> None:
        self.handler.extract_text_layer.return_value = (
            clean_contract_text + "Total Room Nights: 90\n"
        )
        result = self.parser.parse_contract(b"%PDF", "application/pdf", today=TODAY)
        assert result.data.nights == 3

    def test_day_month_order_is_shared_by_both_dates(self, clean_contract_text: str) -> None:
        text = (
            clean_contract_text.replace("Jaipur, Rajasthan", "Dubai Marina, Dubai")
            .replace("Check-in: 10 April 2026", "Check-in: 10/04/2026")
            .replace("Check-out: 13 April 2026", "Check-out: 13/04/2026")
            .replace("INR 3,60,000", "AED 360,000")
        )
        self.handler.extract_text_layer.return_value = text
        result = self.parser.parse_contract(b"%PDF", "application/pdf", today=TODAY)
        assert (result.data.check_in, result.data.check_out) == ("2026-04-10", "2026-04-13")
        assert result.data.nights == 3

    def test_placeholder_room_when_none_found(self) -> None:
        self.handler.extract_text_layer.return_value = (
            "This hotel agreement confirms the group booking. "
            "Payment of the deposit is due on signing."
        )
        result = self.parser.parse_contract(b"%PDF", "application/pdf", today=TODAY)
        assert result.success is True
        rooms = result.data.rooms
        assert len(rooms) == 1
        assert (rooms[0].room_type, rooms[0].rate, rooms[0].quantity) == (
            PLACEHOLDER_ROOM_TYPE,
            0,
            1,
        )
        assert "No room types found; a placeholder room was added" in result.data.warnings
        assert result.data.confidence_score < 100

    def test_unsupported_media_type(self) -> None:
        result = self.parser.parse_contract(b"plain", "text/plain")
        assert result.success is False
        assert "Unsupported file type: text/plain" in result.error
        self.handler.extract_text_layer.assert_not_called()

    def test_unrelated_document_is_rejected(self) -> None:
        self.handler.extract_text_layer.return_value = UNRELATED_TEXT
        result = self.parser.parse_contract(b"%PDF", "application/pdf", today=TODAY)
        assert result.success is False
        assert result.data is None
        assert result.validation.is_valid is False
        assert "does not appear to be a hotel contract" in result.error

    def test_unreadable_image(self) -> None:
        self.engine.extract_text.return_value = OCRResult(text="", language="eng", confidence=0.0)
        result = self.parser.parse_contract(_black_png(), "image/png", today=TODAY)
        assert result.success is False
        assert result.error.startswith("Could not extract readable text")

    def test_acquisition_error(self) -> None:
        self.handler.extract_text_layer.side_effect = AcquisitionError("Failed to extract text")
        result = self.parser.parse_contract(b"%PDF", "application/pdf")
        assert result.success is False
        assert result.error == "Failed to extract text"

    def test_unexpected_error_is_reported(self) -> None:
        self.handler.extract_text_layer.side_effect = KeyError("boom")
        result = self.parser.parse_contract(b"%PDF", "application/pdf")
        assert result.success is False
        assert "unexpected error" in result.error

    def test_module_level_function_delegates(self) -> None:
        with patch("hotel_parser.parser.DocumentParser") as mock_parser:
            parse_contract(b"%PDF", "application/pdf", today=TODAY)
        mock_parser.return_value.parse_contract.assert_called_once_with(
            b"%PDF", "application/pdf", today=TODAY
        )


class TestParseInvite:
    """Tests for DocumentParser.parse_invite."""

    def setup_method(self) -> None:
        self.engine = MagicMock()
        self.handler = MagicMock()
        self.parser = DocumentParser(ocr_engine=self.engine, pdf_handler=self.handler)

    def test_pdf_invitation(self) -> None:
        self.handler.extract_text_layer.return_value = INVITE_TEXT
        result = self.parser.parse_invite(b"%PDF", "application/pdf", today=TODAY)
        assert result.success is True
        assert result.validation.is_valid is True
        data = result.data
        assert data.event_type == "wedding"
        assert data.event_name == "Kapoor Wedding"
        assert data.check_in == "2026-12-12"
        assert data.description == INVITE_TEXT_DESCRIPTION
        assert data.primary_color == DEFAULT_PALETTE.primary

    def test_image_without_text(self) -> None:
        self.engine.extract_text.return_value = OCRResult(text="", language="eng", confidence=0.0)
        result = self.parser.parse_invite(_black_png(), "image/png", today=TODAY)
        assert result.success is True
        assert result.validation is None
        data = result.data
        assert data.event_type == "event"
        assert data.event_name == ""
        assert data.description == INVITE_IMAGE_DESCRIPTION
        assert data.primary_color == DARK_FALLBACK_PALETTE.primary
        assert data.used_ocr is True
        assert data.confidence_score < 100

    def test_webp_is_accepted(self) -> None:
        self.engine.extract_text.return_value = OCRResult(text="", language="eng", confidence=0.0)
        result = self.parser.parse_invite(_black_png(), "image/webp", today=TODAY)
        assert result.success is True

    def test_unrelated_pdf_is_rejected(self) -> None:
        self.handler.extract_text_layer.return_value = UNRELATED_TEXT
        result = self.parser.parse_invite(b"%PDF", "application/pdf", today=TODAY)
        assert result.success is False
        assert "does not appear to be an event invitation" in result.error

    def test_unsupported_media_type(self) -> None:
        result = self.parser.parse_invite(b"GIF89a", "image/gif")
        assert result.success is False
        assert "Unsupported file type" in result.error
