"""Tests for the keyword-density document validator."""

from hotel_parser.validation.document_validator import (
    MIN_KEYWORD_MATCHES,
    DocumentKind,
    DocumentValidator,
)


class TestContractValidation:
    """Tests for validating hotel contracts."""

    def setup_method(self) -> None:
        self.validator = DocumentValidator(DocumentKind.CONTRACT)

    def test_contract_text_is_valid(self) -> None:
        outcome = self.validator.validate(
            "Hotel Name: Grand Horizon Hotel. Room rate per night is INR 12000."
        )
        assert outcome.is_valid is True
        assert outcome.error is None
        assert "hotel" in outcome.matched_keywords
        assert "per night" in outcome.matched_keywords
        assert len(outcome.matched_keywords) >= MIN_KEYWORD_MATCHES
        assert 0 < outcome.confidence <= 1

    def test_short_text_is_unreadable(self) -> None:
        outcome = self.validator.validate("Hotel")
        assert outcome.is_valid is False
        assert outcome.confidence == 0.0
        assert outcome.matched_keywords == []
        assert "Could not extract readable text" in outcome.error

    def test_empty_text_is_unreadable(self) -> None:
        outcome = self.validator.validate("")
        assert outcome.is_valid is False
        assert outcome.error

    def test_prose_without_keywords(self) -> None:
        outcome = self.validator.validate(
            "The quick brown fox jumps over the lazy dog near the river bank."
        )
        assert outcome.is_valid is False
        assert outcome.matched_keywords == []
        assert "does not appear to be a hotel contract" in outcome.error

    def test_single_keyword_is_listed_in_error(self) -> None:
        outcome = self.validator.validate("The quick brown fox stayed near the river bank.")
        assert outcome.is_valid is False
        assert outcome.matched_keywords == ["stay"]
        assert "found: stay" in outcome.error


class TestInviteValidation:
    """Tests for validating event invitations."""

    def setup_method(self) -> None:
        self.validator = DocumentValidator(DocumentKind.INVITE)

    def test_wedding_invitation_is_valid(self) -> None:
        outcome = self.validator.validate(
            "Together with their families, Aarav and Meera request the pleasure "
            "of your presence at their wedding celebration."
        )
        assert outcome.is_valid is True
        assert "wedding" in outcome.matched_keywords

    def test_invoice_is_not_an_invitation(self) -> None:
        outcome = self.validator.validate("Invoice number 4411 payable in thirty days.")
        assert outcome.is_valid is False
        assert "does not appear to be an event invitation" in outcome.error

    def test_shorter_minimum_length(self) -> None:
        outcome = self.validator.validate("Gala party")
        assert outcome.is_valid is True
