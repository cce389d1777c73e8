"""Pydantic schemas for the parse results returned to callers.

Fields are snake_case in Python and serialize to camelCase with
``model_dump(by_alias=True)``.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_PRIMARY_COLOR = "#4F46E5"
DEFAULT_SECONDARY_COLOR = "#EEF2FF"
DEFAULT_ACCENT_COLOR = "#818CF8"

PLACEHOLDER_VENUE = "Unknown Venue"
PLACEHOLDER_LOCATION = "Unknown Location"
PLACEHOLDER_ROOM_TYPE = "Standard Room"


class ResultModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContactInfo(ResultModel):
    """A named person or desk with phone and e-mail."""

    name: str | None = None
    phone: str | None = None
    email: str | None = None


class RoomLine(ResultModel):
    """One room category in the contracted block."""

    room_type: str
    rate: float = Field(default=0.0, ge=0)
    quantity: int = Field(default=1, ge=1)
    floor: str | None = None
    wing: str | None = None
    hotel_name: str | None = None


class AddOnLine(ResultModel):
    """Guest-payable optional item such as a transfer or spa package."""

    name: str
    price: float = Field(default=0.0, ge=0)
    is_included: bool = False


class EventServiceLine(ResultModel):
    """Organizer-payable item such as a banquet hall, catering, or AV."""

    name: str
    price: float = Field(default=0.0, ge=0)
    quantity: int | None = None
    is_included: bool = False


class AttritionRule(ResultModel):
    """Share of the room block released back to the hotel by a date."""

    release_date: str = ""
    release_percent: float = Field(ge=0, le=100)
    description: str = ""


class ValidationResult(ResultModel):
    """Keyword-density validation outcome."""

    is_valid: bool
    confidence: float
    matched_keywords: list[str] = Field(default_factory=list)
    error: str | None = None


class ParsedContract(ResultModel):
    """Structured data extracted from a hotel contract."""

    venue: str
    location: str
    check_in: str
    check_out: str
    rooms: list[RoomLine]
    add_ons: list[AddOnLine] = Field(default_factory=list)
    event_services: list[EventServiceLine] = Field(default_factory=list)
    attrition_rules: list[AttritionRule] = Field(default_factory=list)
    event_name: str | None = None
    event_type: str | None = None
    client_name: str | None = None
    contract_no: str | None = None
    issue_date: str | None = None
    valid_until: str | None = None
    group_code: str | None = None
    gstin: str | None = None
    expected_guests: int | None = None
    nights: int | None = None
    total_amount: float | None = None
    currency: str | None = None
    tax_info: str | None = None
    payment_terms: str | None = None
    hotel_contact: ContactInfo | None = None
    agent_contact: ContactInfo | None = None
    signatories: list[ContactInfo] = Field(default_factory=list)
    early_check_in: str | None = None
    late_check_out: str | None = None
    confidence_score: int = 100
    warnings: list[str] = Field(default_factory=list)
    used_ocr: bool = False


class ParsedInvite(ResultModel):
    """Structured data extracted from an event invitation."""

    event_name: str
    event_type: str
    primary_color: str = DEFAULT_PRIMARY_COLOR
    secondary_color: str = DEFAULT_SECONDARY_COLOR
    accent_color: str = DEFAULT_ACCENT_COLOR
    description: str = ""
    venue: str | None = None
    location: str | None = None
    check_in: str | None = None
    check_out: str | None = None
    nights: int | None = None
    agent_contact: ContactInfo | None = None
    confidence_score: int = 100
    warnings: list[str] = Field(default_factory=list)
    used_ocr: bool = False


T = TypeVar("T", ParsedContract, ParsedInvite)


class ParseResult(ResultModel, Generic[T]):
    """The only object returned across the parser boundary."""

    success: bool
    data: T | None = None
    error: str | None = None
    validation: ValidationResult | None = None
