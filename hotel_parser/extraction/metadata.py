"""Contract metadata: reference numbers, validity, party and policy fields."""

import re
from dataclasses import dataclass
from datetime import date

from hotel_parser.utils.logger import get_logger

from .cascade import run_cascade
from .dates import infer_day_first, parse_date

logger = get_logger(__name__)

MAX_POLICY_LENGTH = 200
MAX_NAME_LENGTH = 100

_CONTRACT_NO = re.compile(
    r"\b(?:contract|agreement|proposal|reference|ref|booking|confirmation)\s*"
    r"(?:no\.?|number|#|id|ref\.?)\s*[:\-]?\s*([A-Z0-9][A-Z0-9/\-]{2,30})",
    re.IGNORECASE,
)
_GROUP_CODE = re.compile(
    r"\b(?:group|block|booking|promo)\s+code\s*[:\-]?\s*([A-Z0-9][A-Z0-9\-]{2,20})", re.IGNORECASE
)
_GSTIN = re.compile(r"\b(\d{2}[A-Z]{5}\d{4}[A-Z][A-Z\d]Z[A-Z\d])\b")
_ISSUE_DATE = re.compile(
    r"\b(?:issue\s+date|date\s+of\s+issue|issued\s+on|contract\s+date|dated)\s*[:\-]?\s*([^\n]{6,40})",
    re.IGNORECASE,
)
_VALID_UNTIL = re.compile(
    r"\b(?:valid\s+(?:until|till|upto|up\s+to|through)|validity|offer\s+valid\s+till|expires?\s+on)"
    r"\s*[:\-]?\s*([^\n]{6,40})",
    re.IGNORECASE,
)
_GUESTS = re.compile(
    r"\b(?:expected\s+guests|number\s+of\s+guests|no\.?\s+of\s+guests|guest\s+count|pax|attendees)"
    r"\s*[:\-]?\s*(\d{1,5})\b"
    r"|\b(\d{1,5})\s*(?:guests|pax|attendees|delegates)\b",
    re.IGNORECASE,
)
_NIGHTS = re.compile(
    r"\b(?:no\.?\s+of\s+nights|number\s+of\s+nights|(?<!room\s)(?<!room-)nights)"
    r"\s*[:\-]?\s*(\d{1,2})\b"
    r"|\b(\d{1,2})\s*nights?\b",
    re.IGNORECASE,
)
_CLIENT = re.compile(
    r"\b(?:client|client\s+name|company|organi[sz]ation|organi[sz]er|bill\s+to|billed\s+to|"
    r"booked\s+by|group\s+name)\s*[:\-]\s*([^\n]{3,100})",
    re.IGNORECASE,
)
_EARLY_CHECK_IN = re.compile(r"[^\n]*\bearly\s+check[\s-]*in\b[^\n]*", re.IGNORECASE)
_LATE_CHECK_OUT = re.compile(r"[^\n]*\blate\s+check[\s-]*out\b[^\n]*", re.IGNORECASE)


@dataclass
class ContractMetadata:
    """Reference and policy fields of a contract."""

    contract_no: str | None = None
    issue_date: str | None = None
    valid_until: str | None = None
    group_code: str | None = None
    gstin: str | None = None
    expected_guests: int | None = None
    nights: int | None = None
    client_name: str | None = None
    early_check_in: str | None = None
    late_check_out: str | None = None


def _field(fields: dict[str, str], *keys: str) -> str | None:
    for key in keys:
        if fields.get(key):
            return fields[key]
    return None


def _regex(pattern: re.Pattern, text: str) -> str | None:
    match = pattern.search(text)
    if not match:
        return None
    return next((group for group in match.groups() if group), None)


def _int_or_none(value: str | None) -> int | None:
    if value is None:
        return None
    match = re.search(r"\d+", value)
    return int(match.group(0)) if match else None


def _date_or_none(value: str | None, today: date | None, day_first: bool) -> str | None:
    if not value:
        return None
    parsed = parse_date(value, today, day_first)
    return parsed.isoformat() if parsed else None


def _policy(pattern: re.Pattern, text: str) -> str | None:
    match = pattern.search(text)
    return match.group(0).strip()[:MAX_POLICY_LENGTH] if match else None


def extract_metadata(
    text: str, fields: dict[str, str] | None = None, today: date | None = None
) -> ContractMetadata:
    """Extract reference numbers, validity dates, party and policy fields.

    Args:
        text: Normalized document text.
        fields: Labeled fields from :func:`extract_fields`.
        today: Reference date for date parsing.

    Returns:
        The metadata; fields that could not be found are ``None``.
    """
    fields = fields or {}
    day_first = infer_day_first(text)

    contract_no = run_cascade(
        "contract_no",
        [lambda: _field(fields, "contract no", "contract number", "contract no.", "reference no"),
         lambda: _regex(_CONTRACT_NO, text)],
    )
    issue_raw = run_cascade(
        "issue_date",
        [lambda: _field(fields, "issue date", "date of issue", "contract date", "date"),
         lambda: _regex(_ISSUE_DATE, text)],
    )
    valid_raw = run_cascade(
        "valid_until",
        [lambda: _field(fields, "valid until", "valid till", "validity", "offer valid till"),
         lambda: _regex(_VALID_UNTIL, text)],
    )
    guests_raw = run_cascade(
        "expected_guests",
        [lambda: _field(fields, "expected guests", "number of guests", "no of guests", "pax"),
         lambda: _regex(_GUESTS, text)],
    )
    nights_raw = run_cascade(
        "nights",
        [lambda: _field(fields, "nights", "no of nights", "number of nights", "no. of nights"),
         lambda: _regex(_NIGHTS, text)],
    )
    client = run_cascade(
        "client_name",
        [lambda: _field(fields, "client name", "client", "organizer", "company", "group name"),
         lambda: _regex(_CLIENT, text)],
    )
    gstin_source = _field(fields, "gstin", "gst no", "gst number") or text

    metadata = ContractMetadata(
        contract_no=contract_no.strip() if contract_no else None,
        issue_date=_date_or_none(issue_raw, today, day_first),
        valid_until=_date_or_none(valid_raw, today, day_first),
        group_code=_field(fields, "group code", "block code") or _regex(_GROUP_CODE, text),
        gstin=_regex(_GSTIN, gstin_source),
        expected_guests=_int_or_none(guests_raw),
        nights=_int_or_none(nights_raw),
        client_name=client.strip()[:MAX_NAME_LENGTH] if client else None,
        early_check_in=_policy(_EARLY_CHECK_IN, text),
        late_check_out=_policy(_LATE_CHECK_OUT, text),
    )
    logger.debug("Metadata: %s", metadata)
    return metadata
