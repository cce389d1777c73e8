"""Contacts and signatories.

E-mail addresses and phone numbers are harvested per text block (blank
line separated) and each block is classified as hotel-side or agent-side
by its wording.
"""

import re

from hotel_parser.schemas import ContactInfo
from hotel_parser.utils.logger import get_logger

from .lexicon import HOSPITALITY_SUFFIXES

logger = get_logger(__name__)

MAX_SIGNATORIES = 4
SIGNATURE_WINDOW = 1500

_EMAIL = re.compile(r"\b[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}\b")
_PHONE = re.compile(
    r"(?P<label>\b(?:phone|tel|telephone|mobile|mob|ph|cell|contact)\b\.?\s*(?:no\.?)?\s*[:\-]?\s*)?"
    r"(?P<number>\+?\(?\d[\d \-()]{7,16}\d)"
)
_INDIAN_MOBILE = re.compile(r"^(?:\+?91)?[6-9]\d{9}$")
_NAME_LABEL = re.compile(
    r"\b(?<!hotel )(?<!venue )(?<!event )(?<!property )(?<!client )"
    r"(?:name|contact\s+person|attn|attention|sales\s+manager|coordinator)\s*[:\-]\s*"
    r"((?:(?:mr|mrs|ms|dr)\.?[^\S\n]+)?[A-Z][A-Za-z.'\-]+(?:[^\S\n]+[A-Z][A-Za-z.'\-]+){0,3})",
    re.IGNORECASE,
)
_PERSON_LINE = re.compile(r"^(?:(?:Mr|Mrs|Ms|Dr)\.?\s+)?[A-Z][a-z]+(?:\s+[A-Z][a-z.]*){1,3}$")

_HOTEL_BLOCK = re.compile(
    r"\b(?:hotel|resort|property|palace|reservations?|front\s+office|sales|general\s+manager"
    r"|revenue|banquets?|on\s+behalf\s+of\s+the\s+hotel)\b",
    re.IGNORECASE,
)
_AGENT_BLOCK = re.compile(
    r"\b(?:agent|agency|travels?|tours?|planner|planning|organi[sz]er|client|company"
    r"|coordinator|dmc|events?\s+(?:pvt|llp|ltd)|booked\s+by)\b",
    re.IGNORECASE,
)
_SIGNATURE_START = re.compile(
    r"\b(?:signatures?|signed\s+by|authori[sz]ed\s+signatory|for\s+and\s+on\s+behalf\s+of"
    r"|accepted\s+(?:and\s+agreed\s+)?by|agreed\s+by)\b",
    re.IGNORECASE,
)
_NOT_A_NAME = re.compile(
    rf"\b(?:{'|'.join(HOSPITALITY_SUFFIXES)}|signature|signed|date|designation|behalf|for"
    r"|stamp|seal|accepted|agreed|authori[sz]ed|signatory|terms|conditions|contract|page)\b",
    re.IGNORECASE,
)


def find_emails(text: str) -> list[str]:
    return list(dict.fromkeys(_EMAIL.findall(text)))


def find_phones(text: str) -> list[str]:
    """Phone numbers that are labeled, international, or Indian mobiles."""
    phones = []
    for match in _PHONE.finditer(text):
        number = re.sub(r"\s+", " ", match.group("number")).strip()
        digits = re.sub(r"\D", "", number)
        if not 10 <= len(digits) <= 13:
            continue
        if match.group("label") or number.startswith("+") or _INDIAN_MOBILE.match(digits):
            if number not in phones:
                phones.append(number)
    return phones


def _person_name(block: str) -> str | None:
    match = _NAME_LABEL.search(block)
    if match:
        return match.group(1).strip()
    for line in block.split("\n"):
        line = line.strip()
        if _PERSON_LINE.match(line) and not _NOT_A_NAME.search(line):
            return line
    return None


def _contact_from_block(block: str) -> ContactInfo | None:
    emails = find_emails(block)
    phones = find_phones(block)
    if not emails and not phones:
        return None
    return ContactInfo(
        name=_person_name(block),
        email=emails[0] if emails else None,
        phone=phones[0] if phones else None,
    )


def extract_contacts(text: str) -> tuple[ContactInfo | None, ContactInfo | None]:
    """Find the hotel-side and agent-side contacts.

    Args:
        text: Normalized document text.

    Returns:
        ``(hotel_contact, agent_contact)``; either may be ``None``.
    """
    hotel: ContactInfo | None = None
    agent: ContactInfo | None = None
    unclassified: list[ContactInfo] = []

    for block in re.split(r"\n\s*\n", text):
        contact = _contact_from_block(block)
        if contact is None:
            continue
        is_agent = bool(_AGENT_BLOCK.search(block))
        is_hotel = bool(_HOTEL_BLOCK.search(block))
        if is_agent and not is_hotel and agent is None:
            agent = contact
        elif is_hotel and not is_agent and hotel is None:
            hotel = contact
        else:
            unclassified.append(contact)

    # A lone unlabeled contact block on a hotel contract is the hotel's.
    if hotel is None and unclassified:
        hotel = unclassified.pop(0)
    if agent is None and unclassified:
        agent = unclassified.pop(0)

    logger.debug("Contacts: hotel=%s agent=%s", hotel is not None, agent is not None)
    return hotel, agent


def extract_signatories(text: str) -> list[ContactInfo]:
    """Names (with any contact details) listed in the signature section."""
    start = _SIGNATURE_START.search(text)
    if not start:
        return []
    section = text[start.start() : start.start() + SIGNATURE_WINDOW]

    signatories: list[ContactInfo] = []
    names: list[str] = []
    for match in _NAME_LABEL.finditer(section):
        names.append(match.group(1).strip())
    if not names:
        for line in section.split("\n"):
            line = line.strip()
            if _PERSON_LINE.match(line) and not _NOT_A_NAME.search(line):
                names.append(line)

    for name in dict.fromkeys(names):
        index = section.find(name)
        nearby = section[index : index + 200]
        emails = find_emails(nearby)
        phones = find_phones(nearby)
        signatories.append(
            ContactInfo(
                name=name,
                email=emails[0] if emails else None,
                phone=phones[0] if phones else None,
            )
        )
        if len(signatories) == MAX_SIGNATORIES:
            break
    return signatories
