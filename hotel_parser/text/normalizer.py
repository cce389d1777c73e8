"""Text normalization and OCR de-corruption.

Repairs whitespace, broken numbers, merged tokens, and letter-spaced
headings so that downstream regex extraction sees predictable text.
Passes repeat until the text stops changing, so normalizing a second
time is a no-op.
"""

import re

from hotel_parser.utils.logger import get_logger

logger = get_logger(__name__)

MAX_PASSES = 8

_LINE_BREAKS = re.compile(r"\r\n?|[\f\v]")
_HORIZONTAL_WS = re.compile(r"[^\S\n]+")
_EXCESS_BLANK_LINES = re.compile(r"\n{4,}")

# A run of digits and the glyphs OCR confuses with them.
_NUMERIC_CANDIDATE = re.compile(r"[\dOoIlS][\dOoIlS,.]*")
_GLYPH_DIGITS = str.maketrans("OoIl", "0011")
_SPACED_DIGITS = re.compile(r"(?<!\d)\d(?: \d){3,}(?!\d)")
_SPACED_DATE = re.compile(r"\b(\d{1,4}) ?([/.\-]) ?(\d{1,2}) ?\2 ?(\d{2,4})\b")

_LETTER_DIGIT_BOUNDARY = re.compile(r"(?<=[A-Za-z])(?=\d)|(?<=\d)(?=[A-Za-z])")
_PROTECTED_TOKEN = re.compile(r"^(?:\S*@\S+|(?:https?://|www\.)\S+|\W*#[0-9A-Fa-f]{6}\W*)$")
# Registration numbers such as GSTIN/PAN alternate letters and digits.
_IDENTIFIER_CODE = re.compile(r"^\W*([A-Z0-9]{8,})\W*$")
_SPACED_HEADING = re.compile(r"\b[A-Z](?: [A-Z]){2,}\b")


def normalize(raw: str) -> str:
    """Normalize raw extracted text.

    Args:
        raw: Text from the native layer or OCR.

    Returns:
        Cleaned text. Running it through ``normalize`` again is a no-op.
    """
    if not raw:
        return ""

    # A repair can expose another (a split token that now starts on a word
    # boundary), so passes repeat until the text is stable.
    text = raw
    for passes in range(1, MAX_PASSES + 1):
        cleaned = _normalize_pass(text)
        if cleaned == text:
            break
        text = cleaned
    else:
        logger.warning("Normalization still changing after %d passes", MAX_PASSES)

    logger.debug("Normalized %d chars to %d chars in %d passes", len(raw), len(text), passes)
    return text


def _normalize_pass(text: str) -> str:
    text = _normalize_whitespace(text)
    text = _repair_numbers(text)
    text = _separate_tokens(text)
    text = _collapse_spaced_headings(text)
    return _normalize_whitespace(text)


def _normalize_whitespace(text: str) -> str:
    text = _LINE_BREAKS.sub("\n", text)
    text = _HORIZONTAL_WS.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = _EXCESS_BLANK_LINES.sub("\n\n\n", text)
    return text.strip()


def _repair_numbers(text: str) -> str:
    text = _NUMERIC_CANDIDATE.sub(lambda m: _repair_numeric_token(m, text), text)
    text = _SPACED_DIGITS.sub(lambda m: m.group(0).replace(" ", ""), text)
    text = _SPACED_DATE.sub(r"\1\2\3\2\4", text)
    return text


def _repair_numeric_token(match: re.Match, text: str) -> str:
    token = match.group(0)
    digits = [i for i, ch in enumerate(token) if ch.isdigit()]
    if not digits:
        return token

    # Glyphs glued to a neighbouring word belong to that word.
    head = tail = ""
    start, end = match.start(), match.end()
    if start > 0 and text[start - 1].isalpha():
        head, token = token[: digits[0]], token[digits[0] :]
    if end < len(text) and text[end].isalpha():
        last = max(i for i, ch in enumerate(token) if ch.isdigit())
        token, tail = token[: last + 1], token[last + 1 :]

    # S is only a digit once its neighbours have been repaired.
    repaired = token.translate(_GLYPH_DIGITS)
    chars = [
        "5" if ch == "S" and _between_digits(repaired, i) else ch
        for i, ch in enumerate(repaired)
    ]
    return head + "".join(chars) + tail


def _between_digits(token: str, index: int) -> bool:
    before = token[:index].rstrip(",.")
    after = token[index + 1 :].lstrip(",.")
    return bool(before) and bool(after) and before[-1].isdigit() and after[0].isdigit()


def _separate_tokens(text: str) -> str:
    def split(match: re.Match) -> str:
        token = match.group(0)
        if _PROTECTED_TOKEN.match(token) or _is_identifier_code(token):
            return token
        return _LETTER_DIGIT_BOUNDARY.sub(" ", token)

    return re.sub(r"\S+", split, text)


def _is_identifier_code(token: str) -> bool:
    match = _IDENTIFIER_CODE.match(token)
    if not match:
        return False
    return len(_LETTER_DIGIT_BOUNDARY.findall(match.group(1))) >= 2


def _collapse_spaced_headings(text: str) -> str:
    return _SPACED_HEADING.sub(lambda m: m.group(0).replace(" ", ""), text)
