"""Tesseract OCR engine wrapper.

OCR failures (missing binary, timeouts, undecodable images) are logged and
reported as empty text so that acquisition always produces a string.
"""

import io
from dataclasses import dataclass

import numpy as np
import pytesseract
from PIL import Image

from hotel_parser.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class OCRResult:
    """Text recognised in one image."""

    text: str
    language: str
    confidence: float


class TesseractEngine:
    """Wrapper around Tesseract OCR for document text extraction.

    Args:
        tesseract_cmd: Path to the Tesseract executable.
            If ``None``, uses the system default.
        default_lang: Default OCR language code.
        psm: Tesseract page segmentation mode.
        timeout_s: Per-call timeout in seconds; 0 disables it.
    """

    def __init__(
        self,
        tesseract_cmd: str | None = None,
        default_lang: str = "eng",
        psm: int = 3,
        timeout_s: int = 30,
    ) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self.default_lang = default_lang
        self.psm = psm
        self.timeout_s = timeout_s

    def extract_text(self, image: np.ndarray, lang: str | None = None) -> OCRResult:
        """Extract text from an image array.

        Args:
            image: Input image as a numpy array.
            lang: OCR language code. Defaults to the engine default.

        Returns:
            OCRResult; ``text`` is empty when recognition failed.
        """
        lang = lang or self.default_lang
        config = f"--psm {self.psm}"
        try:
            data = pytesseract.image_to_data(
                Image.fromarray(image),
                lang=lang,
                config=config,
                timeout=self.timeout_s,
                output_type=pytesseract.Output.DICT,
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, RuntimeError,
                ValueError, TypeError) as exc:
            # pytesseract signals a timeout with a bare RuntimeError.
            logger.warning("OCR failed: %s", exc)
            return OCRResult(text="", language=lang, confidence=0.0)

        confidences = [
            float(conf)
            for conf, word in zip(data["conf"], data["text"])
            if float(conf) > 0 and word.strip()
        ]
        avg_conf = sum(confidences) / len(confidences) / 100.0 if confidences else 0.0

        logger.info(
            "OCR extracted %d words with average confidence %.2f",
            len(confidences),
            avg_conf,
        )
        return OCRResult(text=_layout_text(data), language=lang, confidence=avg_conf)

    def extract_text_from_bytes(self, payload: bytes, lang: str | None = None) -> OCRResult:
        """Decode an encoded image and run OCR on it.

        Args:
            payload: Encoded image bytes (JPEG, PNG, WebP).
            lang: OCR language code.

        Returns:
            OCRResult; ``text`` is empty when decoding or recognition failed.
        """
        try:
            with Image.open(io.BytesIO(payload)) as pil_image:
                image = np.array(pil_image.convert("RGB"))
        except (OSError, ValueError) as exc:
            logger.warning("Could not decode image for OCR: %s", exc)
            return OCRResult(text="", language=lang or self.default_lang, confidence=0.0)
        return self.extract_text(image, lang=lang)


def _layout_text(data: dict[str, list]) -> str:
    """Rebuild reading-order text from Tesseract's word table.

    Words on the same line are joined by spaces, lines by newlines, and
    blocks are separated by a blank line.
    """
    lines: list[str] = []
    words: list[str] = []
    current_line = current_block = None
    for i, raw_word in enumerate(data["text"]):
        word = raw_word.strip()
        if not word:
            continue
        block = data["block_num"][i]
        line = (block, data["par_num"][i], data["line_num"][i])
        if line != current_line:
            if words:
                lines.append(" ".join(words))
            if current_block is not None and block != current_block:
                lines.append("")
            current_line, current_block, words = line, block, []
        words.append(word)
    if words:
        lines.append(" ".join(words))
    return "\n".join(lines)
