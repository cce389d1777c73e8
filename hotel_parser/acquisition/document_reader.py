"""Text acquisition from PDF and raster payloads.

PDFs are read through their native text layer. When that layer is too
short after normalization, the document is treated as a scan: embedded
JPEG streams (or, failing that, rendered pages) are sent through OCR in a
small bounded thread pool. Raster images go straight to OCR after optional
preprocessing.
"""

import io
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import cv2
import numpy as np
from PIL import Image

from hotel_parser.preprocessing.pipeline import PreprocessingPipeline
from hotel_parser.text.normalizer import normalize
from hotel_parser.utils.config import AppConfig
from hotel_parser.utils.logger import get_logger

from .errors import UnsupportedMediaTypeError
from .pdf_handler import PDFHandler
from .tesseract_engine import TesseractEngine

logger = get_logger(__name__)


class MediaKind(StrEnum):
    """Payload families the acquirer knows how to read."""

    PDF = "pdf"
    IMAGE = "image"


_MEDIA_TYPES: dict[str, MediaKind] = {
    "application/pdf": MediaKind.PDF,
    "application/x-pdf": MediaKind.PDF,
    "image/png": MediaKind.IMAGE,
    "image/jpeg": MediaKind.IMAGE,
    "image/jpg": MediaKind.IMAGE,
    "image/pjpeg": MediaKind.IMAGE,
}
_WEBP = "image/webp"


def resolve_media_kind(media_type: str, allow_webp: bool = False) -> MediaKind:
    """Map a declared media type to a payload family.

    Args:
        media_type: MIME type supplied by the caller.
        allow_webp: Accept ``image/webp`` (invitations only).

    Returns:
        The payload family.

    Raises:
        UnsupportedMediaTypeError: If the type is not accepted.
    """
    key = (media_type or "").split(";")[0].strip().lower()
    if key in _MEDIA_TYPES:
        return _MEDIA_TYPES[key]
    if allow_webp and key == _WEBP:
        return MediaKind.IMAGE
    raise UnsupportedMediaTypeError(media_type)


@dataclass
class ExtractedText:
    """Character stream of a document and whether OCR produced it."""

    text: str
    used_ocr: bool


class TextAcquirer:
    """Obtains a character stream from a binary document.

    Args:
        config: Application configuration.
        ocr_engine: OCR engine; built from ``config.ocr`` when omitted.
        pdf_handler: PDF reader; built from ``config.ocr.pdf_dpi`` when omitted.
    """

    def __init__(
        self,
        config: AppConfig,
        ocr_engine: TesseractEngine | None = None,
        pdf_handler: PDFHandler | None = None,
    ) -> None:
        self.config = config
        self.ocr_engine = ocr_engine or TesseractEngine(
            tesseract_cmd=config.ocr.tesseract_cmd,
            default_lang=config.ocr.default_lang,
            psm=config.ocr.psm,
            timeout_s=config.ocr.timeout_s,
        )
        self.pdf_handler = pdf_handler or PDFHandler(dpi=config.ocr.pdf_dpi)
        self.preprocessing = PreprocessingPipeline(config.preprocessing)

    def acquire(self, payload: bytes, kind: MediaKind) -> ExtractedText:
        """Extract text from a payload.

        Args:
            payload: Raw document bytes.
            kind: Payload family from :func:`resolve_media_kind`.

        Returns:
            The extracted text; possibly empty when OCR found nothing.

        Raises:
            AcquisitionError: If a PDF cannot be opened at all.
        """
        if kind is MediaKind.PDF:
            return self._from_pdf(payload)
        return self._from_image(payload)

    def _from_pdf(self, payload: bytes) -> ExtractedText:
        settings = self.config.acquisition
        native = self.pdf_handler.extract_text_layer(payload)
        if len(normalize(native)) >= settings.min_text_length:
            return ExtractedText(text=native, used_ocr=False)

        logger.info("Text layer below %d chars, treating PDF as scanned", settings.min_text_length)
        jpegs = self.pdf_handler.extract_embedded_jpegs(
            payload, min_bytes=settings.min_image_bytes, limit=settings.max_ocr_images
        )
        texts = self._run_ocr(self._ocr_jpeg, jpegs)

        if not texts and settings.render_scanned_pages:
            pages = self.pdf_handler.render_pages(payload, max_pages=settings.max_rendered_pages)
            texts = self._run_ocr(self._ocr_array, pages)

        if not texts:
            logger.warning("OCR recognised no text in scanned PDF")
            return ExtractedText(text=native, used_ocr=False)
        return ExtractedText(text="\n\n".join(texts), used_ocr=True)

    def _from_image(self, payload: bytes) -> ExtractedText:
        try:
            with Image.open(io.BytesIO(payload)) as pil_image:
                image = np.array(pil_image.convert("RGB"))
        except (OSError, ValueError) as exc:
            logger.warning("Could not decode image for OCR: %s", exc)
            return ExtractedText(text="", used_ocr=True)

        texts = self._run_ocr(self._ocr_array, [image])
        return ExtractedText(text="\n\n".join(texts), used_ocr=True)

    def _ocr_jpeg(self, payload: bytes) -> str:
        return self.ocr_engine.extract_text_from_bytes(payload).text

    def _ocr_array(self, rgb: np.ndarray) -> str:
        prepared = self.preprocessing.process_or_original(cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))
        if len(prepared.shape) == 3:
            prepared = cv2.cvtColor(prepared, cv2.COLOR_BGR2RGB)
        return self.ocr_engine.extract_text(prepared).text

    def _run_ocr(self, recognise: Callable[[Any], str], items: list) -> list[str]:
        if not items:
            return []
        minimum = self.config.acquisition.min_ocr_text_length
        with ThreadPoolExecutor(max_workers=self.config.ocr.max_workers) as pool:
            results = list(pool.map(recognise, items))
        texts = [text.strip() for text in results if len(text.strip()) > minimum]
        logger.info("OCR produced usable text for %d of %d image(s)", len(texts), len(items))
        return texts
