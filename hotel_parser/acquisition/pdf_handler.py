"""PDF access: native text layer, embedded JPEG streams, and page rendering."""

import io

import numpy as np
import pdfplumber
from pdf2image import convert_from_bytes

from hotel_parser.utils.logger import get_logger

from .errors import AcquisitionError

logger = get_logger(__name__)

JPEG_SOI = b"\xff\xd8\xff"
JPEG_EOI = b"\xff\xd9"


class PDFHandler:
    """Reads text and images out of PDF payloads.

    Args:
        dpi: Resolution for rendering pages of scanned PDFs.
    """

    def __init__(self, dpi: int = 200) -> None:
        self.dpi = dpi

    def extract_text_layer(self, payload: bytes) -> str:
        """Extract the native text layer of every page.

        Malformed files are retried once with pdfplumber's repair pass.

        Args:
            payload: Raw PDF bytes.

        Returns:
            Page texts joined with newlines (possibly empty for scans).

        Raises:
            AcquisitionError: If the PDF cannot be opened even after repair.
        """
        try:
            return self._read_pages(payload, repair=False)
        except Exception as exc:
            logger.warning("PDF text extraction failed (%s), retrying with repair", exc)

        try:
            return self._read_pages(payload, repair=True)
        except Exception as exc:
            raise AcquisitionError(
                "Failed to extract text from this PDF. The file may be corrupted, "
                "password-protected, or contain only scanned images."
            ) from exc

    def _read_pages(self, payload: bytes, repair: bool) -> str:
        with pdfplumber.open(io.BytesIO(payload), repair=repair) as pdf:
            texts = [page.extract_text() or "" for page in pdf.pages]
        logger.info("Read text layer of %d page(s): %d chars", len(texts), sum(map(len, texts)))
        return "\n".join(texts)

    def extract_embedded_jpegs(
        self, payload: bytes, min_bytes: int = 10_240, limit: int = 10
    ) -> list[bytes]:
        """Find JPEG streams embedded in the PDF by their start/end markers.

        Args:
            payload: Raw PDF bytes.
            min_bytes: Smaller streams (icons, logos) are skipped.
            limit: Maximum number of images returned.

        Returns:
            Encoded JPEG byte strings in file order.
        """
        images: list[bytes] = []
        position = 0
        while len(images) < limit:
            start = payload.find(JPEG_SOI, position)
            if start < 0:
                break
            end = payload.find(JPEG_EOI, start + len(JPEG_SOI))
            if end < 0:
                break
            end += len(JPEG_EOI)
            if end - start > min_bytes:
                images.append(payload[start:end])
            position = end

        logger.info("Found %d embedded JPEG stream(s) over %d bytes", len(images), min_bytes)
        return images

    def render_pages(self, payload: bytes, max_pages: int = 10) -> list[np.ndarray]:
        """Render the first pages of a PDF to RGB arrays.

        Args:
            payload: Raw PDF bytes.
            max_pages: Number of pages to render at most.

        Returns:
            Page images; empty when rendering is unavailable or fails.
        """
        try:
            pil_images = convert_from_bytes(
                payload, dpi=self.dpi, first_page=1, last_page=max_pages
            )
        except Exception as exc:
            logger.warning("PDF page rendering failed: %s", exc)
            return []

        images = [np.array(img.convert("RGB")) for img in pil_images]
        for img in pil_images:
            img.close()
        logger.info("Rendered %d page(s) at %d DPI", len(images), self.dpi)
        return images
