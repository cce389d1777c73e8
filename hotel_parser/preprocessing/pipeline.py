"""Configurable image preprocessing pipeline for document OCR.

Runs grayscale conversion, intensity normalization, and sharpening with
quality metrics tracking. A failing step is never fatal: the caller gets
the original image back.
"""

import logging
from dataclasses import dataclass

import cv2
import numpy as np

from hotel_parser.utils.config import PreprocessingConfig
from hotel_parser.utils.logger import get_logger

from .filters import normalize_intensity, sharpen, to_grayscale

logger = get_logger(__name__)


@dataclass
class QualityMetrics:
    """Before/after image quality measurements."""

    sharpness_before: float
    sharpness_after: float
    contrast_before: float
    contrast_after: float


def calculate_sharpness(image: np.ndarray) -> float:
    """Calculate image sharpness using Laplacian variance.

    Args:
        image: Input image (BGR or grayscale).

    Returns:
        Sharpness score (higher means sharper).
    """
    return float(cv2.Laplacian(to_grayscale(image), cv2.CV_64F).var())


def calculate_contrast(image: np.ndarray) -> float:
    """Calculate image contrast as the standard deviation of pixel intensities.

    Args:
        image: Input image (BGR or grayscale).

    Returns:
        Contrast score (higher means more contrast).
    """
    return float(to_grayscale(image).std())


class PreprocessingPipeline:
    """Configurable document image preprocessing pipeline.

    Args:
        config: Preprocessing configuration controlling which steps to apply.
    """

    def __init__(self, config: PreprocessingConfig) -> None:
        self.config = config

    def process(
        self, image: np.ndarray, measure: bool = True
    ) -> tuple[np.ndarray, QualityMetrics | None]:
        """Run the enabled preprocessing steps on an image.

        Args:
            image: Input document image (BGR or grayscale).
            measure: Compute before/after quality metrics. Each measurement
                is a full Laplacian pass, so callers that only want the
                image can skip it.

        Returns:
            Tuple of (processed_image, quality_metrics); the metrics are
            ``None`` when ``measure`` is false.
        """
        result = image.copy()
        if self.config.enabled:
            if self.config.grayscale_enabled:
                result = to_grayscale(result)
            if self.config.normalize_enabled:
                result = normalize_intensity(result)
            if self.config.sharpen_enabled:
                result = sharpen(
                    result,
                    amount=self.config.sharpen_amount,
                    kernel_size=self.config.blur_kernel_size,
                )

        if not measure:
            return result, None

        metrics = QualityMetrics(
            sharpness_before=calculate_sharpness(image),
            sharpness_after=calculate_sharpness(result),
            contrast_before=calculate_contrast(image),
            contrast_after=calculate_contrast(result),
        )
        logger.debug(
            "Preprocessing complete: sharpness %.1f->%.1f, contrast %.1f->%.1f",
            metrics.sharpness_before,
            metrics.sharpness_after,
            metrics.contrast_before,
            metrics.contrast_after,
        )
        return result, metrics

    def process_or_original(self, image: np.ndarray) -> np.ndarray:
        """Preprocess an image, falling back to the input on any OpenCV error.

        Quality metrics are only measured when debug logging is on.

        Args:
            image: Input document image.

        Returns:
            The processed image, or ``image`` unchanged if preprocessing failed.
        """
        try:
            processed, _ = self.process(image, measure=logger.isEnabledFor(logging.DEBUG))
            return processed
        except (cv2.error, ValueError) as exc:
            logger.warning("Preprocessing failed, using raw image: %s", exc)
            return image
