"""Image filters applied to raster documents before OCR.

Grayscale conversion, min-max intensity normalization, and unsharp-mask
sharpening. Each filter accepts BGR or grayscale input.
"""

import cv2
import numpy as np

from hotel_parser.utils.logger import get_logger

logger = get_logger(__name__)


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Convert an image to grayscale if it has color channels.

    Args:
        image: Input image (BGR, BGRA or grayscale).

    Returns:
        Single-channel grayscale image.
    """
    if len(image.shape) == 3:
        code = cv2.COLOR_BGRA2GRAY if image.shape[2] == 4 else cv2.COLOR_BGR2GRAY
        return cv2.cvtColor(image, code)
    return image


def normalize_intensity(image: np.ndarray) -> np.ndarray:
    """Stretch pixel intensities to the full 0-255 range.

    Args:
        image: Input image.

    Returns:
        Normalized uint8 image of the same shape.
    """
    result = cv2.normalize(image, None, 0, 255, cv2.NORM_MINMAX)
    logger.debug("Applied min-max normalization")
    return result.astype(np.uint8)


def sharpen(image: np.ndarray, amount: float = 1.0, kernel_size: int = 5) -> np.ndarray:
    """Sharpen an image with an unsharp mask.

    Args:
        image: Input image.
        amount: Weight of the detail layer added back to the image.
        kernel_size: Gaussian blur kernel size; forced odd.

    Returns:
        Sharpened uint8 image.
    """
    if kernel_size % 2 == 0:
        kernel_size += 1
    blurred = cv2.GaussianBlur(image, (kernel_size, kernel_size), 0)
    result = cv2.addWeighted(image, 1.0 + amount, blurred, -amount, 0)
    logger.debug("Applied unsharp mask (amount=%.2f, kernel=%d)", amount, kernel_size)
    return result
