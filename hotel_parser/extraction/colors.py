"""Theme colours for invitations, from text or from image pixels."""

import io
import re
from dataclasses import dataclass

import numpy as np
from PIL import Image

from hotel_parser.schemas import (
    DEFAULT_ACCENT_COLOR,
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
)
from hotel_parser.utils.logger import get_logger

from .lexicon import NAMED_COLORS

logger = get_logger(__name__)

# Perceived brightness (ITU-R BT.601 luma) bounds for a usable theme colour.
TOO_DARK_BRIGHTNESS = 40
TOO_LIGHT_BRIGHTNESS = 225
HISTOGRAM_LEVELS = 16
SAMPLE_SIZE = (128, 128)

_HEX_COLOR = re.compile(r"#[0-9A-Fa-f]{6}\b")


@dataclass(frozen=True)
class Palette:
    """A primary/secondary/accent colour triple as ``#RRGGBB`` strings."""

    primary: str
    secondary: str
    accent: str


DEFAULT_PALETTE = Palette(DEFAULT_PRIMARY_COLOR, DEFAULT_SECONDARY_COLOR, DEFAULT_ACCENT_COLOR)
DARK_FALLBACK_PALETTE = Palette("#1E293B", "#E2E8F0", "#D4AF37")
LIGHT_FALLBACK_PALETTE = Palette("#B76E79", "#FFF7ED", "#8E4585")


def rgb_to_hex(r: float, g: float, b: float) -> str:
    channels = (max(0, min(255, round(c))) for c in (r, g, b))
    return "#" + "".join(f"{c:02X}" for c in channels)


def brightness(r: float, g: float, b: float) -> float:
    return 0.299 * r + 0.587 * g + 0.114 * b


def palette_from_dominant(r: float, g: float, b: float) -> Palette:
    """Derive the colour triple from a dominant colour.

    Falls back to a fixed palette when the colour is too dark or too light
    to work as a UI theme.
    """
    level = brightness(r, g, b)
    if level < TOO_DARK_BRIGHTNESS:
        return DARK_FALLBACK_PALETTE
    if level > TOO_LIGHT_BRIGHTNESS:
        return LIGHT_FALLBACK_PALETTE
    return Palette(
        primary=rgb_to_hex(r, g, b),
        secondary=rgb_to_hex(min(255, r + 100), min(255, g + 100), min(255, b + 100)),
        accent=rgb_to_hex(
            min(255, abs(r - 40) + 80),
            min(255, abs(g - 20) + 60),
            min(255, b + 30),
        ),
    )


def dominant_color(pixels: np.ndarray) -> tuple[float, float, float]:
    """Mean colour of the most populated bin of a coarse RGB histogram.

    Args:
        pixels: ``(H, W, 3)`` uint8 RGB array.

    Returns:
        The dominant ``(r, g, b)``.
    """
    flat = pixels.reshape(-1, 3).astype(np.int64)
    step = 256 // HISTOGRAM_LEVELS
    bins = flat // step
    keys = bins[:, 0] * HISTOGRAM_LEVELS * HISTOGRAM_LEVELS + bins[:, 1] * HISTOGRAM_LEVELS + bins[:, 2]
    winner = np.bincount(keys).argmax()
    members = flat[keys == winner]
    r, g, b = members.mean(axis=0)
    return float(r), float(g), float(b)


def colors_from_image(payload: bytes) -> Palette:
    """Derive a theme palette from an image's dominant colour.

    Args:
        payload: Encoded image bytes (PNG, JPEG, WebP).

    Returns:
        The derived palette, or the default palette if the image cannot
        be decoded.
    """
    try:
        with Image.open(io.BytesIO(payload)) as image:
            sample = image.convert("RGB")
            sample.thumbnail(SAMPLE_SIZE)
            pixels = np.asarray(sample)
    except (OSError, ValueError) as e:
        logger.warning("Colour extraction failed: %s", e)
        return DEFAULT_PALETTE

    r, g, b = dominant_color(pixels)
    palette = palette_from_dominant(r, g, b)
    logger.debug("Dominant colour %s -> %s", rgb_to_hex(r, g, b), palette)
    return palette


def colors_from_text(text: str, base: Palette = DEFAULT_PALETTE) -> Palette:
    """Override a palette with colours named in the text.

    Explicit hex codes win; otherwise named colours are matched longest
    name first so that "rose gold" is not read as "gold".

    Args:
        text: Normalized document text.
        base: Palette providing any slot the text does not fill.

    Returns:
        The merged palette.
    """
    found = [code.upper() for code in _HEX_COLOR.findall(text)]
    if not found:
        lower = text.lower()
        for name in sorted(NAMED_COLORS, key=len, reverse=True):
            if len(found) == 3:
                break
            pattern = rf"\b{re.escape(name)}\b"
            if re.search(pattern, lower):
                found.append(NAMED_COLORS[name])
                # Consume the match so "rose gold" does not also count as "gold".
                lower = re.sub(pattern, " ", lower)

    slots = [base.primary, base.secondary, base.accent]
    for i, color in enumerate(found[:3]):
        slots[i] = color
    return Palette(*slots)
