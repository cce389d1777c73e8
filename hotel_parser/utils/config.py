"""Configuration management for the hotel document parser.

Loads and validates YAML configuration with sensible defaults
for text acquisition, OCR, and image preprocessing settings.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class PreprocessingConfig(BaseModel):
    """Configuration for raster image preprocessing before OCR."""

    enabled: bool = True
    grayscale_enabled: bool = True
    normalize_enabled: bool = True
    sharpen_enabled: bool = True
    sharpen_amount: float = 1.0
    blur_kernel_size: int = 5


class OCRConfig(BaseModel):
    """Configuration for the Tesseract OCR engine."""

    tesseract_cmd: str | None = None
    default_lang: str = "eng"
    psm: int = 3
    pdf_dpi: int = 200
    timeout_s: int = 30
    max_workers: int = 2


class AcquisitionConfig(BaseModel):
    """Configuration for native-text and scanned-document acquisition."""

    min_text_length: int = 50
    min_image_bytes: int = 10_240
    max_ocr_images: int = 10
    min_ocr_text_length: int = 10
    render_scanned_pages: bool = True
    max_rendered_pages: int = 10


class AppConfig(BaseModel):
    """Top-level application configuration."""

    acquisition: AcquisitionConfig = Field(default_factory=AcquisitionConfig)
    ocr: OCRConfig = Field(default_factory=OCRConfig)
    preprocessing: PreprocessingConfig = Field(default_factory=PreprocessingConfig)
    log_level: str = "INFO"


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml.

    Returns:
        Validated application configuration.
    """
    if path is None:
        path = Path("configs/config.yaml")

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        return AppConfig(**raw)

    logger.info("No config file found at %s, using defaults", path)
    return AppConfig()
