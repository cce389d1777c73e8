"""Shared test fixtures for the hotel document parser test suite."""

from datetime import date
from pathlib import Path

import numpy as np
import pytest

TODAY = date(2026, 1, 15)

CLEAN_CONTRACT = """GROUP ACCOMMODATION AGREEMENT
Hotel Name: Grand Horizon Hotel
Location: Jaipur, Rajasthan
Event Name: Sharma-Kapoor Wedding
Check-in: 10 April 2026
Check-out: 13 April 2026

Room Type Rooms Rate Total
Deluxe Room 30 12000 360000

Grand Total: INR 3,60,000
Payment Terms: 50% advance at signing, balance 15 days before arrival.

Attrition Policy
30 days prior to arrival, 30% release permitted without penalty.
"""


@pytest.fixture
def today() -> date:
    """Fixed reference date so that date inference is deterministic."""
    return TODAY


@pytest.fixture
def clean_contract_text() -> str:
    """A small, well-formed contract in native-text form."""
    return CLEAN_CONTRACT


@pytest.fixture
def sample_image() -> np.ndarray:
    """Create a simple synthetic grayscale test image."""
    image = np.zeros((200, 300), dtype=np.uint8)
    image[50:150, 50:250] = 255
    return image


@pytest.fixture
def sample_color_image() -> np.ndarray:
    """Create a simple synthetic BGR test image."""
    image = np.zeros((200, 300, 3), dtype=np.uint8)
    image[50:150, 50:250] = (255, 255, 255)
    return image


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def config_dir(project_root: Path) -> Path:
    """Return the configs directory path."""
    return project_root / "configs"
