"""
Runtime configuration read from environment variables.

See .env.example for the full list of settings.
"""

import os
import logging
from typing import Optional


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _get_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _get_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


APP_NAME = os.getenv("APP_NAME", "Drug Insight Web")
DEBUG = _get_bool("DEBUG")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()

# Uploads and text extraction
MAX_FILE_SIZE_MB = _get_float("MAX_FILE_SIZE_MB", 10)
TESSERACT_CMD_PATH: Optional[str] = os.getenv("TESSERACT_CMD_PATH") or None
PDF_OCR_MAX_PAGES = _get_int("PDF_OCR_MAX_PAGES", 5)
PDF_OCR_DPI = _get_int("PDF_OCR_DPI", 300)

# Directory holding drugs.csv, interactions.csv and side_effects.csv overrides
REFERENCE_DATA_DIR: Optional[str] = os.getenv("REFERENCE_DATA_DIR") or None

# UI only: pause between progress milestones, in seconds
ANALYSIS_STEP_DELAY = _get_float("ANALYSIS_STEP_DELAY", 0.8)


def setup_logging(level: Optional[str] = None):
    """Configure root logging once for the app and scripts"""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
