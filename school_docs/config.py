"""Configuration Constants

Layout constants, school defaults and environment configuration for
document generation.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from reportlab.lib.pagesizes import A4

logger = logging.getLogger(__name__)

# Page Geometry (points, origin bottom-left)
PAGE_WIDTH, PAGE_HEIGHT = A4  # 595.28 x 841.89
PAGE_MARGIN = 30.0
CONTENT_LEFT = PAGE_MARGIN
CONTENT_RIGHT = PAGE_WIDTH - PAGE_MARGIN
BOTTOM_LIMIT = 40.0  # Below this the page silently clips

# Header Block
HEADER_HEADING_Y = 795.0
HEADER_MOTTO_Y = 781.0
HEADER_SCHOOL_NAME_Y = 758.0
HEADER_CONTACT_Y = 744.0
HEADER_CONTACT_PITCH = 12.0

# Images (always square, no aspect preservation)
IMAGE_SIZE = 80.0
LOGO_X = 50.0
IMAGE_Y = 740.0
PHOTO_RIGHT_MARGIN = 40.0

# Font Sizes
FONT_SIZES = {
    "heading": 10,
    "motto": 9,
    "school_name": 12,
    "contact": 9,
    "title": 16,
    "section": 12,
    "body": 10,
    "table": 9,
    "small": 8,
}

# Colors (RGB 0-1)
COLOR_DEBT = (0.8, 0.0, 0.0)
COLOR_SETTLED = (0.0, 0.5, 0.0)
STATUS_COLORS = {
    "paid": "#10b981",
    "partial": "#f59e0b",
    "overdue": "#ef4444",
}

# Official Header Text
NATIONAL_HEADING = "REPUBLIQUE DE CÔTE D'IVOIRE"
NATIONAL_MOTTO = "Union – Discipline – Travail"

# Default School Identity (used when the lookup by school id yields nothing)
DEFAULT_SCHOOL = {
    "name": "Groupe Scolaire Gnamien-Assa",
    "address": "Bingerville (Cefal après Adjamé-Bingerville)",
    "phone": "+225 0707905958",
}

# Currency
CURRENCY_SUFFIX = "F CFA"

# Grades
MAX_GRADE = 20

# Asset Files
LOGO_BASENAME = "school-logo"
LOGO_EXTENSIONS = (".png", ".jpg")
DEFAULT_ASSETS_DIR = "public"

# Environment Variables
ENV_LOGO_PATH = "SCHOOL_LOGO_PATH"
ENV_LOGO_URL = "SCHOOL_LOGO_URL"
ENV_ASSETS_DIR = "SCHOOL_ASSETS_DIR"
ENV_ASSET_TIMEOUT = "SCHOOL_ASSET_TIMEOUT"
ENV_FONT_PATH = "SCHOOL_FONT_PATH"
ENV_BOLD_FONT_PATH = "SCHOOL_BOLD_FONT_PATH"


@dataclass(frozen=True)
class AssetSettings:
    """Where the school logo and an optional TrueType font pair may be found.

    Attributes:
        logo_path: Explicit filesystem override for the logo
        logo_url: Remote fallback for the logo
        assets_dir: Directory holding the conventional school-logo.png/.jpg
        timeout: Optional request timeout in seconds (None waits indefinitely)
        font_path: TrueType file for the regular font; Helvetica when unset
        bold_font_path: TrueType file for the bold font
    """

    logo_path: Optional[str] = None
    logo_url: Optional[str] = None
    assets_dir: str = DEFAULT_ASSETS_DIR
    timeout: Optional[float] = None
    font_path: Optional[str] = None
    bold_font_path: Optional[str] = None


def load_asset_settings() -> AssetSettings:
    """
    Read asset configuration from the environment.

    Called once per generation; nothing is cached between calls. A local
    .env file is loaded first without overriding variables already set.

    Returns:
        AssetSettings for the current call
    """
    load_dotenv(find_dotenv(usecwd=True), override=False)

    timeout_raw = os.getenv(ENV_ASSET_TIMEOUT)
    timeout = None
    if timeout_raw:
        try:
            timeout = float(timeout_raw)
        except ValueError:
            logger.warning(f"Ignoring {ENV_ASSET_TIMEOUT}={timeout_raw!r}: not a number of seconds")

    return AssetSettings(
        logo_path=os.getenv(ENV_LOGO_PATH) or None,
        logo_url=os.getenv(ENV_LOGO_URL) or None,
        assets_dir=os.getenv(ENV_ASSETS_DIR) or os.path.join(os.getcwd(), DEFAULT_ASSETS_DIR),
        timeout=timeout,
        font_path=os.getenv(ENV_FONT_PATH) or None,
        bold_font_path=os.getenv(ENV_BOLD_FONT_PATH) or None,
    )
