"""Font Manager Module

Handles font selection, optional TrueType registration and text measurement.
"""
import logging
import os
from enum import Enum
from typing import Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from ..config import ENV_FONT_PATH, AssetSettings
from ..exceptions import FontError

logger = logging.getLogger(__name__)


class FontVariant(str, Enum):
    REGULAR = "regular"
    BOLD = "bold"


class FontManager:
    """Provides the regular and bold fonts used by every document.

    The standard Helvetica pair covers French text (WinAnsi encoding includes
    accented Latin letters, the en dash and the bullet) but not Cyrillic or
    CJK scripts. A TrueType pair can be registered instead, either from
    explicit paths or from SCHOOL_FONT_PATH / SCHOOL_BOLD_FONT_PATH.

    Attributes:
        font_name: Name of the regular font (e.g., 'Helvetica' or 'SchoolSans')
        font_name_bold: Name of the bold font (e.g., 'Helvetica-Bold' or 'SchoolSans-Bold')
    """

    REGULAR_TTF_NAME = 'SchoolSans'
    BOLD_TTF_NAME = 'SchoolSans-Bold'
    STANDARD_ENCODING = 'cp1252'  # WinAnsi, the encoding of the built-in Type 1 fonts

    def __init__(self, font_path: Optional[str] = None, bold_font_path: Optional[str] = None):
        """
        Initialize FontManager.

        Args:
            font_path: Optional TrueType file for the regular variant
            bold_font_path: Optional TrueType file for the bold variant
        """
        self.font_name = 'Helvetica'  # Default
        self.font_name_bold = 'Helvetica-Bold'  # Bold default
        if font_path:
            self._setup_fonts(font_path, bold_font_path)

    @classmethod
    def from_settings(cls, settings: AssetSettings) -> "FontManager":
        """FontManager for the font paths of the given settings (Helvetica when unset)."""
        return cls(settings.font_path, settings.bold_font_path)

    @property
    def uses_standard_fonts(self) -> bool:
        return self.font_name == 'Helvetica'

    def _setup_fonts(self, font_path: str, bold_font_path: Optional[str]):
        """
        Register the supplied TrueType fonts.

        Falls back to Helvetica if the regular font cannot be registered,
        and to the regular font for bold if only the bold one fails.
        """
        if not self._register(self.REGULAR_TTF_NAME, font_path):
            logger.warning(f"Using Helvetica, could not register font from {font_path}")
            return
        self.font_name = self.REGULAR_TTF_NAME

        if bold_font_path and self._register(self.BOLD_TTF_NAME, bold_font_path):
            self.font_name_bold = self.BOLD_TTF_NAME
        else:
            logger.warning("Bold font not available, using regular font for bold text")
            self.font_name_bold = self.font_name

    @staticmethod
    def _register(name: str, path: str) -> bool:
        logger.debug(f"Checking font path: {path}")
        if not os.path.exists(path):
            return False
        try:
            pdfmetrics.registerFont(TTFont(name, path))
        except Exception as e:
            logger.debug(f"Failed to register font {path}: {e}")
            return False
        logger.debug(f"Registered font {name} from {path}")
        return True

    def get_font_name(self, variant: FontVariant = FontVariant.REGULAR) -> str:
        """
        Get the registered font name.

        Args:
            variant: FontVariant.BOLD for the bold font, otherwise regular

        Returns:
            Font name string suitable for use with ReportLab
        """
        return self.font_name_bold if variant is FontVariant.BOLD else self.font_name

    def check_coverage(self, text: str) -> bool:
        """
        Check that the current fonts have glyphs for every character of text.

        Only the standard fonts are checked; characters outside WinAnsi
        (Cyrillic, CJK) are drawn as missing glyphs, which is logged.

        Returns:
            False if part of the text cannot be drawn
        """
        if not self.uses_standard_fonts:
            return True
        try:
            text.encode(self.STANDARD_ENCODING)
        except UnicodeEncodeError:
            logger.warning(
                f"Helvetica has no glyphs for part of {text!r}, set {ENV_FONT_PATH} to a TrueType font covering it"
            )
            return False
        return True

    def measure(self, text: str, variant: FontVariant, size: float) -> float:
        """
        Width of text in points at the given size.

        Raises:
            FontError: If the font is unknown to ReportLab
        """
        font_name = self.get_font_name(variant)
        try:
            return pdfmetrics.stringWidth(text, font_name, size)
        except KeyError as e:
            raise FontError(f"Font '{font_name}' is not registered: {e}")
