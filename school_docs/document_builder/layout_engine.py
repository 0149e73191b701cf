"""Layout Engine Module

Deterministic single-page composition over a ReportLab canvas.

The engine owns one in-memory A4 canvas per document. Builders position
everything explicitly: text is measured with the font metrics, centered or
right-aligned from the measured width, and the vertical flow is carried by a
Cursor. Nothing paginates; content drawn below the bottom margin is clipped
by the page.
"""
from io import BytesIO
from typing import Optional, Tuple, Union

from reportlab.lib.colors import Color, HexColor
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas as pdfcanvas

from ..config import PAGE_WIDTH, PAGE_HEIGHT
from .coordinate_utils import Cursor, center_x, right_align_x
from .font_manager import FontManager, FontVariant
from .text_wrapper import wrap_text

ColorLike = Union[str, Tuple[float, float, float], Color, None]


class LayoutEngine:
    """Drawing primitives for one PDF page.

    Attributes:
        font_manager: Supplies font names and text metrics
        page_width: Page width in points
        page_height: Page height in points
    """

    def __init__(self, font_manager: Optional[FontManager] = None,
                 page_size: Tuple[float, float] = (PAGE_WIDTH, PAGE_HEIGHT),
                 title: Optional[str] = None):
        self.font_manager = font_manager or FontManager()
        self.page_width, self.page_height = page_size
        self._buffer = BytesIO()
        self._canvas = pdfcanvas.Canvas(self._buffer, pagesize=page_size)
        if title:
            self._canvas.setTitle(title)
        self._finished = False

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def measure_text_width(self, text: str, variant: FontVariant = FontVariant.REGULAR, size: float = 10) -> float:
        return self.font_manager.measure(text, variant, size)

    def draw_text(self, text: str, x: float, y: float,
                  variant: FontVariant = FontVariant.REGULAR, size: float = 10,
                  color: ColorLike = None):
        """Draw a single line of text with its baseline at (x, y)."""
        self.font_manager.check_coverage(text)
        self._canvas.setFont(self.font_manager.get_font_name(variant), size)
        self._set_fill(color)
        self._canvas.drawString(x, y, text)
        if color is not None:
            self._canvas.setFillColorRGB(0, 0, 0)

    def draw_centered_text(self, text: str, y: float,
                           variant: FontVariant = FontVariant.REGULAR, size: float = 10,
                           color: ColorLike = None) -> float:
        """
        Draw text horizontally centered on the page.

        Returns:
            The x coordinate used
        """
        x = center_x(self.measure_text_width(text, variant, size), self.page_width)
        self.draw_text(text, x, y, variant, size, color)
        return x

    def draw_right_aligned_text(self, text: str, right_edge: float, y: float,
                                variant: FontVariant = FontVariant.REGULAR, size: float = 10,
                                color: ColorLike = None) -> float:
        x = right_align_x(self.measure_text_width(text, variant, size), right_edge)
        self.draw_text(text, x, y, variant, size, color)
        return x

    def draw_wrapped_text(self, text: str, x: float, cursor: Cursor, max_width: float,
                          line_height: float, variant: FontVariant = FontVariant.REGULAR,
                          size: float = 10, centered: bool = False) -> Cursor:
        """
        Draw text wrapped to max_width, one line per line_height.

        Args:
            text: Text to draw
            x: Left edge of every line (ignored when centered)
            cursor: Baseline of the first line
            max_width: Available width in points
            line_height: Distance between baselines
            variant: Font variant
            size: Font size
            centered: Center each line on the page

        Returns:
            Cursor positioned one line_height below the last line drawn
        """
        lines = wrap_text(text, max_width, lambda s: self.measure_text_width(s, variant, size))
        for line in lines:
            if centered:
                self.draw_centered_text(line, cursor.y, variant, size)
            else:
                self.draw_text(line, x, cursor.y, variant, size)
            cursor = cursor.down(line_height)
        return cursor

    # ------------------------------------------------------------------
    # Shapes and images
    # ------------------------------------------------------------------

    def draw_line(self, x1: float, y: float, x2: float, thickness: float = 1):
        self._canvas.setLineWidth(thickness)
        self._canvas.line(x1, y, x2, y)

    def draw_rectangle(self, x: float, y: float, width: float, height: float,
                       border_only: bool = True, thickness: float = 1, fill_color: ColorLike = None):
        """Draw a rectangle anchored at its bottom-left corner."""
        self._canvas.setLineWidth(thickness)
        if border_only:
            self._canvas.rect(x, y, width, height, stroke=1, fill=0)
            return
        self._set_fill(fill_color)
        self._canvas.rect(x, y, width, height, stroke=1, fill=1)
        self._canvas.setFillColorRGB(0, 0, 0)

    def draw_image(self, image: ImageReader, x: float, y: float, width: float, height: float):
        """Draw an image stretched to exactly width x height (no aspect preservation)."""
        self._canvas.drawImage(image, x, y, width=width, height=height, mask='auto')

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def finish(self) -> bytes:
        """Close the page and return the PDF bytes."""
        if not self._finished:
            self._canvas.showPage()
            self._canvas.save()
            self._finished = True
        return self._buffer.getvalue()

    def _set_fill(self, color: ColorLike):
        if color is None:
            return
        if isinstance(color, str):
            self._canvas.setFillColor(HexColor(color))
        elif isinstance(color, Color):
            self._canvas.setFillColor(color)
        else:
            self._canvas.setFillColorRGB(*color)
