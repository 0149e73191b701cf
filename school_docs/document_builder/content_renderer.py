"""Content Renderer Module

Handles rendering of non-text content (images, tables) for the document
builders.
"""
from dataclasses import dataclass
from io import BytesIO
from typing import Optional, Sequence

from PIL import Image as PILImage
from reportlab.lib.utils import ImageReader

from ..asset_resolver import AssetBytes
from ..exceptions import ImageRenderingError
from .coordinate_utils import Cursor
from .font_manager import FontVariant
from .layout_engine import LayoutEngine


@dataclass(frozen=True)
class Column:
    """A fixed table column.

    Attributes:
        x: Left edge of the column
        width: Column width (used for right alignment and grid cells)
        align: 'left' or 'right'
    """

    x: float
    width: float = 0.0
    align: str = "left"


class ContentRenderer:
    """Handles rendering of images and tables onto a LayoutEngine."""

    CELL_PADDING = 8
    CELL_TEXT_OFFSET = 6

    def __init__(self, layout: LayoutEngine):
        """
        Initialize content renderer.

        Args:
            layout: Engine of the page being built
        """
        self.layout = layout

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    @staticmethod
    def load_image(asset: AssetBytes) -> ImageReader:
        """
        Decode image bytes into something the canvas can embed.

        Pillow decodes the full image up front so corrupt data fails here,
        not halfway through writing the page.

        Raises:
            ImageRenderingError: If the bytes cannot be decoded
        """
        try:
            image = PILImage.open(BytesIO(asset.data))
            image.load()
        except Exception as e:
            raise ImageRenderingError(asset.kind.value, str(e))

        if image.mode not in ("RGB", "RGBA", "L"):
            image = image.convert("RGBA")
        return ImageReader(image)

    def draw_asset(self, asset: AssetBytes, x: float, y: float, size: float):
        """
        Draw an asset as a size x size square anchored at its bottom-left corner.

        Raises:
            ImageRenderingError: If the image cannot be decoded or embedded
        """
        image = self.load_image(asset)
        try:
            self.layout.draw_image(image, x, y, size, size)
        except Exception as e:
            raise ImageRenderingError(asset.kind.value, str(e))

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def draw_row(self, columns: Sequence[Column], values: Sequence[Optional[str]], y: float,
                 variant: FontVariant = FontVariant.REGULAR, size: float = 9):
        """Draw one line of a fixed-column table; None or empty cells are skipped."""
        for column, value in zip(columns, values):
            if not value:
                continue
            if column.align == "right" and column.width:
                self.layout.draw_right_aligned_text(value, column.x + column.width, y, variant, size)
            else:
                self.layout.draw_text(value, column.x, y, variant, size)

    def draw_grid_row(self, columns: Sequence[Column], values: Sequence[Optional[str]], bottom_y: float,
                      row_height: float, variant: FontVariant = FontVariant.REGULAR, size: float = 9,
                      bordered: bool = True):
        """
        Draw one row of bordered cells whose bottom edge sits at bottom_y.

        Text sits CELL_TEXT_OFFSET above the bottom edge, padded CELL_PADDING
        from the cell side it is aligned to.
        """
        text_y = bottom_y + self.CELL_TEXT_OFFSET
        for column, value in zip(columns, values):
            if bordered:
                self.layout.draw_rectangle(column.x, bottom_y, column.width, row_height)
            if not value:
                continue
            if column.align == "right":
                self.layout.draw_right_aligned_text(
                    value, column.x + column.width - self.CELL_PADDING, text_y, variant, size
                )
            else:
                self.layout.draw_text(value, column.x + self.CELL_PADDING, text_y, variant, size)

    def draw_grid_table(self, columns: Sequence[Column], header: Sequence[str],
                        rows: Sequence[Sequence[Optional[str]]], top: Cursor, row_height: float,
                        bold_rows: Sequence[int] = (), bordered: bool = True,
                        header_variant: FontVariant = FontVariant.BOLD) -> Cursor:
        """
        Draw a header row and body rows as a grid of cells.

        Args:
            columns: Column geometry
            header: Column titles
            rows: Cell texts per row
            top: Bottom edge of the header row
            row_height: Height of every row
            bold_rows: Indexes of body rows drawn in bold
            bordered: Draw cell borders
            header_variant: Font of the header row and of bold_rows

        Returns:
            Cursor at the bottom edge of the last row
        """
        self.draw_grid_row(columns, header, top.y, row_height, header_variant, bordered=bordered)
        cursor = top
        for index, row in enumerate(rows):
            cursor = cursor.down(row_height)
            variant = header_variant if index in bold_rows else FontVariant.REGULAR
            self.draw_grid_row(columns, row, cursor.y, row_height, variant, bordered=bordered)
        return cursor
