"""Coordinate Utilities

This module provides pure utility functions for placing content on the page:

- Horizontal alignment (centering, right alignment) from measured widths
- Box anchoring: bottom edge of a box drawn down from its top edge
- Cursor: the explicit vertical flow position of a document

ReportLab (and PDF) places the origin at the bottom-left corner, so vertical
flow moves towards smaller y values. All functions are pure (no side effects)
and can be easily tested in isolation.
"""
from dataclasses import dataclass

from ..config import PAGE_WIDTH, BOTTOM_LIMIT
from ..exceptions import LayoutError


def center_x(width: float, page_width: float = PAGE_WIDTH) -> float:
    """
    X coordinate that centers a run of the given width on the page.

    Args:
        width: Measured width of the text or box in points
        page_width: Width of the page in points

    Returns:
        Left x such that x + width == page_width - x

    Examples:
        >>> center_x(100, 600)
        250.0
    """
    if width < 0:
        raise LayoutError(f"Width must not be negative, got {width}")
    return (page_width - width) / 2


def right_align_x(width: float, right_edge: float) -> float:
    """
    X coordinate that makes a run of the given width end at right_edge.

    Examples:
        >>> right_align_x(40, 565)
        525
    """
    if width < 0:
        raise LayoutError(f"Width must not be negative, got {width}")
    return right_edge - width


def box_bottom(top_y: float, height: float) -> float:
    """
    Bottom-left y of a box whose top edge sits at top_y.

    ReportLab rectangles and images are anchored at their bottom-left corner.
    """
    return top_y - height


@dataclass(frozen=True)
class Cursor:
    """Current baseline of the vertical flow.

    Builders thread a Cursor through every block instead of mutating a shared
    y coordinate; each block returns the cursor for the next one.

    Attributes:
        y: Baseline in points from the bottom of the page
    """

    y: float

    def down(self, step: float) -> "Cursor":
        """Cursor moved towards the bottom of the page by step points."""
        return Cursor(self.y - step)

    def below(self, limit: float = BOTTOM_LIMIT) -> bool:
        """True once the cursor has crossed the given bottom limit."""
        return self.y < limit
