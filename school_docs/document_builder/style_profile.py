"""Style Profiles

A document kind is drawn by one builder under one of two profiles. The FULL
profile is the official rendering; MINIMAL is the degraded rendering used
when the full one fails. MINIMAL keeps the school identity, the subject, the
line items and the totals, and drops everything that could fail or that only
decorates: images, centering, the bold font, color and rules.
"""
from dataclasses import dataclass

from ..config import CONTENT_LEFT


@dataclass(frozen=True)
class StyleProfile:
    """Rendering switches applied by DocumentBuilder.

    Attributes:
        name: Profile name for logs
        include_images: Resolve and draw the logo and photo
        centered: Center header lines and titles
        bold: Use the bold font where the layout asks for it
        color: Apply status and balance colors
        rules: Draw separator lines, boxes and grid borders
        left_x: Left edge used for uncentered header lines
        top_y: Baseline of the first header line
    """

    name: str
    include_images: bool
    centered: bool
    bold: bool
    color: bool
    rules: bool
    left_x: float = CONTENT_LEFT
    top_y: float = 795.0


FULL = StyleProfile(
    name="full",
    include_images=True,
    centered=True,
    bold=True,
    color=True,
    rules=True,
)

# Text-only header block at x=200 from y=800
MINIMAL = StyleProfile(
    name="minimal",
    include_images=False,
    centered=False,
    bold=False,
    color=False,
    rules=False,
    left_x=200.0,
    top_y=800.0,
)
