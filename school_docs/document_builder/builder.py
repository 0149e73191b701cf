"""Document Builder Module

Base class for the per-kind document builders.

DocumentBuilder owns the blocks every official document shares (official
header, rules, titles, date row, key-value lines, tables, signature) and the
build template:

1. Open a LayoutEngine on a fresh A4 page
2. Draw the logo and student photo (FULL profile only)
3. Draw the header for the resolved school identity
4. Let the subclass draw its body, threading a Cursor
5. Warn when the body ran past the bottom margin, then return the PDF bytes

Subclasses set document_kind and title, and implement render_body. The style
profile switches images, centering, bold, color and rules on or off, so the
same builder produces both the full and the degraded rendering.
"""
import logging
from datetime import date
from typing import ClassVar, Iterable, Optional, Sequence

from ..asset_resolver import AssetResolver
from ..config import (
    BOTTOM_LIMIT,
    CONTENT_LEFT,
    CONTENT_RIGHT,
    FONT_SIZES,
    HEADER_CONTACT_PITCH,
    HEADER_CONTACT_Y,
    HEADER_HEADING_Y,
    HEADER_MOTTO_Y,
    HEADER_SCHOOL_NAME_Y,
    IMAGE_SIZE,
    IMAGE_Y,
    LOGO_X,
    NATIONAL_HEADING,
    NATIONAL_MOTTO,
    PAGE_WIDTH,
    PHOTO_RIGHT_MARGIN,
)
from ..exceptions import InvalidFieldError
from ..payloads import DocumentKind, DocumentPayload, SchoolIdentity
from ..utils import parse_date
from .content_renderer import Column, ContentRenderer
from .coordinate_utils import Cursor
from .font_manager import FontManager, FontVariant
from .layout_engine import ColorLike, LayoutEngine
from .style_profile import FULL, StyleProfile

logger = logging.getLogger(__name__)


class DocumentBuilder:
    """Build one official document as PDF bytes.

    A builder instance renders one document per build() call; the page
    state lives on the instance only for the duration of that call.

    Attributes:
        profile: FULL or MINIMAL rendering switches
        asset_resolver: Source of the logo and photo bytes
        font_manager: Fonts and text metrics
    """

    document_kind: ClassVar[DocumentKind]
    title: ClassVar[str] = ""

    def __init__(self, profile: StyleProfile = FULL, asset_resolver: Optional[AssetResolver] = None,
                 font_manager: Optional[FontManager] = None):
        self.profile = profile
        self.asset_resolver = asset_resolver or AssetResolver()
        self.font_manager = font_manager or FontManager()
        self.layout: Optional[LayoutEngine] = None
        self.renderer: Optional[ContentRenderer] = None

    # ------------------------------------------------------------------
    # Template
    # ------------------------------------------------------------------

    def build(self, payload: DocumentPayload) -> bytes:
        """
        Render the payload to a single-page PDF.

        Args:
            payload: Validated payload of this builder's document kind

        Returns:
            PDF bytes

        Raises:
            InvalidFieldError: If the payload is of another document kind
            RenderingError: If drawing fails (images, fonts, layout)
        """
        if payload.document_kind is not self.document_kind:
            raise InvalidFieldError(
                self.document_kind.value, "document_kind",
                f"builder cannot render {payload.document_kind.value}",
            )

        self.layout = LayoutEngine(self.font_manager, title=self.document_title(payload))
        self.renderer = ContentRenderer(self.layout)
        school = SchoolIdentity.resolve(getattr(payload, "school", None))

        if self.profile.include_images:
            self.draw_images(payload)

        cursor = self.draw_header(school)
        cursor = self.render_body(payload, school, cursor)
        self._check_overflow(payload, cursor)
        return self.layout.finish()

    def render_body(self, payload: DocumentPayload, school: SchoolIdentity, cursor: Cursor) -> Cursor:
        """Draw everything below the header; returns the final cursor."""
        raise NotImplementedError

    def document_title(self, payload: DocumentPayload) -> str:
        return f"{self.title} - {payload.subject_id}".strip(" -")

    def header_school_name(self, school: SchoolIdentity) -> str:
        return school.name

    def _check_overflow(self, payload: DocumentPayload, cursor: Cursor):
        if cursor.below(BOTTOM_LIMIT):
            logger.warning(
                f"{self.document_kind.value} for '{payload.subject_id}' runs past the bottom margin "
                f"(y={cursor.y:.1f}), content below y={BOTTOM_LIMIT} is clipped"
            )

    # ------------------------------------------------------------------
    # Profile helpers
    # ------------------------------------------------------------------

    def variant(self, bold: bool = False) -> FontVariant:
        return FontVariant.BOLD if bold and self.profile.bold else FontVariant.REGULAR

    def color(self, value: ColorLike) -> ColorLike:
        return value if self.profile.color else None

    def today(self, payload: DocumentPayload) -> date:
        return parse_date(getattr(payload, "generated_at", None)) or date.today()

    # ------------------------------------------------------------------
    # Images and header
    # ------------------------------------------------------------------

    def draw_images(self, payload: DocumentPayload):
        """
        Draw the school logo top-left and the student photo top-right.

        Missing assets are skipped. Assets that resolve but cannot be decoded
        raise ImageRenderingError, which sends the document to the fallback
        rendering.
        """
        logo = self.asset_resolver.resolve_logo()
        if logo is not None:
            self.renderer.draw_asset(logo, LOGO_X, IMAGE_Y, IMAGE_SIZE)

        photo_url = getattr(payload, "student_photo_url", None)
        if photo_url:
            photo = self.asset_resolver.resolve_photo(photo_url)
            if photo is not None:
                photo_x = PAGE_WIDTH - PHOTO_RIGHT_MARGIN - IMAGE_SIZE
                self.renderer.draw_asset(photo, photo_x, IMAGE_Y, IMAGE_SIZE)

    def contact_lines(self, school: SchoolIdentity):
        lines = []
        if school.address:
            lines.append(school.address)
        if school.phone:
            lines.append(f"Tél: {school.phone}")
        if school.email:
            lines.append(school.email)
        return lines

    def draw_header(self, school: SchoolIdentity) -> Cursor:
        """
        Draw the official header and return the cursor at its closing rule.

        FULL: national heading, motto, school name and contact lines, each
        centered. MINIMAL: title, school name and contact lines as plain
        left-aligned text.
        """
        if not self.profile.centered:
            return self._draw_plain_header(school)

        layout = self.layout
        layout.draw_centered_text(NATIONAL_HEADING, HEADER_HEADING_Y, self.variant(True), FONT_SIZES["heading"])
        layout.draw_centered_text(NATIONAL_MOTTO, HEADER_MOTTO_Y, self.variant(), FONT_SIZES["motto"])
        layout.draw_centered_text(
            self.header_school_name(school), HEADER_SCHOOL_NAME_Y, self.variant(True), FONT_SIZES["school_name"]
        )

        cursor = Cursor(HEADER_CONTACT_Y)
        for line in self.contact_lines(school):
            layout.draw_centered_text(line, cursor.y, self.variant(), FONT_SIZES["contact"])
            cursor = cursor.down(HEADER_CONTACT_PITCH)

        cursor = cursor.down(10)
        self.rule(cursor)
        return cursor

    def _draw_plain_header(self, school: SchoolIdentity) -> Cursor:
        x = self.profile.left_x
        cursor = Cursor(self.profile.top_y)
        self.layout.draw_text(self.title, x, cursor.y, FontVariant.REGULAR, FONT_SIZES["title"])
        cursor = cursor.down(24)
        self.layout.draw_text(self.header_school_name(school), x, cursor.y, FontVariant.REGULAR, 11)
        for line in self.contact_lines(school):
            cursor = cursor.down(14)
            self.layout.draw_text(line, x, cursor.y, FontVariant.REGULAR, 11)
        return cursor

    # ------------------------------------------------------------------
    # Shared blocks
    # ------------------------------------------------------------------

    def text(self, cursor: Cursor, value: str, x: float = CONTENT_LEFT, size: float = FONT_SIZES["body"],
             bold: bool = False, color: ColorLike = None) -> Cursor:
        self.layout.draw_text(value, x, cursor.y, self.variant(bold), size, self.color(color))
        return cursor

    def centered(self, cursor: Cursor, value: str, size: float = FONT_SIZES["body"], bold: bool = False,
                 x: float = CONTENT_LEFT) -> Cursor:
        """Centered text under FULL, left-aligned at x under MINIMAL."""
        if self.profile.centered:
            self.layout.draw_centered_text(value, cursor.y, self.variant(bold), size)
        else:
            self.layout.draw_text(value, x, cursor.y, self.variant(bold), size)
        return cursor

    def wrapped(self, cursor: Cursor, value: str, x: float = CONTENT_LEFT, max_width: Optional[float] = None,
                line_height: float = 14, size: float = FONT_SIZES["body"], bold: bool = False) -> Cursor:
        """Wrapped paragraph; returns the cursor one line below the last line."""
        if max_width is None:
            max_width = CONTENT_RIGHT - x
        return self.layout.draw_wrapped_text(value, x, cursor, max_width, line_height, self.variant(bold), size)

    def rule(self, cursor: Cursor, x1: float = CONTENT_LEFT, x2: float = CONTENT_RIGHT,
             thickness: float = 1) -> Cursor:
        if self.profile.rules:
            self.layout.draw_line(x1, cursor.y, x2, thickness)
        return cursor

    def box(self, x: float, y: float, width: float, height: float):
        if self.profile.rules:
            self.layout.draw_rectangle(x, y, width, height)

    def draw_title_bar(self, cursor: Cursor, title: Optional[str] = None) -> Cursor:
        """
        Centered title between two rules (FULL only).

        Under MINIMAL the title is already part of the plain header block.
        """
        if not self.profile.centered:
            return cursor
        cursor = cursor.down(24)
        self.layout.draw_centered_text(title or self.title, cursor.y, self.variant(True), FONT_SIZES["title"])
        cursor = cursor.down(12)
        return self.rule(cursor)

    def draw_date_row(self, cursor: Cursor, left: str, right: Optional[str] = None,
                      right_x: float = 350) -> Cursor:
        """Date line with an optional second field, followed by a rule."""
        cursor = cursor.down(20)
        self.text(cursor, left, bold=True)
        if right:
            self.text(cursor, right, x=right_x)
        cursor = cursor.down(12)
        return self.rule(cursor)

    def section_heading(self, cursor: Cursor, heading: str, size: float = FONT_SIZES["section"]) -> Cursor:
        cursor = cursor.down(22)
        return self.text(cursor, heading, size=size, bold=True)

    def lines(self, cursor: Cursor, values: Iterable[str], step: float = 14, first_step: float = 18,
              x: float = CONTENT_LEFT, size: float = FONT_SIZES["body"]) -> Cursor:
        """
        Draw one line per value, first_step below the cursor then step apart.

        Returns:
            Cursor at the last line drawn
        """
        gap = first_step
        for value in values:
            cursor = cursor.down(gap)
            self.text(cursor, value, x=x, size=size)
            gap = step
        return cursor

    def labeled_lines(self, cursor: Cursor, pairs: Iterable, label_x: float, value_x: float,
                      step: float = 15, size: float = FONT_SIZES["body"]) -> Cursor:
        """
        Bold labels with their values in a second column.

        Returns:
            Cursor one step below the last pair
        """
        for label, value in pairs:
            self.text(cursor, label, x=label_x, size=size, bold=True)
            self.text(cursor, value, x=value_x, size=size)
            cursor = cursor.down(step)
        return cursor

    def student_block(self, cursor: Cursor, payload: DocumentPayload, heading: str,
                      extra: Sequence[str] = ()) -> Cursor:
        """Section heading followed by name, matricule, class and extra lines."""
        cursor = self.section_heading(cursor, heading)
        person = payload.person
        values = [f"Nom: {person.full_name}", f"Matricule: {person.matricule or 'N/A'}"]
        values.append(f"Classe: {person.class_label or 'N/A'}")
        values.extend(extra)
        return self.lines(cursor, values)

    def table(self, cursor: Cursor, columns: Sequence[Column], header: Sequence[str],
              rows: Sequence[Sequence[str]], row_step: float = 14, size: float = FONT_SIZES["table"]) -> Cursor:
        """
        Fixed-column table: bold header, thin rule, one line per row.

        Returns:
            Cursor one row_step below the last row
        """
        self.renderer.draw_row(columns, header, cursor.y, self.variant(True), size)
        cursor = cursor.down(10)
        self.rule(cursor, thickness=0.5)
        cursor = cursor.down(14)
        for row in rows:
            self.renderer.draw_row(columns, row, cursor.y, self.variant(), size)
            cursor = cursor.down(row_step)
        return cursor

    def signature(self, cursor: Cursor, label: str = "Signature et cachet", x: float = CONTENT_LEFT,
                  width: float = 170) -> Cursor:
        self.text(cursor, label, x=x, size=FONT_SIZES["small"])
        cursor = cursor.down(8)
        return self.rule(cursor, x1=x, x2=x + width)
