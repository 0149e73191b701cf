"""Bulletin Builder

Term report: grades table, general average and the teacher's appreciation.
Grades, percentages and the average arrive precomputed on the payload.
"""
from ..config import CONTENT_RIGHT, FONT_SIZES
from ..payloads import BulletinPayload, DocumentKind, SchoolIdentity
from ..utils import format_date_fr
from .builder import DocumentBuilder
from .content_renderer import Column
from .coordinate_utils import Cursor

GRADE_COLUMNS = (Column(40), Column(300), Column(420), Column(480))
GRADE_HEADER = ("Matière", "Note/Max", "Pct", "Appréciation")


def format_grade(value: float) -> str:
    """
    Print a grade without a trailing .0.

    Examples:
        >>> format_grade(15.0)
        '15'
        >>> format_grade(12.5)
        '12.5'
    """
    return f"{value:g}"


class BulletinBuilder(DocumentBuilder):
    document_kind = DocumentKind.BULLETIN
    title = "BULLETIN DE SCOLARITÉ"

    def render_body(self, payload: BulletinPayload, school: SchoolIdentity, cursor: Cursor) -> Cursor:
        cursor = self.draw_title_bar(cursor)
        cursor = cursor.down(18)
        self.centered(cursor, f"Année Académique {payload.academic_year}")

        cursor = self.student_block(cursor, payload, "Informations Élève")

        cursor = self.section_heading(cursor, "Résultats", size=11).down(18)
        rows = [
            (
                line.subject,
                f"{format_grade(line.grade)}/{line.max_grade}",
                f"{line.percentage}%",
                line.appreciation or "-",
            )
            for line in payload.grades
        ]
        cursor = self.table(cursor, GRADE_COLUMNS, GRADE_HEADER, rows, row_step=16)
        cursor = self.rule(cursor.down(2), x1=40, x2=CONTENT_RIGHT - 10)

        cursor = cursor.down(18)
        self.layout.draw_right_aligned_text(
            f"Moyenne Générale: {payload.average:.2f}/20 ({payload.average_percentage}%)",
            CONTENT_RIGHT - 10, cursor.y, self.variant(True), FONT_SIZES["body"],
        )

        if payload.teacher_appreciation:
            cursor = self.rule(cursor.down(16), x1=40, x2=CONTENT_RIGHT - 10)
            cursor = cursor.down(16)
            self.text(cursor, "Appréciation de l'Enseignant", x=40, bold=True)
            cursor = self.wrapped(cursor.down(14), payload.teacher_appreciation, x=40,
                                  max_width=CONTENT_RIGHT - 50, line_height=12, size=FONT_SIZES["table"])
        else:
            cursor = cursor.down(14)

        cursor = self.rule(cursor.down(10), x1=40, x2=CONTENT_RIGHT - 10)
        cursor = cursor.down(12)
        self.layout.draw_right_aligned_text(
            f"Généré le: {format_date_fr(self.today(payload))}",
            CONTENT_RIGHT - 10, cursor.y, self.variant(), FONT_SIZES["small"],
        )
        return cursor
