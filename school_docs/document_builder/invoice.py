"""Invoice Builder

Tuition invoice with its three-state payment status. The status is derived
by the caller (see calculations.derive_payment_status); the builder only maps
it to a label and a color.
"""
from ..config import CONTENT_RIGHT, FONT_SIZES, STATUS_COLORS
from ..payloads import DocumentKind, InvoicePayload, SchoolIdentity
from ..utils import format_date_fr, format_xof
from .builder import DocumentBuilder
from .content_renderer import Column
from .coordinate_utils import Cursor

STATUS_LABELS = {
    "paid": "FACTURE PAYÉE",
    "partial": "PAIEMENT PARTIEL",
    "overdue": "FACTURE IMPAYÉE",
}

ITEM_COLUMNS = (Column(40), Column(350), Column(450))
ITEM_HEADER = ("Description", "Montant", "Statut")


class InvoiceBuilder(DocumentBuilder):
    document_kind = DocumentKind.INVOICE
    title = "FACTURE - FRAIS DE SCOLARITÉ"

    LABEL_X = 350
    VALUE_X = 450

    def document_title(self, payload: InvoicePayload) -> str:
        return f"{self.title} - {payload.invoice_number}"

    def render_body(self, payload: InvoicePayload, school: SchoolIdentity, cursor: Cursor) -> Cursor:
        cursor = self.draw_title_bar(cursor)
        issue_date = format_date_fr(payload.issue_date) or format_date_fr(self.today(payload))
        cursor = self.lines(cursor, [
            f"Facture N°: {payload.invoice_number}",
            f"Date: {issue_date}",
            f"Échéance: {format_date_fr(payload.due_date) or 'N/A'}",
        ], first_step=20)

        cursor = self.student_block(cursor, payload, "Informations Élève")

        cursor = self.section_heading(cursor, "Détails", size=11).down(18)
        rows = [(item.description, format_xof(item.amount), item.status or "-") for item in payload.items]
        cursor = self.table(cursor, ITEM_COLUMNS, ITEM_HEADER, rows, row_step=16)
        cursor = self.rule(cursor.down(2), x1=40, x2=CONTENT_RIGHT - 10)

        status_color = STATUS_COLORS[payload.payment_status]
        totals = [
            ("Montant Total:", format_xof(payload.total_amount), None),
            ("Montant Payé:", format_xof(payload.amount_paid), None),
            ("Montant Dû:", format_xof(payload.amount_due), status_color),
        ]
        for label, value, color in totals:
            cursor = cursor.down(16)
            self.text(cursor, label, x=self.LABEL_X, size=FONT_SIZES["body"], bold=True, color=color)
            self.text(cursor, value, x=self.VALUE_X, size=FONT_SIZES["body"], color=color)

        cursor = self.rule(cursor.down(24), x1=40, x2=CONTENT_RIGHT - 10)
        cursor = cursor.down(16)
        self.layout.draw_right_aligned_text(
            f"Statut: {STATUS_LABELS[payload.payment_status]}", CONTENT_RIGHT - 10, cursor.y,
            self.variant(True), FONT_SIZES["body"], self.color(status_color),
        )

        cursor = cursor.down(24)
        self.layout.draw_right_aligned_text(
            f"Généré le: {format_date_fr(self.today(payload))}", CONTENT_RIGHT - 10, cursor.y,
            self.variant(), FONT_SIZES["small"],
        )
        return cursor
