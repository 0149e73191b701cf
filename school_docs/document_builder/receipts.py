"""Receipt Builders

Builders for the four receipt kinds: enrollment, registration fee, tuition
payment and invoice payment.
"""
from ..calculations import build_tuition_rows
from ..config import COLOR_DEBT, COLOR_SETTLED, CONTENT_RIGHT, FONT_SIZES, PAGE_WIDTH
from ..payloads import (
    DocumentKind,
    EnrollmentReceiptPayload,
    InvoicePaymentReceiptPayload,
    RegistrationReceiptPayload,
    TuitionPaymentReceiptPayload,
)
from ..utils import format_date_fr, format_xof
from .builder import DocumentBuilder
from .content_renderer import Column
from .coordinate_utils import Cursor, box_bottom

TOTALS_X = 350

PAYMENT_COLUMNS = (Column(30), Column(220), Column(330), Column(465))
PAYMENT_HEADER = ("Type de paiement", "Méthode", "Référence", "Montant")


def balance_color(balance: int):
    """Red while something is still owed, green once settled."""
    return COLOR_DEBT if balance > 0 else COLOR_SETTLED


def _amount(value):
    return format_xof(value) if value is not None else ""


class EnrollmentReceiptBuilder(DocumentBuilder):
    document_kind = DocumentKind.ENROLLMENT_RECEIPT
    title = "REÇU D'INSCRIPTION"

    def render_body(self, payload: EnrollmentReceiptPayload, school, cursor: Cursor) -> Cursor:
        cursor = self.draw_title_bar(cursor)
        cursor = self.draw_date_row(
            cursor,
            f"Date: {format_date_fr(self.today(payload))}",
            f"Année académique: {payload.academic_year}" if payload.academic_year else None,
        )

        cursor = self.student_block(
            cursor, payload, "INFORMATIONS ÉLÈVE",
            extra=[f"Parent / Tuteur: {payload.parent_name or 'N/A'}"],
        )
        cursor = self.rule(cursor.down(12))

        cursor = self.section_heading(cursor, "PAIEMENTS EFFECTUÉS").down(18)
        rows = [(p.type, p.method, p.reference, format_xof(p.amount)) for p in payload.payments]
        cursor = self.table(cursor, PAYMENT_COLUMNS, PAYMENT_HEADER, rows)
        cursor = self.rule(cursor.down(6), thickness=0.5)

        cursor = cursor.down(16)
        self.text(cursor, f"MONTANT TOTAL ENCAISSÉ: {format_xof(payload.total_amount)}",
                  x=TOTALS_X, size=11, bold=True)
        if payload.total_due is not None:
            balance = payload.balance
            if balance is None:
                balance = payload.total_due - payload.total_amount
            cursor = cursor.down(14)
            self.text(cursor, f"MONTANT TOTAL DÛ: {format_xof(payload.total_due)}", x=TOTALS_X)
            cursor = cursor.down(14)
            self.text(cursor, f"RESTE À PAYER: {format_xof(balance)}", x=TOTALS_X, size=11, bold=True,
                      color=balance_color(balance))

        small = FONT_SIZES["table"]
        cursor = cursor.down(24)
        self.text(cursor, "Cet élève a effectué tous les paiements obligatoires pour son inscription :", size=small)
        cursor = self.lines(cursor, ["[X] Frais d'inscription", "[X] 1er versement de l'année"],
                            step=12, first_step=12, size=small)
        cursor = cursor.down(14)
        if payload.recorded_by:
            self.text(cursor, f"Enregistré par: {payload.recorded_by}", size=small)

        return self.signature(cursor.down(24))


class RegistrationReceiptBuilder(DocumentBuilder):
    document_kind = DocumentKind.REGISTRATION_RECEIPT
    title = "REÇU FRAIS D'INSCRIPTION"

    def render_body(self, payload: RegistrationReceiptPayload, school, cursor: Cursor) -> Cursor:
        cursor = self.draw_title_bar(cursor)

        cursor = cursor.down(20)
        self.text(cursor, f"Reçu N°: {payload.receipt_number}", bold=True)
        self.text(cursor, f"Date de paiement: {format_date_fr(payload.payment_date)}", x=250)
        cursor = cursor.down(14)
        if payload.academic_year:
            self.text(cursor, f"Année académique: {payload.academic_year}")
        cursor = self.rule(cursor.down(12))

        cursor = self.student_block(
            cursor, payload, "Informations élève",
            extra=[f"Parent / Tuteur: {payload.parent_name or 'N/A'}"],
        )
        cursor = self.rule(cursor.down(12))

        cursor = self.section_heading(cursor, "Paiement des frais d'inscription")
        details = [f"Montant payé: {format_xof(payload.amount)}", f"Méthode: {payload.payment_method or 'N/A'}"]
        if payload.recorded_by:
            details.append(f"Enregistré par: {payload.recorded_by}")
        cursor = self.lines(cursor, details)

        cursor = cursor.down(20)
        self.text(cursor, "Ce reçu atteste le paiement complet des frais obligatoires d'inscription.",
                  size=FONT_SIZES["table"])
        return self.signature(cursor.down(24))


class TuitionPaymentReceiptBuilder(DocumentBuilder):
    """Tuition receipt: bordered info box, fee-head grid, signature box."""

    document_kind = DocumentKind.TUITION_PAYMENT_RECEIPT
    title = "RECU PAIEMENT"

    MARGIN = 50
    INFO_BOX_HEIGHT = 150
    INFO_LABEL_WIDTH = 120
    LINE_HEIGHT = 15
    ROW_HEIGHT = 22
    GRID_HEADER = ("Nature", "Montant dû", "Payé", "Solde")

    @property
    def grid_columns(self):
        x = self.MARGIN
        columns = []
        for width, align in ((165, "left"), (110, "right"), (110, "right"), (110, "right")):
            columns.append(Column(x, width, align))
            x += width
        return columns

    def render_body(self, payload: TuitionPaymentReceiptPayload, school, cursor: Cursor) -> Cursor:
        cursor = self.draw_title_bar(cursor)
        cursor = self.draw_date_row(
            cursor,
            f"Date: {format_date_fr(self.today(payload))}",
            f"Année académique: {payload.academic_year}" if payload.academic_year else None,
        )

        # Student and payment info box
        box_top = cursor.down(22)
        content_width = PAGE_WIDTH - 2 * self.MARGIN
        self.box(self.MARGIN, box_bottom(box_top.y, self.INFO_BOX_HEIGHT), content_width, self.INFO_BOX_HEIGHT)
        info_fields = [
            ("Matricule :", payload.student_matricule),
            ("Nom et prénom :", payload.student_name),
            ("Classe :", payload.class_name or "N/A"),
            ("Année académique :", payload.academic_year or "N/A"),
            ("Mode de paiement :", payload.payment_method or "N/A"),
            ("Référence :", payload.payment_reference or "N/A"),
            ("Date de règlement :", format_date_fr(payload.payment_date) or "N/A"),
        ]
        label_x = self.MARGIN + 10
        self.labeled_lines(box_top.down(25), info_fields, label_x, label_x + self.INFO_LABEL_WIDTH,
                           step=self.LINE_HEIGHT, size=FONT_SIZES["table"])

        # Summary grid
        rows = build_tuition_rows(
            registration_fee=payload.registration_fee,
            other_fees=payload.other_fees,
            tuition_fee=payload.tuition_fee,
            total_due=payload.total_due,
            total_paid=payload.total_paid,
            balance=payload.balance,
            payments=payload.all_payments,
            schedules=payload.payment_schedules,
        )
        cells = [
            (row.nature, _amount(row.due), _amount(row.paid), _amount(row.balance))
            for row in rows
        ]
        bold_rows = [i for i, row in enumerate(rows) if row.is_total]
        header_bottom = box_top.down(self.INFO_BOX_HEIGHT + 40)
        last_row = self.renderer.draw_grid_table(
            self.grid_columns, self.GRID_HEADER, cells, header_bottom, self.ROW_HEIGHT,
            bold_rows=bold_rows, bordered=self.profile.rules, header_variant=self.variant(True),
        )

        # Totals
        cursor = last_row.down(self.ROW_HEIGHT)
        self.text(cursor.down(15), f"TOTAL PAYÉ : {format_xof(payload.total_paid)}", x=self.MARGIN, bold=True)
        self.text(cursor.down(30), f"RESTE À PAYER : {format_xof(payload.balance)}", x=self.MARGIN, bold=True)

        # Signature box
        signature_top = cursor.down(65)
        self.box(self.MARGIN, box_bottom(signature_top.y, 50), content_width, 50)
        small = FONT_SIZES["small"]
        self.text(signature_top.down(35), "Visa parent", x=self.MARGIN + 20, size=small)
        self.text(signature_top.down(35), "Cachet de l'école", x=PAGE_WIDTH - self.MARGIN - 140, size=small)

        self.text(Cursor(40), "Important : Aucun remboursement n'est possible en cas d'annulation de l'inscription.",
                  x=self.MARGIN, size=small)
        return signature_top.down(50)


class InvoicePaymentReceiptBuilder(DocumentBuilder):
    document_kind = DocumentKind.PAYMENT_RECEIPT
    title = "REÇU DE PAIEMENT"

    ITEM_COLUMNS = (Column(30), Column(280, 70, "right"), Column(360, 100, "right"), Column(465, 100, "right"))
    ITEM_HEADER = ("Description", "Quantité", "Prix unitaire", "Total")
    LABEL_X = 400
    FOOTER_COLOR = (0.5, 0.5, 0.5)

    def document_title(self, payload: InvoicePaymentReceiptPayload) -> str:
        return f"{self.title} - {payload.payment_number}"

    def render_body(self, payload: InvoicePaymentReceiptPayload, school, cursor: Cursor) -> Cursor:
        cursor = self.draw_title_bar(cursor)

        cursor = cursor.down(20)
        self.text(cursor, f"N° {payload.payment_number}", bold=True)
        date_text = f"Date: {format_date_fr(payload.payment_date) or format_date_fr(self.today(payload))}"
        self.layout.draw_right_aligned_text(date_text, CONTENT_RIGHT, cursor.y, self.variant(), FONT_SIZES["body"])
        cursor = self.rule(cursor.down(12))

        cursor = self.student_block(cursor, payload, "INFORMATIONS ÉLÈVE")
        cursor = self.rule(cursor.down(12))

        cursor = self.section_heading(cursor, "DÉTAILS DU PAIEMENT").down(18)
        rows = [
            (item.description, str(item.quantity), format_xof(item.unit_price), format_xof(item.total))
            for item in payload.items
        ]
        cursor = self.table(cursor, self.ITEM_COLUMNS, self.ITEM_HEADER, rows)
        cursor = self.rule(cursor.down(6), thickness=0.5)

        totals = [("Sous-total:", format_xof(payload.subtotal))]
        if payload.discount > 0:
            totals.append(("Remise:", f"-{format_xof(payload.discount)}"))
        if payload.tax > 0:
            totals.append(("Taxes:", format_xof(payload.tax)))
        for label, value in totals:
            cursor = cursor.down(14)
            self._total_line(cursor, label, value)
        cursor = cursor.down(18)
        self._total_line(cursor, "TOTAL PAYÉ:", format_xof(payload.amount), bold=True)

        cursor = cursor.down(24)
        self.text(cursor, f"Méthode de paiement: {payload.payment_method or 'N/A'}")
        if payload.transaction_id:
            cursor = cursor.down(14)
            self.text(cursor, f"Transaction ID: {payload.transaction_id}")

        footer = "Ce document est un reçu officiel de paiement. Conservez-le précieusement."
        footer_color = self.color(self.FOOTER_COLOR)
        if self.profile.centered:
            self.layout.draw_centered_text(footer, 40, self.variant(), FONT_SIZES["small"], footer_color)
        else:
            self.layout.draw_text(footer, self.profile.left_x, 40, self.variant(), FONT_SIZES["small"])
        return cursor

    def _total_line(self, cursor: Cursor, label: str, value: str, bold: bool = False):
        size = FONT_SIZES["body"]
        self.text(cursor, label, x=self.LABEL_X, size=size, bold=bold)
        self.layout.draw_right_aligned_text(value, CONTENT_RIGHT, cursor.y, self.variant(bold), size)
