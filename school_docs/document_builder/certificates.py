"""Certificate Builders

Attendance certificates (scolarité, réussite, assiduité) and the frequency
certificate.
"""
from ..config import FONT_SIZES, PAGE_WIDTH
from ..payloads import CertificatePayload, DocumentKind, FrequencyCertificatePayload, SchoolIdentity
from ..utils import format_date_fr, split_full_name
from .builder import DocumentBuilder
from .coordinate_utils import Cursor

CERTIFICATE_LABELS = {
    "scolarite": "de Scolarité",
    "reussite": "de Réussite",
    "assiduite": "d'Assiduité",
}

CERTIFICATE_STATEMENTS = {
    "scolarite": (
        "est dûment inscrit(e) et poursuit sa scolarité en classe de {class_name} "
        "pour l'année académique {academic_year}."
    ),
    "reussite": (
        "a satisfait aux conditions requises et a réussi son année scolaire en classe de {class_name} "
        "pour l'année académique {academic_year}."
    ),
    "assiduite": (
        "s'est distingué(e) par son assiduité et sa régularité en classe de {class_name} "
        "pendant l'année académique {academic_year}."
    ),
}


class CertificateBuilder(DocumentBuilder):
    document_kind = DocumentKind.CERTIFICATE
    title = "CERTIFICAT"

    MARGIN = 50
    SIGNATURE_X = 100
    SIGNATURE_WIDTH = 100

    def render_body(self, payload: CertificatePayload, school: SchoolIdentity, cursor: Cursor) -> Cursor:
        text_width = PAGE_WIDTH - 2 * self.MARGIN
        body_size = 11

        if self.profile.centered:
            cursor = cursor.down(40)
            self.centered(cursor, self.title, size=24, bold=True)
        cursor = cursor.down(24)
        self.centered(cursor, CERTIFICATE_LABELS[payload.certificate_type], size=14)

        cursor = self.wrapped(
            cursor.down(36),
            f"L'établissement {school.name}, par la présente, certifie que :",
            x=self.MARGIN, max_width=text_width, line_height=15, size=body_size,
        )

        cursor = cursor.down(4)
        self.centered(cursor, payload.student_name.upper(), size=12, bold=True)
        cursor = cursor.down(18)
        self.centered(cursor, f"Matricule: {payload.student_matricule}", size=body_size)

        statement = CERTIFICATE_STATEMENTS[payload.certificate_type].format(
            class_name=payload.class_name or "N/A",
            academic_year=payload.academic_year,
        )
        cursor = self.wrapped(cursor.down(26), statement, x=self.MARGIN, max_width=text_width,
                              line_height=15, size=body_size)

        cursor = cursor.down(30)
        self.text(cursor, f"Fait à: {school.name}", x=self.MARGIN)
        cursor = cursor.down(14)
        self.text(cursor, f"Le: {format_date_fr(self.today(payload))}", x=self.MARGIN)

        cursor = cursor.down(40)
        self.rule(cursor, x1=self.SIGNATURE_X, x2=self.SIGNATURE_X + self.SIGNATURE_WIDTH)
        cursor = cursor.down(14)
        label = "Le Directeur"
        label_width = self.layout.measure_text_width(label, self.variant(), FONT_SIZES["table"])
        self.text(cursor, label, x=self.SIGNATURE_X + (self.SIGNATURE_WIDTH - label_width) / 2,
                  size=FONT_SIZES["table"])
        return cursor


class FrequencyCertificateBuilder(DocumentBuilder):
    """Certificat de fréquentation: identity block plus an enrollment statement."""

    document_kind = DocumentKind.FREQUENCY_CERTIFICATE
    title = "CERTIFICAT DE FREQUENTATION"

    MARGIN = 40
    LABEL_X = MARGIN + 10
    VALUE_X = MARGIN + 130
    LINE_HEIGHT = 16
    SIGNATORY_X = 360

    def header_school_name(self, school: SchoolIdentity) -> str:
        return school.name.upper()

    def document_title(self, payload: FrequencyCertificatePayload) -> str:
        return f"{self.title} - {payload.student_name}"

    def render_body(self, payload: FrequencyCertificatePayload, school: SchoolIdentity, cursor: Cursor) -> Cursor:
        if self.profile.centered:
            cursor = cursor.down(30)
            self.box(140, cursor.y - 8, 315, 30)
            self.centered(cursor, self.title, size=FONT_SIZES["section"], bold=True)

        cursor = cursor.down(50)
        self.text(cursor, f"Je soussigné {payload.signatory_title or 'Le Directeur'},", x=self.MARGIN)
        cursor = cursor.down(16)
        self.text(cursor, "certifie que l'élève :", x=self.MARGIN)

        last_name, first_names = split_full_name(payload.student_name)
        birth_line = " ".join(
            part for part in (
                format_date_fr(payload.date_of_birth),
                f"à {payload.place_of_birth}" if payload.place_of_birth else "",
            ) if part
        )
        pairs = [
            ("Nom :", last_name or payload.student_name),
            ("Prénoms :", first_names or payload.student_name),
            ("Né(e) le :", birth_line or "N/A"),
            ("Matricule :", payload.student_matricule or "N/A"),
            ("Sexe :", payload.gender or "N/A"),
            ("Classe :", payload.class_name or "N/A"),
        ]
        if payload.program:
            pairs.append(("Filière :", payload.program))
        cursor = self.labeled_lines(cursor.down(26), pairs, self.LABEL_X, self.VALUE_X, step=self.LINE_HEIGHT)

        if payload.enrollment_date:
            enrollment_line = f"depuis le {format_date_fr(payload.enrollment_date)}"
        else:
            enrollment_line = "depuis le début de l'année scolaire"
        academic_line = f" année scolaire {payload.academic_year}" if payload.academic_year else ""
        statement = (
            f"est régulièrement inscrit(e) et suit sa formation au sein de l'établissement "
            f"{school.name} {enrollment_line}{academic_line}."
        )
        cursor = self.wrapped(cursor.down(10), statement, x=self.MARGIN,
                              max_width=PAGE_WIDTH - 2 * self.MARGIN, line_height=14)

        issue_date = format_date_fr(payload.issue_date) or format_date_fr(self.today(payload))
        cursor = cursor.down(46)
        self.text(cursor, f"Fait à {payload.issue_place or school.name}, le {issue_date}", x=self.MARGIN)

        cursor = cursor.down(40)
        self.text(cursor, "P/Le Directeur", x=self.SIGNATORY_X)
        if payload.signatory_name:
            cursor = cursor.down(14)
            self.text(cursor, payload.signatory_name, x=self.SIGNATORY_X)
        return cursor
