# Tests configuration for school_docs
import io
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from school_docs.asset_resolver import AssetBytes, AssetKind, AssetResolver, ImageFormat
from school_docs.config import AssetSettings
from school_docs.payloads import (
    BulletinPayload,
    CertificatePayload,
    EnrollmentReceiptPayload,
    FrequencyCertificatePayload,
    InvoicePayload,
    InvoicePaymentReceiptPayload,
    RegistrationReceiptPayload,
    TuitionPaymentReceiptPayload,
)


def _image_bytes(fmt: str) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), (200, 30, 30)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    return _image_bytes("PNG")


@pytest.fixture
def jpeg_bytes():
    return _image_bytes("JPEG")


class StubResolver(AssetResolver):
    """Resolver returning fixed assets without touching disk or network."""

    def __init__(self, logo=None, photo=None):
        super().__init__(settings=AssetSettings(assets_dir="/nonexistent"))
        self.logo = logo
        self.photo = photo
        self.photo_requests = []

    def resolve_logo(self, hint=None):
        return self.logo

    def resolve_photo(self, url):
        self.photo_requests.append(url)
        return self.photo


@pytest.fixture
def stub_resolver():
    return StubResolver


@pytest.fixture
def no_assets():
    return StubResolver()


@pytest.fixture
def png_logo(png_bytes):
    return AssetBytes(AssetKind.LOGO, ImageFormat.PNG, png_bytes, "test://logo.png")


@pytest.fixture
def broken_logo():
    """PNG signature followed by garbage: sniffs as PNG, fails to decode."""
    data = b"\x89PNG\r\n\x1a\n" + b"not really an image" * 4
    return AssetBytes(AssetKind.LOGO, ImageFormat.PNG, data, "test://broken.png")


SCHOOL = {"name": "Lycée Moderne de Cocody", "address": "Abidjan, Cocody", "phone": "+225 0102030405"}


@pytest.fixture
def enrollment_payload():
    return EnrollmentReceiptPayload(
        student_name="KOUASSI Aya Marie",
        student_matricule="GSA-2024-001",
        class_name="6ème A",
        parent_name="KOUASSI Jean",
        payments=[
            {"type": "Frais d'inscription", "amount": 25000, "method": "Espèces", "reference": "REC-001"},
            {"type": "1er versement", "amount": 50000, "method": "Mobile Money", "reference": "MM-778"},
        ],
        total_amount=75000,
        total_due=200000,
        academic_year="2024-2025",
        recorded_by="Comptable",
        school=SCHOOL,
        generated_at="2024-09-15",
    )


@pytest.fixture
def registration_payload():
    return RegistrationReceiptPayload(
        student_name="KOUASSI Aya Marie",
        student_matricule="GSA-2024-001",
        class_name="6ème A",
        parent_name="KOUASSI Jean",
        amount=25000,
        payment_method="Espèces",
        payment_date="2024-09-15",
        receipt_number="RI-0042",
        academic_year="2024-2025",
    )


@pytest.fixture
def tuition_payload():
    return TuitionPaymentReceiptPayload(
        student_name="KOUASSI Aya Marie",
        student_matricule="GSA-2024-001",
        class_name="6ème A",
        payment_amount=50000,
        payment_date="2024-10-05",
        payment_method="Mobile Money",
        payment_reference="MM-778",
        registration_fee=25000,
        other_fees=10000,
        tuition_fee=150000,
        total_due=185000,
        total_paid=85000,
        balance=100000,
        all_payments=[
            {"amount": 35000, "payment_date": "2024-09-15", "payment_method": "Espèces"},
            {"amount": 50000, "payment_date": "2024-10-05", "payment_method": "Mobile Money"},
        ],
        payment_schedules=[
            {"installment_number": 1, "due_month": 10, "amount": 50000},
            {"installment_number": 2, "due_month": 1, "amount": 50000},
            {"installment_number": 3, "due_month": 4, "amount": 50000},
        ],
        academic_year="2024-2025",
        school=SCHOOL,
        generated_at="2024-10-05",
    )


@pytest.fixture
def invoice_payment_payload():
    return InvoicePaymentReceiptPayload(
        payment_number="PAY-2024-0007",
        payment_date="2024-10-05",
        student_name="KOUASSI Aya Marie",
        student_matricule="GSA-2024-001",
        class_name="6ème A",
        items=[{"description": "Scolarité T1", "quantity": 1, "unit_price": 50000, "total": 50000}],
        subtotal=50000,
        discount=5000,
        amount=45000,
        payment_method="Virement",
        transaction_id="TX-99",
    )


@pytest.fixture
def bulletin_payload():
    return BulletinPayload(
        student_name="KOUASSI Aya Marie",
        student_matricule="GSA-2024-001",
        class_name="6ème A",
        academic_year="2024/2025",
        academic_year_id="ay-2024",
        grades=[
            {"subject": "Mathématiques", "grade": 15, "max_grade": 20, "percentage": 75, "appreciation": "Bien"},
            {"subject": "Français", "grade": 12.5, "max_grade": 20, "percentage": 63, "appreciation": "Satisfaisant"},
        ],
        average=13.75,
        average_percentage=69,
        teacher_appreciation="Élève sérieuse et appliquée, doit poursuivre ses efforts en expression écrite.",
        generated_at="2025-03-31",
    )


@pytest.fixture
def certificate_payload():
    return CertificatePayload(
        student_name="Aya Marie Kouassi",
        student_matricule="GSA-2024-001",
        class_name="6ème A",
        academic_year="2024/2025",
        certificate_type="reussite",
        generated_at="2025-06-30",
    )


@pytest.fixture
def frequency_payload():
    return FrequencyCertificatePayload(
        school=SCHOOL,
        student_name="KOUASSI Aya Marie",
        student_matricule="GSA-2024-001",
        date_of_birth="2012-04-03",
        place_of_birth="Bingerville",
        gender="F",
        class_name="6ème A",
        academic_year="2024-2025",
        issue_date="2024-11-02",
        signatory_name="M. Yao",
    )


@pytest.fixture
def invoice_payload():
    return InvoicePayload(
        invoice_number="FAC-2024-0100",
        student_name="KOUASSI Aya Marie",
        student_matricule="GSA-2024-001",
        class_name="6ème A",
        items=[{"description": "Frais de scolarité", "amount": 150000, "status": "En attente"}],
        total_amount=150000,
        amount_paid=50000,
        amount_due=100000,
        payment_status="partial",
        issue_date="2024-09-01",
        due_date="2024-12-31",
        generated_at="2024-10-05",
    )


@pytest.fixture
def all_payloads(enrollment_payload, registration_payload, tuition_payload, invoice_payment_payload,
                 bulletin_payload, certificate_payload, frequency_payload, invoice_payload):
    return [
        enrollment_payload,
        registration_payload,
        tuition_payload,
        invoice_payment_payload,
        bulletin_payload,
        certificate_payload,
        frequency_payload,
        invoice_payload,
    ]
