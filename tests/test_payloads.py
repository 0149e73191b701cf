"""Tests for payload validation, dict conversion and filenames."""
import pytest

from school_docs.exceptions import InvalidFieldError, MissingFieldError, ValidationError
from school_docs.payloads import (
    PAYLOAD_TYPES,
    BulletinPayload,
    CertificatePayload,
    DocumentKind,
    EnrollmentReceiptPayload,
    FrequencyCertificatePayload,
    InvoicePayload,
    PaymentLineItem,
    RegistrationReceiptPayload,
    SchoolIdentity,
    TuitionPaymentReceiptPayload,
    payload_from_dict,
)


class TestSchoolIdentity:
    def test_resolve_none_gives_default_school(self):
        school = SchoolIdentity.resolve(None)
        assert school.name == "Groupe Scolaire Gnamien-Assa"
        assert school.phone == "+225 0707905958"
        assert school.email is None

    def test_resolve_fills_missing_fields_only(self):
        school = SchoolIdentity.resolve(SchoolIdentity(name="Collège Saint Jean", email="info@csj.ci"))
        assert school.name == "Collège Saint Jean"
        assert school.address == "Bingerville (Cefal après Adjamé-Bingerville)"
        assert school.email == "info@csj.ci"


class TestValidation:
    def test_every_kind_has_a_payload_type(self):
        assert set(PAYLOAD_TYPES) == set(DocumentKind)

    def test_enrollment_requires_a_payment(self):
        with pytest.raises(MissingFieldError) as exc_info:
            EnrollmentReceiptPayload(student_name="A B", student_matricule="M1", payments=[])
        assert exc_info.value.field == "payments"

    def test_enrollment_rejects_negative_payment(self):
        with pytest.raises(InvalidFieldError):
            EnrollmentReceiptPayload(
                student_name="A B", student_matricule="M1",
                payments=[{"type": "x", "amount": -5}],
            )

    def test_registration_requires_positive_amount(self):
        with pytest.raises(MissingFieldError) as exc_info:
            RegistrationReceiptPayload(
                student_name="A B", student_matricule="M1", amount=0,
                payment_date="2024-09-01", receipt_number="R1",
            )
        assert exc_info.value.field == "amount"

    def test_tuition_requires_positive_payment_amount(self):
        with pytest.raises(ValidationError):
            TuitionPaymentReceiptPayload(student_name="A B", student_matricule="M1", payment_amount=0)

    def test_blank_strings_count_as_missing(self):
        with pytest.raises(MissingFieldError) as exc_info:
            BulletinPayload(student_name="   ", student_matricule="M1", academic_year="2024/2025")
        assert exc_info.value.field == "student_name"

    def test_certificate_type_checked(self):
        with pytest.raises(InvalidFieldError):
            CertificatePayload(
                student_name="A B", student_matricule="M1", academic_year="2024/2025",
                certificate_type="excellence",
            )

    def test_frequency_certificate_requires_school(self):
        with pytest.raises(MissingFieldError):
            FrequencyCertificatePayload(student_name="A B")

    def test_frequency_certificate_requires_school_name(self):
        with pytest.raises(MissingFieldError) as exc_info:
            FrequencyCertificatePayload(student_name="A B", school={"address": "Abidjan"})
        assert exc_info.value.field == "school.name"

    def test_invoice_status_checked(self):
        with pytest.raises(InvalidFieldError):
            InvoicePayload(
                invoice_number="F1", student_name="A B", student_matricule="M1", payment_status="late",
            )

    def test_invoice_amounts_non_negative(self):
        with pytest.raises(InvalidFieldError):
            InvoicePayload(
                invoice_number="F1", student_name="A B", student_matricule="M1",
                payment_status="overdue", amount_due=-1,
            )

    def test_bad_line_item_type(self):
        with pytest.raises(InvalidFieldError):
            EnrollmentReceiptPayload(student_name="A B", student_matricule="M1", payments=["cash"])

    def test_error_message_names_kind_and_field(self):
        with pytest.raises(MissingFieldError) as exc_info:
            BulletinPayload(student_name="A B", student_matricule="M1")
        assert "academic_year" in str(exc_info.value)
        assert "bulletin" in str(exc_info.value)


class TestDictConversion:
    def test_camel_case_keys_and_nested_items(self):
        payload = payload_from_dict("enrollment_receipt", {
            "studentName": "KOUASSI Aya",
            "studentMatricule": "M1",
            "payments": [{"type": "Inscription", "amount": 25000, "method": "Espèces", "reference": "R"}],
            "totalAmount": 25000,
            "unknownKey": "ignored",
        })
        assert isinstance(payload, EnrollmentReceiptPayload)
        assert payload.total_amount == 25000
        assert payload.payments == (PaymentLineItem(type="Inscription", amount=25000, method="Espèces", reference="R"),)

    def test_flat_school_keys_folded(self):
        payload = payload_from_dict(DocumentKind.FREQUENCY_CERTIFICATE, {
            "student_name": "A B",
            "school_name": "Collège Moderne",
            "school_phone": "+225 01",
        })
        assert payload.school == SchoolIdentity(name="Collège Moderne", phone="+225 01")

    def test_to_dict_round_trip(self, invoice_payload):
        data = invoice_payload.to_dict()
        assert data["items"][0]["description"] == "Frais de scolarité"
        assert InvoicePayload.from_dict(data) == invoice_payload

    def test_unknown_kind(self):
        with pytest.raises(InvalidFieldError):
            payload_from_dict("report_card", {})

    def test_missing_field_from_dict(self):
        with pytest.raises(ValidationError):
            payload_from_dict("invoice", {"invoice_number": "F1"})


class TestNumericFields:
    def test_null_item_amount_is_missing(self):
        with pytest.raises(MissingFieldError) as exc_info:
            payload_from_dict("enrollment_receipt", {
                "studentName": "A B",
                "studentMatricule": "M1",
                "payments": [{"type": "x", "amount": None}],
            })
        assert exc_info.value.field == "payments[0].amount"

    def test_string_amount_is_invalid(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            payload_from_dict("tuition_payment_receipt", {
                "studentName": "A B",
                "studentMatricule": "M1",
                "paymentAmount": "50000",
            })
        assert exc_info.value.field == "payment_amount"

    def test_null_required_amount_is_missing(self):
        with pytest.raises(MissingFieldError) as exc_info:
            payload_from_dict("registration_receipt", {
                "studentName": "A B", "studentMatricule": "M1", "amount": None,
                "paymentDate": "2024-09-01", "receiptNumber": "R1",
            })
        assert exc_info.value.field == "amount"

    def test_string_in_schedule_item(self):
        with pytest.raises(InvalidFieldError) as exc_info:
            TuitionPaymentReceiptPayload(
                student_name="A B", student_matricule="M1", payment_amount=1000,
                payment_schedules=[{"installment_number": 1, "due_month": 10, "amount": "abc"}],
            )
        assert exc_info.value.field == "payment_schedules[0].amount"

    def test_bool_is_not_an_amount(self):
        with pytest.raises(InvalidFieldError):
            InvoicePayload(
                invoice_number="F1", student_name="A B", student_matricule="M1",
                payment_status="paid", amount_due=True,
            )

    def test_fractional_amount_rejected(self):
        with pytest.raises(InvalidFieldError):
            RegistrationReceiptPayload(
                student_name="A B", student_matricule="M1", amount=2500.5,
                payment_date="2024-09-01", receipt_number="R1",
            )

    def test_whole_float_amount_stored_as_int(self):
        payload = payload_from_dict("enrollment_receipt", {
            "studentName": "A B",
            "studentMatricule": "M1",
            "payments": [{"type": "x", "amount": 25000.0}],
            "totalAmount": 25000.0,
        })
        assert payload.total_amount == 25000
        assert isinstance(payload.payments[0].amount, int)

    def test_optional_amount_may_be_null(self):
        payload = EnrollmentReceiptPayload(
            student_name="A B", student_matricule="M1",
            payments=[{"type": "x", "amount": 100}], total_due=None,
        )
        assert payload.total_due is None

    def test_fractional_grades_accepted(self):
        payload = BulletinPayload(
            student_name="A B", student_matricule="M1", academic_year="2024/2025",
            grades=[{"subject": "Maths", "grade": 12.5}], average=12.5,
        )
        assert payload.grades[0].grade == 12.5

    def test_generate_from_dict_raises_validation_error(self, no_assets):
        from school_docs import DocumentGenerationPipeline

        with pytest.raises(ValidationError):
            DocumentGenerationPipeline(asset_resolver=no_assets).generate_from_dict(
                "tuition_payment_receipt",
                {"studentName": "A B", "studentMatricule": "M1", "paymentAmount": "50000"},
            )


class TestFilenames:
    def test_receipt_filenames(self, enrollment_payload, registration_payload, tuition_payload,
                               invoice_payment_payload):
        assert enrollment_payload.filename == "Recu_Inscription_GSA-2024-001.pdf"
        assert registration_payload.filename == "Recu_Frais_Inscription_GSA-2024-001.pdf"
        assert tuition_payload.filename == "Recu_Paiement_GSA-2024-001.pdf"
        assert invoice_payment_payload.filename == "Recu_PAY-2024-0007.pdf"

    def test_academic_filenames(self, bulletin_payload, certificate_payload, frequency_payload):
        assert bulletin_payload.filename == "Bulletin_GSA-2024-001_ay-2024.pdf"
        assert certificate_payload.filename == "Certificate_GSA-2024-001_reussite.pdf"
        assert frequency_payload.filename == "Certificat_Frequentation_GSA-2024-001.pdf"

    def test_frequency_without_matricule(self):
        payload = FrequencyCertificatePayload(student_name="A B", school={"name": "X"})
        assert payload.filename == "Certificat_Frequentation_eleve.pdf"

    def test_invoice_filename_sanitized(self):
        payload = InvoicePayload(
            invoice_number="../FAC 1", student_name="A B", student_matricule="M1", payment_status="paid",
        )
        assert payload.filename == "Invoice_FAC_1.pdf"

    def test_filename_deterministic(self, all_payloads):
        for payload in all_payloads:
            assert payload.filename == payload.filename
            assert payload.filename.endswith(".pdf")
