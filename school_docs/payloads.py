"""Document Payloads

Immutable input records for every document kind. Payloads validate their
required fields at construction, so an invalid payload never reaches the
renderer, and round-trip through plain dicts so callers can pass them across
a network boundary unchanged.
"""
import re
from dataclasses import dataclass, fields, asdict
from datetime import date, datetime
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Tuple, Union, get_args, get_origin

from .config import DEFAULT_SCHOOL, MAX_GRADE
from .exceptions import InvalidFieldError, MissingFieldError
from .utils import DateLike, build_filename


class DocumentKind(str, Enum):
    """Every official document the platform can issue."""

    ENROLLMENT_RECEIPT = "enrollment_receipt"
    REGISTRATION_RECEIPT = "registration_receipt"
    TUITION_PAYMENT_RECEIPT = "tuition_payment_receipt"
    PAYMENT_RECEIPT = "payment_receipt"
    BULLETIN = "bulletin"
    CERTIFICATE = "certificate"
    FREQUENCY_CERTIFICATE = "frequency_certificate"
    INVOICE = "invoice"


CERTIFICATE_TYPES = ("scolarite", "reussite", "assiduite")
PAYMENT_STATUSES = ("paid", "partial", "overdue")


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def _coerce(item_type: type, value: Any):
    if isinstance(value, item_type):
        return value
    if isinstance(value, dict):
        return item_type.from_dict(value)
    raise TypeError(f"Cannot build {item_type.__name__} from {type(value).__name__}")


def _number_type(annotation) -> Tuple[Optional[type], bool]:
    """Numeric type of a field annotation (int or float, else None) and whether None is allowed."""
    optional = False
    if get_origin(annotation) is Union:
        args = [a for a in get_args(annotation) if a is not type(None)]
        optional = len(args) < len(get_args(annotation))
        if len(args) != 1:
            return None, optional
        annotation = args[0]
    if annotation in (int, float):
        return annotation, optional
    return None, optional


def _check_numbers(record: Any, document_kind: str, prefix: str = ""):
    """
    Type-check the numeric fields of a record in place.

    Whole floats in int fields (50000.0 from JSON) are stored as int.

    Raises:
        MissingFieldError: If a non-optional number is None
        InvalidFieldError: If a number field holds anything else (strings, bools)
    """
    for f in fields(record):
        number_type, optional = _number_type(f.type)
        if number_type is None:
            continue
        name = prefix + f.name
        value = getattr(record, f.name)
        if value is None:
            if optional:
                continue
            raise MissingFieldError(document_kind, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidFieldError(document_kind, name, f"expected a number, got {type(value).__name__}")
        if number_type is int and isinstance(value, float):
            if not value.is_integer():
                raise InvalidFieldError(document_kind, name, "expected a whole number")
            object.__setattr__(record, f.name, int(value))


def _jsonable(value: Any):
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    return value


class _Record:
    """Dict conversion shared by every record."""

    def to_dict(self) -> Dict[str, Any]:
        return _jsonable(asdict(self))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _snake_case(key)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)


# ============================================================================
# Building blocks
# ============================================================================

@dataclass(frozen=True)
class SchoolIdentity(_Record):
    """School header identity; falls back to the default school."""

    name: str = ""
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def resolve(cls, school: Optional["SchoolIdentity"]) -> "SchoolIdentity":
        """
        Fill missing name, address and phone from DEFAULT_SCHOOL.

        The email has no default and stays absent.
        """
        if school is None:
            return cls(**DEFAULT_SCHOOL)
        return cls(
            name=school.name or DEFAULT_SCHOOL["name"],
            address=school.address or DEFAULT_SCHOOL["address"],
            phone=school.phone or DEFAULT_SCHOOL["phone"],
            email=school.email or None,
        )


@dataclass(frozen=True)
class PersonRef:
    """Subject of a document."""

    full_name: str
    matricule: str
    class_label: Optional[str] = None


@dataclass(frozen=True)
class PaymentLineItem(_Record):
    type: str = ""
    amount: int = 0
    method: str = ""
    reference: str = ""
    payment_date: DateLike = None


@dataclass(frozen=True)
class PaymentRecord(_Record):
    amount: int = 0
    payment_date: DateLike = None
    payment_method: str = ""
    reference: str = ""


@dataclass(frozen=True)
class PaymentSchedule(_Record):
    installment_number: int = 1
    due_month: int = 1
    amount: int = 0
    description: str = ""


@dataclass(frozen=True)
class GradeLine(_Record):
    subject: str = ""
    grade: float = 0.0
    max_grade: int = MAX_GRADE
    percentage: int = 0
    appreciation: Optional[str] = None


@dataclass(frozen=True)
class InvoiceItem(_Record):
    description: str = ""
    amount: int = 0
    status: Optional[str] = None


@dataclass(frozen=True)
class ReceiptItem(_Record):
    description: str = ""
    quantity: int = 1
    unit_price: int = 0
    total: int = 0


# ============================================================================
# Payload base
# ============================================================================

@dataclass(frozen=True)
class DocumentPayload(_Record):
    """Base class for all document payloads.

    Subclasses declare:
        document_kind: Kind handled by the matching builder
        filename_label: First component of the suggested filename
        required_fields: Fields that must be non-empty
        item_types: Sequence fields and the record type of their items
    """

    document_kind: ClassVar[DocumentKind]
    filename_label: ClassVar[str] = "Document"
    required_fields: ClassVar[Tuple[str, ...]] = ()
    item_types: ClassVar[Dict[str, type]] = {}

    def __post_init__(self):
        school = getattr(self, "school", None)
        if isinstance(school, dict):
            object.__setattr__(self, "school", SchoolIdentity.from_dict(school))

        for name, item_type in self.item_types.items():
            value = getattr(self, name)
            if value is None:
                value = ()
            try:
                items = tuple(_coerce(item_type, v) for v in value)
            except TypeError as e:
                raise InvalidFieldError(self.document_kind.value, name, str(e))
            object.__setattr__(self, name, items)
            for i, item in enumerate(items):
                _check_numbers(item, self.document_kind.value, f"{name}[{i}].")

        _check_numbers(self, self.document_kind.value)

        for name in self.required_fields:
            if _is_blank(getattr(self, name)):
                raise MissingFieldError(self.document_kind.value, name)

        self.validate()

    def validate(self):
        """Kind-specific checks beyond required fields."""
        pass

    def _require_non_negative(self, *names: str):
        for name in names:
            value = getattr(self, name)
            if value is not None and value < 0:
                raise InvalidFieldError(self.document_kind.value, name, "must not be negative")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Build a payload from snake_case or camelCase keys.

        Flat school_* keys (school_name, school_address, ...) are folded into
        a SchoolIdentity when no nested school is given.
        """
        normalized = {_snake_case(k): v for k, v in data.items()}
        known = {f.name for f in fields(cls)}
        if "school" in known and not normalized.get("school"):
            flat = {
                key[len("school_"):]: normalized[key]
                for key in ("school_name", "school_address", "school_phone", "school_email")
                if normalized.get(key)
            }
            if flat:
                normalized["school"] = SchoolIdentity(**flat)
        return cls(**{k: v for k, v in normalized.items() if k in known})

    @property
    def subject_id(self) -> str:
        return getattr(self, "student_matricule", "") or ""

    @property
    def person(self) -> PersonRef:
        return PersonRef(
            full_name=getattr(self, "student_name", ""),
            matricule=self.subject_id,
            class_label=getattr(self, "class_name", None),
        )

    def filename_parts(self) -> Tuple[str, Optional[str]]:
        return self.subject_id, None

    @property
    def filename(self) -> str:
        identifier, subtype = self.filename_parts()
        return build_filename(self.filename_label, identifier, subtype)


# ============================================================================
# Receipts
# ============================================================================

@dataclass(frozen=True)
class EnrollmentReceiptPayload(DocumentPayload):
    document_kind: ClassVar[DocumentKind] = DocumentKind.ENROLLMENT_RECEIPT
    filename_label: ClassVar[str] = "Recu_Inscription"
    required_fields: ClassVar[Tuple[str, ...]] = ("student_name", "student_matricule", "payments")
    item_types: ClassVar[Dict[str, type]] = {"payments": PaymentLineItem}

    student_name: str = ""
    student_matricule: str = ""
    class_name: str = ""
    parent_name: str = ""
    payments: Tuple[PaymentLineItem, ...] = ()
    total_amount: int = 0
    total_due: Optional[int] = None
    balance: Optional[int] = None
    academic_year: Optional[str] = None
    recorded_by: Optional[str] = None
    student_photo_url: Optional[str] = None
    school: Optional[SchoolIdentity] = None
    generated_at: DateLike = None

    def validate(self):
        self._require_non_negative("total_amount", "total_due")
        for i, payment in enumerate(self.payments):
            if payment.amount < 0:
                raise InvalidFieldError(self.document_kind.value, f"payments[{i}].amount", "must not be negative")


@dataclass(frozen=True)
class RegistrationReceiptPayload(DocumentPayload):
    document_kind: ClassVar[DocumentKind] = DocumentKind.REGISTRATION_RECEIPT
    filename_label: ClassVar[str] = "Recu_Frais_Inscription"
    required_fields: ClassVar[Tuple[str, ...]] = (
        "student_name", "student_matricule", "amount", "payment_date", "receipt_number",
    )

    student_name: str = ""
    student_matricule: str = ""
    class_name: str = ""
    parent_name: str = ""
    amount: int = 0
    payment_method: str = ""
    payment_date: DateLike = None
    receipt_number: str = ""
    academic_year: Optional[str] = None
    recorded_by: Optional[str] = None
    school: Optional[SchoolIdentity] = None

    def validate(self):
        if not self.amount or self.amount <= 0:
            raise MissingFieldError(self.document_kind.value, "amount")


@dataclass(frozen=True)
class TuitionPaymentReceiptPayload(DocumentPayload):
    document_kind: ClassVar[DocumentKind] = DocumentKind.TUITION_PAYMENT_RECEIPT
    filename_label: ClassVar[str] = "Recu_Paiement"
    required_fields: ClassVar[Tuple[str, ...]] = ("student_name", "student_matricule", "payment_amount")
    item_types: ClassVar[Dict[str, type]] = {
        "all_payments": PaymentRecord,
        "payment_schedules": PaymentSchedule,
    }

    student_name: str = ""
    student_matricule: str = ""
    class_name: str = ""
    parent_name: Optional[str] = None
    payment_amount: int = 0
    payment_date: DateLike = None
    payment_method: str = ""
    payment_reference: str = ""
    registration_fee: int = 0
    tuition_fee: int = 0
    other_fees: int = 0
    total_due: int = 0
    total_paid: int = 0
    balance: int = 0
    all_payments: Tuple[PaymentRecord, ...] = ()
    payment_schedules: Tuple[PaymentSchedule, ...] = ()
    academic_year: Optional[str] = None
    recorded_by: Optional[str] = None
    student_photo_url: Optional[str] = None
    school: Optional[SchoolIdentity] = None
    generated_at: DateLike = None

    def validate(self):
        if self.payment_amount <= 0:
            raise MissingFieldError(self.document_kind.value, "payment_amount")
        self._require_non_negative(
            "payment_amount", "registration_fee", "tuition_fee", "other_fees", "total_due", "total_paid",
        )


@dataclass(frozen=True)
class InvoicePaymentReceiptPayload(DocumentPayload):
    document_kind: ClassVar[DocumentKind] = DocumentKind.PAYMENT_RECEIPT
    filename_label: ClassVar[str] = "Recu"
    required_fields: ClassVar[Tuple[str, ...]] = ("payment_number", "student_name", "items")
    item_types: ClassVar[Dict[str, type]] = {"items": ReceiptItem}

    payment_number: str = ""
    payment_date: DateLike = None
    student_name: str = ""
    student_matricule: Optional[str] = None
    class_name: Optional[str] = None
    items: Tuple[ReceiptItem, ...] = ()
    subtotal: int = 0
    discount: int = 0
    tax: int = 0
    amount: int = 0
    payment_method: str = ""
    transaction_id: Optional[str] = None
    school: Optional[SchoolIdentity] = None

    def validate(self):
        self._require_non_negative("subtotal", "discount", "tax", "amount")

    def filename_parts(self):
        return self.payment_number, None


# ============================================================================
# Academic documents
# ============================================================================

@dataclass(frozen=True)
class BulletinPayload(DocumentPayload):
    document_kind: ClassVar[DocumentKind] = DocumentKind.BULLETIN
    filename_label: ClassVar[str] = "Bulletin"
    required_fields: ClassVar[Tuple[str, ...]] = ("student_name", "student_matricule", "academic_year")
    item_types: ClassVar[Dict[str, type]] = {"grades": GradeLine}

    student_name: str = ""
    student_matricule: str = ""
    class_name: str = "N/A"
    academic_year: str = ""
    academic_year_id: Optional[str] = None
    grades: Tuple[GradeLine, ...] = ()
    average: float = 0.0
    average_percentage: int = 0
    teacher_appreciation: Optional[str] = None
    school: Optional[SchoolIdentity] = None
    generated_at: DateLike = None

    def filename_parts(self):
        return self.student_matricule, self.academic_year_id or self.academic_year


@dataclass(frozen=True)
class CertificatePayload(DocumentPayload):
    document_kind: ClassVar[DocumentKind] = DocumentKind.CERTIFICATE
    filename_label: ClassVar[str] = "Certificate"
    required_fields: ClassVar[Tuple[str, ...]] = (
        "student_name", "student_matricule", "academic_year", "certificate_type",
    )

    student_name: str = ""
    student_matricule: str = ""
    class_name: str = "N/A"
    academic_year: str = ""
    certificate_type: str = "scolarite"
    student_photo_url: Optional[str] = None
    school: Optional[SchoolIdentity] = None
    generated_at: DateLike = None

    def validate(self):
        if self.certificate_type not in CERTIFICATE_TYPES:
            raise InvalidFieldError(
                self.document_kind.value, "certificate_type",
                f"expected one of {', '.join(CERTIFICATE_TYPES)}",
            )

    def filename_parts(self):
        return self.student_matricule, self.certificate_type


@dataclass(frozen=True)
class FrequencyCertificatePayload(DocumentPayload):
    document_kind: ClassVar[DocumentKind] = DocumentKind.FREQUENCY_CERTIFICATE
    filename_label: ClassVar[str] = "Certificat_Frequentation"
    required_fields: ClassVar[Tuple[str, ...]] = ("school", "student_name")

    student_name: str = ""
    student_matricule: Optional[str] = None
    student_photo_url: Optional[str] = None
    date_of_birth: DateLike = None
    place_of_birth: Optional[str] = None
    gender: Optional[str] = None
    class_name: Optional[str] = None
    class_level: Optional[str] = None
    program: Optional[str] = None
    enrollment_date: DateLike = None
    academic_year: Optional[str] = None
    issue_date: DateLike = None
    issue_place: Optional[str] = None
    signatory_title: Optional[str] = None
    signatory_name: Optional[str] = None
    school: Optional[SchoolIdentity] = None

    def validate(self):
        if not self.school.name:
            raise MissingFieldError(self.document_kind.value, "school.name")

    def filename_parts(self):
        return self.student_matricule or "eleve", None


# ============================================================================
# Billing
# ============================================================================

@dataclass(frozen=True)
class InvoicePayload(DocumentPayload):
    document_kind: ClassVar[DocumentKind] = DocumentKind.INVOICE
    filename_label: ClassVar[str] = "Invoice"
    required_fields: ClassVar[Tuple[str, ...]] = (
        "invoice_number", "student_name", "student_matricule", "payment_status",
    )
    item_types: ClassVar[Dict[str, type]] = {"items": InvoiceItem}

    invoice_number: str = ""
    student_name: str = ""
    student_matricule: str = ""
    class_name: str = "N/A"
    items: Tuple[InvoiceItem, ...] = ()
    total_amount: int = 0
    amount_paid: int = 0
    amount_due: int = 0
    payment_status: str = ""
    issue_date: DateLike = None
    due_date: DateLike = None
    school: Optional[SchoolIdentity] = None
    generated_at: DateLike = None

    def validate(self):
        self._require_non_negative("total_amount", "amount_paid", "amount_due")
        if self.payment_status not in PAYMENT_STATUSES:
            raise InvalidFieldError(
                self.document_kind.value, "payment_status",
                f"expected one of {', '.join(PAYMENT_STATUSES)}",
            )

    def filename_parts(self):
        return self.invoice_number, None


PAYLOAD_TYPES: Dict[DocumentKind, type] = {
    cls.document_kind: cls
    for cls in (
        EnrollmentReceiptPayload,
        RegistrationReceiptPayload,
        TuitionPaymentReceiptPayload,
        InvoicePaymentReceiptPayload,
        BulletinPayload,
        CertificatePayload,
        FrequencyCertificatePayload,
        InvoicePayload,
    )
}


def payload_from_dict(kind: Union[DocumentKind, str], data: Dict[str, Any]) -> DocumentPayload:
    """
    Build the payload for a document kind from a plain dict.

    Raises:
        InvalidFieldError: If the kind is unknown
        ValidationError: If required fields are missing
    """
    try:
        kind = DocumentKind(kind)
    except ValueError:
        raise InvalidFieldError(str(kind), "document_kind", "unknown document kind")
    return PAYLOAD_TYPES[kind].from_dict(data)
