"""Document Builder Package

This package provides components for rendering official school documents as
single-page PDFs:

Core Classes:
- DocumentBuilder: Base class with the shared blocks and build template (from builder.py)
- FontManager: Font selection and text metrics
- LayoutEngine: Drawing primitives over one ReportLab canvas
- ContentRenderer: Image embedding, fixed-column and grid tables
- StyleProfile: FULL and MINIMAL rendering switches

Builders:
- EnrollmentReceiptBuilder, RegistrationReceiptBuilder,
  TuitionPaymentReceiptBuilder, InvoicePaymentReceiptBuilder (receipts.py)
- BulletinBuilder (bulletin.py)
- CertificateBuilder, FrequencyCertificateBuilder (certificates.py)
- InvoiceBuilder (invoice.py)

Utilities:
- coordinate_utils: Alignment helpers and the Cursor
- text_wrapper: Greedy word wrapping

Helper Functions:
- get_builder_class: Builder class for a document kind
"""
from typing import Dict, Type

from ..exceptions import InvalidFieldError
from ..payloads import DocumentKind

# Import core classes
from .builder import DocumentBuilder
from .font_manager import FontManager, FontVariant
from .layout_engine import LayoutEngine
from .content_renderer import Column, ContentRenderer
from .style_profile import FULL, MINIMAL, StyleProfile
from .receipts import (
    EnrollmentReceiptBuilder,
    InvoicePaymentReceiptBuilder,
    RegistrationReceiptBuilder,
    TuitionPaymentReceiptBuilder,
)
from .bulletin import BulletinBuilder
from .certificates import CertificateBuilder, FrequencyCertificateBuilder
from .invoice import InvoiceBuilder
from . import coordinate_utils
from .coordinate_utils import Cursor
from .text_wrapper import wrap_text

BUILDERS: Dict[DocumentKind, Type[DocumentBuilder]] = {
    builder.document_kind: builder
    for builder in (
        EnrollmentReceiptBuilder,
        RegistrationReceiptBuilder,
        TuitionPaymentReceiptBuilder,
        InvoicePaymentReceiptBuilder,
        BulletinBuilder,
        CertificateBuilder,
        FrequencyCertificateBuilder,
        InvoiceBuilder,
    )
}


def get_builder_class(kind: DocumentKind) -> Type[DocumentBuilder]:
    try:
        return BUILDERS[DocumentKind(kind)]
    except (KeyError, ValueError):
        raise InvalidFieldError(str(kind), "document_kind", "no builder registered")


# Expose public API
__all__ = [
    # Base builder class
    'DocumentBuilder',

    # Per-kind builders
    'EnrollmentReceiptBuilder',
    'RegistrationReceiptBuilder',
    'TuitionPaymentReceiptBuilder',
    'InvoicePaymentReceiptBuilder',
    'BulletinBuilder',
    'CertificateBuilder',
    'FrequencyCertificateBuilder',
    'InvoiceBuilder',
    'BUILDERS',
    'get_builder_class',

    # Component classes
    'FontManager',
    'FontVariant',
    'LayoutEngine',
    'ContentRenderer',
    'Column',
    'StyleProfile',
    'FULL',
    'MINIMAL',
    'Cursor',
    'wrap_text',

    # Utilities module
    'coordinate_utils',
]
