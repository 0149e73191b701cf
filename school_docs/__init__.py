"""school_docs: official school documents as single-page PDFs.

Typical use:

    from school_docs import DocumentGenerationPipeline, DocumentKind

    pipeline = DocumentGenerationPipeline()
    document = pipeline.generate_from_dict(DocumentKind.INVOICE, invoice_row)
    return document.content, document.headers
"""
from .asset_resolver import AssetBytes, AssetKind, AssetResolver, ImageFormat
from .config import AssetSettings, load_asset_settings
from .exceptions import (
    SchoolDocsError,
    ValidationError,
    MissingFieldError,
    InvalidFieldError,
    RenderingError,
    GenerationError,
)
from .generation_result import RenderedDocument
from .payloads import (
    DocumentKind,
    SchoolIdentity,
    EnrollmentReceiptPayload,
    RegistrationReceiptPayload,
    TuitionPaymentReceiptPayload,
    InvoicePaymentReceiptPayload,
    BulletinPayload,
    CertificatePayload,
    FrequencyCertificatePayload,
    InvoicePayload,
    payload_from_dict,
)
from .pipeline import DocumentGenerationPipeline, generate_document

__version__ = "0.1.0"

__all__ = [
    'DocumentGenerationPipeline',
    'generate_document',
    'RenderedDocument',
    'DocumentKind',
    'SchoolIdentity',
    'EnrollmentReceiptPayload',
    'RegistrationReceiptPayload',
    'TuitionPaymentReceiptPayload',
    'InvoicePaymentReceiptPayload',
    'BulletinPayload',
    'CertificatePayload',
    'FrequencyCertificatePayload',
    'InvoicePayload',
    'payload_from_dict',
    'AssetResolver',
    'AssetSettings',
    'AssetBytes',
    'AssetKind',
    'ImageFormat',
    'load_asset_settings',
    'SchoolDocsError',
    'ValidationError',
    'MissingFieldError',
    'InvalidFieldError',
    'RenderingError',
    'GenerationError',
]
