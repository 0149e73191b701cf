"""Custom Exception Hierarchy

Exception hierarchy for school_docs providing granular exception types for
the different document generation failure scenarios.
"""


class SchoolDocsError(Exception):
    """Base exception for all school_docs errors.

    Catching this exception will catch all custom exceptions raised while
    validating payloads or generating documents.
    """
    pass


# Validation Errors
class ValidationError(SchoolDocsError):
    """Raised when a document payload fails validation."""
    pass


class MissingFieldError(ValidationError):
    """Raised when a required payload field is absent or empty."""

    def __init__(self, document_kind: str, field: str):
        self.document_kind = document_kind
        self.field = field
        super().__init__(f"Missing required field '{field}' for {document_kind}")


class InvalidFieldError(ValidationError):
    """Raised when a payload field has an unusable value."""

    def __init__(self, document_kind: str, field: str, reason: str):
        self.document_kind = document_kind
        self.field = field
        super().__init__(f"Invalid field '{field}' for {document_kind}: {reason}")


# Asset Errors (never escape the resolver)
class AssetError(SchoolDocsError):
    """Base class for asset resolution errors."""
    pass


class AssetFetchError(AssetError):
    """Raised by a single asset lookup when it cannot produce bytes."""

    def __init__(self, source: str, reason: str):
        self.source = source
        super().__init__(f"Could not load asset from '{source}': {reason}")


# PDF Rendering Errors
class RenderingError(SchoolDocsError):
    """Base class for PDF rendering errors."""
    pass


class FontError(RenderingError):
    """Raised when font setup or registration fails."""
    pass


class ImageRenderingError(RenderingError):
    """Raised when an image cannot be decoded or embedded."""

    def __init__(self, asset_kind: str, reason: str):
        self.asset_kind = asset_kind
        super().__init__(f"Failed to render {asset_kind} image: {reason}")


class LayoutError(RenderingError):
    """Raised when layout arithmetic receives unusable input."""
    pass


# Generation Errors
class GenerationError(SchoolDocsError):
    """Raised when both the primary and the fallback render fail.

    This wraps the fallback exception while preserving the document context.
    """

    def __init__(self, document_kind: str, subject_id: str, original_exception: Exception):
        self.document_kind = document_kind
        self.subject_id = subject_id
        self.original_exception = original_exception
        super().__init__(
            f"Failed to generate {document_kind} for '{subject_id}': {str(original_exception)}"
        )
