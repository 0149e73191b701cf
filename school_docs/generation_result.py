"""Generation Result Dataclass

Output of the document generation pipeline.
"""
from dataclasses import dataclass
from typing import Dict

from .payloads import DocumentKind
from .utils import content_disposition


@dataclass(frozen=True)
class RenderedDocument:
    """A generated PDF ready to be returned to an HTTP client.

    Attributes:
        content: PDF bytes
        filename: Suggested attachment filename (sanitized, ends in .pdf)
        document_kind: Kind of document rendered
        used_fallback: True if the degraded (MINIMAL) rendering was returned
    """

    content: bytes
    filename: str
    document_kind: DocumentKind
    used_fallback: bool = False

    @property
    def content_length(self) -> int:
        return len(self.content)

    @property
    def content_disposition(self) -> str:
        return content_disposition(self.filename)

    @property
    def headers(self) -> Dict[str, str]:
        """Response headers for serving the document as a download."""
        return {
            "Content-Type": "application/pdf",
            "Content-Disposition": self.content_disposition,
            "Content-Length": str(self.content_length),
        }
