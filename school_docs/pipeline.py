"""Document Generation Pipeline

Main orchestration logic for document generation.
"""
import logging
from typing import Any, Dict, Optional, Union

from .asset_resolver import AssetResolver
from .config import load_asset_settings
from .document_builder import FULL, MINIMAL, FontManager, StyleProfile, get_builder_class
from .exceptions import GenerationError
from .generation_result import RenderedDocument
from .payloads import DocumentKind, DocumentPayload, payload_from_dict

logger = logging.getLogger(__name__)


class DocumentGenerationPipeline:
    """Document generation orchestrator.

    This class orchestrates the generation of one document:
    1. Validation - happens when the payload is constructed, before any drawing
    2. Primary render - FULL profile (images, centered header, bold, color)
    3. Fallback render - MINIMAL profile, only if the primary render raised
    4. Result - PDF bytes with a deterministic filename

    Each call builds its own page, buffer and asset lookups; nothing is shared
    between calls.

    Attributes:
        asset_resolver: Source of logo and photo bytes
        font_manager: Fonts and text metrics
    """

    def __init__(self, asset_resolver: Optional[AssetResolver] = None,
                 font_manager: Optional[FontManager] = None):
        """Initialize pipeline with optional asset resolver and font manager.

        Args:
            asset_resolver: Resolver used by the primary render (default reads the environment)
            font_manager: Fonts used by both renders (default from SCHOOL_FONT_PATH, else Helvetica)
        """
        self.asset_resolver = asset_resolver or AssetResolver()
        self.font_manager = font_manager or FontManager.from_settings(load_asset_settings())

    def generate(self, payload: DocumentPayload) -> RenderedDocument:
        """Render a validated payload, falling back to the minimal rendering.

        Args:
            payload: Document payload (already validated at construction)

        Returns:
            RenderedDocument with the PDF bytes

        Raises:
            GenerationError: If both the primary and the fallback render fail
        """
        kind = payload.document_kind
        subject_id = payload.subject_id

        try:
            content = self._render(payload, FULL)
            used_fallback = False
        except Exception as primary_error:
            logger.warning(
                f"Primary rendering of {kind.value} for '{subject_id}' failed, using fallback: {primary_error}",
                exc_info=True,
            )
            try:
                content = self._render(payload, MINIMAL)
            except Exception as fallback_error:
                logger.error(f"Fallback rendering of {kind.value} for '{subject_id}' failed: {fallback_error}")
                raise GenerationError(kind.value, subject_id, fallback_error) from fallback_error
            used_fallback = True

        result = RenderedDocument(
            content=content,
            filename=payload.filename,
            document_kind=kind,
            used_fallback=used_fallback,
        )
        logger.info(
            f"Generated {kind.value} for '{subject_id}' ({result.content_length} bytes"
            f"{', fallback' if used_fallback else ''})"
        )
        return result

    def generate_from_dict(self, kind: Union[DocumentKind, str], data: Dict[str, Any]) -> RenderedDocument:
        """Validate a plain dict into a payload, then generate.

        Raises:
            ValidationError: If the dict is missing required fields; nothing is rendered
            GenerationError: If both renders fail
        """
        payload = payload_from_dict(kind, data)
        return self.generate(payload)

    def _render(self, payload: DocumentPayload, profile: StyleProfile) -> bytes:
        builder_class = get_builder_class(payload.document_kind)
        builder = builder_class(
            profile=profile,
            asset_resolver=self.asset_resolver,
            font_manager=self.font_manager,
        )
        logger.debug(f"Rendering {payload.document_kind.value} with {profile.name} profile")
        return builder.build(payload)


def generate_document(payload: Union[DocumentPayload, Dict[str, Any]],
                      kind: Optional[Union[DocumentKind, str]] = None,
                      asset_resolver: Optional[AssetResolver] = None) -> RenderedDocument:
    """
    Convenience wrapper around DocumentGenerationPipeline.

    Args:
        payload: A payload object, or a plain dict together with kind
        kind: Document kind when payload is a dict
        asset_resolver: Optional resolver (default reads the environment)

    Returns:
        RenderedDocument
    """
    pipeline = DocumentGenerationPipeline(asset_resolver=asset_resolver)
    if isinstance(payload, dict):
        if kind is None:
            raise ValueError("kind is required when payload is a dict")
        return pipeline.generate_from_dict(kind, payload)
    return pipeline.generate(payload)
