"""Asset Resolver Module

Locates the school logo and student photos for document headers.

Every lookup is fallible and none of them raises to the caller: a missing
or unreadable image simply yields None and the document is drawn without it.
Nothing is cached; assets are fetched fresh for each document.
"""
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

import requests

from .config import AssetSettings, LOGO_BASENAME, LOGO_EXTENSIONS, load_asset_settings
from .exceptions import AssetFetchError

logger = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
JPEG_SIGNATURE = b"\xff\xd8\xff"


class AssetKind(str, Enum):
    LOGO = "logo"
    PHOTO = "photo"


class ImageFormat(str, Enum):
    PNG = "png"
    JPEG = "jpeg"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class AssetBytes:
    """Raw image content tagged with its sniffed format.

    Attributes:
        kind: Logo or photo
        format: Format detected from the magic bytes
        data: Raw file content
        source: Path or URL it was read from (for diagnostics)
    """

    kind: AssetKind
    format: ImageFormat
    data: bytes
    source: str


def sniff_image_format(data: bytes) -> ImageFormat:
    """
    Detect PNG or JPEG from the leading bytes.

    Examples:
        >>> sniff_image_format(b"\\x89PNG\\r\\n\\x1a\\n....")
        <ImageFormat.PNG: 'png'>
        >>> sniff_image_format(b"GIF89a")
        <ImageFormat.UNKNOWN: 'unknown'>
    """
    if data.startswith(PNG_SIGNATURE):
        return ImageFormat.PNG
    if data.startswith(JPEG_SIGNATURE):
        return ImageFormat.JPEG
    return ImageFormat.UNKNOWN


class AssetResolver:
    """Resolve optional images from disk or over HTTP.

    Logo candidates, first match wins:
    1. Explicit override path (SCHOOL_LOGO_PATH) if it exists
    2. <assets_dir>/school-logo.png
    3. <assets_dir>/school-logo.jpg
    4. Remote URL (SCHOOL_LOGO_URL), single attempt, no retry

    Photos are a single fetch of the URL carried by the payload.

    Attributes:
        settings: Asset settings; read from the environment per call when None
        session: Optional requests session (mainly for tests)
    """

    def __init__(self, settings: Optional[AssetSettings] = None, session: Optional[requests.Session] = None):
        self._settings = settings
        self.session = session

    @property
    def settings(self) -> AssetSettings:
        return self._settings or load_asset_settings()

    def resolve(self, kind: AssetKind, hint: Optional[str] = None) -> Optional[AssetBytes]:
        """
        Resolve an asset of the given kind.

        Args:
            kind: AssetKind.LOGO or AssetKind.PHOTO
            hint: Photo URL for photos; for logos an optional path or URL
                  tried before the configured candidates

        Returns:
            AssetBytes with a known format, or None when nothing usable was found
        """
        if kind is AssetKind.PHOTO:
            return self.resolve_photo(hint)
        return self.resolve_logo(hint)

    def resolve_logo(self, hint: Optional[str] = None) -> Optional[AssetBytes]:
        settings = self.settings
        for source, read in self._logo_candidates(settings, hint):
            try:
                asset = self._tag(AssetKind.LOGO, read(), source)
            except AssetFetchError as e:
                logger.debug(f"Logo candidate skipped: {e}")
                continue
            logger.debug(f"Logo found at {source} ({asset.format.value}, {len(asset.data)} bytes)")
            return asset

        logger.info("No school logo found, rendering without it")
        return None

    def resolve_photo(self, url: Optional[str]) -> Optional[AssetBytes]:
        if not url:
            logger.debug("No photo URL supplied")
            return None
        try:
            return self._tag(AssetKind.PHOTO, self._fetch_url(url, self.settings.timeout), url)
        except AssetFetchError as e:
            logger.warning(f"Student photo unavailable, rendering without it: {e}")
            return None

    def _logo_candidates(self, settings: AssetSettings, hint: Optional[str]) -> List:
        candidates = []
        if hint:
            if hint.startswith(("http://", "https://")):
                candidates.append((hint, lambda: self._fetch_url(hint, settings.timeout)))
            else:
                candidates.append((hint, lambda: self._read_file(hint)))
        if settings.logo_path:
            candidates.append((settings.logo_path, self._file_reader(settings.logo_path)))
        for extension in LOGO_EXTENSIONS:
            path = os.path.join(settings.assets_dir, LOGO_BASENAME + extension)
            candidates.append((path, self._file_reader(path)))
        if settings.logo_url:
            candidates.append((settings.logo_url, lambda: self._fetch_url(settings.logo_url, settings.timeout)))
        return candidates

    def _file_reader(self, path: str) -> Callable[[], bytes]:
        return lambda: self._read_file(path)

    @staticmethod
    def _read_file(path: str) -> bytes:
        if not os.path.isfile(path):
            raise AssetFetchError(path, "file does not exist")
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            raise AssetFetchError(path, str(e))

    def _fetch_url(self, url: str, timeout: Optional[float] = None) -> bytes:
        getter = self.session.get if self.session is not None else requests.get
        try:
            response = getter(url, timeout=timeout)
        except requests.RequestException as e:
            raise AssetFetchError(url, str(e))

        if not response.ok:
            raise AssetFetchError(url, f"HTTP {response.status_code}")
        return response.content

    @staticmethod
    def _tag(kind: AssetKind, data: bytes, source: str) -> AssetBytes:
        image_format = sniff_image_format(data)
        if image_format is ImageFormat.UNKNOWN:
            raise AssetFetchError(source, "not a PNG or JPEG image")
        return AssetBytes(kind=kind, format=image_format, data=data, source=source)
