"""Tests for logo and photo resolution."""
import logging

import pytest
import requests

from school_docs.asset_resolver import AssetKind, AssetResolver, ImageFormat, sniff_image_format
from school_docs.config import AssetSettings, load_asset_settings


class FakeResponse:
    def __init__(self, content=b"", status_code=200):
        self.content = content
        self.status_code = status_code

    @property
    def ok(self):
        return 200 <= self.status_code < 400


@pytest.fixture
def fake_get(monkeypatch):
    """Replace requests.get; responses are keyed by URL."""
    responses = {}
    calls = []

    def _get(url, timeout=None):
        calls.append((url, timeout))
        response = responses.get(url)
        if isinstance(response, Exception):
            raise response
        if response is None:
            return FakeResponse(status_code=404)
        return response

    monkeypatch.setattr(requests, "get", _get)
    _get.responses = responses
    _get.calls = calls
    return _get


class TestSniffing:
    def test_png(self, png_bytes):
        assert sniff_image_format(png_bytes) is ImageFormat.PNG

    def test_jpeg(self, jpeg_bytes):
        assert sniff_image_format(jpeg_bytes) is ImageFormat.JPEG

    def test_unknown(self):
        assert sniff_image_format(b"GIF89a....") is ImageFormat.UNKNOWN
        assert sniff_image_format(b"") is ImageFormat.UNKNOWN


class TestLogo:
    def test_override_path_wins(self, tmp_path, png_bytes, jpeg_bytes):
        override = tmp_path / "custom.jpg"
        override.write_bytes(jpeg_bytes)
        (tmp_path / "school-logo.png").write_bytes(png_bytes)
        resolver = AssetResolver(AssetSettings(logo_path=str(override), assets_dir=str(tmp_path)))

        asset = resolver.resolve(AssetKind.LOGO)
        assert asset.format is ImageFormat.JPEG
        assert asset.source == str(override)

    def test_png_before_jpg(self, tmp_path, png_bytes, jpeg_bytes):
        (tmp_path / "school-logo.png").write_bytes(png_bytes)
        (tmp_path / "school-logo.jpg").write_bytes(jpeg_bytes)
        asset = AssetResolver(AssetSettings(assets_dir=str(tmp_path))).resolve_logo()
        assert asset.format is ImageFormat.PNG

    def test_missing_override_falls_through(self, tmp_path, jpeg_bytes):
        (tmp_path / "school-logo.jpg").write_bytes(jpeg_bytes)
        settings = AssetSettings(logo_path=str(tmp_path / "missing.png"), assets_dir=str(tmp_path))
        asset = AssetResolver(settings).resolve_logo()
        assert asset.format is ImageFormat.JPEG
        assert asset.source.endswith("school-logo.jpg")

    def test_unrecognized_file_skipped(self, tmp_path, jpeg_bytes):
        (tmp_path / "school-logo.png").write_bytes(b"GIF89a not a png")
        (tmp_path / "school-logo.jpg").write_bytes(jpeg_bytes)
        asset = AssetResolver(AssetSettings(assets_dir=str(tmp_path))).resolve_logo()
        assert asset.format is ImageFormat.JPEG

    def test_remote_url_last(self, tmp_path, fake_get, png_bytes):
        url = "https://cdn.example.com/logo.png"
        fake_get.responses[url] = FakeResponse(png_bytes)
        settings = AssetSettings(logo_url=url, assets_dir=str(tmp_path), timeout=5.0)

        asset = AssetResolver(settings).resolve_logo()
        assert asset.kind is AssetKind.LOGO
        assert asset.data == png_bytes
        assert fake_get.calls == [(url, 5.0)]

    def test_remote_url_not_fetched_when_file_found(self, tmp_path, fake_get, png_bytes):
        (tmp_path / "school-logo.png").write_bytes(png_bytes)
        settings = AssetSettings(logo_url="https://cdn.example.com/logo.png", assets_dir=str(tmp_path))
        AssetResolver(settings).resolve_logo()
        assert fake_get.calls == []

    def test_nothing_found_returns_none(self, tmp_path, fake_get):
        url = "https://cdn.example.com/logo.png"
        fake_get.responses[url] = requests.ConnectionError("unreachable")
        settings = AssetSettings(logo_url=url, assets_dir=str(tmp_path))
        assert AssetResolver(settings).resolve_logo() is None
        assert len(fake_get.calls) == 1

    def test_hint_path_tried_first(self, tmp_path, png_bytes, jpeg_bytes):
        hint = tmp_path / "tenant-logo.jpg"
        hint.write_bytes(jpeg_bytes)
        (tmp_path / "school-logo.png").write_bytes(png_bytes)
        asset = AssetResolver(AssetSettings(assets_dir=str(tmp_path))).resolve(AssetKind.LOGO, str(hint))
        assert asset.source == str(hint)


class TestPhoto:
    def test_fetch(self, fake_get, jpeg_bytes):
        url = "https://photos.example.com/aya.jpg"
        fake_get.responses[url] = FakeResponse(jpeg_bytes)
        asset = AssetResolver(AssetSettings()).resolve(AssetKind.PHOTO, url)
        assert asset.kind is AssetKind.PHOTO
        assert asset.format is ImageFormat.JPEG

    def test_no_url(self, fake_get):
        assert AssetResolver(AssetSettings()).resolve_photo(None) is None
        assert fake_get.calls == []

    def test_http_error_is_absence(self, fake_get):
        url = "https://photos.example.com/missing.jpg"
        fake_get.responses[url] = FakeResponse(status_code=500)
        assert AssetResolver(AssetSettings()).resolve_photo(url) is None

    def test_network_error_is_absence(self, fake_get):
        url = "https://photos.example.com/timeout.jpg"
        fake_get.responses[url] = requests.Timeout("slow")
        assert AssetResolver(AssetSettings()).resolve_photo(url) is None

    def test_no_retry(self, fake_get):
        url = "https://photos.example.com/flaky.jpg"
        fake_get.responses[url] = requests.ConnectionError("reset")
        AssetResolver(AssetSettings()).resolve_photo(url)
        assert len(fake_get.calls) == 1

    def test_unknown_format_is_absence(self, fake_get):
        url = "https://photos.example.com/aya.gif"
        fake_get.responses[url] = FakeResponse(b"GIF89a....")
        assert AssetResolver(AssetSettings()).resolve_photo(url) is None


class TestSettings:
    def test_read_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("SCHOOL_LOGO_PATH", "/srv/logo.png")
        monkeypatch.setenv("SCHOOL_LOGO_URL", "https://cdn.example.com/logo.png")
        monkeypatch.setenv("SCHOOL_ASSET_TIMEOUT", "2.5")
        monkeypatch.delenv("SCHOOL_ASSETS_DIR", raising=False)

        settings = load_asset_settings()
        assert settings.logo_path == "/srv/logo.png"
        assert settings.logo_url == "https://cdn.example.com/logo.png"
        assert settings.timeout == 2.5
        assert settings.assets_dir == str(tmp_path / "public")

    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        for name in ("SCHOOL_LOGO_PATH", "SCHOOL_LOGO_URL", "SCHOOL_ASSETS_DIR", "SCHOOL_ASSET_TIMEOUT"):
            monkeypatch.delenv(name, raising=False)
        settings = load_asset_settings()
        assert settings.logo_path is None
        assert settings.timeout is None

    def test_dotenv_file_loaded(self, monkeypatch, tmp_path, png_bytes):
        monkeypatch.chdir(tmp_path)
        # Registers the variable for removal at teardown, after .env has set it
        monkeypatch.setenv("SCHOOL_ASSETS_DIR", "unused")
        monkeypatch.delenv("SCHOOL_ASSETS_DIR")
        (tmp_path / "assets").mkdir()
        (tmp_path / "assets" / "school-logo.png").write_bytes(png_bytes)
        (tmp_path / ".env").write_text(f"SCHOOL_ASSETS_DIR={tmp_path / 'assets'}\n")

        asset = AssetResolver().resolve_logo()
        assert asset is not None
        assert asset.format is ImageFormat.PNG

    def test_unreadable_timeout_logged(self, monkeypatch, tmp_path, caplog):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("SCHOOL_ASSET_TIMEOUT", "soon")

        with caplog.at_level(logging.WARNING, logger="school_docs.config"):
            settings = load_asset_settings()

        assert settings.timeout is None
        assert "SCHOOL_ASSET_TIMEOUT" in caplog.text
        assert "'soon'" in caplog.text

    def test_font_paths_read_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("SCHOOL_FONT_PATH", "/usr/share/fonts/DejaVuSans.ttf")
        monkeypatch.delenv("SCHOOL_BOLD_FONT_PATH", raising=False)

        settings = load_asset_settings()
        assert settings.font_path == "/usr/share/fonts/DejaVuSans.ttf"
        assert settings.bold_font_path is None
