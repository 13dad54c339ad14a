"""End-to-end install tests with no network access."""

from unittest.mock import Mock, patch

import httpx
import pytest

from webnest.core.installer import install_web_app
from webnest.emitters.protocol import ICON_UNAVAILABLE_NOTE
from webnest.exceptions import UnsupportedPlatformError
from webnest.fetcher import FetchResult
from webnest.platforms import PlatformKind

_real_client = httpx.Client


@pytest.fixture
def offline(monkeypatch):
    """Make every HTTP request fail as if the network were unreachable."""

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Network is unreachable", request=request)

    def offline_client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(refuse)
        return _real_client(*args, **kwargs)

    monkeypatch.setattr("webnest.fetcher.httpx.Client", offline_client)


class TestOfflineInstall:
    """Installs must succeed without network, just without an icon."""

    def test_linux(self, offline, install_dir, browser, config):
        """Test an offline Linux install."""
        result = install_web_app(
            "https://example.com",
            "Example",
            browser,
            platform=PlatformKind.LINUX,
            config=config,
            install_dir=install_dir,
        )

        assert result.success is True
        assert result.app_path == install_dir / "com.webnest.example-com.desktop"
        assert result.app_path.exists()
        assert result.note.startswith(ICON_UNAVAILABLE_NOTE)
        assert "Icon=web-browser" in result.app_path.read_text()
        assert result.icon is not None and result.icon.success is False

    def test_macos(self, offline, install_dir, browser, config):
        """Test an offline macOS install."""
        result = install_web_app(
            "https://example.com",
            "Example",
            browser,
            platform=PlatformKind.MACOS,
            config=config,
            install_dir=install_dir,
        )

        assert result.success is True
        assert result.app_path == install_dir / "Example.app"
        assert (result.app_path / "Contents" / "Info.plist").exists()
        assert result.note.startswith(ICON_UNAVAILABLE_NOTE)
        resources = result.app_path / "Contents" / "Resources"
        assert not any(p.name.startswith(".icon-temp-") for p in resources.iterdir())

    @patch("webnest.emitters.windows_emitter.subprocess.run")
    def test_windows(self, mock_run, offline, install_dir, browser, config):
        """Test an offline Windows install."""
        mock_run.return_value = Mock(returncode=0, stderr="")

        result = install_web_app(
            "https://example.com",
            "Example",
            browser,
            platform=PlatformKind.WINDOWS,
            config=config,
            install_dir=install_dir,
        )

        assert result.success is True
        assert result.app_path == install_dir / "Example.lnk"
        assert result.note.startswith(ICON_UNAVAILABLE_NOTE)


class TestInstallOptions:
    """Test install orchestration choices."""

    @patch("webnest.core.installer.prepare_icon")
    def test_icon_disabled_skips_pipeline(self, mock_prepare, install_dir, browser, config):
        """Test that a disabled icon skips discovery."""
        config.icon.enabled = False

        result = install_web_app(
            "https://example.com",
            "Example",
            browser,
            platform=PlatformKind.LINUX,
            config=config,
            install_dir=install_dir,
        )

        mock_prepare.assert_not_called()
        assert result.success is True
        assert not result.note.startswith(ICON_UNAVAILABLE_NOTE)

    @patch("webnest.icons.transcoder.fetch_asset")
    @patch("webnest.icons.transcoder.discover_best_icon_url")
    def test_linux_icon_written_to_icon_dir(
        self, mock_discover, mock_fetch, install_dir, browser, config
    ):
        """Test that the Linux icon lands in the icon directory."""
        mock_discover.return_value = "https://example.com/icon.png"
        mock_fetch.return_value = FetchResult(
            content=b"\x89PNG", content_type="image/png", url="https://example.com/icon.png"
        )

        result = install_web_app(
            "https://example.com",
            "Example",
            browser,
            platform=PlatformKind.LINUX,
            config=config,
            install_dir=install_dir,
        )

        icon = config.icon.linux_icon_path / "com.webnest.example-com.png"
        assert icon.read_bytes() == b"\x89PNG"
        assert f"Icon={icon}" in result.app_path.read_text()

    def test_default_install_dir_uses_override(self, tmp_path, browser, config):
        """Test that the configured apps directory is used."""
        config.icon.enabled = False
        config.install.apps_dir = tmp_path / "custom"

        result = install_web_app(
            "https://example.com", "Example", browser, platform=PlatformKind.LINUX, config=config
        )

        assert result.app_path.parent == tmp_path / "custom"

    def test_unsupported_platform_propagates(self, browser, config):
        """Test that an unknown OS raises UnsupportedPlatformError."""
        with patch("webnest.platforms.sys.platform", "sunos5"):
            with pytest.raises(UnsupportedPlatformError):
                install_web_app("https://example.com", "Example", browser, config=config)
