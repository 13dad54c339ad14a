"""Tests for listing and removing installed apps."""

from pathlib import Path

import pytest

from webnest.core.app_registry import (
    list_apps_for_browsers,
    list_installed_apps,
    remove_from_browsers,
    remove_web_app,
)
from webnest.core.installer import install_web_app
from webnest.platforms import PlatformKind


@pytest.fixture
def registry_config(config, install_dir):
    """Config whose launcher directory is the test install directory."""
    config.install.apps_dir = install_dir
    config.icon.enabled = False
    return config


def install(url, name, browser, platform, config):
    result = install_web_app(url, name, browser, platform=platform, config=config)
    assert result.success
    return result


class TestListInstalledApps:
    """Test list_installed_apps()."""

    def test_missing_directory_is_empty(self, config, tmp_path):
        """Test that a missing install directory lists nothing."""
        config.install.apps_dir = tmp_path / "does-not-exist"
        assert list_installed_apps("chrome", PlatformKind.LINUX, config) == []

    def test_linux_round_trip(self, registry_config, browser):
        """Test an installed app is listed once under its display name."""
        install("https://example.com", "Example: Site", browser, PlatformKind.LINUX, registry_config)

        apps = list_installed_apps("chrome", PlatformKind.LINUX, registry_config)

        assert [app.name for app in apps] == ["Example: Site"]
        assert apps[0].browser == "Google Chrome"
        assert apps[0].browser_id == "chrome"

    def test_macos_round_trip(self, registry_config, browser):
        """Test bundle names come back sanitized."""
        install("https://example.com", "Example: Site", browser, PlatformKind.MACOS, registry_config)

        apps = list_installed_apps("chrome", PlatformKind.MACOS, registry_config)
        assert [app.name for app in apps] == ["Example Site"]

    def test_linux_ignores_foreign_entries(self, registry_config, install_dir):
        """Test that desktop entries from other tools are not listed."""
        (install_dir / "firefox.desktop").write_text("[Desktop Entry]\nName=Firefox\n")
        assert list_installed_apps("chrome", PlatformKind.LINUX, registry_config) == []

    def test_sorted_by_name(self, registry_config, browser):
        """Test that apps are sorted by name, ignoring case."""
        for url, name in [("https://b.com", "beta"), ("https://a.com", "Alpha")]:
            install(url, name, browser, PlatformKind.MACOS, registry_config)

        apps = list_installed_apps("chrome", PlatformKind.MACOS, registry_config)
        assert [app.name for app in apps] == ["Alpha", "beta"]

    def test_shared_directory_listed_once(self, registry_config, browser):
        """Test that browsers sharing a directory do not duplicate entries."""
        install("https://example.com", "Example", browser, PlatformKind.LINUX, registry_config)

        apps = list_apps_for_browsers(["chrome", "edge"], PlatformKind.LINUX, registry_config)
        assert len(apps) == 1


class TestRemoveWebApp:
    """Test remove_web_app()."""

    def test_never_installed_is_not_found(self, registry_config):
        """Test that removing an unknown app reports not_found."""
        result = remove_web_app("Nothing Here", "chrome", PlatformKind.LINUX, registry_config)

        assert result.success is False
        assert result.not_found is True
        assert result.error is None

    def test_missing_directory_is_not_found(self, config, tmp_path):
        """Test that a missing install directory reports not_found."""
        config.install.apps_dir = tmp_path / "missing"
        result = remove_web_app("App", "chrome", PlatformKind.MACOS, config)
        assert result.not_found is True

    def test_remove_macos_bundle(self, registry_config, browser):
        """Test that removal matches a bundle name case-insensitively."""
        app_path = install(
            "https://example.com", "Example", browser, PlatformKind.MACOS, registry_config
        ).app_path

        result = remove_web_app("example", "chrome", PlatformKind.MACOS, registry_config)

        assert result.success is True
        assert result.browser_name == "Google Chrome"
        assert not Path(app_path).exists()
        assert list_installed_apps("chrome", PlatformKind.MACOS, registry_config) == []

    def test_remove_linux_by_display_name(self, registry_config, browser):
        """Test that a Linux entry is removed by its Name= value."""
        app_path = install(
            "https://mail.google.com", "Gmail: Inbox", browser, PlatformKind.LINUX, registry_config
        ).app_path

        result = remove_web_app("Gmail: Inbox", "chrome", PlatformKind.LINUX, registry_config)

        assert result.success is True
        assert result.app_path == app_path
        assert not app_path.exists()

    def test_remove_io_error_is_not_not_found(self, registry_config, browser, monkeypatch):
        """Test that a failed delete is an error, not a miss."""
        install("https://example.com", "Example", browser, PlatformKind.MACOS, registry_config)

        def fail(path):
            raise PermissionError("read-only")

        monkeypatch.setattr("webnest.emitters.macos_emitter.shutil.rmtree", fail)
        result = remove_web_app("Example", "chrome", PlatformKind.MACOS, registry_config)

        assert result.success is False
        assert result.not_found is False
        assert "read-only" in result.error

    def test_remove_from_browsers_reports_each(self, registry_config, browser):
        """Test that every browser gets its own result."""
        install("https://example.com", "Example", browser, PlatformKind.LINUX, registry_config)

        results = remove_from_browsers(
            "Example", ["chrome", "edge"], PlatformKind.LINUX, registry_config
        )

        assert [r.success for r in results] == [True, False]
        assert results[1].not_found is True
