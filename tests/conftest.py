"""Shared fixtures for webnest tests."""

from pathlib import Path

import pytest

from webnest.browsers import Browser
from webnest.config import Config, IconConfig, InstallConfig


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config that keeps every file under tmp_path and skips OS registration."""
    return Config(
        icon=IconConfig(linux_icon_dir=tmp_path / "icons"),
        install=InstallConfig(register_with_os=False),
    )


@pytest.fixture
def browser() -> Browser:
    """A browser descriptor that does not need to exist on disk."""
    return Browser(
        browser_id="chrome",
        display_name="Google Chrome",
        executable_path="/opt/google/chrome/chrome",
    )


@pytest.fixture
def install_dir(tmp_path: Path) -> Path:
    path = tmp_path / "apps"
    path.mkdir()
    return path
