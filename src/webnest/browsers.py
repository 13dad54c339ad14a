"""Browser lookup tables and discovery.

The tables below are read-only: BROWSER_CONFIGS is a mapping proxy over
frozen dataclasses, built once at import time.
"""

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from .exceptions import NotFoundError
from .platforms import PlatformKind, detect_platform

logger = logging.getLogger(__name__)

APP_FLAG = "--app="


@dataclass(frozen=True)
class Browser:
    """A browser found on this system, ready to launch web apps."""

    browser_id: str
    display_name: str
    executable_path: str
    app_flag: str = APP_FLAG

    def app_argument(self, url: str) -> str:
        """Command-line argument that opens url in app mode."""
        return f"{self.app_flag}{url}"


@dataclass(frozen=True)
class BrowserSpec:
    """Static description of a supported browser."""

    browser_id: str
    name: str
    paths: dict[PlatformKind, tuple[str, ...]] = field(hash=False)
    app_dir_name: str
    command: str
    app_flag: str = APP_FLAG


@dataclass(frozen=True)
class BrowserAvailability:
    """Whether a supported browser is installed, and where."""

    browser_id: str
    name: str
    path: str | None

    @property
    def available(self) -> bool:
        return self.path is not None


def _spec(
    browser_id: str,
    name: str,
    app_dir_name: str,
    command: str,
    darwin: tuple[str, ...],
    win32: tuple[str, ...],
    linux: tuple[str, ...],
) -> BrowserSpec:
    return BrowserSpec(
        browser_id=browser_id,
        name=name,
        app_dir_name=app_dir_name,
        command=command,
        paths={
            PlatformKind.MACOS: darwin,
            PlatformKind.WINDOWS: win32,
            PlatformKind.LINUX: linux,
        },
    )


BROWSER_CONFIGS: MappingProxyType[str, BrowserSpec] = MappingProxyType(
    {
        "chrome": _spec(
            "chrome",
            "Google Chrome",
            "Chrome",
            "google-chrome",
            darwin=("/Applications/Google Chrome.app/Contents/MacOS/Google Chrome",),
            win32=(
                r"C:\Program Files\Google\Chrome\Application\chrome.exe",
                r"C:\Program Files (x86)\Google\Chrome\Application\chrome.exe",
                r"%LOCALAPPDATA%\Google\Chrome\Application\chrome.exe",
            ),
            linux=(
                "/usr/bin/google-chrome",
                "/usr/bin/google-chrome-stable",
                "/snap/bin/chromium",
                "/usr/bin/chromium",
                "/usr/bin/chromium-browser",
            ),
        ),
        "edge": _spec(
            "edge",
            "Microsoft Edge",
            "Edge",
            "microsoft-edge",
            darwin=("/Applications/Microsoft Edge.app/Contents/MacOS/Microsoft Edge",),
            win32=(
                r"C:\Program Files\Microsoft\Edge\Application\msedge.exe",
                r"C:\Program Files (x86)\Microsoft\Edge\Application\msedge.exe",
                r"%LOCALAPPDATA%\Microsoft\Edge\Application\msedge.exe",
            ),
            linux=(
                "/usr/bin/microsoft-edge",
                "/usr/bin/microsoft-edge-stable",
                "/opt/microsoft/msedge/msedge",
            ),
        ),
        "brave": _spec(
            "brave",
            "Brave Browser",
            "Brave",
            "brave",
            darwin=("/Applications/Brave Browser.app/Contents/MacOS/Brave Browser",),
            win32=(
                r"C:\Program Files\BraveSoftware\Brave-Browser\Application\brave.exe",
                r"C:\Program Files (x86)\BraveSoftware\Brave-Browser\Application\brave.exe",
                r"%LOCALAPPDATA%\BraveSoftware\Brave-Browser\Application\brave.exe",
            ),
            linux=(
                "/usr/bin/brave",
                "/usr/bin/brave-browser",
                "/snap/bin/brave",
                "/opt/brave.com/brave/brave",
            ),
        ),
        "chromium": _spec(
            "chromium",
            "Chromium",
            "Chromium",
            "chromium",
            darwin=("/Applications/Chromium.app/Contents/MacOS/Chromium",),
            win32=(
                r"C:\Program Files\Chromium\Application\chrome.exe",
                r"%LOCALAPPDATA%\Chromium\Application\chrome.exe",
            ),
            linux=(
                "/usr/bin/chromium",
                "/usr/bin/chromium-browser",
                "/snap/bin/chromium",
            ),
        ),
        "comet": _spec(
            "comet",
            "Comet Browser",
            "Comet",
            "comet",
            darwin=(
                "/Applications/Comet.app/Contents/MacOS/Comet",
                "/Applications/Comet Browser.app/Contents/MacOS/Comet Browser",
            ),
            win32=(
                r"C:\Program Files\Comet\Application\comet.exe",
                r"C:\Program Files (x86)\Comet\Application\comet.exe",
                r"%LOCALAPPDATA%\Comet\Application\comet.exe",
                r"C:\Program Files\Comet Browser\Application\comet.exe",
                r"%LOCALAPPDATA%\Comet Browser\Application\comet.exe",
            ),
            linux=(
                "/usr/bin/comet",
                "/usr/bin/comet-browser",
                "/opt/comet/comet",
                "/snap/bin/comet",
            ),
        ),
        "atlas": _spec(
            "atlas",
            "Atlas Browser",
            "Atlas",
            "atlas",
            darwin=(
                "/Applications/Atlas.app/Contents/MacOS/Atlas",
                "/Applications/Atlas Browser.app/Contents/MacOS/Atlas Browser",
            ),
            win32=(
                r"C:\Program Files\Atlas\Application\atlas.exe",
                r"C:\Program Files (x86)\Atlas\Application\atlas.exe",
                r"%LOCALAPPDATA%\Atlas\Application\atlas.exe",
                r"C:\Program Files\Atlas Browser\Application\atlas.exe",
                r"%LOCALAPPDATA%\Atlas Browser\Application\atlas.exe",
            ),
            linux=(
                "/usr/bin/atlas",
                "/usr/bin/atlas-browser",
                "/opt/atlas/atlas",
                "/snap/bin/atlas",
            ),
        ),
    }
)

SUPPORTED_BROWSER_IDS = tuple(BROWSER_CONFIGS)


def expand_path(path: str) -> str:
    """Expand ``~`` and environment variables (``%VAR%`` on Windows)."""
    return os.path.expandvars(os.path.expanduser(path))


def _is_executable(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


def find_browser_path(spec: BrowserSpec, platform: PlatformKind) -> str | None:
    """
    Locate a browser executable.

    Checks the known install locations first, then the PATH.

    Args:
        spec: Browser description
        platform: Platform whose locations to check

    Returns:
        Executable path, or None if the browser is not installed
    """
    for candidate in spec.paths.get(platform, ()):
        path = expand_path(candidate)
        if _is_executable(path):
            return path

    found = shutil.which(spec.command)
    if found and _is_executable(found):
        return found

    return None


def detect_browser(browser_id: str, platform: PlatformKind | None = None) -> Browser:
    """
    Resolve a browser ID to an installed browser.

    Args:
        browser_id: One of SUPPORTED_BROWSER_IDS (case-insensitive)
        platform: Platform to look on (host platform if omitted)

    Returns:
        Browser descriptor

    Raises:
        NotFoundError: Unknown browser ID, or browser not installed
        UnsupportedPlatformError: Host platform is not supported
    """
    spec = BROWSER_CONFIGS.get(browser_id.lower())
    if spec is None:
        raise NotFoundError(
            f"Unknown browser: {browser_id}. "
            f"Supported browsers: {', '.join(SUPPORTED_BROWSER_IDS)}"
        )

    platform = platform or detect_platform()
    path = find_browser_path(spec, platform)
    if path is None:
        raise NotFoundError(f'Browser "{spec.name}" not found on this system.')

    logger.debug(f"Using {spec.name} at {path}")
    return Browser(
        browser_id=spec.browser_id,
        display_name=spec.name,
        executable_path=path,
        app_flag=spec.app_flag,
    )


def get_supported_browsers(platform: PlatformKind | None = None) -> list[BrowserAvailability]:
    """List every supported browser with its install location, if any."""
    platform = platform or detect_platform()
    return [
        BrowserAvailability(
            browser_id=spec.browser_id,
            name=spec.name,
            path=find_browser_path(spec, platform),
        )
        for spec in BROWSER_CONFIGS.values()
    ]


def get_browser_name(browser_id: str) -> str:
    """Display name of a browser ID (the ID itself if unknown)."""
    spec = BROWSER_CONFIGS.get(browser_id.lower())
    return spec.name if spec else browser_id


def get_web_app_directory(
    browser_id: str,
    platform: PlatformKind | None = None,
    override: Path | None = None,
) -> Path:
    """
    Directory where launchers for a browser are installed.

    Unknown browser IDs use Chrome's directory.

    Args:
        browser_id: Browser ID
        platform: Target platform (host platform if omitted)
        override: Use this directory instead of the platform default

    Returns:
        Launcher directory (may not exist yet)

    Raises:
        UnsupportedPlatformError: Host platform is not supported
    """
    if override is not None:
        return override.expanduser()

    platform = platform or detect_platform()
    spec = BROWSER_CONFIGS.get(browser_id.lower(), BROWSER_CONFIGS["chrome"])

    if platform == PlatformKind.MACOS:
        return Path.home() / "Applications" / f"{spec.app_dir_name} Apps.localized"

    if platform == PlatformKind.WINDOWS:
        appdata = os.environ.get("APPDATA") or str(Path.home() / "AppData" / "Roaming")
        return (
            Path(appdata)
            / "Microsoft"
            / "Windows"
            / "Start Menu"
            / "Programs"
            / f"{spec.app_dir_name} Apps"
        )

    return Path.home() / ".local" / "share" / "applications"
