"""Listing and removal of installed web apps.

Launchers are found by scanning the per-browser install directory and
asking the platform emitter to reverse its own naming scheme.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from .. import emitters  # noqa: F401 - registers emitter plugins
from ..browsers import get_browser_name, get_web_app_directory
from ..config import Config
from ..platforms import PlatformKind, detect_platform
from ..utils.naming import sanitize_app_name
from .registry import registry

logger = logging.getLogger(__name__)


@dataclass
class InstalledApp:
    """A launcher found in a browser's install directory."""

    name: str
    path: Path
    browser: str
    browser_id: str


@dataclass
class RemoveResult:
    """
    Outcome of removing an app from one browser.

    ``not_found`` is a soft outcome, distinct from an I/O failure, so that
    sweeps over several browsers can skip misses.
    """

    success: bool
    browser_id: str
    browser_name: str
    app_path: Path | None = None
    not_found: bool = False
    error: str | None = None


def list_installed_apps(
    browser_id: str,
    platform: PlatformKind | None = None,
    config: Config | None = None,
) -> list[InstalledApp]:
    """
    List web apps installed for a browser.

    Args:
        browser_id: Browser ID
        platform: Target platform (host platform if omitted)
        config: Application configuration (defaults if omitted)

    Returns:
        Installed apps sorted by name (empty if the directory is missing)
    """
    config = config or Config()
    platform = platform or detect_platform()
    emitter = registry.emitter_for(platform)
    apps_dir = get_web_app_directory(browser_id, platform, override=config.install.apps_dir)

    if not apps_dir.is_dir():
        logger.debug(f"No install directory for {browser_id}: {apps_dir}")
        return []

    browser_name = get_browser_name(browser_id)
    apps = []
    try:
        entries = sorted(apps_dir.iterdir())
    except OSError as e:
        logger.warning(f"Cannot read {apps_dir}: {e}")
        return []

    for entry in entries:
        if not entry.name.lower().endswith(emitter.launcher_suffix):
            continue
        name = emitter.display_name(entry)
        if name is None:
            continue
        apps.append(
            InstalledApp(name=name, path=entry, browser=browser_name, browser_id=browser_id)
        )

    return sorted(apps, key=lambda app: app.name.lower())


def remove_web_app(
    name: str,
    browser_id: str,
    platform: PlatformKind | None = None,
    config: Config | None = None,
) -> RemoveResult:
    """
    Remove an installed web app by name.

    Args:
        name: App name as shown by list_installed_apps
        browser_id: Browser ID
        platform: Target platform (host platform if omitted)
        config: Application configuration (defaults if omitted)

    Returns:
        RemoveResult; not_found is set when no matching launcher exists
    """
    config = config or Config()
    platform = platform or detect_platform()
    emitter = registry.emitter_for(platform)
    apps_dir = get_web_app_directory(browser_id, platform, override=config.install.apps_dir)
    browser_name = get_browser_name(browser_id)

    safe_name = sanitize_app_name(name)
    if not safe_name or not apps_dir.is_dir():
        return RemoveResult(
            success=False, browser_id=browser_id, browser_name=browser_name, not_found=True
        )

    try:
        app_path = emitter.locate(apps_dir, safe_name)
    except OSError as e:
        return RemoveResult(
            success=False, browser_id=browser_id, browser_name=browser_name, error=str(e)
        )

    if app_path is None:
        return RemoveResult(
            success=False, browser_id=browser_id, browser_name=browser_name, not_found=True
        )

    try:
        emitter.remove(app_path)
    except OSError as e:
        logger.error(f"Failed to remove {app_path}: {e}")
        return RemoveResult(
            success=False,
            browser_id=browser_id,
            browser_name=browser_name,
            app_path=app_path,
            error=str(e),
        )

    logger.info(f"Removed {app_path}")
    emitter.after_remove(app_path, config)

    return RemoveResult(
        success=True, browser_id=browser_id, browser_name=browser_name, app_path=app_path
    )


def remove_from_browsers(
    name: str,
    browser_ids: list[str],
    platform: PlatformKind | None = None,
    config: Config | None = None,
) -> list[RemoveResult]:
    """Remove an app from every listed browser; misses are reported, not raised."""
    return [remove_web_app(name, browser_id, platform, config) for browser_id in browser_ids]


def list_apps_for_browsers(
    browser_ids: list[str],
    platform: PlatformKind | None = None,
    config: Config | None = None,
) -> list[InstalledApp]:
    """
    List apps across several browsers.

    Browsers that share an install directory (all of them on Linux) would
    report the same launcher more than once; each path is listed once,
    under the first browser that reported it.
    """
    seen: set[Path] = set()
    apps = []
    for browser_id in browser_ids:
        for app in list_installed_apps(browser_id, platform, config):
            if app.path in seen:
                continue
            seen.add(app.path)
            apps.append(app)
    return apps
