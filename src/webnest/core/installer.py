"""Install orchestration: icon pipeline followed by the platform emitter."""

import logging
from dataclasses import dataclass
from pathlib import Path

from .. import emitters  # noqa: F401 - registers emitter plugins
from ..browsers import Browser, get_web_app_directory
from ..config import Config
from ..exceptions import LauncherCreationError
from ..icons.transcoder import IconResult, prepare_icon
from ..platforms import PlatformKind, detect_platform
from .registry import registry

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Outcome of installing one web app."""

    success: bool
    app_path: Path | None = None
    note: str = ""
    error: str | None = None
    icon: IconResult | None = None


def install_web_app(
    url: str,
    app_name: str,
    browser: Browser,
    platform: PlatformKind | None = None,
    config: Config | None = None,
    install_dir: Path | None = None,
) -> InstallResult:
    """
    Install a launcher that opens url in the browser's app mode.

    Icon problems never fail the install; they only add a note. A launcher
    that cannot be written is reported as an unsuccessful result.

    Args:
        url: Website URL
        app_name: Display name of the app
        browser: Resolved browser descriptor
        platform: Target platform (host platform if omitted)
        config: Application configuration (defaults if omitted)
        install_dir: Launcher directory (per-browser default if omitted)

    Returns:
        InstallResult with the artifact path and user-visible note

    Raises:
        UnsupportedPlatformError: Host platform is not supported
    """
    config = config or Config()
    platform = platform or detect_platform()
    emitter = registry.emitter_for(platform)

    if install_dir is None:
        install_dir = get_web_app_directory(
            browser.browser_id, platform, override=config.install.apps_dir
        )

    try:
        install_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return InstallResult(success=False, error=f"Cannot create {install_dir}: {e}")

    icon_result = None
    if config.icon.enabled:
        icon_dir, icon_name = emitter.icon_target(url, app_name, install_dir, config)
        icon_result = prepare_icon(url, icon_dir, platform, config, icon_name=icon_name)
        if not icon_result.success:
            logger.warning(f"Icon unavailable for {url}: {icon_result.error}")
    else:
        logger.debug("Icon fetching disabled")

    try:
        emitted = emitter.emit(url, app_name, browser, install_dir, icon_result, config)
    except LauncherCreationError as e:
        logger.error(f"Failed to create launcher: {e}")
        return InstallResult(success=False, error=str(e), icon=icon_result)

    return InstallResult(
        success=emitted.success,
        app_path=emitted.app_path,
        note=emitted.note,
        error=emitted.error,
        icon=icon_result,
    )
