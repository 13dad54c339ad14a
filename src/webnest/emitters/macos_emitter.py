"""macOS emitter - writes a minimal .app bundle that opens the site in app mode."""

import logging
import plistlib
import shlex
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from ..constants import (
    BUNDLE_VERSION,
    LSREGISTER_PATH,
    MACOS_ICON_NAME,
    MACOS_MIN_SYSTEM_VERSION,
)
from ..core.registry import registry
from ..exceptions import LauncherCreationError
from ..platforms import PlatformKind
from ..utils.naming import generate_app_id, sanitize_app_name
from .hooks import run_os_hook
from .protocol import EmitResult, LauncherArtifact, icon_note

if TYPE_CHECKING:
    from ..browsers import Browser
    from ..config import Config
    from ..icons.transcoder import IconResult

logger = logging.getLogger(__name__)

SPOTLIGHT_NOTE = (
    "The app should appear in Spotlight search. "
    "If not, try restarting Spotlight (killall mds)."
)


def build_launcher_script(browser: "Browser", url: str) -> str:
    """Shell script placed in Contents/MacOS that execs the browser."""
    executable = shlex.quote(browser.executable_path)
    argument = shlex.quote(browser.app_argument(url))
    return f'#!/bin/bash\nexec {executable} {argument} "$@"\n'


def build_info_plist(app_name: str, safe_name: str, bundle_id: str) -> dict:
    """Info.plist contents for a web app bundle."""
    return {
        "CFBundleExecutable": safe_name,
        "CFBundleIdentifier": bundle_id,
        "CFBundleName": app_name,
        "CFBundleDisplayName": app_name,
        "CFBundleIconFile": MACOS_ICON_NAME,
        "CFBundlePackageType": "APPL",
        "CFBundleVersion": BUNDLE_VERSION,
        "CFBundleShortVersionString": BUNDLE_VERSION,
        "LSMinimumSystemVersion": MACOS_MIN_SYSTEM_VERSION,
        "NSHighResolutionCapable": True,
        "LSUIElement": False,
    }


@registry.register
class MacOSEmitter:
    """Writes ``<install_dir>/<name>.app`` bundles."""

    platform = PlatformKind.MACOS
    name = "macOS app bundle"
    description = "Application bundle registered with Launch Services"
    launcher_suffix = ".app"

    def bundle_path(self, install_dir: Path, app_name: str) -> Path:
        return install_dir / f"{sanitize_app_name(app_name)}{self.launcher_suffix}"

    def icon_target(
        self, url: str, app_name: str, install_dir: Path, config: "Config"
    ) -> tuple[Path, str]:
        return self.bundle_path(install_dir, app_name) / "Contents" / "Resources", MACOS_ICON_NAME

    def emit(
        self,
        url: str,
        app_name: str,
        browser: "Browser",
        install_dir: Path,
        icon_result: "IconResult | None",
        config: "Config",
    ) -> EmitResult:
        safe_name = sanitize_app_name(app_name)
        app_path = self.bundle_path(install_dir, app_name)
        contents = app_path / "Contents"
        macos_dir = contents / "MacOS"

        try:
            macos_dir.mkdir(parents=True, exist_ok=True)
            (contents / "Resources").mkdir(parents=True, exist_ok=True)

            launcher = macos_dir / safe_name
            launcher.write_text(build_launcher_script(browser, url), encoding="utf-8")
            launcher.chmod(0o755)

            plist = build_info_plist(app_name, safe_name, generate_app_id(url))
            with open(contents / "Info.plist", "wb") as f:
                plistlib.dump(plist, f)
        except OSError as e:
            raise LauncherCreationError(f"Failed to create app bundle {app_path}: {e}") from e

        logger.info(f"Created app bundle: {app_path}")

        if config.install.register_with_os:
            run_os_hook(LSREGISTER_PATH, "-f", app_path)

        return EmitResult(
            success=True,
            artifact=LauncherArtifact(path=app_path, platform=self.platform),
            note=icon_note(icon_result) + SPOTLIGHT_NOTE,
        )

    def display_name(self, path: Path) -> str | None:
        if path.suffix != self.launcher_suffix or not path.is_dir():
            return None
        return path.stem

    def locate(self, install_dir: Path, name: str) -> Path | None:
        exact = install_dir / f"{name}{self.launcher_suffix}"
        if exact.exists():
            return exact

        wanted = f"{name}{self.launcher_suffix}".lower()
        for entry in sorted(install_dir.iterdir()):
            if entry.name.lower() == wanted:
                return entry
        return None

    def remove(self, path: Path) -> None:
        shutil.rmtree(path)

    def after_remove(self, path: Path, config: "Config") -> None:
        if config.install.register_with_os:
            run_os_hook(LSREGISTER_PATH, "-u", path)
