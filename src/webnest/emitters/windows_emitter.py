"""Windows emitter - creates a Start Menu .lnk shortcut through PowerShell."""

import logging
import os
import subprocess
import tempfile
from pathlib import Path, PureWindowsPath
from typing import TYPE_CHECKING

from ..core.registry import registry
from ..exceptions import LauncherCreationError
from ..platforms import PlatformKind
from ..utils.naming import sanitize_app_name
from .protocol import EmitResult, LauncherArtifact, icon_note

if TYPE_CHECKING:
    from ..browsers import Browser
    from ..config import Config
    from ..icons.transcoder import IconResult

logger = logging.getLogger(__name__)

START_MENU_NOTE = "The app should appear in the Start Menu search."
POWERSHELL_TIMEOUT = 60.0

# Icons the transcoder may leave next to a shortcut
COMPANION_ICON_SUFFIXES = (".ico", ".png")


def ps_quote(value: str | Path) -> str:
    """Quote a value as a PowerShell single-quoted string literal."""
    return "'" + str(value).replace("'", "''") + "'"


def build_shortcut_script(
    shortcut_path: Path,
    browser: "Browser",
    url: str,
    app_name: str,
    icon_path: Path | None = None,
) -> str:
    """
    PowerShell script that creates the shortcut via WScript.Shell.

    Args:
        shortcut_path: Destination .lnk file
        browser: Browser the shortcut launches
        url: Website URL
        app_name: Display name used in the description
        icon_path: Optional icon file

    Returns:
        Script text
    """
    working_dir = PureWindowsPath(browser.executable_path).parent
    lines = [
        "$WshShell = New-Object -ComObject WScript.Shell",
        f"$Shortcut = $WshShell.CreateShortcut({ps_quote(shortcut_path)})",
        f"$Shortcut.TargetPath = {ps_quote(browser.executable_path)}",
        f"$Shortcut.Arguments = {ps_quote(browser.app_argument(url))}",
        f"$Shortcut.WorkingDirectory = {ps_quote(working_dir)}",
        f"$Shortcut.Description = {ps_quote(f'{app_name} - Web App')}",
    ]
    if icon_path is not None:
        lines.append(f"$Shortcut.IconLocation = {ps_quote(f'{icon_path},0')}")
    lines.append("$Shortcut.Save()")
    return "\n".join(lines) + "\n"


def run_powershell_script(script: str) -> None:
    """
    Run script once from a temporary .ps1 file, then delete the file.

    Raises:
        LauncherCreationError: If PowerShell cannot run or reports failure
    """
    with tempfile.NamedTemporaryFile(
        "w", suffix=".ps1", delete=False, encoding="utf-8"
    ) as script_file:
        script_file.write(script)
        script_path = Path(script_file.name)

    try:
        result = subprocess.run(
            [
                "powershell",
                "-NoProfile",
                "-ExecutionPolicy",
                "Bypass",
                "-File",
                str(script_path),
            ],
            capture_output=True,
            text=True,
            timeout=POWERSHELL_TIMEOUT,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as e:
        raise LauncherCreationError(f"Failed to run PowerShell: {e}") from e
    finally:
        try:
            os.unlink(script_path)
        except OSError as e:
            logger.debug(f"Could not delete {script_path}: {e}")

    if result.returncode != 0:
        raise LauncherCreationError(
            f"PowerShell failed to create shortcut: {result.stderr.strip()}"
        )


@registry.register
class WindowsEmitter:
    """Writes ``<install_dir>/<name>.lnk`` shortcuts."""

    platform = PlatformKind.WINDOWS
    name = "Windows shortcut"
    description = "Start Menu shortcut created with WScript.Shell"
    launcher_suffix = ".lnk"

    def icon_target(
        self, url: str, app_name: str, install_dir: Path, config: "Config"
    ) -> tuple[Path, str]:
        return install_dir, sanitize_app_name(app_name)

    def emit(
        self,
        url: str,
        app_name: str,
        browser: "Browser",
        install_dir: Path,
        icon_result: "IconResult | None",
        config: "Config",
    ) -> EmitResult:
        shortcut_path = install_dir / f"{sanitize_app_name(app_name)}{self.launcher_suffix}"
        icon_path = icon_result.path if icon_result and icon_result.success else None

        script = build_shortcut_script(shortcut_path, browser, url, app_name, icon_path)
        run_powershell_script(script)
        logger.info(f"Created shortcut: {shortcut_path}")

        return EmitResult(
            success=True,
            artifact=LauncherArtifact(path=shortcut_path, platform=self.platform),
            note=icon_note(icon_result) + START_MENU_NOTE,
        )

    def display_name(self, path: Path) -> str | None:
        if path.suffix.lower() != self.launcher_suffix:
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
        path.unlink()

    def after_remove(self, path: Path, config: "Config") -> None:
        for suffix in COMPANION_ICON_SUFFIXES:
            icon = path.with_suffix(suffix)
            try:
                icon.unlink(missing_ok=True)
            except OSError as e:
                logger.debug(f"Could not delete icon {icon}: {e}")
