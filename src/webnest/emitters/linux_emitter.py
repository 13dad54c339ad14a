"""Linux emitter - writes a freedesktop.org desktop entry."""

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from ..constants import (
    APP_ID_PREFIX,
    LINUX_COMMENT_MARKER,
    LINUX_DESKTOP_CATEGORIES,
    LINUX_FALLBACK_ICON,
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

MENU_NOTE = (
    "The app should appear in your application menu. "
    "You may need to log out and log back in for it to appear."
)
DESKTOP_SECTION = "[Desktop Entry]"


def quote_exec_arg(value: str) -> str:
    """
    Quote one Exec= argument.

    Reserved characters inside quotes get a backslash, then the string-value
    escaping doubles every backslash, and % is doubled so it is not read as
    a field code.
    """
    quoted = re.sub(r'(["`$\\])', r"\\\1", value)
    return '"' + quoted.replace("\\", "\\\\").replace("%", "%%") + '"'


def build_desktop_entry(
    url: str,
    app_name: str,
    browser: "Browser",
    icon: str,
) -> str:
    """
    Desktop entry text for a web app.

    Args:
        url: Website URL
        app_name: Display name (unsanitized)
        browser: Browser the entry launches
        icon: Icon file path or themed icon name

    Returns:
        Entry text ending with a newline
    """
    lines = [
        DESKTOP_SECTION,
        "Version=1.0",
        "Type=Application",
        f"Name={app_name}",
        f"Comment={app_name} - {LINUX_COMMENT_MARKER}",
        f"Exec={quote_exec_arg(browser.executable_path)} {browser.app_flag}{quote_exec_arg(url)}",
        f"Icon={icon}",
        "Terminal=false",
        f"Categories={LINUX_DESKTOP_CATEGORIES}",
        f"StartupWMClass={sanitize_app_name(app_name)}",
        "StartupNotify=true",
    ]
    return "\n".join(lines) + "\n"


def parse_desktop_entry(text: str) -> dict[str, str]:
    """Key/value pairs of the [Desktop Entry] section (first value wins)."""
    fields: dict[str, str] = {}
    in_section = False
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("["):
            in_section = line == DESKTOP_SECTION
            continue
        if in_section and "=" in line:
            key, value = line.split("=", 1)
            fields.setdefault(key.strip(), value.strip())
    return fields


def is_webnest_entry(path: Path, text: str) -> bool:
    """True if the desktop entry at path was written by this tool."""
    return path.name.startswith(APP_ID_PREFIX) or LINUX_COMMENT_MARKER in text


@registry.register
class LinuxEmitter:
    """Writes ``<install_dir>/<app id>.desktop`` entries."""

    platform = PlatformKind.LINUX
    name = "Linux desktop entry"
    description = "freedesktop.org desktop entry"
    launcher_suffix = ".desktop"

    def icon_target(
        self, url: str, app_name: str, install_dir: Path, config: "Config"
    ) -> tuple[Path, str]:
        return config.icon.linux_icon_path, generate_app_id(url)

    def emit(
        self,
        url: str,
        app_name: str,
        browser: "Browser",
        install_dir: Path,
        icon_result: "IconResult | None",
        config: "Config",
    ) -> EmitResult:
        entry_path = install_dir / f"{generate_app_id(url)}{self.launcher_suffix}"
        if icon_result and icon_result.success and icon_result.path:
            icon = str(icon_result.path)
        else:
            icon = LINUX_FALLBACK_ICON

        try:
            install_dir.mkdir(parents=True, exist_ok=True)
            entry_path.write_text(
                build_desktop_entry(url, app_name, browser, icon), encoding="utf-8"
            )
            entry_path.chmod(0o755)
        except OSError as e:
            raise LauncherCreationError(f"Failed to write desktop entry {entry_path}: {e}") from e

        logger.info(f"Created desktop entry: {entry_path}")

        if config.install.register_with_os:
            run_os_hook("update-desktop-database", install_dir)

        return EmitResult(
            success=True,
            artifact=LauncherArtifact(path=entry_path, platform=self.platform),
            note=icon_note(icon_result) + MENU_NOTE,
        )

    def _read(self, path: Path) -> str | None:
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug(f"Could not read {path}: {e}")
            return None

    def display_name(self, path: Path) -> str | None:
        if path.suffix != self.launcher_suffix:
            return None
        text = self._read(path)
        if text is None or not is_webnest_entry(path, text):
            return None
        return parse_desktop_entry(text).get("Name") or path.stem

    def locate(self, install_dir: Path, name: str) -> Path | None:
        """
        Find a desktop entry by app name.

        Entries are named by app ID, not by app name, so an entry whose
        Name= matches wins; otherwise the first entry whose file name or
        content mentions the name is used. Only entries written by this
        tool are considered.
        """
        wanted = name.lower()
        loose_match = None

        for entry in sorted(install_dir.glob(f"*{self.launcher_suffix}")):
            text = self._read(entry)
            if text is None or not is_webnest_entry(entry, text):
                continue

            entry_name = parse_desktop_entry(text).get("Name", "")
            if sanitize_app_name(entry_name).lower() == wanted:
                return entry

            if loose_match is None and (wanted in entry.name.lower() or wanted in text.lower()):
                loose_match = entry

        return loose_match

    def remove(self, path: Path) -> None:
        path.unlink()

    def after_remove(self, path: Path, config: "Config") -> None:
        # Icons are stored under the same app ID as the entry
        icon_path = config.icon.linux_icon_path / f"{path.stem}.png"
        try:
            icon_path.unlink(missing_ok=True)
        except OSError as e:
            logger.debug(f"Could not delete icon {icon_path}: {e}")

        if config.install.register_with_os:
            run_os_hook("update-desktop-database", path.parent)
