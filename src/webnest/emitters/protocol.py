"""Protocol definitions for launcher emitters.

Every supported platform has one emitter plugin that knows how to write
its launcher artifact, where the icon for it goes, and how to find that
artifact again for listing and removal.
"""

from abc import abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..platforms import PlatformKind

if TYPE_CHECKING:
    from ..browsers import Browser
    from ..config import Config
    from ..icons.transcoder import IconResult

ICON_UNAVAILABLE_NOTE = "Could not fetch icon from website."


@dataclass
class LauncherArtifact:
    """The installed launcher (bundle, shortcut or desktop entry)."""

    path: Path
    platform: PlatformKind


@dataclass
class EmitResult:
    """Result of writing a launcher artifact."""

    success: bool
    artifact: LauncherArtifact | None = None
    note: str = ""
    error: str | None = None

    @property
    def app_path(self) -> Path | None:
        return self.artifact.path if self.artifact else None


def icon_note(icon_result: "IconResult | None") -> str:
    """User-visible note describing the icon outcome ("" when all went well)."""
    if icon_result is None:
        return ""
    if not icon_result.success:
        return f"{ICON_UNAVAILABLE_NOTE} "
    if icon_result.note:
        return f"{icon_result.note}. "
    return ""


@runtime_checkable
class EmitterPlugin(Protocol):
    """
    Protocol that all emitter plugins must implement.

    Example:
        @registry.register
        class LinuxEmitter:
            platform = PlatformKind.LINUX
            name = "Linux desktop entry"
            description = "..."
            launcher_suffix = ".desktop"

            def emit(self, url, app_name, browser, install_dir, icon_result, config):
                ...
    """

    platform: PlatformKind
    name: str
    description: str
    launcher_suffix: str  # ".app", ".lnk", ".desktop"

    @abstractmethod
    def icon_target(
        self, url: str, app_name: str, install_dir: Path, config: "Config"
    ) -> tuple[Path, str]:
        """
        Where the converted icon for this launcher should be written.

        Returns:
            Tuple of (directory, icon file stem)
        """
        ...

    @abstractmethod
    def emit(
        self,
        url: str,
        app_name: str,
        browser: "Browser",
        install_dir: Path,
        icon_result: "IconResult | None",
        config: "Config",
    ) -> EmitResult:
        """
        Write the launcher artifact.

        Args:
            url: Website URL opened in app mode
            app_name: Display name (unsanitized)
            browser: Resolved browser descriptor
            install_dir: Directory the launcher is written to
            icon_result: Outcome of icon preparation (None if skipped)
            config: Application configuration

        Returns:
            EmitResult with the artifact path and user-visible note
        """
        ...

    @abstractmethod
    def display_name(self, path: Path) -> str | None:
        """App name recovered from an installed artifact, None if not ours."""
        ...

    @abstractmethod
    def locate(self, install_dir: Path, name: str) -> Path | None:
        """Find the artifact installed under name (already sanitized)."""
        ...

    @abstractmethod
    def remove(self, path: Path) -> None:
        """Delete the artifact at path (raises OSError on failure)."""
        ...

    @abstractmethod
    def after_remove(self, path: Path, config: "Config") -> None:
        """Best-effort OS cleanup once the artifact at path is deleted."""
        ...
