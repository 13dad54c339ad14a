"""Base renderer protocol.

Renderers only see plain result objects (install, browser availability,
installed apps, removal outcomes) and decide how to present them.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any


class VerbosityLevel(Enum):
    """Output verbosity levels."""

    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"
    DEBUG = "debug"

    def __ge__(self, other):
        """Allow >= comparison for verbosity filtering."""
        if not isinstance(other, VerbosityLevel):
            return NotImplemented
        levels = [
            VerbosityLevel.QUIET,
            VerbosityLevel.NORMAL,
            VerbosityLevel.VERBOSE,
            VerbosityLevel.DEBUG,
        ]
        return levels.index(self) >= levels.index(other)

    def __gt__(self, other):
        """Allow > comparison for verbosity filtering."""
        if not isinstance(other, VerbosityLevel):
            return NotImplemented
        levels = [
            VerbosityLevel.QUIET,
            VerbosityLevel.NORMAL,
            VerbosityLevel.VERBOSE,
            VerbosityLevel.DEBUG,
        ]
        return levels.index(self) > levels.index(other)


class BaseRenderer(ABC):
    """Base class for all output renderers."""

    def __init__(self, verbosity: VerbosityLevel = VerbosityLevel.NORMAL):
        """
        Initialize renderer.

        Args:
            verbosity: Output verbosity level
        """
        self.verbosity = verbosity

    @abstractmethod
    def render_install(self, url: str, app_name: str, browser_name: str, result: Any) -> None:
        """
        Render the outcome of an install.

        Args:
            url: Website URL
            app_name: App display name
            browser_name: Browser display name
            result: InstallResult
        """
        ...

    @abstractmethod
    def render_browsers(self, browsers: list[Any], icon_tools: list[str] | None = None) -> None:
        """
        Render browser availability.

        Args:
            browsers: List of BrowserAvailability
            icon_tools: Installed image tools, shown when not None
        """
        ...

    @abstractmethod
    def render_apps(self, apps: list[Any]) -> None:
        """Render installed apps (list of InstalledApp)."""
        ...

    @abstractmethod
    def render_removals(self, name: str, results: list[Any]) -> None:
        """Render removal outcomes (list of RemoveResult)."""
        ...
