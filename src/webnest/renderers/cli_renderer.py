"""CLI renderer using Rich library."""

from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from .base import BaseRenderer, VerbosityLevel


class CLIRenderer(BaseRenderer):
    """
    Renders output to CLI using Rich library.

    Maps semantic style classes to Rich markup:
    - success -> green
    - error -> red
    - warning -> yellow
    - info -> blue
    - highlight -> bold
    - muted -> dim
    """

    # Semantic style class -> Rich markup color
    STYLE_MAP = {
        "success": "green",
        "error": "red",
        "warning": "yellow",
        "info": "blue",
        "highlight": "bold",
        "muted": "dim",
    }

    # Semantic icon name -> Unicode character
    ICON_MAP = {
        "check": "✓",
        "cross": "✗",
        "warning": "⚠",
        "info": "ℹ",
    }

    def __init__(
        self,
        verbosity: VerbosityLevel = VerbosityLevel.NORMAL,
        color: bool = True,
        console: Console | None = None,
    ):
        """
        Initialize CLI renderer.

        Args:
            verbosity: Output verbosity level
            color: Enable colored output
            console: Console to print to (a new one if omitted)
        """
        super().__init__(verbosity)
        self.console = console or Console(color_system="auto" if color else None)

    def _line(self, style_class: str, icon: str, message: str) -> None:
        style = self.STYLE_MAP.get(style_class, "")
        icon_str = self.ICON_MAP.get(icon, "")
        text = f"{icon_str} {message}" if icon_str else message
        if style:
            self.console.print(f"[{style}]{text}[/{style}]")
        else:
            self.console.print(text)

    def error(self, message: str) -> None:
        self._line("error", "cross", message)

    def render_install(self, url: str, app_name: str, browser_name: str, result: Any) -> None:
        if not result.success:
            self.error(f"Failed to install {app_name}: {result.error}")
            return

        if self.verbosity == VerbosityLevel.QUIET:
            self.console.print(str(result.app_path))
            return

        self._line("success", "check", f'Installed "{app_name}" for {browser_name}')
        self.console.print(f"  [dim]URL:[/dim]  {url}")
        self.console.print(f"  [dim]Path:[/dim] {result.app_path}")

        icon = getattr(result, "icon", None)
        if icon is not None and self.verbosity >= VerbosityLevel.VERBOSE:
            if icon.success:
                self.console.print(f"  [dim]Icon:[/dim] {icon.path}")
            else:
                self.console.print(f"  [dim]Icon:[/dim] [yellow]{icon.error}[/yellow]")

        if result.note:
            self.console.print()
            self._line("info", "info", result.note.strip())

    def render_browsers(self, browsers: list[Any], icon_tools: list[str] | None = None) -> None:
        table = Table(title="Supported Browsers", box=box.SIMPLE, show_header=True)
        table.add_column("ID", style="cyan")
        table.add_column("Name")
        table.add_column("Status")
        if self.verbosity >= VerbosityLevel.VERBOSE:
            table.add_column("Path", style="dim")

        for browser in browsers:
            if browser.available:
                status = f"[green]{self.ICON_MAP['check']} installed[/green]"
            else:
                status = f"[dim]{self.ICON_MAP['cross']} not found[/dim]"
            row = [browser.browser_id, browser.name, status]
            if self.verbosity >= VerbosityLevel.VERBOSE:
                row.append(browser.path or "")
            table.add_row(*row)

        self.console.print(table)

        if icon_tools is not None:
            if icon_tools:
                self._line("muted", "", f"Icon tools: {', '.join(icon_tools)}")
            else:
                self._line(
                    "warning", "warning", "Icon tools: none found, icons are saved as downloaded"
                )

    def render_apps(self, apps: list[Any]) -> None:
        if not apps:
            self._line("warning", "", "No web apps found.")
            self._line("muted", "", "Create one with: webnest install <url> --browser <browser>")
            return

        table = Table(
            title=f"Installed web apps ({len(apps)})", box=box.SIMPLE, show_header=True
        )
        table.add_column("Name", style="bold green")
        table.add_column("Browser")
        table.add_column("Path", style="dim")
        for app in apps:
            table.add_row(app.name, app.browser, str(app.path))

        self.console.print(table)
        self._line("muted", "", "Remove with: webnest remove <name> --browser <browser>")

    def render_removals(self, name: str, results: list[Any]) -> None:
        removed = [r for r in results if r.success]
        errors = [r for r in results if not r.success and not r.not_found]

        for result in removed:
            self._line("success", "check", f'Removed "{name}" from {result.browser_name}')
            if self.verbosity >= VerbosityLevel.VERBOSE:
                self.console.print(f"  [dim]{result.app_path}[/dim]")

        for result in errors:
            self.error(f"Failed to remove from {result.browser_name}: {result.error}")

        if not removed:
            self.error(f'Web app "{name}" not found.')
            self._line("muted", "", 'Tip: Use "webnest installed" to see all installed web apps.')
        elif len(results) > 1:
            self._line("success", "check", f'Removed {len(removed)} instance(s) of "{name}"')
