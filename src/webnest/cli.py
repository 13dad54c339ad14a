"""Command-line interface for webnest.

Turns a URL into a launcher that opens the site in a browser's app mode,
and lists or removes launchers created earlier.
"""

import importlib.metadata
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console

from . import __version__
from .browsers import SUPPORTED_BROWSER_IDS, detect_browser, get_supported_browsers
from .config import Config, load_config
from .core.app_registry import list_apps_for_browsers, remove_from_browsers
from .core.installer import install_web_app
from .exceptions import NotFoundError, UnsupportedPlatformError
from .icons.converters import ConversionToolkit
from .renderers import CLIRenderer, JSONRenderer, VerbosityLevel
from .utils import get_app_name_from_url, setup_logger, validate_url

if TYPE_CHECKING:
    from .renderers.base import BaseRenderer

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="webnest",
    help="Turn any website into a desktop app that opens in browser app mode",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


# ============================================================================
# Validation Functions
# ============================================================================


def validate_verbosity(value: str) -> str:
    """
    Validate verbosity level.

    Args:
        value: Verbosity level string

    Returns:
        Validated verbosity level

    Raises:
        typer.BadParameter: If verbosity is invalid
    """
    valid_levels = [level.value for level in VerbosityLevel]
    if value.lower() not in valid_levels:
        raise typer.BadParameter(
            f"Invalid verbosity: {value}. Must be one of: {', '.join(valid_levels)}"
        )
    return value.lower()


def validate_browser(value: str | None) -> str | None:
    """
    Validate a browser ID.

    Raises:
        typer.BadParameter: If the browser is not supported
    """
    if value is None:
        return None
    if value.lower() not in SUPPORTED_BROWSER_IDS:
        raise typer.BadParameter(
            f"Unknown browser: {value}. Supported browsers: {', '.join(SUPPORTED_BROWSER_IDS)}"
        )
    return value.lower()


def validate_format(value: str) -> str:
    """
    Validate output format.

    Raises:
        typer.BadParameter: If the format is unknown
    """
    if value not in ("cli", "json"):
        raise typer.BadParameter(f"Unknown output format: {value}. Available formats: cli, json")
    return value


# ============================================================================
# Helper Functions
# ============================================================================


def _load_config(config_file: Path | None) -> Config:
    """Load layered configuration, continuing with defaults on failure."""
    try:
        return load_config(extra_paths=[config_file] if config_file else None)
    except ValueError as e:
        # pydantic ValidationError is a ValueError
        console.print(f"[yellow]Invalid configuration, using defaults: {e}[/yellow]")
        return Config()


def _make_renderer(output_format: str, config: Config) -> "BaseRenderer":
    verbosity = VerbosityLevel(config.output.verbosity)
    if output_format == "json":
        return JSONRenderer(verbosity=verbosity)
    if not config.output.color:
        return CLIRenderer(verbosity=verbosity, color=False)
    return CLIRenderer(verbosity=verbosity, console=console)


# ============================================================================
# CLI Commands
# ============================================================================


@app.command()
def install(
    url: Annotated[str, typer.Argument(help="Website URL (e.g., https://mail.google.com)")],
    browser: Annotated[
        str | None,
        typer.Option(
            "--browser",
            "-b",
            help=f"Browser to use: {', '.join(SUPPORTED_BROWSER_IDS)}",
            callback=validate_browser,
        ),
    ] = None,
    name: Annotated[
        str | None,
        typer.Option("--name", "-n", help="App name (defaults to the page title)"),
    ] = None,
    no_icon: Annotated[
        bool,
        typer.Option("--no-icon", help="Do not fetch an icon from the website"),
    ] = False,
    verbosity: Annotated[
        str,
        typer.Option(
            "--verbosity",
            "-v",
            help="Output verbosity: quiet, normal, verbose, debug",
            callback=validate_verbosity,
        ),
    ] = "normal",
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
):
    """
    Install a website as a desktop app.

    Creates a .app bundle (macOS), Start Menu shortcut (Windows) or desktop
    entry (Linux) that opens the URL in the browser's app mode.

    Example:
        webnest install https://mail.google.com
        webnest install https://github.com --browser edge --name GitHub
    """
    verbosity_level = VerbosityLevel(verbosity)
    setup_logger(level=verbosity_level)

    if not validate_url(url):
        console.print(f"[red]Error: Invalid URL: {url}. Expected format: https://example.com[/red]")
        raise typer.Exit(1)

    config = _load_config(config_file)
    config.output.verbosity = verbosity
    if no_icon:
        config.icon.enabled = False

    browser_id = browser or config.install.default_browser

    try:
        resolved = detect_browser(browser_id)
    except (NotFoundError, UnsupportedPlatformError) as e:
        console.print(f"[red]Error: {e}[/red]")
        console.print("[dim]Run 'webnest browsers' to see which browsers are installed.[/dim]")
        raise typer.Exit(1)

    if not name:
        with console.status("Fetching page title..."):
            name = get_app_name_from_url(url, config.network)
        logger.info(f"Using app name: {name}")

    with console.status(f'Creating "{name}" for {resolved.display_name}...'):
        try:
            result = install_web_app(url, name, resolved, config=config)
        except UnsupportedPlatformError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)

    renderer = _make_renderer("cli", config)
    renderer.render_install(url, name, resolved.display_name, result)

    if not result.success:
        raise typer.Exit(1)


@app.command()
def browsers(
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: cli, json", callback=validate_format),
    ] = "cli",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Show executable paths and icon tools"),
    ] = False,
) -> None:
    """
    List supported browsers and whether they are installed.
    """
    config = Config()
    if verbose:
        config.output.verbosity = VerbosityLevel.VERBOSE.value

    try:
        if output_format == "cli":
            with console.status("Detecting available browsers..."):
                available = get_supported_browsers()
        else:
            available = get_supported_browsers()
    except UnsupportedPlatformError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    icon_tools = ConversionToolkit().available() if verbose else None
    _make_renderer(output_format, config).render_browsers(available, icon_tools)


@app.command()
def installed(
    browser: Annotated[
        str | None,
        typer.Option(
            "--browser",
            "-b",
            help="Only list apps for this browser",
            callback=validate_browser,
        ),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: cli, json", callback=validate_format),
    ] = "cli",
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """
    List web apps created by webnest.

    Example:
        webnest installed
        webnest installed --browser chrome --format json
    """
    config = _load_config(config_file)
    browser_ids = [browser] if browser else list(SUPPORTED_BROWSER_IDS)

    try:
        apps = list_apps_for_browsers(browser_ids, config=config)
    except UnsupportedPlatformError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    _make_renderer(output_format, config).render_apps(apps)


@app.command()
def remove(
    name: Annotated[str, typer.Argument(help="Name of the app to remove")],
    browser: Annotated[
        str | None,
        typer.Option(
            "--browser",
            "-b",
            help="Browser the app was created for",
            callback=validate_browser,
        ),
    ] = None,
    all_browsers: Annotated[
        bool,
        typer.Option("--all", "-a", help="Remove the app from every browser's app directory"),
    ] = False,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
) -> None:
    """
    Remove an installed web app.

    Example:
        webnest remove Gmail
        webnest remove Gmail --all
    """
    config = _load_config(config_file)

    if all_browsers:
        browser_ids = list(SUPPORTED_BROWSER_IDS)
    else:
        browser_ids = [browser or config.install.default_browser]

    try:
        with console.status(f'Searching for "{name}" web app...'):
            results = remove_from_browsers(name, browser_ids, config=config)
    except UnsupportedPlatformError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    _make_renderer("cli", config).render_removals(name, results)

    if not any(result.success for result in results):
        raise typer.Exit(1)


app.command("uninstall", hidden=True)(remove)


@app.command()
def create_config(
    output: Annotated[
        Path,
        typer.Option(
            "--output",
            "-o",
            help="Output file path",
        ),
    ] = Path(".webnest.toml"),
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite existing file",
        ),
    ] = False,
):
    """
    Create a default configuration file.

    Example:
        webnest create-config
        webnest create-config --output ~/.config/webnest/config.toml
    """
    if output.exists() and not force:
        console.print(f"[yellow]File already exists: {output}[/yellow]")
        console.print("Use --force to overwrite")
        raise typer.Exit(1)

    try:
        Config().to_toml_file(output)
        console.print(f"[green]✓ Created configuration file: {output}[/green]")
    except OSError as e:
        console.print(f"[red]✗ Failed to create config: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    try:
        current = importlib.metadata.version("webnest")
    except importlib.metadata.PackageNotFoundError:
        current = __version__
    console.print(f"webnest version {current}")


# ============================================================================
# Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        console.print(f"[red]Unexpected error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
