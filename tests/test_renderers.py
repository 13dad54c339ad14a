"""Tests for CLI and JSON renderers."""

import json
from io import StringIO
from pathlib import Path

from rich.console import Console

from webnest.browsers import BrowserAvailability
from webnest.core.app_registry import InstalledApp, RemoveResult
from webnest.core.installer import InstallResult
from webnest.icons.transcoder import IconResult
from webnest.renderers import CLIRenderer, JSONRenderer, VerbosityLevel


def make_renderer(verbosity=VerbosityLevel.NORMAL):
    output = StringIO()
    console = Console(file=output, width=200, color_system=None)
    return CLIRenderer(verbosity=verbosity, console=console), output


class TestVerbosityLevel:
    """Test verbosity ordering."""

    def test_ordering(self):
        """Test that verbosity levels compare in order."""
        assert VerbosityLevel.DEBUG >= VerbosityLevel.VERBOSE
        assert VerbosityLevel.VERBOSE > VerbosityLevel.NORMAL
        assert not VerbosityLevel.QUIET >= VerbosityLevel.NORMAL


class TestCLIRenderer:
    """Test the Rich based renderer."""

    def test_style_mapping(self):
        """Test that semantic styles map to Rich colors."""
        renderer, _ = make_renderer()
        assert renderer.STYLE_MAP["success"] == "green"
        assert renderer.STYLE_MAP["error"] == "red"
        assert renderer.ICON_MAP["check"] == "✓"

    def test_install_success_with_note(self):
        """Test install output with a platform note."""
        renderer, output = make_renderer()
        result = InstallResult(
            success=True,
            app_path=Path("/apps/Gmail.app"),
            note="The app should appear in Spotlight search.",
        )

        renderer.render_install("https://mail.google.com", "Gmail", "Google Chrome", result)

        text = output.getvalue()
        assert 'Installed "Gmail" for Google Chrome' in text
        assert "https://mail.google.com" in text
        assert "Spotlight" in text

    def test_install_quiet_prints_path_only(self):
        """Test that quiet mode prints only the path."""
        renderer, output = make_renderer(VerbosityLevel.QUIET)
        result = InstallResult(success=True, app_path=Path("/apps/Gmail.app"))

        renderer.render_install("https://mail.google.com", "Gmail", "Google Chrome", result)

        assert output.getvalue().strip() == str(Path("/apps/Gmail.app"))

    def test_install_verbose_shows_icon_error(self):
        """Test that verbose mode shows why the icon is missing."""
        renderer, output = make_renderer(VerbosityLevel.VERBOSE)
        result = InstallResult(
            success=True,
            app_path=Path("/apps/Gmail.app"),
            icon=IconResult(success=False, error="No icon found"),
        )

        renderer.render_install("https://mail.google.com", "Gmail", "Google Chrome", result)

        assert "No icon found" in output.getvalue()

    def test_install_failure(self):
        """Test install failure output."""
        renderer, output = make_renderer()
        result = InstallResult(success=False, error="Permission denied")

        renderer.render_install("https://a.example", "A", "Google Chrome", result)

        assert "Failed to install A: Permission denied" in output.getvalue()

    def test_browsers_table(self):
        """Test the browser table with paths."""
        renderer, output = make_renderer(VerbosityLevel.VERBOSE)
        renderer.render_browsers(
            [
                BrowserAvailability("chrome", "Google Chrome", "/usr/bin/google-chrome"),
                BrowserAvailability("edge", "Microsoft Edge", None),
            ]
        )

        text = output.getvalue()
        assert "installed" in text
        assert "not found" in text
        assert "/usr/bin/google-chrome" in text

    def test_browsers_icon_tools(self):
        """Test that installed image tools are listed under the table."""
        renderer, output = make_renderer(VerbosityLevel.VERBOSE)
        renderer.render_browsers([], icon_tools=["magick"])
        assert "Icon tools: magick" in output.getvalue()

    def test_browsers_no_icon_tools(self):
        """Test the warning when no image tool is installed."""
        renderer, output = make_renderer(VerbosityLevel.VERBOSE)
        renderer.render_browsers([], icon_tools=[])
        assert "Icon tools: none found" in output.getvalue()

    def test_no_apps(self):
        """Test the empty app list message."""
        renderer, output = make_renderer()
        renderer.render_apps([])
        assert "No web apps found." in output.getvalue()

    def test_apps_table(self):
        """Test the installed apps table."""
        renderer, output = make_renderer()
        renderer.render_apps(
            [InstalledApp("Gmail", Path("/apps/Gmail.app"), "Google Chrome", "chrome")]
        )

        text = output.getvalue()
        assert "Installed web apps (1)" in text
        assert "Gmail" in text

    def test_removals_summary(self):
        """Test removal output across several browsers."""
        renderer, output = make_renderer()
        renderer.render_removals(
            "Gmail",
            [
                RemoveResult(success=True, browser_id="chrome", browser_name="Google Chrome"),
                RemoveResult(success=True, browser_id="edge", browser_name="Microsoft Edge"),
                RemoveResult(
                    success=False,
                    browser_id="brave",
                    browser_name="Brave Browser",
                    error="Permission denied",
                ),
            ],
        )

        text = output.getvalue()
        assert 'Removed "Gmail" from Microsoft Edge' in text
        assert "Failed to remove from Brave Browser: Permission denied" in text
        assert 'Removed 2 instance(s) of "Gmail"' in text

    def test_removals_not_found(self):
        """Test removal output when nothing matched."""
        renderer, output = make_renderer()
        renderer.render_removals(
            "Nope",
            [RemoveResult(False, "chrome", "Google Chrome", not_found=True)],
        )

        text = output.getvalue()
        assert 'Web app "Nope" not found.' in text
        assert "Failed to remove" not in text


class TestJSONRenderer:
    """Test the JSON renderer."""

    def test_install_document(self, capsys):
        """Test the JSON install document."""
        result = InstallResult(success=True, app_path=Path("/apps/Gmail.app"), note="")

        JSONRenderer().render_install("https://mail.google.com", "Gmail", "Google Chrome", result)

        data = json.loads(capsys.readouterr().out)
        assert data["name"] == "Gmail"
        assert data["result"]["success"] is True
        assert data["result"]["app_path"] == str(Path("/apps/Gmail.app"))
        assert data["result"]["icon"] is None

    def test_removals_document(self, capsys):
        """Test the JSON removal document."""
        JSONRenderer().render_removals(
            "Gmail", [RemoveResult(False, "chrome", "Google Chrome", not_found=True)]
        )

        data = json.loads(capsys.readouterr().out)
        assert data["results"][0]["not_found"] is True
        assert data["results"][0]["browser_id"] == "chrome"
