"""Tests for the external image tool wrappers."""

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from webnest.exceptions import ConversionError, ToolUnavailableError
from webnest.icons.converters import (
    ConversionToolkit,
    IconConverter,
    ImageMagickTool,
    IconutilTool,
    QuickLookTool,
    SipsTool,
)


def completed(returncode: int = 0, stderr: str = "") -> Mock:
    return Mock(returncode=returncode, stdout="", stderr=stderr)


class TestExternalTool:
    """Test tool discovery and error mapping."""

    @patch("webnest.icons.converters.shutil.which", return_value=None)
    def test_missing_tool_raises_unavailable(self, mock_which):
        """Test that a missing program raises ToolUnavailableError."""
        tool = SipsTool()
        assert tool.is_available() is False
        with pytest.raises(ToolUnavailableError):
            tool.resize(Path("a.png"), Path("b.png"), 16)

    @patch("webnest.icons.converters.subprocess.run")
    @patch("webnest.icons.converters.shutil.which", return_value="/usr/bin/sips")
    def test_nonzero_exit_raises_conversion_error(self, mock_which, mock_run):
        """Test that stderr is included in the error."""
        mock_run.return_value = completed(1, "Error: unsupported format")

        with pytest.raises(ConversionError, match="unsupported format"):
            SipsTool().to_png(Path("a.ico"), Path("a.png"))

    @patch("webnest.icons.converters.subprocess.run")
    @patch("webnest.icons.converters.shutil.which", return_value="/usr/bin/sips")
    def test_timeout_raises_conversion_error(self, mock_which, mock_run):
        """Test that a hung tool is reported as a conversion failure."""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="sips", timeout=60)

        with pytest.raises(ConversionError):
            SipsTool().to_png(Path("a.ico"), Path("a.png"))

    def test_unavailable_is_a_conversion_error(self):
        """Test the exception hierarchy used by fallback chains."""
        assert issubclass(ToolUnavailableError, ConversionError)


class TestToolArguments:
    """Test the command lines built for each tool."""

    @patch("webnest.icons.converters.subprocess.run", return_value=completed())
    @patch("webnest.icons.converters.shutil.which", side_effect=lambda name: f"/usr/bin/{name}")
    def test_sips_resize(self, mock_which, mock_run):
        """Test the sips resize command line."""
        SipsTool().resize(Path("/t/icon.png"), Path("/t/out.png"), 64)
        assert mock_run.call_args.args[0] == [
            "/usr/bin/sips",
            "-z",
            "64",
            "64",
            "/t/icon.png",
            "--out",
            "/t/out.png",
        ]

    @patch("webnest.icons.converters.subprocess.run", return_value=completed())
    @patch("webnest.icons.converters.shutil.which", side_effect=lambda name: f"/usr/bin/{name}")
    def test_iconutil_pack(self, mock_which, mock_run):
        """Test the iconutil command line."""
        IconutilTool().pack(Path("/t/icon.iconset"), Path("/t/AppIcon.icns"))
        assert mock_run.call_args.args[0] == [
            "/usr/bin/iconutil",
            "-c",
            "icns",
            "/t/icon.iconset",
            "-o",
            "/t/AppIcon.icns",
        ]

    @patch("webnest.icons.converters.subprocess.run", return_value=completed())
    @patch("webnest.icons.converters.shutil.which", side_effect=lambda name: f"/usr/bin/{name}")
    def test_imagemagick_ico(self, mock_which, mock_run):
        """Test the ICO auto-resize define."""
        ImageMagickTool().to_ico(Path("/t/icon.png"), Path("/t/app.ico"))
        command = mock_run.call_args.args[0]
        assert command[0] == "/usr/bin/magick"
        assert "icon:auto-resize=256,128,64,48,32,16" in command
        assert command[-1] == "/t/app.ico"

    @patch("webnest.icons.converters.subprocess.run", return_value=completed())
    @patch(
        "webnest.icons.converters.shutil.which",
        side_effect=lambda name: "/usr/bin/convert" if name == "convert" else None,
    )
    def test_imagemagick_six_uses_convert(self, mock_which, mock_run):
        """Test that ImageMagick 6 installs are found through `convert`."""
        ImageMagickTool().convert(Path("/t/icon.gif"), Path("/t/icon.png"))
        assert mock_run.call_args.args[0][0] == "/usr/bin/convert"

    @patch("webnest.icons.converters.subprocess.run", return_value=completed())
    @patch("webnest.icons.converters.shutil.which", return_value="/usr/bin/qlmanage")
    def test_quicklook_missing_output(self, mock_which, mock_run, tmp_path):
        """Test that qlmanage exiting 0 without output is a failure."""
        with pytest.raises(ConversionError):
            QuickLookTool().thumbnail(tmp_path / "icon.svg", tmp_path)

    @patch("webnest.icons.converters.subprocess.run", return_value=completed())
    @patch("webnest.icons.converters.shutil.which", return_value="/usr/bin/qlmanage")
    def test_quicklook_output_path(self, mock_which, mock_run, tmp_path):
        """Test where qlmanage writes its thumbnail."""
        (tmp_path / "icon.svg.png").write_bytes(b"png")
        assert QuickLookTool().thumbnail(tmp_path / "icon.svg", tmp_path) == (
            tmp_path / "icon.svg.png"
        )


class TestConversionToolkit:
    """Test ConversionToolkit."""

    @patch("webnest.icons.converters.shutil.which", side_effect=lambda name: None)
    def test_available_none(self, mock_which):
        """Test that no tools are reported on a bare system."""
        assert ConversionToolkit().available() == []

    def test_tools_implement_protocol(self):
        """Test that every tool satisfies IconConverter."""
        toolkit = ConversionToolkit()
        for tool in (toolkit.sips, toolkit.iconutil, toolkit.quicklook, toolkit.imagemagick):
            assert isinstance(tool, IconConverter)
