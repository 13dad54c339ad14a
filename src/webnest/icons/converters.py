"""External image tools used for icon conversion.

Each tool wraps one command-line program. A missing program raises
ToolUnavailableError so callers can fall through to the next option in
their fallback chain; a program that runs and fails raises ConversionError.
"""

import logging
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..constants import ICO_SIZES, SVG_RASTER_SIZE, TOOL_TIMEOUT
from ..exceptions import ConversionError, ToolUnavailableError

logger = logging.getLogger(__name__)


@runtime_checkable
class IconConverter(Protocol):
    """Anything that can report whether its backing program is installed."""

    name: str

    def is_available(self) -> bool: ...


class ExternalTool:
    """
    Base class for a command-line image tool.

    Subclasses list the executable names to look for, in order of
    preference, and build argument lists for ``run``.
    """

    name: str = "tool"
    executables: tuple[str, ...] = ()

    def __init__(self, timeout: float = TOOL_TIMEOUT):
        self.timeout = timeout

    def executable(self) -> str | None:
        """Full path of the first executable found on PATH."""
        for candidate in self.executables:
            found = shutil.which(candidate)
            if found:
                return found
        return None

    def is_available(self) -> bool:
        return self.executable() is not None

    def run(self, *args: str | Path) -> subprocess.CompletedProcess:
        """
        Run the tool with the given arguments.

        Raises:
            ToolUnavailableError: The program is not installed
            ConversionError: The program failed or timed out
        """
        program = self.executable()
        if program is None:
            raise ToolUnavailableError(f"{self.name} is not available on this system")

        command = [program, *(str(arg) for arg in args)]
        logger.debug(f"Running: {' '.join(command)}")

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise ConversionError(f"{self.name} timed out after {self.timeout}s") from e
        except OSError as e:
            raise ConversionError(f"{self.name} could not be started: {e}") from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise ConversionError(f"{self.name} exited with {result.returncode}: {stderr}")

        return result


class SipsTool(ExternalTool):
    """macOS scriptable image processing system."""

    name = "sips"
    executables = ("sips",)

    def resize(self, source: Path, destination: Path, size: int) -> Path:
        self.run("-z", size, size, source, "--out", destination)
        return destination

    def to_png(self, source: Path, destination: Path) -> Path:
        self.run("-s", "format", "png", source, "--out", destination)
        return destination


class IconutilTool(ExternalTool):
    """macOS iconset to .icns packer."""

    name = "iconutil"
    executables = ("iconutil",)

    def pack(self, iconset_dir: Path, destination: Path) -> Path:
        self.run("-c", "icns", iconset_dir, "-o", destination)
        return destination


class QuickLookTool(ExternalTool):
    """macOS Quick Look thumbnailer, used to rasterize SVG."""

    name = "qlmanage"
    executables = ("qlmanage",)

    def thumbnail(self, source: Path, output_dir: Path, size: int = SVG_RASTER_SIZE) -> Path:
        """
        Render a PNG thumbnail of source into output_dir.

        Returns:
            Path of the generated ``<source name>.png``

        Raises:
            ConversionError: If no thumbnail was written
        """
        self.run("-t", "-s", size, "-o", output_dir, source)
        rendered = output_dir / f"{source.name}.png"
        if not rendered.exists():
            raise ConversionError(f"qlmanage produced no thumbnail for {source.name}")
        return rendered


class ImageMagickTool(ExternalTool):
    """ImageMagick (``magick`` in v7, ``convert`` in v6)."""

    name = "imagemagick"
    executables = ("magick", "convert")

    def convert(self, source: Path, destination: Path) -> Path:
        self.run(source, destination)
        return destination

    def to_ico(self, source: Path, destination: Path, sizes: list[int] | None = None) -> Path:
        resize = ",".join(str(size) for size in (sizes or ICO_SIZES))
        self.run(source, "-define", f"icon:auto-resize={resize}", destination)
        return destination


@dataclass
class ConversionToolkit:
    """The set of external tools the transcoder may use."""

    sips: SipsTool = field(default_factory=SipsTool)
    iconutil: IconutilTool = field(default_factory=IconutilTool)
    quicklook: QuickLookTool = field(default_factory=QuickLookTool)
    imagemagick: ImageMagickTool = field(default_factory=ImageMagickTool)

    def available(self) -> list[str]:
        """Names of tools installed on this system."""
        tools: list[IconConverter] = [self.sips, self.iconutil, self.quicklook, self.imagemagick]
        return [tool.name for tool in tools if tool.is_available()]
