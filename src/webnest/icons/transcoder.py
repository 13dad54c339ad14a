"""Icon transcoder - download a website icon and convert it per platform.

The result is always an IconResult; nothing here raises for network or
conversion problems, because a missing icon must never stop an install.
"""

import logging
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from ..constants import ICONSET_MAX_SIZE, MACOS_ICON_NAME
from ..exceptions import ConversionError, NetworkError
from ..fetcher import fetch_asset
from ..platforms import PlatformKind
from .converters import ConversionToolkit
from .discovery import discover_best_icon_url

if TYPE_CHECKING:
    from ..config import Config

logger = logging.getLogger(__name__)

# Default icon file stem per platform
DEFAULT_ICON_NAMES = {
    PlatformKind.MACOS: MACOS_ICON_NAME,
    PlatformKind.WINDOWS: "app",
    PlatformKind.LINUX: "icon",
}

# Content-type fragment -> extension, checked in order
CONTENT_TYPE_EXTENSIONS = [
    ("svg", ".svg"),
    ("ico", ".ico"),  # image/x-icon, image/vnd.microsoft.icon
    ("jpeg", ".jpg"),
    ("jpg", ".jpg"),
    ("png", ".png"),
    ("gif", ".gif"),
    ("webp", ".webp"),
]

URL_EXTENSIONS = {".svg", ".ico", ".png", ".jpg", ".jpeg", ".gif", ".webp"}

PNG_FALLBACK_NOTE = "Saved as PNG (ImageMagick not available for ICO conversion)"


# ============================================================================
# Result Models
# ============================================================================


@dataclass
class DownloadedAsset:
    """Icon bytes saved into the scoped temporary directory."""

    content: bytes
    inferred_extension: str
    path: Path

    @property
    def byte_length(self) -> int:
        return len(self.content)


@dataclass
class PlatformIcon:
    """Final converted icon the launcher will reference."""

    path: Path
    platform: PlatformKind
    note: str | None = None


@dataclass
class IconResult:
    """
    Outcome of icon preparation.

    Either contains the converted icon or the reason it is missing.
    """

    success: bool
    icon: PlatformIcon | None = None
    error: str | None = None

    @property
    def path(self) -> Path | None:
        return self.icon.path if self.icon else None

    @property
    def note(self) -> str | None:
        return self.icon.note if self.icon else None

    @classmethod
    def ok(cls, path: Path, platform: PlatformKind, note: str | None = None) -> "IconResult":
        return cls(success=True, icon=PlatformIcon(path=path, platform=platform, note=note))

    @classmethod
    def failed(cls, error: str) -> "IconResult":
        return cls(success=False, error=error)


# ============================================================================
# Download
# ============================================================================


def infer_extension(content_type: str, url: str) -> str:
    """
    Choose a file extension for a downloaded icon.

    The content type wins; the URL path suffix is consulted next and
    ``.png`` is the default.
    """
    content_type = (content_type or "").lower()
    for fragment, extension in CONTENT_TYPE_EXTENSIONS:
        if fragment in content_type:
            return extension

    try:
        suffix = Path(urlparse(url).path).suffix.lower()
    except ValueError:
        suffix = ""
    if suffix in URL_EXTENSIONS:
        return ".jpg" if suffix == ".jpeg" else suffix

    return ".png"


def download_icon(icon_url: str, temp_dir: Path, config: "Config") -> DownloadedAsset:
    """
    Download an icon into temp_dir.

    Raises:
        NetworkError: If the download fails
    """
    response = fetch_asset(icon_url, config.network)
    extension = infer_extension(response.content_type, icon_url)

    path = temp_dir / f"icon{extension}"
    path.write_bytes(response.content)
    logger.debug(f"Downloaded icon {icon_url} ({len(response.content)} bytes, {extension})")

    return DownloadedAsset(content=response.content, inferred_extension=extension, path=path)


# ============================================================================
# Platform Conversion
# ============================================================================


def _rasterize_svg(source: Path, temp_dir: Path, toolkit: ConversionToolkit) -> Path:
    """Render an SVG to PNG; return the original path if every tool fails."""
    try:
        return toolkit.quicklook.thumbnail(source, temp_dir)
    except ConversionError as e:
        logger.debug(f"Quick Look could not rasterize {source.name}: {e}")

    try:
        return toolkit.sips.to_png(source, temp_dir / "icon-raster.png")
    except ConversionError as e:
        logger.debug(f"sips could not rasterize {source.name}: {e}")

    return source


def iconset_entries(base_sizes: list[int]) -> list[tuple[str, int]]:
    """
    File names and pixel sizes for a macOS iconset.

    Every base size gets ``icon_{s}x{s}.png`` plus an ``@2x`` variant at
    double resolution as long as it does not exceed 1024 pixels.
    """
    entries = []
    for size in base_sizes:
        entries.append((f"icon_{size}x{size}.png", size))
        if size * 2 <= ICONSET_MAX_SIZE:
            entries.append((f"icon_{size}x{size}@2x.png", size * 2))
    return entries


def convert_to_icns(
    source: Path,
    destination: Path,
    temp_dir: Path,
    toolkit: ConversionToolkit,
    base_sizes: list[int],
) -> Path:
    """
    Build a multi-resolution .icns from a raster image.

    Raises:
        ConversionError: If sips or iconutil is missing or fails
    """
    iconset_dir = temp_dir / "icon.iconset"
    iconset_dir.mkdir(parents=True, exist_ok=True)

    for filename, pixels in iconset_entries(base_sizes):
        toolkit.sips.resize(source, iconset_dir / filename, pixels)

    return toolkit.iconutil.pack(iconset_dir, destination)


def _prepare_macos(
    asset: DownloadedAsset,
    output_dir: Path,
    icon_name: str,
    temp_dir: Path,
    toolkit: ConversionToolkit,
    config: "Config",
) -> IconResult:
    source = asset.path
    if asset.inferred_extension == ".svg":
        source = _rasterize_svg(source, temp_dir, toolkit)

    destination = output_dir / f"{icon_name}.icns"
    try:
        convert_to_icns(source, destination, temp_dir, toolkit, config.icon.iconset_sizes)
    except ConversionError as e:
        return IconResult.failed(f"Failed to convert icon to .icns: {e}")

    return IconResult.ok(destination, PlatformKind.MACOS)


def _prepare_windows(
    asset: DownloadedAsset,
    output_dir: Path,
    icon_name: str,
    toolkit: ConversionToolkit,
    config: "Config",
) -> IconResult:
    destination = output_dir / f"{icon_name}.ico"
    try:
        toolkit.imagemagick.to_ico(asset.path, destination, config.icon.ico_sizes)
        return IconResult.ok(destination, PlatformKind.WINDOWS)
    except ConversionError as e:
        logger.debug(f"ICO conversion unavailable, keeping PNG: {e}")

    fallback = output_dir / f"{icon_name}.png"
    shutil.copyfile(asset.path, fallback)
    return IconResult.ok(fallback, PlatformKind.WINDOWS, note=PNG_FALLBACK_NOTE)


def _prepare_linux(
    asset: DownloadedAsset,
    output_dir: Path,
    icon_name: str,
    toolkit: ConversionToolkit,
) -> IconResult:
    destination = output_dir / f"{icon_name}.png"

    if asset.inferred_extension == ".png":
        shutil.copyfile(asset.path, destination)
        return IconResult.ok(destination, PlatformKind.LINUX)

    converters = [
        ("sips", lambda: toolkit.sips.to_png(asset.path, destination)),
        ("imagemagick", lambda: toolkit.imagemagick.convert(asset.path, destination)),
    ]
    for name, convert in converters:
        try:
            convert()
            return IconResult.ok(destination, PlatformKind.LINUX)
        except ConversionError as e:
            logger.debug(f"{name} could not convert icon to PNG: {e}")

    shutil.copyfile(asset.path, destination)
    return IconResult.ok(destination, PlatformKind.LINUX)


def prepare_icon(
    page_url: str,
    output_dir: Path,
    platform: PlatformKind,
    config: "Config",
    icon_name: str | None = None,
    toolkit: ConversionToolkit | None = None,
) -> IconResult:
    """
    Discover, download and convert the best icon for a website.

    The download and any staging files live in a temporary directory
    inside output_dir that is removed on every exit path.

    Args:
        page_url: Website URL
        output_dir: Directory the converted icon is written to
        platform: Target platform
        config: Application configuration
        icon_name: Icon file stem (platform default if omitted)
        toolkit: External tools to use (system tools if omitted)

    Returns:
        IconResult describing the converted icon or the failure
    """
    toolkit = toolkit or ConversionToolkit()
    icon_name = icon_name or DEFAULT_ICON_NAMES[platform]

    icon_url = discover_best_icon_url(page_url, config.network)

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return IconResult.failed(f"Cannot create icon directory {output_dir}: {e}")

    with tempfile.TemporaryDirectory(
        prefix=".icon-temp-", dir=output_dir, ignore_cleanup_errors=True
    ) as temp_name:
        temp_dir = Path(temp_name)

        try:
            asset = download_icon(icon_url, temp_dir, config)
        except NetworkError as e:
            return IconResult.failed(f"Failed to download icon: {e}")

        try:
            if platform == PlatformKind.MACOS:
                return _prepare_macos(asset, output_dir, icon_name, temp_dir, toolkit, config)
            if platform == PlatformKind.WINDOWS:
                return _prepare_windows(asset, output_dir, icon_name, toolkit, config)
            return _prepare_linux(asset, output_dir, icon_name, toolkit)
        except OSError as e:
            return IconResult.failed(f"Failed to write icon: {e}")
