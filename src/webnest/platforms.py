"""Supported host platforms."""

import sys
from enum import Enum

from .exceptions import UnsupportedPlatformError


class PlatformKind(Enum):
    """Platforms WebNest can create launchers for."""

    MACOS = "darwin"
    WINDOWS = "win32"
    LINUX = "linux"


def detect_platform(sys_platform: str | None = None) -> PlatformKind:
    """
    Map a ``sys.platform`` value to a PlatformKind.

    Args:
        sys_platform: Value to map (defaults to the running interpreter's)

    Returns:
        Matching PlatformKind

    Raises:
        UnsupportedPlatformError: If the platform is not one of the three supported
    """
    value = sys_platform if sys_platform is not None else sys.platform

    if value == "darwin":
        return PlatformKind.MACOS
    if value == "win32":
        return PlatformKind.WINDOWS
    if value.startswith("linux"):
        return PlatformKind.LINUX

    raise UnsupportedPlatformError(f"Unsupported platform: {value}")
