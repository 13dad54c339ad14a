"""Tests for platform detection."""

import pytest

from webnest.exceptions import UnsupportedPlatformError
from webnest.platforms import PlatformKind, detect_platform


@pytest.mark.parametrize(
    "value,expected",
    [
        ("darwin", PlatformKind.MACOS),
        ("win32", PlatformKind.WINDOWS),
        ("linux", PlatformKind.LINUX),
        ("linux2", PlatformKind.LINUX),
    ],
)
def test_supported_platforms(value, expected):
    """Test the sys.platform mapping."""
    assert detect_platform(value) is expected


@pytest.mark.parametrize("value", ["freebsd13", "cygwin", "aix"])
def test_unsupported_platforms(value):
    """Test that other operating systems are rejected."""
    with pytest.raises(UnsupportedPlatformError):
        detect_platform(value)


def test_host_platform_detected():
    """Test that the running platform is recognized (CI runs on supported OSes)."""
    assert isinstance(detect_platform(), PlatformKind)
