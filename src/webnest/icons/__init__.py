"""Icon discovery, download and conversion."""

from .discovery import IconCandidate, RankedIcon, discover_best_icon_url
from .transcoder import IconResult, PlatformIcon, prepare_icon

__all__ = [
    "IconCandidate",
    "IconResult",
    "PlatformIcon",
    "RankedIcon",
    "discover_best_icon_url",
    "prepare_icon",
]
