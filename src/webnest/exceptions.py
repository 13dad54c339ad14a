"""Exception hierarchy for WebNest.

Icon pipeline errors (network, conversion) are caught close to where they
happen and degrade to an icon-less launcher. Browser lookup and platform
errors are fatal to the operation that raised them.
"""


class WebNestError(Exception):
    """Base class for all WebNest errors."""


class NetworkError(WebNestError):
    """Connection failure, invalid URL or any other transport problem."""


class HttpStatusError(NetworkError):
    """Final response status was not 200."""

    def __init__(self, status_code: int, url: str):
        super().__init__(f"HTTP {status_code}: {url}")
        self.status_code = status_code
        self.url = url


class FetchTimeoutError(NetworkError):
    """Request did not complete before its deadline."""


class TooManyRedirectsError(NetworkError):
    """Redirect chain exceeded the hop limit."""


class NotFoundError(WebNestError):
    """Browser missing or app not installed."""


class ConversionError(WebNestError):
    """External image tool failed."""


class ToolUnavailableError(ConversionError):
    """External image tool is not installed on this system."""


class UnsupportedPlatformError(WebNestError):
    """Host OS is not macOS, Windows or Linux."""


class LauncherCreationError(WebNestError):
    """Launcher artifact could not be written."""
