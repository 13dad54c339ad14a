"""HTTP fetching for page, manifest and icon downloads.

Redirects are followed manually with an explicit hop counter so that a
redirect loop fails fast instead of recursing forever, and every request
runs against a single overall deadline.
"""

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import urljoin, urlparse

import httpx

from .constants import ASSET_USER_AGENT, DEFAULT_ASSET_TIMEOUT, DEFAULT_MAX_REDIRECTS
from .exceptions import FetchTimeoutError, HttpStatusError, NetworkError, TooManyRedirectsError

if TYPE_CHECKING:
    from .config import NetworkConfig

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """
    Result of a successful fetch.

    Attributes:
        content: Raw response body
        content_type: Value of the Content-Type header ("" if missing)
        url: Final URL after redirects
    """

    content: bytes
    content_type: str
    url: str

    @property
    def text(self) -> str:
        """Body decoded as UTF-8, replacing undecodable bytes."""
        return self.content.decode("utf-8", errors="replace")


def fetch(
    url: str,
    accept: str = "*/*",
    timeout: float = DEFAULT_ASSET_TIMEOUT,
    user_agent: str = ASSET_USER_AGENT,
    max_redirects: int = DEFAULT_MAX_REDIRECTS,
    max_bytes: int | None = None,
    transport: httpx.BaseTransport | None = None,
) -> FetchResult:
    """
    Perform an HTTP GET following redirects up to a hop limit.

    Args:
        url: Absolute http(s) URL to fetch
        accept: Accept header value
        timeout: Overall deadline in seconds for all hops and the body
        user_agent: User-Agent header value
        max_redirects: Maximum number of redirect hops
        max_bytes: Stop reading the body after this many bytes
        transport: Optional httpx transport (tests use httpx.MockTransport)

    Returns:
        FetchResult with body and content type

    Raises:
        HttpStatusError: Final response status was not 200
        FetchTimeoutError: Deadline expired
        TooManyRedirectsError: More than max_redirects hops
        NetworkError: Invalid URL or transport failure
    """
    try:
        scheme = urlparse(url).scheme
    except ValueError as e:
        raise NetworkError(f"Invalid URL {url}: {e}") from e
    if scheme not in ("http", "https"):
        raise NetworkError(f"Unsupported URL: {url}")

    headers = {"User-Agent": user_agent, "Accept": accept}
    deadline = time.monotonic() + timeout
    current_url = url

    try:
        with httpx.Client(
            timeout=timeout, follow_redirects=False, transport=transport
        ) as client:
            for hop in range(max_redirects + 1):
                with client.stream("GET", current_url, headers=headers) as response:
                    location = response.headers.get("location")
                    if 300 <= response.status_code < 400 and location:
                        next_url = urljoin(current_url, location)
                        logger.debug(f"Redirect {hop + 1}: {current_url} -> {next_url}")
                        current_url = next_url
                        _check_deadline(deadline, url)
                        continue

                    if response.status_code != 200:
                        raise HttpStatusError(response.status_code, current_url)

                    content = _read_body(response, deadline, url, max_bytes)
                    return FetchResult(
                        content=content,
                        content_type=response.headers.get("content-type", ""),
                        url=current_url,
                    )

    except httpx.TimeoutException as e:
        raise FetchTimeoutError(f"Timeout accessing {url} ({timeout}s)") from e
    except (httpx.InvalidURL, ValueError) as e:
        raise NetworkError(f"Invalid URL {url}: {e}") from e
    except httpx.HTTPError as e:
        raise NetworkError(f"Error accessing {url}: {e}") from e

    raise TooManyRedirectsError(f"Too many redirects (>{max_redirects}) for {url}")


def _read_body(
    response: httpx.Response, deadline: float, url: str, max_bytes: int | None
) -> bytes:
    """Stream the body, aborting once the deadline passes."""
    chunks: list[bytes] = []
    received = 0

    for chunk in response.iter_bytes():
        _check_deadline(deadline, url)
        chunks.append(chunk)
        received += len(chunk)
        if max_bytes is not None and received >= max_bytes:
            break

    return b"".join(chunks)


def _check_deadline(deadline: float, url: str) -> None:
    if time.monotonic() > deadline:
        raise FetchTimeoutError(f"Timeout accessing {url}")


def fetch_html(
    url: str,
    config: "NetworkConfig",
    max_bytes: int | None = None,
    transport: httpx.BaseTransport | None = None,
) -> FetchResult:
    """Fetch a web page the way a desktop browser would."""
    return fetch(
        url,
        accept="text/html",
        timeout=config.html_timeout,
        user_agent=config.browser_user_agent,
        max_redirects=config.max_redirects,
        max_bytes=max_bytes,
        transport=transport,
    )


def fetch_asset(
    url: str,
    config: "NetworkConfig",
    accept: str = "*/*",
    transport: httpx.BaseTransport | None = None,
) -> FetchResult:
    """Fetch an icon or manifest with the identifying user agent."""
    return fetch(
        url,
        accept=accept,
        timeout=config.asset_timeout,
        user_agent=config.asset_user_agent,
        max_redirects=config.max_redirects,
        transport=transport,
    )
