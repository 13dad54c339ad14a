"""URL validation and app naming helpers."""

import hashlib
import logging
import re
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from ..constants import (
    APP_ID_PREFIX,
    DEFAULT_APP_NAME,
    ILLEGAL_FILENAME_CHARS,
    MAX_APP_ID_PATH_LENGTH,
    MAX_APP_NAME_LENGTH,
    PAGE_TITLE_MAX_BYTES,
)
from ..exceptions import NetworkError
from ..fetcher import fetch_html

if TYPE_CHECKING:
    from ..config import NetworkConfig

logger = logging.getLogger(__name__)

_ILLEGAL_CHARS_RE = re.compile(f"[{re.escape(ILLEGAL_FILENAME_CHARS)}]")


def validate_url(url: str) -> bool:
    """Return True if url is an absolute http(s) URL with a host."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def sanitize_app_name(name: str) -> str:
    """
    Make an app name safe for use as a file or directory name.

    Strips characters illegal in Windows/macOS file names, collapses runs of
    whitespace and truncates to 50 characters.

    Args:
        name: Display name as given by the user or page title

    Returns:
        Sanitized name
    """
    cleaned = _ILLEGAL_CHARS_RE.sub("", name)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    return cleaned[:MAX_APP_NAME_LENGTH]


def generate_app_id(url: str) -> str:
    """
    Derive a reverse-domain app identifier from a URL.

    The same URL always yields the same identifier. Hostname dots become
    dashes, path separators become dashes and anything outside
    ``[A-Za-z0-9-]`` is dropped.

    Example:
        >>> generate_app_id("https://Mail.Google.com/mail/u/0")
        'com.webnest.mail-google-com-mail-u-0'
    """
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError:
        hostname = None

    if not hostname:
        digest = hashlib.sha1(url.encode("utf-8")).hexdigest()[:12]
        return f"{APP_ID_PREFIX}app-{digest}"

    host_part = re.sub(r"[^a-zA-Z0-9-]", "", hostname.replace(".", "-"))
    path_part = re.sub(r"[^a-zA-Z0-9-]", "", parsed.path.replace("/", "-"))
    path_part = path_part[:MAX_APP_ID_PATH_LENGTH].rstrip("-")

    return f"{APP_ID_PREFIX}{host_part}{path_part}".lower()


def get_hostname(url: str) -> str:
    """Hostname of url for display, or url itself if it has none."""
    try:
        return urlparse(url).hostname or url
    except ValueError:
        return url


def extract_page_title(html: str) -> str | None:
    """Return the stripped text of the first <title>, or None."""
    soup = BeautifulSoup(html, "html.parser")
    if soup.title is None:
        return None
    title = soup.title.get_text().replace("\xa0", " ").strip()
    return title or None


def app_name_from_hostname(url: str) -> str:
    """
    Build a display name from the first hostname label.

    ``https://www.github.com`` becomes ``Github``.
    """
    hostname = get_hostname(url)
    if not hostname or hostname == url:
        return DEFAULT_APP_NAME

    label = hostname.removeprefix("www.").split(".")[0]
    if not label:
        return DEFAULT_APP_NAME
    return label[0].upper() + label[1:]


def get_app_name_from_url(url: str, config: "NetworkConfig") -> str:
    """
    Choose an app name for a URL.

    Uses the page title when the page can be fetched, otherwise the
    capitalised first hostname label.

    Args:
        url: Website URL
        config: Network configuration

    Returns:
        App name (never empty)
    """
    try:
        page = fetch_html(url, config, max_bytes=PAGE_TITLE_MAX_BYTES)
        title = extract_page_title(page.text)
        if title:
            name = sanitize_app_name(title)
            if name:
                return name
    except NetworkError as e:
        logger.debug(f"Could not fetch page title for {url}: {e}")

    return app_name_from_hostname(url)
