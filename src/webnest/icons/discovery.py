"""Icon discovery - find the best icon a website offers.

Candidates come from ``<link rel="...icon...">`` tags in the page HTML and
from the ``icons`` array of the Web App Manifest. They are ranked by the
declared size, with Apple touch icons always preferred because they are
usually pre-rendered at high resolution. When nothing is found the
conventional ``/favicon.ico`` is used.
"""

import json
import logging
import re
from dataclasses import dataclass
from operator import attrgetter
from typing import TYPE_CHECKING
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from ..constants import APPLE_TOUCH_ICON_BONUS, FALLBACK_ICON_PATH
from ..exceptions import NetworkError
from ..fetcher import fetch_asset, fetch_html

if TYPE_CHECKING:
    from ..config import NetworkConfig

logger = logging.getLogger(__name__)


# ============================================================================
# Data Models
# ============================================================================


@dataclass
class IconCandidate:
    """A single icon reference found on a page or in a manifest."""

    href: str
    size_hint: int = 0  # Leading number of the "sizes" attribute, 0 if unknown
    mime_type: str = ""
    is_preferred_rel_type: bool = False  # rel included "apple-touch-icon"
    rel: str = ""
    source: str = "html"  # "html" or "manifest"


@dataclass
class RankedIcon:
    """Icon candidate with its ranking score."""

    candidate: IconCandidate
    priority: int


# ============================================================================
# Parsing Helpers
# ============================================================================


def parse_size_hint(sizes: str | None) -> int:
    """
    Extract the leading number of a ``sizes`` value.

    ``"180x180"`` gives 180, ``"16x16 32x32"`` gives 16, and ``"any"``,
    empty or missing values give 0.
    """
    if not sizes:
        return 0
    first = sizes.strip().lower().split("x")[0]
    match = re.match(r"\d+", first)
    return int(match.group()) if match else 0


def _rel_value(tag) -> str:
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return " ".join(rel).lower()


def parse_icon_links(html: str, base_url: str) -> list[IconCandidate]:
    """
    Find icon link elements in HTML.

    Args:
        html: Page HTML
        base_url: URL the page was fetched from, for resolving hrefs

    Returns:
        Candidates in document order
    """
    soup = BeautifulSoup(html, "html.parser")
    candidates = []

    for link in soup.find_all("link"):
        rel = _rel_value(link)
        if "icon" not in rel:
            continue

        href = link.get("href")
        if not href or not href.strip():
            continue

        try:
            resolved = urljoin(base_url, href.strip())
        except ValueError:
            logger.debug(f"Skipping unresolvable icon href: {href}")
            continue

        candidate = IconCandidate(
            href=resolved,
            size_hint=parse_size_hint(link.get("sizes")),
            mime_type=link.get("type") or "",
            is_preferred_rel_type="apple-touch-icon" in rel,
            rel=rel,
            source="html",
        )
        candidates.append(candidate)
        logger.debug(f"Found icon in HTML: {candidate.href} (rel={rel})")

    return candidates


def find_manifest_url(html: str, base_url: str) -> str | None:
    """Return the absolute URL of the first ``<link rel="manifest">``, if any."""
    soup = BeautifulSoup(html, "html.parser")

    for link in soup.find_all("link"):
        if "manifest" in _rel_value(link).split() and link.get("href"):
            try:
                return urljoin(base_url, link["href"].strip())
            except ValueError:
                logger.debug(f"Skipping unresolvable manifest href: {link['href']}")

    return None


def parse_manifest_icons(manifest_data: bytes | str, manifest_url: str) -> list[IconCandidate]:
    """
    Extract icon candidates from a Web App Manifest document.

    Invalid JSON or a missing/invalid ``icons`` array yields no candidates;
    individual entries without a usable ``src`` string are skipped.
    """
    try:
        manifest = json.loads(manifest_data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.debug(f"Invalid JSON in manifest {manifest_url}: {e}")
        return []

    if not isinstance(manifest, dict):
        return []

    icons = manifest.get("icons")
    if not isinstance(icons, list):
        logger.debug(f"Manifest has no icons array: {manifest_url}")
        return []

    candidates = []
    for icon in icons:
        if not isinstance(icon, dict):
            continue

        src = icon.get("src")
        if not isinstance(src, str) or not src.strip():
            continue

        try:
            href = urljoin(manifest_url, src.strip())
        except ValueError:
            logger.debug(f"Skipping unresolvable manifest icon: {src}")
            continue

        sizes = icon.get("sizes")
        mime_type = icon.get("type")
        candidates.append(
            IconCandidate(
                href=href,
                size_hint=parse_size_hint(sizes if isinstance(sizes, str) else None),
                mime_type=mime_type if isinstance(mime_type, str) else "",
                rel="manifest-icon",
                source="manifest",
            )
        )

    return candidates


def rank_candidates(candidates: list[IconCandidate]) -> list[RankedIcon]:
    """
    Rank candidates best-first.

    Priority is the size hint, plus a fixed bonus for Apple touch icons.
    The sort is stable so equal priorities keep encounter order.
    """
    ranked = [
        RankedIcon(
            candidate=candidate,
            priority=candidate.size_hint
            + (APPLE_TOUCH_ICON_BONUS if candidate.is_preferred_rel_type else 0),
        )
        for candidate in candidates
    ]
    return sorted(ranked, key=attrgetter("priority"), reverse=True)


def favicon_fallback_url(page_url: str) -> str:
    """``{scheme}://{hostname}/favicon.ico`` for the page URL."""
    try:
        parsed = urlparse(page_url)
        scheme = parsed.scheme or "https"
        hostname = parsed.hostname or ""
    except ValueError:
        scheme, hostname = "https", ""
    return f"{scheme}://{hostname}{FALLBACK_ICON_PATH}"


# ============================================================================
# Discovery
# ============================================================================


def _fetch_manifest_icons(manifest_url: str, config: "NetworkConfig") -> list[IconCandidate]:
    try:
        response = fetch_asset(manifest_url, config, accept="application/json")
    except NetworkError as e:
        logger.debug(f"Failed to fetch manifest {manifest_url}: {e}")
        return []

    try:
        candidates = parse_manifest_icons(response.content, manifest_url)
    except ValueError as e:
        logger.debug(f"Error parsing manifest {manifest_url}: {e}")
        return []
    logger.debug(f"Manifest {manifest_url} lists {len(candidates)} icon(s)")
    return candidates


def collect_candidates(page_url: str, config: "NetworkConfig") -> list[IconCandidate]:
    """
    Gather icon candidates from the page and its manifest.

    Every failure is treated as "no candidates from this source".
    """
    try:
        page = fetch_html(page_url, config)
    except NetworkError as e:
        logger.debug(f"Failed to fetch HTML for icon discovery: {page_url} - {e}")
        return []

    html = page.text
    base_url = page.url

    try:
        candidates = parse_icon_links(html, base_url)
        manifest_url = find_manifest_url(html, base_url)
    except ValueError as e:
        logger.debug(f"Error parsing HTML for icons: {page_url} - {e}")
        return []

    if manifest_url:
        candidates.extend(_fetch_manifest_icons(manifest_url, config))

    return candidates


def discover_best_icon_url(page_url: str, config: "NetworkConfig") -> str:
    """
    Find the best icon URL for a website.

    Never raises: on any failure the ``/favicon.ico`` fallback is returned.

    Args:
        page_url: Website URL
        config: Network configuration

    Returns:
        Absolute icon URL
    """
    ranked = rank_candidates(collect_candidates(page_url, config))

    if ranked:
        best = ranked[0]
        logger.debug(
            f"Best icon: {best.candidate.href} (priority={best.priority}, "
            f"source={best.candidate.source})"
        )
        return best.candidate.href

    fallback = favicon_fallback_url(page_url)
    logger.debug(f"No icon candidates for {page_url}, using {fallback}")
    return fallback
