# sitefix/crawler/urls.py
"""
URL normalization and host checks for the SiteFix crawler.
"""
from __future__ import annotations

from typing import Optional, Tuple
from urllib.parse import urljoin, urlsplit

__all__ = (
    "SKIP_EXTENSIONS",
    "normalize_url",
    "is_internal_url",
    "has_skipped_extension",
    "url_depth",
)

SKIP_EXTENSIONS: Tuple[str, ...] = (
    ".pdf", ".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp",
    ".css", ".js", ".json", ".xml", ".txt", ".zip", ".rar",
    ".mp3", ".mp4", ".avi", ".mov", ".doc", ".docx", ".xls", ".xlsx",
)

_DEFAULT_PORTS = {"http": 80, "https": 443}


def normalize_url(url: str, base: Optional[str] = None) -> str:
    """
    Normalize URL to ``scheme://host[:port]/path`` without a trailing slash.

    Relative *url* is resolved against *base* first. Query and fragment are
    dropped. Malformed input is returned unchanged.
    """
    try:
        absolute = urljoin(base, url) if base else url
        parsed = urlsplit(absolute)
        host = parsed.hostname
        port = parsed.port
    except ValueError:
        return url
    scheme = parsed.scheme.lower()
    if not scheme or not host:
        return url

    netloc = f"[{host}]" if ":" in host else host
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{netloc}:{port}"

    path = parsed.path
    if path.endswith("/"):
        path = path[:-1]
    return f"{scheme}://{netloc}{path}"


def is_internal_url(url: str, base_url: str) -> bool:
    """True when *url* (resolved against *base_url*) has the base hostname."""
    try:
        base_host = urlsplit(base_url).hostname
        target_host = urlsplit(urljoin(base_url, url)).hostname
    except ValueError:
        return False
    return base_host is not None and target_host == base_host


def has_skipped_extension(url: str) -> bool:
    """True for URLs pointing at images, styles, archives, media or documents."""
    return url.lower().endswith(SKIP_EXTENSIONS)


def url_depth(url: str) -> int:
    """Number of non-empty path segments, ``/blog/post`` -> 2."""
    try:
        path = urlsplit(url).path
    except ValueError:
        return 0
    return len([segment for segment in path.split("/") if segment])
