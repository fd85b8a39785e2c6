# sitefix/crawler/models.py
"""
Data models for the SiteFix crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

#: Hard cap on the length of ``CrawlResult.cleaned_text``.
MAX_TEXT_LENGTH = 50_000


@dataclass(slots=True)
class FrontierEntry:
    """A discovered, not yet fetched URL."""

    url: str
    depth: int


@dataclass(slots=True)
class FetchedPage:
    """Raw HTML returned by the fetcher."""

    url: str
    html: str
    status_code: int


@dataclass(slots=True)
class InternalLink:
    """Same-host link found on a page, with landmark provenance."""

    href: str
    anchor_text: str
    is_nav: bool = False
    is_footer: bool = False


@dataclass(slots=True)
class Headings:
    h1: List[str] = field(default_factory=list)
    h2: List[str] = field(default_factory=list)
    h3: List[str] = field(default_factory=list)


@dataclass(slots=True)
class CrawlResult:
    """Everything extracted from one fetched page."""

    url: str
    status_code: int
    title: Optional[str] = None
    h1: Optional[str] = None
    meta_description: Optional[str] = None
    canonical: Optional[str] = None
    lang: Optional[str] = None
    headings: Headings = field(default_factory=Headings)
    cleaned_text: str = ""
    word_count: int = 0
    text_hash: str = ""
    internal_links: List[InternalLink] = field(default_factory=list)
    external_links: List[str] = field(default_factory=list)
    structured_data: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class CrawlStats:
    """Progress counters of a running crawl.

    ``visited`` counts every dequeued URL, including the ``skipped`` ones
    (robots.txt disallowed or non-HTML extension) that were never fetched.
    """

    visited: int
    queued: int
    skipped: int = 0
    robots_blocked: int = 0
