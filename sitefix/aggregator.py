# File: sitefix/aggregator.py
"""sitefix.aggregator: site-level analysis of crawl results.

Builds the link graph between crawled pages, classifies every page, scores
and ranks it, flags orphans and groups duplicate content by text hash.
"""

from __future__ import annotations

import json
from collections import Counter, defaultdict
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from sitefix.analysis.priority import calculate_priority_score
from sitefix.analysis.roles import classify_page_role
from sitefix.crawler.models import CrawlResult
from sitefix.crawler.urls import url_depth

__all__ = ["PageSummary", "SiteReport", "aggregate_results"]


@dataclass(slots=True)
class PageSummary:
    """One crawled page with its link-graph signals and priority."""

    url: str
    status_code: int
    title: Optional[str]
    h1: Optional[str]
    word_count: int
    text_hash: str
    role: str
    priority_score: int
    priority_rank: int = 0
    internal_links_in: int = 0
    internal_links_out: int = 0
    is_nav_linked: bool = False
    is_footer_linked: bool = False
    is_orphan: bool = False
    url_depth: int = 0


@dataclass(slots=True)
class SiteReport:
    """Aggregated outcome of one crawl."""

    base_url: Optional[str] = None
    pages: List[PageSummary] = field(default_factory=list)
    duplicates: List[List[str]] = field(default_factory=list)
    roles: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)

    def json(self, *, pretty: bool = False) -> str:
        """JSON representation of the report."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


@dataclass
class _InboundSignals:
    sources: Set[str] = field(default_factory=set)
    nav: bool = False
    footer: bool = False


def _collect_inbound(results: List[CrawlResult]) -> Dict[str, _InboundSignals]:
    """Map target URL -> distinct linking pages and landmark flags."""
    inbound: Dict[str, _InboundSignals] = defaultdict(_InboundSignals)
    for page in results:
        for link in page.internal_links:
            if link.href == page.url:
                continue
            signals = inbound[link.href]
            signals.sources.add(page.url)
            signals.nav = signals.nav or link.is_nav
            signals.footer = signals.footer or link.is_footer
    return inbound


def _find_duplicates(results: Iterable[CrawlResult]) -> List[List[str]]:
    groups: Dict[str, List[str]] = defaultdict(list)
    for page in results:
        if page.text_hash:
            groups[page.text_hash].append(page.url)
    return [urls for urls in groups.values() if len(urls) > 1]


def aggregate_results(results: Iterable[CrawlResult], base_url: Optional[str] = None) -> SiteReport:
    """Build a :class:`SiteReport` from crawl results (crawl order preserved)."""
    pages_in = list(results)
    inbound = _collect_inbound(pages_in)

    summaries: List[PageSummary] = []
    for page in pages_in:
        signals = inbound.get(page.url, _InboundSignals())
        links_in = len(signals.sources)
        depth = url_depth(page.url)
        role = classify_page_role(page.url, page.title, page.h1)
        summaries.append(
            PageSummary(
                url=page.url,
                status_code=page.status_code,
                title=page.title,
                h1=page.h1,
                word_count=page.word_count,
                text_hash=page.text_hash,
                role=role.value,
                priority_score=calculate_priority_score(
                    role, signals.nav, signals.footer, links_in, depth
                ),
                internal_links_in=links_in,
                internal_links_out=len(page.internal_links),
                is_nav_linked=signals.nav,
                is_footer_linked=signals.footer,
                is_orphan=links_in == 0,
                url_depth=depth,
            )
        )

    # sorted() is stable: equal scores keep crawl order
    for rank, summary in enumerate(sorted(summaries, key=lambda s: -s.priority_score), start=1):
        summary.priority_rank = rank

    return SiteReport(
        base_url=base_url,
        pages=summaries,
        duplicates=_find_duplicates(pages_in),
        roles=dict(Counter(s.role for s in summaries)),
    )
