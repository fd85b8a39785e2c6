# === FILE: sitefix/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from collections import deque
from typing import AsyncIterator, Deque, Optional, Set
from urllib.parse import urlsplit

from aiohttp import ClientSession, ClientTimeout

from sitefix.config import CrawlerConfig
from sitefix.crawler.fetcher import Fetcher
from sitefix.crawler.models import CrawlResult, CrawlStats, FrontierEntry
from sitefix.crawler.robots import RobotsTxtRules, load_robots
from sitefix.crawler.urls import has_skipped_extension, normalize_url
from sitefix.logger import logger
from sitefix.parser.html_parser import parse_page

__all__ = ("Crawler",)


class Crawler:
    """
    Sequential breadth-first crawler honouring robots.txt.

    ``crawl()`` is an async generator: results are produced one page at a
    time and the caller stops the crawl simply by leaving its ``async for``.
    """

    def __init__(self, config: CrawlerConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.base_url = normalize_url(str(config.base_url))
        self.session = session
        self._owns_session = session is None
        self.visited: Set[str] = set()
        self.skipped: Set[str] = set()
        self.queue: Deque[FrontierEntry] = deque()
        self._queued: Set[str] = set()
        self.robots_rules: Optional[RobotsTxtRules] = None
        self.robots_blocked = 0

    async def __aenter__(self) -> Crawler:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> AsyncIterator[CrawlResult]:
        if self.session is None:
            raise RuntimeError("Session not initialized")
        logger.info("Crawl started: %s", self.base_url)
        start = time.monotonic()

        if self.config.respect_robots_txt:
            self.robots_rules = await load_robots(
                self.session,
                self.base_url,
                user_agent=self.config.user_agent,
                timeout=self.config.robots_timeout,
            )
        fetcher = Fetcher(self.session, self.config)
        produced = 0

        self._enqueue(self.base_url, 0)
        while self.queue and len(self.visited) < self.config.max_pages:
            entry = self._dequeue()
            url = normalize_url(entry.url)
            if url in self.visited:
                continue
            # skipped URLs count as visited so they are never queued again
            self.visited.add(url)
            if not self._is_crawlable(url):
                self.skipped.add(url)
                continue

            page = await fetcher.fetch(url)
            if page is not None:
                result = parse_page(url, page.html, page.status_code, base_url=self.base_url)
                produced += 1
                yield result
                if entry.depth < self.config.max_depth:
                    for link in result.internal_links:
                        self._enqueue(link.href, entry.depth + 1)

            if self.config.request_delay:
                await asyncio.sleep(self.config.request_delay)

        duration = time.monotonic() - start
        logger.info(
            "Crawl finished: %d pages from %d visited in %.2f s (%d skipped, %d blocked by robots.txt)",
            produced, len(self.visited), duration, len(self.skipped), self.robots_blocked,
        )

    def get_stats(self) -> CrawlStats:
        return CrawlStats(
            visited=len(self.visited),
            queued=len(self.queue),
            skipped=len(self.skipped),
            robots_blocked=self.robots_blocked,
        )

    def _enqueue(self, url: str, depth: int) -> None:
        url = normalize_url(url)
        if url in self.visited or url in self._queued:
            return
        self._queued.add(url)
        self.queue.append(FrontierEntry(url=url, depth=depth))

    def _dequeue(self) -> FrontierEntry:
        entry = self.queue.popleft()
        self._queued.discard(entry.url)
        return entry

    def _is_crawlable(self, url: str) -> bool:
        if has_skipped_extension(url):
            logger.debug("Skipping %s: non-HTML extension", url)
            return False
        if self.robots_rules is not None:
            path = urlsplit(url).path or "/"
            if not self.robots_rules.can_fetch(self.config.user_agent, path):
                self.robots_blocked += 1
                logger.debug("Skipping %s: disallowed by robots.txt", url)
                return False
        return True
