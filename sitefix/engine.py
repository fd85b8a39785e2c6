# File: sitefix/engine.py
"""sitefix.engine: orchestration layer running a crawl and aggregating results."""

from __future__ import annotations

import asyncio
from typing import List, Optional

from sitefix.aggregator import SiteReport, aggregate_results
from sitefix.config import CrawlerConfig
from sitefix.crawler.crawler import Crawler
from sitefix.crawler.models import CrawlResult
from sitefix.logger import logger

__all__ = ["Engine", "start_scan"]


async def start_scan(config: CrawlerConfig) -> List[CrawlResult]:
    """Run a crawler inside its session context and collect every result."""
    results: List[CrawlResult] = []
    async with Crawler(config) as crawler:
        async for result in crawler.crawl():
            stats = crawler.get_stats()
            logger.debug("Crawled %s (visited=%d, queued=%d)", result.url, stats.visited, stats.queued)
            results.append(result)
    return results


class Engine:
    """Facade for the CLI: crawl under an optional overall timeout, then aggregate."""

    def __init__(self, config: CrawlerConfig, scan_timeout: Optional[float] = None) -> None:
        self.config = config
        self.scan_timeout = scan_timeout

    def start_scan(self) -> SiteReport:
        """Crawl synchronously (optionally bounded by *scan_timeout*) and aggregate."""
        logger.info("Starting crawl of %s", self.config.base_url)

        try:
            results = asyncio.run(asyncio.wait_for(start_scan(self.config), timeout=self.scan_timeout))
        except asyncio.TimeoutError:
            logger.error("Crawl did not finish within %s seconds", self.scan_timeout)
            raise
        except Exception as exc:
            logger.error("Crawl failed: %s", exc)
            raise

        return aggregate_results(results, base_url=str(self.config.base_url))
