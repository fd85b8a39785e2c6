# sitefix/crawler/fetcher.py
"""
Fetcher module: a single timed GET per page, HTML responses only.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from sitefix.config import CrawlerConfig
from sitefix.crawler.models import FetchedPage
from sitefix.logger import logger

ACCEPT_HEADER = "text/html,application/xhtml+xml"


class Fetcher:
    """Performs page requests; no retries, no backoff."""

    def __init__(self, session: ClientSession, config: CrawlerConfig) -> None:
        self.session = session
        self.config = config
        self._timeout = ClientTimeout(total=config.timeout)

    async def fetch(self, url: str) -> Optional[FetchedPage]:
        """
        Fetch *url*, following redirects.

        Returns FetchedPage for ``text/html`` responses (any status), None for
        other content types and for network errors or timeouts.
        """
        try:
            async with self.session.get(
                url,
                timeout=self._timeout,
                allow_redirects=True,
                headers={"User-Agent": self.config.user_agent, "Accept": ACCEPT_HEADER},
            ) as resp:
                ctype = resp.headers.get("Content-Type", "").lower()
                if "text/html" not in ctype:
                    logger.debug("Skipping %s: content type %r", url, ctype or None)
                    return None
                html = await resp.text(errors="replace")
                return FetchedPage(url=url, html=html, status_code=resp.status)
        except (ClientError, asyncio.TimeoutError) as exc:
            logger.warning("Failed to fetch %s: %s", url, exc or type(exc).__name__)
            return None
