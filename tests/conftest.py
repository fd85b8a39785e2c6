# File: tests/conftest.py
from __future__ import annotations

from typing import List

import pytest

from sitefix.config import CrawlerConfig
from sitefix.crawler.models import CrawlResult, InternalLink
from sitefix.logger import configure


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """
    Return a basic valid CrawlerConfig without inter-request delay.
    """
    return CrawlerConfig(
        base_url="http://example.com",
        max_depth=1,
        timeout=2.0,
        user_agent="TestAgent/1.0",
        request_delay=0,
    )


@pytest.fixture()
def sample_html() -> str:
    """A small but complete page exercising every extracted field."""
    return """
    <html lang="en">
      <head>
        <title>  Acme Plumbing  </title>
        <meta name="description" content=" Fast local plumbers. ">
        <link rel="canonical" href="https://example.com/services">
        <script type="application/ld+json">{"@type": "LocalBusiness", "name": "Acme"}</script>
        <script type="application/ld+json">{not json</script>
      </head>
      <body>
        <header><a href="/">Home</a></header>
        <nav><a href="/pricing/">Pricing</a></nav>
        <h1>Emergency  plumbing</h1>
        <h2>Why us</h2>
        <h3>Licensed</h3>
        <main>
          <p>We fix leaks fast.</p>
          <a href="/about">About us</a>
          <a href="https://other.org/page">Partner</a>
          <a href="#top">Top</a>
          <a href="mailto:hi@example.com">Mail</a>
          <a href="tel:123">Call</a>
          <a href="javascript:void(0)">JS</a>
        </main>
        <aside class="sidebar">Sidebar text</aside>
        <footer><a href="/privacy">Privacy</a></footer>
        <script>var tracking = 1;</script>
      </body>
    </html>
    """


@pytest.fixture()
def make_result():
    """Factory building CrawlResult objects for aggregation tests."""

    def _make(url: str, links: List[InternalLink] | None = None, text_hash: str = "", **kwargs) -> CrawlResult:
        kwargs.setdefault("status_code", 200)
        return CrawlResult(url=url, internal_links=links or [], text_hash=text_hash, **kwargs)

    return _make


@pytest.fixture(autouse=True)
def reset_logging():
    """CliRunner swaps stderr; rebind the logger to the real stream afterwards."""
    yield
    configure(level="INFO")
