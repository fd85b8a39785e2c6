# === FILE: sitefix/parser/html_parser.py ===
"""HTML parsing for SiteFix crawl results.

:func:`parse_page` turns the raw markup of one fetched page into a
:class:`~sitefix.crawler.models.CrawlResult`:

* title, first h1, meta description, canonical and language - ``None`` when
  missing, never ``""``;
* h1/h2/h3 heading texts in document order;
* main-content text with navigation, footer, scripts and sidebars removed,
  whitespace collapsed and cut at :data:`MAX_TEXT_LENGTH` characters, plus
  its word count and MD5 fingerprint;
* internal links (same host as the crawl's base URL) with nav/footer
  provenance, and external absolute links;
* JSON-LD structured data blocks; malformed blocks are dropped.
"""
from __future__ import annotations

import hashlib
import json
from collections.abc import Sequence
from typing import Any, Iterable, List, Optional, Tuple
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from sitefix.crawler.models import MAX_TEXT_LENGTH, CrawlResult, Headings, InternalLink
from sitefix.crawler.urls import is_internal_url, normalize_url
from sitefix.logger import logger

__all__: Sequence[str] = ("parse_page", "clean_text")

_STRIP_SELECTOR = "script, style, nav, footer, header, aside, .sidebar, .menu, .navigation"
_IGNORED_HREF_PREFIXES = ("#", "javascript:", "mailto:", "tel:")

_NAV_TAGS = frozenset({"nav", "header"})
_NAV_CLASSES = frozenset({"navigation", "menu", "nav"})
_FOOTER_TAGS = frozenset({"footer"})
_FOOTER_CLASSES = frozenset({"footer"})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _text(tag: Optional[Tag]) -> Optional[str]:
    if tag is None:
        return None
    return " ".join(tag.get_text().split()) or None


def _attr(tag: Optional[Tag], name: str) -> Optional[str]:
    if tag is None:
        return None
    value = tag.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _has_ancestor(tag: Tag, names: frozenset[str], classes: frozenset[str]) -> bool:
    for parent in tag.parents:
        if parent.name in names:
            return True
        if classes.intersection(parent.get("class") or ()):
            return True
    return False


def clean_text(text: str, limit: int = MAX_TEXT_LENGTH) -> str:
    """Collapse whitespace and hard-truncate to *limit* characters."""
    return " ".join(text.split())[:limit]


def _extract_links(
    soup: BeautifulSoup, page_url: str, base_url: str
) -> Tuple[List[InternalLink], List[str]]:
    internal: List[InternalLink] = []
    external: List[str] = []
    for tag in soup.find_all("a", href=True):
        href = tag.get("href")
        if not isinstance(href, str):
            continue
        href = href.strip()
        if not href or href.lower().startswith(_IGNORED_HREF_PREFIXES):
            continue
        try:
            absolute = urljoin(page_url, href)
            urlsplit(absolute).port  # raises on a non-numeric port
        except ValueError:
            logger.debug("Dropping malformed link %r on %s", href, page_url)
            continue

        if is_internal_url(absolute, base_url):
            internal.append(
                InternalLink(
                    href=normalize_url(absolute),
                    anchor_text=" ".join(tag.get_text().split()),
                    is_nav=_has_ancestor(tag, _NAV_TAGS, _NAV_CLASSES),
                    is_footer=_has_ancestor(tag, _FOOTER_TAGS, _FOOTER_CLASSES),
                )
            )
        else:
            external.append(absolute)
    return internal, external


def _extract_structured_data(scripts: Iterable[Tag], page_url: str) -> List[Any]:
    blocks: List[Any] = []
    for script in scripts:
        raw = script.string if script.string is not None else script.get_text()
        try:
            blocks.append(json.loads(raw))
        except ValueError as exc:
            logger.debug("Malformed JSON-LD on %s: %s", page_url, exc)
    return blocks


# ---------------------------------------------------------------------------
# Public function
# ---------------------------------------------------------------------------


def parse_page(url: str, html: str, status_code: int, base_url: Optional[str] = None) -> CrawlResult:
    """Parse *html* fetched from *url* into a :class:`CrawlResult`.

    Parameters
    ----------
    url
        The URL the page was fetched from; relative links resolve against it.
    html
        Raw markup.
    status_code
        HTTP status of the response.
    base_url
        Start URL of the crawl; its hostname decides internal vs external
        links. Defaults to *url*.
    """
    soup = BeautifulSoup(html, "lxml")
    base = base_url or url

    html_tag = soup.find("html")
    lang = _attr(html_tag, "lang") or _attr(
        soup.find("meta", attrs={"http-equiv": lambda v: v and v.lower() == "content-language"}),
        "content",
    )

    headings = Headings(
        h1=[" ".join(t.get_text().split()) for t in soup.find_all("h1")],
        h2=[" ".join(t.get_text().split()) for t in soup.find_all("h2")],
        h3=[" ".join(t.get_text().split()) for t in soup.find_all("h3")],
    )

    internal_links, external_links = _extract_links(soup, url, base)
    structured_data = _extract_structured_data(
        soup.find_all("script", attrs={"type": "application/ld+json"}), url
    )

    result = CrawlResult(
        url=normalize_url(url),
        status_code=status_code,
        title=_text(soup.find("title")),
        h1=_text(soup.find("h1")),
        meta_description=_attr(soup.find("meta", attrs={"name": "description"}), "content"),
        canonical=_attr(soup.find("link", rel="canonical"), "href"),
        lang=lang,
        headings=headings,
        internal_links=internal_links,
        external_links=external_links,
        structured_data=structured_data,
    )

    # Metadata and links are read above; from here on the tree is mutated.
    for element in soup.select(_STRIP_SELECTOR):
        if not element.decomposed:  # nested inside an already removed element
            element.decompose()
    body = soup.body or soup
    result.cleaned_text = clean_text(body.get_text(" "))
    result.word_count = len(result.cleaned_text.split())
    result.text_hash = hashlib.md5(result.cleaned_text.encode("utf-8")).hexdigest()
    return result
