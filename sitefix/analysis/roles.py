# File: sitefix/analysis/roles.py
"""sitefix.analysis.roles: heuristic page-role classification."""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional, Pattern, Sequence, Tuple
from urllib.parse import urlsplit

__all__ = ["PageRole", "classify_page_role"]


class PageRole(str, Enum):
    """Coarse content purpose of a page."""

    MONEY = "money"
    TRUST = "trust"
    AUTHORITY = "authority"
    SUPPORT = "support"


def _compile(*patterns: str) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(p) for p in patterns)


# Checked in this order against the URL path; the first hit decides.
_PATH_RULES: Sequence[Tuple[PageRole, Tuple[Pattern[str], ...]]] = (
    (
        PageRole.MONEY,
        _compile(
            r"/(pricing|prices|plans|packages)",
            r"/(contact|book|booking|schedule|appointment)",
            r"/(services|solutions|products)",
            r"/(get-started|start|buy|order|purchase)",
            r"/(quote|estimate|consultation)",
            r"/(demo|trial|signup|sign-up)",
        ),
    ),
    (
        PageRole.TRUST,
        _compile(
            r"/(about|about-us|our-story|team|our-team)",
            r"/(reviews|testimonials|clients|case-studies|portfolio)",
            r"/(awards|certifications|credentials)",
        ),
    ),
    (
        PageRole.AUTHORITY,
        _compile(
            r"/(blog|articles|news|resources|guides)",
            r"/(how-to|tutorial|learn|education)",
            r"/(comparison|vs|alternatives)",
            r"/(glossary|dictionary|terms)",
        ),
    ),
    (
        PageRole.SUPPORT,
        _compile(
            r"/(faq|faqs|help|support)",
            r"/(privacy|privacy-policy|terms|terms-of-service|legal|disclaimer)",
            r"/(sitemap|404|error)",
            r"/(careers|jobs|work-with-us)",
        ),
    ),
)

_KEYWORD_RULES: Sequence[Tuple[PageRole, Tuple[str, ...]]] = (
    (PageRole.MONEY, ("pricing", "contact", "book")),
    (PageRole.TRUST, ("about", "team", "testimonial")),
    (PageRole.AUTHORITY, ("guide", "how to", "blog")),
)


def classify_page_role(url: str, title: Optional[str] = None, h1: Optional[str] = None) -> PageRole:
    """Classify a page by URL path patterns, then homepage, then keywords.

    Falls back to :attr:`PageRole.SUPPORT` when nothing matches.
    """
    url_lower = url.lower()
    try:
        path = urlsplit(url_lower).path
    except ValueError:
        path = url_lower

    for role, patterns in _PATH_RULES:
        if any(p.search(path) for p in patterns):
            return role

    if path in ("", "/"):
        return PageRole.MONEY

    combined = f"{url_lower} {(title or '').lower()} {(h1 or '').lower()}"
    for role, keywords in _KEYWORD_RULES:
        if any(k in combined for k in keywords):
            return role

    return PageRole.SUPPORT
