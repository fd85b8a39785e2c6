# File: sitefix/analysis/__init__.py
"""sitefix.analysis: pure functions ranking crawled pages."""

from sitefix.analysis.priority import calculate_priority_score
from sitefix.analysis.roles import PageRole, classify_page_role

__all__ = ["PageRole", "classify_page_role", "calculate_priority_score"]
