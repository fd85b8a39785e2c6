# File: sitefix/analysis/priority.py
"""sitefix.analysis.priority: remediation priority score of a page."""

from __future__ import annotations

from typing import Dict, Union

from sitefix.analysis.roles import PageRole

__all__ = ["ROLE_BASE_SCORES", "calculate_priority_score"]

ROLE_BASE_SCORES: Dict[str, int] = {
    PageRole.MONEY.value: 100,
    PageRole.TRUST.value: 70,
    PageRole.AUTHORITY.value: 40,
    PageRole.SUPPORT.value: 20,
}
_DEFAULT_BASE = 20

NAV_BONUS = 30
FOOTER_BONUS = 10
INBOUND_WEIGHT, INBOUND_CAP = 2, 20
DEPTH_WEIGHT, DEPTH_CAP = 5, 20


def calculate_priority_score(
    role: Union[PageRole, str],
    is_nav_linked: bool = False,
    is_footer_linked: bool = False,
    inbound_links: int = 0,
    url_depth: int = 0,
) -> int:
    """Linear heuristic clamped to [0, 100].

    role base + 30 (nav) + 10 (footer) + min(2*inbound, 20) - min(5*depth, 20)
    """
    key = role.value if isinstance(role, PageRole) else str(role)
    score = ROLE_BASE_SCORES.get(key, _DEFAULT_BASE)
    if is_nav_linked:
        score += NAV_BONUS
    if is_footer_linked:
        score += FOOTER_BONUS
    score += min(INBOUND_WEIGHT * max(inbound_links, 0), INBOUND_CAP)
    score -= min(DEPTH_WEIGHT * max(url_depth, 0), DEPTH_CAP)
    return max(0, min(100, score))
