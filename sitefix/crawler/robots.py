# sitefix/crawler/robots.py
"""
Parser and checker for robots.txt rules.
"""
from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlsplit, urlunsplit

from aiohttp import ClientError, ClientSession, ClientTimeout

from sitefix.logger import logger

__all__ = ("RobotsTxtRules", "load_robots", "robots_url_for")


@dataclass
class _Group:
    agents: List[str] = field(default_factory=list)
    directives: List[Tuple[str, str]] = field(default_factory=list)


class RobotsTxtRules:
    """
    Parses robots.txt (RFC 9309).
    An empty Disallow allows every path. ``*`` and ``$`` are honoured in rules.
    """
    _WILDCARD_RE = re.compile(r"(\*|\$)")

    def __init__(self, text: str) -> None:
        self.groups: List[_Group] = []
        self._regex_cache: Dict[str, re.Pattern[str]] = {}
        self._parse(text)

    def can_fetch(self, user_agent: str, path: str) -> bool:
        """Return True if *user_agent* may fetch *path*; longest matching rule wins."""
        group = self._match_group(user_agent)
        if group is None:
            return True
        best_len = -1
        allow: Optional[bool] = None
        for directive, pattern in group.directives:
            if not self._match_path(path or "/", pattern):
                continue
            length = self._rule_len(pattern)
            if length > best_len or (length == best_len and directive == "allow"):
                best_len = length
                allow = directive == "allow"
        return True if allow is None else allow

    def _parse(self, text: str) -> None:
        current: Optional[_Group] = None
        for raw in text.splitlines():
            line = raw.split("#", 1)[0].strip()
            if not line:
                continue
            key, _, val = line.partition(":")
            key = key.strip().lower()
            val = val.strip()
            if key == "user-agent":
                # consecutive User-agent lines share one group
                if current is None or current.directives:
                    current = _Group()
                    self.groups.append(current)
                if val:
                    current.agents.append(val.lower())
            elif key in ("allow", "disallow"):
                if key == "disallow" and not val:
                    continue
                if current is None:
                    current = _Group(agents=["*"])
                    self.groups.append(current)
                current.directives.append((key, val))

    def _match_group(self, user_agent: str) -> Optional[_Group]:
        ua = user_agent.lower()
        for group in self.groups:
            if any(agent != "*" and ua.startswith(agent) for agent in group.agents):
                return group
        for group in self.groups:
            if "*" in group.agents:
                return group
        return None

    def _match_path(self, path: str, pattern: str) -> bool:
        if pattern not in self._regex_cache:
            esc = re.escape(pattern).replace(r"\*", ".*")
            if pattern.endswith("$"):
                esc = esc[:-2] + "$"
            self._regex_cache[pattern] = re.compile(f"^{esc}")
        return bool(self._regex_cache[pattern].match(path))

    @classmethod
    def _rule_len(cls, pattern: str) -> int:
        return len(cls._WILDCARD_RE.sub("", pattern))


def robots_url_for(base_url: str) -> str:
    parsed = urlsplit(base_url)
    return urlunsplit((parsed.scheme, parsed.netloc, "/robots.txt", "", ""))


async def load_robots(
    session: ClientSession,
    base_url: str,
    user_agent: Optional[str] = None,
    timeout: float = 10.0,
) -> Optional[RobotsTxtRules]:
    """
    Fetch and parse robots.txt of *base_url*'s origin.

    Fails open: any network error, timeout or non-2xx status returns None,
    meaning no restrictions apply. *user_agent*, when given, is sent as the
    request's User-Agent header.
    """
    robots_url = robots_url_for(base_url)
    headers = {"User-Agent": user_agent} if user_agent else None
    try:
        async with session.get(
            robots_url, headers=headers, timeout=ClientTimeout(total=timeout)
        ) as resp:
            if not 200 <= resp.status < 300:
                logger.info("robots.txt %s -> HTTP %s, crawling without restrictions", robots_url, resp.status)
                return None
            text = await resp.text(errors="replace")
    except (ClientError, asyncio.TimeoutError) as exc:
        logger.warning("robots.txt not available at %s: %s", robots_url, exc)
        return None
    return RobotsTxtRules(text)
