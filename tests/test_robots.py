# File: tests/test_robots.py
import pytest

from sitefix.crawler.robots import RobotsTxtRules, robots_url_for

ROBOTS = """
# global rules
User-agent: *
Disallow: /admin
Allow: /admin/public
Disallow: /*.php$

User-agent: SiteFixBot
User-agent: OtherBot
Disallow: /private
Disallow:
"""


@pytest.fixture()
def rules() -> RobotsTxtRules:
    return RobotsTxtRules(ROBOTS)


@pytest.mark.parametrize(
    "path,allowed",
    [
        ("/", True),
        ("/admin", False),
        ("/admin/settings", False),
        ("/admin/public", True),
        ("/admin/public/page", True),
        ("/index.php", False),
        ("/index.php?x=1", True),
        ("/private", True),
    ],
)
def test_wildcard_group(rules, path, allowed):
    assert rules.can_fetch("RandomBot/2.0", path) is allowed


def test_specific_group_takes_precedence(rules):
    ua = "SiteFixBot/1.0 (+https://sitefix.io/bot)"
    assert rules.can_fetch(ua, "/private/area") is False
    # the specific group does not inherit the * rules
    assert rules.can_fetch(ua, "/admin") is True
    assert rules.can_fetch("otherbot", "/private") is False


def test_empty_robots_allows_everything():
    assert RobotsTxtRules("").can_fetch("any", "/anything") is True


def test_rules_without_user_agent_apply_to_all():
    assert RobotsTxtRules("Disallow: /tmp").can_fetch("bot", "/tmp/x") is False


def test_blank_user_agent_group_matches_nobody():
    rules = RobotsTxtRules("User-agent:\nDisallow: /\n\nUser-agent: *\nAllow: /\n")
    assert rules.can_fetch("SiteFixBot/1.0", "/page") is True


def test_equal_length_allow_wins():
    rules = RobotsTxtRules("User-agent: *\nDisallow: /page\nAllow: /page")
    assert rules.can_fetch("bot", "/page") is True


def test_robots_url_for():
    assert robots_url_for("https://example.com/blog") == "https://example.com/robots.txt"
    assert robots_url_for("http://127.0.0.1:8080") == "http://127.0.0.1:8080/robots.txt"
