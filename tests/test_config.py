# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from sitefix.config import DEFAULT_USER_AGENT, CrawlerConfig, load_config, read_config_file


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("base_url: http://example.com\n", ".yaml", None),
        (json.dumps({"base_url": "http://example.com"}), ".json", None),
        ("{}", ".json", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- just\n- a list", ".yaml", TypeError),
        ("[1, 2]", ".json", TypeError),
        ("{broken", ".json", ValueError),
        ("base_url = 'x'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlerConfig)
        assert str(cfg.base_url).rstrip("/") == "http://example.com"


def test_defaults():
    cfg = CrawlerConfig(base_url="https://example.com")
    assert cfg.respect_robots_txt is True
    assert cfg.max_pages == 50
    assert cfg.max_depth == 3
    assert cfg.user_agent == DEFAULT_USER_AGENT
    assert cfg.timeout == 30.0
    assert cfg.robots_timeout == 10.0
    assert cfg.request_delay == 0.2


def test_camel_case_keys_are_accepted(tmp_path):
    cfg_path = write_file(
        tmp_path,
        "baseUrl: https://example.com\nrespectRobotsTxt: false\nmaxPages: 7\nmaxDepth: 1\nuserAgent: Bot/2\n",
        ".yml",
    )
    cfg = load_config(cfg_path)
    assert cfg.respect_robots_txt is False
    assert (cfg.max_pages, cfg.max_depth, cfg.user_agent) == (7, 1, "Bot/2")
    assert CrawlerConfig(baseUrl="https://example.com", maxPages=3).max_pages == 3


def test_overrides_replace_file_values(tmp_path):
    cfg_path = write_file(tmp_path, "base_url: https://example.com\nmax_pages: 10\n", ".yaml")
    cfg = load_config(cfg_path, max_pages=2, max_depth=None)
    assert cfg.max_pages == 2
    assert cfg.max_depth == 3


def test_read_config_file_returns_snake_case(tmp_path):
    cfg_path = write_file(tmp_path, json.dumps({"maxPages": 4, "base_url": "https://x.org"}), ".json")
    assert read_config_file(cfg_path) == {"max_pages": 4, "base_url": "https://x.org"}


@pytest.mark.parametrize(
    "field,value",
    [
        ("max_pages", 0),
        ("max_depth", -1),
        ("timeout", 0),
        ("timeout", 30000),
        ("robots_timeout", 10000),
        ("request_delay", -0.1),
        ("user_agent", ""),
    ],
)
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValidationError):
        CrawlerConfig(base_url="https://example.com", **{field: value})


def test_unknown_keys_rejected():
    with pytest.raises(ValidationError):
        CrawlerConfig(base_url="https://example.com", wordlists={})


def test_config_is_frozen():
    cfg = CrawlerConfig(base_url="https://example.com")
    with pytest.raises(ValidationError):
        cfg.max_pages = 5


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_millisecond_timeout_in_file_is_rejected(tmp_path):
    cfg_path = write_file(tmp_path, "baseUrl: https://example.com\ntimeout: 30000\n", ".yaml")
    with pytest.raises(ValidationError, match="timeout"):
        load_config(cfg_path)
