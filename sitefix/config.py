# === FILE: sitefix/config.py ===
"""
Loading and validation of the SiteFix crawler configuration.
Pydantic describes the schema; YAML and JSON files are accepted.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl
from pydantic.alias_generators import to_camel, to_snake

DEFAULT_USER_AGENT = "SiteFixBot/1.0 (+https://sitefix.io/bot)"
MAX_TIMEOUT = 600.0


class CrawlerConfig(BaseModel):
    """Settings of a single crawl session."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    base_url: HttpUrl = Field(..., description="Start URL of the crawl.")
    respect_robots_txt: bool = Field(True, description="Honour robots.txt rules.")
    max_pages: int = Field(50, ge=1, description="Ceiling on visited pages.")
    max_depth: int = Field(3, ge=0, description="Ceiling on link depth from the start URL.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="User-Agent header.")
    # Timeouts are seconds; the ceiling rejects millisecond values such as 30000.
    timeout: float = Field(30.0, gt=0, le=MAX_TIMEOUT, description="Per-page request timeout in seconds.")
    robots_timeout: float = Field(
        10.0, gt=0, le=MAX_TIMEOUT, description="robots.txt request timeout in seconds."
    )
    request_delay: float = Field(0.2, ge=0, description="Pause between fetches (seconds).")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Read a YAML or JSON config file into a mapping with snake_case keys."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")
    # camelCase keys (maxPages, respectRobotsTxt) are folded onto field names
    return {to_snake(str(key)): value for key, value in data.items()}


def load_config(path: Union[str, Path], **overrides: Any) -> CrawlerConfig:
    """
    Read YAML or JSON and return a validated CrawlerConfig.
    Keyword *overrides* that are not None replace values from the file.
    """
    data = read_config_file(path)
    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlerConfig(**data)


__all__ = ["CrawlerConfig", "DEFAULT_USER_AGENT", "MAX_TIMEOUT", "load_config", "read_config_file"]
