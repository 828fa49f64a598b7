from __future__ import annotations

from pathlib import Path
from typing import Iterable, List
from urllib.parse import urlparse

import yaml

from ..models import Feed


class ConfigError(Exception):
    """Raised when the configuration file is invalid or missing required fields."""


REQUIRED_FIELDS = {"name", "url"}


def _validate_feed_dict(entry: dict) -> None:
    """Validate a single feed mapping from YAML.

    Required fields: name (str), url (absolute http/https, query included).
    """
    missing = REQUIRED_FIELDS - set(entry)
    if missing:
        raise ConfigError(f"Missing required fields: {sorted(missing)} in {entry}")

    name = str(entry["name"] or "").strip()
    if not name:
        raise ConfigError(f"Feed name must be a non-empty string in {entry}")

    url_str = str(entry["url"] or "").strip()
    parsed = urlparse(url_str)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"Invalid URL '{url_str}'. Must be absolute http(s) URL.")


def _coerce_feed(entry: dict) -> Feed:
    return Feed(name=str(entry["name"]).strip(), url=str(entry["url"]).strip())


def load_feeds_config(path: Path | str) -> List[Feed]:
    """Load ``feeds.yaml`` into typed ``Feed`` instances.

    YAML structure:
      - Top-level mapping
      - Key ``feeds``: list of mappings with fields
          - name: string (required)
          - url: http/https URL including its query string (required)

    Unknown keys are ignored for forward compatibility. Feed names must be
    unique so results can be reported per feed.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Top level of the feeds configuration must be a mapping")

    feeds_raw: Iterable[dict] = (data.get("feeds") or [])
    if not isinstance(feeds_raw, list):
        raise ConfigError("'feeds' must be a list in the YAML configuration")

    feeds: List[Feed] = []
    seen: set[str] = set()
    for item in feeds_raw:
        if not isinstance(item, dict):
            raise ConfigError(f"Each feed must be a mapping, got: {type(item)}")
        _validate_feed_dict(item)
        feed = _coerce_feed(item)
        if feed.name in seen:
            raise ConfigError(f"Duplicate feed name '{feed.name}'")
        seen.add(feed.name)
        feeds.append(feed)
    return feeds
