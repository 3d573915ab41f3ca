"""
Digest configuration loaded from a JSON file (``config.json``).

Only ``feeds`` is required; everything else falls back to the defaults below.
Keywords are lowercased once here so matching never has to.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .classifier import normalize_keywords
from .exceptions import ConfigError
from .fetcher import DEFAULT_MAX_WORKERS, DEFAULT_TIMEOUT_SEC, DEFAULT_USER_AGENT
from .summarizers import SummarizeOptions

DEFAULT_MAX_ITEMS = 150
DEFAULT_TITLE = "Cybersecurity Feed"
DEFAULT_TIMEZONE = "UTC"


@dataclass
class FeedConfig:
    feeds: List[str] = field(default_factory=list)
    include_keywords: Tuple[str, ...] = ()
    exclude_keywords: Tuple[str, ...] = ()
    max_items: int = DEFAULT_MAX_ITEMS
    title: str = DEFAULT_TITLE
    timezone: str = DEFAULT_TIMEZONE
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    max_workers: int = DEFAULT_MAX_WORKERS
    user_agent: str = DEFAULT_USER_AGENT
    summarize: Optional[SummarizeOptions] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "FeedConfig":
        if not isinstance(raw, Mapping):
            raise ConfigError("Config root must be a JSON object")

        feeds = raw.get("feeds")
        if not isinstance(feeds, list) or not all(isinstance(u, str) for u in feeds):
            raise ConfigError("'feeds' must be a list of URLs")

        max_items = raw.get("max_items") or DEFAULT_MAX_ITEMS
        if not isinstance(max_items, int) or isinstance(max_items, bool) or max_items < 0:
            raise ConfigError(f"'max_items' must be a non-negative integer, got {max_items!r}")

        tz = raw.get("timezone") or DEFAULT_TIMEZONE
        try:
            ZoneInfo(tz)
        except (ZoneInfoNotFoundError, ValueError, TypeError) as e:
            raise ConfigError(f"Unknown timezone: {tz!r}") from e

        try:
            timeout_sec = float(raw.get("timeout_sec") or DEFAULT_TIMEOUT_SEC)
            max_workers = int(raw.get("max_workers") or DEFAULT_MAX_WORKERS)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid fetch settings: {e}") from e

        summarize = raw.get("summarize")
        if summarize is not None and not isinstance(summarize, Mapping):
            raise ConfigError("'summarize' must be an object or null")

        return cls(
            feeds=[u.strip() for u in feeds if u.strip()],
            include_keywords=normalize_keywords(_str_list(raw, "include_keywords")),
            exclude_keywords=normalize_keywords(_str_list(raw, "exclude_keywords")),
            max_items=max_items,
            title=str(raw.get("title") or DEFAULT_TITLE),
            timezone=tz,
            timeout_sec=timeout_sec,
            max_workers=max_workers,
            user_agent=str(raw.get("user_agent") or DEFAULT_USER_AGENT),
            summarize=SummarizeOptions.from_dict(summarize) if summarize else None,
        )


def _str_list(raw: Mapping[str, Any], key: str) -> List[str]:
    val = raw.get(key) or []
    if not isinstance(val, list) or not all(isinstance(v, str) for v in val):
        raise ConfigError(f"'{key}' must be a list of strings")
    return val


def load_config(path: Union[str, Path]) -> FeedConfig:
    path = Path(path)
    try:
        raw: Dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    return FeedConfig.from_dict(raw)
