from __future__ import annotations

import calendar
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dateutil import parser as dtp

from .exceptions import ParseError


def _to_datetime(entry: Dict[str, Any]) -> Optional[datetime]:
    """
    Convert feed entry date fields to a timezone-aware UTC datetime.
    Priority: published_parsed -> updated_parsed -> created_parsed -> string forms -> None.
    """
    for key in ("published_parsed", "updated_parsed", "created_parsed"):
        val = entry.get(key)
        if isinstance(val, time.struct_time):
            try:
                # feedparser normalizes *_parsed to UTC
                return datetime.fromtimestamp(calendar.timegm(val), tz=timezone.utc)
            except (OverflowError, ValueError, OSError):
                continue
    for key in ("published", "updated", "created", "pubDate", "isoDate"):
        s = entry.get(key)
        if isinstance(s, str) and s.strip():
            try:
                dt = dtp.parse(s)
            except (ValueError, OverflowError):
                continue
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            return dt.astimezone(timezone.utc)
    return None


def _body_fields(entry: Dict[str, Any]) -> List[str]:
    """All non-empty summary/content variants, first occurrence kept."""
    raw: List[Any] = [entry.get("summary"), entry.get("description")]
    content = entry.get("content")
    if isinstance(content, list):
        for part in content:
            if isinstance(part, dict):
                raw.append(part.get("value"))
    raw.append(entry.get("content:encoded"))

    out: List[str] = []
    for v in raw:
        if isinstance(v, str):
            v = v.strip()
            if v and v not in out:
                out.append(v)
    return out


def parse_entry(entry: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map a raw feed entry (from feedparser) to a dict with the fields the pipeline needs.

    Fields:
    - title, link: trimmed, both non-empty (ParseError otherwise)
    - text: title and every body field joined by single spaces, original case
    - haystack: lowercased text, used for keyword and signal matching
    - published_at: UTC datetime or None when absent/unparseable
    """
    title = (entry.get("title") or "").strip()
    if not title:
        raise ParseError("Entry has no title")
    link = (entry.get("link") or entry.get("feedburner_origlink") or "").strip()
    if not link:
        raise ParseError(f"Entry has no link: {title!r}")

    text = " ".join([title] + _body_fields(entry))

    return {
        "title": title,
        "link": link,
        "text": text,
        "haystack": text.lower(),
        "published_at": _to_datetime(entry),
    }
