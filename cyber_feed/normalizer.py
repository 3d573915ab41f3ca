from __future__ import annotations

from typing import Any, Dict

from .models import Candidate
from .signals import classify_severity, extract_cve, make_excerpt


def to_candidate(entry: Dict[str, Any], source: str) -> Candidate:
    """
    Convert a parsed, accepted entry dict into an enriched Candidate.

    `entry` is the output of `cyber_feed.parser.parse_entry`; signals are read
    from its lowercased haystack, the excerpt from its original-case text.
    """
    haystack = entry["haystack"]
    return Candidate(
        title=entry["title"],
        link=entry["link"],
        source=source or "",
        published_at=entry.get("published_at"),
        vulnerability_id=extract_cve(haystack),
        severity=classify_severity(haystack),
        excerpt=make_excerpt(entry.get("text") or ""),
    )
