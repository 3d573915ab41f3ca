"""
cyber_feed

Builds a ranked cybersecurity digest from RSS/Atom feeds and renders it as a static page.

Core ideas:
- Input: feed URLs plus include/exclude keywords (see `cyber_feed.config`)
- Process: fetch (concurrent) → parse → dedup by link → keyword filter → signals (CVE, severity) → sort (newest first) → cap
- Output: Digest (ordered Candidates + run metadata), optionally written as HTML

Example
-------
from cyber_feed import DigestBuilder, FeedConfig, write_site

config = FeedConfig.from_dict({
    "feeds": [
        "https://www.bleepingcomputer.com/feed/",
        "https://krebsonsecurity.com/feed/",
    ],
    "include_keywords": ["cve", "exploit", "ransomware"],
    "max_items": 50,
})

digest = DigestBuilder(config).build()
for item in digest.items:
    print(item.published_at, item.severity, item.vulnerability_id, item.title)

write_site(digest, "dist")
"""
from .models import Candidate, Digest, FeedResult, Severity
from .config import FeedConfig, load_config
from .core import DigestBuilder, build_digest
from .renderer import render_html, write_site
from .summarizers import SummarizeOptions

__all__ = [
    "Candidate",
    "Digest",
    "FeedResult",
    "Severity",
    "FeedConfig",
    "load_config",
    "DigestBuilder",
    "build_digest",
    "render_html",
    "write_site",
    "SummarizeOptions",
]
