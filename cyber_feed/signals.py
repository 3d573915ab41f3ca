"""
Security signals derived from entry text: CVE identifier, severity tier, excerpt.
"""
from __future__ import annotations

import html
import re
from typing import Optional, Tuple

from .models import Severity

CVE_RE = re.compile(r"CVE-\d{4}-\d{4,7}", re.IGNORECASE)

EXCERPT_LIMIT = 180
TRUNCATION_MARKER = "…"

_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")


# Evaluated top to bottom; the first tier with a matching term wins.
SEVERITY_RULES: Tuple[Tuple[Severity, Tuple[str, ...]], ...] = (
    (Severity.CRITICAL, ("0-day", "zero-day", "actively exploited", "in the wild", "kev")),
    (Severity.HIGH, ("ransomware", "rce", "remote code execution", "auth bypass", "unauthenticated")),
    (Severity.MEDIUM, ("lpe", "privilege escalation", "sql injection", "ssrf", "xss", "deserialization")),
)


def extract_cve(text: str) -> Optional[str]:
    """First CVE identifier in `text`, upper-cased, or None."""
    m = CVE_RE.search(text or "")
    return m.group(0).upper() if m else None


def classify_severity(text: str) -> Optional[Severity]:
    """Substring match against the lowercased text, highest tier first."""
    haystack = (text or "").lower()
    for tier, terms in SEVERITY_RULES:
        if any(t in haystack for t in terms):
            return tier
    return None


def make_excerpt(text: str, limit: int = EXCERPT_LIMIT) -> Optional[str]:
    """
    Plain-text excerpt: tags stripped, entities decoded, whitespace collapsed.

    The marker is appended only when the text was actually cut.
    """
    plain = _TAG_RE.sub(" ", text or "")
    plain = _WS_RE.sub(" ", html.unescape(plain)).strip()
    if not plain:
        return None
    if limit > 0 and len(plain) > limit:
        return plain[:limit].rstrip() + TRUNCATION_MARKER
    return plain
