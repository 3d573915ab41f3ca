from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(k in text for k in keywords)


def normalize_keywords(keywords: Optional[Iterable[str]]) -> Tuple[str, ...]:
    """Lowercase and trim keywords, dropping blanks."""
    if not keywords:
        return ()
    out = []
    for k in keywords:
        k = (k or "").strip().lower()
        if k:
            out.append(k)
    return tuple(out)


def is_wanted(haystack: str, *,
              include_keywords: Sequence[str] = (),
              exclude_keywords: Sequence[str] = (),
              ) -> bool:
    """
    Keyword gate for a candidate.

    `haystack` is the lowercased title + body text produced by
    `cyber_feed.parser.parse_entry`; keywords are expected lowercased already
    (see `normalize_keywords`). Include is checked before exclude, and an empty
    list disables its check.
    """
    if include_keywords and not _contains_any(haystack, include_keywords):
        return False
    if exclude_keywords and _contains_any(haystack, exclude_keywords):
        return False
    return True
