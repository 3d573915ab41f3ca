from __future__ import annotations

import concurrent.futures as _fut
import logging
from typing import Iterable, List, Union

import feedparser
import requests

from .exceptions import FeedFetchError
from .models import FeedResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SEC = 15.0
DEFAULT_USER_AGENT = "cyber-feed/1.0 (+github pages)"
DEFAULT_MAX_WORKERS = 8

# A failed source is represented by the exception it raised.
FetchOutcome = Union[FeedResult, Exception]


def fetch_feed(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SEC,
    user_agent: str = DEFAULT_USER_AGENT,
) -> FeedResult:
    """
    Fetch a single feed URL and return its display title and entries.

    Raises FeedFetchError on network/HTTP issues or when the document is not a
    feed at all (bozo without any entries).
    """
    try:
        resp = requests.get(url, timeout=timeout, headers={"User-Agent": user_agent})
        resp.raise_for_status()
    except requests.RequestException as e:
        raise FeedFetchError(f"Failed to fetch feed: {url} ({e})", url=url) from e

    try:
        feed = feedparser.parse(
            resp.content,
            response_headers={"content-type": resp.headers.get("content-type", "")},
        )
    except Exception as e:  # pragma: no cover - surface as domain error
        raise FeedFetchError(f"Failed to parse feed: {url} ({e})", url=url) from e

    entries = getattr(feed, "entries", None)
    if not isinstance(entries, list):
        raise FeedFetchError(f"Feed has no entries: {url}", url=url)

    if getattr(feed, "bozo", 0):
        exc = getattr(feed, "bozo_exception", None)
        if not entries:
            msg = f"Invalid RSS/Atom feed: {url}"
            if exc:
                msg += f" ({exc})"
            raise FeedFetchError(msg, url=url)
        # Loose XML with usable entries is common in the wild; keep it.
        logger.debug("Accepting malformed feed %s with %d entries (%s)", url, len(entries), exc)

    title = (feed.feed.get("title") or "").strip()
    return FeedResult(url=url, title=title, entries=entries)


def fetch_many(
    urls: Iterable[str],
    *,
    timeout: float = DEFAULT_TIMEOUT_SEC,
    user_agent: str = DEFAULT_USER_AGENT,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> List[FetchOutcome]:
    """
    Fetch multiple feeds concurrently and return one outcome per URL, in input order.

    Each outcome is either a FeedResult or the FeedFetchError that source raised.
    Failures are isolated: one slow or broken feed never cancels the others, and
    the call returns only after every fetch has settled.
    """
    urls = list(urls)
    if not urls:
        return []

    workers = max(1, min(int(max_workers or 1), len(urls)))
    with _fut.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [
            ex.submit(fetch_feed, u, timeout=timeout, user_agent=user_agent)
            for u in urls
        ]
        out: List[FetchOutcome] = []
        for u, fu in zip(urls, futures):
            try:
                out.append(fu.result())
            except FeedFetchError as e:
                logger.warning("%s", e)
                out.append(e)
            except Exception as e:
                logger.warning("Unexpected error fetching %s: %r", u, e)
                out.append(FeedFetchError(f"Failed to fetch feed: {u} ({e!r})", url=u))
    return out
