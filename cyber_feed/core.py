from __future__ import annotations

import functools
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence

from .config import FeedConfig
from .classifier import is_wanted
from .dedup import LinkRegistry
from .exceptions import ParseError
from .fetcher import FetchOutcome, fetch_many
from .models import Candidate, Digest, FeedResult
from .normalizer import to_candidate
from .parser import parse_entry
from .ranking import rank
from .summarizers import Summarizer, summarize_candidates

logger = logging.getLogger(__name__)

FetchFn = Callable[[List[str]], Sequence[FetchOutcome]]


class DigestBuilder:
    """
    High-level API: fetch the configured feeds and build one ranked Digest.

    Pipeline: fetch (concurrent) → parse → claim link → keyword filter →
    signals → rank/cap → optional summaries

    Every stage after the fetch runs in the calling thread over the joined
    results, so the seen-link registry and the accepted list need no locking.
    """

    def __init__(
        self,
        config: FeedConfig,
        *,
        fetch: Optional[FetchFn] = None,
        summarizer: Optional[Summarizer] = None,
    ) -> None:
        self.config = config
        self._fetch: FetchFn = fetch or functools.partial(
            fetch_many,
            timeout=config.timeout_sec,
            user_agent=config.user_agent,
            max_workers=config.max_workers,
        )
        self._summarizer = summarizer

    def build(self) -> Digest:
        results = self._fetch(list(self.config.feeds))
        return self.build_from_results(results)

    def build_from_results(
        self,
        results: Sequence[FetchOutcome],
        *,
        generated_at: Optional[datetime] = None,
    ) -> Digest:
        """
        Reduce fetch outcomes (one per source, in configured order) into a Digest.

        Anything that is not a FeedResult counts as a failed source and
        contributes nothing.
        """
        cfg = self.config
        seen = LinkRegistry()
        accepted: List[Candidate] = []
        texts: Dict[str, str] = {}
        failed: List[str] = []

        for idx, res in enumerate(results):
            if not isinstance(res, FeedResult):
                url = getattr(res, "url", None) or _nth(cfg.feeds, idx)
                failed.append(url)
                continue

            for raw in res.entries:
                try:
                    entry = parse_entry(raw)
                except ParseError as e:
                    logger.debug("Skipping entry from %s: %s", res.url, e)
                    continue

                if not seen.claim(entry["link"]):
                    continue
                if not is_wanted(
                    entry["haystack"],
                    include_keywords=cfg.include_keywords,
                    exclude_keywords=cfg.exclude_keywords,
                ):
                    continue

                accepted.append(to_candidate(entry, res.title))
                texts[entry["link"]] = entry["text"]

        items = rank(accepted, cfg.max_items)

        if cfg.summarize and items:
            items = summarize_candidates(
                items, texts=texts, options=cfg.summarize, summarizer=self._summarizer,
            )

        digest = Digest(
            items=tuple(items),
            title=cfg.title,
            generated_at=generated_at or datetime.now(timezone.utc),
            source_count=len(results),
            failed_sources=tuple(failed),
            timezone=cfg.timezone,
            include_keywords=tuple(cfg.include_keywords),
        )
        logger.info(
            "Built %d items from %d feeds (%d failed, %d accepted before cap)",
            digest.count, digest.source_count, len(failed), len(accepted),
        )
        return digest


def _nth(seq: Sequence[str], idx: int) -> str:
    return seq[idx] if idx < len(seq) else f"source #{idx + 1}"


def build_digest(config: FeedConfig, **kwargs) -> Digest:
    """Shortcut for ``DigestBuilder(config, **kwargs).build()``."""
    return DigestBuilder(config, **kwargs).build()
