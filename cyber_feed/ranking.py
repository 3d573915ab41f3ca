from __future__ import annotations

from typing import Iterable, List, Tuple

from .models import Candidate


def _recency_key(item: Candidate) -> Tuple:
    # Unknown publish time ranks below every known instant.
    if item.published_at is None:
        return (0,)
    return (1, item.published_at)


def rank(candidates: Iterable[Candidate], max_items: int) -> List[Candidate]:
    """
    Newest first, then cap. The sort is stable, so equal timestamps keep
    discovery order.
    """
    items = sorted(candidates, key=_recency_key, reverse=True)
    if max_items <= 0:
        return []
    return items[:max_items]
