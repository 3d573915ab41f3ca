from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional, Tuple


class Severity(str, Enum):
    """Coarse keyword-driven risk tier, highest first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"


@dataclass(frozen=True)
class FeedResult:
    """A successfully fetched and parsed feed."""
    url: str
    title: str
    entries: List[Any] = field(default_factory=list)


@dataclass(frozen=True)
class Candidate:
    """
    One accepted entry of a digest run.

    WARNING: Do not change fields lightly. The renderer and any downstream
    consumer read these by name.
    """
    title: str
    link: str
    source: str
    published_at: Optional[datetime]
    vulnerability_id: Optional[str] = None
    severity: Optional[Severity] = None
    excerpt: Optional[str] = None
    summary: Optional[str] = None


@dataclass(frozen=True)
class Digest:
    items: Tuple[Candidate, ...]
    title: str
    generated_at: datetime
    source_count: int
    failed_sources: Tuple[str, ...] = ()
    timezone: str = "UTC"
    include_keywords: Tuple[str, ...] = ()

    @property
    def count(self) -> int:
        return len(self.items)
