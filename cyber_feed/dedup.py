from __future__ import annotations

from typing import Set


class LinkRegistry:
    """
    Run-wide record of links already claimed.

    The first entry to claim a link owns it, whatever source it came from and
    whether or not it later passes the keyword filter. Not thread-safe: it is
    only used after all fetches have been joined.
    """

    def __init__(self) -> None:
        self._seen: Set[str] = set()

    def claim(self, link: str) -> bool:
        if link in self._seen:
            return False
        self._seen.add(link)
        return True

    def __contains__(self, link: object) -> bool:
        return link in self._seen

    def __len__(self) -> int:
        return len(self._seen)
