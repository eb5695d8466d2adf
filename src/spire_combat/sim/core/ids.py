"""Monotonic id allocation for card and enemy instances."""

from __future__ import annotations

from collections import defaultdict


class IdAllocator:
    """Hands out ids of the form ``'<prefix>-<n>'``.

    Each prefix has its own counter starting at 1, so a fresh allocator
    produces the same sequence every time and tests can predict ids.

    Parameters
    ----------
    start:
        First value handed out for every prefix.
    """

    def __init__(self, start: int = 1) -> None:
        self._start = start
        self._counters: defaultdict[str, int] = defaultdict(lambda: start)

    def next_id(self, prefix: str) -> str:
        """Return the next unused id for *prefix*."""
        n = self._counters[prefix]
        self._counters[prefix] = n + 1
        return f"{prefix}-{n}"

    def __repr__(self) -> str:
        return f"IdAllocator(prefixes={len(self._counters)})"
