from __future__ import annotations

from typing import Any, Callable

Compare = Callable[[Any, Any], int]


def natural_order(a: Any, b: Any) -> int:
    """cmp-style comparison using the keys' own ``<`` and ``>``."""
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def reverse_order(compare: Compare = natural_order) -> Compare:
    """Invert ``compare``; an IndexedHeap using it becomes a max-heap."""

    def _reversed(a: Any, b: Any) -> int:
        return compare(b, a)

    return _reversed
