from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator, Sequence

from indexed_heap.errors import (
    EmptyHeapError,
    HeapInvariantError,
    InvalidArgumentError,
    InvalidStateError,
    StaleHandleError,
)
from indexed_heap.logger import init_logger
from indexed_heap.ordering import Compare, natural_order

if TYPE_CHECKING:
    from indexed_heap.heap_config import HeapConfig

logger = init_logger(__name__)

INVALID_POSITION = -1


class HeapHandle:
    """A stored element: key, payload value and its current slot in the heap.

    Only the owning heap changes ``key`` and ``position``; callers read them.
    """

    __slots__ = ("_key", "_value", "_position")

    def __init__(self, key: Any, value: Any, position: int) -> None:
        self._key = key
        self._value = value
        self._position = position

    @property
    def key(self) -> Any:
        return self._key

    @property
    def value(self) -> Any:
        return self._value

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_live(self) -> bool:
        return self._position != INVALID_POSITION

    def __str__(self) -> str:
        return f"({self._key},{self._value},{self._position})"

    def __repr__(self) -> str:
        return f"HeapHandle(key={self._key!r}, value={self._value!r}, position={self._position})"


class IndexedHeap:
    """Array-backed binary heap whose handles track their own slot.

    Storage is 1-indexed: slot 0 holds a sentinel, the children of slot ``i``
    are ``2i`` and ``2i + 1`` and its parent is ``i // 2``. The ordering is a
    cmp-style ``compare(a, b)``; the root holds the key that compares lowest,
    so passing ``reverse_order()`` gives a max-heap.
    """

    def __init__(self, compare: Compare | None = None, *, check_invariants: bool = False) -> None:
        self._compare: Compare = compare if compare is not None else natural_order
        self._check = check_invariants
        self._data: list[HeapHandle] = [self._sentinel()]
        self._count = 0

    @classmethod
    def from_config(cls, config: HeapConfig) -> "IndexedHeap":
        config.apply_log_level()
        return cls(config.compare(), check_invariants=config.check_invariants)

    @staticmethod
    def _sentinel() -> HeapHandle:
        return HeapHandle(None, None, 0)

    # ---------- read-only state ----------

    @property
    def count(self) -> int:
        return self._count

    def __len__(self) -> int:
        return self._count

    def __bool__(self) -> bool:
        return self._count > 0

    def __iter__(self) -> Iterator[HeapHandle]:
        return iter(self._data[1 : self._count + 1])

    def __contains__(self, handle: object) -> bool:
        return isinstance(handle, HeapHandle) and self._owns(handle)

    def min(self) -> HeapHandle:
        if self._count == 0:
            raise EmptyHeapError("The heap is empty.")
        return self._data[1]

    peek = min

    # ---------- internal helpers ----------

    def _better(self, i: int, j: int) -> bool:
        """True if the key at slot i should sit above the key at slot j."""
        return self._compare(self._data[i]._key, self._data[j]._key) < 0

    def _swap(self, i: int, j: int) -> None:
        data = self._data
        data[i], data[j] = data[j], data[i]
        data[i]._position = i
        data[j]._position = j

    def _sift_up(self, j: int) -> None:
        while j > 1:
            parent = j // 2
            if not self._better(j, parent):
                break
            self._swap(j, parent)
            j = parent

    def _sift_down(self, j: int) -> None:
        count = self._count
        while 2 * j <= count:
            child = 2 * j
            if child + 1 <= count and self._better(child + 1, child):
                child += 1
            if not self._better(child, j):
                break
            self._swap(j, child)
            j = child

    def _undo_sift_up(self, handle: HeapHandle, start: int) -> None:
        """Walk ``handle`` back down to ``start`` along the path sift-up took.

        Swaps only; never calls the comparison.
        """
        pos = handle._position
        while pos != start:
            child = start >> (start.bit_length() - pos.bit_length() - 1)
            self._swap(pos, child)
            pos = child

    def _owns(self, handle: HeapHandle) -> bool:
        pos = handle._position
        return 1 <= pos <= self._count and self._data[pos] is handle

    def _after_mutation(self) -> None:
        if self._check:
            self.check_invariants()

    # ---------- public API ----------

    def insert(self, key: Any, value: Any = None) -> HeapHandle:
        self._count += 1
        handle = HeapHandle(key, value, self._count)
        self._data.append(handle)
        try:
            self._sift_up(self._count)
        except BaseException:
            self._undo_sift_up(handle, self._count)
            self._data.pop()
            self._count -= 1
            handle._position = INVALID_POSITION
            raise
        self._after_mutation()
        return handle

    def delete(self) -> HeapHandle:
        if self._count == 0:
            raise EmptyHeapError("The heap is empty.")

        top = self._data[1]
        self._swap(1, self._count)
        self._data.pop()
        self._count -= 1
        if self._count > 0:
            moved = self._data[1]
            try:
                self._sift_down(1)
            except BaseException:
                while moved._position > 1:
                    self._swap(moved._position, moved._position // 2)
                self._data.append(top)
                self._count += 1
                self._swap(1, self._count)
                raise
        top._position = INVALID_POSITION
        self._after_mutation()
        return top

    def drain(self) -> Iterator[HeapHandle]:
        """Delete elements until the heap is empty, yielding them in priority order."""
        while self._count > 0:
            yield self.delete()

    def build_heap(self, keys: Sequence[Any], values: Sequence[Any]) -> list[HeapHandle]:
        """Bulk-load an empty heap in O(n).

        Extra entries in the longer of ``keys``/``values`` are ignored. The
        returned handles are index-aligned with the inputs, wherever heapify
        moves them.
        """
        if self._count != 0:
            logger.debug("Rejected build_heap on a heap holding %d element(s)", self._count)
            raise InvalidStateError(
                f"build_heap requires an empty heap, found {self._count} element(s); call clear() first."
            )

        n = min(len(keys), len(values))
        handles = [HeapHandle(keys[i], values[i], i + 1) for i in range(n)]
        self._data.extend(handles)
        self._count = n
        try:
            for j in range(n // 2, 0, -1):
                self._sift_down(j)
        except BaseException:
            for handle in handles:
                handle._position = INVALID_POSITION
            self._data = [self._sentinel()]
            self._count = 0
            raise
        logger.debug("Built heap from %d element(s)", n)
        self._after_mutation()
        return handles

    def decrease_key(self, handle: HeapHandle, new_key: Any) -> None:
        """Move ``handle`` toward the root after giving it a better key.

        "Better" follows the heap's ordering: smaller for a min-heap, larger
        for a heap built with ``reverse_order()``.
        """
        if handle not in self:
            logger.debug("Rejected decrease_key on stale handle %r", handle)
            raise StaleHandleError(f"{handle!r} is not a live element of this heap.")
        if self._compare(new_key, handle._key) > 0:
            logger.debug("Rejected decrease_key from %r to %r", handle._key, new_key)
            raise InvalidArgumentError(
                f"New key {new_key!r} does not improve on current key {handle._key!r}."
            )

        old_key, start = handle._key, handle._position
        handle._key = new_key
        try:
            self._sift_up(start)
        except BaseException:
            self._undo_sift_up(handle, start)
            handle._key = old_key
            raise
        self._after_mutation()

    def clear(self) -> None:
        for handle in self._data[1:]:
            handle._position = INVALID_POSITION
        logger.debug("Cleared heap, invalidated %d handle(s)", self._count)
        self._data = [self._sentinel()]
        self._count = 0

    def check_invariants(self) -> None:
        data = self._data
        if len(data) != self._count + 1:
            raise HeapInvariantError(
                f"Storage holds {len(data) - 1} element(s) but count is {self._count}."
            )
        for i in range(1, self._count + 1):
            if data[i]._position != i:
                raise HeapInvariantError(
                    f"Handle at slot {i} records position {data[i]._position}."
                )
            if i > 1 and self._better(i, i // 2):
                raise HeapInvariantError(
                    f"Slot {i} key {data[i]._key!r} orders before its parent key {data[i // 2]._key!r}."
                )

    def __str__(self) -> str:
        return "[" + ",".join(str(h) for h in self) + "]"

    def __repr__(self) -> str:
        return f"IndexedHeap(count={self._count})"
