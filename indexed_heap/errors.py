from __future__ import annotations


class HeapError(Exception):
    """Base class for every error raised by an IndexedHeap."""


class EmptyHeapError(HeapError, IndexError):
    pass


class InvalidStateError(HeapError, RuntimeError):
    pass


class InvalidArgumentError(HeapError, ValueError):
    pass


class StaleHandleError(HeapError, LookupError):
    """The handle is not a live member of the heap it was passed to.

    Raised for handles that were deleted, invalidated by ``clear()``, or
    that belong to another heap instance.
    """


class HeapInvariantError(HeapError, AssertionError):
    pass
