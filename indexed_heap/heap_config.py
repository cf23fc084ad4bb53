from __future__ import annotations

from dataclasses import dataclass

from indexed_heap.config_base import ConfigBase
from indexed_heap.logger import resolve_log_level, set_log_level
from indexed_heap.ordering import Compare, natural_order, reverse_order

_ORDERS = ("min", "max")


@dataclass(frozen=True)
class HeapConfig(ConfigBase):
    # "min" keeps the smallest key at the root, "max" the largest
    order: str = "min"
    # Verify heap/position/count invariants after every mutation, O(n) each
    check_invariants: bool = False
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.order not in _ORDERS:
            raise ValueError(
                f"Unknown heap order `{self.order}`. Expected one of: {', '.join(_ORDERS)}."
            )
        if not isinstance(self.check_invariants, bool):
            raise ValueError("`check_invariants` must be a boolean.")
        resolve_log_level(self.log_level)

    def compare(self) -> Compare:
        return natural_order if self.order == "min" else reverse_order()

    def apply_log_level(self) -> None:
        set_log_level(self.log_level)
