from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from indexed_heap.errors import (
    EmptyHeapError,
    HeapError,
    InvalidArgumentError,
    InvalidStateError,
    StaleHandleError,
)
from indexed_heap.heap import IndexedHeap
from indexed_heap.heap_config import HeapConfig
from indexed_heap.ordering import natural_order, reverse_order


def test_default_config_builds_min_heap() -> None:
    heap = IndexedHeap.from_config(HeapConfig())
    for key in [4, 9, 1]:
        heap.insert(key)
    assert heap.min().key == 1


def test_config_from_toml(tmp_path: Path) -> None:
    path = tmp_path / "heap.toml"
    path.write_text('order = "max"\ncheck_invariants = true\nlog_level = "debug"\n')

    cfg = HeapConfig.from_file(path)
    assert cfg == HeapConfig(order="max", check_invariants=True, log_level="debug")

    heap = IndexedHeap.from_config(cfg)
    heap.build_heap([1, 7, 3], ["a", "b", "c"])
    assert heap.min().key == 7
    assert logging.getLogger("indexed_heap").level == logging.DEBUG

    HeapConfig().apply_log_level()


def test_config_from_json_section(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"heap": {"order": "max"}}))

    cfg = HeapConfig.from_file(path, section="heap")
    assert cfg.order == "max"
    assert cfg.check_invariants is False


def test_config_rejects_bad_input(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        HeapConfig.from_file(tmp_path / "missing.toml")

    yaml_path = tmp_path / "heap.yaml"
    yaml_path.write_text("order: min\n")
    with pytest.raises(ValueError, match="Unsupported config format"):
        HeapConfig.from_file(yaml_path)

    with pytest.raises(ValueError, match="Unknown config field"):
        HeapConfig.from_dict({"order": "min", "capacity": 10})

    with pytest.raises(ValueError, match="Unknown heap order"):
        HeapConfig(order="median")


def test_config_with_updates() -> None:
    cfg = HeapConfig().with_updates({"order": "max"})
    assert cfg.order == "max"
    assert cfg.to_dict() == {"order": "max", "check_invariants": False, "log_level": "WARNING"}

    with pytest.raises(ValueError):
        cfg.with_updates({"unknown": 1})
    with pytest.raises(ValueError):
        cfg.with_updates({"order": {"nested": "min"}})


def test_log_level_is_validated_on_load() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        HeapConfig(log_level="chatty")
    with pytest.raises(ValueError, match="Unknown log level"):
        HeapConfig.from_dict({"log_level": "loud"})


def test_config_with_flat_updates() -> None:
    cfg = HeapConfig().with_flat_updates({"order": "max", "check_invariants": True})
    assert cfg.order == "max"
    assert cfg.check_invariants is True

    with pytest.raises(ValueError, match="nested"):
        cfg.with_flat_updates({"order.kind": "min"})
    with pytest.raises(ValueError, match="Invalid override key"):
        cfg.with_flat_updates({"order.": "min"})
    with pytest.raises(ValueError, match="non-empty"):
        cfg.with_flat_updates({"": "min"})
    with pytest.raises(ValueError, match="Unknown config field"):
        cfg.with_flat_updates({"capacity": 4})


def test_orderings() -> None:
    assert natural_order(1, 2) == -1
    assert natural_order(2, 2) == 0
    assert natural_order("b", "a") == 1
    assert reverse_order()(1, 2) == 1
    assert reverse_order(reverse_order())(1, 2) == -1


@pytest.mark.parametrize(
    "error_type, builtin",
    [
        (EmptyHeapError, IndexError),
        (InvalidStateError, RuntimeError),
        (InvalidArgumentError, ValueError),
        (StaleHandleError, LookupError),
    ],
)
def test_errors_share_base_and_builtin(error_type: type, builtin: type) -> None:
    assert issubclass(error_type, HeapError)
    assert issubclass(error_type, builtin)
