from __future__ import annotations

import logging

_ROOT_LOGGER_NAME = "indexed_heap"
_FORMAT = "%(levelname)s %(asctime)s [%(name)s:%(lineno)d] %(message)s"
_DATE_FORMAT = "%m-%d %H:%M:%S"


def _setup_root_logger() -> logging.Logger:
    root = logging.getLogger(_ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.WARNING)
        root.propagate = False
    return root


def init_logger(name: str) -> logging.Logger:
    _setup_root_logger()
    return logging.getLogger(name)


def resolve_log_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level `{level}`.")
    return resolved


def set_log_level(level: str | int) -> None:
    _setup_root_logger().setLevel(resolve_log_level(level))
