from __future__ import annotations

import json
import tomllib
from dataclasses import asdict, fields, replace
from pathlib import Path
from typing import Any, Mapping, TypeVar

TConfig = TypeVar("TConfig", bound="ConfigBase")


class ConfigBase:
    """Mixin for dataclass configs that can be read from .toml or .json files."""

    @classmethod
    def from_file(cls: type[TConfig], config_path: str | Path, *, section: str | None = None) -> TConfig:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        if path.suffix == ".toml":
            data = tomllib.loads(path.read_text())
        elif path.suffix == ".json":
            data = json.loads(path.read_text())
        else:
            raise ValueError(
                f"Unsupported config format: {path.suffix}. Use .toml or .json."
            )
        if section is not None:
            if not isinstance(data, Mapping) or section not in data:
                raise ValueError(f"Config section `{section}` not found in {path}.")
            data = data[section]
        if not isinstance(data, Mapping):
            raise ValueError("Config must parse to a mapping at the top level.")
        return cls.from_dict(dict(data))

    @classmethod
    def from_dict(cls: type[TConfig], data: Mapping[str, Any]) -> TConfig:
        known = {f.name for f in fields(cls)}
        unknown = [key for key in data if key not in known]
        if unknown:
            keys = ", ".join(sorted(unknown))
            raise ValueError(f"Unknown config field(s): {keys}")
        return cls(**dict(data))  # type: ignore[call-arg]

    def with_updates(self: TConfig, updates: Mapping[str, Any]) -> TConfig:
        known = {f.name for f in fields(self)}
        for key, value in updates.items():
            if key not in known:
                raise ValueError(f"Unknown config field `{key}`.")
            if isinstance(value, Mapping):
                raise ValueError(f"Expected scalar value for field `{key}`, got mapping.")
        return replace(self, **dict(updates))

    def with_flat_updates(self: TConfig, updates: Mapping[str, Any]) -> TConfig:
        """Apply ``--set``-style overrides; keys are dotted paths of one segment."""
        return self.with_updates(self._fields_from_dotted(updates))

    @classmethod
    def _fields_from_dotted(cls, flat: Mapping[str, Any]) -> dict[str, Any]:
        resolved: dict[str, Any] = {}
        for dotted_key, value in flat.items():
            if not dotted_key:
                raise ValueError("Config override keys must be non-empty.")
            parts = dotted_key.split(".")
            if any(not part for part in parts):
                raise ValueError(f"Invalid override key `{dotted_key}`.")
            if len(parts) > 1:
                raise ValueError(
                    f"Cannot set nested key `{dotted_key}`: {cls.__name__} has no nested sections."
                )
            resolved[parts[0]] = value
        return resolved

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
