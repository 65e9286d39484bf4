from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

STORES_ENV_VAR = "FIELDRULES_STORES"


@dataclass(frozen=True)
class GroupConfig:
    name: str
    url: str
    options: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StoreConfig:
    default_group: str
    groups: dict[str, GroupConfig] = field(default_factory=dict)


def _coerce_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def parse_store_config(data: dict[str, Any]) -> StoreConfig:
    """
    Build a StoreConfig from decoded TOML.

    Every ``[groups.<name>]`` table needs a ``url``; any other keys are passed
    to ``sqlalchemy.create_engine`` unchanged.
    """
    groups: dict[str, GroupConfig] = {}
    for name, raw in _coerce_dict(data.get("groups")).items():
        raw = _coerce_dict(raw)
        url = str(raw.get("url", "")).strip()
        if not url:
            raise ValueError(f"groups.{name}.url is required")
        options = {k: v for k, v in raw.items() if k != "url"}
        groups[str(name)] = GroupConfig(name=str(name), url=url, options=options)

    if not groups:
        raise ValueError("at least one [groups.<name>] table is required")

    default_group = str(data.get("default_group", "")).strip()
    if not default_group:
        default_group = "default" if "default" in groups else next(iter(groups))
    if default_group not in groups:
        raise ValueError(f"default_group {default_group!r} is not a configured group")

    return StoreConfig(default_group=default_group, groups=groups)


def load_store_config(path: Path) -> StoreConfig:
    """Load connection groups from TOML."""
    import tomllib

    data = tomllib.loads(path.read_text(encoding="utf-8"))
    return parse_store_config(data)


def store_config_path_from_env() -> Path | None:
    raw = os.environ.get(STORES_ENV_VAR, "").strip()
    return Path(raw) if raw else None
