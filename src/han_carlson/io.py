from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .config import NetworkConfig


def load_network_config(path: str | Path) -> NetworkConfig:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(path))

    suffix = p.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        return NetworkConfig.from_yaml(p)
    if suffix != ".json":
        raise ValueError(f"Unsupported config format: {p.suffix} (expected .json/.yaml/.yml)")

    raw: Any
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Failed to parse JSON: {p}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid network config: {p} (expected a mapping)")
    return NetworkConfig.from_mapping(raw, p)
