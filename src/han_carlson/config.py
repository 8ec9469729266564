from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic import BaseModel, Field


class OverlapPolicy(str, Enum):
    """What to do when one bit position matches several cell rules in a stage."""

    all = "all"
    priority = "priority"


class NetworkConfig(BaseModel):
    width: int = Field(8, ge=1)
    overlap: OverlapPolicy = OverlapPolicy.all

    @classmethod
    def from_yaml(cls, path: str | Path) -> "NetworkConfig":
        data = _load_yaml(path)
        return cls.from_mapping(data, path)

    @classmethod
    def from_mapping(cls, data: dict[str, Any], path: str | Path) -> "NetworkConfig":
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid network config: {path}\n{exc}") from exc


def _load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(path))
    try:
        return yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Failed to parse YAML: {p}") from exc
