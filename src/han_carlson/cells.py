from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .config import OverlapPolicy


class CellKind(str, Enum):
    black = "black"
    grey = "grey"
    grey_bottom = "grey_bottom"
    pass_ = "pass"

    @property
    def combines(self) -> bool:
        return self is not CellKind.pass_


class CellAnnotation(BaseModel):
    """One cell placed at a bit position in a stage.

    Combine cells (black/grey/grey_bottom) read their own stage ``source_stage``
    value plus the one at ``target_position``. Pass cells only forward.
    """

    model_config = ConfigDict(frozen=True)

    kind: CellKind
    position: int = Field(..., ge=0)
    source_stage: int = Field(..., ge=-1)
    target_position: int | None = None

    @model_validator(mode="after")
    def _validate_target(self) -> "CellAnnotation":
        if not self.kind.combines:
            if self.target_position is not None:
                raise ValueError(f"pass cell at bit {self.position} must not have a target")
            return self
        if self.target_position is None:
            raise ValueError(f"{self.kind.value} cell at bit {self.position} requires a target")
        if not 0 <= self.target_position < self.position:
            raise ValueError(
                f"target out of range: bit {self.position} -> {self.target_position} "
                f"(expected 0 <= target < {self.position})"
            )
        return self


class PositionCells(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: int = Field(..., ge=0)
    annotations: tuple[CellAnnotation, ...]

    @property
    def kinds(self) -> tuple[CellKind, ...]:
        return tuple(a.kind for a in self.annotations)


class Stage(BaseModel):
    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    half_span: int = Field(..., ge=1)
    is_bottom: bool
    cells: tuple[PositionCells, ...]

    def at(self, position: int) -> PositionCells:
        for cells in self.cells:
            if cells.position == position:
                return cells
        raise KeyError(position)


class Network(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int = Field(..., ge=1)
    stage_count: int = Field(..., ge=1)
    overlap: OverlapPolicy
    stages: tuple[Stage, ...]

    def kind_counts(self) -> dict[str, int]:
        counts = {kind.value: 0 for kind in CellKind}
        for stage in self.stages:
            for cells in stage.cells:
                for annotation in cells.annotations:
                    counts[annotation.kind.value] += 1
        return counts

    def ambiguous_cells(self) -> list[tuple[int, int]]:
        return [
            (stage.index, cells.position)
            for stage in self.stages
            for cells in stage.cells
            if len(cells.annotations) > 1
        ]
