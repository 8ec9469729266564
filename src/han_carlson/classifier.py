from __future__ import annotations

import logging

from .cells import CellAnnotation, CellKind, Network, PositionCells, Stage
from .config import OverlapPolicy


logger = logging.getLogger(__name__)


class InvalidWidthError(ValueError):
    pass


def _check_width(width: int) -> None:
    if isinstance(width, bool) or not isinstance(width, int):
        raise InvalidWidthError(f"width must be an integer, got {width!r}")
    if width < 1:
        raise InvalidWidthError(f"width must be a positive integer, got {width}")


def stage_count(width: int) -> int:
    """floor(log2(width)) + 1, without going through floats."""
    _check_width(width)
    return width.bit_length()


def half_span(stage: int) -> int:
    if stage < 0:
        raise ValueError(f"stage must be non-negative, got {stage}")
    return 1 << stage


def _matching_cells(stage: int, position: int, bottom: bool) -> list[CellAnnotation]:
    span = 1 << stage
    odd = position % 2 == 1
    source = stage - 1
    out: list[CellAnnotation] = []

    if odd and (position + 1) // 2 > span:
        out.append(CellAnnotation(kind=CellKind.black, position=position, source_stage=source, target_position=position - span))
    if odd and (position + 1) // 2 <= span and position >= span:
        out.append(CellAnnotation(kind=CellKind.grey, position=position, source_stage=source, target_position=position - span))
    # even bits skipped by the interior stages get folded in from their odd neighbour
    if bottom and not odd and position > 0:
        out.append(CellAnnotation(kind=CellKind.grey_bottom, position=position, source_stage=source, target_position=position - 1))
    if (not bottom and (position < span or not odd)) or (bottom and (odd or position == 0)):
        out.append(CellAnnotation(kind=CellKind.pass_, position=position, source_stage=source))
    return out


def classify_cell(
    width: int,
    stage: int,
    position: int,
    overlap: OverlapPolicy = OverlapPolicy.all,
) -> PositionCells:
    """Classify a single (stage, position) pair of a ``width``-bit network.

    The result depends only on the three integers; under ``OverlapPolicy.all``
    every matching rule contributes an annotation (black, grey, grey_bottom,
    pass order), under ``OverlapPolicy.priority`` only the first one is kept.
    """
    stages = stage_count(width)
    if not 0 <= stage < stages:
        raise ValueError(f"stage out of range: {stage} (width={width} has {stages} stages)")
    if not 0 <= position < width:
        raise ValueError(f"position out of range: {position} (width={width})")

    annotations = _matching_cells(stage, position, bottom=stage == stages - 1)
    if len(annotations) > 1:
        logger.debug(
            "stage %d bit %d matches %s",
            stage,
            position,
            ", ".join(a.kind.value for a in annotations),
        )
        if OverlapPolicy(overlap) == OverlapPolicy.priority:
            annotations = annotations[:1]
    return PositionCells(position=position, annotations=tuple(annotations))


def classify_stage(width: int, stage: int, overlap: OverlapPolicy = OverlapPolicy.all) -> Stage:
    stages = stage_count(width)
    cells = tuple(classify_cell(width, stage, i, overlap) for i in range(width - 1, -1, -1))
    return Stage(index=stage, half_span=half_span(stage), is_bottom=stage == stages - 1, cells=cells)


def classify(width: int, overlap: OverlapPolicy = OverlapPolicy.all) -> Network:
    stages = stage_count(width)
    policy = OverlapPolicy(overlap)
    logger.debug("classifying %d-bit Han-Carlson network: %d stages, overlap=%s", width, stages, policy.value)
    return Network(
        width=width,
        stage_count=stages,
        overlap=policy,
        stages=tuple(classify_stage(width, j, policy) for j in range(stages)),
    )
