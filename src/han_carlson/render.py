from __future__ import annotations

import json
from typing import Any

from .cells import CellAnnotation, CellKind, Network, Stage


LEGEND = "[black|grey|pass][bit]:(stage,bit)"


def banner(network: Network) -> str:
    return f"{network.width} bits, {network.stage_count} stages"


def cell_token(annotation: CellAnnotation) -> str:
    if annotation.kind == CellKind.pass_:
        return f"p:{annotation.position:2d}          "
    prefix = "b" if annotation.kind == CellKind.black else "g"
    return f"{prefix}:{annotation.position:2d}=>({annotation.source_stage:2d},{annotation.target_position:2d}) "


def stage_line(stage: Stage) -> str:
    tokens = "".join(cell_token(a) for cells in stage.cells for a in cells.annotations)
    return f"Stage {stage.index:2d}: {tokens}".rstrip()


def render_text(network: Network, *, header: bool = True) -> str:
    lines: list[str] = []
    if header:
        lines.append(banner(network))
        lines.append(LEGEND)
    lines.extend(stage_line(stage) for stage in network.stages)
    return "\n".join(lines)


def network_payload(network: Network) -> dict[str, Any]:
    payload = network.model_dump(mode="json")
    payload["kind_counts"] = network.kind_counts()
    payload["ambiguous_cells"] = [list(pair) for pair in network.ambiguous_cells()]
    return payload


def render_json(network: Network) -> str:
    return json.dumps(network_payload(network), indent=2, sort_keys=True)
