import json

from han_carlson.classifier import classify
from han_carlson.config import OverlapPolicy
from han_carlson.render import LEGEND, banner, render_json, render_text, stage_line


def test_banner_and_legend() -> None:
    network = classify(8)
    assert banner(network) == "8 bits, 4 stages"
    lines = render_text(network).splitlines()
    assert lines[0] == "8 bits, 4 stages"
    assert lines[1] == LEGEND
    assert len(lines) == 2 + 4


def test_stage_lines_eight_bits() -> None:
    network = classify(8)
    assert stage_line(network.stages[0]) == (
        "Stage  0: b: 7=>(-1, 6) p: 6          b: 5=>(-1, 4) p: 4          "
        "b: 3=>(-1, 2) p: 2          g: 1=>(-1, 0) p: 0"
    )
    assert stage_line(network.stages[3]) == (
        "Stage  3: p: 7          g: 6=>( 2, 5) p: 5          g: 4=>( 2, 3) "
        "p: 3          g: 2=>( 2, 1) p: 1          p: 0"
    )


def test_text_without_header() -> None:
    text = render_text(classify(1), header=False)
    assert text == "Stage  0: p: 0"


def test_overlapping_cells_render_every_token() -> None:
    line = stage_line(classify(12).stages[3])
    assert line.startswith("Stage  3: g:11=>( 2, 3) p:11          g:10=>( 2, 9) g: 9=>( 2, 1) p: 9")

    line = stage_line(classify(12, overlap=OverlapPolicy.priority).stages[3])
    assert line.startswith("Stage  3: g:11=>( 2, 3) g:10=>( 2, 9) g: 9=>( 2, 1) g: 8=>( 2, 7)")


def test_json_payload_shape() -> None:
    payload = json.loads(render_json(classify(12)))
    assert payload["width"] == 12
    assert payload["stage_count"] == 4
    assert payload["overlap"] == "all"
    assert len(payload["stages"]) == 4
    assert payload["ambiguous_cells"] == [[3, 11], [3, 9]]
    assert set(payload["kind_counts"]) == {"black", "grey", "grey_bottom", "pass"}

    cell = payload["stages"][0]["cells"][0]
    assert cell["position"] == 11
    assert cell["annotations"][0]["kind"] == "black"
    assert cell["annotations"][0]["target_position"] == 10
