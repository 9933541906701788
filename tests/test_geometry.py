from __future__ import annotations

import pytest

from joule_app.domain.models import SimulationResult
from joule_app.postprocessing.geometry import (
    DISPLAY_X_MAX,
    DISPLAY_X_MIN,
    GLASS_LABEL,
    display_domain,
    label_anchors,
    layer_color,
    layer_segments,
    stack_layer_color,
)


def test_layer_color_is_hue_rotation() -> None:
    assert layer_color(0) == "hsl(60, 70%, 80%)"
    assert layer_color(1) == "hsl(120, 70%, 80%)"
    assert layer_color(4) == "hsl(300, 70%, 80%)"
    assert layer_color(4) == layer_color(4)


def test_form_colours_match_chart_bands(small_result: SimulationResult) -> None:
    assert stack_layer_color(0) == "hsl(0, 70%, 80%)"
    # stack index k is active layer k - 1 in the chart
    for i, seg in enumerate(layer_segments(small_result)):
        assert stack_layer_color(i + 1) == seg.color


def test_segments_follow_boundaries(small_result: SimulationResult) -> None:
    bounds = small_result.layer_boundaries_nm
    segs = layer_segments(small_result)
    assert len(segs) == len(bounds) - 1
    for i, seg in enumerate(segs):
        assert (seg.x1, seg.x2) == (bounds[i], bounds[i + 1])
        assert seg.center_x == (bounds[i] + bounds[i + 1]) / 2
        assert seg.color == layer_color(i)
    assert [s.name for s in segs] == ["ITO", "HTL", "Perovskite", "ETL", "Cathode"]


def test_missing_names_fall_back_to_layer_n(small_result: SimulationResult) -> None:
    short = small_result.model_copy(update={"layer_names": ["ITO", ""]})
    names = [s.name for s in layer_segments(short)]
    assert names == ["ITO", "Layer 2", "Layer 3", "Layer 4", "Layer 5"]


def test_label_anchors_percent_of_display_width(small_result: SimulationResult) -> None:
    segs = layer_segments(small_result)
    labels = label_anchors(segs)
    assert len(labels) == len(segs) + 1
    glass = labels[0]
    assert glass.name == GLASS_LABEL and glass.x == -100.0
    assert glass.x_percent == pytest.approx(100.0 / 780.0 * 100.0)
    ito = labels[1]
    assert ito.x == 35.0
    assert ito.x_percent == pytest.approx((35.0 - DISPLAY_X_MIN) / (DISPLAY_X_MAX - DISPLAY_X_MIN) * 100.0)
    assert all(0.0 <= lab.x_percent <= 100.0 for lab in labels)


def test_label_anchors_reject_empty_domain() -> None:
    with pytest.raises(ValueError):
        label_anchors([], x_min=10.0, x_max=10.0)


def test_display_domain_widens_for_tall_stacks(small_result: SimulationResult) -> None:
    assert display_domain(None) == (-200.0, 580.0)
    assert display_domain(small_result) == (-200.0, 580.0)
    tall = small_result.model_copy(update={"layer_boundaries_nm": [0.0, 70.0, 900.0]})
    assert display_domain(tall) == (-200.0, 900.0)


def test_geometry_is_idempotent(mock_result: SimulationResult) -> None:
    assert layer_segments(mock_result) == layer_segments(mock_result)
    assert label_anchors(layer_segments(mock_result)) == label_anchors(layer_segments(mock_result))
    assert layer_segments(None) == []
