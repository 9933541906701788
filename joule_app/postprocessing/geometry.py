"""
Layer overlay geometry for the final-profile chart.

The substrate is ~10⁶ nm thick while the active layers are tens to hundreds of
nm, so one linear axis would flatten the active stack to nothing. The chart
therefore uses two scales on one axis: the substrate occupies a fixed
decorative span [-200, 0] (see ``profiles.wavy_glass_profile``) and the active
layers sit at their true positions from 0 upward.
"""
from __future__ import annotations

from dataclasses import dataclass

from joule_app.domain.models import SimulationResult
from joule_app.postprocessing.profiles import WAVY_X_MAX_NM, WAVY_X_MIN_NM

__all__ = [
    "DISPLAY_X_MIN",
    "DISPLAY_X_MAX",
    "GLASS_LABEL_X",
    "GLASS_LABEL",
    "LayerSegment",
    "LabelAnchor",
    "layer_color",
    "stack_layer_color",
    "layer_segments",
    "label_anchors",
    "display_domain",
]

DISPLAY_X_MIN = WAVY_X_MIN_NM
DISPLAY_X_MAX = 580.0  # default active stack: 70 + 80 + 280 + 50 + 100 nm
GLASS_LABEL_X = (WAVY_X_MIN_NM + WAVY_X_MAX_NM) / 2.0
GLASS_LABEL = "Glass (compressed)"


@dataclass(frozen=True)
class LayerSegment:
    x1: float
    x2: float
    color: str
    name: str
    center_x: float


@dataclass(frozen=True)
class LabelAnchor:
    x: float
    name: str
    x_percent: float


def layer_color(layer_index: int) -> str:
    """HSL colour of active layer ``layer_index`` (0 = first layer above the substrate)."""
    return f"hsl({(layer_index + 1) * 60}, 70%, 80%)"


def stack_layer_color(stack_index: int) -> str:
    """Colour of a layer by its position in the full stack (0 = substrate).

    The editing form uses this so each column matches its band in the chart.
    """
    return layer_color(stack_index - 1)


def layer_segments(result: SimulationResult | None) -> list[LayerSegment]:
    """One segment per adjacent pair of ``layer_boundaries_nm``.

    The service's boundaries start at the substrate/active interface (x = 0),
    so segment i is active layer i.
    """
    if result is None:
        return []
    bounds = result.layer_boundaries_nm
    names = result.layer_names
    out: list[LayerSegment] = []
    for i in range(len(bounds) - 1):
        x1, x2 = float(bounds[i]), float(bounds[i + 1])
        name = names[i] if i < len(names) and names[i] else f"Layer {i + 1}"
        out.append(LayerSegment(x1=x1, x2=x2, color=layer_color(i), name=name, center_x=(x1 + x2) / 2))
    return out


def _percent(x: float, x_min: float, x_max: float) -> float:
    return (x - x_min) / (x_max - x_min) * 100.0


def label_anchors(
    segments: list[LayerSegment],
    x_min: float = DISPLAY_X_MIN,
    x_max: float = DISPLAY_X_MAX,
) -> list[LabelAnchor]:
    """Substrate label first, then one label per segment centre, with the
    horizontal position also given as a percentage of the display width."""
    if x_max <= x_min:
        raise ValueError("x_max must be greater than x_min")
    labels = [LabelAnchor(x=GLASS_LABEL_X, name=GLASS_LABEL, x_percent=_percent(GLASS_LABEL_X, x_min, x_max))]
    for seg in segments:
        labels.append(LabelAnchor(x=seg.center_x, name=seg.name, x_percent=_percent(seg.center_x, x_min, x_max)))
    return labels


def display_domain(result: SimulationResult | None) -> tuple[float, float]:
    """Axis range: the fixed default, widened when the active stack is taller."""
    if result is None or not result.layer_boundaries_nm:
        return DISPLAY_X_MIN, DISPLAY_X_MAX
    return DISPLAY_X_MIN, max(DISPLAY_X_MAX, float(result.layer_boundaries_nm[-1]))
