from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from joule_app.domain.models import SimulationResult  # pragma: no cover

__all__ = [
    "KELVIN_OFFSET",
    "to_solver_units",
    "to_display_units",
    "result_to_display_units",
]

# UI works in °C, the solver payload in K.
KELVIN_OFFSET = 273.15

# Result fields that carry temperatures. Positions and times are never shifted.
_TEMPERATURE_FIELDS = (
    "temperature",
    "temperature_active",
    "temperature_glass",
    "perovskite_center_temp",
)


def to_solver_units(value: Any) -> Any:
    """°C → K. Scalars stay scalars; array-likes come back as ndarrays."""
    if np.isscalar(value):
        return float(value) + KELVIN_OFFSET
    return np.asarray(value, dtype=float) + KELVIN_OFFSET


def to_display_units(value: Any) -> Any:
    """K → °C, exact inverse of :func:`to_solver_units`."""
    if np.isscalar(value):
        return float(value) - KELVIN_OFFSET
    return np.asarray(value, dtype=float) - KELVIN_OFFSET


def result_to_display_units(result: SimulationResult) -> SimulationResult:
    """Return a copy of a validated solver-convention result with every
    temperature grid and series shifted to the display convention."""
    updates: dict[str, list[Any]] = {}
    for name in _TEMPERATURE_FIELDS:
        values = getattr(result, name)
        if len(values) == 0:
            updates[name] = []
            continue
        updates[name] = to_display_units(values).tolist()
    return result.model_copy(update=updates)
