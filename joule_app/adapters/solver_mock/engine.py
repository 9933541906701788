# """
# Mock solver service implementing the SimulationService port.
# Produces shape-correct, deterministic surrogate data in the same wire format
# as the real service (Kelvin), then ingests it through the shared path.
# """
from __future__ import annotations

import logging
from typing import Any

import numpy as np
from numpy.typing import NDArray

from joule_app.adapters.solver_http.client import ingest_payload
from joule_app.domain.models import SimulationRequest, SimulationResult
from joule_app.domain.ports import SimulationService

logger = logging.getLogger(__name__)

SIGMA_SB = 5.67e-8
DEFAULT_POINTS = {
    "Glass": 50,
    "ITO": 20,
    "HTL": 20,
    "Perovskite": 40,
    "ETL": 20,
    "Cathode": 20,
    "Heat spreader": 20,
    "Heat sink": 30,
}


def _layer_nodes(thickness_nm: list[float], names: list[str]) -> tuple[NDArray[np.floating], list[slice]]:
    """Piecewise-uniform node positions (nm) and the node slice of each layer."""
    x = [0.0]
    slices: list[slice] = []
    start = 0
    for name, d in zip(names, thickness_nm):
        n = DEFAULT_POINTS.get(name, 20)
        x.extend(np.linspace(x[-1], x[-1] + float(d), n + 1)[1:].tolist())
        slices.append(slice(start, start + n + 1))
        start += n
    return np.asarray(x, dtype=float), slices


def _source_index(names: list[str]) -> int:
    if "Perovskite" in names:
        return names.index("Perovskite")
    return 1 if len(names) > 1 else 0


class MockSimulationService(SimulationService):
    """Lumped-capacitance surrogate: every node relaxes exponentially towards a
    steady rise set by the Joule source and the surface losses, with a bump
    centred on the emitting layer and a linear drop across the substrate."""

    def __init__(self, n_times: int = 200) -> None:
        self.n_times = int(n_times)

    def payload(self, request: SimulationRequest) -> dict[str, Any]:
        names = list(request.layer_names)
        if not names:
            return {"success": False, "error": "No layers defined"}
        if request.t_end <= request.t_start:
            return {"success": False, "error": "t_end must be greater than t_start"}

        t = np.linspace(request.t_start, request.t_end, self.n_times)
        x, slices = _layer_nodes(request.thickness_layers_nm, names)

        T_amb = request.T_ambient
        q = request.voltage * request.current_density * (1.0 - request.eqe)
        h_rad = 4.0 * SIGMA_SB * T_amb**3 * (request.epsilon_top + request.epsilon_bottom)
        h_eff = max(2.0 * request.h_conv + h_rad, 1e-9)
        dT_ss = q / h_eff

        heat_cap = sum(
            r * c * d * 1e-9
            for r, c, d in zip(request.rho_layers, request.c_p_layers, request.thickness_layers_nm)
        )
        tau = max(heat_cap / h_eff, 1e-9)
        rise = 1.0 - np.exp(-(t - request.t_start) / tau)

        src = slices[_source_index(names)]
        mid = 0.5 * (x[src.start] + x[src.stop - 1])
        width = max(x[src.stop - 1] - x[src.start], 1.0)
        shape = 1.0 + 0.01 * np.exp(-(((x - mid) / width) ** 2))
        glass = slices[0]
        shape[glass] *= np.linspace(0.9, 1.0, glass.stop - glass.start)

        grid = T_amb + np.outer(shape * dT_ss, rise)  # (position, time)

        split = glass.stop  # first node after the substrate/active interface
        interface_nm = float(x[split - 1])
        mid_idx = (src.start + src.stop) // 2

        bounds = [0.0]
        for d in request.thickness_layers_nm[1:]:
            bounds.append(bounds[-1] + float(d))

        return {
            "success": True,
            "time": t.tolist(),
            "position_nm": (x - interface_nm).tolist(),
            "temperature": grid.tolist(),
            "position_active_nm": (x[split:] - interface_nm).tolist(),
            "temperature_active": grid[split:].tolist(),
            "position_glass_nm": x[:split].tolist(),
            "temperature_glass": grid[:split].tolist(),
            "perovskite_center_temp": grid[mid_idx].tolist(),
            "layer_boundaries_nm": bounds,
            "layer_names": names[1:],
            "glass_ito_boundary_nm": interface_nm,
        }

    def run(self, request: SimulationRequest) -> SimulationResult:
        logger.info("Mock simulation: %d layers, %d time samples", len(request.layer_names), self.n_times)
        return ingest_payload(self.payload(request))
