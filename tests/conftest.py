from __future__ import annotations

import copy
from typing import Any, Dict

import pytest

from joule_app.adapters.solver_http.client import ingest_payload
from joule_app.adapters.solver_mock.engine import MockSimulationService
from joule_app.domain.models import SimulationResult
from joule_app.orchestration.session import build_simulation_request, default_config
from joule_app.plotting_plotly.presenter import PlotPresenterPlotly

_RAW: Dict[str, Any] = {
    "success": True,
    "time": [0.0, 10.0, 20.0],
    "position_glass_nm": [0.0, 550000.0, 1100000.0],
    "temperature_glass": [
        [298.15, 300.15, 302.15],
        [298.15, 301.15, 303.15],
        [298.15, 301.65, 304.15],
    ],
    "position_active_nm": [35.0, 70.0, 150.0, 430.0, 480.0, 580.0],
    "temperature_active": [
        [298.15, 302.15, 305.15],
        [298.15, 302.35, 305.35],
        [298.15, 302.65, 305.65],
        [298.15, 302.95, 305.95],
        [298.15, 302.75, 305.75],
        [298.15, 302.55, 305.55],
    ],
    "perovskite_center_temp": [298.15, 305.15, 310.0],
    "layer_boundaries_nm": [0.0, 70.0, 150.0, 430.0, 480.0, 580.0],
    "layer_names": ["ITO", "HTL", "Perovskite", "ETL", "Cathode"],
    "glass_ito_boundary_nm": 1100000.0,
}


@pytest.fixture
def raw_payload() -> Dict[str, Any]:
    """Small solver payload in Kelvin (3 time samples, 3 substrate + 6 active nodes)."""
    return copy.deepcopy(_RAW)


@pytest.fixture
def small_result(raw_payload: Dict[str, Any]) -> SimulationResult:
    """The small payload after validation and K → °C conversion."""
    return ingest_payload(raw_payload)


@pytest.fixture(scope="session")
def mock_result() -> SimulationResult:
    """Default device run through the offline mock service."""
    request = build_simulation_request(default_config())
    return MockSimulationService(n_times=25).run(request)


@pytest.fixture(scope="session")
def presenter() -> PlotPresenterPlotly:
    """Plotly presenter under test."""
    return PlotPresenterPlotly()


@pytest.fixture(scope="session")
def profile_fig(mock_result: SimulationResult, presenter: PlotPresenterPlotly) -> Any:
    return presenter.profile_plot(mock_result)
