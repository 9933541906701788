from __future__ import annotations

import numpy as np

from joule_app.adapters.solver_mock.engine import MockSimulationService
from joule_app.domain.models import SimulationResult
from joule_app.orchestration.session import (
    build_simulation_request,
    check_echoed_layer_names,
    default_config,
    init_session,
    run_simulation,
    update_global,
)


def test_mock_result_respects_contracts(mock_result: SimulationResult) -> None:
    n_t = len(mock_result.time)
    assert n_t == 25
    assert np.all(np.diff(mock_result.time) > 0)
    assert len(mock_result.perovskite_center_temp) == n_t
    assert all(len(row) == n_t for row in mock_result.temperature_active)
    assert len(mock_result.position_glass_nm) == 51
    assert mock_result.layer_boundaries_nm == [0.0, 70.0, 150.0, 430.0, 480.0, 580.0]
    # active positions start just above the interface and end at the top surface
    assert mock_result.position_active_nm[0] > 0.0
    assert mock_result.position_active_nm[-1] == 580.0


def test_mock_starts_at_ambient_and_heats(mock_result: SimulationResult) -> None:
    temps = np.asarray(mock_result.temperature, dtype=float)
    np.testing.assert_allclose(temps[:, 0], 25.0, atol=1e-9)
    assert (temps[:, -1] > 25.0).all()
    # hottest node at the final time is inside the active stack
    hottest = int(np.argmax(temps[:, -1]))
    assert mock_result.position_nm[hottest] > 0.0


def test_mock_echoes_active_layer_names(mock_result: SimulationResult) -> None:
    req = build_simulation_request(default_config())
    assert check_echoed_layer_names(req, mock_result)


def test_mock_reports_bad_time_window() -> None:
    state = update_global(init_session(), "t_end", "0")
    state = run_simulation(state, MockSimulationService(n_times=5))
    assert state.error == "t_end must be greater than t_start"
    assert state.result is None and not state.busy
