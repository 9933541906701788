from __future__ import annotations

import numpy as np
import pytest

from joule_app.thermal.units import (
    KELVIN_OFFSET,
    result_to_display_units,
    to_display_units,
    to_solver_units,
)


@pytest.mark.parametrize("x", [-273.15, -40.0, 0.0, 25.0, 36.85, 1.0e6, -1.0e9])
def test_unit_round_trip_scalars(x: float) -> None:
    assert to_display_units(to_solver_units(x)) == pytest.approx(x, abs=1e-9)
    assert to_solver_units(to_display_units(x)) == pytest.approx(x, abs=1e-9)


def test_unit_round_trip_arrays() -> None:
    x = np.linspace(-100.0, 500.0, 13)
    np.testing.assert_allclose(to_display_units(to_solver_units(x)), x, atol=1e-9)
    np.testing.assert_allclose(to_solver_units(to_display_units(x.tolist())), x, atol=1e-9)


def test_ambient_25C_is_298_15K() -> None:
    assert to_solver_units(25.0) == pytest.approx(298.15)
    assert KELVIN_OFFSET == 273.15


def test_result_conversion_touches_only_temperatures(small_result) -> None:
    # small_result is already in °C; convert a second time to check what moves
    shifted = result_to_display_units(small_result)
    assert shifted.time == small_result.time
    assert shifted.position_nm == small_result.position_nm
    assert shifted.layer_boundaries_nm == small_result.layer_boundaries_nm
    assert shifted.perovskite_center_temp[0] == pytest.approx(
        small_result.perovskite_center_temp[0] - KELVIN_OFFSET
    )
    assert shifted.temperature_active[2][1] == pytest.approx(
        small_result.temperature_active[2][1] - KELVIN_OFFSET
    )
    # the source snapshot is untouched
    assert small_result.perovskite_center_temp[0] == pytest.approx(25.0, abs=1e-9)
