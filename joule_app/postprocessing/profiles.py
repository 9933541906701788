"""
Derived series for the result charts and exports.

All functions are pure: they read a SimulationResult (or None) and return a
fresh pandas DataFrame. With no result they return an empty frame that still
carries the expected columns.
"""
from __future__ import annotations

import numpy as np
import pandas as pd
import xarray as xr

from joule_app.domain.models import SimulationResult

__all__ = [
    "WAVY_X_MIN_NM",
    "WAVY_X_MAX_NM",
    "WAVY_INTERVALS",
    "result_dataset",
    "final_active_profile",
    "final_glass_profile",
    "center_time_trace",
    "heatmap_samples",
    "wavy_glass_profile",
]

# Display span the (≈1 mm) substrate is collapsed into, in axis units (nm).
WAVY_X_MIN_NM = -200.0
WAVY_X_MAX_NM = 0.0
WAVY_INTERVALS = 50
WAVY_RIPPLE_FRACTION = 0.02

_PROFILE_COLS = ["position_nm", "temperature"]
_TRACE_COLS = ["time_s", "temperature"]
_HEATMAP_COLS = ["time_s", "position_nm", "temperature"]


def result_dataset(result: SimulationResult) -> xr.Dataset:
    """Full T(x, t) grid as an xarray Dataset with coords ``position_nm`` and ``time_s``."""
    return xr.Dataset(
        data_vars=dict(
            temperature=(
                ("position_nm", "time_s"),
                np.asarray(result.temperature, dtype=float).reshape(len(result.position_nm), len(result.time)),
            ),
            perovskite_center_temp=(("time_s",), np.asarray(result.perovskite_center_temp, dtype=float)),
        ),
        coords=dict(
            position_nm=np.asarray(result.position_nm, dtype=float),
            time_s=np.asarray(result.time, dtype=float),
        ),
    )


def _final_profile(positions: list[float], grid: list[list[float]], final_index: int) -> pd.DataFrame:
    if not positions:
        return pd.DataFrame(columns=_PROFILE_COLS, dtype=float)
    temps = np.asarray(grid, dtype=float)[:, final_index]
    return pd.DataFrame({"position_nm": np.asarray(positions, dtype=float), "temperature": temps})


def final_active_profile(result: SimulationResult | None) -> pd.DataFrame:
    """T(x) over the active stack at the last time sample, in stored position order."""
    if result is None:
        return pd.DataFrame(columns=_PROFILE_COLS, dtype=float)
    return _final_profile(result.position_active_nm, result.temperature_active, result.final_index)


def final_glass_profile(result: SimulationResult | None) -> pd.DataFrame:
    """T(x) over the substrate at the last time sample (service coordinates)."""
    if result is None:
        return pd.DataFrame(columns=_PROFILE_COLS, dtype=float)
    return _final_profile(result.position_glass_nm, result.temperature_glass, result.final_index)


def center_time_trace(result: SimulationResult | None) -> pd.DataFrame:
    if result is None:
        return pd.DataFrame(columns=_TRACE_COLS, dtype=float)
    return pd.DataFrame(
        {
            "time_s": np.asarray(result.time, dtype=float),
            "temperature": np.asarray(result.perovskite_center_temp, dtype=float),
        }
    )


def heatmap_samples(result: SimulationResult | None) -> pd.DataFrame:
    """Long-form (time, position, T) rows: T×P entries, time-major, position-minor."""
    if result is None or not result.position_nm:
        return pd.DataFrame(columns=_HEATMAP_COLS, dtype=float)
    da = result_dataset(result)["temperature"].transpose("time_s", "position_nm")
    return da.to_dataframe().reset_index()[_HEATMAP_COLS]


def wavy_glass_profile(result: SimulationResult | None) -> pd.DataFrame:
    r"""
    Decorative stand-in for the substrate, drawn over [WAVY_X_MIN_NM, WAVY_X_MAX_NM].

    Linear between the substrate's far-side and near-side final temperatures,
    plus a ripple of amplitude 2 %·|ΔT| over two full periods:

        T_i = T_far + (T_near − T_far)·i/n + A·sin(4π·i/n),   i = 0..n

    The end samples are exactly T_far and T_near.
    """
    if result is None or not result.temperature_glass:
        return pd.DataFrame(columns=_PROFILE_COLS, dtype=float)

    k = result.final_index
    t_far = float(result.temperature_glass[0][k])
    t_near = float(result.temperature_glass[-1][k])

    n = WAVY_INTERVALS
    x = np.linspace(WAVY_X_MIN_NM, WAVY_X_MAX_NM, n + 1)
    base = np.linspace(t_far, t_near, n + 1)  # linspace pins both ends exactly
    amplitude = abs(t_near - t_far) * WAVY_RIPPLE_FRACTION
    ripple = amplitude * np.sin(np.linspace(0.0, 4.0 * np.pi, n + 1))
    # sin(4π) is ~-5e-16 in floating point, not zero
    ripple[0] = ripple[-1] = 0.0
    return pd.DataFrame({"position_nm": x, "temperature": base + ripple})
