#"""
#Domain models (v1.0.0)
#
#Pydantic v2 models define the editable device configuration, the wire request
#sent to the solver service, and the validated result container.
#"""
from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

PositiveFloat = Annotated[float, Field(gt=0.0)]

LAYER_FIELDS = ("k_therm", "rho", "c_p", "thickness_nm")
GLOBAL_FIELDS = (
    "voltage",
    "current_density",
    "epsilon_top",
    "epsilon_bottom",
    "h_conv",
    "T_ambient_C",
    "eqe",
    "t_start",
    "t_end",
)


# --- Configuration (what the user edits) ---
class LayerStack(BaseModel):
    names: list[str]
    k_therm: list[PositiveFloat] = Field(..., description="Thermal conductivity (W/m·K)")
    rho: list[PositiveFloat] = Field(..., description="Density (kg/m³)")
    c_p: list[PositiveFloat] = Field(..., description="Specific heat (J/kg·K)")
    thickness_nm: list[PositiveFloat] = Field(..., description="Thickness (nm)")

    @model_validator(mode="after")
    def _parallel_lists(self) -> "LayerStack":
        n = len(self.names)
        for name in LAYER_FIELDS:
            if len(getattr(self, name)) != n:
                raise ValueError(f"'{name}' has {len(getattr(self, name))} entries, expected {n}")
        if len(set(self.names)) != n:
            raise ValueError("Layer names must be unique")
        return self


class BoundaryConditions(BaseModel):
    voltage: float = Field(..., description="Operating voltage (V)")
    current_density: float = Field(..., description="Current density (A/m²)")
    epsilon_top: float = Field(..., ge=0.0, le=1.0)
    epsilon_bottom: float = Field(..., ge=0.0, le=1.0)
    h_conv: float = Field(..., ge=0.0, description="Convective coefficient (W/m²·K)")
    T_ambient_C: float = Field(..., description="Ambient temperature (°C)")
    eqe: float = Field(0.2, ge=0.0, le=1.0, description="External quantum efficiency")


class TimeWindow(BaseModel):
    t_start: float = Field(0.0, ge=0.0)
    t_end: float = Field(1000.0, gt=0.0)

    @model_validator(mode="after")
    def _ordered(self) -> "TimeWindow":
        if self.t_end <= self.t_start:
            raise ValueError("t_end must be greater than t_start")
        return self


class ModelConfig(BaseModel):
    stack: LayerStack
    boundary: BoundaryConditions
    time: TimeWindow = TimeWindow()
    version: str = "1.0.0"


# --- Wire request ---
class SimulationRequest(BaseModel):
    """Flat payload posted to the solver. Temperatures in Kelvin."""

    model_config = ConfigDict(frozen=True)

    layer_names: list[str]
    k_therm_layers: list[float]
    rho_layers: list[float]
    c_p_layers: list[float]
    thickness_layers_nm: list[float]
    voltage: float
    current_density: float
    epsilon_top: float
    epsilon_bottom: float
    h_conv: float
    T_ambient: float
    eqe: float
    t_start: float
    t_end: float


# --- Result ---
def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_numbers(values: object) -> bool:
    return isinstance(values, list) and all(_is_number(v) for v in values)


def _check_grid(name: str, positions: list[float], grid: list[list[float]], n_time: int) -> None:
    if len(positions) != len(grid):
        raise ValueError(f"{name}: {len(positions)} positions but {len(grid)} temperature rows")
    for i, row in enumerate(grid):
        if len(row) != n_time:
            raise ValueError(f"{name}: row {i} has {len(row)} samples, expected {n_time}")


class SimulationResult(BaseModel):
    """Raw field data returned by the service, validated for index alignment.

    Temperature grids are indexed ``[position][time]``.
    """

    model_config = ConfigDict(frozen=True)

    time: list[float]
    position_nm: list[float] = []
    temperature: list[list[float]] = []
    position_active_nm: list[float] = []
    temperature_active: list[list[float]] = []
    position_glass_nm: list[float] = []
    temperature_glass: list[list[float]] = []
    perovskite_center_temp: list[float]
    layer_boundaries_nm: list[float] = []
    layer_names: list[str] = []
    glass_ito_boundary_nm: float | None = None

    @model_validator(mode="before")
    @classmethod
    def _compose_full_grid(cls, data: object) -> object:
        # Older service builds only send the substrate/active subsets.
        if not isinstance(data, dict) or data.get("position_nm"):
            return data
        glass_x = data.get("position_glass_nm") or []
        glass_t = data.get("temperature_glass") or []
        active_x = data.get("position_active_nm") or []
        active_t = data.get("temperature_active") or []
        interface = data.get("glass_ito_boundary_nm")
        # Anything not shaped like numbers is left for field validation to report.
        if not (_is_numbers(glass_x) and _is_numbers(active_x)):
            return data
        if not (isinstance(glass_t, list) and isinstance(active_t, list)):
            return data
        if interface is not None and not _is_number(interface):
            return data
        if interface is None:
            interface = glass_x[-1] if glass_x else 0.0
        out = dict(data)
        out["position_nm"] = [float(x) - float(interface) for x in glass_x] + active_x
        out["temperature"] = glass_t + active_t
        return out

    @model_validator(mode="after")
    def _aligned(self) -> "SimulationResult":
        n_time = len(self.time)
        if n_time == 0:
            raise ValueError("time is empty")
        if any(b <= a for a, b in zip(self.time, self.time[1:])):
            raise ValueError("time must be strictly increasing")
        _check_grid("temperature", self.position_nm, self.temperature, n_time)
        _check_grid("temperature_active", self.position_active_nm, self.temperature_active, n_time)
        _check_grid("temperature_glass", self.position_glass_nm, self.temperature_glass, n_time)
        if len(self.perovskite_center_temp) != n_time:
            raise ValueError(
                f"perovskite_center_temp has {len(self.perovskite_center_temp)} samples, expected {n_time}"
            )
        bounds = self.layer_boundaries_nm
        if any(b < a for a, b in zip(bounds, bounds[1:])):
            raise ValueError("layer_boundaries_nm must be non-decreasing")
        return self

    @property
    def final_index(self) -> int:
        return len(self.time) - 1

    @property
    def final_time(self) -> float:
        return self.time[-1]
