from __future__ import annotations

import logging
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

# Domain (Pydantic v2) models used by tests and the app
from joule_app.domain.errors import SimulationError
from joule_app.domain.models import (
    GLOBAL_FIELDS,
    LAYER_FIELDS,
    BoundaryConditions,
    LayerStack,
    ModelConfig,
    SimulationRequest,
    SimulationResult,
    TimeWindow,
)
from joule_app.domain.ports import SimulationService
from joule_app.thermal.units import to_solver_units

logger = logging.getLogger(__name__)

__all__ = [
    "AppState",
    "default_config",
    "init_session",
    "parse_number",
    "update_layer",
    "update_global",
    "reset",
    "submit",
    "succeed",
    "fail",
    "build_simulation_request",
    "config_issues",
    "check_echoed_layer_names",
    "run_simulation",
]

LAYER_NAMES = ["Glass", "ITO", "HTL", "Perovskite", "ETL", "Cathode"]

_TIME_FIELDS = ("t_start", "t_end")


class AppState(BaseModel):
    """
    Immutable controller snapshot passed between UI, orchestration, and service.

    Every transition below returns a new AppState; older snapshots stay valid.
    """

    model_config = ConfigDict(frozen=True)

    config: ModelConfig
    result: SimulationResult | None = None
    error: str | None = None
    busy: bool = False
    last_request: SimulationRequest | None = None


# -------------------------
# Session lifecycle helpers
# -------------------------


def default_config() -> ModelConfig:
    """Return the reference PeLED stack with its nominal operating point."""
    stack = LayerStack(
        names=list(LAYER_NAMES),
        k_therm=[0.8, 10.0, 0.2, 0.5, 0.2, 200.0],
        rho=[2500, 7140, 1000, 4100, 1200, 2700],
        c_p=[1000, 280, 1500, 250, 1500, 900],
        thickness_nm=[1.1e6, 70, 80, 280, 50, 100],
    )
    boundary = BoundaryConditions(
        voltage=2.9,
        current_density=300.0,
        epsilon_top=0.05,
        epsilon_bottom=0.85,
        h_conv=10.0,
        T_ambient_C=25.0,
    )
    return ModelConfig(stack=stack, boundary=boundary, time=TimeWindow(t_start=0.0, t_end=1000.0))


def init_session() -> AppState:
    """Create a fresh state with defaults and no result."""
    return AppState(config=default_config())


def parse_number(value: Any) -> float:
    """Parse a user-entered value; anything that is not a finite number becomes 0.0."""
    try:
        x = float(value)
    except (TypeError, ValueError):
        return 0.0
    return x if math.isfinite(x) else 0.0


def update_layer(state: AppState, field: str, index: int, value: Any) -> AppState:
    """Replace one element of one per-layer property array."""
    if field not in LAYER_FIELDS:
        raise KeyError(f"Unknown layer field '{field}'. Expected one of {', '.join(LAYER_FIELDS)}")
    stack = state.config.stack
    values = list(getattr(stack, field))
    values[index] = parse_number(value)
    new_stack = stack.model_copy(update={field: values})
    return state.model_copy(update={"config": state.config.model_copy(update={"stack": new_stack})})


def update_global(state: AppState, field: str, value: Any) -> AppState:
    """Replace one boundary-condition or time-window scalar."""
    if field not in GLOBAL_FIELDS:
        raise KeyError(f"Unknown field '{field}'. Expected one of {', '.join(GLOBAL_FIELDS)}")
    cfg = state.config
    x = parse_number(value)
    if field in _TIME_FIELDS:
        new_cfg = cfg.model_copy(update={"time": cfg.time.model_copy(update={field: x})})
    else:
        new_cfg = cfg.model_copy(update={"boundary": cfg.boundary.model_copy(update={field: x})})
    return state.model_copy(update={"config": new_cfg})


def reset(state: AppState) -> AppState:
    """Defaults restored; result and error dropped."""
    return AppState(config=default_config(), busy=state.busy)


# -------------------------
# Simulation transitions
# -------------------------


def submit(state: AppState) -> AppState:
    return state.model_copy(update={"busy": True, "error": None})


def succeed(state: AppState, result: SimulationResult) -> AppState:
    return state.model_copy(update={"busy": False, "error": None, "result": result})


def fail(state: AppState, message: str) -> AppState:
    # The previous result stays; only the error is replaced.
    return state.model_copy(update={"busy": False, "error": message})


def build_simulation_request(cfg: ModelConfig) -> SimulationRequest:
    """Materialize the wire payload; ambient temperature goes out in Kelvin."""
    s, b, t = cfg.stack, cfg.boundary, cfg.time
    return SimulationRequest(
        layer_names=list(s.names),
        k_therm_layers=list(s.k_therm),
        rho_layers=list(s.rho),
        c_p_layers=list(s.c_p),
        thickness_layers_nm=list(s.thickness_nm),
        voltage=b.voltage,
        current_density=b.current_density,
        epsilon_top=b.epsilon_top,
        epsilon_bottom=b.epsilon_bottom,
        h_conv=b.h_conv,
        T_ambient=to_solver_units(b.T_ambient_C),
        eqe=b.eqe,
        t_start=t.t_start,
        t_end=t.t_end,
    )


def config_issues(cfg: ModelConfig) -> list[str]:
    """Re-validate an edited config and list what the constraints reject.

    Edits go through ``model_copy`` (no validation), so a zero fallback can sit
    in the config; the UI shows these as warnings.
    """
    try:
        ModelConfig.model_validate(cfg.model_dump())
    except ValidationError as e:
        issues = []
        for err in e.errors():
            loc = ".".join(str(p) for p in err["loc"])
            issues.append(f"{loc}: {err['msg']}" if loc else err["msg"])
        return issues
    return []


def check_echoed_layer_names(request: SimulationRequest, result: SimulationResult) -> bool:
    """The service echoes the active layer names (substrate dropped). Its order
    is taken as authoritative; a mismatch with the request is only logged."""
    expected = list(request.layer_names[1:])
    if result.layer_names == expected:
        return True
    logger.warning("Service layer order %s differs from request %s", result.layer_names, expected)
    return False


def run_simulation(state: AppState, service: SimulationService) -> AppState:
    """Issue exactly one request; ``busy`` is cleared whatever the outcome."""
    if state.busy:
        logger.info("Simulation already running; trigger ignored")
        return state
    request = build_simulation_request(state.config)
    pending = submit(state).model_copy(update={"last_request": request})
    outcome = pending
    try:
        result = service.run(request)
        check_echoed_layer_names(request, result)
        outcome = succeed(pending, result)
    except SimulationError as e:
        logger.warning("Simulation failed: %s", e.message)
        outcome = fail(pending, e.message)
    except Exception:
        logger.exception("Unexpected error from %s", type(service).__name__)
        raise
    finally:
        outcome = outcome.model_copy(update={"busy": False})
    return outcome
