# joule_app/adapters/registry.py
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Type

# Only import the port for typing (prevents circular imports at runtime)
if TYPE_CHECKING:
    from joule_app.domain.ports import SimulationService  # pragma: no cover

from joule_app.adapters.solver_http.client import HttpSimulationClient
from joule_app.adapters.solver_mock.engine import MockSimulationService

__all__ = ["list_services", "make_service"]

# Registry: human-readable name → service class
_REGISTRY: Dict[str, Type[Any]] = {
    "Simulation service (HTTP)": HttpSimulationClient,
    "Mock (offline)": MockSimulationService,
}


def list_services() -> List[str]:
    return list(_REGISTRY.keys())


def make_service(name: str, **kwargs: Any) -> SimulationService:
    """
    Instantiate the requested service. Extra kwargs are forwarded to the class
    (e.g. HttpSimulationClient(base_url=...), MockSimulationService(n_times=...)).
    """
    cls = _REGISTRY.get(name)
    if cls is None:
        raise KeyError(f"Unknown service '{name}'. Available: {', '.join(_REGISTRY)}")
    return cls(**kwargs)
