# """
# Ports (interfaces) for adapters. The UI and orchestration depend ONLY on these.
# """
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .models import SimulationRequest, SimulationResult


class SimulationService(ABC):
    @abstractmethod
    def run(self, request: SimulationRequest) -> SimulationResult:
        """Execute one simulation and return a validated result in display units.

        Failures are raised as ``joule_app.domain.errors.SimulationError`` subclasses.
        """

    def close(self) -> None:
        """Release held resources. Services without any keep this no-op."""

    def __enter__(self) -> "SimulationService":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


class PlotPresenter(ABC):
    @abstractmethod
    def profile_plot(self, result: SimulationResult) -> Any:
        """Figure: final-time T(x) with the compressed substrate and layer overlay."""

    @abstractmethod
    def center_trace_plot(self, result: SimulationResult) -> Any:
        """Figure: T(t) at the perovskite centre."""

    @abstractmethod
    def heatmap_plot(self, result: SimulationResult) -> Any:
        """Figure: T(x, t) over the full grid."""
