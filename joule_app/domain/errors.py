from __future__ import annotations

__all__ = [
    "SimulationError",
    "ServiceUnreachableError",
    "ServiceStatusError",
    "SimulationFailedError",
    "ResultIntegrityError",
]


class SimulationError(Exception):
    """Base class for a failed simulation attempt. ``message`` is user-facing."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ServiceUnreachableError(SimulationError):
    """Transport failure or a body that is not JSON."""

    def __init__(self, cause: BaseException | str) -> None:
        self.cause = cause
        text = str(cause) or type(cause).__name__
        super().__init__(f"Cannot reach the simulation service: {text}")


class ServiceStatusError(SimulationError):
    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class SimulationFailedError(SimulationError):
    """HTTP success, but the service reported ``success: false``."""


class ResultIntegrityError(SimulationError):
    """The payload arrived but its arrays are not index-aligned."""
