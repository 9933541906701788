"""
HTTP adapter for the external 1-D solver service.

One POST per call, no retries. Every failure is raised as a
:class:`~joule_app.domain.errors.SimulationError` subclass; the controller
decides how to surface it.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import httpx
from pydantic import ValidationError

from joule_app.core.config import get_settings
from joule_app.domain.errors import (
    ResultIntegrityError,
    ServiceStatusError,
    ServiceUnreachableError,
    SimulationFailedError,
)
from joule_app.domain.models import SimulationRequest, SimulationResult
from joule_app.domain.ports import SimulationService
from joule_app.thermal.units import result_to_display_units

logger = logging.getLogger(__name__)

__all__ = ["HttpSimulationClient", "ingest_payload", "status_error_message"]

FALLBACK_FAILURE_MESSAGE = "The simulation failed without an error message."


def ingest_payload(payload: Mapping[str, Any]) -> SimulationResult:
    """Turn a successful solver payload (Kelvin) into a display-unit result.

    Raises SimulationFailedError when the payload carries ``success: false``
    and ResultIntegrityError when the arrays are not index-aligned.
    """
    if not payload.get("success", False):
        raise SimulationFailedError(payload.get("error") or FALLBACK_FAILURE_MESSAGE)
    fields = {k: v for k, v in payload.items() if k not in ("success", "error")}
    try:
        raw = SimulationResult.model_validate(fields)
    except ValidationError as e:
        raise ResultIntegrityError(f"Inconsistent simulation result: {e}") from e
    except (TypeError, ValueError) as e:
        raise ResultIntegrityError(f"Malformed simulation result: {e}") from e
    return result_to_display_units(raw)


def status_error_message(response: httpx.Response) -> str:
    """Best-effort message for a non-2xx response.

    JSON ``{"error": ...}`` wins; anything unparseable falls back to status and reason.
    """
    fallback = f"Simulation service error: {response.status_code} {response.reason_phrase}".rstrip()
    try:
        body = json.loads(response.text)
    except ValueError:
        return fallback
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return fallback


class HttpSimulationClient(SimulationService):
    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        settings = get_settings()
        self.url = base_url or settings.service_url
        self.client = client or httpx.Client(
            timeout=timeout if timeout is not None else settings.timeout_s,
            follow_redirects=True,
        )

    def run(self, request: SimulationRequest) -> SimulationResult:
        logger.info(
            "POST %s (%d layers, t=%g..%g s)",
            self.url,
            len(request.layer_names),
            request.t_start,
            request.t_end,
        )
        try:
            response = self.client.post(self.url, json=request.model_dump())
        except httpx.HTTPError as e:
            logger.warning("Simulation service unreachable: %s", e)
            raise ServiceUnreachableError(e) from e

        if not response.is_success:
            message = status_error_message(response)
            logger.warning("Simulation service returned %s: %s", response.status_code, message)
            raise ServiceStatusError(message, status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning("Malformed response body from simulation service: %s", e)
            raise ServiceUnreachableError(e) from e
        if not isinstance(payload, dict):
            raise ServiceUnreachableError("response body is not a JSON object")

        result = ingest_payload(payload)
        logger.info(
            "Simulation finished: %d time samples, %d positions",
            len(result.time),
            len(result.position_nm),
        )
        return result

    def close(self) -> None:
        self.client.close()
