from __future__ import annotations

from typing import Optional


class SimulationError(Exception):
    """Base for failures scoped to a single simulate request."""

    status_code = 500

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.stage = stage


class InputError(SimulationError):
    """Missing, non-numeric or out-of-range request fields (HTTP 400)."""

    status_code = 400


class InternalError(SimulationError):
    """Unexpected computation or geometry fault (HTTP 500)."""

    status_code = 500


class LookupUnavailable(Exception):
    """An external surface lookup could not answer (network, config, bad payload)."""
