"""
Linear deflection proxy: a velocity change dv held for the lead time shifts the
impact point by dv * T, applied due east. No orbital propagation.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .geo import LonLat, destination_point

SECONDS_PER_DAY = 86_400.0
DEFLECTION_BEARING_DEG = 90.0   # due east

MitigationMethod = Literal["none", "kinetic", "tractor"]


@dataclass(frozen=True)
class Mitigation:
    method: MitigationMethod = "none"
    delta_v_ms: float = 0.0
    lead_time_days: float = 0.0

    @property
    def active(self) -> bool:
        return self.method != "none" and self.delta_v_ms > 0.0 and self.lead_time_days > 0.0


@dataclass(frozen=True)
class DeflectionResult:
    offset_m: float
    original: LonLat
    coordinate: LonLat

    @property
    def applied(self) -> bool:
        return self.offset_m > 0.0


def deflection_offset_m(delta_v_ms: float, lead_time_days: float) -> float:
    return delta_v_ms * lead_time_days * SECONDS_PER_DAY


def apply_deflection(mitigation: Mitigation, origin: LonLat) -> DeflectionResult:
    if not mitigation.active:
        return DeflectionResult(offset_m=0.0, original=origin, coordinate=origin)
    offset = deflection_offset_m(mitigation.delta_v_ms, mitigation.lead_time_days)
    moved = destination_point(origin, offset, DEFLECTION_BEARING_DEG)
    return DeflectionResult(offset_m=offset, original=origin, coordinate=moved)
