"""
Request orchestration for the impact simulator.

    received -> validated -> classified -> computed -> projected -> responded
    received -> rejected            (bad payload, HTTP 400)
    any      -> failed              (internal fault, HTTP 500)

Each stage returns a new immutable value; nothing is shared between requests.
Every response carries the trace of stages it passed through.
"""
from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from pydantic import ValidationError

from .config import Settings
from .deflection import DeflectionResult, Mitigation, apply_deflection
from .errors import InputError, InternalError, SimulationError
from .geo import LonLat, buffer_circle
from .impact_model import Impactor, ImpactModel, PhysicalEffects
from .schemas import SimulateRequest
from .surface import SurfaceLookup, TargetSurface, classify
from .zones import HazardZone, build_zones, detailed_stats

logger = logging.getLogger(__name__)

INVALID_PAYLOAD = "invalid payload"


class Stage(str, Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    CLASSIFIED = "classified"
    COMPUTED = "computed"
    PROJECTED = "projected"
    RESPONDED = "responded"
    REJECTED = "rejected"
    FAILED = "failed"


# stages a successful request passes through, in order
PIPELINE: Tuple[Stage, ...] = (
    Stage.RECEIVED, Stage.VALIDATED, Stage.CLASSIFIED, Stage.COMPUTED, Stage.PROJECTED, Stage.RESPONDED,
)


def stages_before(stage: Stage, terminal: Stage) -> Tuple[Stage, ...]:
    """Stages completed before 'stage' was attempted, followed by the terminal stage."""
    return PIPELINE[:PIPELINE.index(stage)] + (terminal,)


@dataclass(frozen=True)
class ImpactScenario:
    diameter_m: float
    density_kgpm3: float
    speed_mps: float
    angle_deg: float
    material: str
    coordinate: LonLat
    mitigation: Mitigation

    @classmethod
    def from_request(cls, req: SimulateRequest) -> "ImpactScenario":
        return cls(
            diameter_m=req.diameter_m,
            density_kgpm3=req.density,
            speed_mps=req.speed_ms,
            angle_deg=req.angle_deg,
            material=req.material,
            coordinate=LonLat(req.lon, req.lat),
            mitigation=Mitigation(
                method=req.mitigation.method,
                delta_v_ms=req.mitigation.dv_ms,
                lead_time_days=req.mitigation.lead_time_days,
            ),
        )

    @property
    def impactor(self) -> Impactor:
        return Impactor(
            diameter_m=self.diameter_m,
            speed_mps=self.speed_mps,
            density_kgpm3=self.density_kgpm3,
            angle_deg=self.angle_deg,
        )


@dataclass(frozen=True)
class SimulationResult:
    scenario: ImpactScenario
    target: TargetSurface
    deflection: DeflectionResult
    effects: PhysicalEffects
    zones: Tuple[HazardZone, ...]
    stats: Dict[str, list]

    def to_response(self) -> Dict[str, Any]:
        e = self.effects
        center = self.deflection.coordinate
        out: Dict[str, Any] = {
            "energy_MtTNT": e.energy_megatons_tnt,
            "crater_diameter_m": e.crater_diameter_km * 1000.0,
            "crater_depth_m": e.crater_depth_km * 1000.0,
            "seismic_magnitude": e.seismic_magnitude,
            "thermal_radius_km": e.thermal_radius_km,
            "overpressure_radius_km": e.overpressure_radius_km,
            "mass_kg": e.mass_kg,
            "momentum_kg_ms": e.momentum_kg_mps,
            "material": self.scenario.material,
            "impact_point": {
                "lon": center.lon,
                "lat": center.lat,
                "surface": self.target.surface,
                "target_density_kg_m3": self.target.density_kgpm3,
                "source": self.target.source,
            },
            "deflection": {
                "applied": self.deflection.applied,
                "offset_m": self.deflection.offset_m,
                "original": {"lon": self.deflection.original.lon, "lat": self.deflection.original.lat},
            },
            "detailed_stats": self.stats,
            "rings": [z.to_ring() for z in self.zones],
        }
        if e.tsunami_height_m is not None:
            out["tsunami_height_m"] = e.tsunami_height_m
        return out


@dataclass(frozen=True)
class SimulationResponse:
    status_code: int
    body: Dict[str, Any]
    stage: Stage
    trace: Tuple[Stage, ...] = ()


def _body_text(raw_body: Union[bytes, str]) -> str:
    if isinstance(raw_body, bytes):
        return raw_body.decode("utf-8", errors="replace")
    return raw_body


class ImpactSimulator:
    """
    Validates a scenario, classifies the target, computes effects, applies deflection,
    builds and projects hazard zones, and maps failures onto the error contract.
    The optional surface lookup is injected; there is no global client.
    """

    def __init__(self, settings: Optional[Settings] = None, surface_lookup: Optional[SurfaceLookup] = None):
        self.settings = settings or Settings()
        self.surface_lookup = surface_lookup

    def parse(self, raw_body: Union[bytes, str]) -> ImpactScenario:
        try:
            req = SimulateRequest.model_validate_json(raw_body)
        except ValidationError as e:
            raise InputError(INVALID_PAYLOAD, stage=Stage.RECEIVED.value) from e
        return ImpactScenario.from_request(req)

    def simulate(self, scenario: ImpactScenario) -> SimulationResult:
        stage = Stage.CLASSIFIED
        try:
            c = scenario.coordinate
            target = classify(c.lon, c.lat, lookup=self.surface_lookup)
            logger.debug("[simulate] classified surface=%s rule=%s source=%s",
                         target.surface, target.rule, target.source)

            stage = Stage.COMPUTED
            effects = ImpactModel(scenario.impactor, target).effects()
            deflection = apply_deflection(scenario.mitigation, c)
            zones = build_zones(effects)
            stats = detailed_stats(effects, target)
            logger.debug("[simulate] computed Mt=%.3f crater_km=%.3f M=%.2f offset_m=%.1f",
                         effects.energy_megatons_tnt, effects.crater_diameter_km,
                         effects.seismic_magnitude, deflection.offset_m)

            stage = Stage.PROJECTED
            center = deflection.coordinate
            zones = tuple(
                replace(z, geometry=buffer_circle(center, z.radius_m, steps=self.settings.circle_steps))
                for z in zones
            )
        except SimulationError:
            raise
        except Exception as e:
            raise InternalError(str(e) or e.__class__.__name__, stage=stage.value) from e

        return SimulationResult(
            scenario=scenario, target=target, deflection=deflection,
            effects=effects, zones=zones, stats=stats,
        )

    def handle(self, raw_body: Union[bytes, str]) -> SimulationResponse:
        try:
            scenario = self.parse(raw_body)
        except InputError as e:
            logger.warning("[simulate] rejected: %s (cause=%s)", e.message, e.__cause__)
            return SimulationResponse(e.status_code, {"error": e.message}, Stage.REJECTED,
                                      trace=stages_before(Stage.VALIDATED, Stage.REJECTED))
        logger.debug("[simulate] stage=%s material=%s", Stage.VALIDATED.value, scenario.material)

        try:
            body = self.simulate(scenario).to_response()
        except InternalError as e:
            return self._failed(e, raw_body)
        except Exception as e:
            return self._failed(InternalError(str(e) or e.__class__.__name__, stage=Stage.RESPONDED.value), raw_body,
                                cause=e)

        logger.info("[simulate] responded Mt=%.3f rings=%d", body["energy_MtTNT"], len(body["rings"]))
        return SimulationResponse(200, body, Stage.RESPONDED, trace=PIPELINE)

    def _failed(self, err: InternalError, raw_body: Union[bytes, str],
                cause: Optional[BaseException] = None) -> SimulationResponse:
        cause = cause or err.__cause__ or err
        body_text = _body_text(raw_body)
        resp: Dict[str, Any] = {"error": err.message}
        if not self.settings.is_production:
            resp["payload"] = {"body": body_text}
            resp["stack"] = "".join(traceback.format_exception(type(cause), cause, cause.__traceback__))
        logger.error("[simulate] failed stage=%s error=%s body=%r", err.stage, err.message, body_text)
        return SimulationResponse(err.status_code, resp, Stage.FAILED,
                                  trace=stages_before(Stage(err.stage or Stage.RESPONDED), Stage.FAILED))
