from __future__ import annotations

import math
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from .impact_model import kinetic_energy, mass


class MitigationIn(BaseModel):
    method: Literal["none", "kinetic", "tractor"] = Field("none")
    dv_ms: float = Field(0.0, ge=0, allow_inf_nan=False, description="Velocity change in m/s")
    lead_time_days: float = Field(0.0, ge=0, allow_inf_nan=False, description="Warning time in days")


class SimulateRequest(BaseModel):
    # the three physical inputs must arrive as JSON numbers, not numeric strings
    diameter_m: float = Field(..., gt=0, strict=True, allow_inf_nan=False, description="Impactor diameter in meters")
    density: float = Field(..., gt=0, strict=True, allow_inf_nan=False, description="Bulk density in kg/m^3")
    speed_ms: float = Field(..., gt=0, strict=True, allow_inf_nan=False, description="Impact speed in m/s")
    angle_deg: float = Field(45.0, ge=5, le=90, description="Entry angle to horizontal in degrees")
    material: Literal["stony", "iron", "cometary"] = Field("stony")
    lon: float = Field(0.0, ge=-180, le=180, description="Longitude in decimal degrees")
    lat: float = Field(0.0, ge=-90, le=90, description="Latitude in decimal degrees")
    mitigation: MitigationIn = Field(default_factory=MitigationIn)

    @model_validator(mode="after")
    def energy_is_finite(self) -> "SimulateRequest":
        # derived quantities are all bounded by the kinetic energy
        try:
            energy = kinetic_energy(mass(self.diameter_m, self.density), self.speed_ms)
        except OverflowError:
            energy = math.inf
        if not math.isfinite(energy):
            raise ValueError("kinetic energy is not representable as a finite number")
        return self
