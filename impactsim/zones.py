"""
Hazard zones and descriptive text derived from PhysicalEffects.

Everything here is a view over the scalars: the same effects always give the same
radii, labels and sentences.
"""
from __future__ import annotations

from dataclasses import dataclass
from math import pi
from typing import Mapping, Optional

from .impact_model import PA_PER_PSI, PhysicalEffects, mmi_band, sound_pressure_level_db, wind_speed_mps
from .surface import TargetSurface

MPS_TO_MPH = 2.236936

FIREBALL_TO_CRATER_DIAMETER = 0.4     # fireball radius = 0.8 x crater radius
SEISMIC_MAGNITUDE_THRESHOLD = 7.0
SEISMIC_MULTIPLIER_STRONG = 2.0       # x 1 psi radius above the threshold
SEISMIC_MULTIPLIER_WEAK = 1.5
LUNG_DAMAGE_FALLBACK = 0.9            # x 10 psi radius when no 20 psi band

# id, psi, colour, opacity, label, what happens there
BLAST_BANDS = (
    ("blast-extreme",  10, "#7f1d1d", 0.40, "Extreme Blast",  "complete leveling"),
    ("blast-severe",    5, "#dc2626", 0.35, "Severe Blast",   "multistory buildings collapse"),
    ("blast-moderate",  3, "#f97316", 0.30, "Moderate Blast", "homes collapse"),
    ("blast-light",     1, "#fbbf24", 0.25, "Light Blast",    "windows shatter"),
)


@dataclass(frozen=True)
class HazardZone:
    id: str
    radius_m: float
    severity: int
    label: str
    description: str
    color: str
    opacity: float
    geometry: Optional[dict] = None

    def to_ring(self) -> dict:
        return {
            "id": self.id,
            "color": self.color,
            "opacity": self.opacity,
            "label": self.label,
            "description": self.description,
            "severity": self.severity,
            "radius_m": self.radius_m,
            "geojson": self.geometry,
        }


# ---------- derived thresholds ----------
def wind_mph_at_psi(psi: float) -> float:
    return wind_speed_mps(psi * PA_PER_PSI) * MPS_TO_MPH


def lung_damage_radius_km(bands: Mapping[int, float]) -> float:
    if 20 in bands:
        return bands[20]
    return bands[10] * LUNG_DAMAGE_FALLBACK


def eardrum_rupture_radius_km(bands: Mapping[int, float]) -> float:
    return 0.5 * (bands[5] + bands[3])


def tree_blowdown_radius_km(bands: Mapping[int, float]) -> float:
    return 0.5 * (bands[3] + bands[1])


def seismic_radius_km(effects: PhysicalEffects) -> float:
    k = (SEISMIC_MULTIPLIER_STRONG if effects.seismic_magnitude > SEISMIC_MAGNITUDE_THRESHOLD
         else SEISMIC_MULTIPLIER_WEAK)
    return k * effects.overpressure_bands()[1]


def crater_volume_km3(diameter_km: float, depth_km: float) -> float:
    """Paraboloid bowl."""
    return pi / 8.0 * diameter_km**2 * depth_km


# ---------- zones ----------
def build_zones(effects: PhysicalEffects) -> tuple[HazardZone, ...]:
    """crater, fireball, 10/5/3/1 psi blast bands, thermal, seismic, in that order."""
    bands = effects.overpressure_bands()
    D_km = effects.crater_diameter_km

    zones = [
        HazardZone(
            id="crater", radius_m=D_km * 1000.0 / 2.0, severity=1,
            label="Crater",
            description=f"{D_km:.2f} km diameter, {effects.crater_depth_km:.2f} km deep",
            color="#1e3a8a", opacity=0.6,
        ),
        HazardZone(
            id="fireball", radius_m=FIREBALL_TO_CRATER_DIAMETER * D_km * 1000.0, severity=2,
            label="Fireball", description="Immediate vaporization zone",
            color="#ff4500", opacity=0.7,
        ),
    ]
    for zid, psi, color, opacity, label, _ in BLAST_BANDS:
        zones.append(HazardZone(
            id=zid, radius_m=bands[psi] * 1000.0, severity=len(zones) + 1,
            label=label,
            description=f"{psi} psi overpressure, ~{wind_mph_at_psi(psi):.0f} mph winds",
            color=color, opacity=opacity,
        ))
    zones.append(HazardZone(
        id="thermal", radius_m=effects.thermal_radius_km * 1000.0, severity=len(zones) + 1,
        label="Thermal Radiation",
        description=f"3rd degree burns within {effects.thermal_radius_km:.1f} km",
        color="#dc2626", opacity=0.2,
    ))
    zones.append(HazardZone(
        id="seismic", radius_m=seismic_radius_km(effects) * 1000.0, severity=len(zones) + 1,
        label="Seismic Effects",
        description=f"Magnitude {effects.seismic_magnitude:.1f} earthquake",
        color="#8b5cf6", opacity=0.15,
    ))
    return tuple(zones)


# ---------- detailed stats ----------
def detailed_stats(effects: PhysicalEffects, target: TargetSurface) -> dict[str, list[str]]:
    bands = effects.overpressure_bands()
    D_km, d_km = effects.crater_diameter_km, effects.crater_depth_km
    peak_psi = max(bands)

    stats = {
        "crater": [
            f"{D_km:.2f} km wide crater",
            f"{d_km:.2f} km deep",
            f"{crater_volume_km3(D_km, d_km):.3g} km³ of {'seafloor' if target.is_water else 'rock'} displaced",
            f"Impact energy equal to {effects.energy_megatons_tnt:,.1f} megatons of TNT",
        ],
        "shockwave": [
            f"{sound_pressure_level_db(peak_psi * PA_PER_PSI):.0f} decibel shock wave",
            f"Lung damage within {lung_damage_radius_km(bands):.1f} km",
            f"Eardrums rupture within {eardrum_rupture_radius_km(bands):.1f} km",
            f"Buildings collapse within {bands[5]:.1f} km",
            f"Homes collapse within {bands[3]:.1f} km",
        ],
        "windBlast": [f"Peak winds of {wind_mph_at_psi(peak_psi):.0f} mph"]
        + [f"~{wind_mph_at_psi(psi):.0f} mph winds within {bands[psi]:.1f} km ({what})"
           for _, psi, _, _, _, what in BLAST_BANDS]
        + [f"Trees knocked down within {tree_blowdown_radius_km(bands):.1f} km"],
        "seismic": [
            f"Magnitude {effects.seismic_magnitude:.1f} earthquake",
            f"Shaking intensity {mmi_band(effects.seismic_magnitude)} near the impact",
            f"Felt up to {seismic_radius_km(effects):.0f} km away",
        ],
    }
    if effects.tsunami_height_m is not None:
        stats["tsunami"] = [
            f"{effects.tsunami_height_m:.0f} m tall tsunami wave near the impact site",
        ]
    return stats
