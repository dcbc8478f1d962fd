from __future__ import annotations
from dataclasses import dataclass
from math import pi, sin, radians, log10, sqrt

from .surface import TargetSurface

# -----------------------------
# Physical constants & defaults
# -----------------------------
G_EARTH = 9.81                   # m/s^2
J_PER_MT_TNT = 4.184e15          # J in 1 megaton TNT
P_AMBIENT = 101325.0             # Pa
C_SOUND = 330.0                  # m/s
PA_PER_PSI = 6894.757            # Pa in 1 psi
P_REF_SPL = 20e-6                # Pa, 0 dB reference pressure

# Crater scaling  D = K * (E / (rho_t * g)) ** (1/3.4)
CRATER_K = 1.8
CRATER_EXPONENT = 1.0 / 3.4
CRATER_DEPTH_RATIO = 0.15

# Entry angle is clamped before trig so sin/tan never degenerate
ANGLE_MIN_DEG = 1.0
ANGLE_MAX_DEG = 89.0

# Seismic  M = (2/3) log10(E) - 2.9
SEISMIC_SLOPE = 2.0 / 3.0
SEISMIC_OFFSET = 2.9

# Thermal  R = 0.4 * Mt^0.4 (km)
THERMAL_K_KM = 0.4
THERMAL_EXPONENT = 0.4

# Cube-root blast scaling, metres per Mt^(1/3). Coefficients are ordered so that
# higher overpressure always sits closer to ground zero.
OVERPRESSURE_COEFF_M = {
    20: 1910.0,   # lung damage
    10: 2110.0,   # complete leveling
    5:  4480.0,   # multistory buildings collapse
    3:  5720.0,   # homes collapse
    1:  6220.0,   # windows shatter, trees down
}
PSI_LEVELS = (20, 10, 5, 3, 1)

# Tsunami reference: 100 m body at 20 km/s raises a ~201 m wave
TSUNAMI_REF_DIAMETER_M = 100.0
TSUNAMI_REF_SPEED_MPS = 20_000.0
TSUNAMI_REF_HEIGHT_M = 201.0


# ---------- Energetics ----------
def mass(diameter_m: float, density_kgpm3: float) -> float:
    """Mass of a sphere of the given diameter and bulk density (kg)."""
    r = 0.5 * diameter_m
    return (4.0 / 3.0) * pi * r**3 * density_kgpm3


def kinetic_energy(mass_kg: float, speed_mps: float) -> float:
    return 0.5 * mass_kg * speed_mps**2


def energy_to_megatons(energy_J: float) -> float:
    return energy_J / J_PER_MT_TNT


def clamp_angle(angle_deg: float) -> float:
    return min(max(angle_deg, ANGLE_MIN_DEG), ANGLE_MAX_DEG)


def effective_energy(energy_J: float, angle_deg: float) -> float:
    """Vertical share of the energy: E * sin^2(angle). Shallow entries couple less."""
    return energy_J * sin(radians(clamp_angle(angle_deg))) ** 2


def momentum(mass_kg: float, speed_mps: float) -> float:
    return mass_kg * speed_mps


# ---------- Crater ----------
def crater_diameter_km(energy_J: float, target_density_kgpm3: float, gravity_mps2: float = G_EARTH) -> float:
    """
    Final crater diameter (km) from D = K * (E / (rho_t * g)) ** (1/3.4).
    Zero (or negative) energy gives a zero-diameter crater rather than an error.
    """
    if energy_J <= 0.0:
        return 0.0
    D_m = CRATER_K * (energy_J / (target_density_kgpm3 * gravity_mps2)) ** CRATER_EXPONENT
    return D_m / 1000.0


def crater_depth_km(diameter_km: float) -> float:
    return CRATER_DEPTH_RATIO * diameter_km


# ---------- Seismic ----------
def seismic_magnitude(energy_J: float) -> float:
    """Richter-style magnitude, floored at 0 for sub-threshold energies."""
    if energy_J <= 0.0:
        return 0.0
    return max(0.0, SEISMIC_SLOPE * log10(energy_J) - SEISMIC_OFFSET)


def mmi_band(magnitude: float) -> str:
    """Modified Mercalli band for a magnitude; applied here to the source magnitude itself."""
    if magnitude < 1.0:   return "-"
    if magnitude < 2.0:   return "I"
    if magnitude < 3.0:   return "I–II"
    if magnitude < 4.0:   return "III–IV"
    if magnitude < 5.0:   return "IV–V"
    if magnitude < 6.0:   return "VI–VII"
    if magnitude < 7.0:   return "VII–VIII"
    if magnitude < 8.0:   return "IX–X"
    if magnitude < 9.0:   return "X–XI"
    return "XII"


# ---------- Thermal radiation ----------
def thermal_radius_km(energy_Mt: float) -> float:
    if energy_Mt <= 0.0:
        return 0.0
    return THERMAL_K_KM * energy_Mt ** THERMAL_EXPONENT


# ---------- Air blast ----------
def overpressure_radius_km(energy_Mt: float, psi: int) -> float:
    if psi not in OVERPRESSURE_COEFF_M:
        raise ValueError(f"Unknown overpressure level {psi} psi.")
    if energy_Mt <= 0.0:
        return 0.0
    return OVERPRESSURE_COEFF_M[psi] * energy_Mt ** (1.0 / 3.0) / 1000.0


def overpressure_radii_km(energy_Mt: float) -> dict[int, float]:
    """All psi bands for a yield, keyed by psi level (20, 10, 5, 3, 1)."""
    return {psi: overpressure_radius_km(energy_Mt, psi) for psi in PSI_LEVELS}


def wind_speed_mps(overpressure_pa: float) -> float:
    """Peak wind speed behind a shock front of the given overpressure."""
    p = max(overpressure_pa, 0.0)
    return (5.0 * p / (7.0 * P_AMBIENT)) * C_SOUND * (1.0 + 6.0 * p / (7.0 * P_AMBIENT)) ** 0.5


def sound_pressure_level_db(overpressure_pa: float) -> float:
    return 20.0 * log10(max(overpressure_pa, P_REF_SPL) / P_REF_SPL)


# ---------- Water ----------
def tsunami_height_m(diameter_m: float, speed_mps: float) -> float:
    return (sqrt(diameter_m / TSUNAMI_REF_DIAMETER_M)
            * sqrt(speed_mps / TSUNAMI_REF_SPEED_MPS)
            * TSUNAMI_REF_HEIGHT_M)


@dataclass(frozen=True)
class Impactor:
    diameter_m: float
    speed_mps: float
    density_kgpm3: float
    angle_deg: float  # to HORIZONTAL

    @property
    def mass_kg(self) -> float:
        return mass(self.diameter_m, self.density_kgpm3)


@dataclass(frozen=True)
class PhysicalEffects:
    mass_kg: float
    momentum_kg_mps: float
    energy_joules: float
    energy_megatons_tnt: float
    effective_energy_joules: float
    crater_diameter_km: float
    crater_depth_km: float
    seismic_magnitude: float
    thermal_radius_km: float
    overpressure_radius_km: float
    overpressure_km: tuple[tuple[int, float], ...]
    tsunami_height_m: float | None = None

    def overpressure_bands(self) -> dict[int, float]:
        return dict(self.overpressure_km)


class ImpactModel:
    """
    Crater + seismic + thermal + air-blast (+ tsunami over water) for one impactor
    striking one classified target surface.

    Ground-coupled effects (crater, seismic) use the angle-reduced effective energy;
    atmospheric effects (thermal, blast) use the full kinetic energy.
    """

    def __init__(self, impactor: Impactor, target: TargetSurface, gravity_mps2: float = G_EARTH):
        self.p = impactor
        self.t = target
        self.g = gravity_mps2

    def kinetic_energy_J(self) -> float:
        return kinetic_energy(self.p.mass_kg, self.p.speed_mps)

    def effective_energy_J(self) -> float:
        return effective_energy(self.kinetic_energy_J(), self.p.angle_deg)

    def effects(self) -> PhysicalEffects:
        m = self.p.mass_kg
        E = self.kinetic_energy_J()
        E_Mt = energy_to_megatons(E)
        E_eff = self.effective_energy_J()

        D_km = crater_diameter_km(E_eff, self.t.density_kgpm3, self.g)
        bands = overpressure_radii_km(E_Mt)

        return PhysicalEffects(
            mass_kg=m,
            momentum_kg_mps=momentum(m, self.p.speed_mps),
            energy_joules=E,
            energy_megatons_tnt=E_Mt,
            effective_energy_joules=E_eff,
            crater_diameter_km=D_km,
            crater_depth_km=crater_depth_km(D_km),
            seismic_magnitude=seismic_magnitude(E_eff),
            thermal_radius_km=thermal_radius_km(E_Mt),
            overpressure_radius_km=bands[1],
            overpressure_km=tuple(bands.items()),
            tsunami_height_m=(tsunami_height_m(self.p.diameter_m, self.p.speed_mps)
                              if self.t.is_water else None),
        )
