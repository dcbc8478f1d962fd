"""
Tests for hazard-zone assembly and descriptive text.

Tests cover:
- Fixed zone order, ids and severities
- Crater/fireball/blast/thermal/seismic radii
- Seismic multiplier threshold and 20 psi fallback
- Degenerate (zero-energy) effects
- detailed_stats content
"""

from dataclasses import replace

import pytest

from impactsim.geo import LonLat, buffer_circle
from impactsim.impact_model import Impactor, ImpactModel
from impactsim.surface import surface_for
from impactsim.zones import (
    build_zones,
    detailed_stats,
    eardrum_rupture_radius_km,
    lung_damage_radius_km,
    seismic_radius_km,
    tree_blowdown_radius_km,
)

ZONE_IDS = [
    "crater", "fireball",
    "blast-extreme", "blast-severe", "blast-moderate", "blast-light",
    "thermal", "seismic",
]


@pytest.fixture
def effects():
    impactor = Impactor(diameter_m=150.0, speed_mps=19_000.0, density_kgpm3=3000.0, angle_deg=35.0)
    return ImpactModel(impactor, surface_for("land")).effects()


@pytest.fixture
def zones(effects):
    return {z.id: z for z in build_zones(effects)}


# =============================================================================
# ZONES
# =============================================================================

class TestBuildZones:

    def test_fixed_order(self, effects):
        built = build_zones(effects)
        assert [z.id for z in built] == ZONE_IDS
        assert [z.severity for z in built] == list(range(1, 9))

    def test_crater_and_fireball(self, effects, zones):
        crater_r = effects.crater_diameter_km * 1000.0 / 2.0
        assert zones["crater"].radius_m == pytest.approx(crater_r)
        assert zones["fireball"].radius_m == pytest.approx(0.8 * crater_r)

    def test_blast_bands_ordered(self, zones):
        radii = [zones[z].radius_m for z in ("blast-extreme", "blast-severe", "blast-moderate", "blast-light")]
        assert radii == sorted(radii)

    def test_blast_bands_match_effects(self, effects, zones):
        bands = effects.overpressure_bands()
        assert zones["blast-extreme"].radius_m == pytest.approx(bands[10] * 1000.0)
        assert zones["blast-light"].radius_m == pytest.approx(bands[1] * 1000.0)
        assert zones["blast-extreme"].description.startswith("10 psi overpressure")

    def test_thermal(self, effects, zones):
        assert zones["thermal"].radius_m == pytest.approx(effects.thermal_radius_km * 1000.0)

    def test_zones_have_no_geometry_until_projected(self, zones):
        assert all(z.geometry is None for z in zones.values())

    def test_ring_contract(self, zones):
        ring = zones["crater"].to_ring()
        assert set(ring) == {"id", "color", "opacity", "label", "description", "severity", "radius_m", "geojson"}
        assert ring["color"] == "#1e3a8a"

    def test_descriptions_reproducible(self, effects):
        assert build_zones(effects) == build_zones(effects)
        assert detailed_stats(effects, surface_for("land")) == detailed_stats(effects, surface_for("land"))


class TestSeismicZone:

    @pytest.mark.parametrize("magnitude,multiplier", [
        (9.0, 2.0), (7.01, 2.0), (7.0, 1.5), (3.0, 1.5), (0.0, 1.5),
    ])
    def test_step_multiplier(self, effects, magnitude, multiplier):
        fx = replace(effects, seismic_magnitude=magnitude)
        assert seismic_radius_km(fx) == pytest.approx(multiplier * fx.overpressure_bands()[1])
        seismic = build_zones(fx)[-1]
        assert seismic.radius_m == pytest.approx(multiplier * fx.overpressure_bands()[1] * 1000.0)


class TestDerivedThresholds:

    def test_lung_damage_uses_twenty_psi(self):
        assert lung_damage_radius_km({20: 1.0, 10: 2.0}) == 1.0

    def test_lung_damage_fallback(self):
        assert lung_damage_radius_km({10: 2.0, 5: 3.0, 3: 4.0, 1: 5.0}) == pytest.approx(1.8)

    def test_eardrum_is_average(self):
        assert eardrum_rupture_radius_km({5: 2.0, 3: 4.0}) == pytest.approx(3.0)

    def test_tree_blowdown_is_average(self):
        assert tree_blowdown_radius_km({3: 4.0, 1: 6.0}) == pytest.approx(5.0)


class TestDegenerateEffects:

    def test_zero_energy_zones_project(self, effects):
        zero = replace(
            effects,
            energy_joules=0.0, energy_megatons_tnt=0.0, effective_energy_joules=0.0,
            crater_diameter_km=0.0, crater_depth_km=0.0, seismic_magnitude=0.0,
            thermal_radius_km=0.0, overpressure_radius_km=0.0,
            overpressure_km=tuple((psi, 0.0) for psi, _ in effects.overpressure_km),
        )
        built = build_zones(zero)
        assert all(z.radius_m == 0.0 for z in built)
        for z in built:
            ring = buffer_circle(LonLat(0.0, 0.0), z.radius_m)["geometry"]["coordinates"][0]
            assert ring[0] == ring[-1]


# =============================================================================
# DETAILED STATS
# =============================================================================

class TestDetailedStats:

    def test_sections(self, effects):
        stats = detailed_stats(effects, surface_for("land"))
        assert set(stats) == {"crater", "shockwave", "windBlast", "seismic"}
        assert all(isinstance(line, str) for lines in stats.values() for line in lines)

    def test_crater_text(self, effects):
        stats = detailed_stats(effects, surface_for("land"))
        assert stats["crater"][0] == f"{effects.crater_diameter_km:.2f} km wide crater"
        assert "rock" in stats["crater"][2]

    def test_shockwave_thresholds(self, effects):
        bands = effects.overpressure_bands()
        stats = detailed_stats(effects, surface_for("land"))
        assert f"Lung damage within {bands[20]:.1f} km" in stats["shockwave"]
        assert f"Eardrums rupture within {0.5 * (bands[5] + bands[3]):.1f} km" in stats["shockwave"]

    def test_seismic_text(self, effects):
        stats = detailed_stats(effects, surface_for("land"))
        assert stats["seismic"][0] == f"Magnitude {effects.seismic_magnitude:.1f} earthquake"

    def test_water_adds_tsunami(self):
        impactor = Impactor(diameter_m=150.0, speed_mps=19_000.0, density_kgpm3=3000.0, angle_deg=35.0)
        water = surface_for("water")
        stats = detailed_stats(ImpactModel(impactor, water).effects(), water)
        assert "tsunami" in stats
        assert "seafloor" in stats["crater"][2]
