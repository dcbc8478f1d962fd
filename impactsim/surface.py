"""
Coarse water/land classification of an impact coordinate.

This is NOT a coastline database. The world is approximated by a fixed, ordered
table of lon/lat rectangles: broad ocean basins first, continental carve-outs
after them, then a few inland seas carved back out of the continents. Every
matching rule overrides the ones before it, so the LAST match wins and a point
that matches nothing is land. Boundaries are intentionally rough; keep the table
and its order as they are.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional, Protocol

from .errors import LookupUnavailable

logger = logging.getLogger(__name__)

Surface = Literal["water", "land"]

TARGET_DENSITIES = {"water": 1000.0, "land": 2500.0}   # kg/m^3


@dataclass(frozen=True)
class SurfaceRule:
    name: str
    surface: Surface
    lon_min: float
    lon_max: float
    lat_min: float
    lat_max: float

    def contains(self, lon: float, lat: float) -> bool:
        return self.lon_min <= lon <= self.lon_max and self.lat_min <= lat <= self.lat_max


# Evaluation order matters: see module docstring.
SURFACE_RULES: tuple[SurfaceRule, ...] = (
    # ocean basins
    SurfaceRule("Southern Ocean",          "water", -180.0, 180.0,  -90.0, -60.0),
    SurfaceRule("Arctic Ocean",            "water", -180.0, 180.0,   66.0,  90.0),
    SurfaceRule("Pacific Ocean (west)",    "water",  120.0, 180.0,  -60.0,  66.0),
    SurfaceRule("Pacific Ocean (east)",    "water", -180.0, -70.0,  -60.0,  66.0),
    SurfaceRule("Atlantic Ocean",          "water",  -70.0,  20.0,  -60.0,  66.0),
    SurfaceRule("Indian Ocean",            "water",   20.0, 120.0,  -60.0,  30.0),
    # continental carve-outs
    SurfaceRule("North America",           "land",  -168.0, -52.0,   15.0,  72.0),
    SurfaceRule("Central America",         "land",  -110.0, -77.0,    7.0,  15.0),
    SurfaceRule("South America",           "land",   -82.0, -34.0,  -56.0,  13.0),
    SurfaceRule("Greenland",               "land",   -73.0, -12.0,   60.0,  84.0),
    SurfaceRule("Europe",                  "land",   -10.0,  40.0,   36.0,  71.0),
    SurfaceRule("Africa",                  "land",   -18.0,  52.0,  -35.0,  37.0),
    SurfaceRule("Asia",                    "land",    40.0, 150.0,   10.0,  78.0),
    SurfaceRule("Siberia",                 "land",   150.0, 180.0,   50.0,  72.0),
    SurfaceRule("Maritime Southeast Asia", "land",    92.0, 125.0,  -10.0,  10.0),
    SurfaceRule("Australia",               "land",   113.0, 154.0,  -39.0, -11.0),
    SurfaceRule("Antarctica",              "land",  -180.0, 180.0,  -90.0, -66.0),
    # inland seas inside the carve-outs
    SurfaceRule("Gulf of Mexico",          "water",  -97.0, -81.0,   18.0,  30.0),
    SurfaceRule("Hudson Bay",              "water",  -95.0, -78.0,   51.0,  64.0),
    SurfaceRule("Mediterranean Sea",       "water",    0.0,  35.0,   32.0,  36.0),
)


@dataclass(frozen=True)
class TargetSurface:
    surface: Surface
    density_kgpm3: float
    source: str = "coarse"
    rule: Optional[str] = None

    @property
    def is_water(self) -> bool:
        return self.surface == "water"


class SurfaceLookup(Protocol):
    """Anything that can tell whether a coordinate is ocean (e.g. GeoNames)."""

    def is_ocean(self, lat: float, lon: float) -> bool: ...


def surface_for(surface: Surface, source: str = "coarse", rule: Optional[str] = None) -> TargetSurface:
    return TargetSurface(surface=surface, density_kgpm3=TARGET_DENSITIES[surface], source=source, rule=rule)


def classify_coarse(lon: float, lat: float) -> TargetSurface:
    surface: Surface = "land"
    matched = None
    for rule in SURFACE_RULES:
        if rule.contains(lon, lat):
            surface, matched = rule.surface, rule.name
    return surface_for(surface, rule=matched)


def classify(lon: float, lat: float, lookup: SurfaceLookup | None = None) -> TargetSurface:
    """
    Classify (lon, lat). An injected lookup is asked first; if it is unavailable the
    coarse rule table decides, so classification never fails.
    """
    if lookup is not None:
        try:
            ocean = lookup.is_ocean(lat=lat, lon=lon)
        except LookupUnavailable as e:
            logger.warning("[surface.lookup] unavailable, using coarse rules: %s", e)
        else:
            return surface_for("water" if ocean else "land", source="geonames")
    return classify_coarse(lon, lat)
