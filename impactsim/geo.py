from __future__ import annotations

import logging
import math
from typing import NamedTuple

logger = logging.getLogger(__name__)

R_EARTH_M = 6_371_008.8        # mean radius, m
MIN_RADIUS_M = 1.0             # zero/negative radii are floored to this
MAX_CENTER_LAT = 89.9          # keep circle centres off the poles
DEFAULT_STEPS = 64
POLE_EDGE_STEP_DEG = 90.0      # max longitude gap between vertices on a pole edge


class LonLat(NamedTuple):
    lon: float
    lat: float


def normalize_lon(lon: float) -> float:
    """Wrap a longitude into [-180, 180)."""
    return (lon + 180.0) % 360.0 - 180.0


# --- geometry helpers (geodesic-ish) ---

def destination_point(origin: LonLat, distance_m: float, bearing_deg: float) -> LonLat:
    """Point reached from origin going 'distance_m' along 'bearing_deg' on a sphere."""
    δ = distance_m / R_EARTH_M
    φ1 = math.radians(origin.lat)
    λ1 = math.radians(origin.lon)
    θ = math.radians(bearing_deg)

    sinφ2 = math.sin(φ1)*math.cos(δ) + math.cos(φ1)*math.sin(δ)*math.cos(θ)
    φ2 = math.asin(max(-1.0, min(1.0, sinφ2)))
    y = math.sin(θ)*math.sin(δ)*math.cos(φ1)
    x = math.cos(δ) - math.sin(φ1)*math.sin(φ2)
    λ2 = λ1 + math.atan2(y, x)
    return LonLat(normalize_lon(math.degrees(λ2)), math.degrees(φ2))


def buffer_circle(center: LonLat, radius_m: float, steps: int = DEFAULT_STEPS) -> dict:
    """
    Closed polygon approximating a circle of 'radius_m' around center, as a GeoJSON
    Feature. Ring longitudes are unwrapped vertex to vertex so a circle that crosses
    the antimeridian stays one continuous ring instead of spanning the globe.

    A circle that encloses a pole winds once around it; that ring is opened at the
    wrap and closed along the pole's latitude so the cap (and the centre) lie inside.
    """
    steps = max(int(steps), 8)
    r = radius_m if (math.isfinite(radius_m) and radius_m > MIN_RADIUS_M) else MIN_RADIUS_M
    c = LonLat(normalize_lon(center.lon), max(-MAX_CENTER_LAT, min(MAX_CENTER_LAT, center.lat)))

    # first vertex faces the nearer pole; an enclosing ring opens on the far side of it
    bearing0 = 0.0 if c.lat >= 0.0 else 180.0
    coords = []
    lon = c.lon
    for i in range(steps + 1):
        p = destination_point(c, r, bearing0 + 360.0 * (i / steps))
        lon = lon + normalize_lon(p.lon - lon)
        coords.append([lon, p.lat])

    winding = coords[-1][0] - coords[0][0]
    if abs(winding) > 180.0:
        pole_lat = 90.0 if c.lat >= 0.0 else -90.0
        shift = -360.0 * round((coords[0][0] + winding / 2.0 - c.lon) / 360.0)
        for xy in coords:
            xy[0] += shift
        lon_end, lon_start = coords[-1][0], coords[0][0]
        n = int(math.ceil(abs(winding) / POLE_EDGE_STEP_DEG))
        for k in range(n + 1):
            coords.append([lon_end + (lon_start - lon_end) * k / n, pole_lat])
        logger.debug("[geojson.circle] encloses pole lat=%.0f winding=%.1f", pole_lat, winding)
    else:
        coords.pop()
    coords.append(list(coords[0]))  # close ring

    lons = [xy[0] for xy in coords]
    lats = [xy[1] for xy in coords]
    logger.debug("[geojson.circle] steps=%d radius_m=%.1f center=[%.5f,%.5f] bbox=%s",
                 steps, r, c.lon, c.lat, [min(lons), min(lats), max(lons), max(lats)])
    return {
        "type": "Feature",
        "properties": {"radius_m": r},
        "geometry": {"type": "Polygon", "coordinates": [coords]},
    }
