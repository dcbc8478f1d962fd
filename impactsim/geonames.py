from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from .errors import LookupUnavailable

logger = logging.getLogger(__name__)

GEONAMES_OCEAN_URL = "http://api.geonames.org/oceanJSON"
GEONAMES_NO_OCEAN = 15   # status value GeoNames returns for points on land


def mask_key(s: Optional[str]) -> Optional[str]:
    if not s:
        return s
    return s[:3] + "***" + s[-3:] if len(s) > 6 else "***"


class GeoNamesOceanClient:
    """
    Stateless client for the GeoNames ocean lookup. Opens a short-lived httpx client
    per call; inject one into the simulator instead of sharing a global.
    """

    def __init__(self, username: str, timeout_s: float = 10.0,
                 transport: Optional[httpx.BaseTransport] = None):
        if not username:
            raise ValueError("GeoNames username not configured.")
        self.username = username
        self.timeout_s = timeout_s
        self._transport = transport

    def is_ocean(self, lat: float, lon: float) -> bool:
        params = {"lat": lat, "lng": lon, "username": self.username}
        logger.debug("[geonames] GET %s lat=%s lng=%s username=%s",
                     GEONAMES_OCEAN_URL, lat, lon, mask_key(self.username))
        try:
            with httpx.Client(timeout=self.timeout_s, transport=self._transport) as client:
                r = client.get(GEONAMES_OCEAN_URL, params=params)
                r.raise_for_status()
                data: Dict[str, Any] = r.json()
        except httpx.HTTPError as e:
            raise LookupUnavailable(f"Error fetching data from GeoNames: {e}") from e
        except ValueError as e:
            raise LookupUnavailable(f"GeoNames returned non-JSON: {e}") from e

        if not isinstance(data, dict):
            raise LookupUnavailable("GeoNames returned an unexpected response.")
        if data.get("ocean"):
            return True
        status = data.get("status") or {}
        if status.get("value") == GEONAMES_NO_OCEAN:
            return False
        raise LookupUnavailable(status.get("message") or "GeoNames returned an unexpected response.")
