"""
Tests for the GeoNames ocean lookup client, using httpx.MockTransport.
"""

import httpx
import pytest

from impactsim.errors import LookupUnavailable
from impactsim.geonames import GeoNamesOceanClient, mask_key


def client_returning(status_code=200, json=None, text=None, seen=None):
    def handler(request):
        if seen is not None:
            seen.append(request)
        if json is not None:
            return httpx.Response(status_code, json=json)
        return httpx.Response(status_code, text=text or "")
    return GeoNamesOceanClient("demo_user", transport=httpx.MockTransport(handler))


class TestGeoNamesOceanClient:

    def test_ocean(self):
        seen = []
        c = client_returning(json={"ocean": {"distance": "0", "name": "North Pacific Ocean"}}, seen=seen)
        assert c.is_ocean(lat=0.0, lon=-150.0) is True
        params = seen[0].url.params
        assert params["lat"] == "0.0"
        assert params["lng"] == "-150.0"
        assert params["username"] == "demo_user"

    def test_land(self):
        c = client_returning(json={"status": {"message": "we are afraid we could not find an ocean", "value": 15}})
        assert c.is_ocean(lat=40.0, lon=-100.0) is False

    def test_account_error(self):
        c = client_returning(json={"status": {"message": "user does not exist.", "value": 10}})
        with pytest.raises(LookupUnavailable, match="user does not exist"):
            c.is_ocean(lat=0.0, lon=0.0)

    def test_http_error(self):
        with pytest.raises(LookupUnavailable):
            client_returning(status_code=503, text="busy").is_ocean(lat=0.0, lon=0.0)

    def test_non_json(self):
        with pytest.raises(LookupUnavailable):
            client_returning(text="<html>").is_ocean(lat=0.0, lon=0.0)

    def test_requires_username(self):
        with pytest.raises(ValueError):
            GeoNamesOceanClient("")


@pytest.mark.parametrize("value,masked", [
    (None, None), ("", ""), ("abc", "***"), ("demo_user", "dem***ser"),
])
def test_mask_key(value, masked):
    assert mask_key(value) == masked
