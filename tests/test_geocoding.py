from __future__ import annotations

from typing import Any

import pytest
import requests

from scholartrack.config import Settings
from scholartrack.geo.geocoding import (
    NOMINATIM_REQUESTS_PER_SECOND,
    GeocodingError,
    GeoPoint,
    NominatimGeocoder,
)


class _FakeHttpClient:
    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[tuple[str, dict[str, Any] | None]] = []

    def get_json(self, url: str, *, params: dict[str, Any] | None = None) -> Any:
        self.calls.append((url, params))
        if self.error is not None:
            raise self.error
        return self.response


def test_lookup_appends_region_and_parses_first_result() -> None:
    http_client = _FakeHttpClient(response=[{"lat": "16.0433", "lon": "120.3333", "display_name": "Dagupan"}])
    geocoder = NominatimGeocoder(http_client, base_url="https://geo.local/")

    point = geocoder.lookup(" Dagupan ")

    assert point == GeoPoint(16.0433, 120.3333)
    assert http_client.calls == [
        (
            "https://geo.local/search",
            {"q": "Dagupan, Pangasinan, Philippines", "format": "json", "limit": 1},
        )
    ]


def test_lookup_without_region_sends_query_verbatim() -> None:
    geocoder = NominatimGeocoder(_FakeHttpClient(response=[]), region_suffix="")

    assert geocoder.build_query("Manila") == "Manila"
    assert geocoder.lookup("Manila") is None


def test_lookup_failures_raise_geocoding_error() -> None:
    offline = NominatimGeocoder(_FakeHttpClient(error=requests.ConnectionError("offline")))
    with pytest.raises(GeocodingError, match="offline"):
        offline.lookup("Lingayen")

    garbled = NominatimGeocoder(_FakeHttpClient(response=[{"lat": "north"}]))
    with pytest.raises(GeocodingError):
        garbled.lookup("Lingayen")


def test_from_settings_is_rate_limited() -> None:
    geocoder = NominatimGeocoder.from_settings(
        Settings(geocoder_url="https://geo.local", geocoder_region="Ilocos Norte, Philippines")
    )

    assert geocoder.base_url == "https://geo.local/"
    assert geocoder.region_suffix == "Ilocos Norte, Philippines"
    assert geocoder.http_client.requests_per_second == NOMINATIM_REQUESTS_PER_SECOND
    geocoder.http_client.close()
