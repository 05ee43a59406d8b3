from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

import requests

from scholartrack.api.http import ApiHttpClient
from scholartrack.config import DEFAULT_GEOCODER_REGION, DEFAULT_GEOCODER_URL, Settings

logger = logging.getLogger(__name__)

# Public Nominatim allows at most one request per second.
NOMINATIM_REQUESTS_PER_SECOND = 1.0


class GeocodingError(Exception):
    """Raised when the address-lookup service cannot be reached or answers garbage."""


@dataclass(frozen=True, slots=True)
class GeoPoint:
    latitude: float
    longitude: float


class NominatimGeocoder:
    def __init__(
        self,
        http_client: ApiHttpClient | None = None,
        *,
        base_url: str = DEFAULT_GEOCODER_URL,
        region_suffix: str = DEFAULT_GEOCODER_REGION,
    ) -> None:
        self.http_client = http_client or ApiHttpClient(
            requests_per_second=NOMINATIM_REQUESTS_PER_SECOND
        )
        self.base_url = base_url
        self.region_suffix = region_suffix

    @classmethod
    def from_settings(cls, settings: Settings) -> NominatimGeocoder:
        http_client = ApiHttpClient(
            timeout_seconds=settings.timeout_seconds,
            user_agent=settings.user_agent,
            requests_per_second=NOMINATIM_REQUESTS_PER_SECOND,
        )
        return cls(
            http_client,
            base_url=settings.geocoder_url,
            region_suffix=settings.geocoder_region,
        )

    def build_query(self, query: str) -> str:
        cleaned = query.strip()
        if not self.region_suffix:
            return cleaned
        return f"{cleaned}, {self.region_suffix}"

    def lookup(self, query: str) -> GeoPoint | None:
        params = {"q": self.build_query(query), "format": "json", "limit": 1}
        try:
            results = self.http_client.get_json(urljoin(self.base_url, "search"), params=params)
        except (requests.RequestException, ValueError) as exc:
            raise GeocodingError(str(exc) or exc.__class__.__name__) from exc

        if not isinstance(results, list) or not results:
            return None
        return _point_from_result(results[0])


def _point_from_result(result: Any) -> GeoPoint:
    try:
        return GeoPoint(latitude=float(result["lat"]), longitude=float(result["lon"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise GeocodingError(f"Unexpected geocoder result: {result!r}") from exc
