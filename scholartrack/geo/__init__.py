"""Map camera state and address lookup."""

from scholartrack.geo.camera import (
    DEFAULT_CENTER,
    DEFAULT_ZOOM,
    MARKER_ZOOM,
    SEARCH_ZOOM,
    CameraState,
    MapTracker,
)
from scholartrack.geo.geocoding import GeocodingError, GeoPoint, NominatimGeocoder

__all__ = [
    "DEFAULT_CENTER",
    "DEFAULT_ZOOM",
    "MARKER_ZOOM",
    "SEARCH_ZOOM",
    "CameraState",
    "GeoPoint",
    "GeocodingError",
    "MapTracker",
    "NominatimGeocoder",
]
