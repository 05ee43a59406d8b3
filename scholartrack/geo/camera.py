from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from scholartrack.domain.models import ScholarshipApplication
from scholartrack.geo.geocoding import GeocodingError, GeoPoint

logger = logging.getLogger(__name__)

DEFAULT_CENTER = (15.92, 120.35)
DEFAULT_ZOOM = 10.0
MARKER_ZOOM = 15.0
SEARCH_ZOOM = 14.0


@dataclass(slots=True)
class CameraState:
    center: GeoPoint = GeoPoint(*DEFAULT_CENTER)
    zoom: float = DEFAULT_ZOOM

    def move_to(self, point: GeoPoint, zoom: float) -> None:
        self.center = point
        self.zoom = zoom


class MapTracker:
    """Camera and marker state behind the map screen."""

    def __init__(self, camera: CameraState | None = None) -> None:
        self.camera = camera or CameraState()
        self.search_error: str | None = None

    def markers(self, apps: Iterable[ScholarshipApplication]) -> list[ScholarshipApplication]:
        return [app for app in apps if app.has_location]

    def focus_marker(self, app: ScholarshipApplication) -> ScholarshipApplication:
        if not app.has_location:
            raise ValueError(f"Application {app.id} has no location.")
        self.camera.move_to(GeoPoint(app.latitude, app.longitude), MARKER_ZOOM)
        return app

    def reset(self) -> None:
        self.camera.move_to(GeoPoint(*DEFAULT_CENTER), DEFAULT_ZOOM)
        self.search_error = None

    def search(self, query: str, geocoder: Any) -> GeoPoint | None:
        """`geocoder` is anything with `lookup(query) -> GeoPoint | None`."""
        if not query.strip():
            self.search_error = None
            return None
        try:
            point = geocoder.lookup(query)
        except GeocodingError as exc:
            logger.warning("Location search for %r failed: %s", query, exc)
            self.search_error = f"Location search failed: {exc}"
            return None

        self.search_error = None
        if point is None:
            logger.info("Location search for %r returned no results", query)
            return None
        self.camera.move_to(point, SEARCH_ZOOM)
        return point
