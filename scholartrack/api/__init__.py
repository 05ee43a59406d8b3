from __future__ import annotations

from .client import ApiError, ScholarTrackApi
from .http import ApiHttpClient

__all__ = [
    "ApiError",
    "ApiHttpClient",
    "ScholarTrackApi",
]
