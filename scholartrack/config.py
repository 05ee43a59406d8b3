from __future__ import annotations

import math
import os
from dataclasses import dataclass, replace
from typing import Any, Mapping

DEFAULT_BASE_URL = "http://192.168.254.100/"
DEFAULT_TIMEOUT_SECONDS = 20.0
DEFAULT_GEOCODER_URL = "https://nominatim.openstreetmap.org/"
DEFAULT_GEOCODER_REGION = "Pangasinan, Philippines"
DEFAULT_USER_AGENT = "ScholarTrack/0.1 (+https://localhost; contact=local)"

ENV_PREFIX = "SCHOLARTRACK_"


def _ensure_trailing_slash(url: str) -> str:
    stripped = url.strip()
    return stripped if stripped.endswith("/") else f"{stripped}/"


@dataclass(frozen=True, slots=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    geocoder_url: str = DEFAULT_GEOCODER_URL
    geocoder_region: str = DEFAULT_GEOCODER_REGION
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if not self.base_url.strip():
            raise ValueError("base_url must not be empty.")
        if not math.isfinite(self.timeout_seconds) or self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be a positive number.")
        object.__setattr__(self, "base_url", _ensure_trailing_slash(self.base_url))
        object.__setattr__(self, "geocoder_url", _ensure_trailing_slash(self.geocoder_url))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        values = os.environ if environ is None else environ
        return cls(
            base_url=values.get(f"{ENV_PREFIX}BASE_URL", DEFAULT_BASE_URL),
            timeout_seconds=_float_from_env(
                values, f"{ENV_PREFIX}TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS
            ),
            geocoder_url=values.get(f"{ENV_PREFIX}GEOCODER_URL", DEFAULT_GEOCODER_URL),
            geocoder_region=values.get(f"{ENV_PREFIX}GEOCODER_REGION", DEFAULT_GEOCODER_REGION),
            user_agent=values.get(f"{ENV_PREFIX}USER_AGENT", DEFAULT_USER_AGENT),
        )

    def with_overrides(self, **overrides: Any) -> Settings:
        """Apply non-None overrides, e.g. from CLI flags."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


def _float_from_env(values: Mapping[str, str], name: str, default: float) -> float:
    raw = values.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number (received {raw!r}).") from exc
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a positive number (received {raw!r}).")
    return value
