from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping

DEFAULT_THEME_COLOR = "#1E3A8A"
DEFAULT_APPLICANT_EMAIL = "applicant@example.com"
DEFAULT_ROLE = "applicant"


class AppStatus(Enum):
    SUBMITTED = ("Submitted", "#2563EB")
    PENDING = ("Pending", "#D97706")
    APPROVED = ("Approved", "#059669")
    DECLINED = ("Declined", "#DC2626")

    def __init__(self, label: str, color: str) -> None:
        self.label = label
        self.color = color

    @classmethod
    def parse(cls, value: Any) -> AppStatus:
        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        for status in cls:
            if normalized in (status.name.lower(), status.label.lower()):
                return status
        raise ValueError(f"Unknown application status: {value!r}")


def _required_text(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        raise ValueError(f"Missing required field '{key}'.")
    return str(value).strip()


def _optional_text(payload: Mapping[str, Any], key: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_coordinate(value: Any) -> float:
    if value is None:
        return 0.0
    try:
        coordinate = float(value)
    except (TypeError, ValueError):
        return 0.0
    return coordinate if math.isfinite(coordinate) else 0.0


@dataclass(frozen=True, slots=True)
class ScholarshipApplication:
    id: str
    name: str
    provider: str
    deadline: str
    status: AppStatus
    notes: str = ""
    latitude: float = 0.0
    longitude: float = 0.0

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> ScholarshipApplication:
        return cls(
            id=_required_text(payload, "scholarship_id"),
            name=_required_text(payload, "scholarship_name"),
            provider=_required_text(payload, "provider_name"),
            deadline=_required_text(payload, "deadline_date"),
            status=AppStatus.parse(payload.get("application_status")),
            notes=str(payload.get("scholarship_notes") or ""),
            latitude=_coerce_coordinate(payload.get("latitude")),
            longitude=_coerce_coordinate(payload.get("longitude")),
        )

    @property
    def has_location(self) -> bool:
        """A zero coordinate on either axis means the server sent no location."""
        return self.latitude != 0.0 and self.longitude != 0.0

    def with_status(self, status: AppStatus) -> ScholarshipApplication:
        return replace(self, status=status)


@dataclass(frozen=True, slots=True)
class AuthResult:
    status: str
    message: str
    user_id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    role: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> AuthResult:
        return cls(
            status=str(payload.get("status") or ""),
            message=str(payload.get("message") or ""),
            user_id=_optional_text(payload, "user_id"),
            first_name=_optional_text(payload, "first_name"),
            last_name=_optional_text(payload, "last_name"),
            email=_optional_text(payload, "email"),
            role=_optional_text(payload, "role"),
        )

    @property
    def is_success(self) -> bool:
        return self.status.strip().lower() == "success"


@dataclass(frozen=True, slots=True)
class Applicant:
    id: str
    username: str
    email: str
    role: str = DEFAULT_ROLE
    theme_color: str = DEFAULT_THEME_COLOR
    avatar_uri: str | None = None

    @classmethod
    def from_auth_result(cls, result: AuthResult) -> Applicant:
        full_name = " ".join(part for part in (result.first_name, result.last_name) if part)
        if result.role is None or result.role == "student":
            role = DEFAULT_ROLE
        else:
            role = result.role
        return cls(
            id=result.user_id or "0",
            username=full_name or result.email or "Applicant",
            email=result.email or DEFAULT_APPLICANT_EMAIL,
            role=role,
        )

    @property
    def initial(self) -> str:
        return self.username[:1].upper()

    def with_avatar(self, avatar_uri: str) -> Applicant:
        return replace(self, avatar_uri=avatar_uri)


@dataclass(frozen=True, slots=True)
class LoginRequest:
    email: str
    password: str

    def to_payload(self) -> dict[str, str]:
        return {"email": self.email, "pass": self.password}


@dataclass(frozen=True, slots=True)
class SignUpRequest:
    first_name: str
    last_name: str
    email: str
    password: str

    def to_payload(self) -> dict[str, str]:
        return {
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "pass": self.password,
        }
