"""Records exchanged with the ScholarTrack backend."""

from scholartrack.domain.avatar import avatar_data_uri
from scholartrack.domain.models import (
    Applicant,
    AppStatus,
    AuthResult,
    LoginRequest,
    ScholarshipApplication,
    SignUpRequest,
)

__all__ = [
    "AppStatus",
    "Applicant",
    "AuthResult",
    "LoginRequest",
    "ScholarshipApplication",
    "SignUpRequest",
    "avatar_data_uri",
]
