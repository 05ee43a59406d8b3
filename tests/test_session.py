from __future__ import annotations

import pytest

from scholartrack.api.client import ApiError
from scholartrack.domain.models import AppStatus, AuthResult, ScholarshipApplication
from scholartrack.geo.camera import DEFAULT_CENTER, DEFAULT_ZOOM, MARKER_ZOOM
from scholartrack.state.auth import AuthState
from scholartrack.state.session import AppSession

_LOCATED = ScholarshipApplication(
    id="5",
    name="Coastal Science Grant",
    provider="Dagupan Foundation",
    deadline="2026-04-01",
    status=AppStatus.SUBMITTED,
    latitude=16.043,
    longitude=120.333,
)


class _FakeApi:
    def __init__(self, login_result: AuthResult, scholarships: list | Exception) -> None:
        self.login_result = login_result
        self.scholarships = scholarships
        self.fetched_for: list[str] = []

    def login(self, request):  # noqa: ANN001, ANN201
        return self.login_result

    def signup(self, request):  # noqa: ANN001, ANN201
        return AuthResult(status="success", message="created")

    def get_scholarships(self, user_id):  # noqa: ANN001, ANN201
        self.fetched_for.append(user_id)
        if isinstance(self.scholarships, Exception):
            raise self.scholarships
        return list(self.scholarships)


def _success() -> AuthResult:
    return AuthResult(
        status="success",
        message="ok",
        user_id="31",
        first_name="Jose",
        last_name="Reyes",
        email="jose@example.com",
    )


def test_login_populates_applicant_and_fetches_their_applications() -> None:
    api = _FakeApi(_success(), [_LOCATED])
    session = AppSession(api)

    session.auth.login("jose@example.com", "pw")
    applicant = session.complete_login()

    assert session.auth.auth_state is AuthState.AUTHENTICATED
    assert applicant is not None
    assert session.applicant.username == "Jose Reyes"
    assert session.is_signed_in is True
    assert api.fetched_for == ["31"]
    assert session.scholarships.scholarships == [_LOCATED]


def test_failed_login_leaves_session_empty() -> None:
    api = _FakeApi(AuthResult(status="error", message="Account not found"), [_LOCATED])
    session = AppSession(api)

    session.auth.login("nobody@example.com", "pw")

    assert session.complete_login() is None
    assert session.applicant is None
    assert session.auth.error_message == "Account not found"
    assert api.fetched_for == []


def test_signup_then_complete_login_starts_session() -> None:
    api = _FakeApi(_success(), [])
    session = AppSession(api)

    session.auth.signup("Jose", "Reyes", "jose@example.com", "pw")

    assert session.complete_login() is not None
    assert session.applicant.id == "31"


def test_fetch_failure_after_login_keeps_session_with_error() -> None:
    session = AppSession(_FakeApi(_success(), ApiError("no route to host")))
    session.auth.login("jose@example.com", "pw")

    session.complete_login()

    assert session.applicant is not None
    assert session.scholarships.scholarships == []
    assert session.scholarships.error_message == "Failed to load scholarships: no route to host"
    assert session.refresh() is False


def test_update_avatar_requires_applicant() -> None:
    session = AppSession(_FakeApi(_success(), []))

    with pytest.raises(RuntimeError):
        session.update_avatar("data:image/png;base64,AAAA")

    session.auth.login("jose@example.com", "pw")
    session.complete_login()
    updated = session.update_avatar("data:image/png;base64,AAAA")

    assert updated.avatar_uri == "data:image/png;base64,AAAA"
    assert session.applicant.avatar_uri == "data:image/png;base64,AAAA"
    assert session.applicant.email == "jose@example.com"


def test_marker_selection_focuses_camera_and_dismiss_resets_it() -> None:
    session = AppSession(_FakeApi(_success(), [_LOCATED]))

    session.select_marker(_LOCATED)

    assert session.selected == _LOCATED
    assert session.map.camera.zoom == MARKER_ZOOM
    assert session.map.camera.center.latitude == pytest.approx(16.043)

    session.dismiss_selection()

    assert session.selected is None
    assert session.map.camera.zoom == DEFAULT_ZOOM
    assert (session.map.camera.center.latitude, session.map.camera.center.longitude) == DEFAULT_CENTER


def test_logout_clears_everything() -> None:
    session = AppSession(_FakeApi(_success(), [_LOCATED]))
    session.auth.login("jose@example.com", "pw")
    session.complete_login()
    session.select(_LOCATED)

    session.logout()

    assert session.applicant is None
    assert session.selected is None
    assert session.scholarships.scholarships == []
    assert session.auth.auth_state is AuthState.IDLE
    assert session.auth.login_response is None
    assert session.refresh() is False


def test_logout_drops_location_search_warning() -> None:
    session = AppSession(_FakeApi(_success(), [_LOCATED]))
    session.map.search_error = "Location search failed: down"

    session.logout()

    assert session.map.search_error is None
