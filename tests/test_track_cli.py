from __future__ import annotations

import pytest

from scholartrack.domain.models import AppStatus, AuthResult, ScholarshipApplication
from scholartrack.geo.camera import MapTracker
from scholartrack.geo.geocoding import GeocodingError, GeoPoint
from scholartrack.state.session import AppSession
from scripts.track import format_application, parse_args, run_geocode, run_list, run_signup


def _apps() -> list[ScholarshipApplication]:
    return [
        ScholarshipApplication(
            id="1", name="Alpha Grant", provider="Org A", deadline="2026-01-10", status=AppStatus.APPROVED
        ),
        ScholarshipApplication(
            id="2",
            name="Beta Grant",
            provider="Org B",
            deadline="2026-02-10",
            status=AppStatus.PENDING,
            latitude=16.0,
            longitude=120.3,
        ),
    ]


class _FakeApi:
    def __init__(self, login_result: AuthResult) -> None:
        self.login_result = login_result

    def login(self, request):  # noqa: ANN001, ANN201
        return self.login_result

    def signup(self, request):  # noqa: ANN001, ANN201
        return AuthResult(status="success", message="created")

    def get_scholarships(self, user_id):  # noqa: ANN001, ANN201
        return _apps()


class _FakeGeocoder:
    def __init__(self, result) -> None:  # noqa: ANN001
        self.result = result

    def lookup(self, query: str):  # noqa: ANN201
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


_OK = AuthResult(status="success", message="", user_id="3", first_name="Rina", last_name="Lopez")


def test_parse_args_reads_status_filter() -> None:
    args = parse_args(["--base-url", "http://x/", "list", "--email", "a@b.c", "--password", "pw", "--status", "approved"])

    assert args.command == "list"
    assert args.status is AppStatus.APPROVED
    assert args.base_url == "http://x/"


def test_parse_args_rejects_unknown_status() -> None:
    with pytest.raises(SystemExit):
        parse_args(["list", "--email", "a@b.c", "--password", "pw", "--status", "lost"])


def test_run_list_prints_only_matching_status(capsys) -> None:
    exit_code = run_list(AppSession(_FakeApi(_OK)), email="a@b.c", password="pw", status=AppStatus.PENDING)

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "Welcome back, Rina Lopez" in output
    assert "Pending: 1  Approved: 1  Total: 2" in output
    assert "Beta Grant" in output
    assert "Alpha Grant" not in output


def test_run_list_fails_on_rejected_login(capsys) -> None:
    api = _FakeApi(AuthResult(status="error", message="Wrong password"))

    assert run_list(AppSession(api), email="a@b.c", password="pw", status=None) == 1
    assert "Wrong password" in capsys.readouterr().err


def test_run_signup_logs_in(capsys) -> None:
    assert run_signup(AppSession(_FakeApi(_OK)), first_name="Rina", last_name="Lopez", email="a@b.c", password="pw") == 0
    assert "Rina Lopez (id=3)" in capsys.readouterr().out


def test_run_geocode_reports_points_and_failures(capsys) -> None:
    assert run_geocode(MapTracker(), _FakeGeocoder(GeoPoint(16.5, 120.25)), "Lingayen") == 0
    assert "16.500000,120.250000" in capsys.readouterr().out

    assert run_geocode(MapTracker(), _FakeGeocoder(None), "Nowhere") == 1
    assert run_geocode(MapTracker(), _FakeGeocoder(GeocodingError("offline")), "Lingayen") == 1
    assert "Location search failed: offline" in capsys.readouterr().err


def test_format_application_marks_missing_location() -> None:
    first, second = _apps()

    assert format_application(first).endswith("[-]")
    assert format_application(second).endswith("[16.0000,120.3000]")
