from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from scholartrack.api.client import ScholarTrackApi
from scholartrack.config import Settings
from scholartrack.domain.models import AppStatus, ScholarshipApplication
from scholartrack.geo.camera import MapTracker
from scholartrack.geo.geocoding import NominatimGeocoder
from scholartrack.state.auth import AuthState
from scholartrack.state.session import AppSession
from scholartrack.state.tracker import dashboard_counts, filter_by_status

logger = logging.getLogger("track")


def _status_arg(value: str) -> AppStatus:
    try:
        return AppStatus.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Track scholarship applications from the command line.")
    parser.add_argument("--base-url", type=str, default=None, help="Backend base URL.")
    parser.add_argument("--timeout-seconds", type=float, default=None)
    parser.add_argument("--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="Login and list your applications.")
    list_parser.add_argument("--email", required=True)
    list_parser.add_argument("--password", required=True)
    list_parser.add_argument(
        "--status",
        type=_status_arg,
        default=None,
        help="Only show applications with this status (submitted, pending, approved, declined).",
    )

    signup_parser = subparsers.add_parser("signup", help="Create an account and sign in.")
    signup_parser.add_argument("--first-name", required=True)
    signup_parser.add_argument("--last-name", required=True)
    signup_parser.add_argument("--email", required=True)
    signup_parser.add_argument("--password", required=True)

    geocode_parser = subparsers.add_parser("geocode", help="Look up the coordinates of a location.")
    geocode_parser.add_argument("query")
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def format_application(app: ScholarshipApplication) -> str:
    location = f"{app.latitude:.4f},{app.longitude:.4f}" if app.has_location else "-"
    return f"{app.id:<8} {app.status.label:<10} {app.deadline:<12} {app.name} ({app.provider}) [{location}]"


def _authenticated_session(session: AppSession) -> bool:
    if session.auth.auth_state is not AuthState.AUTHENTICATED:
        print(f"Authentication failed: {session.auth.error_message}", file=sys.stderr)
        return False
    session.complete_login()
    return True


def run_list(session: AppSession, *, email: str, password: str, status: AppStatus | None) -> int:
    session.auth.login(email, password)
    if not _authenticated_session(session):
        return 1
    if session.scholarships.error_message:
        print(session.scholarships.error_message, file=sys.stderr)
        return 1

    apps = session.scholarships.scholarships
    counts = dashboard_counts(apps)
    print(f"Welcome back, {session.applicant.username}")
    print(f"Pending: {counts['pending']}  Approved: {counts['approved']}  Total: {counts['total']}")
    for app in filter_by_status(apps, status):
        print(format_application(app))
    return 0


def run_signup(
    session: AppSession, *, first_name: str, last_name: str, email: str, password: str
) -> int:
    session.auth.signup(first_name, last_name, email, password)
    if not _authenticated_session(session):
        return 1
    print(f"Signed up and logged in as {session.applicant.username} (id={session.applicant.id})")
    return 0


def run_geocode(tracker: MapTracker, geocoder: NominatimGeocoder, query: str) -> int:
    point = tracker.search(query, geocoder)
    if tracker.search_error:
        print(tracker.search_error, file=sys.stderr)
        return 1
    if point is None:
        print(f"No results for '{query}'.")
        return 1
    print(f"{point.latitude:.6f},{point.longitude:.6f}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = Settings.from_env().with_overrides(
        base_url=args.base_url,
        timeout_seconds=args.timeout_seconds,
    )
    logger.debug("Using backend %s", settings.base_url)

    if args.command == "geocode":
        geocoder = NominatimGeocoder.from_settings(settings)
        try:
            return run_geocode(MapTracker(), geocoder, args.query)
        finally:
            geocoder.http_client.close()

    api = ScholarTrackApi.from_settings(settings)
    try:
        session = AppSession(api)
        if args.command == "signup":
            return run_signup(
                session,
                first_name=args.first_name,
                last_name=args.last_name,
                email=args.email,
                password=args.password,
            )
        return run_list(session, email=args.email, password=args.password, status=args.status)
    finally:
        api.close()


if __name__ == "__main__":
    raise SystemExit(main())
