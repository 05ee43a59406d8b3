"""In-memory view state driven by the screens and the CLI."""

from scholartrack.state.auth import AuthState, AuthViewModel
from scholartrack.state.scholarships import ScholarshipViewModel
from scholartrack.state.session import AppSession
from scholartrack.state.tracker import applications_frame, dashboard_counts, filter_by_status

__all__ = [
    "AppSession",
    "AuthState",
    "AuthViewModel",
    "ScholarshipViewModel",
    "applications_frame",
    "dashboard_counts",
    "filter_by_status",
]
