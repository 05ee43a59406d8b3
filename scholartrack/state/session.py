from __future__ import annotations

import logging
from typing import Any

from scholartrack.domain.models import Applicant, ScholarshipApplication
from scholartrack.geo.camera import MapTracker
from scholartrack.state.auth import AuthState, AuthViewModel
from scholartrack.state.scholarships import ScholarshipViewModel

logger = logging.getLogger(__name__)


class AppSession:
    """Everything one signed-in user sees: applicant, auth, list, selection and map."""

    def __init__(self, api: Any) -> None:
        self.auth = AuthViewModel(api)
        self.scholarships = ScholarshipViewModel(api)
        self.map = MapTracker()
        self.applicant: Applicant | None = None
        self.selected: ScholarshipApplication | None = None

    @property
    def is_signed_in(self) -> bool:
        return self.applicant is not None

    def complete_login(self) -> Applicant | None:
        if self.auth.auth_state is not AuthState.AUTHENTICATED or self.auth.login_response is None:
            return None
        self.applicant = Applicant.from_auth_result(self.auth.login_response)
        logger.info("Session started for applicant %s", self.applicant.id)
        self.scholarships.fetch_scholarships(self.applicant.id)
        return self.applicant

    def refresh(self) -> bool:
        if self.applicant is None:
            return False
        return self.scholarships.fetch_scholarships(self.applicant.id)

    def update_avatar(self, avatar_uri: str) -> Applicant:
        if self.applicant is None:
            raise RuntimeError("Cannot update the avatar without a signed-in applicant.")
        self.applicant = self.applicant.with_avatar(avatar_uri)
        return self.applicant

    def select(self, app: ScholarshipApplication) -> None:
        self.selected = app

    def select_marker(self, app: ScholarshipApplication) -> None:
        self.select(self.map.focus_marker(app))

    def dismiss_selection(self) -> None:
        self.selected = None
        self.map.reset()

    def logout(self) -> None:
        if self.applicant is not None:
            logger.info("Session ended for applicant %s", self.applicant.id)
        self.auth.reset_state()
        self.applicant = None
        self.selected = None
        self.scholarships.clear()
        self.map.reset()
