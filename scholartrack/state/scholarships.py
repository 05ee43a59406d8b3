from __future__ import annotations

import logging
from typing import Any

from scholartrack.api.client import ApiError
from scholartrack.domain.models import AppStatus, ScholarshipApplication

logger = logging.getLogger(__name__)


class ScholarshipViewModel:
    def __init__(self, api: Any) -> None:
        self._api = api
        self.scholarships: list[ScholarshipApplication] = []
        self.error_message: str | None = None

    def fetch_scholarships(self, user_id: str) -> bool:
        try:
            applications = self._api.get_scholarships(user_id)
        except ApiError as exc:
            # The previous list stays on screen; the error stays until a fetch succeeds.
            logger.warning("Fetching scholarships for user %s failed: %s", user_id, exc)
            self.error_message = f"Failed to load scholarships: {exc}"
            return False

        self.scholarships = list(applications)
        self.error_message = None
        return True

    def find(self, app_id: str) -> ScholarshipApplication | None:
        for application in self.scholarships:
            if application.id == app_id:
                return application
        return None

    def override_status(self, app_id: str, status: AppStatus) -> ScholarshipApplication:
        """Change a status locally; the server is never told."""
        for index, application in enumerate(self.scholarships):
            if application.id == app_id:
                updated = application.with_status(status)
                self.scholarships[index] = updated
                return updated
        raise KeyError(app_id)

    def clear(self) -> None:
        self.scholarships = []
        self.error_message = None
