from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urljoin

import requests

from scholartrack.api.http import ApiHttpClient
from scholartrack.config import Settings
from scholartrack.domain.models import (
    AuthResult,
    LoginRequest,
    ScholarshipApplication,
    SignUpRequest,
)

logger = logging.getLogger(__name__)

SCHOLARSHIPS_ENDPOINT = "scholarships.php"
LOGIN_ENDPOINT = "login.php"
SIGNUP_ENDPOINT = "signup.php"
_LIST_ENVELOPE_KEYS = ("scholarships", "data")


class ApiError(Exception):
    """Raised when a backend call fails as a whole (transport, status or body)."""


class ScholarTrackApi:
    def __init__(self, base_url: str, http_client: ApiHttpClient | None = None) -> None:
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.http_client = http_client or ApiHttpClient()

    @classmethod
    def from_settings(cls, settings: Settings) -> ScholarTrackApi:
        http_client = ApiHttpClient(
            timeout_seconds=settings.timeout_seconds,
            user_agent=settings.user_agent,
        )
        return cls(settings.base_url, http_client)

    def close(self) -> None:
        self.http_client.close()

    def get_scholarships(self, user_id: str) -> list[ScholarshipApplication]:
        payload = self._call(
            "GET", SCHOLARSHIPS_ENDPOINT, params={"user_id": user_id}
        )
        rows = _unwrap_list(payload)
        try:
            applications = [ScholarshipApplication.from_payload(row) for row in rows]
        except (TypeError, ValueError, AttributeError) as exc:
            raise ApiError(f"Malformed scholarship record: {exc}") from exc
        logger.info("Fetched %d scholarship applications for user %s", len(applications), user_id)
        return applications

    def login(self, request: LoginRequest) -> AuthResult:
        return self._auth_call(LOGIN_ENDPOINT, request.to_payload())

    def signup(self, request: SignUpRequest) -> AuthResult:
        return self._auth_call(SIGNUP_ENDPOINT, request.to_payload())

    def _auth_call(self, endpoint: str, body: dict[str, str]) -> AuthResult:
        payload = self._call("POST", endpoint, json=body)
        if not isinstance(payload, dict):
            raise ApiError(f"Unexpected response from {endpoint}: expected a JSON object.")
        result = AuthResult.from_payload(payload)
        logger.info("%s answered status=%s", endpoint, result.status or "<empty>")
        return result

    def _call(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        url = urljoin(self.base_url, endpoint)
        try:
            if method == "GET":
                return self.http_client.get_json(url, params=params)
            return self.http_client.post_json(url, json or {})
        except requests.HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else "?"
            raise ApiError(f"Server responded with HTTP {status_code}") from exc
        except requests.RequestException as exc:
            raise ApiError(str(exc) or exc.__class__.__name__) from exc
        except ValueError as exc:
            raise ApiError(f"Invalid JSON from {endpoint}: {exc}") from exc


def _unwrap_list(payload: Any) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in _LIST_ENVELOPE_KEYS:
            value = payload.get(key)
            if isinstance(value, list):
                return value
    raise ApiError("Unexpected scholarships response: expected a JSON array.")
