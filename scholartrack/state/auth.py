from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable

from scholartrack.api.client import ApiError
from scholartrack.domain.models import AuthResult, LoginRequest, SignUpRequest

logger = logging.getLogger(__name__)


class AuthState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ERROR = "error"


class AuthViewModel:
    """Login/signup state for one UI session.

    `api` is anything exposing `login(LoginRequest)` and `signup(SignUpRequest)`
    returning `AuthResult`, normally a `ScholarTrackApi`.
    """

    def __init__(self, api: Any) -> None:
        self._api = api
        self.auth_state = AuthState.IDLE
        self.error_message: str | None = None
        self.login_response: AuthResult | None = None
        self._subscribers: list[Callable[[AuthViewModel], None]] = []

    def subscribe(self, callback: Callable[[AuthViewModel], None]) -> None:
        self._subscribers.append(callback)

    def login(self, email: str, password: str) -> None:
        self._set_state(AuthState.LOADING)
        try:
            response = self._api.login(LoginRequest(email=email, password=password))
        except ApiError as exc:
            logger.warning("Login request failed: %s", exc)
            self._fail(f"Login failed: {exc}")
            return

        if response.is_success:
            logger.info("Login succeeded for user %s", response.user_id)
            self.login_response = response
            self.error_message = None
            self._set_state(AuthState.AUTHENTICATED)
        else:
            logger.info("Login rejected: %s", response.message)
            self._fail(response.message)

    def signup(self, first_name: str, last_name: str, email: str, password: str) -> None:
        self._set_state(AuthState.LOADING)
        request = SignUpRequest(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password,
        )
        try:
            response = self._api.signup(request)
        except ApiError as exc:
            logger.warning("Sign-up request failed: %s", exc)
            self._fail(f"Sign-up failed: {exc}")
            return

        if response.is_success:
            logger.info("Sign-up succeeded, logging in")
            self.login(email, password)
        else:
            logger.info("Sign-up rejected: %s", response.message)
            self._fail(response.message)

    def reset_state(self) -> None:
        self.error_message = None
        self.login_response = None
        self._set_state(AuthState.IDLE)

    def _fail(self, message: str) -> None:
        self.error_message = message
        self._set_state(AuthState.ERROR)

    def _set_state(self, state: AuthState) -> None:
        self.auth_state = state
        for callback in list(self._subscribers):
            callback(self)
