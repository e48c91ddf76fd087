"""Session provider backed by an external auth service."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from family_checkin.domain.sessions import (
    ANONYMOUS_STATE,
    LOADING_STATE,
    AuthResult,
    AuthSession,
    AuthUser,
    SessionEvent,
    SessionState,
    SessionStatus,
)

logger = logging.getLogger(__name__)

SessionListener = Callable[[SessionEvent, SessionState], None]


class AuthFailure(Exception):
    """An error reported by the auth service, with a user-facing message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthGateway(Protocol):
    """Interface for email/password auth."""

    def sign_in(self, email: str, password: str) -> AuthSession:
        """Sign in and return the new session."""

    def sign_up(self, email: str, password: str) -> AuthSession | None:
        """Create an account; returns a session if the service issued one."""

    def get_user(self, access_token: str) -> AuthUser:
        """Return the user for a valid access token."""

    def refresh(self, refresh_token: str) -> AuthSession:
        """Exchange a refresh token for a new session."""

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind the access token."""


@dataclass
class Subscription:
    """Handle returned by ``SessionStore.subscribe``."""

    store: "SessionStore"
    listener: SessionListener

    def unsubscribe(self) -> None:
        self.store.remove_listener(self.listener)


@dataclass
class SessionStore:
    """Observable holder for the current session value."""

    state: SessionState = LOADING_STATE
    _listeners: list[SessionListener] = field(default_factory=list)

    def subscribe(self, listener: SessionListener) -> Subscription:
        self._listeners.append(listener)
        return Subscription(store=self, listener=listener)

    def remove_listener(self, listener: SessionListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def set(self, event: SessionEvent, state: SessionState) -> None:
        """Replace the value and notify listeners before returning."""
        self.state = state
        for listener in list(self._listeners):
            listener(event, state)


@dataclass
class SessionProvider:
    """Exposes the current user and the sign-in/sign-up/sign-out operations."""

    gateway: AuthGateway
    store: SessionStore = field(default_factory=SessionStore)

    @property
    def current(self) -> SessionState:
        return self.store.state

    @property
    def user(self) -> AuthUser | None:
        return self.store.state.user

    def subscribe(self, listener: SessionListener) -> Subscription:
        return self.store.subscribe(listener)

    def initialize(self, access_token: str | None, refresh_token: str | None) -> None:
        """Restore the session from stored tokens.

        Transport failures leave the state as loading.
        """
        if not access_token and not refresh_token:
            self.store.set(SessionEvent.INITIAL_SESSION, ANONYMOUS_STATE)
            return
        try:
            event, session = self._restore(access_token, refresh_token)
        except AuthFailure as exc:
            logger.info("Stored session rejected: %s", exc.message)
            self.store.set(SessionEvent.SIGNED_OUT, ANONYMOUS_STATE)
            return
        except httpx.HTTPError:
            logger.exception("Failed to restore session")
            return
        self._authenticated(event, session)

    def sign_in(self, email: str, password: str) -> AuthResult:
        try:
            session = self.gateway.sign_in(email, password)
        except AuthFailure as exc:
            return AuthResult(error=exc.message)
        self._authenticated(SessionEvent.SIGNED_IN, session)
        logger.info("User signed in", extra={"user_id": str(session.user.id)})
        return AuthResult()

    def sign_up(self, email: str, password: str) -> AuthResult:
        """Create an account. The user still has to sign in afterwards."""
        try:
            self.gateway.sign_up(email, password)
        except AuthFailure as exc:
            return AuthResult(error=exc.message)
        return AuthResult()

    def sign_out(self) -> None:
        session = self.store.state.session
        if session is not None:
            try:
                self.gateway.sign_out(session.access_token)
            except (AuthFailure, httpx.HTTPError):
                logger.exception(
                    "Remote sign-out failed", extra={"user_id": str(session.user.id)}
                )
        self.store.set(SessionEvent.SIGNED_OUT, ANONYMOUS_STATE)

    def _restore(
        self, access_token: str | None, refresh_token: str | None
    ) -> tuple[SessionEvent, AuthSession]:
        if access_token:
            try:
                user = self.gateway.get_user(access_token)
            except AuthFailure:
                if not refresh_token:
                    raise
            else:
                return SessionEvent.INITIAL_SESSION, AuthSession(
                    user=user,
                    access_token=access_token,
                    refresh_token=refresh_token or "",
                )
        return SessionEvent.TOKEN_REFRESHED, self.gateway.refresh(refresh_token or "")

    def _authenticated(self, event: SessionEvent, session: AuthSession) -> None:
        self.store.set(
            event, SessionState(status=SessionStatus.AUTHENTICATED, session=session)
        )
