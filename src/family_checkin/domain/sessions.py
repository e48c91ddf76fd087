"""Domain models for authenticated sessions."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


@dataclass(frozen=True)
class AuthUser:
    """The identity behind a session."""

    id: UUID
    email: str


@dataclass(frozen=True)
class AuthSession:
    """An authenticated session issued by the auth service."""

    user: AuthUser
    access_token: str
    refresh_token: str


class SessionStatus(StrEnum):
    LOADING = "loading"
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class SessionEvent(StrEnum):
    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


@dataclass(frozen=True)
class SessionState:
    """Snapshot of the current session value."""

    status: SessionStatus
    session: AuthSession | None = None

    @property
    def user(self) -> AuthUser | None:
        return self.session.user if self.session else None


LOADING_STATE = SessionState(status=SessionStatus.LOADING)
ANONYMOUS_STATE = SessionState(status=SessionStatus.ANONYMOUS)


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a sign-in or sign-up attempt."""

    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
