"""Supabase Auth (GoTrue) adapter."""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from supabase import AuthError, Client

from family_checkin.domain.sessions import AuthSession, AuthUser
from family_checkin.services.auth import AuthFailure, AuthGateway

SESSION_MISSING_MESSAGE = "Auth session missing"


@dataclass
class SupabaseAuthGateway(AuthGateway):
    """Email/password auth against Supabase.

    The client must not persist sessions; every call passes tokens explicitly.
    """

    client: Client

    def sign_in(self, email: str, password: str) -> AuthSession:
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as exc:
            raise _failure(exc) from exc
        return _to_session(response.session)

    def sign_up(self, email: str, password: str) -> AuthSession | None:
        try:
            response = self.client.auth.sign_up({"email": email, "password": password})
        except AuthError as exc:
            raise _failure(exc) from exc
        if response.session is None:
            return None
        return _to_session(response.session)

    def get_user(self, access_token: str) -> AuthUser:
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError as exc:
            raise _failure(exc) from exc
        if response is None or response.user is None:
            raise AuthFailure(SESSION_MISSING_MESSAGE)
        return _to_user(response.user)

    def refresh(self, refresh_token: str) -> AuthSession:
        if not refresh_token:
            raise AuthFailure(SESSION_MISSING_MESSAGE)
        try:
            response = self.client.auth.refresh_session(refresh_token)
        except AuthError as exc:
            raise _failure(exc) from exc
        return _to_session(response.session)

    def sign_out(self, access_token: str) -> None:
        try:
            self.client.auth.admin.sign_out(access_token)
        except AuthError as exc:
            raise _failure(exc) from exc


def _failure(exc: AuthError) -> AuthFailure:
    message = getattr(exc, "message", None) or str(exc)
    return AuthFailure(message)


def _to_session(session: Any) -> AuthSession:
    if session is None:
        raise AuthFailure(SESSION_MISSING_MESSAGE)
    return AuthSession(
        user=_to_user(session.user),
        access_token=session.access_token,
        refresh_token=session.refresh_token,
    )


def _to_user(user: Any) -> AuthUser:
    return AuthUser(id=UUID(str(user.id)), email=str(user.email or ""))
