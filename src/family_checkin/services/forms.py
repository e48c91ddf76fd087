"""Form state for the check-in entry and auth views."""

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from family_checkin.domain.checkins import parse_mood
from family_checkin.domain.sessions import AuthUser
from family_checkin.services.auth import SessionProvider
from family_checkin.services.checkins import CheckinService

logger = logging.getLogger(__name__)

SAVE_ERROR_MESSAGE = "Error saving check-in. Please try again."
UNEXPECTED_AUTH_ERROR = "An unexpected error occurred"
SIGN_UP_SUCCESS_MESSAGE = "Account created successfully! You can now sign in."
MIN_PASSWORD_LENGTH = 6


class FormStatus(StrEnum):
    SAVED = "saved"
    INVALID = "invalid"
    BUSY = "busy"
    FAILED = "failed"


@dataclass
class CheckinForm:
    """Fields and submission state for a new check-in."""

    parent_name: str = ""
    mood: str = ""
    notes: str = ""
    submitting: bool = False
    submitted_for: str | None = None
    errors: dict[str, str] = field(default_factory=dict)
    error: str | None = None

    def validate(self) -> dict[str, str]:
        errors = {}
        if not self.parent_name.strip():
            errors["parent_name"] = "Please enter who you checked in on."
        if parse_mood(self.mood) is None:
            errors["mood"] = "Please select a mood."
        return errors

    def submit(self, service: CheckinService, user: AuthUser | None) -> FormStatus:
        """Validate, then store the check-in once."""
        if self.submitting:
            return FormStatus.BUSY
        self.error = None
        self.errors = self.validate()
        mood = parse_mood(self.mood)
        if self.errors or mood is None:
            return FormStatus.INVALID

        self.submitting = True
        try:
            service.record_checkin(
                parent_name=self.parent_name,
                mood=mood,
                notes=self.notes,
                user=user,
            )
        except Exception:
            logger.exception("Error saving check-in")
            self.error = SAVE_ERROR_MESSAGE
            return FormStatus.FAILED
        finally:
            self.submitting = False

        self.submitted_for = self.parent_name.strip()
        self.parent_name = ""
        self.mood = ""
        self.notes = ""
        return FormStatus.SAVED


class AuthMode(StrEnum):
    SIGN_IN = "sign_in"
    SIGN_UP = "sign_up"


class AuthOutcome(StrEnum):
    SIGNED_IN = "signed_in"
    SIGNED_UP = "signed_up"
    INVALID = "invalid"
    REJECTED = "rejected"
    FAILED = "failed"


@dataclass
class AuthForm:
    """Fields and outcome of the sign-in/sign-up form."""

    mode: AuthMode = AuthMode.SIGN_IN
    email: str = ""
    password: str = ""
    message: str | None = None
    is_error: bool = False

    def validate(self) -> str | None:
        if not self.email.strip():
            return "Please enter your email."
        if len(self.password) < MIN_PASSWORD_LENGTH:
            return f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
        return None

    def submit(self, provider: SessionProvider) -> AuthOutcome:
        """Run the current mode against the session provider."""
        self.message = None
        self.is_error = False
        invalid = self.validate()
        if invalid:
            self._fail(invalid)
            return AuthOutcome.INVALID

        email = self.email.strip()
        try:
            if self.mode is AuthMode.SIGN_IN:
                result = provider.sign_in(email, self.password)
            else:
                result = provider.sign_up(email, self.password)
        except Exception:
            logger.exception("Unexpected auth error", extra={"mode": str(self.mode)})
            self._fail(UNEXPECTED_AUTH_ERROR)
            return AuthOutcome.FAILED

        if not result.ok:
            self._fail(result.error or UNEXPECTED_AUTH_ERROR)
            return AuthOutcome.REJECTED
        if self.mode is AuthMode.SIGN_UP:
            self.message = SIGN_UP_SUCCESS_MESSAGE
            self.mode = AuthMode.SIGN_IN
            self.password = ""
            return AuthOutcome.SIGNED_UP
        return AuthOutcome.SIGNED_IN

    def _fail(self, message: str) -> None:
        self.message = message
        self.is_error = True
