"""Tests for the check-in and auth form state."""

from uuid import uuid4

from family_checkin.domain.sessions import AuthUser, SessionStatus
from family_checkin.services.auth import SessionProvider
from family_checkin.services.checkins import CheckinService, CheckinStoreError
from family_checkin.services.forms import (
    SAVE_ERROR_MESSAGE,
    SIGN_UP_SUCCESS_MESSAGE,
    UNEXPECTED_AUTH_ERROR,
    AuthForm,
    AuthMode,
    AuthOutcome,
    CheckinForm,
    FormStatus,
)
from tests.conftest import (
    INVALID_CREDENTIALS,
    FakeAuthGateway,
    InMemoryCheckinRepository,
)


def test_checkin_form_requires_mood() -> None:
    repository = InMemoryCheckinRepository()
    form = CheckinForm(parent_name="Mom", mood="")

    status = form.submit(CheckinService(repository), user=None)

    assert status is FormStatus.INVALID
    assert "mood" in form.errors
    assert repository.inserts == []


def test_checkin_form_requires_parent_name() -> None:
    repository = InMemoryCheckinRepository()
    form = CheckinForm(parent_name="   ", mood="great")

    status = form.submit(CheckinService(repository), user=None)

    assert status is FormStatus.INVALID
    assert "parent_name" in form.errors
    assert repository.inserts == []


def test_checkin_form_rejects_unknown_mood() -> None:
    form = CheckinForm(parent_name="Mom", mood="ecstatic")

    assert "mood" in form.validate()


def test_checkin_form_saves_once_and_resets() -> None:
    repository = InMemoryCheckinRepository()
    user = AuthUser(id=uuid4(), email="sam@example.com")
    form = CheckinForm(parent_name="Mom", mood="great", notes="Went for a walk")

    status = form.submit(CheckinService(repository), user=user)

    assert status is FormStatus.SAVED
    assert len(repository.inserts) == 1
    assert repository.inserts[0].user_id == user.id
    assert form.submitted_for == "Mom"
    assert (form.parent_name, form.mood, form.notes) == ("", "", "")
    assert form.submitting is False


def test_checkin_form_keeps_fields_on_failure() -> None:
    repository = InMemoryCheckinRepository(fail_with=CheckinStoreError("down"))
    form = CheckinForm(parent_name="Dad", mood="concerning", notes="Skipped dinner")

    status = form.submit(CheckinService(repository), user=None)

    assert status is FormStatus.FAILED
    assert form.error == SAVE_ERROR_MESSAGE
    assert (form.parent_name, form.mood, form.notes) == (
        "Dad",
        "concerning",
        "Skipped dinner",
    )
    assert form.submitted_for is None
    assert form.submitting is False


def test_checkin_form_ignores_submit_while_in_flight() -> None:
    repository = InMemoryCheckinRepository()
    form = CheckinForm(parent_name="Mom", mood="good", submitting=True)

    status = form.submit(CheckinService(repository), user=None)

    assert status is FormStatus.BUSY
    assert repository.inserts == []


def test_auth_form_sign_in_success() -> None:
    gateway = FakeAuthGateway()
    gateway.add_account("sam@example.com", "secret123")
    provider = SessionProvider(gateway)
    form = AuthForm(email="sam@example.com", password="secret123")

    outcome = form.submit(provider)

    assert outcome is AuthOutcome.SIGNED_IN
    assert form.message is None
    assert provider.current.status is SessionStatus.AUTHENTICATED


def test_auth_form_shows_service_message_on_rejection() -> None:
    provider = SessionProvider(FakeAuthGateway())
    form = AuthForm(email="sam@example.com", password="wrong-pass")

    outcome = form.submit(provider)

    assert outcome is AuthOutcome.REJECTED
    assert form.message == INVALID_CREDENTIALS
    assert form.is_error is True
    assert provider.user is None


def test_auth_form_validates_before_calling_service() -> None:
    gateway = FakeAuthGateway()
    form = AuthForm(mode=AuthMode.SIGN_UP, email="sam@example.com", password="123")

    outcome = form.submit(SessionProvider(gateway))

    assert outcome is AuthOutcome.INVALID
    assert form.is_error is True
    assert gateway.accounts == {}


def test_auth_form_sign_up_switches_to_sign_in() -> None:
    gateway = FakeAuthGateway()
    provider = SessionProvider(gateway)
    form = AuthForm(
        mode=AuthMode.SIGN_UP, email="new@example.com", password="secret123"
    )

    outcome = form.submit(provider)

    assert outcome is AuthOutcome.SIGNED_UP
    assert form.message == SIGN_UP_SUCCESS_MESSAGE
    assert form.is_error is False
    assert form.mode is AuthMode.SIGN_IN
    assert form.password == ""
    assert "new@example.com" in gateway.accounts
    assert provider.user is None


def test_auth_form_reports_unexpected_errors() -> None:
    gateway = FakeAuthGateway(unavailable=RuntimeError("boom"))
    form = AuthForm(email="sam@example.com", password="secret123")

    outcome = form.submit(SessionProvider(gateway))

    assert outcome is AuthOutcome.FAILED
    assert form.message == UNEXPECTED_AUTH_ERROR
