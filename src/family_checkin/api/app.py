"""FastAPI application factory."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi import Depends, FastAPI, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from family_checkin.api.views import (
    LOAD_ERROR_MESSAGE,
    render_auth,
    render_calendar,
    render_entry,
    render_history,
    render_loading,
)
from family_checkin.app_logging import configure_logging
from family_checkin.containers import AppContainer
from family_checkin.domain.calendar import MonthRef
from family_checkin.domain.sessions import SessionEvent, SessionState, SessionStatus
from family_checkin.services.auth import SessionProvider
from family_checkin.services.calendar import CalendarState
from family_checkin.services.forms import (
    SAVE_ERROR_MESSAGE,
    AuthForm,
    AuthMode,
    AuthOutcome,
    CheckinForm,
    FormStatus,
)
from family_checkin.services.navigation import View, resolve_redirect

ACCESS_COOKIE = "checkin-access-token"
REFRESH_COOKIE = "checkin-refresh-token"

_FORM_STATUS_CODES = {
    FormStatus.SAVED: status.HTTP_200_OK,
    FormStatus.INVALID: status.HTTP_400_BAD_REQUEST,
    FormStatus.BUSY: status.HTTP_409_CONFLICT,
    FormStatus.FAILED: status.HTTP_502_BAD_GATEWAY,
}
_AUTH_STATUS_CODES = {
    AuthOutcome.SIGNED_UP: status.HTTP_200_OK,
    AuthOutcome.INVALID: status.HTTP_400_BAD_REQUEST,
    AuthOutcome.REJECTED: status.HTTP_401_UNAUTHORIZED,
    AuthOutcome.FAILED: status.HTTP_502_BAD_GATEWAY,
}


@dataclass
class RequestSession:
    """Session provider for one request plus the cookie changes it produced."""

    provider: SessionProvider
    secure_cookies: bool
    changed: SessionState | None = None

    def on_change(self, event: SessionEvent, state: SessionState) -> None:
        if event is not SessionEvent.INITIAL_SESSION:
            self.changed = state

    def apply_cookies(self, response: Response) -> Response:
        """Write or clear the token cookies after a session change."""
        if self.changed is None:
            return response
        session = self.changed.session
        if session is None:
            response.delete_cookie(ACCESS_COOKIE)
            response.delete_cookie(REFRESH_COOKIE)
            return response
        for name, value in (
            (ACCESS_COOKIE, session.access_token),
            (REFRESH_COOKIE, session.refresh_token),
        ):
            response.set_cookie(
                name,
                value,
                httponly=True,
                samesite="lax",
                secure=self.secure_cookies,
            )
        return response


def get_request_session(request: Request) -> Iterator[RequestSession]:
    """Restore the session from cookies for the duration of a request."""
    container: AppContainer = request.app.state.container
    provider = SessionProvider(container.auth_gateway)
    request_session = RequestSession(
        provider=provider, secure_cookies=container.settings.secure_cookies
    )
    subscription = provider.subscribe(request_session.on_change)
    try:
        provider.initialize(
            request.cookies.get(ACCESS_COOKIE), request.cookies.get(REFRESH_COOKIE)
        )
        yield request_session
    finally:
        subscription.unsubscribe()


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get(View.ENTRY.value, response_class=HTMLResponse)
    async def entry_view(
        session: RequestSession = Depends(get_request_session),
    ) -> Response:
        """Render an empty check-in form."""
        return session.apply_cookies(HTMLResponse(render_entry(CheckinForm())))

    @app.post(View.ENTRY.value, response_class=HTMLResponse)
    async def submit_checkin(
        request: Request,
        session: RequestSession = Depends(get_request_session),
        parent_name: str = Form(default=""),
        mood: str = Form(default=""),
        notes: str = Form(default=""),
    ) -> Response:
        """Validate and store a check-in."""
        state_container: AppContainer = request.app.state.container
        form = CheckinForm(parent_name=parent_name, mood=mood, notes=notes)
        if session.provider.current.status is SessionStatus.LOADING:
            logger.warning("Check-in not saved: session could not be restored")
            form.error = SAVE_ERROR_MESSAGE
            response = HTMLResponse(
                render_entry(form), status_code=status.HTTP_502_BAD_GATEWAY
            )
            return session.apply_cookies(response)
        outcome = form.submit(state_container.checkin_service, session.provider.user)
        response = HTMLResponse(
            render_entry(form), status_code=_FORM_STATUS_CODES[outcome]
        )
        return session.apply_cookies(response)

    @app.get(View.HISTORY.value, response_class=HTMLResponse)
    async def history_view(
        request: Request,
        session: RequestSession = Depends(get_request_session),
    ) -> Response:
        """Render the signed-in user's check-ins, newest first."""
        state_container: AppContainer = request.app.state.container
        redirect = _guard(View.HISTORY, session)
        if redirect is not None:
            return redirect
        user = session.provider.user
        if user is None:
            return HTMLResponse(render_loading("Loading check-ins..."))
        error: str | None = None
        try:
            records = state_container.checkin_service.list_history(user.id)
        except Exception:
            logger.exception(
                "Error fetching check-ins", extra={"user_id": str(user.id)}
            )
            records, error = [], LOAD_ERROR_MESSAGE
        page = render_history(records, user, state_container.display_timezone, error)
        return session.apply_cookies(HTMLResponse(page))

    @app.get(View.CALENDAR.value, response_class=HTMLResponse)
    async def calendar_view(
        request: Request,
        month: str | None = None,
        day: str | None = None,
        session: RequestSession = Depends(get_request_session),
    ) -> Response:
        """Render the month grid with an optional selected day."""
        state_container: AppContainer = request.app.state.container
        redirect = _guard(View.CALENDAR, session)
        if redirect is not None:
            return redirect
        user = session.provider.user
        if user is None:
            return HTMLResponse(render_loading("Loading calendar..."))
        tz = state_container.display_timezone
        error: str | None = None
        try:
            records = state_container.checkin_service.list_for_user(user.id)
        except Exception:
            logger.exception(
                "Error fetching check-ins", extra={"user_id": str(user.id)}
            )
            records, error = [], LOAD_ERROR_MESSAGE
        calendar_state = CalendarState(
            reference=_resolve_month(month, tz), records=records, tz=tz
        )
        calendar_state.select_day(_resolve_day(day))
        page = render_calendar(calendar_state, user, error)
        return session.apply_cookies(HTMLResponse(page))

    @app.get(View.AUTH.value, response_class=HTMLResponse)
    async def auth_view(
        mode: str = AuthMode.SIGN_IN.value,
        session: RequestSession = Depends(get_request_session),
    ) -> Response:
        """Render the sign-in or sign-up form."""
        redirect = _guard(View.AUTH, session)
        if redirect is not None:
            return redirect
        form = AuthForm(mode=_resolve_mode(mode))
        return session.apply_cookies(HTMLResponse(render_auth(form)))

    @app.post(View.AUTH.value, response_class=HTMLResponse)
    async def submit_auth(
        session: RequestSession = Depends(get_request_session),
        email: str = Form(default=""),
        password: str = Form(default=""),
        mode: str = Form(default=AuthMode.SIGN_IN.value),
    ) -> Response:
        """Sign in or sign up with email and password."""
        redirect = _guard(View.AUTH, session)
        if redirect is not None:
            return redirect
        form = AuthForm(mode=_resolve_mode(mode), email=email, password=password)
        outcome = form.submit(session.provider)
        if outcome is AuthOutcome.SIGNED_IN:
            response: Response = RedirectResponse(
                View.ENTRY.value, status_code=status.HTTP_303_SEE_OTHER
            )
        else:
            response = HTMLResponse(
                render_auth(form), status_code=_AUTH_STATUS_CODES[outcome]
            )
        return session.apply_cookies(response)

    @app.post(f"{View.AUTH.value}/sign-out")
    async def sign_out(
        session: RequestSession = Depends(get_request_session),
    ) -> Response:
        """End the session and return to the sign-in view."""
        session.provider.sign_out()
        response = RedirectResponse(
            View.AUTH.value, status_code=status.HTTP_303_SEE_OTHER
        )
        return session.apply_cookies(response)

    return app


def _guard(view: View, session: RequestSession) -> Response | None:
    """Return a redirect response when the view isn't available right now."""
    target = resolve_redirect(view, session.provider.current.status)
    if target is None:
        return None
    response = RedirectResponse(target, status_code=status.HTTP_303_SEE_OTHER)
    return session.apply_cookies(response)


def _resolve_month(raw: str | None, tz: ZoneInfo) -> MonthRef:
    """Parse ``YYYY-MM`` from the query string, defaulting to the current month."""
    if raw:
        try:
            return MonthRef.parse(raw)
        except ValueError:
            pass
    return MonthRef.from_date(datetime.now(tz=tz).date())


def _resolve_day(raw: str | None) -> int | None:
    """Parse the selected day; anything that isn't a number selects nothing."""
    if raw and raw.strip().isdecimal():
        return int(raw.strip())
    return None


def _resolve_mode(raw: str) -> AuthMode:
    try:
        return AuthMode(raw)
    except ValueError:
        return AuthMode.SIGN_IN
