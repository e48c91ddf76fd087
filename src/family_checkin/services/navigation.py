"""View registry and session-based redirects."""

from enum import StrEnum

from family_checkin.domain.sessions import SessionStatus


class View(StrEnum):
    ENTRY = "/"
    HISTORY = "/history"
    CALENDAR = "/calendar"
    AUTH = "/auth"


PROTECTED_VIEWS = frozenset({View.HISTORY, View.CALENDAR})


def resolve_redirect(view: View, status: SessionStatus) -> str | None:
    """Return where to send the user, or None to render the view.

    Nothing redirects while the session is still loading.
    """
    if status is SessionStatus.LOADING:
        return None
    if status is SessionStatus.ANONYMOUS and view in PROTECTED_VIEWS:
        return View.AUTH.value
    if status is SessionStatus.AUTHENTICATED and view is View.AUTH:
        return View.ENTRY.value
    return None
