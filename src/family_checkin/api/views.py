"""Server-rendered HTML for the check-in views."""

from datetime import date, datetime
from html import escape
from zoneinfo import ZoneInfo

from family_checkin.domain.checkins import MOOD_STYLES, CheckinRecord, mood_style
from family_checkin.domain.sessions import AuthUser
from family_checkin.services.calendar import (
    DAY_NAMES,
    MONTH_NAMES,
    CalendarState,
    month_label,
    next_month,
    previous_month,
)
from family_checkin.services.forms import AuthForm, AuthMode, CheckinForm
from family_checkin.services.navigation import View

APP_TITLE = "Family Check-In Tracker"
LOAD_ERROR_MESSAGE = "Couldn't load check-ins. Please refresh to try again."
WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

_STYLE = """
body { font-family: ui-sans-serif, system-ui, sans-serif; background: #eff6ff;
  margin: 0; padding: 1rem; color: #1f2937; }
.card { background: #fff; border-radius: 0.5rem; padding: 2rem; margin: 0 auto;
  box-shadow: 0 1px 3px rgba(0, 0, 0, 0.1); }
.narrow { max-width: 28rem; }
.wide { max-width: 56rem; }
h1 { margin-top: 0; }
label { display: block; font-size: 0.875rem; margin: 1rem 0 0.25rem; }
input, select, textarea { width: 100%; padding: 0.75rem; box-sizing: border-box;
  border: 1px solid #d1d5db; border-radius: 0.375rem; }
button, .button { display: inline-block; background: #3b82f6; color: #fff;
  border: 0; border-radius: 0.375rem; padding: 0.5rem 1rem; text-decoration: none;
  cursor: pointer; }
button:disabled { opacity: 0.5; }
.full { width: 100%; margin-top: 1rem; padding: 0.75rem; }
.secondary { background: #6b7280; }
.danger { background: #ef4444; }
.header { display: flex; justify-content: space-between; align-items: center;
  flex-wrap: wrap; gap: 0.5rem; margin-bottom: 1.5rem; }
.actions { display: flex; gap: 0.5rem; align-items: center; }
.actions form { margin: 0; }
.error { color: #b91c1c; font-size: 0.875rem; }
.notice { padding: 0.75rem; border-radius: 0.25rem; margin-top: 1rem; }
.notice.bad { background: #fee2e2; color: #b91c1c; }
.notice.good { background: #dcfce7; color: #15803d; }
.tabs { display: flex; margin-bottom: 1.5rem; }
.tabs a { flex: 1; text-align: center; padding: 0.5rem; background: #e5e7eb;
  color: #374151; text-decoration: none; }
.tabs a.active { background: #3b82f6; color: #fff; }
.entry { border: 1px solid #e5e7eb; border-radius: 0.5rem; padding: 1rem;
  margin-bottom: 1rem; }
.entry-head { display: flex; justify-content: space-between; align-items: start; }
.badge { padding: 0.25rem 0.75rem; border-radius: 9999px; font-size: 0.875rem; }
.notes { background: #f9fafb; border-left: 4px solid #3b82f6; padding: 0.75rem; }
.meta { color: #6b7280; font-size: 0.875rem; }
.month-nav { display: flex; justify-content: space-between; align-items: center; }
.grid { display: grid; grid-template-columns: repeat(7, 1fr); gap: 0.25rem;
  margin: 1rem 0 1.5rem; }
.day-name { text-align: center; font-weight: 600; color: #4b5563; padding: 0.5rem; }
.cell { display: block; height: 4rem; padding: 0.5rem; border: 1px solid #e5e7eb;
  background: #fff; color: inherit; text-decoration: none; }
.cell.blank { background: #f3f4f6; }
.cell.selected { outline: 2px solid #3b82f6; }
.dots { display: flex; gap: 0.25rem; margin-top: 0.25rem; align-items: center; }
.dot { width: 0.5rem; height: 0.5rem; border-radius: 9999px; display: inline-block; }
.overflow { font-size: 0.75rem; color: #6b7280; }
.details { border-top: 1px solid #e5e7eb; padding-top: 1rem; }
"""

_DISABLE_ON_SUBMIT = """
<script>
  document.querySelectorAll('form[data-once]').forEach(function (form) {
    form.addEventListener('submit', function () {
      var button = form.querySelector('button[type=submit]');
      if (button) { button.disabled = true; button.textContent = 'Please wait...'; }
    });
  });
</script>
"""


def render_loading(label: str) -> str:
    """Placeholder shown while the session hasn't resolved yet."""
    body = f'<div class="card narrow"><p class="meta">{escape(label)}</p></div>'
    return _page(APP_TITLE, body, refresh_seconds=2)


def render_entry(form: CheckinForm) -> str:
    if form.submitted_for is not None:
        return _render_confirmation(form.submitted_for)

    options = ['<option value="">Select mood...</option>']
    for mood, style in MOOD_STYLES.items():
        selected = " selected" if form.mood == mood.value else ""
        label = escape(style.description)
        options.append(f'<option value="{mood.value}"{selected}>{label}</option>')
    notice = f'<div class="notice bad">{escape(form.error)}</div>' if form.error else ""
    body = f"""
<div class="card narrow">
  <h1>{APP_TITLE}</h1>
  <form method="post" action="{View.ENTRY.value}" data-once>
    <label for="parent_name">Parent Name</label>
    <input id="parent_name" name="parent_name" type="text" required
      placeholder="e.g., Mom, Dad, Grandma" value="{escape(form.parent_name)}" />
    {_field_error(form, "parent_name")}
    <label for="mood">How were they today?</label>
    <select id="mood" name="mood" required>{"".join(options)}</select>
    {_field_error(form, "mood")}
    <label for="notes">Notes (optional)</label>
    <textarea id="notes" name="notes" rows="3"
      placeholder="Any specific details, concerns, or highlights from today..."
    >{escape(form.notes)}</textarea>
    {notice}
    <button class="full" type="submit">Record Check-in</button>
  </form>
  <p class="actions">
    <a href="{View.HISTORY.value}">View History</a>
    <a href="{View.CALENDAR.value}">View Calendar</a>
  </p>
</div>
{_DISABLE_ON_SUBMIT}"""
    return _page(APP_TITLE, body)


def render_history(
    records: list[CheckinRecord], user: AuthUser, tz: ZoneInfo, error: str | None
) -> str:
    if error:
        content = f'<div class="notice bad">{escape(error)}</div>'
    elif not records:
        content = f"""
<div class="meta">
  <p>No check-ins recorded yet.</p>
  <a href="{View.ENTRY.value}">Record your first check-in</a>
</div>"""
    else:
        content = "".join(_history_entry(record, tz) for record in records)
    body = f"""
<div class="card wide">
  {_header("Check-in History", user, View.HISTORY)}
  {content}
</div>"""
    return _page("Check-in History", body)


def render_calendar(state: CalendarState, user: AuthUser, error: str | None) -> str:
    ref = state.reference
    selected_day = state.selected_date.day if state.selected_date else None
    cells = [f'<div class="day-name">{name}</div>' for name in DAY_NAMES]
    for cell in state.day_cells():
        if cell is None:
            cells.append('<div class="cell blank"></div>')
            continue
        dots = "".join(
            f'<span class="dot" style="background:{mood_style(record.mood).dot_color}"'
            f' title="{escape(record.parent_name)} - {escape(record.mood)}"></span>'
            for record in cell.indicators
        )
        if cell.overflow:
            dots += f'<span class="overflow">+{cell.overflow}</span>'
        selected = " selected" if cell.day == selected_day else ""
        cells.append(
            f'<a class="cell{selected}" href="{_calendar_href(str(ref), cell.day)}">'
            f'<div>{cell.day}</div><div class="dots">{dots}</div></a>'
        )

    notice = f'<div class="notice bad">{escape(error)}</div>' if error else ""
    body = f"""
<div class="card wide">
  {_header("Check-in Calendar", user, View.CALENDAR)}
  {notice}
  <div class="month-nav">
    <a class="button secondary" href="{_calendar_href(str(previous_month(ref)))}"
      >Previous</a>
    <h2>{month_label(ref)}</h2>
    <a class="button secondary" href="{_calendar_href(str(next_month(ref)))}">Next</a>
  </div>
  <div class="grid">{"".join(cells)}</div>
  {_selected_details(state)}
</div>"""
    return _page("Check-in Calendar", body)


def render_auth(form: AuthForm) -> str:
    signing_in = form.mode is AuthMode.SIGN_IN
    sign_in_class = "active" if signing_in else ""
    sign_up_class = "" if signing_in else "active"
    notice = ""
    if form.message:
        tone = "bad" if form.is_error else "good"
        notice = f'<div class="notice {tone}">{escape(form.message)}</div>'
    if signing_in:
        switch = (
            "Don't have an account? "
            f'<a href="{_auth_href(AuthMode.SIGN_UP)}">Sign up here</a>'
        )
    else:
        switch = (
            "Already have an account? "
            f'<a href="{_auth_href(AuthMode.SIGN_IN)}">Sign in here</a>'
        )
    body = f"""
<div class="card narrow">
  <h1>{APP_TITLE}</h1>
  <div class="tabs">
    <a class="{sign_in_class}" href="{_auth_href(AuthMode.SIGN_IN)}">Sign In</a>
    <a class="{sign_up_class}" href="{_auth_href(AuthMode.SIGN_UP)}">Sign Up</a>
  </div>
  <form method="post" action="{View.AUTH.value}" data-once>
    <input type="hidden" name="mode" value="{form.mode.value}" />
    <label for="email">Email</label>
    <input id="email" name="email" type="email" required
      placeholder="your@email.com" value="{escape(form.email)}" />
    <label for="password">Password</label>
    <input id="password" name="password" type="password" required minlength="6"
      placeholder="At least 6 characters" />
    {notice}
    <button class="full" type="submit">
      {"Sign In" if signing_in else "Create Account"}
    </button>
  </form>
  <p class="meta">{switch}</p>
</div>
{_DISABLE_ON_SUBMIT}"""
    return _page(APP_TITLE, body)


def format_timestamp(value: datetime, tz: ZoneInfo) -> str:
    """Format a timestamp like ``01/15/2024 at 09:00 AM`` in local time."""
    local = value.astimezone(tz)
    return f"{local:%m/%d/%Y} at {local:%I:%M %p}"


def format_long_date(value: date) -> str:
    """Format a date like ``Monday, January 15, 2024``."""
    weekday = WEEKDAY_NAMES[value.weekday()]
    return f"{weekday}, {MONTH_NAMES[value.month - 1]} {value.day}, {value.year}"


def _render_confirmation(parent_name: str) -> str:
    body = f"""
<div class="card narrow" style="text-align:center">
  <h1 style="color:#16a34a">Check-in Recorded!</h1>
  <p class="meta">Thanks for checking in on {escape(parent_name)}</p>
  <a class="button" href="{View.ENTRY.value}">Add Another Check-in</a>
</div>"""
    return _page(APP_TITLE, body)


def _history_entry(record: CheckinRecord, tz: ZoneInfo) -> str:
    notes = f'<p class="notes">{escape(record.notes)}</p>' if record.notes else ""
    return f"""
<div class="entry">
  <div class="entry-head">
    <h3>{escape(record.parent_name)}</h3>
    {_badge(record.mood)}
  </div>
  <p class="meta">{format_timestamp(record.created_at, tz)}</p>
  {notes}
</div>"""


def _selected_details(state: CalendarState) -> str:
    if state.selected_date is None:
        return ""
    heading = f"Check-ins for {format_long_date(state.selected_date)}"
    if not state.selected_records:
        items = '<p class="meta">No check-ins recorded for this date.</p>'
    else:
        items = "".join(
            _detail_entry(record, state.tz) for record in state.selected_records
        )
    return f'<div class="details"><h3>{heading}</h3>{items}</div>'


def _detail_entry(record: CheckinRecord, tz: ZoneInfo) -> str:
    notes = f'<p class="notes">{escape(record.notes)}</p>' if record.notes else ""
    local = record.created_at.astimezone(tz)
    return f"""
<div class="entry">
  <div class="entry-head">
    <div><strong>{escape(record.parent_name)}</strong> {_badge(record.mood)}</div>
    <span class="meta">{local:%I:%M %p}</span>
  </div>
  {notes}
</div>"""


def _badge(mood: str) -> str:
    style = mood_style(mood)
    return (
        f'<span class="badge" style="background:{style.badge_background};'
        f'color:{style.badge_text}">{escape(style.label)}</span>'
    )


def _header(title: str, user: AuthUser, current: View) -> str:
    links = [
        (View.ENTRY, "Add Check-in"),
        (View.HISTORY, "View History"),
        (View.CALENDAR, "View Calendar"),
    ]
    anchors = "".join(
        f'<a class="button{"" if view is View.ENTRY else " secondary"}" '
        f'href="{view.value}">{label}</a>'
        for view, label in links
        if view is not current
    )
    return f"""
<div class="header">
  <h1>{title}</h1>
  <div class="actions">
    <span class="meta">Welcome, {escape(user.email)}</span>
    {anchors}
    <form method="post" action="{View.AUTH.value}/sign-out">
      <button class="danger" type="submit">Sign Out</button>
    </form>
  </div>
</div>"""


def _field_error(form: CheckinForm, name: str) -> str:
    message = form.errors.get(name)
    return f'<p class="error">{escape(message)}</p>' if message else ""


def _calendar_href(month: str, day: int | None = None) -> str:
    href = f"{View.CALENDAR.value}?month={month}"
    return f"{href}&amp;day={day}" if day is not None else href


def _auth_href(mode: AuthMode) -> str:
    return f"{View.AUTH.value}?mode={mode.value}"


def _page(title: str, body: str, refresh_seconds: int | None = None) -> str:
    refresh = (
        f'<meta http-equiv="refresh" content="{refresh_seconds}" />'
        if refresh_seconds
        else ""
    )
    return f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    {refresh}
    <title>{escape(title)}</title>
    <style>{_STYLE}</style>
  </head>
  <body>
{body}
  </body>
</html>
"""
