"""Month grid construction and day bucketing for the check-in calendar."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta
from zoneinfo import ZoneInfo

from family_checkin.domain.calendar import DECEMBER, CalendarCell, DayCell, MonthRef
from family_checkin.domain.checkins import CheckinRecord

MAX_DAY_INDICATORS = 3
DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def weekday_index(day: date) -> int:
    """Return the weekday with Sunday as 0 and Saturday as 6."""
    return (day.weekday() + 1) % 7


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a month, leap years included."""
    following = next_month(MonthRef(year=year, month=month)).first_day()
    return (following - timedelta(days=1)).day


def previous_month(ref: MonthRef) -> MonthRef:
    if ref.month == 1:
        return MonthRef(year=ref.year - 1, month=DECEMBER)
    return MonthRef(year=ref.year, month=ref.month - 1)


def next_month(ref: MonthRef) -> MonthRef:
    if ref.month == DECEMBER:
        return MonthRef(year=ref.year + 1, month=1)
    return MonthRef(year=ref.year, month=ref.month + 1)


def month_label(ref: MonthRef) -> str:
    return f"{MONTH_NAMES[ref.month - 1]} {ref.year}"


def build_month_grid(ref: MonthRef) -> list[CalendarCell]:
    """Return leading blanks for the first weekday, then one cell per day.

    The grid is not padded at the end; callers wrap it into seven columns.
    """
    blanks = weekday_index(ref.first_day())
    cells = [CalendarCell(day=None) for _ in range(blanks)]
    last_day = days_in_month(ref.year, ref.month)
    cells.extend(CalendarCell(day=day) for day in range(1, last_day + 1))
    return cells


def bucket_by_day(
    records: Iterable[CheckinRecord], ref: MonthRef, day: int | None, tz: ZoneInfo
) -> list[CheckinRecord]:
    """Return records whose local calendar date is the given day of ``ref``."""
    if day is None:
        return []
    target = date(ref.year, ref.month, day)
    return [
        record
        for record in records
        if record.created_at.astimezone(tz).date() == target
    ]


def group_by_day(
    records: Iterable[CheckinRecord], ref: MonthRef, tz: ZoneInfo
) -> dict[int, list[CheckinRecord]]:
    """Bucket records into the days of ``ref`` in a single pass."""
    buckets: dict[int, list[CheckinRecord]] = {}
    for record in records:
        local_day = record.created_at.astimezone(tz).date()
        if local_day.year != ref.year or local_day.month != ref.month:
            continue
        buckets.setdefault(local_day.day, []).append(record)
    return buckets


def summarize_day(day: int, records: list[CheckinRecord]) -> DayCell:
    """Limit the compact cell to a few indicators plus an overflow count."""
    return DayCell(
        day=day,
        records=records,
        indicators=records[:MAX_DAY_INDICATORS],
        overflow=max(len(records) - MAX_DAY_INDICATORS, 0),
    )


@dataclass
class CalendarState:
    """Calendar view state: reference month, records and the selected day."""

    reference: MonthRef
    records: list[CheckinRecord]
    tz: ZoneInfo
    selected_date: date | None = None
    selected_records: list[CheckinRecord] = field(default_factory=list)

    @property
    def cells(self) -> list[CalendarCell]:
        return build_month_grid(self.reference)

    def day_cells(self) -> list[DayCell | None]:
        """Return the grid with each numbered cell summarized; blanks are None."""
        buckets = group_by_day(self.records, self.reference, self.tz)
        return [
            None
            if cell.day is None
            else summarize_day(cell.day, buckets.get(cell.day, []))
            for cell in self.cells
        ]

    def show_previous_month(self) -> None:
        self.reference = previous_month(self.reference)
        self._clear_selection()

    def show_next_month(self) -> None:
        self.reference = next_month(self.reference)
        self._clear_selection()

    def select_day(self, day: int | None) -> None:
        """Select a day of the reference month; blanks and bad days are ignored."""
        if day is None:
            return
        ref = self.reference
        if not 1 <= day <= days_in_month(ref.year, ref.month):
            return
        self.selected_date = date(ref.year, ref.month, day)
        self.selected_records = bucket_by_day(self.records, ref, day, self.tz)

    def _clear_selection(self) -> None:
        self.selected_date = None
        self.selected_records = []
