"""Domain models for the month calendar."""

from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date

from family_checkin.domain.checkins import CheckinRecord

DECEMBER = 12


@dataclass(frozen=True, order=True)
class MonthRef:
    """A calendar month, identified by year and month number."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= DECEMBER:
            raise ValueError(f"Month out of range: {self.month}")

    @classmethod
    def from_date(cls, value: date) -> "MonthRef":
        """Return the month containing the given date."""
        return cls(year=value.year, month=value.month)

    @classmethod
    def parse(cls, raw: str) -> "MonthRef":
        """Parse a ``YYYY-MM`` string."""
        year_raw, sep, month_raw = raw.strip().partition("-")
        if not sep or not year_raw.isdigit() or not month_raw.isdigit():
            raise ValueError(f"Invalid month: {raw!r}")
        year = int(year_raw)
        if not MINYEAR < year < MAXYEAR:
            raise ValueError(f"Year out of range: {year}")
        return cls(year=year, month=int(month_raw))

    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass(frozen=True)
class CalendarCell:
    """A single grid slot; ``day`` is None for leading blanks."""

    day: int | None

    @property
    def is_blank(self) -> bool:
        return self.day is None


@dataclass(frozen=True)
class DayCell:
    """Compact view of one day in the grid."""

    day: int
    records: list[CheckinRecord]
    indicators: list[CheckinRecord]
    overflow: int
