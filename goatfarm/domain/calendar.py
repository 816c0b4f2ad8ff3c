"""Month grid for the feeding schedule.

The grid covers exactly the days of one month (28 to 31 cells, no padding
with days of the neighbouring months). Each cell lists the feeding logs
dated on that day, in the order they were received.
"""

import calendar
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta

from goatfarm.domain.entities import FeedingLog


@dataclass(frozen=True)
class CalendarMonth:
    """A (year, month) pair with navigation helpers."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")
        if not 1 <= self.year <= 9999:
            raise ValueError(f"Year out of range: {self.year}")

    @classmethod
    def containing(cls, day: date) -> "CalendarMonth":
        return cls(day.year, day.month)

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, self.days_in_month)

    @property
    def label(self) -> str:
        """Heading shown above the grid, e.g. ``February 2023``."""
        return f"{calendar.month_name[self.month]} {self.year}"

    def next(self) -> "CalendarMonth":
        if self.month == 12:
            return CalendarMonth(self.year + 1, 1)
        return CalendarMonth(self.year, self.month + 1)

    def previous(self) -> "CalendarMonth":
        if self.month == 1:
            return CalendarMonth(self.year - 1, 12)
        return CalendarMonth(self.year, self.month - 1)

    def contains(self, day: date) -> bool:
        return day.year == self.year and day.month == self.month

    def days(self) -> list[date]:
        first = self.first_day
        return [first + timedelta(days=offset) for offset in range(self.days_in_month)]


@dataclass
class CalendarDay:
    """One cell of the month grid."""

    date: date
    records: list[FeedingLog] = field(default_factory=list)

    def is_today(self, today: date | None = None) -> bool:
        return self.date == (today or date.today())


def bucket(records: Iterable[FeedingLog], month: CalendarMonth) -> list[CalendarDay]:
    """Group ``records`` by calendar day over every day of ``month``.

    Records dated outside the month are left out. Same-day records keep the
    order of ``records``; they are not sorted by feed time.
    """
    grid = [CalendarDay(date=day) for day in month.days()]
    for record in records:
        if month.contains(record.date):
            grid[record.date.day - 1].records.append(record)
    return grid
