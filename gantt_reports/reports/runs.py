from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from ..sheets.models import format_date

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class DateRun:
    """A maximal stretch of consecutive calendar days"""

    start: date
    end: date

    @property
    def label(self) -> str:
        if self.start == self.end:
            return format_date(self.start)
        return f"{format_date(self.start)}-{format_date(self.end)}"


def compress_dates(dates: Iterable[date]) -> list[DateRun]:
    """Group dates into runs of consecutive days, in chronological order"""
    runs = []
    start = end = None
    for current in sorted(set(dates)):
        if start is None:
            start = end = current
        elif current - end == ONE_DAY:
            end = current
        else:
            runs.append(DateRun(start, end))
            start = end = current

    if start is not None:
        runs.append(DateRun(start, end))
    return runs


def format_runs(dates: Iterable[date]) -> str:
    """Render dates as comma-separated run labels, e.g. "01/01/24-03/01/24, 05/01/24" """
    return ", ".join(run.label for run in compress_dates(dates))
