"""Helpers for working with monthly report periods."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Tuple


@dataclass(frozen=True, slots=True)
class ReportPeriod:
    """Calendar month identified by ``(year, month)``.

    The month is not range-checked: a period such as ``(2024, 13)`` is a valid
    value that simply never matches a real sale date.
    """

    year: int
    month: int

    @property
    def label(self) -> str:
        """Return the period formatted as ``MM/YYYY``."""
        return f"{self.month:02d}/{self.year:04d}"

    @property
    def destination_key(self) -> str:
        """Return the sink key for this period, e.g. ``report_2024_03``."""
        return f"report_{self.year:04d}_{self.month:02d}"

    def contains(self, day: date) -> bool:
        return day.year == self.year and day.month == self.month

    def bounds(self) -> Tuple[date, date]:
        """Return the first and last day of the month as ``(start, end)``."""

        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be between 1 and 12, got {self.month}")
        start = date(self.year, self.month, 1)
        return (start, _end_of_month(start))


def parse_period(value: str | ReportPeriod) -> ReportPeriod:
    """Parse ``YYYY-MM`` (or ``YYYY/MM``) into a :class:`ReportPeriod`."""

    if isinstance(value, ReportPeriod):
        return value
    cleaned = value.strip().replace("/", "-")
    year_raw, sep, month_raw = cleaned.partition("-")
    if not sep:
        raise ValueError(f"period must look like YYYY-MM, got {value!r}")
    try:
        return ReportPeriod(year=int(year_raw), month=int(month_raw))
    except ValueError as exc:
        raise ValueError(f"period must look like YYYY-MM, got {value!r}") from exc


def _end_of_month(day: date) -> date:
    """Return the last day of the month for ``day``."""

    if day.month == 12:
        return date(day.year, 12, 31)
    first_next_month = date(day.year, day.month + 1, 1)
    return first_next_month - timedelta(days=1)


__all__ = ["ReportPeriod", "parse_period"]
