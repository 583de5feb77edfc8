"""Data models shared across ingestion, aggregation and sinks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from sales_reporting.errors import MalformedData
from sales_reporting.utils.period import ReportPeriod


def to_decimal(value: object, *, field: str = "amount") -> Decimal:
    """Convert ``value`` into a :class:`Decimal` without binary float drift."""

    if value is None or isinstance(value, bool):
        raise MalformedData(f"{field} is missing or not numeric: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            # ``str(float)`` yields the shortest repr, so 1.1 becomes Decimal("1.1").
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise MalformedData(f"{field} is not numeric: {value!r}") from exc
    else:
        raise MalformedData(f"{field} is not numeric: {value!r}")
    if not result.is_finite():
        raise MalformedData(f"{field} must be a finite number: {value!r}")
    return result


@dataclass(frozen=True, slots=True)
class SaleRecord:
    """A single sale as loaded from a record source."""

    date: date
    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        sale_date = self.date
        if isinstance(sale_date, datetime):
            sale_date = sale_date.date()
        if not isinstance(sale_date, date):
            raise MalformedData(f"sale date is missing or invalid: {self.date!r}")
        if not isinstance(self.currency, str) or not self.currency.strip():
            raise MalformedData(f"sale currency is missing or invalid: {self.currency!r}")
        object.__setattr__(self, "date", sale_date)
        object.__setattr__(self, "amount", to_decimal(self.amount))
        object.__setattr__(self, "currency", self.currency.strip())


@dataclass(frozen=True, slots=True)
class ReportResult:
    """Outcome of aggregating one report period."""

    period: ReportPeriod
    total: Decimal
    lines: tuple[str, ...]
    base_currency: str = "USD"

    @property
    def destination_key(self) -> str:
        return self.period.destination_key


__all__ = ["ReportResult", "SaleRecord", "to_decimal"]
