"""Helpers turning raw key/value rows into :class:`SaleRecord` objects."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping

from sales_reporting.errors import MalformedData
from sales_reporting.ingestion.models import SaleRecord

DATE_KEYS = ("date", "Date", "sale_date")
AMOUNT_KEYS = ("amount", "Amount")
CURRENCY_KEYS = ("currency", "Currency")


def parse_sale_date(value: object) -> date:
    """Parse ISO dates (``2024-03-05``) and ISO datetimes into :class:`date`."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise MalformedData(f"sale date is missing or invalid: {value!r}")
    raw = value.strip()
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    try:
        # ``Z`` suffixes are common in serialised timestamps.
        return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
    except ValueError as exc:
        raise MalformedData(f"sale date is not an ISO date: {value!r}") from exc


def record_from_mapping(row: Mapping[str, Any], *, position: int | None = None) -> SaleRecord:
    """Build a :class:`SaleRecord`, failing if any of the three fields is absent."""

    where = f" (record {position})" if position is not None else ""
    if not isinstance(row, Mapping):
        raise MalformedData(f"sale record must be an object{where}, got {type(row).__name__}")
    sale_date = _pick(row, DATE_KEYS, "date", where)
    amount = _pick(row, AMOUNT_KEYS, "amount", where)
    currency = _pick(row, CURRENCY_KEYS, "currency", where)
    try:
        return SaleRecord(date=parse_sale_date(sale_date), amount=amount, currency=currency)
    except MalformedData as exc:
        raise MalformedData(f"{exc}{where}") from exc


def _pick(row: Mapping[str, Any], keys: tuple[str, ...], field: str, where: str) -> Any:
    for key in keys:
        value = row.get(key)
        if value not in (None, ""):
            return value
    raise MalformedData(f"sale record is missing '{field}'{where}")


__all__ = ["parse_sale_date", "record_from_mapping"]
