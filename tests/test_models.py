from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import date, datetime
from decimal import Decimal

import pytest

from sales_reporting.errors import MalformedData
from sales_reporting.ingestion.models import ReportResult, SaleRecord, to_decimal
from sales_reporting.utils.period import ReportPeriod


def test_sale_record_normalises_fields() -> None:
    record = SaleRecord(date=datetime(2024, 3, 5, 14, 30), amount=100.25, currency=" usd ")

    assert record.date == date(2024, 3, 5)
    assert type(record.date) is date
    assert record.amount == Decimal("100.25")
    assert record.currency == "usd"


def test_sale_record_is_immutable() -> None:
    record = SaleRecord(date=date(2024, 3, 5), amount=Decimal("1"), currency="USD")

    with pytest.raises(FrozenInstanceError):
        record.amount = Decimal("2")  # type: ignore[misc]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"date": None, "amount": "1", "currency": "USD"},
        {"date": "2024-03-05", "amount": "1", "currency": "USD"},
        {"date": date(2024, 3, 5), "amount": None, "currency": "USD"},
        {"date": date(2024, 3, 5), "amount": "ten", "currency": "USD"},
        {"date": date(2024, 3, 5), "amount": "1", "currency": ""},
        {"date": date(2024, 3, 5), "amount": "1", "currency": None},
    ],
)
def test_sale_record_rejects_missing_fields(kwargs: dict) -> None:
    with pytest.raises(MalformedData):
        SaleRecord(**kwargs)


def test_to_decimal_accepts_numeric_inputs() -> None:
    assert to_decimal(5) == Decimal("5")
    assert to_decimal("12.30") == Decimal("12.30")
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(Decimal("-4.2")) == Decimal("-4.2")


@pytest.mark.parametrize("value", [True, "NaN", "Infinity", object()])
def test_to_decimal_rejects_non_numbers(value: object) -> None:
    with pytest.raises(MalformedData):
        to_decimal(value)


def test_report_result_destination_key() -> None:
    result = ReportResult(period=ReportPeriod(2024, 7), total=Decimal("0"), lines=("a", "b", "c"))

    assert result.destination_key == "report_2024_07"
    assert result.base_currency == "USD"
