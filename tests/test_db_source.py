from __future__ import annotations

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy.exc import OperationalError

from sales_reporting.db.sales_store import SalesStore
from sales_reporting.errors import SourceUnavailable
from sales_reporting.ingestion.db_source import DatabaseRecordSource
from sales_reporting.ingestion.models import SaleRecord
from sales_reporting.utils.period import ReportPeriod


@pytest.fixture()
def store(tmp_path: Path):
    sales_store = SalesStore(tmp_path / "sales.db")
    sales_store.insert_sales(
        [
            SaleRecord(date=date(2024, 3, 5), amount=Decimal("100"), currency="USD"),
            SaleRecord(date=date(2024, 4, 1), amount=Decimal("999"), currency="GBP"),
        ]
    )
    yield sales_store
    sales_store.close()


def test_db_source_loads_everything_without_period(store: SalesStore) -> None:
    assert len(DatabaseRecordSource(store).load()) == 2


def test_db_source_narrows_to_period(store: SalesStore) -> None:
    records = DatabaseRecordSource(store, period=ReportPeriod(2024, 3)).load()

    assert [row.date for row in records] == [date(2024, 3, 5)]


def test_db_source_out_of_range_month_loads_all(store: SalesStore) -> None:
    assert len(DatabaseRecordSource(store, period=ReportPeriod(2024, 13)).load()) == 2


def test_db_source_wraps_database_errors(store: SalesStore, monkeypatch) -> None:
    def _boom(*_args, **_kwargs):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(store, "fetch_range", _boom)

    with pytest.raises(SourceUnavailable) as excinfo:
        DatabaseRecordSource(store).load()
    assert isinstance(excinfo.value.__cause__, OperationalError)


def test_read_only_store_rejects_missing_database(tmp_path: Path) -> None:
    db_path = tmp_path / "missing.db"

    with pytest.raises(SourceUnavailable, match="not found"):
        SalesStore(db_path, create=False)
    assert not db_path.exists()


def test_read_only_store_does_not_create_tables(tmp_path: Path) -> None:
    db_path = tmp_path / "empty.db"
    db_path.touch()
    read_only = SalesStore(db_path, create=False)
    try:
        with pytest.raises(SourceUnavailable) as excinfo:
            DatabaseRecordSource(read_only).load()
    finally:
        read_only.close()
    assert isinstance(excinfo.value.__cause__, OperationalError)


def test_db_source_rejects_file_that_is_not_a_database(tmp_path: Path) -> None:
    db_path = tmp_path / "sales.db"
    db_path.write_text("Date,Amount,Currency\n", encoding="utf-8")
    read_only = SalesStore(db_path, create=False)
    try:
        with pytest.raises(SourceUnavailable):
            DatabaseRecordSource(read_only).load()
    finally:
        read_only.close()


def test_read_only_store_reads_existing_sales(store: SalesStore) -> None:
    read_only = SalesStore(store.url, create=False)
    try:
        assert [row.amount for row in DatabaseRecordSource(read_only).load()] == [
            Decimal("100"),
            Decimal("999"),
        ]
    finally:
        read_only.close()
