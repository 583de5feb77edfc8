"""SQLAlchemy persistence for sale records and generated reports."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Sequence, cast

from sqlalchemy import Column, Date, Integer, String, create_engine, delete, select
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from sales_reporting.db import DEFAULT_SALES_DB_PATH, resolve_database_url
from sales_reporting.errors import SourceUnavailable
from sales_reporting.ingestion.models import SaleRecord
from sales_reporting.utils.logger import get_logger

LOGGER = get_logger(__name__)


class Base(DeclarativeBase):
    pass


class _Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sale_date = Column(Date, nullable=False, index=True)
    # Canonical Decimal text; SQLite has no exact decimal type.
    amount = Column(String(64), nullable=False)
    currency = Column(String(8), nullable=False)


class _ReportLine(Base):
    __tablename__ = "report_lines"

    destination_key = Column(String(64), primary_key=True)
    line_no = Column(Integer, primary_key=True)
    text = Column(String, nullable=False)


@dataclass(slots=True)
class PersistenceResult:
    """Represents how many rows were inserted or updated in a batch."""

    inserted: int = 0
    updated: int = 0

    @property
    def total(self) -> int:
        """Return the total number of affected rows."""

        return self.inserted + self.updated


def _ensure_sqlite_file_exists(url: str) -> None:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return
    database = parsed.database
    if not database or database == ":memory:" or database.startswith("file:"):
        return
    if not Path(database).is_file():
        raise SourceUnavailable(f"Sales database not found: {database}")


class SalesStore:
    """Facade over the ``sales`` and ``report_lines`` tables."""

    def __init__(self, target: str | Path = DEFAULT_SALES_DB_PATH, *, create: bool = True) -> None:
        """Open the database at ``target``.

        With ``create=False`` the store is opened for reading only: tables are
        not created and a SQLite file that does not exist raises
        :class:`SourceUnavailable` instead of being created empty.
        """

        self.url = resolve_database_url(target)
        if not create:
            _ensure_sqlite_file_exists(self.url)
        self.engine: Engine = create_engine(self.url, echo=False, future=True)
        if create:
            Base.metadata.create_all(self.engine)
        self._SessionFactory: sessionmaker[Session] = sessionmaker(
            bind=self.engine, expire_on_commit=False, future=True
        )

    def insert_sales(self, rows: Sequence[SaleRecord]) -> PersistenceResult:
        result = PersistenceResult()
        if not rows:
            return result
        with self._SessionFactory() as session:
            for row in rows:
                session.add(
                    _Sale(
                        sale_date=row.date,
                        amount=str(row.amount),
                        currency=row.currency.upper(),
                    )
                )
                result.inserted += 1
            session.commit()
        LOGGER.info("Inserted %s sale records", result.inserted)
        return result

    def fetch_all(self) -> list[SaleRecord]:
        return self.fetch_range()

    def fetch_range(self, start: date | None = None, end: date | None = None) -> list[SaleRecord]:
        with self._SessionFactory() as session:
            stmt = select(_Sale).order_by(_Sale.sale_date, _Sale.id)
            if start is not None:
                stmt = stmt.where(_Sale.sale_date >= start)
            if end is not None:
                stmt = stmt.where(_Sale.sale_date <= end)
            records: list[SaleRecord] = []
            for model in session.execute(stmt).scalars():
                records.append(
                    SaleRecord(
                        date=cast(date, model.sale_date),
                        amount=Decimal(cast(str, model.amount)),
                        currency=cast(str, model.currency),
                    )
                )
            return records

    def save_report(self, destination_key: str, lines: Sequence[str]) -> PersistenceResult:
        """Replace the stored report for ``destination_key`` with ``lines``."""

        result = PersistenceResult()
        with self._SessionFactory() as session:
            replaced = session.execute(
                delete(_ReportLine).where(_ReportLine.destination_key == destination_key)
            ).rowcount
            for line_no, line in enumerate(lines, start=1):
                session.add(
                    _ReportLine(destination_key=destination_key, line_no=line_no, text=line)
                )
            session.commit()
        if replaced:
            result.updated = len(lines)
        else:
            result.inserted = len(lines)
        LOGGER.info(
            "Stored report %s (%s inserted, %s updated)",
            destination_key,
            result.inserted,
            result.updated,
        )
        return result

    def fetch_report(self, destination_key: str) -> list[str]:
        with self._SessionFactory() as session:
            stmt = (
                select(_ReportLine.text)
                .where(_ReportLine.destination_key == destination_key)
                .order_by(_ReportLine.line_no)
            )
            return [cast(str, text) for text in session.execute(stmt).scalars()]

    def close(self) -> None:  # pragma: no cover - trivial
        self.engine.dispose()

    def __enter__(self) -> "SalesStore":  # pragma: no cover - trivial
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - trivial
        self.close()


__all__ = ["PersistenceResult", "SalesStore"]
