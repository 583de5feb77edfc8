"""Report sink that stores report lines in the sales database."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError

from sales_reporting.db.sales_store import PersistenceResult, SalesStore
from sales_reporting.errors import WriteFailure
from sales_reporting.sinks.base_sink import ReportSink


class DatabaseReportSink(ReportSink):
    """Persist reports in the ``report_lines`` table, replacing older copies."""

    def __init__(self, store: SalesStore) -> None:
        self.store = store

    def write(self, destination_key: str, lines: Sequence[str]) -> PersistenceResult:
        try:
            return self.store.save_report(destination_key, lines)
        except SQLAlchemyError as exc:
            raise WriteFailure(f"Could not store report {destination_key}: {exc}") from exc

    def close(self) -> None:  # pragma: no cover - trivial delegator
        self.store.close()


__all__ = ["DatabaseReportSink"]
