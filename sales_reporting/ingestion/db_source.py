"""Record source backed by :class:`~sales_reporting.db.sales_store.SalesStore`."""

from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from sales_reporting.db.sales_store import SalesStore
from sales_reporting.errors import SourceUnavailable
from sales_reporting.ingestion.models import SaleRecord
from sales_reporting.utils.logger import get_logger
from sales_reporting.utils.period import ReportPeriod

LOGGER = get_logger(__name__)


class DatabaseRecordSource:
    """Load sales from a SQL database, optionally narrowed to one month."""

    def __init__(self, store: SalesStore, *, period: ReportPeriod | None = None) -> None:
        self.store = store
        self.period = period

    def load(self) -> list[SaleRecord]:
        start = end = None
        # Out-of-range months cannot be bounded; load everything and let the
        # aggregator filter (it will match nothing).
        if self.period is not None and 1 <= self.period.month <= 12:
            start, end = self.period.bounds()
        try:
            records = self.store.fetch_range(start, end)
        except SQLAlchemyError as exc:
            raise SourceUnavailable(f"Could not read sales from {self.store.url}: {exc}") from exc
        LOGGER.info("Loaded %s sale records from %s", len(records), self.store.url)
        return records


__all__ = ["DatabaseRecordSource"]
