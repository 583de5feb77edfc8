"""Public interface for the sales_reporting package."""

from __future__ import annotations

from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Final

from sqlalchemy.exc import SQLAlchemyError

from sales_reporting.aggregator import aggregate, format_report_lines, report_destination_key
from sales_reporting.db.sales_store import SalesStore
from sales_reporting.errors import (
    MalformedData,
    SalesReportingError,
    SourceUnavailable,
    WriteFailure,
)
from sales_reporting.ingestion.csv_source import CSVRecordSource
from sales_reporting.ingestion.db_source import DatabaseRecordSource
from sales_reporting.ingestion.json_source import JSONRecordSource
from sales_reporting.ingestion.models import ReportResult, SaleRecord
from sales_reporting.ingestion.strategy import RecordSource
from sales_reporting.rates import ExchangeRateTable, load_rate_table
from sales_reporting.sinks.base_sink import ReportSink
from sales_reporting.sinks.db_sink import DatabaseReportSink
from sales_reporting.sinks.file_sink import TextFileSink
from sales_reporting.utils.logger import get_logger
from sales_reporting.utils.period import ReportPeriod

LOGGER = get_logger(__name__)

__all__ = [
    "__version__",
    "CSVRecordSource",
    "DatabaseRecordSource",
    "DatabaseReportSink",
    "ExchangeRateTable",
    "JSONRecordSource",
    "MalformedData",
    "RecordSource",
    "ReportPeriod",
    "ReportResult",
    "ReportSink",
    "SaleRecord",
    "SalesReporter",
    "SalesReportingError",
    "SalesStore",
    "SourceUnavailable",
    "TextFileSink",
    "WriteFailure",
    "aggregate",
    "format_report_lines",
    "load_rate_table",
    "report_destination_key",
]

try:
    __version__ = importlib_metadata.version("sales-reporting")
except importlib_metadata.PackageNotFoundError:  # pragma: no cover - fallback for local runs
    __version__ = "0.1.0"

DEFAULT_SALES_PATH: Final[Path] = Path("sales.json")
DATABASE_SUFFIXES: Final[frozenset[str]] = frozenset({".db", ".sqlite", ".sqlite3"})


class SalesReporter:
    """Package facade wiring a record source, the aggregator and a report sink."""

    __slots__ = ("source", "sink", "rates")

    # Provide direct access to the package version as a class attribute.
    __version__ = __version__

    def __init__(
        self,
        source: RecordSource | str | Path | None = None,
        sink: ReportSink | str | Path | None = None,
        rates: ExchangeRateTable | None = None,
    ) -> None:
        """Configure where sales come from and where reports go.

        ``source`` accepts any :class:`RecordSource`, a ``.json``/``.csv`` file
        path, a SQLite file (``.db``/``.sqlite``) or a SQLAlchemy URL. When it is
        omitted, ``sales.json`` in the working directory is read. ``sink``
        accepts a :class:`ReportSink`, an output directory or a SQLAlchemy URL
        and defaults to text files in the working directory. ``rates`` defaults
        to :meth:`ExchangeRateTable.default`.
        """

        self.source: RecordSource = self._build_source(source)
        try:
            self.sink: ReportSink = self._build_sink(sink)
        except Exception:
            if isinstance(self.source, DatabaseRecordSource):
                self.source.store.close()
            raise
        self.rates: ExchangeRateTable = rates if rates is not None else ExchangeRateTable.default()

    @staticmethod
    def _open_source_store(target: str | Path) -> DatabaseRecordSource:
        try:
            return DatabaseRecordSource(SalesStore(target, create=False))
        except SQLAlchemyError as exc:
            raise SourceUnavailable(f"Could not open sales database {target}: {exc}") from exc

    @staticmethod
    def _build_source(source: RecordSource | str | Path | None) -> RecordSource:
        if source is None:
            return JSONRecordSource(DEFAULT_SALES_PATH)
        if isinstance(source, str) and "://" in source:
            return SalesReporter._open_source_store(source)
        if isinstance(source, (str, Path)):
            path = Path(source)
            suffix = path.suffix.lower()
            if suffix == ".csv":
                return CSVRecordSource(path)
            if suffix in DATABASE_SUFFIXES:
                return SalesReporter._open_source_store(path)
            return JSONRecordSource(path)
        if not callable(getattr(source, "load", None)):
            raise TypeError(f"Unsupported record source: {source!r}")
        return source

    @staticmethod
    def _build_sink(sink: ReportSink | str | Path | None) -> ReportSink:
        if sink is None:
            return TextFileSink()
        if isinstance(sink, str) and "://" in sink:
            try:
                return DatabaseReportSink(SalesStore(sink))
            except SQLAlchemyError as exc:
                raise WriteFailure(f"Could not open report database {sink}: {exc}") from exc
        if isinstance(sink, (str, Path)):
            return TextFileSink(sink)
        if not isinstance(sink, ReportSink):
            raise TypeError(f"Unsupported report sink: {sink!r}")
        return sink

    def _source_for(self, period: ReportPeriod) -> RecordSource:
        if isinstance(self.source, DatabaseRecordSource) and self.source.period is None:
            return DatabaseRecordSource(self.source.store, period=period)
        return self.source

    def build_report(self, year: int, month: int) -> ReportResult:
        """Load sales and aggregate ``year``/``month`` without writing anything."""

        records = self._source_for(ReportPeriod(year=year, month=month)).load()
        return aggregate(records, year, month, self.rates)

    def create_report_for_year_and_month(self, year: int, month: int) -> ReportResult:
        """Build the monthly report and hand it to the sink.

        Source and sink errors propagate unchanged; a failed load never
        reaches the sink.
        """

        result = self.build_report(year, month)
        self.sink.write(result.destination_key, list(result.lines))
        LOGGER.info("Report generated successfully.")
        return result

    def close(self) -> None:
        """Release database connections held by the collaborators."""

        if isinstance(self.source, DatabaseRecordSource):
            self.source.store.close()
        self.sink.close()
