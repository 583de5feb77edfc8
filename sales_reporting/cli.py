"""Generate the monthly sales report from the command line."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from sales_reporting import SalesReporter
from sales_reporting.errors import SalesReportingError
from sales_reporting.rates import BASE_CURRENCY, ExchangeRateTable, load_rate_table
from sales_reporting.sinks.retrying import RetryingReportSink
from sales_reporting.utils.logger import configure_logging, get_logger
from sales_reporting.utils.period import ReportPeriod, parse_period

LOGGER = get_logger(__name__)

__all__ = ["parse_args", "main"]


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--year", type=int, help="Report year, e.g. 2024")
    parser.add_argument("--month", type=int, help="Report month (1-12)")
    parser.add_argument(
        "--period",
        help="Report period as YYYY-MM (alternative to --year/--month)",
    )
    parser.add_argument(
        "--source",
        default="sales.json",
        help="Sales file (.json/.csv), SQLite file (.db) or SQLAlchemy URL",
    )
    parser.add_argument(
        "--output-dir",
        dest="output_dir",
        default=".",
        help="Directory receiving report_<year>_<month>.txt, or a SQLAlchemy URL",
    )
    parser.add_argument(
        "--rates",
        dest="rates_path",
        help="Optional JSON file with exchange rates (defaults to built-in USD/EUR/GBP)",
    )
    parser.add_argument(
        "--base-currency",
        dest="base_currency",
        default=BASE_CURRENCY,
        help="Base currency used when --rates is a flat mapping",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=1,
        help="Number of write attempts before giving up",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug details such as currencies missing from the rate table",
    )
    parser.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        help="Print the report instead of writing it",
    )
    args = parser.parse_args(argv)
    if args.period:
        if args.year is not None or args.month is not None:
            parser.error("--period cannot be combined with --year/--month")
        try:
            args.period = parse_period(args.period)
        except ValueError as exc:
            parser.error(str(exc))
    elif args.year is None or args.month is None:
        parser.error("either --period or both --year and --month are required")
    else:
        args.period = ReportPeriod(year=args.year, month=args.month)
    if args.rates_path is None and args.base_currency.upper() != BASE_CURRENCY:
        parser.error("--base-currency requires --rates")
    if args.retries < 1:
        parser.error("--retries must be at least 1")
    return args


def _build_rates(args: argparse.Namespace) -> ExchangeRateTable:
    if args.rates_path:
        return load_rate_table(args.rates_path, base_currency=args.base_currency)
    return ExchangeRateTable.default()


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    period: ReportPeriod = args.period
    reporter: SalesReporter | None = None
    try:
        reporter = SalesReporter(
            source=args.source,
            sink=args.output_dir,
            rates=_build_rates(args),
        )
        if args.dry_run:
            result = reporter.build_report(period.year, period.month)
            print("\n".join(result.lines))
            return 0
        if args.retries > 1:
            reporter.sink = RetryingReportSink(reporter.sink, attempts=args.retries)
        reporter.create_report_for_year_and_month(period.year, period.month)
    except SalesReportingError as exc:
        LOGGER.error("Report for %s failed: %s", period.label, exc)
        return 1
    finally:
        if reporter is not None:
            reporter.close()
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
