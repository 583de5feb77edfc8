"""Monthly sales aggregation and report formatting."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Final, Iterable

from sales_reporting.errors import MalformedData
from sales_reporting.ingestion.models import ReportResult, SaleRecord
from sales_reporting.rates import ExchangeRateTable
from sales_reporting.utils.logger import get_logger
from sales_reporting.utils.period import ReportPeriod

LOGGER = get_logger(__name__)

REPORT_TITLE: Final[str] = "Monatlicher Verkaufsbericht ({label})"
REPORT_SEPARATOR: Final[str] = "-" * 40
REPORT_TOTAL: Final[str] = "Gesamt Umsatz in {currency}: {total}"
CENT: Final[Decimal] = Decimal("0.01")


def aggregate(
    records: Iterable[SaleRecord],
    year: int,
    month: int,
    rates: ExchangeRateTable,
) -> ReportResult:
    """Sum the sales of ``year``/``month`` in the base currency of ``rates``.

    Records dated outside the month are ignored. Amounts in currencies missing
    from ``rates`` are added unconverted (multiplier ``1``). An empty month
    still produces a report with a zero total.
    """

    period = ReportPeriod(year=year, month=month)
    total = Decimal("0")
    matched = 0
    for record in records:
        if not isinstance(record, SaleRecord):
            raise MalformedData(f"expected SaleRecord, got {type(record).__name__}")
        if not period.contains(record.date):
            continue
        total += record.amount * rates.lookup(record.currency)
        matched += 1

    LOGGER.debug("Aggregated %s sales for %s", matched, period.label)
    lines = format_report_lines(period, total, rates.base_currency)
    return ReportResult(
        period=period,
        total=total,
        lines=lines,
        base_currency=rates.base_currency,
    )


def format_report_lines(
    period: ReportPeriod, total: Decimal, base_currency: str = "USD"
) -> tuple[str, ...]:
    """Render the three report lines: title, separator and total."""

    return (
        REPORT_TITLE.format(label=period.label),
        REPORT_SEPARATOR,
        REPORT_TOTAL.format(currency=base_currency, total=format_amount(total)),
    )


def format_amount(value: Decimal) -> str:
    """Format ``value`` with exactly two decimals and no grouping."""

    with localcontext() as ctx:
        # Room for every integer digit plus the two cents.
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        rounded = value.quantize(CENT, rounding=ROUND_HALF_UP)
        if rounded.is_zero():
            # Avoid rendering "-0.00" for tiny negative totals.
            rounded = abs(rounded)
    return f"{rounded:f}"


def report_destination_key(year: int, month: int) -> str:
    """Return the sink key for a period, e.g. ``report_2024_03``."""

    return ReportPeriod(year=year, month=month).destination_key


__all__ = [
    "REPORT_SEPARATOR",
    "aggregate",
    "format_amount",
    "format_report_lines",
    "report_destination_key",
]
