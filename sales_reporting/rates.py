"""Exchange rate table used to normalise sale amounts into the base currency."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from decimal import Decimal
from pathlib import Path
from typing import Final

from sales_reporting.errors import MalformedData, SourceUnavailable
from sales_reporting.ingestion.models import to_decimal
from sales_reporting.utils.logger import get_logger

LOGGER = get_logger(__name__)

BASE_CURRENCY: Final[str] = "USD"
DEFAULT_EXCHANGE_RATES: Final[Mapping[str, str]] = {
    "USD": "1.0",
    "EUR": "1.1",
    "GBP": "1.3",
}
# Multiplier applied to currencies missing from the table: the amount is
# treated as already being expressed in the base currency.
FALLBACK_RATE: Final[Decimal] = Decimal("1")


class ExchangeRateTable(Mapping[str, Decimal]):
    """Immutable, case-insensitive mapping of currency code to base multiplier.

    Every rate expresses how many units of the base currency one unit of the
    keyed currency is worth. The base currency itself always maps to exactly
    ``1``; it is inserted automatically when the caller omits it.
    """

    __slots__ = ("_base_currency", "_rates")

    def __init__(
        self,
        rates: Mapping[str, object] | None = None,
        *,
        base_currency: str = BASE_CURRENCY,
    ) -> None:
        base = base_currency.strip().upper()
        if not base:
            raise ValueError("base_currency must not be empty")
        normalised: dict[str, Decimal] = {}
        for code, raw_rate in (rates or {}).items():
            key = str(code).strip().upper()
            if not key:
                raise ValueError("currency codes must not be empty")
            try:
                rate = to_decimal(raw_rate, field=f"rate for {key}")
            except MalformedData as exc:
                raise ValueError(str(exc)) from exc
            if rate <= 0:
                raise ValueError(f"rate for {key} must be positive, got {raw_rate!r}")
            normalised[key] = rate
        if normalised.setdefault(base, Decimal("1")) != 1:
            raise ValueError(f"base currency {base} must map to 1, got {normalised[base]}")
        self._base_currency = base
        self._rates = normalised

    @classmethod
    def default(cls) -> "ExchangeRateTable":
        """Return the built-in USD/EUR/GBP table."""

        return cls(DEFAULT_EXCHANGE_RATES, base_currency=BASE_CURRENCY)

    @property
    def base_currency(self) -> str:
        return self._base_currency

    def lookup(self, currency: str) -> Decimal:
        """Return the multiplier for ``currency``, falling back to ``1``.

        Unknown currencies are deliberately not an error.
        """

        rate = self._rates.get(currency.strip().upper())
        if rate is None:
            LOGGER.debug(
                "No exchange rate for %s; treating amount as %s", currency, self._base_currency
            )
            return FALLBACK_RATE
        return rate

    def __getitem__(self, currency: str) -> Decimal:
        return self._rates[currency.strip().upper()]

    def __contains__(self, currency: object) -> bool:
        if not isinstance(currency, str):
            return False
        return currency.strip().upper() in self._rates

    def __iter__(self) -> Iterator[str]:
        return iter(self._rates)

    def __len__(self) -> int:
        return len(self._rates)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExchangeRateTable):
            return NotImplemented
        return self._base_currency == other._base_currency and self._rates == other._rates

    def __hash__(self) -> int:
        return hash((self._base_currency, frozenset(self._rates.items())))

    def __repr__(self) -> str:
        rates = ", ".join(f"{code}={rate}" for code, rate in sorted(self._rates.items()))
        return f"ExchangeRateTable(base={self._base_currency}, {rates})"


def load_rate_table(
    path: str | Path, *, base_currency: str = BASE_CURRENCY
) -> ExchangeRateTable:
    """Load an :class:`ExchangeRateTable` from a JSON file.

    Two layouts are accepted: a flat ``{"EUR": 1.1, ...}`` mapping, or
    ``{"base_currency": "USD", "rates": {"EUR": 1.1, ...}}``. ``base_currency``
    applies to the flat layout only.
    """

    rate_path = Path(path)
    try:
        payload = json.loads(rate_path.read_text(encoding="utf-8"), parse_float=Decimal)
    except FileNotFoundError as exc:
        raise SourceUnavailable(f"Rate file not found: {rate_path}") from exc
    except OSError as exc:
        raise SourceUnavailable(f"Could not read rate file {rate_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise MalformedData(f"Rate file {rate_path} is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise MalformedData(f"Rate file {rate_path} must contain a JSON object")
    rates = payload
    if "rates" in payload:
        rates = payload["rates"]
        base_currency = payload.get("base_currency") or base_currency
        if not isinstance(rates, dict) or not isinstance(base_currency, str):
            raise MalformedData(f"Rate file {rate_path} has an invalid 'rates' section")
    try:
        table = ExchangeRateTable(rates, base_currency=base_currency)
    except ValueError as exc:
        raise MalformedData(f"Rate file {rate_path}: {exc}") from exc
    LOGGER.info("Loaded %s exchange rates from %s", len(table), rate_path)
    return table


__all__ = [
    "BASE_CURRENCY",
    "DEFAULT_EXCHANGE_RATES",
    "FALLBACK_RATE",
    "ExchangeRateTable",
    "load_rate_table",
]
