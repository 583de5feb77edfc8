"""Abstractions for pluggable sale record sources."""

from __future__ import annotations

from typing import Protocol, Sequence

from sales_reporting.ingestion.models import SaleRecord


class RecordSource(Protocol):
    """Contract for loading sale records from any storage.

    Implementations raise :class:`~sales_reporting.errors.SourceUnavailable`
    when the storage cannot be read and
    :class:`~sales_reporting.errors.MalformedData` when its content cannot be
    parsed into :class:`SaleRecord` objects.
    """

    def load(self) -> Sequence[SaleRecord]:
        ...  # pragma: no cover - protocol definition


__all__ = ["RecordSource"]
