"""Report sink interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence


class ReportSink(ABC):
    """Common interface implemented by every report destination."""

    @abstractmethod
    def write(self, destination_key: str, lines: Sequence[str]) -> Any:
        """Persist ``lines`` in order under ``destination_key``.

        Implementations raise :class:`~sales_reporting.errors.WriteFailure` on
        I/O errors.
        """

    def close(self) -> None:  # pragma: no cover - optional cleanup hook
        """Sinks may override to release connections/resources."""


__all__ = ["ReportSink"]
