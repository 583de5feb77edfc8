"""Error taxonomy raised by sales_reporting collaborators."""

from __future__ import annotations


class SalesReportingError(Exception):
    """Base class for every error surfaced by the package."""


class SourceUnavailable(SalesReportingError):
    """The underlying record storage could not be opened or read."""


class MalformedData(SalesReportingError, ValueError):
    """Record storage was readable but its content could not be parsed."""


class WriteFailure(SalesReportingError):
    """A report sink failed to persist the report lines."""


__all__ = ["MalformedData", "SalesReportingError", "SourceUnavailable", "WriteFailure"]
