"""Retry wrapper for flaky report sinks."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from sales_reporting.errors import WriteFailure
from sales_reporting.sinks.base_sink import ReportSink
from sales_reporting.utils.logger import get_logger

LOGGER = get_logger(__name__)


class RetryingReportSink(ReportSink):
    """Retry ``WriteFailure`` errors of ``inner`` with exponential backoff.

    Only :class:`WriteFailure` is retried; once ``attempts`` are exhausted the
    last ``WriteFailure`` is re-raised unchanged.
    """

    def __init__(
        self,
        inner: ReportSink,
        *,
        attempts: int = 3,
        wait: wait_base | None = None,
    ) -> None:
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        self.inner = inner
        self.attempts = attempts
        self.wait = wait or wait_exponential(multiplier=1, min=1, max=10)

    def write(self, destination_key: str, lines: Sequence[str]) -> Any:
        retrying = Retrying(
            retry=retry_if_exception_type(WriteFailure),
            stop=stop_after_attempt(self.attempts),
            wait=self.wait,
            before_sleep=before_sleep_log(LOGGER, logging.WARNING),
            reraise=True,
        )
        return retrying(self.inner.write, destination_key, lines)

    def close(self) -> None:  # pragma: no cover - trivial delegator
        self.inner.close()


__all__ = ["RetryingReportSink"]
