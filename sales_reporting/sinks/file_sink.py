"""Write reports as plain text files."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from sales_reporting.errors import WriteFailure
from sales_reporting.sinks.base_sink import ReportSink
from sales_reporting.utils.logger import get_logger

LOGGER = get_logger(__name__)


class TextFileSink(ReportSink):
    """Store each report as ``<output_dir>/<destination_key>.txt``."""

    def __init__(self, output_dir: str | Path | None = None, *, suffix: str = ".txt") -> None:
        self.output_dir = Path(output_dir) if output_dir else Path.cwd()
        self.suffix = suffix

    def path_for(self, destination_key: str) -> Path:
        return self.output_dir / f"{destination_key}{self.suffix}"

    def write(self, destination_key: str, lines: Sequence[str]) -> Path:
        report_path = self.path_for(destination_key)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            with report_path.open("w", encoding="utf-8", newline="\n") as handle:
                for line in lines:
                    handle.write(f"{line}\n")
        except OSError as exc:
            raise WriteFailure(f"Could not write report {report_path}: {exc}") from exc
        LOGGER.info("Wrote %s report lines to %s", len(lines), report_path)
        return report_path


__all__ = ["TextFileSink"]
