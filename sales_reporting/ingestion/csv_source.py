"""Load sale records from CSV exports."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from sales_reporting.errors import MalformedData, SourceUnavailable
from sales_reporting.ingestion.models import SaleRecord
from sales_reporting.ingestion.parsing import record_from_mapping
from sales_reporting.utils.logger import get_logger

LOGGER = get_logger(__name__)

CSV_HEADER = ("date", "amount", "currency")


class CSVRecordSource:
    """Parse CSV files with a ``date,amount,currency`` header."""

    def __init__(self, path: str | Path, *, delimiter: str = ",") -> None:
        self.path = Path(path)
        self.delimiter = delimiter

    def load(self) -> list[SaleRecord]:
        try:
            handle = self.path.open("r", newline="", encoding="utf-8")
        except FileNotFoundError as exc:
            raise SourceUnavailable(f"Sales file not found: {self.path}") from exc
        except OSError as exc:
            raise SourceUnavailable(f"Could not read sales file {self.path}: {exc}") from exc

        with handle:
            try:
                reader = csv.DictReader(handle, delimiter=self.delimiter)
                self._validate_header(reader.fieldnames)
                rows: list[SaleRecord] = []
                # Line 1 is the header.
                for line_no, row in enumerate(reader, start=2):
                    normalised = {
                        key.strip().lower(): (value or "").strip()
                        for key, value in row.items()
                        if key is not None
                    }
                    if not any(normalised.values()):
                        continue
                    rows.append(record_from_mapping(normalised, position=line_no))
            except (csv.Error, UnicodeDecodeError) as exc:
                raise MalformedData(f"Sales file {self.path} is not valid CSV: {exc}") from exc
        LOGGER.info("Loaded %s sale records from %s", len(rows), self.path)
        return rows

    @staticmethod
    def _validate_header(fieldnames: Iterable[str] | None) -> None:
        if not fieldnames:
            raise MalformedData("CSV file does not contain a header row")
        normalized = {field.strip().lower() for field in fieldnames if field}
        missing = [column for column in CSV_HEADER if column not in normalized]
        if missing:
            raise MalformedData(f"CSV header is missing columns: {', '.join(missing)}")


__all__ = ["CSVRecordSource", "CSV_HEADER"]
