"""Load sale records from a JSON file such as ``sales.json``."""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

from sales_reporting.errors import MalformedData, SourceUnavailable
from sales_reporting.ingestion.models import SaleRecord
from sales_reporting.ingestion.parsing import record_from_mapping
from sales_reporting.utils.logger import get_logger

LOGGER = get_logger(__name__)


class JSONRecordSource:
    """Read a JSON array of ``{"Date", "Amount", "Currency"}`` objects.

    Keys are accepted in PascalCase or lower case. Floats are parsed straight
    into :class:`Decimal` so amounts never pass through binary floats.
    """

    def __init__(self, path: str | Path, *, encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding

    def load(self) -> list[SaleRecord]:
        try:
            raw = self.path.read_text(encoding=self.encoding)
        except FileNotFoundError as exc:
            raise SourceUnavailable(f"Sales file not found: {self.path}") from exc
        except OSError as exc:
            raise SourceUnavailable(f"Could not read sales file {self.path}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise MalformedData(f"Sales file {self.path} is not {self.encoding} text") from exc

        try:
            payload = json.loads(raw, parse_float=Decimal)
        except json.JSONDecodeError as exc:
            raise MalformedData(f"Sales file {self.path} is not valid JSON: {exc}") from exc
        if not isinstance(payload, list):
            raise MalformedData(f"Sales file {self.path} must contain a JSON array")

        records = [record_from_mapping(row, position=index) for index, row in enumerate(payload)]
        LOGGER.info("Loaded %s sale records from %s", len(records), self.path)
        return records


__all__ = ["JSONRecordSource"]
