"""CLI entry point for generating the monthly sales report."""

from __future__ import annotations

from sales_reporting.cli import main

if __name__ == "__main__":  # pragma: no cover - thin wrapper
    raise SystemExit(main())
