"""Helpers for locating the sales database."""

from __future__ import annotations

from pathlib import Path
from typing import Final

__all__ = ["DEFAULT_SALES_DB_PATH", "resolve_database_url"]

DEFAULT_SALES_DB_PATH: Final[Path] = Path("sales.db")


def resolve_database_url(target: str | Path = DEFAULT_SALES_DB_PATH) -> str:
    """Return a SQLAlchemy URL for ``target``.

    Strings that already carry a scheme (``sqlite:///``, ``postgresql://``) are
    returned untouched; anything else is treated as a SQLite file path.
    """

    if isinstance(target, str) and "://" in target:
        return target
    # SQLite requires an absolute path once the package runs from site-packages.
    return f"sqlite:///{Path(target).expanduser().resolve().as_posix()}"
