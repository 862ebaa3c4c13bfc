"""Catalog drivers reading raw table metadata from a live database."""

from __future__ import annotations

from ..model import Dialect, RawTable
from .base import CatalogDriver
from .mysql import MysqlDriver
from .postgresql import PostgresqlDriver

_DRIVERS: dict[Dialect, type[CatalogDriver]] = {
    Dialect.MYSQL: MysqlDriver,
    Dialect.POSTGRESQL: PostgresqlDriver,
}


def get_driver(dialect: Dialect | str) -> CatalogDriver:
    """Get the catalog driver for a dialect.

    Raises:
        DialectError: If the dialect is not supported.
    """
    return _DRIVERS[Dialect.parse(dialect)]()


def fetch_tables(dsn: str, dialect: Dialect | str) -> list[RawTable]:
    """Read raw tables through the dialect's driver."""
    return get_driver(dialect).fetch_tables(dsn)


__all__ = [
    "CatalogDriver",
    "MysqlDriver",
    "PostgresqlDriver",
    "get_driver",
    "fetch_tables",
]
