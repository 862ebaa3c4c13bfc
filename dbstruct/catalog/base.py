"""
Catalog driver base class.

Each dialect (MySQL, PostgreSQL) implements the table and column queries
against its own catalog; the shared part turns result rows into raw
tables ordered the way the catalog reports them.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.sql.elements import TextClause

from ..model import RawColumn, RawTable
from ..shared import CatalogError

logger = logging.getLogger("dbstruct")


class CatalogDriver(ABC):
    """Abstract base for catalog drivers."""

    name: str = ""

    @abstractmethod
    def tables_query(self) -> TextClause:
        """Query returning ``(table_name, table_comment)`` rows."""

    @abstractmethod
    def columns_query(self) -> TextClause:
        """Query returning one row per column in table and ordinal order.

        Columns: ``table_name, column_name, column_type, is_nullable,
        column_default, column_key, column_comment``.
        """

    def engine_for(self, dsn: str) -> Engine:
        try:
            return create_engine(dsn)
        except (ArgumentError, ImportError) as e:
            raise CatalogError(f"Cannot create {self.name} engine: {e}") from e

    def fetch_tables(self, dsn: str) -> list[RawTable]:
        """Read every table of the connected database or schema.

        Raises:
            CatalogError: On connection, authentication or query failures.
        """
        engine = self.engine_for(dsn)
        try:
            with engine.connect() as conn:
                table_rows = conn.execute(self.tables_query()).fetchall()
                column_rows = conn.execute(self.columns_query()).fetchall()
        except SQLAlchemyError as e:
            raise CatalogError(f"Failed to read {self.name} catalog: {e}") from e
        finally:
            engine.dispose()

        tables = self.assemble(table_rows, column_rows)
        logger.info("read %d table(s) from %s catalog", len(tables), self.name)
        return tables

    @staticmethod
    def assemble(
        table_rows: Iterable[Any],
        column_rows: Iterable[Any],
    ) -> list[RawTable]:
        """Group column rows under their table rows, keeping both orders."""
        columns: dict[str, list[RawColumn]] = {}
        for row in column_rows:
            table_name, name, column_type, is_nullable, default, key, comment = row
            columns.setdefault(str(table_name), []).append(
                RawColumn(
                    name=str(name),
                    raw_type=str(column_type),
                    nullable=str(is_nullable).upper() == "YES",
                    default="" if default is None else str(default),
                    key=key or "",
                    comment=comment or "",
                )
            )

        return [
            RawTable(
                name=str(name),
                comment=comment or "",
                columns=tuple(columns.get(str(name), ())),
            )
            for name, comment in table_rows
        ]
