"""MySQL catalog driver."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.sql.elements import TextClause

from .base import CatalogDriver


class MysqlDriver(CatalogDriver):
    """Reads tables of the database selected by the DSN."""

    name = "mysql"

    def tables_query(self) -> TextClause:
        return text(
            """
            SELECT TABLE_NAME, TABLE_COMMENT
            FROM information_schema.TABLES
            WHERE TABLE_SCHEMA = DATABASE() AND TABLE_TYPE = 'BASE TABLE'
            ORDER BY TABLE_NAME
            """
        )

    def columns_query(self) -> TextClause:
        # COLUMN_TYPE keeps the unsigned modifier that DATA_TYPE drops
        return text(
            """
            SELECT TABLE_NAME, COLUMN_NAME, COLUMN_TYPE, IS_NULLABLE,
                   COLUMN_DEFAULT, COLUMN_KEY, COLUMN_COMMENT
            FROM information_schema.COLUMNS
            WHERE TABLE_SCHEMA = DATABASE()
            ORDER BY TABLE_NAME, ORDINAL_POSITION
            """
        )
