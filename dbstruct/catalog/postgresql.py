"""PostgreSQL catalog driver."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.sql.elements import TextClause

from .base import CatalogDriver


class PostgresqlDriver(CatalogDriver):
    """Reads ordinary and partitioned tables of the current schema."""

    name = "postgresql"

    def tables_query(self) -> TextClause:
        return text(
            """
            SELECT c.relname AS table_name, obj_description(c.oid, 'pg_class') AS table_comment
            FROM pg_class c
            JOIN pg_namespace n ON n.oid = c.relnamespace
            WHERE n.nspname = current_schema() AND c.relkind IN ('r', 'p')
            ORDER BY c.relname
            """
        )

    def columns_query(self) -> TextClause:
        # format_type drops the typmod for plain types, so 'integer' stays 'integer'
        return text(
            """
            SELECT c.relname AS table_name,
                   a.attname AS column_name,
                   format_type(a.atttypid, a.atttypmod) AS column_type,
                   CASE WHEN a.attnotnull THEN 'NO' ELSE 'YES' END AS is_nullable,
                   pg_get_expr(d.adbin, d.adrelid) AS column_default,
                   CASE WHEN EXISTS (
                       SELECT 1 FROM pg_index i
                       WHERE i.indrelid = c.oid AND i.indisprimary AND a.attnum = ANY (i.indkey)
                   ) THEN 'PRI' ELSE '' END AS column_key,
                   col_description(c.oid, a.attnum) AS column_comment
            FROM pg_class c
            JOIN pg_namespace n ON n.oid = c.relnamespace
            JOIN pg_attribute a ON a.attrelid = c.oid
            LEFT JOIN pg_attrdef d ON d.adrelid = c.oid AND d.adnum = a.attnum
            WHERE n.nspname = current_schema()
              AND c.relkind IN ('r', 'p')
              AND a.attnum > 0
              AND NOT a.attisdropped
            ORDER BY c.relname, a.attnum
            """
        )
