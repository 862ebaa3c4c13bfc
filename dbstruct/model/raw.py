"""Raw catalog records and YAML schema snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

from ..shared import ConfigError, dump_schema, load_schema


@dataclass(frozen=True, slots=True)
class RawColumn:
    """A column exactly as the catalog reports it."""

    name: str
    raw_type: str
    nullable: bool = False
    default: str = ""
    key: str = ""
    comment: str = ""


@dataclass(frozen=True, slots=True)
class RawTable:
    """A table exactly as the catalog reports it, columns in ordinal order."""

    name: str
    comment: str = ""
    columns: tuple[RawColumn, ...] = ()


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _raw_column(column: Any, table_name: str, path: str) -> RawColumn:
    if not isinstance(column, dict):
        raise ConfigError(f"table '{table_name}': column entries must be mappings", path)
    if not column.get("name") or not column.get("type"):
        raise ConfigError(
            f"table '{table_name}': column is missing required 'name' or 'type'",
            path,
        )
    return RawColumn(
        name=str(column["name"]),
        raw_type=str(column["type"]),
        nullable=bool(column.get("nullable", False)),
        default=_text(column.get("default")),
        key=_text(column.get("key")),
        comment=_text(column.get("comment")),
    )


def load_snapshot(snapshot_path: Path) -> list[RawTable]:
    """Load raw tables from a YAML schema snapshot.

    Raises:
        ConfigError: If the file is unreadable or malformed.
    """
    path = str(snapshot_path)
    data = load_schema(snapshot_path)
    tables = data.get("tables")
    if not isinstance(tables, list):
        raise ConfigError("snapshot must provide a 'tables' list", path)

    raw_tables: list[RawTable] = []
    for table in tables:
        if not isinstance(table, dict) or not table.get("name"):
            raise ConfigError("every table needs a 'name'", path)
        name = str(table["name"])
        columns = table.get("columns") or []
        if not isinstance(columns, list):
            raise ConfigError(f"table '{name}': 'columns' must be a list", path)
        raw_tables.append(
            RawTable(
                name=name,
                comment=_text(table.get("comment")),
                columns=tuple(_raw_column(column, name, path) for column in columns),
            )
        )
    return raw_tables


def dump_snapshot(snapshot_path: Path, tables: Sequence[RawTable]) -> None:
    """Write raw tables as a YAML snapshot readable by ``load_snapshot``."""
    dump_schema(
        snapshot_path,
        {
            "tables": [
                {
                    "name": table.name,
                    "comment": table.comment,
                    "columns": [
                        {
                            "name": column.name,
                            "type": column.raw_type,
                            "nullable": column.nullable,
                            "default": column.default,
                            "key": column.key,
                            "comment": column.comment,
                        }
                        for column in table.columns
                    ],
                }
                for table in tables
            ]
        },
    )
