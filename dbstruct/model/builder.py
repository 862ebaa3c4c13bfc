"""Builds the dialect independent table model from raw catalog records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from ..shared import TypeMappingError, UnsupportedTypeError, title_case
from .options import Options, select_table
from .raw import RawColumn, RawTable
from .types import Dialect, GoType, map_type

logger = logging.getLogger("dbstruct")


@dataclass(frozen=True, slots=True)
class Field:
    """A mapped column."""

    field: str
    type: str
    go_type: GoType
    nullable: bool = False
    default: str = ""
    key: str = ""
    comment: str = ""


@dataclass(slots=True)
class Table:
    """A selected table and, once rendered, its Go declaration."""

    name: str
    prefix: str = ""
    comment: str = ""
    fields: list[Field] = field(default_factory=list)
    go_struct: str = field(default="", init=False)

    @property
    def short_name(self) -> str:
        """Table name with the matched filter prefix removed."""
        return self.name.removeprefix(self.prefix)

    @property
    def struct_name(self) -> str:
        return title_case(self.short_name)

    @property
    def uses_time(self) -> bool:
        return any(f.go_type is GoType.TIME for f in self.fields)


def _build_field(dialect: Dialect, table_name: str, column: RawColumn) -> Field:
    try:
        go_type = map_type(dialect, column.raw_type)
    except UnsupportedTypeError as e:
        raise TypeMappingError(column.raw_type, table_name, column.name) from e

    return Field(
        field=column.name,
        type=column.raw_type,
        go_type=go_type,
        nullable=column.nullable,
        default=column.default,
        key=column.key,
        comment=column.comment,
    )


def build(
    options: Options,
    raw_tables: Sequence[RawTable],
    log: logging.Logger | None = None,
) -> list[Table]:
    """Select and map raw tables into the table model.

    Aborts on the first column whose type cannot be mapped, so no partially
    typed table ever reaches the emitter.

    Raises:
        TypeMappingError: Annotated with the offending table and column.
    """
    log = log or logger
    exclude = frozenset(options.exclude)
    tables: list[Table] = []

    for raw in raw_tables:
        selected, prefix = select_table(raw.name, options.filters, exclude)
        if not selected:
            log.debug("skip table %s", raw.name)
            continue

        tables.append(
            Table(
                name=raw.name,
                prefix=prefix,
                comment=raw.comment,
                fields=[
                    _build_field(options.dialect, raw.name, column)
                    for column in raw.columns
                ],
            )
        )

    log.info("selected %d of %d table(s)", len(tables), len(raw_tables))
    return tables
