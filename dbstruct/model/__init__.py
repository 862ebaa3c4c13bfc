"""Table model: options, filters, type mapping and the model builder."""

from .types import (
    Dialect,
    GoType,
    MYSQL_TYPES,
    POSTGRESQL_TYPES,
    DIALECT_TYPES,
    map_type,
    normalize_type,
)
from .options import (
    Filter,
    Options,
    new_filter,
    select_table,
)
from .raw import (
    RawColumn,
    RawTable,
    load_snapshot,
    dump_snapshot,
)
from .builder import (
    Field,
    Table,
    build,
)

__all__ = [
    "Dialect",
    "GoType",
    "MYSQL_TYPES",
    "POSTGRESQL_TYPES",
    "DIALECT_TYPES",
    "map_type",
    "normalize_type",
    "Filter",
    "Options",
    "new_filter",
    "select_table",
    "RawColumn",
    "RawTable",
    "load_snapshot",
    "dump_snapshot",
    "Field",
    "Table",
    "build",
]
