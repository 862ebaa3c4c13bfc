"""Dialect type tables mapping raw column types onto Go types."""

from __future__ import annotations

import re
from enum import Enum
from functools import lru_cache
from typing import Final, Mapping

from ..shared import DialectError, UnsupportedTypeError


class Dialect(str, Enum):
    """Supported database dialects."""

    MYSQL = "mysql"
    POSTGRESQL = "postgresql"

    @classmethod
    def parse(cls, value: str | Dialect) -> Dialect:
        """Resolve a configured dialect tag, accepting common aliases."""
        if isinstance(value, Dialect):
            return value
        tag = str(value).strip().lower()
        try:
            return cls(_DIALECT_ALIASES.get(tag, tag))
        except ValueError:
            raise DialectError(str(value)) from None


_DIALECT_ALIASES: Final[dict[str, str]] = {
    "mariadb": "mysql",
    "postgres": "postgresql",
    "pg": "postgresql",
}


class GoType(str, Enum):
    """Canonical Go types a column can be emitted as.

    ``BOOL`` extends the classic set and is produced only by PostgreSQL
    ``boolean``; MySQL booleans stay ``tinyint`` and map to ``INT8``.
    """

    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    STRING = "string"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BYTES = "[]byte"
    TIME = "time.Time"
    BOOL = "bool"


# (signed, unsigned) for integer families; both entries equal elsewhere
MYSQL_TYPES: Final[dict[str, tuple[GoType, GoType]]] = {
    "tinyint": (GoType.INT8, GoType.UINT8),
    "smallint": (GoType.INT16, GoType.UINT16),
    "mediumint": (GoType.INT32, GoType.UINT32),
    "int": (GoType.INT32, GoType.UINT32),
    "integer": (GoType.INT32, GoType.UINT32),
    "bigint": (GoType.INT64, GoType.UINT64),
    "year": (GoType.INT16, GoType.INT16),
    "bit": (GoType.BYTES, GoType.BYTES),
    "float": (GoType.FLOAT32, GoType.FLOAT32),
    "double": (GoType.FLOAT64, GoType.FLOAT64),
    "double precision": (GoType.FLOAT64, GoType.FLOAT64),
    "real": (GoType.FLOAT64, GoType.FLOAT64),
    "decimal": (GoType.FLOAT64, GoType.FLOAT64),
    "numeric": (GoType.FLOAT64, GoType.FLOAT64),
    "char": (GoType.STRING, GoType.STRING),
    "varchar": (GoType.STRING, GoType.STRING),
    "tinytext": (GoType.STRING, GoType.STRING),
    "text": (GoType.STRING, GoType.STRING),
    "mediumtext": (GoType.STRING, GoType.STRING),
    "longtext": (GoType.STRING, GoType.STRING),
    "enum": (GoType.STRING, GoType.STRING),
    "set": (GoType.STRING, GoType.STRING),
    "json": (GoType.STRING, GoType.STRING),
    "time": (GoType.STRING, GoType.STRING),
    "binary": (GoType.BYTES, GoType.BYTES),
    "varbinary": (GoType.BYTES, GoType.BYTES),
    "tinyblob": (GoType.BYTES, GoType.BYTES),
    "blob": (GoType.BYTES, GoType.BYTES),
    "mediumblob": (GoType.BYTES, GoType.BYTES),
    "longblob": (GoType.BYTES, GoType.BYTES),
    "geometry": (GoType.BYTES, GoType.BYTES),
    "date": (GoType.TIME, GoType.TIME),
    "datetime": (GoType.TIME, GoType.TIME),
    "timestamp": (GoType.TIME, GoType.TIME),
}

POSTGRESQL_TYPES: Final[dict[str, GoType]] = {
    "smallint": GoType.INT16,
    "int2": GoType.INT16,
    "smallserial": GoType.INT16,
    "serial2": GoType.INT16,
    "integer": GoType.INT32,
    "int": GoType.INT32,
    "int4": GoType.INT32,
    "serial": GoType.INT32,
    "serial4": GoType.INT32,
    "bigint": GoType.INT64,
    "int8": GoType.INT64,
    "bigserial": GoType.INT64,
    "serial8": GoType.INT64,
    "real": GoType.FLOAT32,
    "float4": GoType.FLOAT32,
    "double precision": GoType.FLOAT64,
    "float8": GoType.FLOAT64,
    "numeric": GoType.FLOAT64,
    "decimal": GoType.FLOAT64,
    "money": GoType.STRING,
    "boolean": GoType.BOOL,
    "bool": GoType.BOOL,
    "character varying": GoType.STRING,
    "varchar": GoType.STRING,
    "character": GoType.STRING,
    "char": GoType.STRING,
    "bpchar": GoType.STRING,
    "text": GoType.STRING,
    "citext": GoType.STRING,
    "name": GoType.STRING,
    "uuid": GoType.STRING,
    "json": GoType.STRING,
    "jsonb": GoType.STRING,
    "xml": GoType.STRING,
    "inet": GoType.STRING,
    "cidr": GoType.STRING,
    "macaddr": GoType.STRING,
    "interval": GoType.STRING,
    "time": GoType.STRING,
    "time without time zone": GoType.STRING,
    "time with time zone": GoType.STRING,
    "timetz": GoType.STRING,
    "bytea": GoType.BYTES,
    "date": GoType.TIME,
    "timestamp": GoType.TIME,
    "timestamp without time zone": GoType.TIME,
    "timestamp with time zone": GoType.TIME,
    "timestamptz": GoType.TIME,
}

DIALECT_TYPES: Final[Mapping[Dialect, Mapping[str, GoType | tuple[GoType, GoType]]]] = {
    Dialect.MYSQL: MYSQL_TYPES,
    Dialect.POSTGRESQL: POSTGRESQL_TYPES,
}

_PRECISION = re.compile(r"\([^)]*\)")
_MODIFIERS: Final[frozenset[str]] = frozenset({"unsigned", "signed", "zerofill"})


@lru_cache(maxsize=512)
def normalize_type(raw_type: str) -> tuple[str, bool]:
    """Reduce a raw column type to its lookup key.

    Returns the key and whether an ``unsigned`` modifier was present.

    Examples:
        >>> normalize_type("INT(11) UNSIGNED")
        ('int', True)
        >>> normalize_type("timestamp(6) without time zone")
        ('timestamp without time zone', False)
    """
    words = _PRECISION.sub(" ", raw_type.lower()).split()
    unsigned = "unsigned" in words
    key = " ".join(word for word in words if word not in _MODIFIERS)
    return key, unsigned


def map_type(
    dialect: Dialect | str,
    raw_type: str,
    unsigned: bool | None = None,
) -> GoType:
    """Map a raw column type to its canonical Go type.

    Args:
        dialect: Dialect whose type table is consulted.
        raw_type: Column type as reported by the catalog, e.g. ``int(11) unsigned``.
        unsigned: Signedness hint overriding the modifier parsed from ``raw_type``.

    Raises:
        DialectError: If the dialect is unknown.
        UnsupportedTypeError: If no rule matches the raw type.
    """
    resolved = Dialect.parse(dialect)
    key, parsed_unsigned = normalize_type(raw_type)
    mapped = DIALECT_TYPES[resolved].get(key)
    if mapped is None:
        raise UnsupportedTypeError(raw_type, resolved.value)

    if isinstance(mapped, tuple):
        is_unsigned = parsed_unsigned if unsigned is None else unsigned
        return mapped[1] if is_unsigned else mapped[0]
    return mapped
