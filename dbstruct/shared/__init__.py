"""Shared utilities for struct generation."""

from .schema_loader import (
    load_schema,
    dump_schema,
)
from .naming import (
    title_case,
    camel_case,
    one_line,
)
from .errors import (
    GenerationError,
    DialectError,
    UnsupportedTypeError,
    TypeMappingError,
    FilterConstructionError,
    ConfigError,
    CatalogError,
    OutputError,
    CodegenError,
)

__all__ = [
    # YAML loading
    "load_schema",
    "dump_schema",
    # Naming utilities
    "title_case",
    "camel_case",
    "one_line",
    # Errors
    "GenerationError",
    "DialectError",
    "UnsupportedTypeError",
    "TypeMappingError",
    "FilterConstructionError",
    "ConfigError",
    "CatalogError",
    "OutputError",
    "CodegenError",
]
