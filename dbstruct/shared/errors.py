"""Custom exceptions for struct generation."""

from __future__ import annotations


class GenerationError(Exception):
    """Base exception for every error raised while generating structs."""

    def __init__(
        self,
        message: str,
        table: str | None = None,
        column: str | None = None,
    ) -> None:
        self.table = table
        self.column = column
        if table and column:
            message = f"[{table}.{column}] {message}"
        elif table:
            message = f"[{table}] {message}"
        super().__init__(message)


class DialectError(GenerationError):
    """Raised when the requested database dialect is not supported."""

    def __init__(self, dialect: str) -> None:
        self.dialect = dialect
        super().__init__(f"Dialect '{dialect}' is not supported")


class UnsupportedTypeError(GenerationError):
    """Raised when a raw column type has no mapping rule."""

    def __init__(self, type_name: str, dialect: str) -> None:
        self.type_name = type_name
        self.dialect = dialect
        super().__init__(f"No type mapping for '{type_name}' ({dialect})")


class TypeMappingError(GenerationError):
    """Raised by the model builder when a column type cannot be mapped."""

    def __init__(self, type_name: str, table: str, column: str) -> None:
        self.type_name = type_name
        super().__init__(f"No type mapping for '{type_name}'", table, column)


class FilterConstructionError(GenerationError):
    """Raised when a table filter cannot be built from its pattern."""

    def __init__(self, message: str, pattern: str = "") -> None:
        self.pattern = pattern
        super().__init__(message)


class ConfigError(GenerationError):
    """Raised for invalid configuration files or option values."""

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        if config_path:
            message = f"[{config_path}] {message}"
        super().__init__(message)


class CatalogError(GenerationError):
    """Raised when the database catalog cannot be queried."""


class OutputError(GenerationError):
    """Raised when generated files cannot be written."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(f"{message}" if not path else f"{message}: {path}")


class CodegenError(GenerationError):
    """Raised when the emitter is handed a field it cannot render."""
