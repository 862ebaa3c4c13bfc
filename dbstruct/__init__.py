"""database-struct: generate Go structs from MySQL and PostgreSQL schemas."""

__version__ = "0.3.0"
