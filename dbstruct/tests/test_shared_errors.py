from dbstruct.shared.errors import (
    CatalogError,
    ConfigError,
    DialectError,
    FilterConstructionError,
    GenerationError,
    OutputError,
    TypeMappingError,
    UnsupportedTypeError,
)


class TestGenerationError:
    def test_init_no_context(self):
        error = GenerationError("test message")
        assert str(error) == "test message"
        assert error.table is None
        assert error.column is None

    def test_init_with_table(self):
        error = GenerationError("test message", "users")
        assert str(error) == "[users] test message"
        assert error.table == "users"

    def test_init_with_table_and_column(self):
        error = GenerationError("test message", "users", "id")
        assert str(error) == "[users.id] test message"
        assert error.column == "id"


class TestDialectError:
    def test_init(self):
        error = DialectError("oracle")
        assert str(error) == "Dialect 'oracle' is not supported"
        assert error.dialect == "oracle"
        assert isinstance(error, GenerationError)


class TestUnsupportedTypeError:
    def test_init(self):
        error = UnsupportedTypeError("geography", "postgresql")
        assert str(error) == "No type mapping for 'geography' (postgresql)"
        assert error.type_name == "geography"
        assert error.dialect == "postgresql"


class TestTypeMappingError:
    def test_init(self):
        error = TypeMappingError("geography", "places", "location")
        assert str(error) == "[places.location] No type mapping for 'geography'"
        assert error.type_name == "geography"
        assert error.table == "places"
        assert error.column == "location"


class TestFilterConstructionError:
    def test_init(self):
        error = FilterConstructionError("bad pattern", "t_(")
        assert str(error) == "bad pattern"
        assert error.pattern == "t_("


class TestConfigError:
    def test_init_no_path(self):
        error = ConfigError("unknown key")
        assert str(error) == "unknown key"
        assert error.config_path is None

    def test_init_with_path(self):
        error = ConfigError("unknown key", "dbstruct.yaml")
        assert str(error) == "[dbstruct.yaml] unknown key"


class TestOutputError:
    def test_init_with_path(self):
        error = OutputError("Failed to write", "model/user.go")
        assert str(error) == "Failed to write: model/user.go"
        assert error.path == "model/user.go"


class TestCatalogError:
    def test_is_generation_error(self):
        assert isinstance(CatalogError("connection refused"), GenerationError)
