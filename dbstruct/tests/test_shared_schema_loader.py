import pytest

from dbstruct.shared.errors import ConfigError, OutputError
from dbstruct.shared.schema_loader import dump_schema, load_schema


class TestLoadSchema:
    def test_load_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("db_type: mysql\nexclude:\n  - logs\n")

        assert load_schema(path) == {"db_type": "mysql", "exclude": ["logs"]}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert load_schema(path) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Failed to read file"):
            load_schema(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("tables: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_schema(path)

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="must be a mapping"):
            load_schema(path)


class TestDumpSchema:
    def test_dump_then_load(self, tmp_path):
        path = tmp_path / "nested" / "snapshot.yaml"
        data = {"tables": [{"name": "users", "comment": "用户"}]}

        dump_schema(path, data)

        assert load_schema(path) == data
        assert "用户" in path.read_text(encoding="utf-8")

    def test_keeps_key_order(self, tmp_path):
        path = tmp_path / "snapshot.yaml"
        dump_schema(path, {"z": 1, "a": 2})

        assert path.read_text().splitlines() == ["z: 1", "a: 2"]

    def test_unwritable_path(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")

        with pytest.raises(OutputError):
            dump_schema(blocker / "snapshot.yaml", {})
