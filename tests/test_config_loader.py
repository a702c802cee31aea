# tests/test_config_loader.py
"""
Tests for loading the limits preset table.

Verifies:
1. The packaged table loads and is immutable
2. Override files deep-merge over the base table
3. $PROMPTFIT_LIMITS_FILE is honoured
4. Missing, malformed and invalid files raise the matching ConfigError
"""

import pytest

from promptfit.config.loader import (
    DEFAULT_LIMITS_PATH,
    LIMITS_FILE_ENV,
    deep_merge,
    load_limits_table,
    load_yaml,
    parse_limits_table,
)
from promptfit.core.exceptions import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
)

BASE_YAML = """
providers:
  acme:
    rocket-1:
      max_tokens: 10
      max_chars: 40
      max_bytes: 80
    default:
      max_tokens: 20
      max_chars: 80
      max_bytes: 160
      max_images: 2
      image_byte_limit: 1000
"""


@pytest.fixture
def base_file(tmp_path):
    path = tmp_path / "limits.yaml"
    path.write_text(BASE_YAML, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def no_env_overrides(monkeypatch):
    monkeypatch.delenv(LIMITS_FILE_ENV, raising=False)


class TestDeepMerge:
    def test_nested_merge(self):
        assert deep_merge({"a": 1, "b": {"c": 2, "d": 3}}, {"b": {"c": 10}}) == {
            "a": 1,
            "b": {"c": 10, "d": 3},
        }

    def test_non_dict_replaces(self):
        assert deep_merge({"a": {"b": 1}}, {"a": 5}) == {"a": 5}

    def test_inputs_not_mutated(self):
        base = {"a": {"b": 1}}
        deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}


class TestLoadYaml:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigNotFoundError) as exc_info:
            load_yaml(tmp_path / "missing.yaml")
        assert "missing.yaml" in str(exc_info.value)

    def test_directory(self, tmp_path):
        with pytest.raises(ConfigError):
            load_yaml(tmp_path)

    def test_invalid_syntax(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("providers: [unclosed", encoding="utf-8")
        with pytest.raises(ConfigParseError):
            load_yaml(path)

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigParseError):
            load_yaml(path)

    def test_empty_file_is_empty_dict(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_yaml(path) == {}


class TestParseLimitsTable:
    def test_missing_providers(self):
        with pytest.raises(ConfigValidationError):
            parse_limits_table({"models": {}})

    def test_provider_not_mapping(self):
        with pytest.raises(ConfigValidationError):
            parse_limits_table({"providers": {"acme": [1, 2]}})

    def test_invalid_entry_names_provider_and_model(self):
        data = {"providers": {"acme": {"m": {"max_tokens": -1, "max_chars": 1, "max_bytes": 1}}}}
        with pytest.raises(ConfigValidationError) as exc_info:
            parse_limits_table(data)
        assert "acme/m" in str(exc_info.value)

    def test_camel_case_entries(self):
        data = {"providers": {"acme": {"m": {"maxTokens": 1, "maxChars": 2, "maxBytes": 3}}}}
        table = parse_limits_table(data)
        assert table["acme"]["m"].max_bytes == 3

    def test_table_is_read_only(self):
        data = {"providers": {"acme": {"m": {"max_tokens": 1, "max_chars": 1, "max_bytes": 1}}}}
        table = parse_limits_table(data)
        with pytest.raises(TypeError):
            table["other"] = {}
        with pytest.raises(TypeError):
            table["acme"]["x"] = None


class TestLoadLimitsTable:
    def test_packaged_defaults(self):
        assert DEFAULT_LIMITS_PATH.exists()
        table = load_limits_table()
        assert table["openai"]["gpt-4o"].max_bytes == 512000

    def test_explicit_path(self, base_file):
        table = load_limits_table(base_file)

        assert set(table) == {"acme"}
        assert table["acme"]["rocket-1"].max_images == 0
        assert table["acme"]["default"].max_images == 2

    def test_overrides_deep_merge(self, base_file, tmp_path):
        overrides = tmp_path / "overrides.yaml"
        overrides.write_text(
            "providers:\n"
            "  acme:\n"
            "    rocket-2:\n"
            "      max_tokens: 1\n"
            "      max_chars: 4\n"
            "      max_bytes: 8\n",
            encoding="utf-8",
        )
        table = load_limits_table(base_file, overrides)

        assert table["acme"]["rocket-1"].max_bytes == 80
        assert table["acme"]["rocket-2"].max_bytes == 8

    def test_field_override_keeps_other_fields(self, base_file, tmp_path):
        overrides = tmp_path / "overrides.yaml"
        overrides.write_text(
            "providers:\n  acme:\n    default:\n      max_images: 5\n", encoding="utf-8"
        )
        table = load_limits_table(base_file, overrides)

        assert table["acme"]["default"].max_images == 5
        assert table["acme"]["default"].max_bytes == 160

    def test_env_var_overrides(self, monkeypatch, tmp_path):
        overrides = tmp_path / "env.yaml"
        overrides.write_text(
            "providers:\n"
            "  in-house:\n"
            "    default:\n"
            "      max_tokens: 100\n"
            "      max_chars: 400\n"
            "      max_bytes: 400\n",
            encoding="utf-8",
        )
        monkeypatch.setenv(LIMITS_FILE_ENV, str(overrides))
        table = load_limits_table()

        assert table["in-house"]["default"].max_chars == 400
        assert "openai" in table

    def test_missing_override_file(self, base_file, tmp_path):
        with pytest.raises(ConfigNotFoundError):
            load_limits_table(base_file, tmp_path / "nope.yaml")
