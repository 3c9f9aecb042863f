"""Tests for configuration management."""

import logging

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    _convert_value,
    _parse_bool,
    get_environment,
    get_environment_info,
    get_log_level,
    list_environment_variables,
    strict_patterns_enabled,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("ISONANTIC_LOG_LEVEL", raising=False)
        assert get_environment(EnvVar.ISONANTIC_LOG_LEVEL) == "WARNING"

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("ISONANTIC_STRICT_PATTERNS", "false")
        assert get_environment(EnvVar.ISONANTIC_STRICT_PATTERNS, override=True) is True

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("ISONANTIC_LOG_LEVEL", "DEBUG")
        assert get_environment(EnvVar.ISONANTIC_LOG_LEVEL) == "DEBUG"

    @pytest.mark.unit
    def test_bool_type_conversion_true(self, monkeypatch):
        """Boolean type conversion for true values."""
        for value in ("true", "1", "yes", "TRUE", "Yes"):
            monkeypatch.setenv("ISONANTIC_STRICT_PATTERNS", value)
            assert get_environment(EnvVar.ISONANTIC_STRICT_PATTERNS) is True

    @pytest.mark.unit
    def test_bool_type_conversion_false(self, monkeypatch):
        """Boolean type conversion for false values."""
        for value in ("false", "0", "no", "FALSE", "No"):
            monkeypatch.setenv("ISONANTIC_STRICT_PATTERNS", value)
            assert get_environment(EnvVar.ISONANTIC_STRICT_PATTERNS) is False

    @pytest.mark.unit
    def test_unrecognized_bool_returns_default(self, monkeypatch):
        """Garbage boolean values fall back to the default."""
        monkeypatch.setenv("ISONANTIC_STRICT_PATTERNS", "maybe")
        assert get_environment(EnvVar.ISONANTIC_STRICT_PATTERNS) is False


class TestConvertValue:
    """Tests for the private conversion helpers."""

    @pytest.mark.unit
    def test_parse_bool_unknown(self):
        assert _parse_bool("perhaps") is None

    @pytest.mark.unit
    def test_invalid_int_returns_default(self):
        assert _convert_value("not-a-number", int, 7) == 7

    @pytest.mark.unit
    def test_none_returns_default(self):
        assert _convert_value(None, str, "fallback") == "fallback"


class TestGetEnvironmentInfo:
    """Tests for environment variable metadata."""

    @pytest.mark.unit
    def test_returns_env_config(self):
        """Returns EnvConfig dataclass."""
        info = get_environment_info(EnvVar.ISONANTIC_STRICT_PATTERNS)
        assert isinstance(info, EnvConfig)
        assert info.name == "ISONANTIC_STRICT_PATTERNS"
        assert info.default is False
        assert info.var_type is bool
        assert info.category == "schema"

    @pytest.mark.unit
    def test_description_present(self):
        """Description field is populated."""
        info = get_environment_info(EnvVar.ISONANTIC_LOG_LEVEL)
        assert "level" in info.description.lower()


class TestConvenienceFunctions:
    """Tests for typed convenience accessors."""

    @pytest.mark.unit
    def test_log_level_default(self, monkeypatch):
        monkeypatch.delenv("ISONANTIC_LOG_LEVEL", raising=False)
        assert get_log_level() == logging.WARNING

    @pytest.mark.unit
    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("ISONANTIC_LOG_LEVEL", "debug")
        assert get_log_level() == logging.DEBUG

    @pytest.mark.unit
    def test_log_level_unknown_name(self, monkeypatch):
        monkeypatch.setenv("ISONANTIC_LOG_LEVEL", "CHATTY")
        assert get_log_level() == logging.WARNING

    @pytest.mark.unit
    def test_strict_patterns(self, monkeypatch):
        monkeypatch.setenv("ISONANTIC_STRICT_PATTERNS", "1")
        assert strict_patterns_enabled() is True
        assert strict_patterns_enabled(override=False) is False


class TestListEnvironmentVariables:
    """Tests for listing environment variables."""

    @pytest.mark.unit
    def test_list_all(self):
        assert set(list_environment_variables()) == set(EnvVar)

    @pytest.mark.unit
    def test_filter_by_category(self):
        assert list_environment_variables("schema") == [EnvVar.ISONANTIC_STRICT_PATTERNS]

    @pytest.mark.unit
    def test_unknown_category_is_empty(self):
        assert list_environment_variables("nope") == []
