"""Tests for linear_toon/config/settings.py.

Tests cover:
- Defaults and field validation
- Loading from environment variables
- Loading from YAML with ${VAR} interpolation
- Error handling for invalid configuration
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from linear_toon.config.settings import DEFAULT_ENDPOINT, LinearSettings
from linear_toon.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host LINEAR_* variables out of these tests."""
    for name in ("LINEAR_API_KEY", "LINEAR_ENDPOINT", "LINEAR_TIMEOUT", "LINEAR_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestLinearSettings:
    """Test defaults and validation."""

    def test_defaults(self):
        settings = LinearSettings(api_key="lin_api_abc")

        assert str(settings.endpoint) == DEFAULT_ENDPOINT
        assert settings.timeout == 30.0
        assert settings.log_level == "INFO"
        assert settings.default_limit == 50
        assert settings.max_limit == 250

    def test_api_key_is_secret_and_stripped(self):
        settings = LinearSettings(api_key="  lin_api_abc \n")

        assert settings.api_key.get_secret_value() == "lin_api_abc"
        assert "lin_api_abc" not in repr(settings)

    def test_blank_api_key_rejected(self):
        with pytest.raises(ValidationError, match="LINEAR_API_KEY is required"):
            LinearSettings(api_key="   ")

    def test_log_level_normalized(self):
        assert LinearSettings(api_key="k", log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            LinearSettings(api_key="k", log_level="verbose")

    @pytest.mark.parametrize("timeout", [0.5, 301])
    def test_timeout_bounds(self, timeout):
        with pytest.raises(ValidationError):
            LinearSettings(api_key="k", timeout=timeout)

    def test_default_limit_cannot_exceed_max(self):
        with pytest.raises(ValidationError, match="must not exceed max_limit"):
            LinearSettings(api_key="k", default_limit=300, max_limit=250)


class TestFromEnv:
    """Test loading from LINEAR_* environment variables."""

    def test_reads_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("LINEAR_API_KEY", "lin_api_env")
        monkeypatch.setenv("LINEAR_TIMEOUT", "12")

        settings = LinearSettings.from_env()

        assert settings.api_key.get_secret_value() == "lin_api_env"
        assert settings.timeout == 12.0

    def test_missing_key_raises_configuration_error(self):
        with pytest.raises(ConfigurationError, match="Failed to load settings"):
            LinearSettings.from_env()


class TestFromYaml:
    """Test loading from YAML files."""

    def test_loads_file(self, tmp_path: Path):
        config = tmp_path / "linear.yaml"
        config.write_text("api_key: lin_api_file\ntimeout: 10\n")

        settings = LinearSettings.from_yaml(str(config))

        assert settings.api_key.get_secret_value() == "lin_api_file"
        assert settings.timeout == 10.0

    def test_interpolates_environment(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("MY_LINEAR_KEY", "lin_api_interp")
        config = tmp_path / "linear.yaml"
        config.write_text("api_key: ${MY_LINEAR_KEY}\nlog_level: ${LOG_LEVEL_UNSET:-warning}\n")

        settings = LinearSettings.from_yaml(str(config))

        assert settings.api_key.get_secret_value() == "lin_api_interp"
        assert settings.log_level == "WARNING"

    def test_comment_lines_not_interpolated(self, tmp_path: Path):
        config = tmp_path / "linear.yaml"
        config.write_text("# api_key: ${NOT_SET_ANYWHERE}\napi_key: lin_api_x\n")

        assert LinearSettings.from_yaml(str(config)).api_key.get_secret_value() == "lin_api_x"

    def test_missing_variable(self, tmp_path: Path):
        config = tmp_path / "linear.yaml"
        config.write_text("api_key: ${NOT_SET_ANYWHERE}\n")

        with pytest.raises(ConfigurationError, match="NOT_SET_ANYWHERE"):
            LinearSettings.from_yaml(str(config))

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigurationError, match="not found"):
            LinearSettings.from_yaml(str(tmp_path / "absent.yaml"))

    def test_invalid_yaml(self, tmp_path: Path):
        config = tmp_path / "linear.yaml"
        config.write_text("api_key: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            LinearSettings.from_yaml(str(config))

    def test_non_mapping_rejected(self, tmp_path: Path):
        config = tmp_path / "linear.yaml"
        config.write_text("- api_key\n")

        with pytest.raises(ConfigurationError, match="YAML object"):
            LinearSettings.from_yaml(str(config))

    def test_validation_failure_wrapped(self, tmp_path: Path):
        config = tmp_path / "linear.yaml"
        config.write_text("api_key: k\ntimeout: 9999\n")

        with pytest.raises(ConfigurationError, match="Failed to validate"):
            LinearSettings.from_yaml(str(config))
