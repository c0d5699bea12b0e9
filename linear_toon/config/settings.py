"""
Configuration system using Pydantic for type-safe settings management.

Settings are read once at process start, from the environment (``LINEAR_``
prefix) or from a YAML file with ``${VAR}`` interpolation, and then passed
by reference into the client and tool registry.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Literal

import yaml
from pydantic import Field, HttpUrl, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from linear_toon.exceptions import ConfigurationError

DEFAULT_ENDPOINT = "https://api.linear.app/graphql"


class LinearSettings(BaseSettings):
    """Settings for the Linear GraphQL client and the tool surface.

    Example:
        >>> settings = LinearSettings(api_key="lin_api_xxx")
        >>> str(settings.endpoint)
        'https://api.linear.app/graphql'
    """

    model_config = SettingsConfigDict(
        env_prefix="LINEAR_",
        case_sensitive=False,
    )

    api_key: SecretStr = Field(..., description="Linear personal API key")
    endpoint: HttpUrl = Field(default=HttpUrl(DEFAULT_ENDPOINT), description="GraphQL endpoint URL")
    timeout: float = Field(default=30.0, ge=1.0, le=300.0, description="Request timeout in seconds")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Minimum log level"
    )
    default_limit: int = Field(default=50, ge=1, description="Search page size when none is requested")
    max_limit: int = Field(default=250, ge=1, description="Upper bound for requested search page size")

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, value: SecretStr) -> SecretStr:
        """Strip whitespace and reject an empty key."""
        stripped = value.get_secret_value().strip()
        if not stripped:
            raise ValueError("LINEAR_API_KEY is required")
        return SecretStr(stripped)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def validate_limits(self) -> LinearSettings:
        """Keep the default page size inside the clamp range."""
        if self.default_limit > self.max_limit:
            raise ValueError(f"default_limit ({self.default_limit}) must not exceed max_limit ({self.max_limit})")
        return self

    @classmethod
    def from_yaml(cls, config_path: str) -> LinearSettings:
        """Load settings from YAML file with environment variable interpolation.

        Supports ${VAR_NAME} and ${VAR_NAME:-default} substitution.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            LinearSettings instance

        Raises:
            ConfigurationError: If config file is invalid or missing required fields
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file) as f:
                yaml_content = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_path}") from e

        try:
            yaml_content = cls._interpolate_env_vars(yaml_content)
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment variable reference in config: {e}") from e

        try:
            config_dict = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")

        try:
            return cls(**config_dict)
        except Exception as e:
            raise ConfigurationError(f"Failed to validate configuration: {e}") from e

    @classmethod
    def from_env(cls) -> LinearSettings:
        """Load settings from ``LINEAR_*`` environment variables.

        Raises:
            ConfigurationError: If the API key is missing or a value is invalid
        """
        try:
            return cls()
        except Exception as e:
            raise ConfigurationError(f"Failed to load settings from environment: {e}") from e

    @staticmethod
    def _interpolate_env_vars(content: str) -> str:
        """Interpolate ${VAR_NAME} placeholders with environment variables.

        YAML comment lines are left unchanged.

        Raises:
            ValueError: If a required environment variable is not set
        """
        pattern = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)
            value = os.getenv(var_name)

            if value is not None:
                return value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(f"Environment variable {var_name} is not set")

        def process_line(line: str) -> str:
            if line.lstrip().startswith("#"):
                return line
            return pattern.sub(replace_var, line)

        return "\n".join(process_line(line) for line in content.split("\n"))
