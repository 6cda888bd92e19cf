"""
Client configuration using Pydantic for type-safe settings management.

Settings come from ``CREDHUB_*`` environment variables or from a YAML file
with environment variable interpolation.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

import yaml
from pydantic import Field, HttpUrl, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from credhub_client.exceptions import ConfigurationError


class ClientSettings(BaseSettings):
    """Connection settings for a CredHub client.

    Example YAML::

        server_url: https://credhub.example.com:8844
        username: ${CREDHUB_CLIENT}
        password: ${CREDHUB_SECRET}
        client_credentials: true
        allow_insecure_tls: ${CREDHUB_SKIP_TLS:-false}
    """

    model_config = SettingsConfigDict(
        env_prefix="CREDHUB_",
        case_sensitive=False,
    )

    server_url: HttpUrl = Field(..., description="Base URL of the CredHub server")
    username: str = Field(..., description="Username, or client id for the client-credentials grant")
    password: SecretStr = Field(..., description="Password, or client secret for the client-credentials grant")
    allow_insecure_tls: bool = Field(default=False, description="Skip TLS certificate verification")
    client_credentials: bool = Field(default=False, description="Authenticate with the client-credentials grant")
    timeout: float = Field(default=30.0, gt=0.0, description="Per-request timeout in seconds")

    @classmethod
    def from_yaml(cls, config_path: str) -> ClientSettings:
        """Load settings from YAML file with environment variable interpolation.

        Supports ${VAR_NAME} syntax for environment variable substitution.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            ClientSettings instance

        Raises:
            ConfigurationError: If config file is invalid or missing required fields
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            yaml_content = config_file.read_text()
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

    @staticmethod
    def _interpolate_env_vars(content: str) -> str:
        """Interpolate ${VAR_NAME} placeholders with environment variables.

        Supports two syntaxes:
        - ${VAR_NAME} - Required environment variable (raises if not set)
        - ${VAR_NAME:-default} - Optional with default value

        Raises:
            ValueError: If a required environment variable is not set

        Note:
            YAML comment lines (starting with #) are preserved unchanged.
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

        lines = []
        for line in content.splitlines(keepends=True):
            if line.lstrip().startswith("#"):
                lines.append(line)
            else:
                lines.append(pattern.sub(replace_var, line))
        return "".join(lines)
