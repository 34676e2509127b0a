"""Configuration schema for sifflet-sources.

Defines the sifflet.yml configuration file format using Pydantic models.

Example:
    host: https://mycompany.siffletdata.com/api
    timeout: 60
    verify_tls: true
    log_level: INFO
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

# Environment variables overriding file settings
SIFFLET_HOST_ENV = "SIFFLET_HOST"
SIFFLET_TIMEOUT_ENV = "SIFFLET_TIMEOUT"
SIFFLET_HTTPS_VERIFY_ENV = "SIFFLET_HTTPS_VERIFY"

DEFAULT_TIMEOUT = 30.0

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_verify(default: bool) -> bool:
    """TLS verification from SIFFLET_HTTPS_VERIFY, e.g. for self-signed certs."""
    verify_env = os.environ.get(SIFFLET_HTTPS_VERIFY_ENV, "").lower()
    if verify_env in ("false", "0", "no", "off"):
        return False
    if verify_env in ("true", "1", "yes", "on"):
        return True
    return default


def _env_timeout(default: float) -> float:
    timeout_env = os.environ.get(SIFFLET_TIMEOUT_ENV)
    if timeout_env:
        try:
            return float(timeout_env)
        except ValueError:
            pass
    return default


class ClientConfig(BaseModel):
    """Sifflet API connection settings."""

    host: str = Field("", description="Sifflet API host, such as https://x.siffletdata.com/api")
    api_prefix: str = "/v1"  # Prepended to every API path
    timeout: float = DEFAULT_TIMEOUT  # Seconds
    verify_tls: bool = True
    log_level: str = "WARNING"

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Normalize host to https without trailing slash."""
        if not v:
            return v
        v = v.rstrip("/")
        if not v.startswith("https://"):
            if v.startswith("http://"):
                v = v.replace("http://", "https://", 1)
            else:
                v = f"https://{v}"
        return v

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        v = v.strip("/")
        return f"/{v}" if v else ""

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout must be positive, got {v}")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> str:
        """Accept log levels in any case."""
        if not isinstance(v, str) or v.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level '{v}'. Valid: {list(LOG_LEVELS)}")
        return v.upper()

    @property
    def base_url(self) -> str:
        """Host joined with the API prefix."""
        return f"{self.host}{self.api_prefix}"

    def with_env_overrides(self) -> ClientConfig:
        """Apply SIFFLET_HOST, SIFFLET_TIMEOUT and SIFFLET_HTTPS_VERIFY."""
        data = self.model_dump()
        host_env = os.environ.get(SIFFLET_HOST_ENV)
        if host_env:
            data["host"] = host_env
        data["timeout"] = _env_timeout(self.timeout)
        data["verify_tls"] = _env_verify(self.verify_tls)
        return ClientConfig.model_validate(data)

    @classmethod
    def from_yaml(cls, content: str) -> ClientConfig:
        """Parse config from YAML string."""
        data = yaml.safe_load(content) or {}
        return cls.model_validate(data)

    @classmethod
    def from_file(cls, path: Path | str) -> ClientConfig:
        """Load config from a YAML file."""
        path = Path(path)
        content = path.read_text(encoding="utf-8")
        return cls.from_yaml(content)


# Config file discovery
CONFIG_FILENAMES = ["sifflet.yml", "sifflet.yaml", ".sifflet.yml"]


def find_config(start_dir: Path | str | None = None) -> Path | None:
    """
    Find sifflet.yml config file.

    Searches start_dir (default: current directory) and then its parents up
    to the filesystem root.

    Args:
        start_dir: Directory to start search from

    Returns:
        Path to config file, or None if not found
    """
    current = (Path(start_dir) if start_dir is not None else Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_config(path: Path | str | None = None) -> ClientConfig:
    """
    Load configuration, then apply environment overrides.

    Without an explicit path, searches for sifflet.yml in the current and
    parent directories; when none exists, defaults plus environment are used.

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValueError: If config is invalid
    """
    if path is None:
        found = find_config()
        config = ClientConfig.from_file(found) if found else ClientConfig()
    else:
        config = ClientConfig.from_file(path)

    return config.with_env_overrides()
