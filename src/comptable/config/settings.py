"""
Application settings with environment-based configuration.

Priority (highest to lowest):
1. Environment variables (from .env or system)
2. Environment-specific YAML config file (development.yaml, production.yaml)
3. Default YAML config file (default.yaml)
4. Pydantic defaults
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Database credentials should come from environment variables,
    not from YAML files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )

    # Application
    APP_NAME: str = "Comptable"
    APP_VERSION: str = "0.1.0"
    ENV: str = Field(default="development", description="Environment name")
    DEBUG: bool = Field(default=False, description="Debug mode")

    # API Server
    RUN_ADDRESS: str = Field(
        default="localhost:8080",
        description="host:port the HTTP server binds to",
    )
    API_RELOAD: bool = Field(default=False)

    # Database (from environment - REQUIRED in production)
    DATABASE_URI: str = Field(..., description="Database connection URL")
    DATABASE_ECHO: bool = Field(default=False)

    # Accrual system
    ACCRUAL_SYSTEM_ADDRESS: str = Field(
        default="",
        description="Accrual system base URL (empty disables reconciliation)",
    )
    ACCRUAL_TIMEOUT: float = Field(
        default=1.0,
        gt=0,
        description="Accrual system request timeout in seconds",
    )

    # Reconciliation poller
    POLL_INTERVAL: float = Field(
        default=2.0,
        gt=0,
        description="Seconds between reconciliation ticks",
    )
    RATE_LIMIT_DEFAULT_PAUSE: float = Field(
        default=60.0,
        ge=0,
        description="Pause after a 429 without a usable Retry-After header",
    )

    # Resilience - Circuit Breaker
    CB_FAILURE_THRESHOLD: int = Field(
        default=5,
        ge=1,
        description="Circuit breaker failure threshold",
    )
    CB_TIMEOUT_SECONDS: float = Field(
        default=30.0,
        description="Circuit breaker open state timeout",
    )

    # Sessions
    SESSION_COOKIE_NAME: str = Field(default="gomart_auth")
    SESSION_TTL_SECONDS: int = Field(
        default=3600,
        ge=1,
        description="Session lifetime in seconds",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Invalid LOG_LEVEL. Must be one of: {allowed}")
        return v_upper

    @field_validator("DATABASE_URI")
    @classmethod
    def normalize_database_uri(cls, v: str) -> str:
        """Route plain postgres URLs through the asyncpg driver."""
        for prefix in ("postgres://", "postgresql://"):
            if v.startswith(prefix):
                return "postgresql+asyncpg://" + v[len(prefix):]
        return v

    @field_validator("RUN_ADDRESS")
    @classmethod
    def validate_run_address(cls, v: str) -> str:
        """Validate host:port format."""
        host, sep, port = v.rpartition(":")
        if not sep or not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError(f"Invalid RUN_ADDRESS '{v}'. Expected host:port")
        return v

    @field_validator("ACCRUAL_SYSTEM_ADDRESS")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def API_HOST(self) -> str:
        host = self.RUN_ADDRESS.rpartition(":")[0]
        return host or "0.0.0.0"

    @property
    def API_PORT(self) -> int:
        return int(self.RUN_ADDRESS.rpartition(":")[2])


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    Args:
        config_file: Optional YAML config filename override
        env_file: Optional .env filename (e.g., ".env.development")
        env: Optional environment name override (e.g., "development", "test")

    Returns:
        Settings instance

    Raises:
        ValidationError: If required fields are missing
    """
    current_file = Path(__file__).resolve()
    project_root = current_file.parent.parent.parent.parent
    config_dir = project_root / "config"

    environment = env or os.getenv("ENV", "production")

    env_map = {
        "production": (".env.production", "production.yaml"),
        "development": (".env.development", "development.yaml"),
        "test": (".env.test", "test.yaml"),
    }

    if env_file is None:
        default_env_file, default_config_file = env_map.get(
            environment, (".env.production", "production.yaml")
        )
        env_file = default_env_file
        if config_file is None:
            config_file = default_config_file

    env_file_path = project_root / env_file
    if env_file_path.exists():
        load_dotenv(env_file_path, override=True)

    default_config_path = config_dir / "default.yaml"
    merged_config = {}

    if default_config_path.exists():
        with open(default_config_path, "r") as f:
            loaded = yaml.safe_load(f)
            if loaded:
                merged_config = loaded

    if config_file:
        env_config_path = config_dir / config_file
        if env_config_path.exists():
            with open(env_config_path, "r") as f:
                loaded = yaml.safe_load(f)
                if loaded:
                    merged_config.update(loaded)

    # Init kwargs outrank the environment in pydantic-settings
    merged_config = {
        key: value for key, value in merged_config.items() if key not in os.environ
    }

    return Settings(**merged_config)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or initialize global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override global settings (for testing)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None
