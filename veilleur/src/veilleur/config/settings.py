"""
Configuration management for Veilleur.

Hybrid configuration system using YAML files and environment variables.
Priority: Environment variables > YAML config > Pydantic defaults
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_WAIT_MS = 600


class Settings(BaseSettings):
    """
    Veilleur configuration schema.

    Loads configuration from:
    1. Environment variables, prefixed VEILLEUR_ (highest priority)
    2. YAML configuration files
    3. Pydantic defaults (lowest priority)

    Configuration files:
        - config/default.yaml: Base defaults
        - config/development.yaml: Development overrides
        - config/test.yaml: Test overrides
    """

    model_config = SettingsConfigDict(
        env_prefix="VEILLEUR_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Scheduling
    wait: int = Field(
        default=DEFAULT_WAIT_MS,
        ge=0,
        description="Quiet window in milliseconds (0 = next loop iteration)",
    )

    # Seed
    seed: Optional[str] = Field(
        default=None,
        description="Build unit evaluated once before any test run",
    )

    # Change detection
    test_marker: str = Field(
        default=".test",
        min_length=1,
        description="Substring marking test units",
    )

    # Logging
    log_level: str = Field(default="info")
    verbose: int = Field(default=1, ge=0, le=3)
    log_dir: Optional[str] = Field(default=None)

    @field_validator("wait", mode="before")
    @classmethod
    def default_wait(cls, v: Any) -> Any:
        """Treat an unset (null) wait as the default; 0 is kept."""
        return DEFAULT_WAIT_MS if v is None else v

    @field_validator("seed", mode="before")
    @classmethod
    def disable_seed(cls, v: Any) -> Any:
        """False, empty or "false" seed disables seed gating."""
        if v is False:
            return None
        if isinstance(v, str) and v.strip().lower() in ("", "false", "none"):
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["debug", "info", "warning", "error", "critical"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid log_level. Must be one of: {allowed}")
        return v_lower


def _read_yaml(path: Path) -> dict:
    """Read a YAML mapping, empty if the file is missing or blank."""
    if not path.exists():
        return {}

    with open(path, "r") as f:
        loaded = yaml.safe_load(f)

    return loaded or {}


def load_config(
    config_dir: Optional[Path] = None,
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    Args:
        config_dir: Directory holding YAML files (default: veilleur/config)
        config_file: Optional YAML config filename override
        env_file: Optional .env filename (e.g., ".env.development")
        env: Optional environment name override

    Returns:
        Settings instance

    Raises:
        ValidationError: If a configured value is invalid
    """
    # Component root: veilleur/ (above src/veilleur/config)
    component_root = Path(__file__).resolve().parent.parent.parent.parent
    config_dir = config_dir or component_root / "config"

    environment = env or os.getenv("ENV", "development")

    env_map = {
        "production": (".env.production", "production.yaml"),
        "development": (".env.development", "development.yaml"),
        "test": (".env.development", "test.yaml"),
    }
    default_env_file, default_config_file = env_map.get(
        environment, (".env.development", "development.yaml")
    )

    env_file_path = component_root / (env_file or default_env_file)
    if env_file_path.exists():
        load_dotenv(env_file_path, override=True)

    merged_config = _read_yaml(config_dir / "default.yaml")
    merged_config.update(_read_yaml(config_dir / (config_file or default_config_file)))

    # Environment variables win over YAML values
    for key in list(merged_config):
        if f"VEILLEUR_{key.upper()}" in os.environ:
            del merged_config[key]

    return Settings(**merged_config)


# Global settings singleton (lazy initialization)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get or initialize global settings singleton.

    Returns:
        Settings instance
    """
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """
    Override global settings (for testing).

    Args:
        new_settings: New Settings instance to use
    """
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None
