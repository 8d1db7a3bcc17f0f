"""Configuration loading from environment and YAML files."""

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PROVIDERS = ["arithmetic"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Transport: line-delimited JSON-RPC on stdin/stdout, or HTTP
    transport: Literal["stdio", "http"] = "stdio"

    # Logging (always written to stderr)
    log_level: str = "INFO"
    log_format: str = "json"

    # Server info
    server_name: str = "basic-mcp-server"
    server_version: str = "1.0.0"

    # Host and port (http transport only)
    host: str = "127.0.0.1"
    port: int = 8000

    # Tool provider configuration
    tools_config_path: str = ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def load_tools_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load tool provider configuration from YAML file.

    Args:
        config_path: Path to the config file. If None, uses default location.

    Returns:
        Dictionary with configuration data.
    """
    if not config_path:
        # Try to find config relative to project root
        possible_paths = [
            Path("config/tools.yaml"),
            Path(__file__).parent.parent.parent / "config" / "tools.yaml",
        ]
        for path in possible_paths:
            if path.exists():
                config_path = path
                break
        else:
            # Return default config if file not found
            return {"enabled_providers": list(DEFAULT_PROVIDERS)}

    config_path = Path(config_path)
    if not config_path.exists():
        return {"enabled_providers": list(DEFAULT_PROVIDERS)}

    with open(config_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    return config


def get_enabled_providers(config: dict[str, Any] | None = None) -> list[str]:
    """Get list of enabled provider names."""
    if config is None:
        config = load_tools_config()
    return config.get("enabled_providers", list(DEFAULT_PROVIDERS))
