"""Configuration loading and management."""

from basic_mcp_server.config.loader import Settings, get_settings, load_tools_config

__all__ = ["Settings", "get_settings", "load_tools_config"]
