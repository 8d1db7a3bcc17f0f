"""Minimal MCP tool server speaking line-delimited JSON-RPC 2.0."""

__version__ = "1.0.0"
