"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from basic_mcp_server.config.loader import get_settings
from basic_mcp_server.main import create_app
from basic_mcp_server.mcp.handlers import MCPHandlers
from basic_mcp_server.mcp.jsonrpc import JsonRpcProcessor
from basic_mcp_server.mcp.registry import ToolRegistry
from basic_mcp_server.server import build_registry


@pytest.fixture
def registry() -> ToolRegistry:
    """Frozen registry with the arithmetic provider loaded."""
    return build_registry(["arithmetic"])


@pytest.fixture
def handlers(registry: ToolRegistry) -> MCPHandlers:
    return MCPHandlers(registry)


@pytest.fixture
def processor(handlers: MCPHandlers) -> JsonRpcProcessor:
    return JsonRpcProcessor(handlers)


@pytest.fixture
def client(processor: JsonRpcProcessor):
    """Synchronous test client for the HTTP transport."""
    return TestClient(create_app(processor))


@pytest.fixture
def settings():
    """Get application settings."""
    return get_settings()


@pytest.fixture
def sample_jsonrpc_request():
    """Sample JSON-RPC request factory."""
    def _make_request(method: str, params: dict = None, id: int | str = 1):
        return {
            "jsonrpc": "2.0",
            "id": id,
            "method": method,
            "params": params or {},
        }
    return _make_request


@pytest.fixture
def add_request(sample_jsonrpc_request):
    """tools/call request factory for add-integers."""
    def _make_request(arguments: dict, id: int | str = 1):
        return sample_jsonrpc_request(
            "tools/call",
            {"name": "add-integers", "arguments": arguments},
            id=id,
        )
    return _make_request
