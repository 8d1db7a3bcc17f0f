"""MCP (Model Context Protocol) implementation with JSON-RPC 2.0."""

from basic_mcp_server.mcp.models import (
    JsonRpcRequest,
    JsonRpcResponse,
    JsonRpcError,
    ParameterSpec,
    Tool,
    TextContent,
    ToolCallResult,
)
from basic_mcp_server.mcp.errors import (
    PARSE_ERROR,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    INVALID_PARAMS,
    INTERNAL_ERROR,
    ErrorKind,
)

__all__ = [
    "JsonRpcRequest",
    "JsonRpcResponse",
    "JsonRpcError",
    "ParameterSpec",
    "Tool",
    "TextContent",
    "ToolCallResult",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    "ErrorKind",
]
