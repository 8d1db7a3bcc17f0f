"""Arithmetic provider tools."""

from typing import Any

from basic_mcp_server.mcp.errors import ErrorKind
from basic_mcp_server.mcp.models import ParameterSpec, TextContent
from basic_mcp_server.mcp.registry import ToolRegistry
from basic_mcp_server.tools.base import tool


def add_integers(a: int, b: int) -> str:
    """Sum two integers and format the result as a plain decimal string."""
    return str(a + b)


@tool(
    name="add-integers",
    description="Add two integers and return the result",
    parameters={
        "a": ParameterSpec(type="integer", required=True, description="First integer to add"),
        "b": ParameterSpec(type="integer", required=True, description="Second integer to add"),
    },
    messages={
        ErrorKind.INVALID_ARGUMENT_TYPE: "Both arguments must be numbers",
        ErrorKind.INVALID_ARGUMENT_SHAPE: "Both arguments must be integers",
        ErrorKind.INVALID_ARGUMENT_RANGE: "Both arguments must be within the safe integer range",
    },
)
async def add_integers_handler(arguments: dict[str, Any]) -> list[TextContent]:
    """Handle the add-integers tool call."""
    return [TextContent(text=add_integers(arguments["a"], arguments["b"]))]


def register_tools(registry: ToolRegistry) -> None:
    """Register all arithmetic provider tools with the registry."""
    registry.register_function(add_integers_handler)
