"""Decorator for declaring tool handlers with their parameter contract."""

from typing import Any, Callable, Awaitable, Mapping
import functools

from basic_mcp_server.mcp.errors import ErrorKind
from basic_mcp_server.mcp.models import ParameterSpec, TextContent

Handler = Callable[[dict[str, Any]], Awaitable[list[TextContent]]]


def tool(
    name: str,
    description: str,
    parameters: Mapping[str, ParameterSpec],
    messages: Mapping[ErrorKind, str] | None = None,
) -> Callable[[Handler], Handler]:
    """
    Decorator to mark a function as an MCP tool.

    Usage:
        @tool(
            name="echo",
            description="Echo a message",
            parameters={"message": ParameterSpec(type="string")},
        )
        async def echo(arguments: dict) -> list[TextContent]:
            return [TextContent(text=arguments["message"])]

    The handler receives arguments that already passed validation against
    `parameters`. `messages` overrides the validator's default error text
    per error kind. The decorated function will have _tool_metadata attached.
    """
    def decorator(func: Handler) -> Handler:
        @functools.wraps(func)
        async def wrapper(arguments: dict[str, Any]) -> list[TextContent]:
            return await func(arguments)

        # Attach metadata for registration
        wrapper._tool_metadata = {  # type: ignore
            "name": name,
            "description": description,
            "parameters": dict(parameters),
            "messages": dict(messages or {}),
        }
        return wrapper

    return decorator


def get_tool_metadata(
    func: Callable
) -> dict[str, Any] | None:
    """Get tool metadata from a decorated function."""
    return getattr(func, "_tool_metadata", None)
