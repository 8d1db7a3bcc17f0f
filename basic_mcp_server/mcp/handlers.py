"""MCP method handlers for JSON-RPC requests."""

import logging
from typing import Any

from pydantic import ValidationError

from basic_mcp_server.config.loader import Settings, get_settings
from basic_mcp_server.mcp.errors import (
    INVALID_PARAMS,
    ErrorKind,
    make_error_data,
    make_failure,
)
from basic_mcp_server.mcp.models import (
    InitializeParams,
    InitializeResult,
    ServerInfo,
    Capabilities,
    ToolsListResult,
    ToolCallParams,
    ToolCallResult,
)
from basic_mcp_server.mcp.registry import ToolRegistry
from basic_mcp_server.mcp.validation import validate_arguments

logger = logging.getLogger(__name__)

# MCP protocol version we support
PROTOCOL_VERSION = "2024-11-05"

# (result, error) pair; exactly one side is None
HandlerOutcome = tuple[Any | None, dict[str, Any] | None]


def _fault_message(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


class MCPHandlers:
    """Handlers for MCP protocol methods.

    Every handler returns a (result, error) tuple instead of raising, so a
    request always turns into exactly one response.
    """

    def __init__(self, registry: ToolRegistry, settings: Settings | None = None):
        self.registry = registry
        self.settings = settings or get_settings()

    async def handle_initialize(self, params: dict[str, Any]) -> HandlerOutcome:
        """Handle the initialize request."""
        try:
            init_params = InitializeParams.model_validate(params)
            logger.info(
                f"Initializing for client {init_params.clientInfo.name} "
                f"{init_params.clientInfo.version}"
            )
        except ValidationError as e:
            # Still proceed with defaults
            logger.warning(f"Invalid initialize params: {e}")

        result = InitializeResult(
            protocolVersion=PROTOCOL_VERSION,
            capabilities=Capabilities(tools={}),
            serverInfo=ServerInfo(
                name=self.settings.server_name,
                version=self.settings.server_version,
            ),
        )
        return result.model_dump(), None

    async def handle_initialized(self, params: dict[str, Any]) -> HandlerOutcome:
        """Handle the notifications/initialized notification (no response)."""
        logger.info("Client confirmed initialization")
        return None, None

    async def handle_ping(self, params: dict[str, Any]) -> HandlerOutcome:
        return {}, None

    async def handle_tools_list(self, params: dict[str, Any]) -> HandlerOutcome:
        """Handle the tools/list request."""
        tools = self.registry.list_tools()
        result = ToolsListResult(tools=tools)
        return result.model_dump(), None

    async def handle_tools_call(self, params: dict[str, Any]) -> HandlerOutcome:
        """
        Handle the tools/call request.

        Resolves the tool, validates the arguments against its parameters and
        runs the handler. Failures in any of those steps become the error.
        """
        try:
            call_params = ToolCallParams.model_validate(params)
        except ValidationError as e:
            logger.warning(f"Invalid tools/call params: {e}")
            return None, make_error_data(
                INVALID_PARAMS, f"Invalid tools/call params: {e}"
            )

        definition = self.registry.get(call_params.name)
        if definition is None:
            logger.warning(f"Unknown tool requested: {call_params.name}")
            return None, make_failure(
                ErrorKind.UNKNOWN_TOOL, f"Unknown tool: {call_params.name}"
            )

        arguments, error = validate_arguments(
            definition, call_params.arguments or {}
        )
        if error is not None:
            return None, error

        logger.info(f"Calling tool: {definition.name}")
        try:
            content = await definition.handler(arguments)
        except Exception as e:
            logger.exception(f"Error executing tool {definition.name}")
            return None, make_failure(ErrorKind.INTERNAL_FAULT, _fault_message(e))

        return ToolCallResult(content=content).model_dump(), None

    async def dispatch(self, method: str, params: dict[str, Any]) -> HandlerOutcome:
        """
        Dispatch a method call to the appropriate handler.

        Returns (result, error) tuple. One will be None, both are None only
        for notifications/initialized.
        """
        handlers = {
            "initialize": self.handle_initialize,
            "notifications/initialized": self.handle_initialized,
            "ping": self.handle_ping,
            "tools/list": self.handle_tools_list,
            "tools/call": self.handle_tools_call,
        }

        handler = handlers.get(method)
        if handler is None:
            return None, make_failure(
                ErrorKind.UNKNOWN_METHOD, f"Method not found: {method}"
            )

        try:
            return await handler(params)
        except Exception as e:
            logger.exception(f"Error handling method {method}")
            return None, make_failure(ErrorKind.INTERNAL_FAULT, _fault_message(e))
