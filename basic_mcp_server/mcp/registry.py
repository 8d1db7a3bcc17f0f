"""Tool registry for managing MCP tools."""

import importlib
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Awaitable, Mapping

from basic_mcp_server.mcp.errors import ErrorKind
from basic_mcp_server.mcp.models import ParameterSpec, Tool, TextContent
from basic_mcp_server.tools.base import get_tool_metadata

logger = logging.getLogger(__name__)

# Type alias for tool handlers
ToolHandler = Callable[[dict[str, Any]], Awaitable[list[TextContent]]]


@dataclass(frozen=True)
class ToolDefinition:
    """A registered tool with its parameter contract and handler."""

    name: str
    description: str
    parameters: Mapping[str, ParameterSpec]
    handler: ToolHandler
    messages: Mapping[ErrorKind, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))
        object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON Schema for the tool input, in declaration order."""
        properties = {
            param: {"type": spec.type, "description": spec.description}
            for param, spec in self.parameters.items()
        }
        required = [
            param for param, spec in self.parameters.items() if spec.required
        ]
        return {"type": "object", "properties": properties, "required": required}

    def to_mcp_tool(self) -> Tool:
        """Convert to MCP Tool model for protocol responses."""
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


class ToolRegistry:
    """Registry for MCP tools with plugin-style provider loading.

    Tools are registered once at startup. After freeze() the registry is
    read-only for the lifetime of the server.
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}
        self._providers: set[str] = set()
        self._frozen = False

    def register(
        self,
        name: str,
        description: str,
        parameters: Mapping[str, ParameterSpec],
        handler: ToolHandler,
        messages: Mapping[ErrorKind, str] | None = None,
    ) -> None:
        """Register a tool with the registry."""
        if self._frozen:
            raise RuntimeError(f"Registry is frozen, cannot register '{name}'")
        if name in self._tools:
            raise ValueError(f"Tool '{name}' already registered")
        self._tools[name] = ToolDefinition(
            name=name,
            description=description,
            parameters=parameters,
            handler=handler,
            messages=messages or {},
        )
        logger.info(f"Registered tool: {name}")

    def register_function(self, func: Callable) -> None:
        """Register a handler decorated with tools.base.tool."""
        metadata = get_tool_metadata(func)
        if metadata is None:
            raise ValueError(f"{func!r} is not decorated with @tool")
        self.register(handler=func, **metadata)

    def freeze(self) -> None:
        """End the registration phase."""
        self._frozen = True
        logger.debug(f"Registry frozen with {len(self._tools)} tools")

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> ToolDefinition | None:
        """Get a tool by exact name."""
        return self._tools.get(name)

    def list_tools(self) -> list[Tool]:
        """List all registered tools as MCP Tool models, in registration order."""
        return [tool.to_mcp_tool() for tool in self._tools.values()]

    def load_provider(self, provider_name: str) -> bool:
        """
        Load a provider module and register its tools.

        Providers are expected to be in basic_mcp_server/tools/<provider_name>/
        and have a register_tools(registry) function.
        """
        if provider_name in self._providers:
            logger.debug(f"Provider '{provider_name}' already loaded")
            return True

        module_path = f"basic_mcp_server.tools.{provider_name}.tools"
        try:
            module = importlib.import_module(module_path)
        except ImportError as e:
            logger.warning(f"Could not import provider '{provider_name}': {e}")
            return False

        if not hasattr(module, "register_tools"):
            logger.warning(
                f"Provider '{provider_name}' has no register_tools function"
            )
            return False

        try:
            module.register_tools(self)
        except (ValueError, RuntimeError) as e:
            logger.error(f"Error loading provider '{provider_name}': {e}")
            return False

        self._providers.add(provider_name)
        logger.info(f"Loaded provider: {provider_name}")
        return True

    def load_providers(self, provider_names: list[str]) -> dict[str, bool]:
        """Load multiple providers, returning success status for each."""
        results = {}
        for name in provider_names:
            results[name] = self.load_provider(name)
        return results

    @property
    def tool_count(self) -> int:
        """Return the number of registered tools."""
        return len(self._tools)

    @property
    def provider_count(self) -> int:
        """Return the number of loaded providers."""
        return len(self._providers)
