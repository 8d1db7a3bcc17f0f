"""Server composition: registry and JSON-RPC processor built once at startup."""

from basic_mcp_server.config.loader import Settings, get_settings, load_tools_config, get_enabled_providers
from basic_mcp_server.mcp.handlers import MCPHandlers
from basic_mcp_server.mcp.jsonrpc import JsonRpcProcessor
from basic_mcp_server.mcp.registry import ToolRegistry
from basic_mcp_server.utils.logging import get_logger


def build_registry(providers: list[str] | None = None) -> ToolRegistry:
    """Create a registry with the given (or configured) providers, then freeze it."""
    log = get_logger("startup")
    if providers is None:
        settings = get_settings()
        providers = get_enabled_providers(load_tools_config(settings.tools_config_path))

    registry = ToolRegistry()
    results = registry.load_providers(providers)
    for provider, success in results.items():
        if success:
            log.info("Loaded provider", provider=provider)
        else:
            log.warning("Failed to load provider", provider=provider)

    registry.freeze()
    log.info(
        "Tool registry ready",
        tool_count=registry.tool_count,
        provider_count=registry.provider_count,
    )
    return registry


def build_processor(
    registry: ToolRegistry | None = None, settings: Settings | None = None
) -> JsonRpcProcessor:
    """Create the JSON-RPC processor around a frozen registry."""
    if registry is None:
        registry = build_registry()
    return JsonRpcProcessor(MCPHandlers(registry, settings))
