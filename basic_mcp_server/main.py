"""Basic MCP Server - Main application entrypoint."""

import asyncio
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from basic_mcp_server.config.loader import get_settings
from basic_mcp_server.mcp.errors import PARSE_ERROR, make_error_data
from basic_mcp_server.mcp.handlers import PROTOCOL_VERSION
from basic_mcp_server.mcp.jsonrpc import JsonRpcProcessor
from basic_mcp_server.mcp.transport_stdio import serve_stdio
from basic_mcp_server.server import build_processor
from basic_mcp_server.utils.logging import setup_logging, set_request_id, get_logger


def get_processor(app: FastAPI) -> JsonRpcProcessor:
    """Return the app's processor, building it on first use."""
    if getattr(app.state, "processor", None) is None:
        app.state.processor = build_processor()
    return app.state.processor


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    setup_logging()
    log = get_logger("startup")
    settings = get_settings()
    log.info(
        "Starting MCP server",
        server_name=settings.server_name,
        version=settings.server_version,
        transport="http",
    )
    get_processor(app)

    yield

    log.info("Shutting down MCP server")


def create_app(processor: JsonRpcProcessor | None = None) -> FastAPI:
    """Create the HTTP transport app around a processor."""
    app = FastAPI(
        title="Basic MCP Server",
        description="Minimal MCP tool server over JSON-RPC 2.0",
        version=get_settings().server_version,
        lifespan=lifespan,
    )
    app.state.processor = processor

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id_middleware(request: Request, call_next):
        """Add request ID to all requests."""
        request_id = request.headers.get("X-Request-ID") or set_request_id()
        set_request_id(request_id)
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.get("/health")
    async def health() -> dict:
        """Health check endpoint."""
        return {"status": "ok"}

    @app.get("/")
    async def root() -> dict:
        """Root endpoint with server info."""
        settings = get_settings()
        processor = get_processor(app)

        return {
            "name": settings.server_name,
            "version": settings.server_version,
            "endpoints": {
                "health": "/health",
                "message": "/message",
            },
            "tools_available": processor.handlers.registry.tool_count,
            "mcp_protocol_version": PROTOCOL_VERSION,
        }

    @app.post("/message")
    async def message_endpoint(request: Request) -> JSONResponse:
        """
        Message endpoint for JSON-RPC requests.

        Accepts one JSON-RPC 2.0 message per request body.
        """
        try:
            body = await request.body()
        except Exception as e:
            return JSONResponse(
                content={
                    "jsonrpc": "2.0",
                    "id": None,
                    "error": make_error_data(
                        PARSE_ERROR, f"Could not read request body: {e}"
                    ),
                }
            )

        response = await get_processor(app).handle_message(body)

        if response is None:
            # Notification - no response needed
            return JSONResponse(content={"status": "ok"}, status_code=202)

        return JSONResponse(content=response.model_dump())

    return app


app = create_app()


def main() -> None:
    """Run the server on the configured transport."""
    settings = get_settings()
    setup_logging(settings)
    log = get_logger("startup")

    try:
        if settings.transport == "http":
            import uvicorn

            uvicorn.run(
                "basic_mcp_server.main:app",
                host=settings.host,
                port=settings.port,
            )
        else:
            log.info(
                "Starting MCP server",
                server_name=settings.server_name,
                version=settings.server_version,
                transport="stdio",
            )
            asyncio.run(serve_stdio(build_processor(settings=settings)))
    except KeyboardInterrupt:
        log.info("Interrupted, shutting down")
    except Exception:
        log.error("Server error", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
