"""JSON-RPC 2.0 message processing."""

import json
import logging
from typing import Any

from pydantic import ValidationError

from basic_mcp_server.mcp.models import JsonRpcRequest, JsonRpcResponse, JsonRpcError
from basic_mcp_server.mcp.handlers import MCPHandlers
from basic_mcp_server.mcp.errors import PARSE_ERROR, INVALID_REQUEST, make_error_data

logger = logging.getLogger(__name__)


def _salvage_id(data: Any) -> int | str | None:
    """Recover a usable id from a payload that failed request validation."""
    if not isinstance(data, dict):
        return None
    request_id = data.get("id")
    if isinstance(request_id, (int, str)) and not isinstance(request_id, bool):
        return request_id
    return None


class JsonRpcProcessor:
    """Process JSON-RPC 2.0 messages."""

    def __init__(self, handlers: MCPHandlers):
        self.handlers = handlers

    def parse_request(
        self, raw_data: str | bytes
    ) -> tuple[JsonRpcRequest | None, JsonRpcResponse | None]:
        """
        Parse a JSON-RPC request from raw data.

        Returns (request, error_response) tuple. One will be None.
        """
        # Try to parse JSON
        try:
            if isinstance(raw_data, bytes):
                raw_data = raw_data.decode("utf-8")
            data = json.loads(raw_data)
        except (ValueError, RecursionError) as e:
            # ValueError covers JSONDecodeError, UnicodeDecodeError and integer
            # literals over the int-string conversion limit. Parse errors
            # don't have a request id
            return None, JsonRpcResponse(
                id=None,
                error=JsonRpcError(**make_error_data(PARSE_ERROR, f"Invalid JSON: {e}")),
            )

        # Validate JSON-RPC structure
        try:
            request = JsonRpcRequest.model_validate(data)
            return request, None
        except ValidationError as e:
            logger.warning(f"Invalid JSON-RPC request: {e.error_count()} errors")
            return None, JsonRpcResponse(
                id=_salvage_id(data),
                error=JsonRpcError(
                    **make_error_data(INVALID_REQUEST, f"Invalid JSON-RPC request: {e}")
                ),
            )

    async def process_request(
        self, request: JsonRpcRequest
    ) -> JsonRpcResponse | None:
        """
        Process a validated JSON-RPC request.

        Returns None for notifications (requests without id).
        """
        result, error = await self.handlers.dispatch(
            request.method, request.params or {}
        )

        # Notifications don't get responses
        if request.is_notification:
            if error is not None:
                logger.warning(
                    f"Notification {request.method} failed: {error['message']}"
                )
            return None

        # The response carries the request id verbatim
        if error is not None:
            return JsonRpcResponse(
                id=request.id,
                error=JsonRpcError(**error),
            )
        return JsonRpcResponse(
            id=request.id,
            result=result,
        )

    async def handle_message(self, raw_data: str | bytes) -> JsonRpcResponse | None:
        """
        Handle a raw JSON-RPC message end-to-end.

        Returns a response or None for notifications.
        """
        request, error_response = self.parse_request(raw_data)

        if error_response is not None:
            return error_response

        return await self.process_request(request)  # type: ignore

    def serialize_response(self, response: JsonRpcResponse) -> str:
        """Serialize a JSON-RPC response to a single-line JSON string."""
        return json.dumps(response.model_dump(), separators=(",", ":"))
