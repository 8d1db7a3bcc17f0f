"""JSON-RPC 2.0 error codes, dispatch error taxonomy and error helpers."""

from enum import Enum
from typing import Any

# Standard JSON-RPC 2.0 error codes
PARSE_ERROR = -32700  # Invalid JSON was received
INVALID_REQUEST = -32600  # The JSON sent is not a valid Request object
METHOD_NOT_FOUND = -32601  # The method does not exist / is not available
INVALID_PARAMS = -32602  # Invalid method parameter(s)
INTERNAL_ERROR = -32603  # Internal JSON-RPC error


class ErrorKind(str, Enum):
    """Failures the dispatcher can report for an accepted request."""

    UNKNOWN_METHOD = "unknown_method"
    UNKNOWN_TOOL = "unknown_tool"
    INVALID_ARGUMENT_TYPE = "invalid_argument_type"
    INVALID_ARGUMENT_SHAPE = "invalid_argument_shape"
    INVALID_ARGUMENT_RANGE = "invalid_argument_range"
    INTERNAL_FAULT = "internal_fault"


ERROR_KIND_CODES: dict[ErrorKind, int] = {
    ErrorKind.UNKNOWN_METHOD: METHOD_NOT_FOUND,
    ErrorKind.UNKNOWN_TOOL: INVALID_PARAMS,
    ErrorKind.INVALID_ARGUMENT_TYPE: INVALID_PARAMS,
    ErrorKind.INVALID_ARGUMENT_SHAPE: INVALID_PARAMS,
    ErrorKind.INVALID_ARGUMENT_RANGE: INVALID_PARAMS,
    ErrorKind.INTERNAL_FAULT: INTERNAL_ERROR,
}


def error_message(code: int) -> str:
    """Get the standard message for a JSON-RPC error code."""
    messages = {
        PARSE_ERROR: "Parse error",
        INVALID_REQUEST: "Invalid Request",
        METHOD_NOT_FOUND: "Method not found",
        INVALID_PARAMS: "Invalid params",
        INTERNAL_ERROR: "Internal error",
    }
    return messages.get(code, "Unknown error")


def make_error_data(code: int, message: str | None = None, data: Any = None) -> dict[str, Any]:
    """Create an error object for JSON-RPC response."""
    error: dict[str, Any] = {
        "code": code,
        "message": message or error_message(code),
    }
    if data is not None:
        error["data"] = data
    return error


def make_failure(kind: ErrorKind, message: str) -> dict[str, Any]:
    """Create the error object for a dispatch failure of the given kind."""
    return make_error_data(ERROR_KIND_CODES[kind], message)
