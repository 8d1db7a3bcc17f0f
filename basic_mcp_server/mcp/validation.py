"""Validation of tool call arguments against a tool's declared parameters.

Checks run in tiers over all declared parameters, in declaration order:

1. kind:  every required parameter is present and of the declared kind
          (a missing parameter fails here, there is no separate message)
2. shape: integer parameters have no fractional part
3. range: integer parameters fit in the exact JSON integer range

The first failing tier produces the error; errors are never aggregated.
"""

import logging
import math
from typing import Any, Callable

from basic_mcp_server.mcp.errors import ErrorKind, make_failure
from basic_mcp_server.mcp.models import ParameterSpec
from basic_mcp_server.mcp.registry import ToolDefinition

logger = logging.getLogger(__name__)

# Largest integer a JSON number carries without rounding (2^53 - 1)
MAX_SAFE_INTEGER = 2**53 - 1

DEFAULT_MESSAGES = {
    ErrorKind.INVALID_ARGUMENT_TYPE: "Argument '{name}' must be of type {type}",
    ErrorKind.INVALID_ARGUMENT_SHAPE: "Argument '{name}' must be an integer",
    ErrorKind.INVALID_ARGUMENT_RANGE: "Argument '{name}' is outside the safe integer range",
}

_MISSING = object()


def _is_number(value: Any) -> bool:
    # bool is a subclass of int
    return isinstance(value, (int, float)) and not isinstance(value, bool)


KIND_CHECKS: dict[str, Callable[[Any], bool]] = {
    "integer": _is_number,
    "number": _is_number,
    "string": lambda value: isinstance(value, str),
    "boolean": lambda value: isinstance(value, bool),
    "object": lambda value: isinstance(value, dict),
    "array": lambda value: isinstance(value, list),
}


def is_integral(value: int | float) -> bool:
    """Check that a number has no fractional component."""
    if isinstance(value, int):
        return True
    return math.isfinite(value) and value.is_integer()


def _failure(
    definition: ToolDefinition, kind: ErrorKind, name: str, spec: ParameterSpec
) -> dict[str, Any]:
    message = definition.messages.get(kind)
    if message is None:
        message = DEFAULT_MESSAGES[kind].format(name=name, type=spec.type)
    logger.debug(f"Rejected arguments for {definition.name}: {kind.value} on '{name}'")
    return make_failure(kind, message)


def validate_arguments(
    definition: ToolDefinition, arguments: dict[str, Any]
) -> tuple[dict[str, Any] | None, dict[str, Any] | None]:
    """
    Validate call arguments against the tool's parameters.

    Returns (validated_arguments, error) tuple. One will be None.
    Validated arguments hold only declared parameters; integral floats
    are converted to int.
    """
    present: dict[str, Any] = {}

    for name, spec in definition.parameters.items():
        value = arguments.get(name, _MISSING)
        if value is _MISSING:
            if spec.required:
                return None, _failure(
                    definition, ErrorKind.INVALID_ARGUMENT_TYPE, name, spec
                )
            continue
        if not KIND_CHECKS[spec.type](value):
            return None, _failure(
                definition, ErrorKind.INVALID_ARGUMENT_TYPE, name, spec
            )
        present[name] = value

    integers = [
        name for name in present if definition.parameters[name].type == "integer"
    ]

    for name in integers:
        if not is_integral(present[name]):
            return None, _failure(
                definition,
                ErrorKind.INVALID_ARGUMENT_SHAPE,
                name,
                definition.parameters[name],
            )

    for name in integers:
        if abs(present[name]) > MAX_SAFE_INTEGER:
            return None, _failure(
                definition,
                ErrorKind.INVALID_ARGUMENT_RANGE,
                name,
                definition.parameters[name],
            )

    for name in integers:
        present[name] = int(present[name])

    return present, None
