"""Tests for tool argument validation."""

import pytest

from basic_mcp_server.mcp.errors import ErrorKind, INVALID_PARAMS
from basic_mcp_server.mcp.models import ParameterSpec
from basic_mcp_server.mcp.registry import ToolDefinition
from basic_mcp_server.mcp.validation import (
    MAX_SAFE_INTEGER,
    is_integral,
    validate_arguments,
)


async def _noop(arguments):
    return []


def make_definition(parameters, messages=None) -> ToolDefinition:
    return ToolDefinition(
        name="probe",
        description="Validation probe",
        parameters=parameters,
        handler=_noop,
        messages=messages or {},
    )


class TestKindChecks:
    """First tier: presence and declared kind."""

    @pytest.mark.parametrize(
        "kind, good, bad",
        [
            ("integer", 3, "3"),
            ("number", 2.5, True),
            ("string", "text", 1),
            ("boolean", False, 0),
            ("object", {"k": 1}, [1]),
            ("array", [1], {"k": 1}),
        ],
    )
    def test_kind_accepts_and_rejects(self, kind, good, bad):
        definition = make_definition({"value": ParameterSpec(type=kind)})

        validated, error = validate_arguments(definition, {"value": good})
        assert error is None
        assert validated == {"value": good}

        validated, error = validate_arguments(definition, {"value": bad})
        assert validated is None
        assert error["code"] == INVALID_PARAMS
        assert error["message"] == f"Argument 'value' must be of type {kind}"

    def test_missing_required_fails_kind_check(self):
        definition = make_definition({"value": ParameterSpec(type="integer")})
        validated, error = validate_arguments(definition, {})
        assert validated is None
        assert error["message"] == "Argument 'value' must be of type integer"

    def test_missing_optional_is_skipped(self):
        definition = make_definition(
            {"value": ParameterSpec(type="integer", required=False)}
        )
        validated, error = validate_arguments(definition, {})
        assert error is None
        assert validated == {}

    def test_first_declared_parameter_reported(self):
        definition = make_definition(
            {
                "first": ParameterSpec(type="string"),
                "second": ParameterSpec(type="string"),
            }
        )
        _, error = validate_arguments(definition, {"first": 1, "second": 2})
        assert "'first'" in error["message"]

    def test_undeclared_arguments_dropped(self):
        definition = make_definition({"value": ParameterSpec(type="string")})
        validated, error = validate_arguments(
            definition, {"value": "x", "extra": 1}
        )
        assert error is None
        assert validated == {"value": "x"}


class TestIntegerTiers:
    """Shape and range checks for integer parameters."""

    def test_kind_failure_wins_over_shape(self):
        definition = make_definition(
            {
                "a": ParameterSpec(type="integer"),
                "b": ParameterSpec(type="integer"),
            }
        )
        # 'a' would fail the shape check, but 'b' fails the earlier tier
        _, error = validate_arguments(definition, {"a": 1.5, "b": "x"})
        assert error["message"] == "Argument 'b' must be of type integer"

    def test_shape_failure(self):
        definition = make_definition({"a": ParameterSpec(type="integer")})
        _, error = validate_arguments(definition, {"a": 1.5})
        assert error["message"] == "Argument 'a' must be an integer"

    def test_range_failure(self):
        definition = make_definition({"a": ParameterSpec(type="integer")})
        _, error = validate_arguments(definition, {"a": MAX_SAFE_INTEGER + 1})
        assert error["message"] == "Argument 'a' is outside the safe integer range"

    def test_number_kind_skips_integer_tiers(self):
        definition = make_definition({"x": ParameterSpec(type="number")})
        validated, error = validate_arguments(definition, {"x": 1e300})
        assert error is None
        assert validated == {"x": 1e300}

    def test_integral_float_normalized_to_int(self):
        definition = make_definition({"a": ParameterSpec(type="integer")})
        validated, _ = validate_arguments(definition, {"a": -4.0})
        assert validated == {"a": -4}
        assert type(validated["a"]) is int

    def test_message_overrides(self):
        definition = make_definition(
            {"a": ParameterSpec(type="integer")},
            messages={
                ErrorKind.INVALID_ARGUMENT_TYPE: "wrong kind",
                ErrorKind.INVALID_ARGUMENT_SHAPE: "wrong shape",
            },
        )
        assert validate_arguments(definition, {"a": "1"})[1]["message"] == "wrong kind"
        assert validate_arguments(definition, {"a": 0.5})[1]["message"] == "wrong shape"
        # Range has no override, falls back to the default text
        assert "safe integer range" in validate_arguments(
            definition, {"a": 2**60}
        )[1]["message"]

    @pytest.mark.parametrize(
        "value, expected",
        [(3, True), (-0.0, True), (2.0, True), (2.5, False), (float("inf"), False), (float("nan"), False)],
    )
    def test_is_integral(self, value, expected):
        assert is_integral(value) is expected
