"""
Tests for Shuttle errors
"""

import pytest

from shuttle import (
    GenerationAbortedError,
    MaxTurnsExceededError,
    ModelInvocationError,
    ModelNotFoundError,
    ShuttleError,
    ToolInvocationError,
    ToolNotFoundError,
    ToolTimeoutError,
)


class TestErrorHierarchy:
    @pytest.mark.parametrize(
        "error",
        [
            ModelNotFoundError("m"),
            ToolNotFoundError("t"),
            MaxTurnsExceededError(3),
            ModelInvocationError("m", "failed"),
            ToolInvocationError("t", "failed"),
            ToolTimeoutError("t", 1.5),
            GenerationAbortedError(),
        ],
    )
    def test_all_are_shuttle_errors(self, error):
        assert isinstance(error, ShuttleError)
        assert error.code
        assert str(error) == error.message

    def test_model_not_found_names_identifier(self):
        err = ModelNotFoundError("modelThatDoesNotExist")
        assert str(err) == "Model modelThatDoesNotExist not found"
        assert err.code == "MODEL_NOT_FOUND"

    def test_tool_not_found_names_tool(self):
        assert "testTool" in str(ToolNotFoundError("testTool"))

    def test_max_turns_includes_limit(self):
        err = MaxTurnsExceededError(17)
        assert str(err) == "Exceeded maximum tool call iterations (17)"

    def test_invocation_error_keeps_cause(self):
        cause = RuntimeError("sdk")
        err = ModelInvocationError("m", "failed", status_code=503, cause=cause)
        assert err.cause is cause
        assert err.status_code == 503
        assert err.model == "m"

    def test_timeout_is_tool_invocation_error(self):
        err = ToolTimeoutError("slow", 2)
        assert isinstance(err, ToolInvocationError)
        assert err.code == "TOOL_TIMEOUT"
        assert "slow" in str(err)
