"""Structured error hierarchy for the generation engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import GenerateResponse


class ShuttleError(Exception):
    def __init__(self, code: str, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.cause = cause


class ModelNotFoundError(ShuttleError):
    def __init__(self, name: str) -> None:
        super().__init__("MODEL_NOT_FOUND", f"Model {name} not found")
        self.name = name


class NoModelSpecifiedError(ShuttleError):
    def __init__(self) -> None:
        super().__init__(
            "MODEL_REQUIRED", "No model specified and no default model is configured"
        )


class ModelInvocationError(ShuttleError):
    """Raised by model backends. The engine itself never wraps model errors."""

    def __init__(
        self,
        model: str,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
        code: str = "MODEL_INVOCATION_ERROR",
    ) -> None:
        super().__init__(code, message, cause)
        self.model = model
        self.status_code = status_code


class ToolNotFoundError(ShuttleError):
    def __init__(self, name: str) -> None:
        super().__init__("TOOL_NOT_FOUND", f"Tool {name} not found")
        self.name = name


class ToolInvocationError(ShuttleError):
    def __init__(
        self,
        tool_name: str,
        message: str,
        cause: Exception | None = None,
        code: str = "TOOL_INVOCATION_ERROR",
    ) -> None:
        super().__init__(code, message, cause)
        self.tool_name = tool_name


class ToolTimeoutError(ToolInvocationError):
    def __init__(self, tool_name: str, timeout: float) -> None:
        super().__init__(
            tool_name, f'Tool "{tool_name}" timed out after {timeout}s', code="TOOL_TIMEOUT"
        )
        self.timeout = timeout


class MaxTurnsExceededError(ShuttleError):
    def __init__(self, max_turns: int) -> None:
        super().__init__(
            "MAX_TURNS_EXCEEDED", f"Exceeded maximum tool call iterations ({max_turns})"
        )
        self.max_turns = max_turns


class GenerationAbortedError(ShuttleError):
    def __init__(self) -> None:
        super().__init__("GENERATION_ABORTED", "Generation was aborted")


class GenerationBlockedError(ShuttleError):
    def __init__(self, response: GenerateResponse) -> None:
        super().__init__("GENERATION_BLOCKED", "Model response was blocked")
        self.response = response
