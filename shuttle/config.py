"""
Engine configuration.

Validated with Pydantic so a bad setting fails at construction time
rather than in the middle of a tool-calling loop.
"""

from pydantic import BaseModel, ConfigDict, Field

from .types import ModelReference


class EngineConfig(BaseModel):
    """Engine-wide defaults; per-call options override them."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")

    default_model: str | ModelReference | None = Field(
        None, description="Model used when a call does not name one"
    )
    max_turns: int = Field(5, ge=1, description="Maximum tool-calling turns per generate call")
    fail_on_blocked: bool = Field(
        False, description="Raise GenerationBlockedError instead of returning a blocked response"
    )
    tool_timeout: float | None = Field(
        None, gt=0, description="Seconds allowed for each tool invocation"
    )
