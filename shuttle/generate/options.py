"""Per-call generate options."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from ..tools import ToolAction, as_schema
from ..types import Document, Message, OutputConfig, StreamingCallback
from .invoker import ModelArgument
from .messages import Prompt


@dataclass
class GenerateOptions:
    model: ModelArgument | None = None
    prompt: Prompt | None = None
    system: str | None = None
    messages: list[Message] | None = None
    config: dict[str, Any] | None = None
    version: str | None = None
    tools: list[str | ToolAction] = field(default_factory=list)
    max_turns: int | None = None
    on_chunk: StreamingCallback | None = None
    output: OutputConfig | type[BaseModel] | dict[str, Any] | None = None
    docs: list[Document] | None = None
    return_tool_requests: bool = False
    signal: asyncio.Event | None = None


def to_output_config(output: OutputConfig | type[BaseModel] | dict[str, Any] | None) -> OutputConfig:
    """A Pydantic model class or a JSON-schema dict means JSON output of that shape."""
    if output is None:
        return OutputConfig()
    if isinstance(output, OutputConfig):
        return output
    return OutputConfig(format="json", schema=as_schema(output).to_json_schema())


def coerce_options(
    options: GenerateOptions | Prompt | None = None, **kwargs: Any
) -> GenerateOptions:
    """
    Accepts a GenerateOptions, a bare prompt (string, parts, a message or messages),
    or keyword arguments; keywords override fields of ``options``.
    """
    if options is None:
        return GenerateOptions(**kwargs)
    if isinstance(options, GenerateOptions):
        if not kwargs:
            return options
        merged = {f: getattr(options, f) for f in options.__dataclass_fields__}
        merged.update(kwargs)
        return GenerateOptions(**merged)
    if isinstance(options, (str, Sequence)) or hasattr(options, "__dataclass_fields__"):
        return GenerateOptions(prompt=options, **kwargs)
    raise TypeError(f"Unsupported generate options: {options!r}")
