"""Model request/response types."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from typing import Any, Literal

from .messages import Message, Part, TextPart, ToolRequestPart, _text_of
from .tools import ToolDefinition

FinishReason = Literal["stop", "length", "blocked", "other"]


@dataclass
class Usage:
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0


@dataclass
class Document:
    content: list[Part] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_text(cls, text: str, metadata: dict[str, Any] | None = None) -> Document:
        return cls(content=[TextPart(text=text)], metadata=dict(metadata or {}))

    @property
    def text(self) -> str:
        return _text_of(self.content)


@dataclass
class OutputConfig:
    format: str | None = None
    schema: dict[str, Any] | None = None


@dataclass(frozen=True)
class GenerateRequest:
    messages: list[Message]
    config: dict[str, Any] = field(default_factory=dict)
    tools: list[ToolDefinition] = field(default_factory=list)
    output: OutputConfig = field(default_factory=OutputConfig)
    docs: list[Document] | None = None


@dataclass
class GenerateResponse:
    message: Message | None
    finish_reason: FinishReason = "stop"
    finish_message: str | None = None
    usage: Usage = field(default_factory=Usage)
    request: GenerateRequest | None = None
    custom: Any = None

    @property
    def text(self) -> str:
        return self.message.text if self.message else ""

    @property
    def tool_requests(self) -> list[ToolRequestPart]:
        return self.message.tool_requests if self.message else []

    def with_request(self, request: GenerateRequest) -> GenerateResponse:
        return replace(self, request=request)


@dataclass
class GenerateResponseChunk:
    content: list[Part] = field(default_factory=list)
    role: str = "model"
    index: int = 0

    @property
    def text(self) -> str:
        return _text_of(self.content)


# Sink handed to models. Always awaitable so deliveries are sequenced.
ChunkSink = Callable[[GenerateResponseChunk], Awaitable[None]]
# Caller-supplied callback; may be sync or async.
StreamingCallback = Callable[[GenerateResponseChunk], Awaitable[None] | None]


@dataclass(frozen=True)
class ModelReference:
    """Points at a registered model, optionally carrying default config and version."""

    name: str
    config: dict[str, Any] | None = None
    version: str | None = None

    def with_config(self, config: dict[str, Any]) -> ModelReference:
        return replace(self, config=dict(config))

    def with_version(self, version: str) -> ModelReference:
        return replace(self, version=version)


def model_ref(
    name: str, config: dict[str, Any] | None = None, version: str | None = None
) -> ModelReference:
    return ModelReference(name=name, config=dict(config) if config else None, version=version)
