"""Model capability: a named callable that turns a request into a response."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Protocol, runtime_checkable

from ..types import ChunkSink, GenerateRequest, GenerateResponse

ModelFn = Callable[
    [GenerateRequest, ChunkSink | None], Awaitable[GenerateResponse] | GenerateResponse
]


@runtime_checkable
class Model(Protocol):
    name: str

    async def invoke(
        self, request: GenerateRequest, on_chunk: ChunkSink | None = None
    ) -> GenerateResponse: ...


@dataclass
class ModelInfo:
    label: str | None = None
    versions: list[str] = field(default_factory=list)
    supports: dict[str, Any] = field(default_factory=dict)


class ModelAction:
    """Wraps a model function. Subclasses may override ``invoke`` directly."""

    def __init__(self, name: str, fn: ModelFn | None = None, info: ModelInfo | None = None) -> None:
        self.name = name
        self.info = info or ModelInfo()
        self._fn = fn

    async def invoke(
        self, request: GenerateRequest, on_chunk: ChunkSink | None = None
    ) -> GenerateResponse:
        if self._fn is None:
            raise NotImplementedError(f"Model {self.name} has no implementation")
        result = self._fn(request, on_chunk)
        if inspect.isawaitable(result):
            result = await result
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def define_model(name: str, fn: ModelFn, info: ModelInfo | None = None) -> ModelAction:
    return ModelAction(name, fn, info=info)
