"""Flows: named async functions that may stream chunks to their caller."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from .generate import NOOP_STREAMING_CALLBACK, StreamingResponse, start_stream
from .types import StreamingCallback

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")

FlowFn = Callable[[InputT, StreamingCallback], Awaitable[OutputT]]


class Flow(Generic[InputT, OutputT]):
    """
    Calls ``fn(input, streaming_callback)``. When the caller did not ask for
    streaming, ``fn`` receives NOOP_STREAMING_CALLBACK, so passing it on to
    ``generate`` keeps the model call non-streaming.
    """

    def __init__(self, name: str, fn: FlowFn) -> None:
        self.name = name
        self._fn = fn

    async def __call__(self, input: InputT = None, on_chunk: StreamingCallback | None = None) -> OutputT:
        return await self.run(input, on_chunk=on_chunk)

    async def run(self, input: InputT = None, on_chunk: StreamingCallback | None = None) -> OutputT:
        logger.debug("Running flow %s (streaming=%s)", self.name, on_chunk is not None)
        return await self._fn(input, on_chunk if on_chunk is not None else NOOP_STREAMING_CALLBACK)

    def stream(self, input: InputT = None) -> StreamingResponse[OutputT, Any]:
        return start_stream(lambda sink: self.run(input, on_chunk=sink))

    def __repr__(self) -> str:
        return f"Flow(name={self.name!r})"
