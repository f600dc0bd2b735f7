"""Run a streaming operation in the background and expose its chunks lazily."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass, replace
from typing import Generic, TypeVar

from ..config import EngineConfig
from ..registry import Registry
from ..types import GenerateResponse, GenerateResponseChunk
from .callbacks import is_streaming_requested
from .loop import generate
from .options import GenerateOptions

T = TypeVar("T")
C = TypeVar("C")

_DONE = object()


@dataclass
class StreamingResponse(Generic[T, C]):
    """
    ``response`` resolves to the final result, or raises the error the run
    failed with. ``stream`` yields chunks in delivery order and ends when
    the run finishes either way. It can be consumed once.
    """

    response: asyncio.Task[T]
    stream: AsyncIterator[C]


GenerateStreamResponse = StreamingResponse[GenerateResponse, GenerateResponseChunk]


async def _drain(queue: asyncio.Queue) -> AsyncIterator:
    while True:
        item = await queue.get()
        if item is _DONE:
            return
        yield item


def start_stream(
    run: Callable[[Callable[[C], Awaitable[None]]], Awaitable[T]],
    forward: Callable[[C], Awaitable[None] | None] | None = None,
) -> StreamingResponse[T, C]:
    """
    Start ``run(sink)`` as a task on the running loop. Each chunk passed to
    the sink is queued for the stream, and also handed to ``forward`` if
    given, before the sink returns.
    """
    queue: asyncio.Queue = asyncio.Queue()

    async def sink(chunk: C) -> None:
        queue.put_nowait(chunk)
        if forward is not None:
            result = forward(chunk)
            if inspect.isawaitable(result):
                await result

    task = asyncio.ensure_future(run(sink))
    task.add_done_callback(lambda _: queue.put_nowait(_DONE))
    return StreamingResponse(response=task, stream=_drain(queue))


def generate_stream(
    registry: Registry, options: GenerateOptions, config: EngineConfig | None = None
) -> GenerateStreamResponse:
    """Must be called while an event loop is running."""

    def run(sink: Callable[[GenerateResponseChunk], Awaitable[None]]) -> Awaitable[GenerateResponse]:
        return generate(registry, replace(options, on_chunk=sink), config)

    forward = options.on_chunk if is_streaming_requested(options.on_chunk) else None
    return start_stream(run, forward=forward)
