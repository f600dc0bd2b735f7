"""Streaming callback sentinel and sink adaptation."""

from __future__ import annotations

import inspect

from ..types import ChunkSink, GenerateResponseChunk, StreamingCallback


class _NoopStreamingCallback:
    """Placeholder callback meaning "the caller did not ask for streaming"."""

    _instance: _NoopStreamingCallback | None = None

    def __new__(cls) -> _NoopStreamingCallback:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __call__(self, chunk: GenerateResponseChunk) -> None:
        return None

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOOP_STREAMING_CALLBACK"


NOOP_STREAMING_CALLBACK = _NoopStreamingCallback()


def is_streaming_requested(callback: StreamingCallback | None) -> bool:
    return callback is not None and callback is not NOOP_STREAMING_CALLBACK


def as_sink(callback: StreamingCallback | None) -> ChunkSink | None:
    """Adapt a caller callback into the awaitable sink models receive, or None."""
    if not is_streaming_requested(callback):
        return None

    async def sink(chunk: GenerateResponseChunk) -> None:
        result = callback(chunk)
        if inspect.isawaitable(result):
            await result

    return sink
