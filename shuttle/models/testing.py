"""
Test doubles for models.

Both return preset responses without any network access and record what
they were called with, so tests can assert on the exact request sent.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from ..types import (
    ChunkSink,
    GenerateRequest,
    GenerateResponse,
    GenerateResponseChunk,
    Message,
    TextPart,
)
from .base import ModelAction

if TYPE_CHECKING:
    from ..engine import Shuttle

ResponseHandler = Callable[[GenerateRequest, ChunkSink | None], Awaitable[GenerateResponse]]


class EchoModel(ModelAction):
    """
    Echoes the request back as text.

    Each message renders as its text, prefixed with ``role: `` unless the
    role is ``user``; messages are joined with commas and followed by the
    compact JSON of the config. When given a sink it first streams the
    chunks ``3``, ``2``, ``1``.
    """

    def __init__(self, name: str = "echoModel") -> None:
        super().__init__(name)
        self.last_request: GenerateRequest | None = None
        self.last_streaming_callback: ChunkSink | None = None

    async def invoke(
        self, request: GenerateRequest, on_chunk: ChunkSink | None = None
    ) -> GenerateResponse:
        self.last_request = request
        self.last_streaming_callback = on_chunk
        if on_chunk:
            for text in ("3", "2", "1"):
                await on_chunk(GenerateResponseChunk(content=[TextPart(text=text)]))
        rendered = ",".join(
            m.text if m.role == "user" else f"{m.role}: {m.text}" for m in request.messages
        )
        config = json.dumps(request.config, separators=(",", ":"))
        return GenerateResponse(
            message=Message(role="model", content=[TextPart(text=f"Echo: {rendered}; config: {config}")]),
            finish_reason="stop",
        )


class ProgrammableModel(ModelAction):
    """Delegates every call to ``handle_response``, which tests assign."""

    def __init__(self, name: str = "programmableModel") -> None:
        super().__init__(name)
        self.handle_response: ResponseHandler | None = None
        self.last_request: GenerateRequest | None = None
        self.requests: list[GenerateRequest] = []

    async def invoke(
        self, request: GenerateRequest, on_chunk: ChunkSink | None = None
    ) -> GenerateResponse:
        self.last_request = request
        self.requests.append(request)
        if self.handle_response is None:
            raise RuntimeError("ProgrammableModel.handle_response is not set")
        return await self.handle_response(request, on_chunk)


def define_echo_model(shuttle: Shuttle, name: str = "echoModel") -> EchoModel:
    model = EchoModel(name)
    shuttle.registry.register_model(model)
    return model


def define_programmable_model(shuttle: Shuttle, name: str = "programmableModel") -> ProgrammableModel:
    model = ProgrammableModel(name)
    shuttle.registry.register_model(model)
    return model
