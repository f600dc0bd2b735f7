"""
The generate loop: build request, invoke model, dispatch tool calls, repeat.

One call owns its message history from start to finish. Each turn sends a
fresh GenerateRequest built from a copy of that history; tool calls from
one model response run one after another, in the order the model emitted
them, and their responses go back as a single ``tool`` message.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from ..config import EngineConfig
from ..errors import GenerationAbortedError, GenerationBlockedError, MaxTurnsExceededError
from ..registry import Registry
from ..types import GenerateRequest, GenerateResponse, Message
from .callbacks import as_sink
from .config import resolve_config
from .invoker import invoke_model, resolve_model
from .messages import assemble_messages
from .options import GenerateOptions, to_output_config
from .tools import execute_tool_request, resolve_tools

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _check_aborted(options: GenerateOptions) -> None:
    if options.signal is not None and options.signal.is_set():
        raise GenerationAbortedError()


async def _abortable(aw: Awaitable[T], signal: asyncio.Event | None) -> T:
    """Awaits ``aw``, abandoning it as soon as ``signal`` is set."""
    if signal is None:
        return await aw
    task = asyncio.ensure_future(aw)
    waiter = asyncio.ensure_future(signal.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        raise
    finally:
        waiter.cancel()
    if signal.is_set():
        task.cancel()
        await asyncio.wait({task})
        if not task.cancelled():
            task.exception()
        raise GenerationAbortedError()
    return task.result()


async def generate(
    registry: Registry, options: GenerateOptions, config: EngineConfig | None = None
) -> GenerateResponse:
    config = config or EngineConfig()
    snapshot = registry.snapshot()

    resolved = resolve_model(options.model, snapshot, default_model=config.default_model)
    merged_config = resolve_config(
        resolved.config, options.version or resolved.version, options.config
    )
    tools = resolve_tools(options.tools, snapshot)
    tool_definitions = [t.definition for t in tools.values()]
    output = to_output_config(options.output)
    history = assemble_messages(options.prompt, options.system, options.messages)
    sink = as_sink(options.on_chunk)
    max_turns = options.max_turns if options.max_turns is not None else config.max_turns

    turns = 0
    while True:
        _check_aborted(options)
        request = GenerateRequest(
            messages=list(history),
            config=dict(merged_config),
            tools=list(tool_definitions),
            output=output,
            docs=list(options.docs) if options.docs is not None else None,
        )
        response = (
            await _abortable(invoke_model(resolved, request, sink), options.signal)
        ).with_request(request)

        tool_requests = response.tool_requests
        if not tool_requests or options.return_tool_requests:
            logger.debug(
                "Generation with %s finished after %d tool turns (%s)",
                resolved.name, turns, response.finish_reason,
            )
            if response.finish_reason == "blocked" and config.fail_on_blocked:
                raise GenerationBlockedError(response)
            return response

        turns += 1
        if turns > max_turns:
            raise MaxTurnsExceededError(max_turns)
        logger.debug(
            "Turn %d: model %s requested %d tool call(s)", turns, resolved.name, len(tool_requests)
        )

        tool_responses = []
        for part in tool_requests:
            _check_aborted(options)
            tool_responses.append(
                await _abortable(
                    execute_tool_request(part, tools, timeout=config.tool_timeout), options.signal
                )
            )
        history.append(response.message)
        history.append(Message(role="tool", content=tool_responses))
