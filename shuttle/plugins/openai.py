"""OpenAI-compatible chat-completions model backend."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import openai

from ..errors import ModelInvocationError
from ..models import ModelInfo
from ..types import (
    ChunkSink,
    Document,
    FinishReason,
    GenerateRequest,
    GenerateResponse,
    GenerateResponseChunk,
    Message,
    Part,
    TextPart,
    ToolDefinition,
    ToolRequest,
    ToolRequestPart,
    ToolResponsePart,
    Usage,
)
from .base import CircuitBreakerConfig, ModelBackend, RetryConfig

if TYPE_CHECKING:
    from ..engine import Shuttle

_ROLES = {"system": "system", "user": "user", "model": "assistant"}

_FINISH_REASONS: dict[str | None, FinishReason] = {
    "stop": "stop",
    "tool_calls": "stop",
    "function_call": "stop",
    "length": "length",
    "content_filter": "blocked",
}


def _dump(value: Any) -> str:
    return value if isinstance(value, str) else json.dumps(value)


def _msg_to_dicts(m: Message) -> list[dict]:
    if m.role == "tool":
        return [
            {
                "role": "tool",
                "tool_call_id": p.tool_response.ref or p.tool_response.name,
                "content": _dump(p.tool_response.output),
            }
            for p in m.content
            if isinstance(p, ToolResponsePart)
        ]
    d: dict = {"role": _ROLES[m.role], "content": m.text}
    if m.tool_requests:
        d["tool_calls"] = [
            {
                "id": p.tool_request.ref or p.tool_request.name,
                "type": "function",
                "function": {
                    "name": p.tool_request.name,
                    "arguments": json.dumps(p.tool_request.input or {}),
                },
            }
            for p in m.tool_requests
        ]
    return [d]


def _docs_to_dict(docs: list[Document]) -> dict:
    lines = [f"- [{i}]: {d.text}" for i, d in enumerate(docs)]
    return {
        "role": "system",
        "content": "Use the following information to complete your task:\n\n" + "\n".join(lines),
    }


def _strip_draft(schema: dict) -> dict:
    return {k: v for k, v in schema.items() if k != "$schema"}


def _tools_to_dicts(tools: list[ToolDefinition]) -> list[dict]:
    return [
        {
            "type": "function",
            "function": {
                "name": t.name,
                "description": t.description,
                "parameters": _strip_draft(t.input_schema),
            },
        }
        for t in tools
    ]


def _parse_arguments(arguments: str | None) -> Any:
    try:
        return json.loads(arguments) if arguments else {}
    except json.JSONDecodeError:
        return arguments


class OpenAIModel(ModelBackend):
    """
    Chat-completions backend for OpenAI and compatible endpoints.

    Recognised config keys: ``temperature``, ``max_output_tokens`` (or
    ``max_tokens``), ``top_p``, ``stop`` and ``version``, which replaces
    the upstream model name for that call. Documents go out as a system
    message just before the last user turn.
    """

    def __init__(
        self,
        name: str,
        model: str | None = None,
        api_key: str | None = None,
        base_url: str | None = None,
        client: Any = None,
        info: ModelInfo | None = None,
        retry: RetryConfig | None = None,
        circuit_breaker: CircuitBreakerConfig | None = None,
    ) -> None:
        super().__init__(name, info=info, retry=retry, circuit_breaker=circuit_breaker)
        self._client = client or openai.AsyncOpenAI(api_key=api_key, base_url=base_url)
        self._model = model or name

    def _build_kwargs(self, request: GenerateRequest) -> dict:
        config = request.config
        messages: list[dict] = []
        for m in request.messages:
            messages.extend(_msg_to_dicts(m))
        if request.docs:
            last_user = max(
                (i for i, m in enumerate(messages) if m["role"] == "user"), default=len(messages)
            )
            messages.insert(last_user, _docs_to_dict(request.docs))
        kwargs: dict = {"model": config.get("version") or self._model, "messages": messages}
        if "temperature" in config:
            kwargs["temperature"] = config["temperature"]
        max_tokens = config.get("max_output_tokens", config.get("max_tokens"))
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        if "top_p" in config:
            kwargs["top_p"] = config["top_p"]
        if "stop" in config:
            kwargs["stop"] = config["stop"]
        if request.tools:
            kwargs["tools"] = _tools_to_dicts(request.tools)
        if request.output.format == "json":
            if request.output.schema:
                kwargs["response_format"] = {
                    "type": "json_schema",
                    "json_schema": {"name": "output", "schema": _strip_draft(request.output.schema)},
                }
            else:
                kwargs["response_format"] = {"type": "json_object"}
        return kwargs

    async def _do_generate(
        self, request: GenerateRequest, on_chunk: ChunkSink | None
    ) -> GenerateResponse:
        kwargs = self._build_kwargs(request)
        try:
            if on_chunk is None:
                return await self._complete(kwargs)
            return await self._stream(kwargs, on_chunk)
        except openai.APIStatusError as e:
            raise ModelInvocationError(self.name, str(e), status_code=e.status_code, cause=e) from e
        except openai.OpenAIError as e:
            raise ModelInvocationError(self.name, str(e), cause=e) from e

    async def _complete(self, kwargs: dict) -> GenerateResponse:
        resp = await self._client.chat.completions.create(**kwargs)
        choice = resp.choices[0]
        content: list[Part] = []
        if choice.message.content:
            content.append(TextPart(text=choice.message.content))
        for tc in choice.message.tool_calls or []:
            content.append(
                ToolRequestPart(
                    tool_request=ToolRequest(
                        name=tc.function.name,
                        input=_parse_arguments(tc.function.arguments),
                        ref=tc.id,
                    )
                )
            )
        usage = Usage()
        if resp.usage:
            usage = Usage(
                input_tokens=resp.usage.prompt_tokens,
                output_tokens=resp.usage.completion_tokens,
                total_tokens=resp.usage.total_tokens,
            )
        return GenerateResponse(
            message=Message(role="model", content=content),
            finish_reason=_FINISH_REASONS.get(choice.finish_reason, "other"),
            usage=usage,
        )

    async def _stream(self, kwargs: dict, on_chunk: ChunkSink) -> GenerateResponse:
        resp = await self._client.chat.completions.create(stream=True, **kwargs)
        text = ""
        finish: str | None = None
        tc_buffers: dict[int, dict] = {}
        async for chunk in resp:
            if not chunk.choices:
                continue
            delta = chunk.choices[0].delta
            finish = chunk.choices[0].finish_reason or finish
            if delta and delta.content:
                text += delta.content
                await on_chunk(GenerateResponseChunk(content=[TextPart(text=delta.content)]))
            if delta and delta.tool_calls:
                for tc in delta.tool_calls:
                    buf = tc_buffers.setdefault(tc.index, {"id": "", "name": "", "args": ""})
                    if tc.id:
                        buf["id"] = tc.id
                    if tc.function and tc.function.name:
                        buf["name"] = tc.function.name
                    if tc.function and tc.function.arguments:
                        buf["args"] += tc.function.arguments

        content: list[Part] = [TextPart(text=text)] if text else []
        for idx in sorted(tc_buffers):
            buf = tc_buffers[idx]
            content.append(
                ToolRequestPart(
                    tool_request=ToolRequest(
                        name=buf["name"], input=_parse_arguments(buf["args"]), ref=buf["id"] or None
                    )
                )
            )
        return GenerateResponse(
            message=Message(role="model", content=content),
            finish_reason=_FINISH_REASONS.get(finish, "other"),
        )


def define_openai_model(shuttle: Shuttle, name: str, **kwargs: Any) -> OpenAIModel:
    model = OpenAIModel(name, **kwargs)
    shuttle.registry.register_model(model)
    return model
