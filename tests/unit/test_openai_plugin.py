"""Unit tests for the OpenAI-compatible backend, against a fake client."""

import json
from types import SimpleNamespace

import pytest
from pydantic import BaseModel

openai = pytest.importorskip("openai")
httpx = pytest.importorskip("httpx")

from shuttle import ModelInvocationError, Shuttle  # noqa: E402
from shuttle.plugins import RetryConfig  # noqa: E402
from shuttle.plugins.openai import OpenAIModel, define_openai_model  # noqa: E402
from shuttle.types import Document, GenerateResponseChunk, OutputConfig  # noqa: E402


def _completion(content=None, tool_calls=None, finish_reason="stop"):
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(
        choices=[SimpleNamespace(message=message, finish_reason=finish_reason)],
        usage=SimpleNamespace(prompt_tokens=3, completion_tokens=2, total_tokens=5),
    )


def _tool_call(id, name, arguments):
    return SimpleNamespace(id=id, function=SimpleNamespace(name=name, arguments=arguments))


def _delta_chunk(content=None, tool_calls=None, finish_reason=None):
    delta = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(delta=delta, finish_reason=finish_reason)])


class FakeCompletions:
    def __init__(self, results):
        self._results = list(results)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        result = self._results.pop(0)
        if isinstance(result, Exception):
            raise result
        if kwargs.get("stream"):
            async def gen():
                for chunk in result:
                    yield chunk
            return gen()
        return result


def _client(*results):
    completions = FakeCompletions(results)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


NO_RETRY = RetryConfig(max_retries=0)


class TestOpenAIModel:
    async def test_text_completion_and_config_mapping(self):
        client, completions = _client(_completion(content="hello"))
        ai = Shuttle()
        define_openai_model(ai, "gpt", model="gpt-4o-mini", client=client, retry=NO_RETRY)

        response = await ai.generate(
            model="gpt",
            prompt="hi",
            system="be brief",
            config={"temperature": 0.2, "max_output_tokens": 64, "version": "gpt-4o"},
        )

        assert response.text == "hello"
        assert response.finish_reason == "stop"
        assert response.usage.total_tokens == 5
        sent = completions.calls[0]
        assert sent["model"] == "gpt-4o"
        assert sent["temperature"] == 0.2
        assert sent["max_tokens"] == 64
        assert sent["messages"] == [
            {"role": "system", "content": "be brief"},
            {"role": "user", "content": "hi"},
        ]

    async def test_tool_round_trip(self):
        client, completions = _client(
            _completion(
                tool_calls=[_tool_call("call_1", "lookup", '{"q": "x"}')],
                finish_reason="tool_calls",
            ),
            _completion(content="found it"),
        )
        ai = Shuttle()
        define_openai_model(ai, "gpt", client=client, retry=NO_RETRY)
        ai.define_tool(
            "lookup", "Look up", lambda i: {"hit": i["q"]},
            input_schema={"type": "object", "properties": {"q": {"type": "string"}}},
        )

        response = await ai.generate(model="gpt", prompt="find x", tools=["lookup"])

        assert response.text == "found it"
        first, second = completions.calls
        assert first["model"] == "gpt"
        assert first["tools"][0]["function"]["name"] == "lookup"
        assert first["tools"][0]["function"]["parameters"] == {
            "type": "object",
            "properties": {"q": {"type": "string"}},
        }
        assistant, tool = second["messages"][1], second["messages"][2]
        assert assistant["role"] == "assistant"
        assert assistant["tool_calls"][0]["id"] == "call_1"
        assert json.loads(assistant["tool_calls"][0]["function"]["arguments"]) == {"q": "x"}
        assert tool == {"role": "tool", "tool_call_id": "call_1", "content": '{"hit": "x"}'}

    async def test_content_filter_is_blocked(self):
        client, _ = _client(_completion(content=None, finish_reason="content_filter"))
        model = OpenAIModel("gpt", client=client, retry=NO_RETRY)
        response = await Shuttle().generate(model=model, prompt="hi")
        assert response.finish_reason == "blocked"
        assert response.text == ""

    async def test_streaming(self):
        client, completions = _client(
            [
                _delta_chunk(content="Hel"),
                _delta_chunk(content="lo"),
                _delta_chunk(finish_reason="stop"),
            ]
        )
        model = OpenAIModel("gpt", client=client, retry=NO_RETRY)
        chunks: list[GenerateResponseChunk] = []
        response = await Shuttle().generate(model=model, prompt="hi", on_chunk=chunks.append)
        assert [c.text for c in chunks] == ["Hel", "lo"]
        assert response.text == "Hello"
        assert completions.calls[0]["stream"] is True

    async def test_streamed_tool_calls_assembled(self):
        tc_start = SimpleNamespace(
            index=0, id="call_9", function=SimpleNamespace(name="lookup", arguments='{"q":')
        )
        tc_more = SimpleNamespace(index=0, id=None, function=SimpleNamespace(name=None, arguments='"y"}'))
        client, _ = _client(
            [
                _delta_chunk(tool_calls=[tc_start]),
                _delta_chunk(tool_calls=[tc_more]),
                _delta_chunk(finish_reason="tool_calls"),
            ]
        )
        model = OpenAIModel("gpt", client=client, retry=NO_RETRY)
        response = await Shuttle().generate(
            model=model, prompt="hi", on_chunk=lambda c: None, return_tool_requests=True
        )
        (part,) = response.tool_requests
        assert part.tool_request.name == "lookup"
        assert part.tool_request.input == {"q": "y"}
        assert part.tool_request.ref == "call_9"

    async def test_sdk_errors_wrapped(self):
        request = httpx.Request("POST", "https://api.example.test/v1/chat/completions")
        status_error = openai.APIStatusError(
            "service unavailable", response=httpx.Response(503, request=request), body=None
        )
        client, _ = _client(status_error)
        model = OpenAIModel("gpt", client=client, retry=NO_RETRY)
        with pytest.raises(ModelInvocationError) as exc_info:
            await Shuttle().generate(model=model, prompt="hi")
        assert exc_info.value.status_code == 503
        assert exc_info.value.cause is status_error

    async def test_generic_sdk_error_wrapped(self):
        client, _ = _client(openai.OpenAIError("boom"))
        model = OpenAIModel("gpt", client=client, retry=NO_RETRY)
        with pytest.raises(ModelInvocationError, match="boom"):
            await Shuttle().generate(model=model, prompt="hi")

    async def test_docs_sent_before_last_user_turn(self):
        client, completions = _client(_completion(content="ok"))
        model = OpenAIModel("gpt", client=client, retry=NO_RETRY)
        await Shuttle().generate(
            model=model,
            prompt="what colour?",
            system="be brief",
            docs=[Document.from_text("the sky is blue"), Document.from_text("grass is green")],
        )
        messages = completions.calls[0]["messages"]
        assert [m["role"] for m in messages] == ["system", "system", "user"]
        assert "- [0]: the sky is blue" in messages[1]["content"]
        assert "- [1]: grass is green" in messages[1]["content"]
        assert messages[2] == {"role": "user", "content": "what colour?"}

    async def test_output_schema_as_response_format(self):
        class Answer(BaseModel):
            value: int

        client, completions = _client(_completion(content='{"value": 1}'))
        model = OpenAIModel("gpt", client=client, retry=NO_RETRY)
        await Shuttle().generate(model=model, prompt="hi", output=Answer)
        response_format = completions.calls[0]["response_format"]
        assert response_format["type"] == "json_schema"
        assert response_format["json_schema"]["name"] == "output"
        schema = response_format["json_schema"]["schema"]
        assert "$schema" not in schema
        assert schema["properties"]["value"]["type"] == "integer"

    async def test_json_output_without_schema(self):
        client, completions = _client(_completion(content="{}"))
        model = OpenAIModel("gpt", client=client, retry=NO_RETRY)
        await Shuttle().generate(model=model, prompt="hi", output=OutputConfig(format="json"))
        assert completions.calls[0]["response_format"] == {"type": "json_object"}
