"""Unit tests for data types."""

import dataclasses

import pytest

from shuttle.types import (
    Document,
    GenerateRequest,
    GenerateResponse,
    GenerateResponseChunk,
    Message,
    TextPart,
    ToolRequest,
    ToolRequestPart,
    ToolResponsePart,
    model_ref,
    to_part,
)


class TestParts:
    def test_to_part_from_string(self):
        assert to_part("hi") == TextPart(text="hi")

    def test_to_part_camel_and_snake_keys(self):
        camel = to_part({"toolRequest": {"name": "t", "input": {"x": 1}, "ref": "r"}})
        snake = to_part({"tool_request": {"name": "t", "input": {"x": 1}, "ref": "r"}})
        assert camel == snake == ToolRequestPart(ToolRequest(name="t", input={"x": 1}, ref="r"))

    def test_to_part_tool_response(self):
        part = to_part({"toolResponse": {"name": "t", "output": "o", "ref": "r"}})
        assert isinstance(part, ToolResponsePart)
        assert part.tool_response.output == "o"

    def test_to_part_rejects_unknown(self):
        with pytest.raises(TypeError):
            to_part({"image": "x"})


class TestMessage:
    def test_text_and_tool_requests(self):
        req = ToolRequestPart(ToolRequest(name="t"))
        msg = Message(role="model", content=[TextPart("a"), req, TextPart("b")])
        assert msg.text == "ab"
        assert msg.tool_requests == [req]


class TestResponse:
    def test_empty_message(self):
        response = GenerateResponse(message=None, finish_reason="blocked")
        assert response.text == ""
        assert response.tool_requests == []

    def test_with_request_copies(self):
        response = GenerateResponse(message=Message(role="model", content=[TextPart("x")]))
        request = GenerateRequest(messages=[])
        updated = response.with_request(request)
        assert updated.request is request
        assert response.request is None

    def test_chunk_text(self):
        assert GenerateResponseChunk(content=[TextPart("a"), TextPart("b")]).text == "ab"


class TestRequest:
    def test_frozen(self):
        request = GenerateRequest(messages=[])
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.config = {"a": 1}


class TestModelReference:
    def test_value_semantics(self):
        ref = model_ref("m", config={"a": 1})
        with_version = ref.with_version("v")
        with_config = ref.with_config({"b": 2})
        assert ref == model_ref("m", config={"a": 1})
        assert with_version.version == "v" and with_version.config == {"a": 1}
        assert with_config.config == {"b": 2} and ref.config == {"a": 1}


class TestDocument:
    def test_from_text(self):
        doc = Document.from_text("hello", {"source": "kb"})
        assert doc.text == "hello"
        assert doc.metadata == {"source": "kb"}
