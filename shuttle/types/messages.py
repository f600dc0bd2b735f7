"""Message and part types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

Role = Literal["system", "user", "model", "tool"]


@dataclass
class ToolRequest:
    name: str
    input: Any = None
    ref: str | None = None


@dataclass
class ToolResponse:
    name: str
    output: Any = None
    ref: str | None = None


@dataclass
class TextPart:
    text: str


@dataclass
class ToolRequestPart:
    tool_request: ToolRequest


@dataclass
class ToolResponsePart:
    tool_response: ToolResponse


Part = TextPart | ToolRequestPart | ToolResponsePart

_PART_TYPES = (TextPart, ToolRequestPart, ToolResponsePart)


def is_part(value: Any) -> bool:
    return isinstance(value, _PART_TYPES)


def to_part(value: Any) -> Part:
    """Coerce a string, part, or JSON-style dict into a part."""
    if isinstance(value, _PART_TYPES):
        return value
    if isinstance(value, str):
        return TextPart(text=value)
    if isinstance(value, dict):
        if "text" in value:
            return TextPart(text=value["text"])
        req = value.get("toolRequest", value.get("tool_request"))
        if req is not None:
            return ToolRequestPart(
                tool_request=ToolRequest(
                    name=req["name"], input=req.get("input"), ref=req.get("ref")
                )
            )
        resp = value.get("toolResponse", value.get("tool_response"))
        if resp is not None:
            return ToolResponsePart(
                tool_response=ToolResponse(
                    name=resp["name"], output=resp.get("output"), ref=resp.get("ref")
                )
            )
    raise TypeError(f"Cannot convert {value!r} to a message part")


def _text_of(parts: list[Part]) -> str:
    return "".join(p.text for p in parts if isinstance(p, TextPart))


@dataclass
class Message:
    role: Role
    content: list[Part] = field(default_factory=list)

    @property
    def text(self) -> str:
        return _text_of(self.content)

    @property
    def tool_requests(self) -> list[ToolRequestPart]:
        return [p for p in self.content if isinstance(p, ToolRequestPart)]
