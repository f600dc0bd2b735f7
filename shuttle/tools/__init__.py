"""Tool actions and the define_tool helper."""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError

from ..errors import ToolInvocationError
from ..types import ToolDefinition
from .schema import JSON_SCHEMA_DRAFT, DictSchema, PydanticSchema, Schema, as_schema

ToolFn = Callable[[Any], Awaitable[Any] | Any]


class ToolAction:
    """A named, described tool handler with input and output schemas."""

    def __init__(
        self,
        name: str,
        description: str,
        fn: ToolFn,
        input_schema: type[BaseModel] | dict[str, Any] | Schema | None = None,
        output_schema: type[BaseModel] | dict[str, Any] | Schema | None = None,
    ) -> None:
        self.name = name
        self.description = description
        self._fn = fn
        self.input_schema = as_schema(input_schema)
        self.output_schema = as_schema(output_schema)

    @property
    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            input_schema=self.input_schema.to_json_schema(),
            output_schema=self.output_schema.to_json_schema(),
        )

    async def invoke(self, input: Any) -> Any:
        try:
            parsed = self.input_schema.parse(input)
        except ValidationError as e:
            raise ToolInvocationError(
                self.name, f'Invalid input for tool "{self.name}": {e}', cause=e
            ) from e
        result = self._fn(parsed)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, BaseModel):
            result = result.model_dump()
        return result

    def __repr__(self) -> str:
        return f"ToolAction(name={self.name!r})"


def define_tool(
    name: str,
    description: str,
    fn: ToolFn,
    input_schema: type[BaseModel] | dict[str, Any] | Schema | None = None,
    output_schema: type[BaseModel] | dict[str, Any] | Schema | None = None,
) -> ToolAction:
    return ToolAction(name, description, fn, input_schema=input_schema, output_schema=output_schema)


__all__ = [
    "ToolAction", "ToolFn", "define_tool",
    "PydanticSchema", "DictSchema", "Schema", "as_schema", "JSON_SCHEMA_DRAFT",
]
