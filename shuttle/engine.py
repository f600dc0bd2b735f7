"""The caller-facing engine: registry, config and generate."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from .config import EngineConfig
from .flows import Flow, FlowFn
from .generate import (
    GenerateOptions,
    GenerateStreamResponse,
    Prompt,
    coerce_options,
    generate,
    generate_stream,
)
from .models import ModelAction, ModelFn, ModelInfo
from .registry import Registry
from .tools import Schema, ToolAction, ToolFn
from .types import GenerateResponse, ModelReference


class Shuttle:
    """
    Owns a model/tool registry and engine defaults.

    ::

        ai = Shuttle(model="echoModel")
        ai.define_model("echoModel", echo)
        response = await ai.generate("hi", system="talk like a pirate")
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        model: str | ModelReference | None = None,
        registry: Registry | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        if model is not None:
            self.config = self.config.model_copy(update={"default_model": model})
        self.registry = registry or Registry()

    def define_model(self, name: str, fn: ModelFn, info: ModelInfo | None = None) -> ModelAction:
        model = ModelAction(name, fn, info=info)
        self.registry.register_model(model)
        return model

    def define_tool(
        self,
        name: str,
        description: str,
        fn: ToolFn,
        input_schema: type[BaseModel] | dict[str, Any] | Schema | None = None,
        output_schema: type[BaseModel] | dict[str, Any] | Schema | None = None,
    ) -> ToolAction:
        tool = ToolAction(name, description, fn, input_schema=input_schema, output_schema=output_schema)
        self.registry.register_tool(tool)
        return tool

    def define_flow(self, name: str, fn: FlowFn) -> Flow:
        return Flow(name, fn)

    async def generate(
        self, options: GenerateOptions | Prompt | None = None, **kwargs: Any
    ) -> GenerateResponse:
        return await generate(self.registry, coerce_options(options, **kwargs), self.config)

    def generate_stream(
        self, options: GenerateOptions | Prompt | None = None, **kwargs: Any
    ) -> GenerateStreamResponse:
        return generate_stream(self.registry, coerce_options(options, **kwargs), self.config)
