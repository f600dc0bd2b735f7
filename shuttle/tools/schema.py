"""Tool schemas: Pydantic-based input validation and JSON-schema rendering."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

JSON_SCHEMA_DRAFT = "http://json-schema.org/draft-07/schema#"


class PydanticSchema:
    """Schema backed by a Pydantic model."""

    def __init__(self, model: type[BaseModel]) -> None:
        self._model = model

    def parse(self, raw: Any) -> Any:
        if isinstance(raw, str):
            return self._model.model_validate_json(raw)
        return self._model.model_validate(raw)

    def to_json_schema(self) -> dict:
        return {"$schema": JSON_SCHEMA_DRAFT, **self._model.model_json_schema()}


class DictSchema:
    """Schema backed by a raw JSON Schema dict. Inputs pass through unvalidated."""

    def __init__(self, schema: dict[str, Any] | None = None) -> None:
        self._schema = dict(schema) if schema else {"$schema": JSON_SCHEMA_DRAFT}

    def parse(self, raw: Any) -> Any:
        return raw

    def to_json_schema(self) -> dict:
        return dict(self._schema)


Schema = PydanticSchema | DictSchema


def as_schema(value: type[BaseModel] | dict[str, Any] | Schema | None) -> Schema:
    if isinstance(value, (PydanticSchema, DictSchema)):
        return value
    if isinstance(value, type) and issubclass(value, BaseModel):
        return PydanticSchema(value)
    if value is None or isinstance(value, dict):
        return DictSchema(value)
    raise TypeError(f"Unsupported schema: {value!r}")
