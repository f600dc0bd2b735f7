"""Resolve a model identifier once, then invoke it per turn."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..errors import ModelNotFoundError, NoModelSpecifiedError
from ..models import Model, ModelAction
from ..registry import RegistrySnapshot
from ..types import ChunkSink, GenerateRequest, GenerateResponse, ModelReference

logger = logging.getLogger(__name__)

ModelArgument = str | ModelReference | Model | Callable[..., Any]


@dataclass(frozen=True)
class ResolvedModel:
    name: str
    model: Model
    config: dict[str, Any] | None = None
    version: str | None = None


def _lookup(name: str, registry: RegistrySnapshot) -> Model:
    model = registry.lookup_model(name)
    if model is None:
        raise ModelNotFoundError(name)
    return model


def resolve_model(
    model: ModelArgument | None,
    registry: RegistrySnapshot,
    default_model: str | ModelReference | None = None,
) -> ResolvedModel:
    """
    Names and references go through the registry; a Model object or a bare
    callable is used as-is.
    """
    if model is None:
        model = default_model
    if model is None:
        raise NoModelSpecifiedError()
    if isinstance(model, str):
        return ResolvedModel(name=model, model=_lookup(model, registry))
    if isinstance(model, ModelReference):
        return ResolvedModel(
            name=model.name,
            model=_lookup(model.name, registry),
            config=model.config,
            version=model.version,
        )
    if isinstance(model, Model):
        return ResolvedModel(name=model.name, model=model)
    if callable(model):
        name = getattr(model, "__name__", "anonymous")
        return ResolvedModel(name=name, model=ModelAction(name, model))
    raise TypeError(f"Unsupported model identifier: {model!r}")


async def invoke_model(
    resolved: ResolvedModel, request: GenerateRequest, on_chunk: ChunkSink | None = None
) -> GenerateResponse:
    """Errors raised by the model propagate unchanged."""
    logger.debug(
        "Invoking model %s with %d messages (streaming=%s)",
        resolved.name, len(request.messages), on_chunk is not None,
    )
    return await resolved.model.invoke(request, on_chunk)
