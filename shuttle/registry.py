"""Process-wide model and tool registry."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from types import MappingProxyType

from .models import Model
from .tools import ToolAction

logger = logging.getLogger(__name__)


class RegistrySnapshot:
    """Read-only view of the registry taken at one instant."""

    def __init__(self, models: Mapping[str, Model], tools: Mapping[str, ToolAction]) -> None:
        self._models = MappingProxyType(dict(models))
        self._tools = MappingProxyType(dict(tools))

    def lookup_model(self, name: str) -> Model | None:
        return self._models.get(name)

    def lookup_tool(self, name: str) -> ToolAction | None:
        return self._tools.get(name)

    @property
    def models(self) -> Mapping[str, Model]:
        return self._models

    @property
    def tools(self) -> Mapping[str, ToolAction]:
        return self._tools


class Registry:
    """
    Models and tools by name.

    Writes take a lock; generate calls read through ``snapshot()`` so a
    registration that lands mid-call never changes what that call sees.
    """

    def __init__(self) -> None:
        self._models: dict[str, Model] = {}
        self._tools: dict[str, ToolAction] = {}
        self._lock = threading.Lock()

    def register_model(self, model: Model) -> None:
        with self._lock:
            if model.name in self._models:
                logger.warning("Replacing already registered model %s", model.name)
            self._models[model.name] = model

    def register_tool(self, tool: ToolAction) -> None:
        with self._lock:
            if tool.name in self._tools:
                logger.warning("Replacing already registered tool %s", tool.name)
            self._tools[tool.name] = tool

    def lookup_model(self, name: str) -> Model | None:
        with self._lock:
            return self._models.get(name)

    def lookup_tool(self, name: str) -> ToolAction | None:
        with self._lock:
            return self._tools.get(name)

    def list_models(self) -> list[Model]:
        with self._lock:
            return list(self._models.values())

    def list_tools(self) -> list[ToolAction]:
        with self._lock:
            return list(self._tools.values())

    def snapshot(self) -> RegistrySnapshot:
        with self._lock:
            return RegistrySnapshot(self._models, self._tools)
