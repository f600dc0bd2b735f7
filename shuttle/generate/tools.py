"""Resolve the caller's tool set and execute tool requests against it."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping, Sequence

from ..errors import ToolNotFoundError, ToolTimeoutError
from ..registry import RegistrySnapshot
from ..tools import ToolAction
from ..types import ToolRequestPart, ToolResponse, ToolResponsePart

logger = logging.getLogger(__name__)


def resolve_tools(
    tools: Sequence[str | ToolAction] | None, registry: RegistrySnapshot
) -> dict[str, ToolAction]:
    resolved: dict[str, ToolAction] = {}
    for tool in tools or []:
        if isinstance(tool, str):
            action = registry.lookup_tool(tool)
            if action is None:
                raise ToolNotFoundError(tool)
            tool = action
        resolved[tool.name] = tool
    return resolved


async def execute_tool_request(
    part: ToolRequestPart,
    tools: Mapping[str, ToolAction],
    timeout: float | None = None,
) -> ToolResponsePart:
    """Run one tool request. Handler errors propagate unchanged."""
    request = part.tool_request
    tool = tools.get(request.name)
    if tool is None:
        raise ToolNotFoundError(request.name)

    t0 = time.monotonic()
    if timeout is None:
        output = await tool.invoke(request.input)
    else:
        try:
            output = await asyncio.wait_for(tool.invoke(request.input), timeout=timeout)
        except asyncio.TimeoutError as e:
            raise ToolTimeoutError(request.name, timeout) from e
    logger.debug(
        "Tool %s (ref=%s) finished in %dms",
        request.name, request.ref, int((time.monotonic() - t0) * 1000),
    )
    return ToolResponsePart(
        tool_response=ToolResponse(name=request.name, output=output, ref=request.ref)
    )
