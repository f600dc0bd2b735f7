"""
Shuttle: generation orchestration engine.

Turns a ``generate`` call into one or more model invocations: merges
config from the model reference, version and call, assembles messages,
and drives a bounded tool-calling loop until the model answers.

```python
from shuttle import Shuttle

ai = Shuttle(model="echoModel")
ai.define_model("echoModel", my_model_fn)
ai.define_tool("lookup", "Look something up", lookup)

response = await ai.generate("hi", tools=["lookup"], max_turns=3)
print(response.text)

result = ai.generate_stream("hi")
async for chunk in result.stream:
    print(chunk.text, end="")
final = await result.response
```
"""

from .config import EngineConfig
from .engine import Shuttle
from .errors import (
    GenerationAbortedError,
    GenerationBlockedError,
    MaxTurnsExceededError,
    ModelInvocationError,
    ModelNotFoundError,
    NoModelSpecifiedError,
    ShuttleError,
    ToolInvocationError,
    ToolNotFoundError,
    ToolTimeoutError,
)
from .flows import Flow
from .generate import (
    NOOP_STREAMING_CALLBACK,
    GenerateOptions,
    GenerateStreamResponse,
    generate,
    generate_stream,
)
from .models import Model, ModelAction, ModelInfo, define_model
from .registry import Registry, RegistrySnapshot
from .tools import ToolAction, define_tool
from .types import (
    Document,
    GenerateRequest,
    GenerateResponse,
    GenerateResponseChunk,
    Message,
    ModelReference,
    OutputConfig,
    TextPart,
    ToolDefinition,
    ToolRequest,
    ToolRequestPart,
    ToolResponse,
    ToolResponsePart,
    Usage,
    model_ref,
)

__all__ = [
    "Shuttle", "EngineConfig", "Registry", "RegistrySnapshot", "Flow",
    "generate", "generate_stream", "GenerateOptions", "GenerateStreamResponse",
    "NOOP_STREAMING_CALLBACK",
    "Model", "ModelAction", "ModelInfo", "define_model", "ToolAction", "define_tool",
    "Document", "GenerateRequest", "GenerateResponse", "GenerateResponseChunk", "Message",
    "ModelReference", "OutputConfig", "TextPart", "ToolDefinition", "ToolRequest",
    "ToolRequestPart", "ToolResponse", "ToolResponsePart", "Usage", "model_ref",
    "ShuttleError", "ModelNotFoundError", "NoModelSpecifiedError", "ModelInvocationError",
    "ToolNotFoundError", "ToolInvocationError", "ToolTimeoutError", "MaxTurnsExceededError",
    "GenerationAbortedError", "GenerationBlockedError",
]
