"""Core type definitions, re-exported from sub-modules."""

from .messages import (
    Message, Part, Role, TextPart, ToolRequest, ToolRequestPart, ToolResponse, ToolResponsePart,
    is_part, to_part,
)
from .model import (
    ChunkSink, Document, FinishReason, GenerateRequest, GenerateResponse, GenerateResponseChunk,
    ModelReference, OutputConfig, StreamingCallback, Usage, model_ref,
)
from .tools import ToolDefinition

__all__ = [
    "Message", "Part", "Role", "TextPart", "ToolRequest", "ToolRequestPart",
    "ToolResponse", "ToolResponsePart", "is_part", "to_part",
    "ChunkSink", "Document", "FinishReason", "GenerateRequest", "GenerateResponse",
    "GenerateResponseChunk", "ModelReference", "OutputConfig", "StreamingCallback", "Usage",
    "model_ref",
    "ToolDefinition",
]
