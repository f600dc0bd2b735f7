"""Generation orchestration: config merge, message assembly, model and tool dispatch."""

from .callbacks import NOOP_STREAMING_CALLBACK, as_sink, is_streaming_requested
from .config import resolve_config
from .invoker import ResolvedModel, invoke_model, resolve_model
from .loop import generate
from .messages import Prompt, assemble_messages
from .options import GenerateOptions, coerce_options, to_output_config
from .stream import GenerateStreamResponse, StreamingResponse, generate_stream, start_stream
from .tools import execute_tool_request, resolve_tools

__all__ = [
    "NOOP_STREAMING_CALLBACK", "as_sink", "is_streaming_requested",
    "resolve_config",
    "ResolvedModel", "invoke_model", "resolve_model",
    "generate", "generate_stream", "start_stream", "StreamingResponse", "GenerateStreamResponse",
    "Prompt", "assemble_messages",
    "GenerateOptions", "coerce_options", "to_output_config",
    "execute_tool_request", "resolve_tools",
]
