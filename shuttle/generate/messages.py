"""Build the initial message list from a prompt, system instruction and history."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..types import Message, Part, TextPart, is_part, to_part

Prompt = str | Part | Message | Sequence[Part | dict[str, Any]] | Sequence[Message]


def _is_message_list(prompt: Any) -> bool:
    return (
        isinstance(prompt, Sequence)
        and not isinstance(prompt, str)
        and len(prompt) > 0
        and all(isinstance(m, Message) for m in prompt)
    )


def _user_message(prompt: Any) -> Message:
    if isinstance(prompt, str):
        return Message(role="user", content=[TextPart(text=prompt)])
    if is_part(prompt):
        return Message(role="user", content=[prompt])
    return Message(role="user", content=[to_part(p) for p in prompt])


def assemble_messages(
    prompt: Prompt | None,
    system: str | None = None,
    history: Sequence[Message] | None = None,
) -> list[Message]:
    """
    Returns ``[system?, *history, *prompt_messages]``.

    A string prompt becomes one user message with a single text part; a
    part sequence becomes one user message wrapping those parts; a message or
    message list is appended as-is. A ``None`` prompt and an empty
    ``system`` add nothing.
    """
    messages: list[Message] = []
    if system:
        messages.append(Message(role="system", content=[TextPart(text=system)]))
    if history:
        messages.extend(history)
    if prompt is None:
        return messages
    if isinstance(prompt, Message):
        messages.append(prompt)
    elif _is_message_list(prompt):
        messages.extend(prompt)
    else:
        messages.append(_user_message(prompt))
    return messages
