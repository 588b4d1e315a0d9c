"""
Conversation helpers: locate messages by role and flatten message content.

Message content arrives in two shapes:
- Simple string: "hello"
- Structured parts: [{'type': 'text', 'text': 'hello'}, {'type': 'image', ...}]
"""

import json
from typing import Any, Optional, Sequence

from loguru import logger

from planb_relay.api.schemas.chat import ASSISTANT_ROLE, USER_ROLE, ChatMessage, ContentPart
from planb_relay.utils.errors import NoAssistantReplyError, NoUserMessageError


def _raw(content: Any) -> str:
    """Serialize content as JSON, falling back to str() for non-JSON values."""
    try:
        return json.dumps(content, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return str(content)


def _part_text(part: Any) -> Optional[str]:
    if isinstance(part, ContentPart):
        return part.text if part.type == "text" else None
    if isinstance(part, dict) and part.get("type") == "text":
        text = part.get("text")
        return text if isinstance(text, str) else None
    return None


def normalize_content(content: Any) -> str:
    """
    Flatten message content to plain text.

    - str: returned verbatim
    - list of parts: text of every "text" part joined with a single space;
      if that is empty, the raw JSON of the list
    - anything else: raw JSON of the value

    Never raises.

    Example:
        normalize_content([{"type": "text", "text": "a"}, {"type": "text", "text": "b"}]) -> "a b"
    """
    if isinstance(content, str):
        return content

    if isinstance(content, list):
        texts = [text for text in (_part_text(part) for part in content) if text is not None]
        joined = " ".join(texts)
        if joined:
            return joined
        logger.debug(f"No text parts in structured content, using raw JSON: {_raw(content)[:200]}")

    return _raw(content)


def _last_with_role(messages: Sequence[ChatMessage], role: str) -> Optional[ChatMessage]:
    for message in reversed(messages):
        if message.role == role:
            return message
    return None


def last_user_message(messages: Sequence[ChatMessage]) -> ChatMessage:
    """Return the most recent user message or raise NoUserMessageError."""
    message = _last_with_role(messages, USER_ROLE)
    if message is None:
        raise NoUserMessageError()
    return message


def last_assistant_message(messages: Sequence[ChatMessage]) -> ChatMessage:
    """Return the most recent assistant message or raise NoAssistantReplyError."""
    message = _last_with_role(messages, ASSISTANT_ROLE)
    if message is None:
        raise NoAssistantReplyError()
    return message
