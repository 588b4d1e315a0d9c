"""
API schemas for request/response models
"""

from planb_relay.api.schemas.chat import (
    ASSISTANT_ROLE,
    SYSTEM_ROLE,
    USER_ROLE,
    ChatMessage,
    ChatRequest,
    ContentPart,
    HealthResponse,
    PlanBChatRequest,
    PlanBChatResponse,
    StreamFrame,
)

__all__ = [
    "USER_ROLE",
    "ASSISTANT_ROLE",
    "SYSTEM_ROLE",
    "ContentPart",
    "ChatMessage",
    "ChatRequest",
    "PlanBChatRequest",
    "PlanBChatResponse",
    "StreamFrame",
    "HealthResponse",
]
