"""
Chat models for the relay's inbound API and the PlanB wire contract

The inbound shape follows the AI SDK chat widget: a list of messages whose
content is either a plain string or a list of typed parts.
"""

from datetime import datetime
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"
SYSTEM_ROLE = "system"


class ContentPart(BaseModel):
    """One typed part of a structured message content (only "text" parts carry text)"""
    model_config = ConfigDict(extra="allow")

    type: str
    text: str = ""


class ChatMessage(BaseModel):
    """
    A single chat message

    `content` is kept exactly as received so the fallback provider sees the
    original conversation and the normalizer can fall back to its raw JSON.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    role: str = Field(..., description="user | assistant | system | any other role")
    content: Any = Field(default="", description="Plain string or list of content parts")
    created_at: Optional[Union[datetime, str]] = Field(default=None, alias="createdAt")


class ChatRequest(BaseModel):
    """Inbound request for POST /api/chat"""
    messages: List[ChatMessage]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "messages": [
                        {"role": "user", "content": "hello"},
                    ]
                },
                {
                    "messages": [
                        {"role": "user", "content": [{"type": "text", "text": "hello"}]},
                    ]
                },
            ]
        }
    }


class PlanBChatRequest(BaseModel):
    """Flattened payload sent to the PlanB /chat/ endpoint"""
    model_config = ConfigDict(populate_by_name=True)

    message: str
    additional_instructions: Optional[str] = Field(default=None, alias="additionalInstructions")


class PlanBChatResponse(BaseModel):
    """Reply returned by the PlanB /chat/ endpoint"""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    thread_id: str = Field(..., alias="threadId")
    messages: List[ChatMessage] = Field(default_factory=list)
    status: str = ""


class StreamFrame(BaseModel):
    """
    One unit of the data stream protocol

    Kinds:
    - text: content frame, serialized as `0:<json string>`
    - done: terminal frame, serialized as `d:`
    """
    kind: Literal["text", "done"]
    text: Optional[str] = None


class HealthResponse(BaseModel):
    """
    Health check response

    Attributes:
        status: Service health status
        service: Service name
        version: API version
    """
    status: str = Field(..., description="Health status")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="API version")
