"""
Chat relay coordinator

Runs one chat turn against PlanB and decides how the reply is streamed:

    Primary   - PlanB answered; stream its assistant text
    Fallback  - PlanB could not answer; stream the fallback LLM instead
    Failed    - something outside the recoverable set broke; stream an error

`resolve()` only ever produces one of these, and `stream_outcome()` turns each
one into a byte stream ending with a done frame. A fallback provider that
fails before its first token raises FallbackError to the caller instead.
"""

from dataclasses import dataclass
from typing import AsyncGenerator, List, Optional, Union

from loguru import logger

from planb_relay.api.schemas.chat import ChatMessage
from planb_relay.llm.fallback import FallbackAssistant
from planb_relay.relay.content import last_assistant_message, last_user_message, normalize_content
from planb_relay.relay.stream import stream_error, stream_text
from planb_relay.services.planb_client import PlanBClient
from planb_relay.utils.errors import RecoverableUpstreamError


@dataclass(frozen=True)
class Primary:
    text: str
    thread_id: Optional[str] = None


@dataclass(frozen=True)
class Fallback:
    messages: List[ChatMessage]
    reason: RecoverableUpstreamError


@dataclass(frozen=True)
class Failed:
    error: BaseException


RelayOutcome = Union[Primary, Fallback, Failed]


class ChatRelay:
    """Forwards a conversation to PlanB, falling back to an LLM on recoverable faults."""

    def __init__(
        self,
        planb: Optional[PlanBClient] = None,
        fallback: Optional[FallbackAssistant] = None,
    ):
        self.planb = planb or PlanBClient()
        self.fallback = fallback or FallbackAssistant()

    async def ask_planb(self, messages: List[ChatMessage]) -> Primary:
        """
        Primary path: last user message -> PlanB -> last assistant message.

        Raises:
            RecoverableUpstreamError: Any failure that should trigger the fallback
        """
        user_message = last_user_message(messages)
        text = normalize_content(user_message.content)

        reply = await self.planb.chat(text)
        assistant_message = last_assistant_message(reply.messages)
        return Primary(text=normalize_content(assistant_message.content), thread_id=reply.thread_id)

    async def resolve(self, messages: List[ChatMessage]) -> RelayOutcome:
        try:
            return await self.ask_planb(messages)
        except RecoverableUpstreamError as e:
            logger.warning(f"PlanB API failed, falling back to LLM: {e}")
            return Fallback(messages=messages, reason=e)
        except Exception as e:
            logger.exception("Unexpected error on the PlanB path")
            return Failed(error=e)

    async def stream_outcome(self, outcome: RelayOutcome) -> AsyncGenerator[bytes, None]:
        """
        Turn an outcome into the response byte stream.

        Raises:
            FallbackError: If the fallback LLM fails before its first token
        """
        if isinstance(outcome, Primary):
            logger.info(f"Streaming PlanB reply - thread={outcome.thread_id}, chars={len(outcome.text)}")
            return stream_text(outcome.text)

        if isinstance(outcome, Fallback):
            return await self.fallback.open_stream(outcome.messages)

        return stream_error(outcome.error)

    async def relay(self, messages: List[ChatMessage]) -> AsyncGenerator[bytes, None]:
        """Resolve one chat turn and return its response stream."""
        outcome = await self.resolve(messages)
        return await self.stream_outcome(outcome)
