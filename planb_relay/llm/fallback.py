"""
Fallback assistant used when the PlanB API cannot answer.

The full conversation is replayed to the fallback LLM together with a fixed
system instruction, and its token stream is relayed as data stream frames.
"""

from typing import AsyncGenerator, AsyncIterator, Callable, List, Optional, Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from loguru import logger

from planb_relay.api.schemas.chat import ASSISTANT_ROLE, SYSTEM_ROLE, USER_ROLE, ChatMessage
from planb_relay.llm.client import create_llm
from planb_relay.relay.content import normalize_content
from planb_relay.relay.stream import done_frame, encode_frame, error_message, text_frame
from planb_relay.utils.errors import FallbackError

FALLBACK_SYSTEM_PROMPT = (
    "You are a helpful assistant. Note: The PlanB API is currently unavailable, "
    "so you're responding as a fallback assistant."
)


def to_langchain_messages(messages: Sequence[ChatMessage]) -> List[BaseMessage]:
    """Map chat widget messages onto LangChain message types."""
    converted: List[BaseMessage] = []
    for message in messages:
        text = normalize_content(message.content)
        if message.role == ASSISTANT_ROLE:
            converted.append(AIMessage(content=text))
        elif message.role == SYSTEM_ROLE:
            converted.append(SystemMessage(content=text))
        else:
            if message.role != USER_ROLE:
                logger.debug(f"Treating message with role '{message.role}' as user input")
            converted.append(HumanMessage(content=text))
    return converted


def _chunk_text(chunk) -> str:
    content = getattr(chunk, "content", chunk)
    if isinstance(content, str):
        return content
    return normalize_content(content) if content else ""


class FallbackAssistant:
    """
    Streams an answer from the fallback LLM.

    `llm_factory` builds the chat model lazily so a misconfigured provider
    only fails when a fallback is actually needed.
    """

    def __init__(
        self,
        llm: Optional[BaseChatModel] = None,
        llm_factory: Callable[[], BaseChatModel] = create_llm,
        system_prompt: str = FALLBACK_SYSTEM_PROMPT,
    ):
        self._llm = llm
        self._llm_factory = llm_factory
        self.system_prompt = system_prompt

    @property
    def llm(self) -> BaseChatModel:
        if self._llm is None:
            self._llm = self._llm_factory()
        return self._llm

    def build_messages(self, messages: Sequence[ChatMessage]) -> List[BaseMessage]:
        return [SystemMessage(content=self.system_prompt)] + to_langchain_messages(messages)

    async def open_stream(self, messages: Sequence[ChatMessage]) -> AsyncGenerator[bytes, None]:
        """
        Start the fallback call and return the frame stream.

        The first token is awaited here, so a provider that cannot be reached
        fails before any response bytes are produced.

        Raises:
            FallbackError: If the provider cannot be created or fails before its first token
        """
        logger.info(f"Invoking fallback LLM with {len(messages)} conversation messages")
        try:
            chunks = self.llm.astream(self.build_messages(messages))
            first = await anext(chunks)
        except StopAsyncIteration:
            first = None
            chunks = None
        except Exception as e:
            raise FallbackError(f"Fallback LLM failed: {e}") from e

        return self._relay(first, chunks)

    async def _relay(self, first, chunks: Optional[AsyncIterator]) -> AsyncGenerator[bytes, None]:
        total = 0
        try:
            if first is not None:
                text = _chunk_text(first)
                if text:
                    total += 1
                    yield encode_frame(text_frame(text))
            if chunks is not None:
                async for chunk in chunks:
                    text = _chunk_text(chunk)
                    if text:
                        total += 1
                        yield encode_frame(text_frame(text))
        except Exception as e:
            logger.exception("Fallback stream failed mid-response")
            yield encode_frame(text_frame(error_message(e)))
        finally:
            logger.info(f"Fallback stream completed - chunks={total}")
        yield encode_frame(done_frame())
