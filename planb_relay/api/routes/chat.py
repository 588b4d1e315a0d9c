"""
Chat endpoint consumed by the chat widget

Streams replies in the AI SDK data stream format (`0:"text"` / `d:` lines).
Every path answers 200 with a terminated stream; failures are reported
in-band as an "Error: ..." content frame.
"""

import json
from functools import lru_cache
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from loguru import logger
from pydantic import ValidationError

from planb_relay.api.schemas.chat import ChatMessage, ChatRequest
from planb_relay.relay.coordinator import ChatRelay
from planb_relay.relay.stream import STREAM_HEADERS, STREAM_MEDIA_TYPE, stream_error
from planb_relay.utils.errors import InvalidRequestError


router = APIRouter(prefix="/api", tags=["chat"])


@lru_cache()
def get_chat_relay() -> ChatRelay:
    return ChatRelay()


def _stream_response(body) -> StreamingResponse:
    return StreamingResponse(
        body,
        status_code=200,
        media_type=STREAM_MEDIA_TYPE,
        headers=STREAM_HEADERS,
    )


async def parse_messages(request: Request) -> List[ChatMessage]:
    """
    Read `messages` from the request body.

    Raises:
        InvalidRequestError: Body is not JSON or has no valid `messages` list
    """
    raw = await request.body()
    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise InvalidRequestError(f"Request body is not valid JSON: {e}") from e

    try:
        chat_request = ChatRequest.model_validate(payload)
    except ValidationError as e:
        raise InvalidRequestError(
            f"Request body must contain a 'messages' list: {e.error_count()} validation error(s)"
        ) from e

    logger.debug(f"Incoming messages: {[m.model_dump(by_alias=True, exclude_none=True) for m in chat_request.messages]}")
    return chat_request.messages


@router.post("/chat")
async def chat(request: Request, relay: ChatRelay = Depends(get_chat_relay)):
    """
    Relay a chat conversation to PlanB and stream the reply

    **Request body:** `{"messages": [{"role": "user", "content": "hello"}]}`

    **Response:** `text/plain; charset=utf-8` with header `x-vercel-ai-data-stream: v1`
    ```
    0:"hi there"
    d:
    ```

    If PlanB is unreachable or has no answer, the fallback LLM answers
    instead in the same format.
    """
    try:
        messages = await parse_messages(request)
        logger.info(f"Chat request - messages={len(messages)}")
        return _stream_response(await relay.relay(messages))
    except Exception as e:
        logger.exception("API Error")
        return _stream_response(stream_error(e))
