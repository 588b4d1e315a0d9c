"""
Data stream protocol frames consumed by the chat widget.

Each frame is one newline-terminated line:
- content frame: 0:"<escaped text>"
- done frame:    d:

Content text is ASCII-escaped JSON, so quotes, backslashes, newlines and
unpaired surrogates in the text cannot break the line framing or the encoding.
"""

import json
from typing import AsyncGenerator, Iterable

from planb_relay.api.schemas.chat import StreamFrame

TEXT_PREFIX = "0:"
DONE_PREFIX = "d:"

STREAM_MEDIA_TYPE = "text/plain; charset=utf-8"
STREAM_HEADERS = {
    "x-vercel-ai-data-stream": "v1",
}

UNKNOWN_ERROR = "Unknown error occurred"


def text_frame(text: str) -> StreamFrame:
    return StreamFrame(kind="text", text=text)


def done_frame() -> StreamFrame:
    return StreamFrame(kind="done")


def encode_frame(frame: StreamFrame) -> bytes:
    """Serialize a frame to its wire form, including the trailing newline."""
    if frame.kind == "done":
        return f"{DONE_PREFIX}\n".encode("utf-8")
    return f"{TEXT_PREFIX}{json.dumps(frame.text or '')}\n".encode("ascii")


def decode_frame(line: str) -> StreamFrame:
    """
    Parse one wire line back into a frame.

    Raises:
        ValueError: If the line is not a content or done frame
    """
    line = line.rstrip("\n")
    if line.startswith(DONE_PREFIX):
        return done_frame()
    if line.startswith(TEXT_PREFIX):
        text = json.loads(line[len(TEXT_PREFIX):])
        if not isinstance(text, str):
            raise ValueError(f"Content frame payload is not a string: {line!r}")
        return text_frame(text)
    raise ValueError(f"Unknown stream frame: {line!r}")


def error_message(error: BaseException) -> str:
    """Human-readable error text for an in-band error frame."""
    detail = str(error).strip()
    return f"Error: {detail or UNKNOWN_ERROR}"


async def stream_frames(frames: Iterable[StreamFrame]) -> AsyncGenerator[bytes, None]:
    """Yield already-built frames; the caller is responsible for ending with a done frame."""
    for frame in frames:
        yield encode_frame(frame)


async def stream_text(text: str) -> AsyncGenerator[bytes, None]:
    """One content frame followed by the done frame."""
    async for chunk in stream_frames([text_frame(text), done_frame()]):
        yield chunk


async def stream_error(error: BaseException) -> AsyncGenerator[bytes, None]:
    """Error content frame followed by the done frame."""
    async for chunk in stream_text(error_message(error)):
        yield chunk
