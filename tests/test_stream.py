"""
Tests for data stream frame encoding.
"""

import pytest

from planb_relay.relay.stream import (
    decode_frame,
    done_frame,
    encode_frame,
    error_message,
    stream_error,
    stream_text,
    text_frame,
)


async def collect(stream) -> bytes:
    return b"".join([chunk async for chunk in stream])


class TestFrameEncoding:
    """Test encode_frame() / decode_frame()"""

    def test_content_frame(self):
        assert encode_frame(text_frame("hi there")) == b'0:"hi there"\n'

    def test_done_frame(self):
        assert encode_frame(done_frame()) == b"d:\n"

    def test_quotes_and_newlines_are_escaped(self):
        encoded = encode_frame(text_frame('say "hi"\nthen leave'))

        assert encoded == b'0:"say \\"hi\\"\\nthen leave"\n'
        assert encoded.count(b"\n") == 1

    @pytest.mark.parametrize("text", [
        'quote " inside',
        "line one\nline two\n",
        "back\\slash",
        'mixed \\" and \n and \\n',
        "unicode: café ✓",
        "",
    ])
    def test_decode_recovers_original_text(self, text):
        line = encode_frame(text_frame(text)).decode("utf-8")

        assert decode_frame(line).text == text

    def test_decode_done_frame(self):
        assert decode_frame("d:\n").kind == "done"

    def test_decode_rejects_unknown_prefix(self):
        with pytest.raises(ValueError):
            decode_frame("9:{}")


class TestErrorMessage:
    """Test error_message()"""

    def test_uses_exception_text(self):
        assert error_message(ValueError("boom")) == "Error: boom"

    def test_empty_exception_uses_generic_text(self):
        assert error_message(RuntimeError()) == "Error: Unknown error occurred"


class TestStreams:
    """Test stream_text() / stream_error()"""

    @pytest.mark.asyncio
    async def test_stream_text_ends_with_done(self):
        assert await collect(stream_text("hi there")) == b'0:"hi there"\nd:\n'

    @pytest.mark.asyncio
    async def test_stream_error(self):
        body = await collect(stream_error(ValueError('bad "input"')))

        assert body == b'0:"Error: bad \\"input\\""\nd:\n'


class TestUnpairedSurrogates:
    """Frames must be encodable for any Python string"""

    def test_lone_surrogate_is_escaped(self):
        encoded = encode_frame(text_frame("bad \ud800 text"))

        assert encoded == b'0:"bad \\ud800 text"\n'
        assert decode_frame(encoded.decode("ascii")).text == "bad \ud800 text"

    def test_non_ascii_text_is_ascii_escaped(self):
        encoded = encode_frame(text_frame("café ✓"))

        assert encoded.isascii()
        assert decode_frame(encoded.decode("ascii")).text == "café ✓"

    @pytest.mark.asyncio
    async def test_error_stream_with_surrogate_terminates(self):
        body = await collect(stream_error(ValueError("broken \udfff")))

        assert body.endswith(b"d:\n")
        assert decode_frame(body.splitlines()[0].decode("ascii")).text == "Error: broken \udfff"
