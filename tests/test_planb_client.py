"""
Tests for PlanBClient against a mocked PlanB server.
"""

import httpx
import pytest

from conftest import PLANB_URL, PlanBStub, json_handler, planb_reply
from planb_relay.services.planb_client import PlanBClient
from planb_relay.utils.errors import UpstreamError, UpstreamTransportError


@pytest.mark.asyncio
async def test_posts_flattened_message_to_chat_endpoint():
    stub = PlanBStub(json_handler(planb_reply(
        {"role": "user", "content": "hello"},
        {"role": "assistant", "content": "hi there", "createdAt": "2025-01-01T00:00:00Z"},
    )))

    reply = await stub.client(additional_instructions="").chat("hello")

    request = stub.requests[0]
    assert request.method == "POST"
    assert str(request.url) == f"{PLANB_URL}/chat/"
    assert request.headers["content-type"] == "application/json"
    assert stub.payloads == [{"message": "hello"}]

    assert reply.thread_id == "t1"
    assert reply.status == "ok"
    assert [m.role for m in reply.messages] == ["user", "assistant"]


@pytest.mark.asyncio
async def test_additional_instructions_are_forwarded():
    stub = PlanBStub(json_handler(planb_reply()))

    await stub.client(additional_instructions="Answer briefly").chat("hello")

    assert stub.payloads == [{"message": "hello", "additionalInstructions": "Answer briefly"}]


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [400, 404, 500, 503])
async def test_error_status_raises_upstream_error(status_code):
    stub = PlanBStub(lambda request: httpx.Response(status_code, text="planb is down"))

    with pytest.raises(UpstreamError) as exc_info:
        await stub.client().chat("hello")

    assert exc_info.value.status_code == status_code
    assert exc_info.value.body == "planb is down"
    assert str(status_code) in str(exc_info.value)


@pytest.mark.asyncio
async def test_non_json_body_raises_upstream_error():
    stub = PlanBStub(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(UpstreamError) as exc_info:
        await stub.client().chat("hello")

    assert "malformed" in str(exc_info.value)


@pytest.mark.asyncio
async def test_wrong_shape_raises_upstream_error():
    stub = PlanBStub(json_handler({"messages": "not-a-list"}))

    with pytest.raises(UpstreamError):
        await stub.client().chat("hello")


@pytest.mark.asyncio
async def test_connection_error_raises_transport_error():
    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    stub = PlanBStub(refuse)

    with pytest.raises(UpstreamTransportError):
        await stub.client().chat("hello")


def test_base_url_trailing_slash_is_normalized():
    client = PlanBClient(base_url="http://planb.test/")

    assert client.chat_url == "http://planb.test/chat/"


@pytest.mark.asyncio
async def test_corrupt_encoded_body_raises_upstream_error():
    stub = PlanBStub(lambda request: httpx.Response(
        200, headers={"content-encoding": "gzip"}, content=b"not-gzip",
    ))

    with pytest.raises(UpstreamError) as exc_info:
        await stub.client().chat("hello")

    assert "malformed" in str(exc_info.value)


@pytest.mark.asyncio
@pytest.mark.parametrize("error_type", [httpx.ReadTimeout, httpx.TooManyRedirects])
async def test_request_errors_raise_transport_error(error_type):
    def fail(request):
        raise error_type("upstream trouble", request=request)

    with pytest.raises(UpstreamTransportError):
        await PlanBStub(fail).client().chat("hello")


@pytest.mark.asyncio
async def test_lone_surrogate_in_message_is_sent_escaped():
    stub = PlanBStub(json_handler(planb_reply()))

    await stub.client(additional_instructions="").chat("hi \ud800")

    assert stub.requests[0].content == b'{"message": "hi \\ud800"}'
    assert stub.payloads == [{"message": "hi \ud800"}]


def test_timeout_comes_from_argument():
    assert PlanBClient(base_url="http://planb.test", timeout=2.5).timeout == 2.5
