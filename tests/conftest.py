"""
Shared fixtures: a scripted PlanB server (httpx.MockTransport) and a fake
streaming LLM for the fallback path.
"""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import GenericFakeChatModel
from langchain_core.messages import AIMessage

from planb_relay.api.app import app
from planb_relay.api.routes.chat import get_chat_relay
from planb_relay.llm.fallback import FallbackAssistant
from planb_relay.relay.coordinator import ChatRelay
from planb_relay.services.planb_client import PlanBClient

PLANB_URL = "http://planb.test"


class PlanBStub:
    """Records requests sent to PlanB and answers with a scripted handler."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def payloads(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    def client(self, **kwargs) -> PlanBClient:
        return PlanBClient(base_url=PLANB_URL, transport=httpx.MockTransport(self), **kwargs)


class RecordingFallback(FallbackAssistant):
    """FallbackAssistant that remembers the conversation it was asked to answer."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.calls = []

    async def open_stream(self, messages):
        self.calls.append(list(messages))
        return await super().open_stream(messages)


def planb_reply(*messages: Dict[str, Any], thread_id: str = "t1", status: str = "ok") -> Dict[str, Any]:
    return {"threadId": thread_id, "messages": list(messages), "status": status}


def json_handler(body: Any, status_code: int = 200):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=body)
    return handler


def fake_llm(text: str = "fallback answer") -> GenericFakeChatModel:
    return GenericFakeChatModel(messages=iter([AIMessage(content=text)]))


@pytest.fixture
def make_client():
    """Build a TestClient whose relay talks to the given PlanB stub and fallback."""
    def _make(stub: PlanBStub, fallback: Optional[FallbackAssistant] = None) -> TestClient:
        relay = ChatRelay(planb=stub.client(), fallback=fallback or RecordingFallback(llm=fake_llm()))
        app.dependency_overrides[get_chat_relay] = lambda: relay
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
