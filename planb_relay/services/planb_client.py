"""
HTTP client for the PlanB chat API.

PlanB takes a single flattened user message and returns the whole thread:

    POST {base_url}/chat/   {"message": "hello"}
    -> {"threadId": "t1", "messages": [...], "status": "ok"}
"""

import json
from typing import Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from planb_relay.api.schemas.chat import PlanBChatRequest, PlanBChatResponse
from planb_relay.config.settings import settings
from planb_relay.utils.errors import UpstreamError, UpstreamTransportError


class PlanBClient:
    """
    Async client for PlanB's /chat/ endpoint.

    A new httpx.AsyncClient is opened per call, so one instance can be shared
    by concurrent requests. No retries are performed.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        additional_instructions: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            base_url: PlanB base URL (defaults to settings.planb_api_base_url)
            timeout: Request timeout in seconds (defaults to settings.planb_api_timeout; None disables it)
            additional_instructions: Extra instructions forwarded with every message
            transport: Custom httpx transport (used by tests)
        """
        self.base_url = (base_url or settings.planb_api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.planb_api_timeout
        self.additional_instructions = (
            additional_instructions
            if additional_instructions is not None
            else settings.planb_additional_instructions
        )
        self.transport = transport

    @property
    def chat_url(self) -> str:
        return f"{self.base_url}/chat/"

    def build_request(self, message: str) -> PlanBChatRequest:
        return PlanBChatRequest(
            message=message,
            additional_instructions=self.additional_instructions or None,
        )

    async def chat(self, message: str) -> PlanBChatResponse:
        """
        Send one message to PlanB and return its parsed reply.

        The body is ASCII-escaped JSON, so any Python string (lone surrogates
        included) can be sent.

        Raises:
            UpstreamError: Non-success status, undecodable or malformed response body
            UpstreamTransportError: Connection, DNS, timeout or redirect failure
        """
        payload = self.build_request(message).model_dump(by_alias=True, exclude_none=True)
        logger.debug(f"Sending to PlanB API: {payload}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.chat_url,
                    content=json.dumps(payload).encode("ascii"),
                    headers={"Content-Type": "application/json"},
                )
        except httpx.DecodingError as e:
            raise UpstreamError(f"PlanB API returned a malformed payload: {e}") from e
        except httpx.RequestError as e:
            raise UpstreamTransportError(f"PlanB API unreachable at {self.chat_url}: {e}") from e

        if not response.is_success:
            logger.debug(f"PlanB API error response: {response.text}")
            raise UpstreamError(
                f"PlanB API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = PlanBChatResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise UpstreamError(
                f"PlanB API returned a malformed payload: {e}",
                status_code=response.status_code,
                body=response.text,
            ) from e

        logger.debug(
            f"PlanB API response: thread={data.thread_id}, status={data.status}, "
            f"messages={len(data.messages)}"
        )
        return data
