"""
Custom error classes for the chat relay
"""

from typing import Optional


class RelayError(Exception):
    """Base exception for relay errors"""
    pass


class RecoverableUpstreamError(RelayError):
    """Primary-path failure that is answered by the fallback LLM instead"""
    pass


class NoUserMessageError(RecoverableUpstreamError):
    """Conversation has no user-authored message"""

    def __init__(self, message: str = "No user message found"):
        super().__init__(message)


class UpstreamError(RecoverableUpstreamError):
    """
    PlanB API returned a non-success status or a body we could not parse.

    Attributes:
        status_code: HTTP status returned by PlanB (None for malformed payloads)
        body: Raw response body text
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UpstreamTransportError(RecoverableUpstreamError):
    """Connection refused, DNS failure or timeout while calling PlanB"""
    pass


class NoAssistantReplyError(RecoverableUpstreamError):
    """PlanB answered but produced no assistant message"""

    def __init__(self, message: str = "No assistant response from PlanB API"):
        super().__init__(message)


class InvalidRequestError(RelayError):
    """Inbound request body could not be parsed"""
    pass


class FallbackError(RelayError):
    """Fallback LLM provider failed; there is nothing left to fall back to"""
    pass
