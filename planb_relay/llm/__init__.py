"""
LLM layer - fallback client factory and streaming assistant
"""

from planb_relay.llm.client import create_llm, log_provider_status
from planb_relay.llm.fallback import FALLBACK_SYSTEM_PROMPT, FallbackAssistant, to_langchain_messages

__all__ = [
    "create_llm",
    "log_provider_status",
    "FALLBACK_SYSTEM_PROMPT",
    "FallbackAssistant",
    "to_langchain_messages",
]
