"""
LLM client factory

Creates the fallback chat model based on provider configuration.
"""

from typing import Optional

from langchain_core.language_models import BaseChatModel
from loguru import logger

from planb_relay.config.settings import settings


def log_provider_status():
    """Log which fallback provider is configured (API key masked)."""
    if settings.llm_provider == "openai":
        if settings.openai_api_key:
            key = settings.openai_api_key
            masked_key = key[:8] + "..." + key[-4:] if len(key) > 12 else "***"
            logger.info(f"Fallback LLM: OpenAI | Model: {settings.fallback_model} | API key loaded: {masked_key}")
        else:
            logger.warning("Fallback LLM: OpenAI but OPENAI_API_KEY is not set - fallback calls will fail!")
    elif settings.llm_provider == "ollama":
        logger.info(f"Fallback LLM: Ollama | Base URL: {settings.ollama_base_url} | Model: {settings.ollama_model}")
    else:
        logger.warning(f"Unknown LLM provider: {settings.llm_provider}. Supported: 'openai', 'ollama'")


def create_llm(
    temperature: Optional[float] = None,
    max_completion_tokens: Optional[int] = None,
    model: Optional[str] = None,
) -> BaseChatModel:
    """
    Factory function to create the fallback LLM based on provider configuration.

    Args:
        temperature: Generation temperature (defaults to settings.fallback_temperature)
        max_completion_tokens: Max tokens for completion (defaults to settings.max_output_tokens)
        model: Model name (defaults to provider-specific model)

    Returns:
        LangChain ChatModel instance (ChatOpenAI or ChatOllama)
    """
    provider = settings.llm_provider.lower()
    max_tokens = max_completion_tokens or settings.max_output_tokens
    temperature = temperature if temperature is not None else settings.fallback_temperature

    if provider == "openai":
        from langchain_openai import ChatOpenAI

        if not settings.openai_api_key:
            raise ValueError("OPENAI_API_KEY is required when LLM_PROVIDER=openai")

        return ChatOpenAI(
            model=model or settings.fallback_model,
            api_key=settings.openai_api_key,
            temperature=temperature,
            max_completion_tokens=max_tokens,
            streaming=True,
        )

    elif provider == "ollama":
        from langchain_community.chat_models import ChatOllama

        return ChatOllama(
            model=model or settings.ollama_model,
            base_url=settings.ollama_base_url,
            temperature=temperature,
            num_predict=max_tokens,  # Ollama uses num_predict instead of max_completion_tokens
        )

    else:
        raise ValueError(f"Unsupported LLM provider: {provider}. Supported: 'openai', 'ollama'")
