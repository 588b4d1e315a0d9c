"""
Configuration management for the chat relay.
Loads settings from environment variables and the project .env file.
"""

from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings

# This file is at planb_relay/config/settings.py, so project root is 3 levels up
_project_root = Path(__file__).resolve().parent.parent.parent

PROJECT_ROOT = _project_root

# Load environment variables from project root
_env_file = _project_root / ".env"
if _env_file.exists():
    load_dotenv(dotenv_path=_env_file, override=True)
    logger.debug(f"Loaded .env from: {_env_file}")
else:
    logger.debug(f".env file not found at: {_env_file}, using process environment")
    load_dotenv(override=False)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # PlanB API (primary chat service)
    planb_api_base_url: str = Field(default="http://localhost:5169")
    planb_api_timeout: Optional[float] = Field(default=None)  # Seconds; None = no client-side timeout
    planb_additional_instructions: Optional[str] = Field(default=None)  # Sent as additionalInstructions when set

    # Fallback LLM Provider Selection
    llm_provider: str = Field(default="openai")  # Options: "openai" | "ollama"

    # API Keys
    openai_api_key: str = Field(default="")

    # Fallback model configuration
    fallback_model: str = Field(default="gpt-3.5-turbo")
    fallback_temperature: float = Field(default=0.7)
    max_output_tokens: int = Field(default=1024)

    # Ollama Configuration
    ollama_base_url: str = Field(default="http://localhost:11434")
    ollama_model: str = Field(default="llama3")

    # HTTP server
    cors_origins: List[str] = Field(default=[
        "http://localhost:3000",  # Next.js dev server
        "http://127.0.0.1:3000",
    ])

    # Logging
    log_level: str = Field(default="INFO")

    class Config:
        env_file = str(_project_root / ".env")
        env_file_encoding = "utf-8"
        extra = "allow"  # Allow extra fields from .env


# Create global settings instance
settings = Settings()
