"""
Main FastAPI application for the PlanB chat relay

This module creates and configures the FastAPI application with:
- CORS middleware for the chat front-end
- API routes (chat streaming)
- Health check endpoint
- Auto-generated API documentation
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from planb_relay import __version__
from planb_relay.api.routes import chat
from planb_relay.api.schemas.chat import HealthResponse
from planb_relay.config.settings import settings
from planb_relay.llm.client import log_provider_status
from planb_relay.utils.logger import setup_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan events

    Startup: configure logging and report the upstream/fallback configuration.
    """
    setup_logger()
    logger.info("FastAPI application starting...")
    logger.info(f"PlanB API: {settings.planb_api_base_url}/chat/")
    log_provider_status()
    logger.info("Chat endpoint at POST /api/chat")

    yield

    logger.info("FastAPI application shutting down...")


# Create FastAPI application
app = FastAPI(
    title="PlanB Chat Relay API",
    description="""
    Streaming chat relay in front of the PlanB chat API.

    ## Features

    * **Data stream responses** compatible with the AI SDK chat widget
    * **LLM fallback** when the PlanB API is unavailable
    * **Uniform error handling**: every response is a terminated stream

    ## Example

    ```bash
    curl -N -X POST http://localhost:8000/api/chat \\
         -H "Content-Type: application/json" \\
         -d '{"messages": [{"role": "user", "content": "hello"}]}'
    ```
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS Configuration
# Origins come from CORS_ORIGINS; defaults cover the local front-end dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(chat.router)


@app.get("/", tags=["root"])
async def root():
    """
    Root endpoint - API information
    """
    return {
        "service": "PlanB Chat Relay API",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
        "endpoints": {
            "health": "/health",
            "chat": "/api/chat"
        }
    }


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """
    Health check endpoint

    Returns:
        HealthResponse with service status
    """
    return HealthResponse(
        status="healthy",
        service="planb-relay",
        version=__version__
    )
