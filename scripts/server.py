"""
Shared uvicorn launcher for scripts/run-dev.py and scripts/run-prod.py.
"""

import os
from pathlib import Path

import uvicorn
from loguru import logger

project_root = Path(__file__).parent.parent


def serve(reload: bool):
    """Start the PlanB chat relay API (auto-reload in development)"""
    os.chdir(project_root)

    mode = "Development" if reload else "Production"
    logger.info(f"PlanB Chat Relay - API Server ({mode})")
    logger.info("Chat Streaming: POST http://localhost:8000/api/chat | Docs: http://localhost:8000/docs")

    uvicorn.run(
        "planb_relay.api.app:app",
        host="0.0.0.0",
        port=8000,
        reload=reload,
        log_level="info",
        access_log=True,
        reload_dirs=[str(project_root / "planb_relay")] if reload else None,
    )
