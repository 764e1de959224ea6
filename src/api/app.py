"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.chat import router as chat_router
from src.assistant.client import AssistantClient
from src.assistant.config import get_assistant_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Creates the shared assistant client on startup and closes it on
    shutdown. Missing credentials abort startup.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    # Startup
    logger.info("Starting Assistant Chat API...")
    app.state.assistant_client = AssistantClient(get_assistant_config())
    app.state.chat_lock = asyncio.Lock()
    yield
    # Shutdown
    logger.info("Shutting down Assistant Chat API...")
    await app.state.assistant_client.aclose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Assistant Chat API",
        description=(
            "Chat widget backend for a hosted assistant. Forwards user messages "
            "to a thread-based assistant API, waits for the run to complete, and "
            "returns the reply with citation markers removed."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "assistant-chat"}

    return application


app = create_app()
