"""Main application entry point.

Runs FastAPI (port 8000) with the NiceGUI chat widget mounted on it.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_integrated() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI handles API routes, NiceGUI handles the UI.
    Both accessible on port 8000.
    """
    import uvicorn
    from nicegui import ui

    from src.api.app import create_app
    from src.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    # Mount NiceGUI onto FastAPI
    ui.run_with(
        app,
        title=os.getenv("CHAT_TITLE", "AI Assistant"),
        favicon="💬",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "assistant-chat-secret"),
    )

    logger.info("Starting integrated server on http://localhost:8000")
    logger.info("API docs available at http://localhost:8000/docs")
    logger.info("Chat UI available at http://localhost:8000/")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def main() -> None:
    """Application entry point.

    Validates the assistant configuration, then serves the API and the
    chat page together on one port.
    """
    from src.assistant.config import get_assistant_config

    # Fail fast on missing credentials instead of at the first message
    try:
        get_assistant_config()
    except ValidationError as e:
        logger.error(f"Invalid assistant configuration: {e}")
        sys.exit(1)

    logger.info("Starting Assistant Chat")
    run_integrated()


if __name__ == "__main__":
    main()
