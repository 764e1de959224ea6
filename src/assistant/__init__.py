"""Hosted assistant integration.

Handles the thread-based conversation exchange with the Assistants API.

Responsibilities:
    - Configuration of credentials and polling bounds from the environment
    - Lazy creation and reuse of the conversation thread
    - Message submission, run start and bounded run polling
    - Extraction of the assistant's reply text

Maintains clean separation from the HTTP and UI layers.
"""

from src.assistant.client import (
    FALLBACK_REPLY,
    NO_RESPONSE_REPLY,
    TIMEOUT_REPLY,
    AssistantClient,
    AssistantError,
    RunFailedError,
    RunTimeoutError,
)
from src.assistant.config import AssistantConfig, get_assistant_config

__all__ = [
    "FALLBACK_REPLY",
    "NO_RESPONSE_REPLY",
    "TIMEOUT_REPLY",
    "AssistantClient",
    "AssistantConfig",
    "AssistantError",
    "RunFailedError",
    "RunTimeoutError",
    "get_assistant_config",
]
