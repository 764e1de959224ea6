"""Pydantic models for the widget API and the remote assistant service.

Provides type safety and validation for both sides of the exchange.

Models:
    - ChatMessage: Individual message in the widget history
    - ChatRequest / ChatResponse: Chat endpoint payloads
    - Thread, Run, ThreadMessage, MessageList: Assistant API resources
"""

from src.models.schemas import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    ContentBlock,
    MessageList,
    Run,
    RunStatus,
    TextContent,
    Thread,
    ThreadMessage,
)

__all__ = [
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ContentBlock",
    "MessageList",
    "Run",
    "RunStatus",
    "TextContent",
    "Thread",
    "ThreadMessage",
]
