"""Chat endpoints for the assistant widget.

Forwards user text to the shared assistant client and returns the
sanitized, rendered reply.
"""

import asyncio
import logging

from fastapi import APIRouter, Depends, Request, status

from src.assistant.client import AssistantClient
from src.formatting import format_reply, render_markdown
from src.models.schemas import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


def get_assistant_client(request: Request) -> AssistantClient:
    """Return the assistant client created during application startup."""
    return request.app.state.assistant_client


def get_chat_lock(request: Request) -> asyncio.Lock:
    """Return the lock that serializes sends on the shared conversation."""
    return request.app.state.chat_lock


@router.post("", response_model=ChatResponse)
async def chat(
    payload: ChatRequest,
    client: AssistantClient = Depends(get_assistant_client),
    lock: asyncio.Lock = Depends(get_chat_lock),
) -> ChatResponse:
    """Send a message to the assistant and return its reply.

    Failures of the remote service are reported as fallback reply text,
    not as error statuses.

    Args:
        payload: The user's message (blank messages are rejected with 422).

    Returns:
        ChatResponse with the cleaned reply text and its HTML rendering.
    """
    async with lock:
        raw_reply = await client.send_message(payload.message)

    reply = format_reply(raw_reply)
    return ChatResponse(reply=reply, html=render_markdown(reply))


@router.post("/reset", status_code=status.HTTP_204_NO_CONTENT)
async def reset_conversation(
    client: AssistantClient = Depends(get_assistant_client),
    lock: asyncio.Lock = Depends(get_chat_lock),
) -> None:
    """Start a fresh conversation on the next message."""
    async with lock:
        client.reset()
