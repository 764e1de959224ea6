from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class RunStatus(str, Enum):
    """Status values reported for an assistant run."""

    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    EXPIRED = "expired"


# Statuses after which a run will never reach "completed"
TERMINAL_FAILURE_STATUSES = frozenset(
    status.value
    for status in (
        RunStatus.CANCELLED,
        RunStatus.FAILED,
        RunStatus.INCOMPLETE,
        RunStatus.EXPIRED,
    )
)


class ChatMessage(BaseModel):
    """A single message in the widget's conversation history.

    Attributes:
        role: The speaker, either user or assistant.
        content: The message text (sanitized for assistant replies).
        time: Display timestamp, e.g. "09:41 AM".
    """

    role: Literal["user", "assistant"]
    content: str
    time: str = Field(default_factory=lambda: datetime.now().strftime("%I:%M %p"))


class Thread(BaseModel):
    """Remote conversation container."""

    id: str


class RunError(BaseModel):
    code: str | None = None
    message: str | None = None


class Run(BaseModel):
    """One assistant invocation against a thread.

    Attributes:
        id: Run identifier.
        status: Raw status string; compare against RunStatus members.
        last_error: Error details reported for failed runs.
    """

    id: str
    status: str
    last_error: RunError | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == RunStatus.COMPLETED.value

    @property
    def is_terminal_failure(self) -> bool:
        return self.status in TERMINAL_FAILURE_STATUSES


class TextContent(BaseModel):
    value: str
    annotations: list[dict] = Field(default_factory=list)


class ContentBlock(BaseModel):
    """One content block of a thread message (text, image_file, ...)."""

    type: str
    text: TextContent | None = None


class ThreadMessage(BaseModel):
    id: str
    role: str
    content: list[ContentBlock] = Field(default_factory=list)

    def first_text(self) -> str | None:
        """Return the value of the first text block, if any."""
        for block in self.content:
            if block.type == "text" and block.text is not None:
                return block.text.value
        return None


class MessageList(BaseModel):
    """Page of thread messages, newest first."""

    data: list[ThreadMessage] = Field(default_factory=list)

    def latest_assistant(self) -> ThreadMessage | None:
        return next((m for m in self.data if m.role == "assistant"), None)


class ChatRequest(BaseModel):
    """Request payload for the chat endpoint.

    Attributes:
        message: User's question or prompt.
    """

    message: str = Field(..., min_length=1)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class ChatResponse(BaseModel):
    """Assistant reply returned by the chat endpoint.

    Attributes:
        reply: Reply text with citation markers removed.
        html: The reply rendered as compact chat-bubble HTML.
    """

    reply: str
    html: str
