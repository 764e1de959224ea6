"""NiceGUI chat interface for the hosted assistant."""

import os
from collections.abc import Callable
from nicegui import Client, ui

from src.assistant.client import AssistantClient
from src.assistant.config import get_assistant_config
from src.formatting import format_reply, render_markdown
from src.models.schemas import ChatMessage

CHAT_TITLE = os.getenv("CHAT_TITLE", "AI Assistant")
CHAT_GREETING = os.getenv(
    "CHAT_GREETING",
    "Hi there! 👋 I'm your assistant. How can I help you today?",
)

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f9f9f9; min-height: 100vh; }

    .app-container {
        background: white;
        border: 1px solid #ddd;
        border-radius: 12px;
        box-shadow: 0 0 10px rgba(0, 0, 0, 0.05);
        overflow: hidden;
    }

    .message-user {
        background: #007bff;
        color: white;
        border-radius: 16px;
    }

    .message-assistant {
        background: #e8e8e8;
        color: black;
        border-radius: 16px;
    }

    .typing-dot {
        width: 8px; height: 8px;
        background: #007bff;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .input-box {
        background: white;
        border: 1px solid #ccc;
        border-radius: 8px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #007bff; }

    .send-btn { background: #007bff !important; }

    /* Markdown styling */
    .bubble { line-height: 1.25; word-wrap: break-word; }
    .bubble strong { font-weight: 600; }
    .bubble pre { margin: 0.5rem 0; overflow-x: auto; }
    .bubble code { font-family: 'Menlo', 'Monaco', monospace; }
    .message-user a { color: white; text-decoration: underline; }
    .message-assistant a { color: #0056b3; }
</style>
"""


class ChatSession:
    """Manages chat state for one browser page.

    Each page gets its own assistant client, and therefore its own
    conversation thread.
    """

    def __init__(self, assistant: AssistantClient | None = None) -> None:
        self.assistant = assistant or AssistantClient(get_assistant_config())
        self.messages: list[ChatMessage] = []
        self.is_waiting: bool = False
        self.add_message("assistant", CHAT_GREETING)

    def add_message(self, role: str, content: str) -> None:
        self.messages.append(ChatMessage(role=role, content=content))

    async def send(
        self,
        text: str,
        on_update: Callable[[], None] | None = None,
    ) -> str | None:
        """Send user text and record the cleaned reply.

        Blank input and sends while a reply is pending are ignored.
        ``on_update`` is called once the user message is recorded, before
        waiting for the assistant.

        Returns:
            The cleaned reply, or None if nothing was sent.
        """
        text = text.strip()
        if not text or self.is_waiting:
            return None

        self.add_message("user", text)
        self.is_waiting = True
        if on_update is not None:
            on_update()
        try:
            reply = format_reply(await self.assistant.send_message(text))
        finally:
            self.is_waiting = False

        self.add_message("assistant", reply)
        return reply

    def new_chat(self) -> None:
        self.messages.clear()
        self.assistant.reset()
        self.add_message("assistant", CHAT_GREETING)

    async def close(self) -> None:
        await self.assistant.aclose()


def bind_session(session: ChatSession, client: Client) -> None:
    """Release the session's HTTP resources once its page is deleted.

    A page that reconnects within the reconnect timeout keeps its session,
    so nothing is closed on a plain disconnect.
    """
    client.on_delete(session.close)


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession()
    bind_session(session, ui.context.client)

    messages_container: ui.column
    scroll_area: ui.scroll_area
    input_field: ui.input
    send_btn: ui.button

    def render_message(msg: ChatMessage) -> None:
        is_user = msg.role == "user"
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"

        with ui.row().classes(f"w-full {align}"):
            with ui.column().classes("max-w-[70%] gap-1"):
                with ui.element("div").classes(f"px-3 py-1 bubble {bubble}"):
                    ui.html(render_markdown(msg.content), sanitize=False).classes(
                        "text-sm"
                    )
                ui.label(msg.time).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )

    def render_typing_indicator() -> None:
        with ui.row().classes("w-full justify-start"):
            with ui.element("div").classes("message-assistant px-3 py-2"):
                with ui.row().classes("items-center gap-2"):
                    with ui.row().classes("gap-1"):
                        for _ in range(3):
                            ui.element("div").classes("typing-dot")
                    ui.label("Assistant is typing...").classes("text-sm text-gray-500 italic")

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            for msg in session.messages:
                render_message(msg)
            if session.is_waiting:
                render_typing_indicator()
        scroll_area.scroll_to(percent=1.0)

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip() or session.is_waiting:
            return

        input_field.value = ""
        send_btn.disable()

        try:
            await session.send(text, on_update=refresh_messages)
        finally:
            send_btn.enable()
            refresh_messages()

    def new_chat() -> None:
        session.new_chat()
        refresh_messages()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full px-5 py-4 items-center justify-between"):
            ui.label(f"💬 {CHAT_TITLE}").classes("text-lg font-semibold text-gray-800")
            ui.button(icon="add", on_click=new_chat).props("flat round").tooltip("New chat")

        # Messages
        with ui.scroll_area().classes("flex-grow w-full bg-white") as scroll_area:
            messages_container = ui.column().classes("w-full p-4 gap-2")

        # Input
        with ui.row().classes("w-full p-4 gap-2 items-center border-t"):
            with ui.element("div").classes("flex-grow input-box px-3"):
                input_field = (
                    ui.input(placeholder="Type your message...")
                    .props("borderless dense")
                    .classes("w-full")
                    .on("keydown.enter", send_message)
                )
            send_btn = (
                ui.button("Send", on_click=send_message)
                .props("unelevated")
                .classes("send-btn text-white")
            )

    refresh_messages()

