"""Assistant Chat - web chat widget for a hosted thread-based assistant.

Combines FastAPI for the HTTP surface, httpx for the assistant API,
NiceGUI for the chat page, and Pydantic for configuration and payloads.

Components:
    - assistant: Conversation client with bounded run polling
    - formatting: Citation stripping and markdown rendering
    - api: HTTP endpoints for sending messages
    - ui: Web interface for chat interactions
    - models: Request/response and remote resource schemas
"""

__version__ = "0.1.0"
