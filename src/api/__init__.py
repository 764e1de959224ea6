"""FastAPI endpoints for the assistant chat widget.

Endpoints:
    - GET /health: Service health status
    - POST /chat: Send a message and receive the assistant's reply
    - POST /chat/reset: Start a new conversation
"""

from src.api.app import app, create_app

__all__ = ["app", "create_app"]
