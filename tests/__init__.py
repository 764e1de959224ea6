"""Test package for Assistant Chat.

Structure:
    - unit/: Individual function and class tests
    - integration/: HTTP endpoint tests against the FastAPI app

The remote assistant service is replaced by httpx.MockTransport handlers.
Leverages pytest with pytest-check for soft assertions.
"""
