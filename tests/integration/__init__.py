"""Integration tests for the FastAPI app and the assistant client together.

Requests go through the real app via ASGITransport. Only the remote
assistant service is faked, at the HTTP transport level.
"""
