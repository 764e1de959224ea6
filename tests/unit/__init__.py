"""Unit tests for individual components in isolation.

Coverage:
    - assistant/: Configuration and the conversation client protocol
    - formatting/: Citation stripping and markdown rendering
    - models/: Pydantic validation of remote payloads
"""
