"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat bubble display with rendered markdown
    - Typing indicator while a reply is pending
    - New conversation button

Delegates the remote exchange to the assistant client and reply cleanup to
the formatting package.
"""
