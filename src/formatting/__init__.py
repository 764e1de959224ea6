"""Reply formatting for chat display.

Turns raw assistant replies into compact chat-bubble HTML.

Responsibilities:
    - Citation marker stripping by surface pattern matching
    - Blank line normalization
    - Markdown rendering with parent-aware layout overrides

Pure text transformation with no knowledge of the remote service.
"""

from src.formatting.citations import format_reply, strip_citations
from src.formatting.markdown import MarkdownRenderer, render_markdown

__all__ = ["MarkdownRenderer", "format_reply", "render_markdown", "strip_citations"]
