"""Citation marker stripping for assistant replies.

Replies from file-search assistants carry inline source markers that mean
nothing to a chat reader. They are removed by surface syntax only; the
markdown structure of the reply is not parsed.
"""

import re

# Applied in order. Each pattern also matches legitimate text of the same
# shape, e.g. "step (2)" or "array[3]" lose their numbers.
CITATION_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # [1], [12]
    (re.compile(r"\[\d+\]"), ""),
    # 【4:0†source】 file-search annotations
    (re.compile(r"【.*?†.*?】"), ""),
    # (1), (2)
    (re.compile(r"\(\d+\)"), ""),
    # <sup>1</sup>, <SUP>a</SUP>
    (re.compile(r"<sup>.*?</sup>", re.IGNORECASE), ""),
    # Collapse three or more newlines into one blank line
    (re.compile(r"\n{3,}"), "\n\n"),
]


def _strip_once(text: str) -> str:
    for pattern, replacement in CITATION_PATTERNS:
        text = pattern.sub(replacement, text)
    return text


def strip_citations(raw: str) -> str:
    """Remove citation markers from reply text.

    Substitutions repeat until the text is stable, so removing one marker
    cannot leave another behind (``"[[1]2]"`` becomes ``""``).

    Args:
        raw: Reply text as returned by the assistant.

    Returns:
        The text without citation markers.
    """
    text = raw
    while True:
        cleaned = _strip_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned


def format_reply(raw: str) -> str:
    """Prepare an assistant reply for the conversation history."""
    return strip_citations(raw)
