"""Markdown rendering for chat bubbles.

Renders with markdown-it-py and walks its syntax tree so that overrides can
look at a node's parent, not only its own type. The default overrides give a
compact layout: no paragraph margins, no <p> inside list items, tight lists.
"""

from collections.abc import Callable, Mapping

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

LIST_STYLE = "padding-left: 1.25rem; margin: 0"
LIST_ITEM_STYLE = "margin: 0 0 4px 0; padding: 0"
PARAGRAPH_STYLE = "margin: 0"

NodeRenderer = Callable[["MarkdownRenderer", SyntaxTreeNode], str]


class MarkdownRenderer:
    """Tree-walking markdown renderer with per-node-type overrides.

    An override receives the renderer and the node, and can inspect
    ``node.parent`` to render differently depending on where the node sits.
    Node types without an override use markdown-it's default output.
    """

    def __init__(self, overrides: Mapping[str, NodeRenderer] | None = None) -> None:
        # Raw HTML in replies is escaped, never passed through
        self.md = MarkdownIt("commonmark", {"html": False})
        self.overrides: dict[str, NodeRenderer] = dict(
            DEFAULT_OVERRIDES if overrides is None else overrides
        )

    def render(self, text: str) -> str:
        env: dict = {}
        root = SyntaxTreeNode(self.md.parse(text, env))
        return self.render_children(root, env)

    def render_children(self, node: SyntaxTreeNode, env: dict | None = None) -> str:
        env = {} if env is None else env
        return "".join(self.render_node(child, env) for child in node.children)

    def render_node(self, node: SyntaxTreeNode, env: dict | None = None) -> str:
        env = {} if env is None else env
        override = self.overrides.get(node.type)
        if override is not None:
            return override(self, node)
        return self.render_default(node, env)

    def render_default(self, node: SyntaxTreeNode, env: dict | None = None) -> str:
        """Render a node the way markdown-it would, recursing into children."""
        env = {} if env is None else env
        renderer = self.md.renderer
        if not node.nester_tokens:
            # Leaf block (fence, hr, ...) or an inline run
            return renderer.render([node.token], self.md.options, env)

        opening, closing = node.nester_tokens
        # The following token decides whether a line break follows the tag
        context = [opening]
        if node.children:
            first = node.children[0]
            context.append(first.token or first.nester_tokens.opening)
        return (
            renderer.renderToken(context, 0, self.md.options, env)
            + self.render_children(node, env)
            + renderer.renderToken([closing], 0, self.md.options, env)
        )

    def render_styled(self, node: SyntaxTreeNode, style: str) -> str:
        """Render a container node with a style attribute on its opening tag."""
        opening, _ = node.nester_tokens
        opening.attrSet("style", style)
        return self.render_default(node)


def render_paragraph(renderer: MarkdownRenderer, node: SyntaxTreeNode) -> str:
    content = renderer.render_children(node)
    if node.parent is not None and node.parent.type == "list_item":
        return content
    return f'<p style="{PARAGRAPH_STYLE}">{content}</p>\n'


def render_list_item(renderer: MarkdownRenderer, node: SyntaxTreeNode) -> str:
    return renderer.render_styled(node, LIST_ITEM_STYLE)


def render_list(renderer: MarkdownRenderer, node: SyntaxTreeNode) -> str:
    return renderer.render_styled(node, LIST_STYLE)


DEFAULT_OVERRIDES: dict[str, NodeRenderer] = {
    "paragraph": render_paragraph,
    "list_item": render_list_item,
    "bullet_list": render_list,
    "ordered_list": render_list,
}

_default_renderer: MarkdownRenderer | None = None


def render_markdown(text: str) -> str:
    """Render chat text to compact HTML.

    Args:
        text: Markdown source, typically a sanitized assistant reply.

    Returns:
        HTML suitable for a chat bubble.
    """
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = MarkdownRenderer()
    return _default_renderer.render(text)
