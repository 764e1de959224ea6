"""Unit tests for the chat markdown renderer."""

import pytest_check as check
from markdown_it.tree import SyntaxTreeNode

from src.formatting.markdown import (
    LIST_ITEM_STYLE,
    LIST_STYLE,
    PARAGRAPH_STYLE,
    MarkdownRenderer,
    render_markdown,
)


class TestParagraphs:
    """Tests for paragraph layout rules."""

    def test_paragraph_has_no_margin(self) -> None:
        assert render_markdown("Hello") == f'<p style="{PARAGRAPH_STYLE}">Hello</p>\n'

    def test_multiple_paragraphs(self) -> None:
        html = render_markdown("One\n\nTwo")

        check.equal(html.count("<p "), 2)
        check.is_in("One</p>", html)
        check.is_in("Two</p>", html)

    def test_paragraph_in_blockquote_keeps_wrapper(self) -> None:
        html = render_markdown("> quoted")

        check.is_in("<blockquote>", html)
        check.is_in(f'<p style="{PARAGRAPH_STYLE}">quoted</p>', html)


class TestLists:
    """Tests for list layout rules."""

    def test_tight_list_items_have_no_paragraphs(self) -> None:
        html = render_markdown("- one\n- two")

        check.is_in(f'<ul style="{LIST_STYLE}">', html)
        check.is_in(f'<li style="{LIST_ITEM_STYLE}">one</li>', html)
        check.is_in(f'<li style="{LIST_ITEM_STYLE}">two</li>', html)
        check.is_not_in("<p", html)

    def test_loose_list_items_have_no_paragraphs(self) -> None:
        """Blank lines between items would normally wrap each item in <p>."""
        html = render_markdown("- one\n\n- two")

        check.is_not_in("<p", html)
        check.equal(html.count(f'<li style="{LIST_ITEM_STYLE}">'), 2)

    def test_ordered_list_keeps_start(self) -> None:
        html = render_markdown("3. three\n4. four")

        check.is_in("<ol ", html)
        check.is_in('start="3"', html)
        check.is_in(f'style="{LIST_STYLE}"', html)

    def test_nested_lists_are_styled(self) -> None:
        html = render_markdown("- outer\n  - inner")

        check.equal(html.count(f'<ul style="{LIST_STYLE}">'), 2)
        check.is_not_in("<p", html)

    def test_paragraph_after_list(self) -> None:
        html = render_markdown("- item\n\nAfter")

        check.is_in(f'<p style="{PARAGRAPH_STYLE}">After</p>', html)
        check.is_in(f'<li style="{LIST_ITEM_STYLE}">item</li>', html)


class TestInlineAndBlocks:
    """Tests for elements rendered with markdown-it defaults."""

    def test_emphasis_and_code(self) -> None:
        html = render_markdown("**bold** *it* `x`")

        check.is_in("<strong>bold</strong>", html)
        check.is_in("<em>it</em>", html)
        check.is_in("<code>x</code>", html)

    def test_link(self) -> None:
        html = render_markdown("[docs](https://example.com)")

        assert '<a href="https://example.com">docs</a>' in html

    def test_fenced_code(self) -> None:
        html = render_markdown("```\nprint(1)\n```")

        assert "<pre><code>print(1)\n</code></pre>" in html

    def test_heading(self) -> None:
        assert render_markdown("# Title") == "<h1>Title</h1>\n"

    def test_raw_html_is_escaped(self) -> None:
        html = render_markdown("<script>alert(1)</script>")

        check.is_not_in("<script>", html)
        check.is_in("&lt;script&gt;", html)

    def test_empty_text(self) -> None:
        assert render_markdown("") == ""


class TestMarkdownRenderer:
    """Tests for custom override tables."""

    def test_no_overrides_matches_markdown_it(self) -> None:
        renderer = MarkdownRenderer(overrides={})
        text = "Hello\n\n- one\n- two\n\n1. a\n\n   b\n"

        assert renderer.render(text) == renderer.md.render(text)

    def test_override_can_inspect_parent(self) -> None:
        def emphasize_in_quote(renderer: MarkdownRenderer, node: SyntaxTreeNode) -> str:
            content = renderer.render_children(node)
            if node.parent is not None and node.parent.type == "blockquote":
                return f"<em>{content}</em>"
            return f"<span>{content}</span>"

        renderer = MarkdownRenderer(overrides={"paragraph": emphasize_in_quote})

        check.equal(renderer.render("plain"), "<span>plain</span>")
        check.is_in("<em>quoted</em>", renderer.render("> quoted"))

    def test_overrides_are_per_instance(self) -> None:
        renderer = MarkdownRenderer()
        renderer.overrides.pop("paragraph")

        check.equal(renderer.render("Hi"), "<p>Hi</p>\n")
        check.equal(render_markdown("Hi"), f'<p style="{PARAGRAPH_STYLE}">Hi</p>\n')
