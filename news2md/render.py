"""Sanitized tree -> raw markdown via markdownify."""

from __future__ import annotations

from bs4 import BeautifulSoup, NavigableString
from markdownify import MarkdownConverter

from news2md.tree import Comment, Fragment, Node, Text

MARKDOWN_OPTIONS = {
    "heading_style": "ATX",
    "bullets": "-",
    "strong_em_symbol": "*",
    # Keep [url](url) form; <url> autolinks would be eaten by markup stripping
    "autolinks": False,
}


def to_soup(tree: Node | Fragment) -> BeautifulSoup:
    """Rebuild a bs4 document from a markup tree."""
    soup = BeautifulSoup("", "html.parser")
    roots = tree.children if isinstance(tree, Fragment) else [tree]
    for node in roots:
        converted = _to_bs4(soup, node)
        if converted is not None:
            soup.append(converted)
    return soup


def _to_bs4(soup: BeautifulSoup, node: Node):
    if isinstance(node, Text):
        return NavigableString(node.data)
    if isinstance(node, Comment):
        return None
    tag = soup.new_tag(node.tag, attrs=dict(node.attrs))
    for child in node.children:
        converted = _to_bs4(soup, child)
        if converted is not None:
            tag.append(converted)
    return tag


def render_markdown(tree: Node | Fragment) -> str:
    """Render a sanitized tree to markdown, without any cleanup."""
    converter = MarkdownConverter(**MARKDOWN_OPTIONS)
    return converter.convert_soup(to_soup(tree))
