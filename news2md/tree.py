"""Markup tree model and the BeautifulSoup bridge.

The unwrapper works on these plain dataclasses rather than on bs4 objects so
that every stage builds a fresh tree instead of mutating a shared DOM.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import Comment as SoupComment
from bs4.element import Declaration, Doctype, ProcessingInstruction


class InvariantViolation(Exception):
    """The input tree breaks the tree model (bad node, shared node, cycle)."""


@dataclass
class Text:
    data: str


@dataclass
class Comment:
    data: str = ""


@dataclass
class Element:
    tag: str
    attrs: list[tuple[str, str]] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)

    def __post_init__(self):
        if not isinstance(self.tag, str):
            raise InvariantViolation(f"Element tag must be a string, got {self.tag!r}")
        self.tag = self.tag.lower()
        attrs = []
        for pair in self.attrs:
            if not (
                isinstance(pair, tuple) and len(pair) == 2
                and isinstance(pair[0], str) and isinstance(pair[1], str)
            ):
                raise InvariantViolation(
                    f"<{self.tag}> attribute must be a (name, value) pair, got {pair!r}"
                )
            attrs.append((pair[0].lower(), pair[1]))
        self.attrs = attrs

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the first value of attribute ``name``."""
        name = name.lower()
        for key, value in self.attrs:
            if key == name:
                return value
        return default


@dataclass
class Fragment:
    """Parentless list of top-level nodes (a parsed document or an unwrapped root)."""

    children: list[Node] = field(default_factory=list)


Node = Union[Element, Text, Comment]


def line_break() -> Element:
    """Synthetic break inserted between unwrapped block runs."""
    return Element("br")


def text_content(node: Node | Fragment | list) -> str:
    """Concatenate all descendant text in document order."""
    if isinstance(node, Text):
        return node.data
    if isinstance(node, Comment):
        return ""
    if isinstance(node, (Element, Fragment)):
        return "".join(text_content(child) for child in node.children)
    if isinstance(node, list):
        return "".join(text_content(child) for child in node)
    raise InvariantViolation(f"Not a markup node: {node!r}")


def from_soup(tag: Tag) -> Element | Fragment:
    """Convert a parsed bs4 tree into the markup tree model.

    A ``BeautifulSoup`` document becomes a ``Fragment``; any other tag becomes
    an ``Element``.
    """
    children = [_convert(child) for child in tag.children]
    if isinstance(tag, BeautifulSoup):
        return Fragment([child for child in children if child is not None])
    return Element(
        tag.name,
        [(name, _attr_value(value)) for name, value in tag.attrs.items()],
        [child for child in children if child is not None],
    )


def _convert(child) -> Node | None:
    if isinstance(child, Tag):
        return from_soup(child)
    if isinstance(child, (SoupComment, Declaration, Doctype, ProcessingInstruction)):
        return Comment(str(child))
    if isinstance(child, NavigableString):
        return Text(str(child))
    return None


def _attr_value(value) -> str:
    # bs4 returns multi-valued attributes (class, rel) as lists
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)
