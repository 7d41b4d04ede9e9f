"""Reduce an arbitrary markup tree to elements markdown can express.

Two passes, each building a new tree:

1. strip: drop comments and, unless links are kept, flatten anchors to text
2. unwrap: replace every foreign element by its children (post-order),
   inserting a line break where two block runs would otherwise run together,
   and filter attributes on the native elements that remain
"""

from __future__ import annotations

from news2md.policy import allowed_attributes, is_block, is_native
from news2md.tree import (
    Comment,
    Element,
    Fragment,
    InvariantViolation,
    Node,
    Text,
    line_break,
    text_content,
)


def sanitize_and_unwrap(
    tree: Node | Fragment,
    preserve_links: bool = False,
) -> Node | Fragment:
    """Return a new tree holding only native elements and text.

    A ``Fragment`` comes back as a ``Fragment``. Any other root comes back as
    the single node it reduces to, or as a ``Fragment`` when it unwraps to
    nothing or to several nodes.
    """
    if isinstance(tree, Fragment):
        top = _strip(tree.children, preserve_links, set())
        return Fragment(_unwrap(top, preserve_links))

    top = _strip([tree], preserve_links, set())
    result = _unwrap(top, preserve_links)
    if len(result) == 1:
        return result[0]
    return Fragment(result)


def _strip(nodes: list, preserve_links: bool, seen: set[int]) -> list[Node]:
    stripped: list[Node] = []
    for node in nodes:
        if isinstance(node, Comment):
            continue
        if not isinstance(node, (Element, Text)):
            raise InvariantViolation(f"Not a markup node: {node!r}")
        if id(node) in seen:
            raise InvariantViolation(f"{type(node).__name__} node is reachable more than once")
        seen.add(id(node))
        if isinstance(node, Text):
            if not isinstance(node.data, str):
                raise InvariantViolation(f"Text data must be a string, got {node.data!r}")
            stripped.append(Text(node.data))
            continue
        if not isinstance(node.children, list):
            raise InvariantViolation(f"<{node.tag}> children must be a list")

        children = _strip(node.children, preserve_links, seen)
        if node.tag == "a" and not preserve_links:
            text = text_content(children)
            if text:
                stripped.append(Text(text))
            continue
        stripped.append(Element(node.tag, list(node.attrs), children))
    return stripped


def _unwrap(nodes: list[Node], preserve_links: bool) -> list[Node]:
    result: list[Node] = []
    for index, node in enumerate(nodes):
        if isinstance(node, Text):
            result.append(node)
            continue

        children = _unwrap(node.children, preserve_links)

        if is_native(node.tag):
            keep = allowed_attributes(node.tag, preserve_links)
            attrs = [(name, value) for name, value in node.attrs if name in keep]
            result.append(Element(node.tag, attrs, children))
            continue

        # Empty foreign element: nothing to keep, not even a break
        if not children:
            continue

        spaced = is_block(node.tag) and bool(text_content(children).strip())
        if spaced and _is_block_element(_last_element(result)):
            result.append(line_break())
        result.extend(children)
        if spaced and _is_block_element(_next_element(nodes, index)):
            result.append(line_break())
    return result


def _last_element(nodes: list[Node]) -> Element | None:
    for node in reversed(nodes):
        if isinstance(node, Element):
            return node
    return None


def _next_element(nodes: list[Node], index: int) -> Element | None:
    # Following siblings are not unwrapped yet, so this sees original tag names
    for node in nodes[index + 1:]:
        if isinstance(node, Element):
            return node
    return None


def _is_block_element(node: Element | None) -> bool:
    return node is not None and is_block(node.tag)
