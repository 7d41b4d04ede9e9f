"""Tag and attribute policy for the sanitize/unwrap stage.

One table decides, per tag name, whether markdown can express the element
(native), whether it starts a visual block, and which attributes survive.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TagClass(Enum):
    NATIVE = "native"
    FOREIGN = "foreign"


@dataclass(frozen=True)
class TagPolicy:
    """Policy for a single tag name.

    ``attributes`` always survive sanitization; ``link_attributes`` survive
    only when links are being preserved.
    """

    native: bool
    block: bool
    attributes: frozenset[str] = frozenset()
    link_attributes: frozenset[str] = frozenset()


FOREIGN_INLINE = TagPolicy(native=False, block=False)

_NATIVE_BLOCK = (
    "h1", "h2", "h3", "h4", "h5", "h6", "p", "br", "hr",
    "ul", "ol", "li", "blockquote", "pre",
    "table", "thead", "tbody", "tr", "th", "td",
    "dl", "dt", "dd",
)
_NATIVE_INLINE = ("strong", "b", "em", "i", "u", "s", "del", "ins", "code")
_FOREIGN_BLOCK = (
    "div", "section", "article", "header", "footer", "main", "aside", "nav",
    "form", "fieldset", "legend", "details", "summary", "figure",
    "figcaption", "address", "hgroup", "tfoot",
)

TAG_POLICIES: dict[str, TagPolicy] = {
    **{name: TagPolicy(native=True, block=True) for name in _NATIVE_BLOCK},
    **{name: TagPolicy(native=True, block=False) for name in _NATIVE_INLINE},
    **{name: TagPolicy(native=False, block=True) for name in _FOREIGN_BLOCK},
    "a": TagPolicy(native=True, block=False, link_attributes=frozenset({"href"})),
    "img": TagPolicy(native=True, block=False, attributes=frozenset({"src", "alt"})),
}


def tag_policy(name: str) -> TagPolicy:
    """Look up the policy for a tag name (case-insensitive)."""
    return TAG_POLICIES.get(name.lower(), FOREIGN_INLINE)


def classify(name: str) -> TagClass:
    return TagClass.NATIVE if tag_policy(name).native else TagClass.FOREIGN


def is_native(name: str) -> bool:
    return tag_policy(name).native


def is_block(name: str) -> bool:
    return tag_policy(name).block


def allowed_attributes(name: str, preserve_links: bool = False) -> frozenset[str]:
    """Attribute names allowed to survive on ``name``."""
    policy = tag_policy(name)
    if preserve_links:
        return policy.attributes | policy.link_attributes
    return policy.attributes
