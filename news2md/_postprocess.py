"""Markdown post-processing pipeline.

Cleans up what is left after rendering a sanitized tree: stray markup, links
(when they are not wanted), whitespace, list/table spacing and bracket debris,
then enforces a size budget.

Rules run in a fixed order and later rules assume earlier ones already ran.
Each rule is idempotent on its own, and ``clean_markdown`` re-runs the whole
sequence until the text stops changing, so applying it to its own output is a
no-op.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

_MARKUP_COMMENT = re.compile(r"<!--.*?-->", re.S)
_MARKUP_TAG = re.compile(r"<[^>]+>")

_INLINE_LINK = re.compile(r"(?<!!)\[([^\]]*)\]\([^)]*\)")
_REFERENCE_LINK = re.compile(r"(?<!!)\[([^\]]*)\]\[[^\]]*\]")
_REFERENCE_DEFINITION = re.compile(r"^[ \t]*\[[^\]]+\]:[ \t]+\S+.*$", re.M)
_EMPTY_LINK_TEXT = re.compile(r"(?<!!)\[\s*\]")

_LIST_ITEM_GAP = re.compile(r"\n\n+(\s*(?:[-*+]|\d+\.)\s)")
_TABLE_ROW_GAP = re.compile(r"\n\n+(\s*\|)")

_BRACKET_DEBRIS = re.compile(r"(?<!!)\[[\s*]*\](?![(\[])")
_DANGLING_ASTERISK = re.compile(r"(?<![*\\])\*[ \t]*\]")


def strip_markup(markdown: str) -> str:
    """Remove markup comments and tags that leaked through rendering."""
    markdown = _MARKUP_COMMENT.sub("", markdown)
    return _MARKUP_TAG.sub("", markdown)


def strip_links(markdown: str) -> str:
    """Flatten links to their text and drop reference definitions.

    [text](url) -> text
    [text][ref] -> text
    [ref]: url "title" -> (removed)

    Image syntax ![alt](src) is left alone.
    """
    markdown = _INLINE_LINK.sub(r"\1", markdown)
    markdown = _REFERENCE_LINK.sub(r"\1", markdown)
    markdown = _REFERENCE_DEFINITION.sub("", markdown)
    return _EMPTY_LINK_TEXT.sub("", markdown)


def collapse_whitespace(markdown: str) -> str:
    """Single spaces, no trailing whitespace, at most one blank line in a row."""
    markdown = re.sub(r"[ \t]+", " ", markdown)
    markdown = re.sub(r" +$", "", markdown, flags=re.M)
    return re.sub(r"\n{3,}", "\n\n", markdown)


def tighten_blocks(markdown: str) -> str:
    """Remove blank lines in front of list items and table rows."""
    markdown = _LIST_ITEM_GAP.sub(r"\n\1", markdown)
    return _TABLE_ROW_GAP.sub(r"\n\1", markdown)


def collapse_blank_lines(markdown: str) -> str:
    """Collapse blank runs (including whitespace-only lines) to one blank line."""
    return re.sub(r"\n\s*\n\s*\n", "\n\n", markdown)


def strip_bracket_artifacts(markdown: str) -> str:
    """Remove debris left by stripped icons and inline formatting.

    [ ] and [*] disappear, a dangling *] becomes ], double spaces collapse.
    Brackets followed by ( or [ are link syntax and are kept.
    """
    markdown = _BRACKET_DEBRIS.sub("", markdown)
    markdown = _DANGLING_ASTERISK.sub("]", markdown)
    return re.sub(r"  +", " ", markdown)


def trim(markdown: str) -> str:
    return markdown.strip()


@dataclass(frozen=True)
class CleanupRule:
    number: int
    name: str
    apply: Callable[[str], str]
    links_stripped_only: bool = False


CLEANUP_RULES: tuple[CleanupRule, ...] = (
    CleanupRule(1, "strip_markup", strip_markup),
    CleanupRule(2, "strip_links", strip_links, links_stripped_only=True),
    CleanupRule(3, "collapse_whitespace", collapse_whitespace),
    CleanupRule(4, "tighten_blocks", tighten_blocks),
    CleanupRule(5, "collapse_blank_lines", collapse_blank_lines),
    CleanupRule(6, "strip_bracket_artifacts", strip_bracket_artifacts),
    CleanupRule(7, "trim", trim),
)


def active_rules(preserve_links: bool = False) -> list[CleanupRule]:
    """Rules that apply for the given link policy, in order."""
    return [
        rule for rule in CLEANUP_RULES
        if not (rule.links_stripped_only and preserve_links)
    ]


def clean_markdown(markdown: str, preserve_links: bool = False) -> str:
    """Run cleanup rules 1-7 until the text stops changing.

    No rule ever lengthens the text, so this terminates.
    """
    if not markdown:
        return ""

    rules = active_rules(preserve_links)
    while True:
        cleaned = markdown
        for rule in rules:
            cleaned = rule.apply(cleaned)
        if cleaned == markdown:
            return cleaned
        markdown = cleaned


def truncate(markdown: str, max_length: int, continuation_hint: str = "") -> str:
    """Cut to exactly ``max_length`` characters and append the hint.

    ``max_length <= 0`` means no limit.
    """
    if max_length <= 0 or len(markdown) <= max_length:
        return markdown
    return markdown[:max_length] + continuation_hint


def is_truncated(
    markdown: str,
    max_length: int,
    continuation_hint: str,
    preserve_links: bool = False,
) -> bool:
    """True if ``markdown`` is a clean body cut by ``truncate`` plus the hint.

    The body must already be clean; only the trailing whitespace a hard cut
    can leave is tolerated.
    """
    if not (
        max_length > 0
        and continuation_hint
        and markdown.endswith(continuation_hint)
        and len(markdown) - len(continuation_hint) == max_length
    ):
        return False
    body = markdown[:-len(continuation_hint)]
    return clean_markdown(body, preserve_links) == body.rstrip()


def post_process(
    raw_markdown: str,
    preserve_links: bool = False,
    max_length: int = 0,
    continuation_hint: str = "",
) -> str:
    """Clean rendered markdown and enforce the size budget.

    Output that was already cleaned and truncated with the same budget and
    hint is returned unchanged.
    """
    if is_truncated(raw_markdown, max_length, continuation_hint, preserve_links):
        return raw_markdown
    cleaned = clean_markdown(raw_markdown, preserve_links)
    return truncate(cleaned, max_length, continuation_hint)
