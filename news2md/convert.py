"""HTML -> markdown: parse, sanitize/unwrap, render, clean up."""

from __future__ import annotations

from bs4 import BeautifulSoup
from readability import Document

from news2md._postprocess import post_process
from news2md.render import render_markdown
from news2md.tree import Fragment, from_soup
from news2md.unwrap import sanitize_and_unwrap

DEFAULT_MAX_LENGTH = 80000

# Never content; dropped before the tree is built
NON_CONTENT_TAGS = ["script", "style", "noscript"]


def continuation_hint(url: str = "") -> str:
    """Suffix appended to truncated output, pointing at the full article."""
    if url:
        return f"\n\n[Truncated, for full content, please visit: {url}]"
    return "\n\n[Truncated]"


def html_to_markdown(
    html: str,
    url: str = "",
    preserve_links: bool = False,
    max_length: int = DEFAULT_MAX_LENGTH,
    selector: str | None = None,
    strip_boilerplate: bool = False,
) -> str:
    """Convert an HTML article body to compact markdown.

    Pipeline:
    1. readability-lxml extracts main content (if strip_boilerplate)
    2. BeautifulSoup parses, optionally narrowed by CSS selector
    3. Non-native elements are unwrapped, attributes stripped
    4. markdownify renders, then the cleanup rules and size budget apply
    """
    if not html or not html.strip():
        return ""

    content_html = _readability_extract(html, url) if strip_boilerplate else html

    soup = BeautifulSoup(content_html, "lxml")
    for tag in soup.find_all(NON_CONTENT_TAGS):
        tag.decompose()

    tree = Fragment()
    if selector:
        tree = Fragment([from_soup(el) for el in soup.select(selector)])
    # If selector finds nothing, fall through to the whole body
    if not tree.children:
        tree = from_soup(soup.body or soup)

    sanitized = sanitize_and_unwrap(tree, preserve_links)
    raw = render_markdown(sanitized)
    return post_process(raw, preserve_links, max_length, continuation_hint(url))


def _readability_extract(html: str, url: str = "") -> str:
    """Extract main content using Mozilla's Readability algorithm."""
    doc = Document(html, url=url)
    return doc.summary()
