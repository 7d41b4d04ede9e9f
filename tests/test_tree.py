"""Tests for news2md.tree module."""

import pytest
from bs4 import BeautifulSoup

from news2md.tree import (
    Comment,
    Element,
    Fragment,
    InvariantViolation,
    Text,
    from_soup,
    line_break,
    text_content,
)


class TestElement:
    def test_normalizes_case(self):
        el = Element("DIV", [("Class", "a")])
        assert el.tag == "div"
        assert el.attrs == [("class", "a")]

    def test_get_attribute(self):
        el = Element("a", [("href", "http://x")])
        assert el.get("HREF") == "http://x"
        assert el.get("title") is None

    def test_non_string_tag_rejected(self):
        with pytest.raises(InvariantViolation):
            Element(None)

    @pytest.mark.parametrize("attrs", [
        [("href",)],
        ["href"],
        [(None, "x")],
        [("href", None)],
        [("a", "b", "c")],
    ])
    def test_malformed_attributes_rejected(self, attrs):
        with pytest.raises(InvariantViolation):
            Element("a", attrs)

    def test_line_break(self):
        assert line_break() == Element("br")
        assert line_break() is not line_break()


class TestTextContent:
    def test_concatenates_in_order(self):
        tree = Fragment([
            Text("a"),
            Element("b", [], [Text("b"), Comment("skip"), Element("i", [], [Text("c")])]),
        ])
        assert text_content(tree) == "abc"

    def test_rejects_non_nodes(self):
        with pytest.raises(InvariantViolation):
            text_content(Element("p", [], [object()]))


class TestFromSoup:
    def test_document_becomes_fragment(self):
        soup = BeautifulSoup("<p>Hi</p><!-- c -->tail", "html.parser")
        tree = from_soup(soup)
        assert tree == Fragment([
            Element("p", [], [Text("Hi")]),
            Comment(" c "),
            Text("tail"),
        ])

    def test_tag_becomes_element(self):
        soup = BeautifulSoup('<div id="x"><span>a</span></div>', "html.parser")
        tree = from_soup(soup.div)
        assert tree == Element("div", [("id", "x")], [Element("span", [], [Text("a")])])

    def test_multi_valued_attributes_joined(self):
        soup = BeautifulSoup('<p class="lead big">x</p>', "html.parser")
        tree = from_soup(soup.p)
        assert tree.get("class") == "lead big"

    def test_doctype_becomes_comment(self):
        soup = BeautifulSoup("<!DOCTYPE html><p>x</p>", "html.parser")
        tree = from_soup(soup)
        assert isinstance(tree.children[0], Comment)
