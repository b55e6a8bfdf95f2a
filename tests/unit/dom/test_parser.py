"""
Unit tests for the HTML parsing boundary and node helpers.
"""

import pytest
from bs4 import BeautifulSoup

from pagetidy.dom.nodes import class_id_probe, class_names, contains, overlaps
from pagetidy.dom.parser import document_body, parse_html
from pagetidy.exceptions import ExtractionError, ParseFailure


class TestParseHtml:
    """Test parse_html."""

    def test_parses_markup(self):
        soup = parse_html("<html><body><p>Hello</p></body></html>")
        assert soup.find("p").get_text() == "Hello"

    def test_parses_bytes(self):
        soup = parse_html("<p>café</p>".encode("utf-8"))
        assert soup.find("p") is not None

    @pytest.mark.parametrize("markup", ["", "   \n\t", b""])
    def test_empty_input(self, markup):
        with pytest.raises(ParseFailure):
            parse_html(markup)

    def test_non_text_input(self):
        with pytest.raises(ParseFailure):
            parse_html(42)  # type: ignore[arg-type]

    def test_text_without_elements(self):
        """Bare text becomes the content of an implied body."""
        soup = parse_html("just some words")
        assert soup.body is not None
        assert soup.body.get_text() == "just some words"
        assert document_body(soup) is soup.body

    def test_unknown_parser(self):
        with pytest.raises(ParseFailure):
            parse_html("<p>x</p>", parser="no-such-parser")

    def test_parse_failure_is_extraction_error(self):
        assert issubclass(ParseFailure, ExtractionError)


class TestDocumentBody:
    """Test body lookup with fallback."""

    def test_body(self):
        soup = BeautifulSoup("<html><body><p>x</p></body></html>", "html.parser")
        assert document_body(soup).name == "body"

    def test_no_body(self):
        soup = BeautifulSoup("<div><p>x</p></div>", "html.parser")
        assert document_body(soup) is soup


class TestNodeHelpers:
    """Test tree helpers."""

    def test_class_id_probe(self):
        soup = BeautifulSoup('<div class="Post Main" id="Story">x</div>', "html.parser")
        node = soup.find("div")
        assert class_names(node) == ["Post", "Main"]
        assert class_id_probe(node) == "post main story"

    def test_probe_without_attributes(self):
        soup = BeautifulSoup("<div>x</div>", "html.parser")
        assert class_id_probe(soup.find("div")) == ""

    def test_containment(self):
        soup = BeautifulSoup('<div id="a"><p id="b"><b id="c">x</b></p></div><p id="d">y</p>', "html.parser")
        a, b, c, d = (soup.find(id=i) for i in "abcd")
        assert contains(a, c)
        assert not contains(c, a)
        assert not contains(a, a)
        assert overlaps(b, b)
        assert overlaps(c, a)
        assert not overlaps(a, d)
