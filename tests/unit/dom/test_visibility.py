"""
Unit tests for hidden-element detection and the static layout provider.
"""

import pytest
from bs4 import BeautifulSoup

from pagetidy.dom.layout import Box, NullLayout, StaticLayout, parse_inline_style, parse_length
from pagetidy.dom.visibility import is_hidden, is_print_hidden
from pagetidy.exceptions import LayoutUnavailable


def first_div(html: str):
    return BeautifulSoup(html, "html.parser").find("div")


class RaisingLayout:
    """Layout provider for a context that cannot render."""

    def style(self, node):
        raise LayoutUnavailable("no renderer")

    def bounding_box(self, node):
        raise LayoutUnavailable("no renderer")

    def is_print_hidden(self, node):
        raise LayoutUnavailable("no renderer")


class TestIsHidden:
    """Test the hidden predicate against StaticLayout."""

    @pytest.mark.parametrize(
        "html",
        [
            '<div style="display: none">x</div>',
            '<div style="visibility:hidden">x</div>',
            '<div style="visibility: collapse">x</div>',
            '<div style="opacity: 0">x</div>',
            '<div style="opacity:0.0">x</div>',
            '<div style="width: 0; height: 0px">x</div>',
            '<div width="0" height="0">x</div>',
            '<div style="position: absolute; left: -9999px">x</div>',
            '<div style="position:fixed; top:-1000px">x</div>',
            '<div style="max-height: 0">x</div>',
            '<div style="overflow: hidden; height: 0">x</div>',
            "<div hidden>x</div>",
            '<div aria-hidden="true">x</div>',
            '<div style="DISPLAY: NONE !important">x</div>',
        ],
    )
    def test_hidden_elements(self, html):
        """Every hiding technique is detected."""
        assert is_hidden(first_div(html), StaticLayout()) is True

    @pytest.mark.parametrize(
        "html",
        [
            "<div>x</div>",
            '<div style="display: block; color: red">x</div>',
            '<div style="opacity: 0.5">x</div>',
            '<div style="width: 0; height: 20px">x</div>',
            '<div style="position: absolute; left: -20px">x</div>',
            '<div style="position: static; left: -9999px">x</div>',
            '<div style="overflow: hidden; height: 200px">x</div>',
            '<div aria-hidden="false">x</div>',
            '<div style="opacity: bogus">x</div>',
        ],
    )
    def test_visible_elements(self, html):
        """Ordinary and partially styled elements are visible."""
        assert is_hidden(first_div(html), StaticLayout()) is False

    def test_layout_failure_counts_as_visible(self):
        """A provider that cannot answer never hides anything by style."""
        node = first_div('<div style="display:none">x</div>')
        assert is_hidden(node, RaisingLayout()) is False

    def test_attributes_hide_even_without_layout(self):
        """The hidden and aria-hidden attributes need no layout."""
        assert is_hidden(first_div("<div hidden>x</div>"), RaisingLayout()) is True
        assert is_hidden(first_div('<div aria-hidden="true">x</div>'), NullLayout()) is True

    def test_null_layout_ignores_styles(self):
        """Without layout facts, style-based hiding is a no-op."""
        assert is_hidden(first_div('<div style="display:none">x</div>'), NullLayout()) is False


class TestPrintHidden:
    """Test print-media hiding."""

    @pytest.mark.parametrize("cls", ["noprint", "d-print-none", "hidden-print", "no-print"])
    def test_print_classes(self, cls):
        node = first_div(f'<div class="box {cls}">x</div>')
        assert is_print_hidden(node, StaticLayout()) is True

    def test_regular_class(self):
        node = first_div('<div class="printer-friendly">x</div>')
        assert is_print_hidden(node, StaticLayout()) is False

    def test_failure_is_absorbed(self):
        assert is_print_hidden(first_div("<div>x</div>"), RaisingLayout()) is False


class TestStaticLayout:
    """Test inline style and geometry parsing."""

    def test_parse_inline_style(self):
        style = parse_inline_style("Display: None; COLOR:Red;; broken; width : 10px")
        assert style == {"display": "none", "color": "red", "width": "10px"}

    @pytest.mark.parametrize(
        "value,expected",
        [("10px", 10.0), ("10", 10.0), ("-9999px", -9999.0), ("0em", 0.0), ("0", 0.0), ("50%", None),
         ("2em", None), ("auto", None), (None, None), ("12.5px", 12.5)],
    )
    def test_parse_length(self, value, expected):
        assert parse_length(value) == expected

    def test_bounding_box_from_style(self):
        node = first_div('<div style="width: 200px; height: 50px">x</div>')
        assert StaticLayout().bounding_box(node) == Box(width=200.0, height=50.0)

    def test_bounding_box_from_attributes(self):
        node = BeautifulSoup('<img src="a.png" width="640" height="480">', "html.parser").find("img")
        box = StaticLayout().bounding_box(node)
        assert box is not None
        assert box.area == 640 * 480

    def test_bounding_box_unknown(self):
        node = first_div('<div style="width: 200px">x</div>')
        assert StaticLayout().bounding_box(node) is None
