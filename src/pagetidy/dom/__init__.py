"""Document-tree access: parsing, layout facts and visibility."""

from .layout import Box, LayoutProvider, NullLayout, StaticLayout
from .parser import document_body, parse_html
from .visibility import is_hidden, is_print_hidden

__all__ = [
    "Box",
    "LayoutProvider",
    "NullLayout",
    "StaticLayout",
    "document_body",
    "is_hidden",
    "is_print_hidden",
    "parse_html",
]
