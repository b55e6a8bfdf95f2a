"""
Layout capability consumed by the extraction engine.

The engine never computes layout itself. It asks a ``LayoutProvider`` for
resolved style properties and box geometry. Server-side callers get
``StaticLayout``, which only knows what inline ``style`` declarations and
``width``/``height`` attributes say; with it, visual density is usually 0
and geometry-based hiding only fires on explicit inline values. A
browser-backed provider can supply real values through the same protocol.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Protocol, runtime_checkable

from bs4 import Tag

from .nodes import class_names

_IMPORTANT = re.compile(r"!\s*important\s*$", re.IGNORECASE)
_LENGTH = re.compile(r"^\s*(-?\d+(?:\.\d+)?|-?\.\d+)\s*([a-z%]*)\s*(?:!important)?\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class Box:
    """Rendered box size in CSS pixels."""

    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height


@runtime_checkable
class LayoutProvider(Protocol):
    """Read-only layout facts for one element.

    Implementations may raise ``LayoutUnavailable`` when they cannot answer;
    callers treat that as neutral (no area, not hidden).
    """

    def style(self, node: Tag) -> Mapping[str, str]:
        """Resolved style properties, lower-cased names and values."""
        ...

    def bounding_box(self, node: Tag) -> Optional[Box]:
        """Rendered box, or None when unknown."""
        ...

    def is_print_hidden(self, node: Tag) -> bool:
        """True when the element is not rendered under print media."""
        ...


def parse_length(value: Optional[str]) -> Optional[float]:
    """Parse a CSS length into pixels.

    Only unitless and ``px`` values are understood; zero is zero in any unit.
    """
    if value is None:
        return None
    match = _LENGTH.match(value)
    if not match:
        return None
    number = float(match.group(1))
    unit = match.group(2).lower()
    if number == 0:
        return 0.0
    if unit in ("", "px"):
        return number
    return None


def parse_inline_style(declarations: str) -> Dict[str, str]:
    style: Dict[str, str] = {}
    for declaration in declarations.split(";"):
        name, sep, value = declaration.partition(":")
        if not sep:
            continue
        name = name.strip().lower()
        if name:
            style[name] = _IMPORTANT.sub("", value).strip().lower()
    return style


class StaticLayout:
    """Layout facts read from markup alone (inline style and size attributes)."""

    def __init__(self, print_hidden: Optional[re.Pattern[str]] = None) -> None:
        if print_hidden is None:
            from ..config import PatternTables

            print_hidden = PatternTables().compiled()["print_hidden"]
        self.print_hidden = print_hidden

    def style(self, node: Tag) -> Mapping[str, str]:
        declarations = node.get("style")
        if not declarations:
            return {}
        return parse_inline_style(str(declarations))

    def bounding_box(self, node: Tag) -> Optional[Box]:
        style = self.style(node)
        width = parse_length(style.get("width"))
        height = parse_length(style.get("height"))
        if width is None:
            width = parse_length(_attribute(node, "width"))
        if height is None:
            height = parse_length(_attribute(node, "height"))
        if width is None or height is None:
            return None
        return Box(width=width, height=height)

    def is_print_hidden(self, node: Tag) -> bool:
        return any(self.print_hidden.search(name) for name in class_names(node))


class NullLayout:
    """Provider for contexts with no layout information at all."""

    def style(self, node: Tag) -> Mapping[str, str]:
        return {}

    def bounding_box(self, node: Tag) -> Optional[Box]:
        return None

    def is_print_hidden(self, node: Tag) -> bool:
        return False


def _attribute(node: Tag, name: str) -> Optional[str]:
    value = node.get(name)
    if value is None or isinstance(value, list):
        return None
    return str(value)
