"""
Small read-only helpers over bs4 element trees.
"""

from __future__ import annotations

import re
from typing import List

from bs4 import Tag

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def class_names(node: Tag) -> List[str]:
    """Class names of ``node``; bs4 stores ``class`` as a list for HTML builders."""
    value = node.get("class")
    if not value:
        return []
    if isinstance(value, str):
        return value.split()
    return [str(name) for name in value]


def class_id_probe(node: Tag) -> str:
    """Lower-cased class names and id joined by spaces, for pattern matching."""
    element_id = node.get("id") or ""
    return " ".join(class_names(node) + [str(element_id)]).strip().lower()


def text_of(node: Tag) -> str:
    return node.get_text()


def markup_length(node: Tag) -> int:
    """Length of the serialized children (innerHTML equivalent)."""
    return len(node.decode_contents())


def element_children(node: Tag) -> List[Tag]:
    return [child for child in node.children if isinstance(child, Tag)]


def contains(ancestor: Tag, node: Tag) -> bool:
    """True when ``node`` is a strict descendant of ``ancestor``."""
    return any(parent is ancestor for parent in node.parents)


def overlaps(a: Tag, b: Tag) -> bool:
    return a is b or contains(a, b) or contains(b, a)
