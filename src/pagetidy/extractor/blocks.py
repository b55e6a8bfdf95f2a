"""
Block enumeration: the ordered block-level candidates of a document.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from bs4 import Tag

from ..dom.layout import LayoutProvider, StaticLayout
from ..dom.nodes import element_children
from ..dom.visibility import is_hidden


class BlockEnumerator:
    """Walks a tree in document order yielding visible block-level elements.

    Non-block elements are skipped but their descendants are still visited.
    Hidden elements are rejected together with their whole subtree.
    """

    def __init__(self, block_tags: Iterable[str], layout: Optional[LayoutProvider] = None) -> None:
        self.block_tags = frozenset(tag.lower() for tag in block_tags)
        self.layout = layout or StaticLayout()

    def enumerate(self, root: Tag) -> List[Tag]:
        blocks: List[Tag] = []
        stack = [root]
        while stack:
            node = stack.pop()
            if is_hidden(node, self.layout):
                continue
            if node.name in self.block_tags:
                blocks.append(node)
            # Reversed so the leftmost child is popped first (pre-order).
            stack.extend(reversed(element_children(node)))
        return blocks
