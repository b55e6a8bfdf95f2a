"""
Sanitizer - cleanup passes over an owned copy of the selected content.

Passes run in a fixed order, each on the tree left by the previous one:

1. comments
2. unwanted content (scripts, trackers, social/ad/byline blocks, foreign iframes)
3. hidden, print-hidden and interface-chrome elements
4. paywalls and content boundaries ("related", link lists, teaser grids),
   then the sign-in and subscribe controls that no paywall claimed
5. empty paragraphs, divs and spans
6. attribute pruning to an allow-list

The root handed in is never removed itself, only its descendants. The
sanitizer mutates the tree it is given, so callers pass a deep copy.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Callable, Dict, List, Optional
from urllib.parse import urljoin, urlparse

import structlog
from bs4 import Comment, Tag

from ..config import PatternTables, SanitizerSettings
from ..dom.layout import LayoutProvider, StaticLayout
from ..dom.nodes import class_id_probe, collapse_whitespace, element_children
from ..dom.visibility import is_hidden, is_print_hidden

logger = structlog.get_logger(__name__)

Predicate = Callable[[Tag], bool]


class Sanitizer:
    """Removes boilerplate subtrees and prunes attributes."""

    def __init__(
        self,
        settings: Optional[SanitizerSettings] = None,
        patterns: Optional[PatternTables] = None,
        layout: Optional[LayoutProvider] = None,
    ) -> None:
        self.settings = settings or SanitizerSettings()
        compiled: Dict[str, re.Pattern[str]] = (patterns or PatternTables()).compiled()
        self.unwanted = compiled["unwanted"]
        self.chrome = compiled["chrome"]
        self.boundary = compiled["boundary"]
        self.paywall_text = compiled["paywall_text"]
        self.auth_control = compiled["auth_control"]
        self.layout = layout or StaticLayout(compiled["print_hidden"])

        self.unwanted_tags = frozenset(self.settings.unwanted_tags)
        self.unwanted_roles = frozenset(self.settings.unwanted_roles)
        self.chrome_tags = frozenset(self.settings.chrome_tags)
        self.chrome_roles = frozenset(self.settings.chrome_roles)
        self.empty_tags = frozenset(self.settings.empty_tags)
        self.media_tags = list(self.settings.media_tags)
        self.prose_tags = frozenset(self.settings.prose_tags)
        self.allowed_attributes = frozenset(name.lower() for name in self.settings.allowed_attributes)

    def sanitize(self, root: Tag) -> Tag:
        """Run every pass over ``root`` in place and return it."""
        removed = {
            "comments": self.remove_comments(root),
            "unwanted": self._remove_top_down(root, self.is_unwanted),
            "hidden_or_chrome": self._remove_top_down(root, self.is_hidden_or_chrome),
            "paywall_or_boundary": self._remove_bottom_up(root, self.is_paywall_or_boundary),
            "auth_controls": self._remove_top_down(root, self.is_leftover_auth_control),
            "empty": self._remove_bottom_up(root, self.is_empty),
        }
        self.prune_attributes(root)
        logger.debug("Sanitized content", root=root.name, **removed)
        return root

    # --- Pass 1 ---

    def remove_comments(self, root: Tag) -> int:
        comments = root.find_all(string=lambda text: isinstance(text, Comment))
        for comment in comments:
            comment.extract()
        return len(comments)

    # --- Pass 2 ---

    def is_unwanted(self, node: Tag) -> bool:
        if node.name in self.unwanted_tags:
            return True
        if node.name == "iframe":
            return not self._is_video_embed(node)
        if node.name == "img" and self._is_tracking_pixel(node):
            return True
        if _role(node) in self.unwanted_roles:
            return True
        if "author" in _tokens(node.get("rel")):
            return True
        probe = class_id_probe(node)
        return bool(probe and self.unwanted.search(probe))

    def _is_video_embed(self, node: Tag) -> bool:
        src = str(node.get("src") or "")
        host = (urlparse(src if "//" in src else f"//{src}").hostname or "").lower()
        return any(host == allowed or host.endswith(f".{allowed}") for allowed in self.settings.video_hosts)

    def _is_tracking_pixel(self, node: Tag) -> bool:
        box = self.layout.bounding_box(node)
        return box is not None and box.width <= 1 and box.height <= 1

    # --- Pass 3 ---

    def is_hidden_or_chrome(self, node: Tag) -> bool:
        if is_hidden(node, self.layout) or is_print_hidden(node, self.layout):
            return True
        return self.is_chrome(node)

    def is_chrome(self, node: Tag, exempt_auth: bool = True) -> bool:
        """Buttons, form controls, icons and toolbars.

        With ``exempt_auth`` authentication controls are left in place for
        paywall detection.
        """
        probe = class_id_probe(node)
        chrome = (
            node.name in self.chrome_tags
            or _role(node) in self.chrome_roles
            or bool(probe and self.chrome.search(probe))
        )
        if not chrome:
            return False
        return not (exempt_auth and self.is_auth_control(node))

    def is_auth_control(self, node: Tag) -> bool:
        if node.name not in ("a", "button", "input") and _role(node) != "button":
            return False
        label = " ".join(
            [
                collapse_whitespace(node.get_text(" ")),
                str(node.get("value") or ""),
                str(node.get("aria-label") or ""),
                class_id_probe(node),
            ]
        )
        return bool(self.auth_control.search(label))

    # --- Pass 4 ---

    def is_paywall_or_boundary(self, node: Tag) -> bool:
        if node.name not in ("section", "div"):
            return False
        return self.is_paywall(node) or self.is_boundary(node)

    def is_paywall(self, node: Tag) -> bool:
        text = collapse_whitespace(node.get_text(" "))
        if not self.paywall_text.search(text):
            return False
        return any(self.is_auth_control(control) for control in node.find_all(True))

    def is_boundary(self, node: Tag) -> bool:
        probe = class_id_probe(node)
        if probe and self.boundary.search(probe):
            return True
        return self._is_link_list(node) or self._is_repeated_teasers(node)

    def is_leftover_auth_control(self, node: Tag) -> bool:
        """Chrome kept by pass 3 only because it reads as an authentication control."""
        return self.is_auth_control(node) and self.is_chrome(node, exempt_auth=False)

    def _is_link_list(self, node: Tag) -> bool:
        links = node.find_all("a")
        if len(links) <= self.settings.boundary_min_links:
            return False
        if node.find(["ul", "ol"]) is None:
            return False
        text = node.get_text()
        if not text:
            return False
        link_text = sum(len(link.get_text()) for link in links)
        return link_text / len(text) > self.settings.boundary_link_density

    def _is_repeated_teasers(self, node: Tag) -> bool:
        children = element_children(node)
        if len(children) < self.settings.repeated_min_children:
            return False
        tag, count = Counter(child.name for child in children).most_common(1)[0]
        if tag in self.prose_tags or count / len(children) <= self.settings.repeated_tag_share:
            return False
        lengths = [len(collapse_whitespace(child.get_text(" "))) for child in children if child.name == tag]
        mean = sum(lengths) / len(lengths)
        if mean == 0:
            return False
        tolerance = self.settings.repeated_length_tolerance * mean
        return all(abs(length - mean) <= tolerance for length in lengths)

    # --- Pass 5 ---

    def is_empty(self, node: Tag) -> bool:
        if node.name not in self.empty_tags:
            return False
        if node.get_text().strip():
            return False
        return node.find(self.media_tags) is None

    # --- Pass 6 ---

    def prune_attributes(self, root: Tag) -> None:
        for node in [root, *root.find_all(True)]:
            node.attrs = {name: value for name, value in node.attrs.items() if name.lower() in self.allowed_attributes}

    # --- Traversal ---

    def _remove_top_down(self, root: Tag, predicate: Predicate) -> int:
        """Remove matching descendants; a removed subtree is not visited further."""
        removed = 0
        stack = list(reversed(element_children(root)))
        while stack:
            node = stack.pop()
            if self._check(predicate, node):
                node.decompose()
                removed += 1
                continue
            stack.extend(reversed(element_children(node)))
        return removed

    def _remove_bottom_up(self, root: Tag, predicate: Predicate) -> int:
        """Remove matching descendants deepest first, so the innermost match goes."""
        removed = 0
        for node in reversed(root.find_all(True)):
            if self._check(predicate, node):
                node.decompose()
                removed += 1
        return removed

    def _check(self, predicate: Predicate, node: Tag) -> bool:
        try:
            return predicate(node)
        except Exception as e:
            logger.debug("Element classification failed, keeping element", tag=node.name, error=str(e))
            return False


def resolve_urls(root: Tag, base_url: str) -> None:
    """Rewrite relative ``href``/``src``/``srcset`` values against ``base_url``."""
    for node in [root, *root.find_all(True)]:
        for name in ("href", "src"):
            value = node.get(name)
            if isinstance(value, str) and value and not value.startswith(("#", "data:", "mailto:", "javascript:")):
                node[name] = urljoin(base_url, value)
        srcset = node.get("srcset")
        if isinstance(srcset, str) and srcset:
            entries = [entry for entry in srcset.split(",") if entry.strip()]
            node["srcset"] = ", ".join(_resolve_srcset_entry(base_url, entry) for entry in entries)


def _resolve_srcset_entry(base_url: str, entry: str) -> str:
    url, _, descriptor = entry.strip().partition(" ")
    resolved = urljoin(base_url, url)
    return f"{resolved} {descriptor.strip()}".strip()


def _role(node: Tag) -> str:
    return str(node.get("role") or "").strip().lower()


def _tokens(value: object) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return value.lower().split()
    return [str(token).lower() for token in value]  # type: ignore[attr-defined]
