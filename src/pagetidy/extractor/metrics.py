"""
Element Metrics Calculator

Computes six independent, roughly [0, 1]-normalized content signals for a
candidate element:

- text density: visible text per character of serialized markup
- visual density: visible text per unit of rendered area
- link density: share of the text that sits inside anchors
- natural language score: prose-like punctuation and sentence structure
- sibling similarity: structural resemblance to sibling elements
- content momentum: class/id keyword cues plus paragraph and figure counts
"""

from __future__ import annotations

import re
from typing import Dict, Optional

import structlog
from bs4 import Tag

from ..config import PatternTables
from ..dom.layout import LayoutProvider, StaticLayout
from ..dom.nodes import class_id_probe, class_names, element_children, markup_length, text_of
from .models import ElementMetrics

logger = structlog.get_logger(__name__)

_TERMINAL_RUN = re.compile(r"[.!?]+")
_TERMINAL_THEN_CAPITAL = re.compile(r"[.!?]\s+[A-Z]")
_SHOUTING = re.compile(r"[A-Z]{4,}")
_PROSE_MARKS = ",;:'\""


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


class MetricsCalculator:
    """Computes ElementMetrics for candidate elements."""

    def __init__(
        self,
        patterns: Optional[PatternTables] = None,
        layout: Optional[LayoutProvider] = None,
    ) -> None:
        compiled: Dict[str, re.Pattern[str]] = (patterns or PatternTables()).compiled()
        self.positive = compiled["positive"]
        self.unlikely = compiled["unlikely"]
        self.layout = layout or StaticLayout(compiled["print_hidden"])

    def calculate(self, node: Tag) -> ElementMetrics:
        """Measure ``node``; a failure yields all-zero metrics for it alone."""
        try:
            text = text_of(node)
            return ElementMetrics(
                node=node,
                text_density=self.text_density(node, text),
                visual_density=self.visual_density(node, text),
                link_density=self.link_density(node, text),
                natural_language_score=self.natural_language_score(text),
                sibling_similarity=self.sibling_similarity(node),
                content_momentum=self.content_momentum(node),
            )
        except Exception as e:
            logger.debug("Metric calculation failed", tag=node.name, error=str(e))
            return ElementMetrics.empty(node)

    def text_density(self, node: Tag, text: Optional[str] = None) -> float:
        markup = markup_length(node)
        if markup == 0:
            return 0.0
        text = text_of(node) if text is None else text
        return len(text) / markup

    def visual_density(self, node: Tag, text: Optional[str] = None) -> float:
        try:
            box = self.layout.bounding_box(node)
        except Exception as e:
            logger.debug("Bounding box unavailable", tag=node.name, error=str(e))
            return 0.0
        if box is None or box.area <= 0:
            return 0.0
        text = text_of(node) if text is None else text
        return len(text) / box.area

    def link_density(self, node: Tag, text: Optional[str] = None) -> float:
        text = text_of(node) if text is None else text
        if not text:
            return 0.0
        link_text = sum(len(anchor.get_text()) for anchor in node.find_all("a"))
        return link_text / len(text)

    def natural_language_score(self, text: str) -> float:
        score = 0.5 * len(_TERMINAL_RUN.findall(text))
        score += 0.3 * len(_TERMINAL_THEN_CAPITAL.findall(text))
        score -= 0.3 * len(_SHOUTING.findall(text))
        score += 0.2 * sum(1 for mark in _PROSE_MARKS if mark in text)
        return _clamp(score / 10)

    def sibling_similarity(self, node: Tag) -> float:
        parent = node.parent
        if parent is None:
            return 0.0
        siblings = [sibling for sibling in element_children(parent) if sibling is not node]
        if len(siblings) < 2:
            return 0.0

        classes = set(class_names(node))
        child_tags = {child.name for child in element_children(node)}
        similar = 0
        for sibling in siblings:
            if classes & set(class_names(sibling)) or child_tags & {c.name for c in element_children(sibling)}:
                similar += 1
        return similar / len(siblings)

    def content_momentum(self, node: Tag) -> float:
        momentum = 0.0
        if self.matches_positive(node):
            momentum += 0.25
        if self.matches_unlikely(node):
            momentum -= 0.25
        momentum += min(1.0, 0.2 * len(node.find_all("p")))
        momentum += min(0.5, 0.1 * len(node.find_all("figure")))
        return _clamp(momentum)

    def matches_positive(self, node: Tag) -> bool:
        probe = class_id_probe(node)
        return bool(probe and self.positive.search(probe))

    def matches_unlikely(self, node: Tag) -> bool:
        probe = class_id_probe(node)
        return bool(probe and self.unlikely.search(probe))
