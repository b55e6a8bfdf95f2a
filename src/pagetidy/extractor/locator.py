"""
Main-Content Locator strategies.

Three interchangeable ``ContentLocator`` strategies, tried cheapest first by
``CascadeLocator``:

1. selector: explicit "this is the article" markup (ARIA roles, microdata,
   common content classes). First visible match wins.
2. scoring: the thorough multi-metric pipeline (block enumeration, metrics,
   weighted scoring, greedy selection). May return several blocks.
3. heuristic: a fast additive scorer over container tags. Its scale is
   unbounded (class bonus of 25 points, paragraph and image counts), unlike
   the normalized scores of the scoring strategy, so the two never compare
   scores with each other.

Strategies signal "nothing here" by raising ``NoCandidateFound``; the cascade
recovers by trying the next one and finally by using the document body.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import structlog
from bs4 import Tag
from soupsieve import SelectorSyntaxError

from ..config import LocatorSettings
from ..dom.layout import LayoutProvider, StaticLayout
from ..dom.parser import document_body
from ..dom.visibility import is_hidden
from ..exceptions import NoCandidateFound
from .blocks import BlockEnumerator
from .metrics import MetricsCalculator
from .protocols import ContentLocator
from .scoring import ScoringEngine
from .selector import ContentSelector

logger = structlog.get_logger(__name__)


class SelectorLocator:
    """Finds content through a prioritized list of CSS selectors."""

    name = "selector"

    def __init__(self, selectors: Sequence[str], layout: Optional[LayoutProvider] = None) -> None:
        self.selectors = list(selectors)
        self.layout = layout or StaticLayout()

    def locate(self, root: Tag) -> Optional[List[Tag]]:
        for selector in self.selectors:
            try:
                matches = root.select(selector)
            except SelectorSyntaxError as e:
                logger.warning("Skipping invalid content selector", selector=selector, error=str(e))
                continue
            for match in matches:
                if not is_hidden(match, self.layout):
                    logger.debug("Found main content via selector", selector=selector, tag=match.name)
                    return [match]
        raise NoCandidateFound("no content selector matched")


class ScoringLocator:
    """Multi-metric strategy: enumerate blocks, score them, select a disjoint set."""

    name = "scoring"

    def __init__(self, enumerator: BlockEnumerator, engine: ScoringEngine, selector: ContentSelector) -> None:
        self.enumerator = enumerator
        self.engine = engine
        self.selector = selector

    def locate(self, root: Tag) -> Optional[List[Tag]]:
        blocks = self.enumerator.enumerate(root)
        if not blocks:
            raise NoCandidateFound("document has no visible block elements")
        candidates = self.engine.score_all(blocks)
        logger.debug("Scored block candidates", count=len(candidates))
        return self.selector.select(candidates)


class HeuristicLocator:
    """Additive container scorer: keyword cues, word count, links, paragraphs, images."""

    name = "heuristic"

    def __init__(
        self,
        calculator: MetricsCalculator,
        tags: Sequence[str],
        layout: Optional[LayoutProvider] = None,
    ) -> None:
        self.calculator = calculator
        self.tags = list(tags)
        self.layout = layout or calculator.layout

    def score(self, node: Tag) -> int:
        score = 0
        if self.calculator.matches_positive(node):
            score += 25
        if self.calculator.matches_unlikely(node):
            score -= 25

        text = node.get_text()
        score += min(len(text.split()) // 100, 3)
        if self.calculator.link_density(node, text) > 0.5:
            score -= 10

        score += len(node.find_all("p"))
        score += min(len(node.find_all("img")) * 3, 9)
        return score

    def locate(self, root: Tag) -> Optional[List[Tag]]:
        best: Optional[Tag] = None
        best_score = 0
        for tag in self.tags:
            for element in root.find_all(tag):
                if is_hidden(element, self.layout):
                    continue
                score = self.score(element)
                if score > best_score:
                    best, best_score = element, score
        if best is None:
            raise NoCandidateFound("no container scored above zero")
        logger.debug("Found main content via heuristic scoring", tag=best.name, score=best_score)
        return [best]


class CascadeLocator:
    """Tries locator strategies in order and falls back to the document body."""

    name = "cascade"

    def __init__(self, locators: Sequence[ContentLocator]) -> None:
        if not locators:
            raise ValueError("CascadeLocator needs at least one locator")
        self.locators = list(locators)

    def locate(self, root: Tag) -> Optional[List[Tag]]:
        return self.locate_with_strategy(root)[1]

    def locate_with_strategy(self, root: Tag) -> Tuple[str, List[Tag]]:
        """Like ``locate`` but also reports which strategy produced the result."""
        for locator in self.locators:
            try:
                nodes = locator.locate(root)
            except NoCandidateFound as e:
                logger.debug("Locator found nothing", locator=locator.name, reason=str(e))
                continue
            if nodes:
                return locator.name, nodes

        logger.debug("No main content found, using body")
        return "body", [document_body(root)]


def build_locator(
    settings: LocatorSettings,
    calculator: MetricsCalculator,
    engine: ScoringEngine,
    selector: ContentSelector,
    layout: LayoutProvider,
) -> CascadeLocator:
    """Assemble the cascade named by ``settings`` from shared components."""
    available = {
        "selector": lambda: SelectorLocator(settings.content_selectors, layout),
        "scoring": lambda: ScoringLocator(BlockEnumerator(settings.block_tags, layout), engine, selector),
        "heuristic": lambda: HeuristicLocator(calculator, settings.heuristic_tags, layout),
    }
    return CascadeLocator([available[name]() for name in settings.resolved_order()])
