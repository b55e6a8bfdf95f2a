"""
Content Selector: picks a disjoint, document-ordered set of content blocks.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import structlog
from bs4 import Tag

from ..config import SelectionSettings
from ..dom.nodes import overlaps
from .models import ScoredCandidate

logger = structlog.get_logger(__name__)


class ContentSelector:
    """Greedy selection with an absolute floor and a decay rule.

    Candidates are visited best first. The best one seeds the selection
    unconditionally; every later block must clear ``score_floor`` and stay
    above ``decay_factor`` times the last accepted score. Blocks that contain,
    or sit inside, an accepted block are skipped.
    """

    def __init__(self, settings: Optional[SelectionSettings] = None) -> None:
        self.settings = settings or SelectionSettings()

    def select(self, candidates: Sequence[ScoredCandidate]) -> List[Tag]:
        return [candidate.node for candidate in self.select_scored(candidates)]

    def select_scored(self, candidates: Sequence[ScoredCandidate]) -> List[ScoredCandidate]:
        # sorted() is stable, so ties keep document order.
        ranked = sorted(candidates, key=lambda candidate: candidate.score, reverse=True)
        accepted: List[ScoredCandidate] = []

        for candidate in ranked:
            if any(overlaps(candidate.node, chosen.node) for chosen in accepted):
                continue
            if accepted:
                previous = accepted[-1].score
                if candidate.score <= self.settings.score_floor:
                    continue
                if candidate.score <= previous * self.settings.decay_factor:
                    continue
            accepted.append(candidate)

        logger.debug(
            "Content blocks selected",
            candidates=len(candidates),
            selected=len(accepted),
            scores=[round(c.score, 3) for c in accepted],
        )
        return sorted(accepted, key=lambda candidate: candidate.position)
