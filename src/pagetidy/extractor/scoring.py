"""
Scoring Engine: folds ElementMetrics into one normalized score.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from bs4 import Tag

from ..config import ScoringWeights
from .metrics import MetricsCalculator
from .models import ElementMetrics, ScoredCandidate


class ScoringEngine:
    """Weighted average of the element metrics.

    Link density contributes as ``1 - link_density`` so that link-heavy
    regions score lower. The result is divided by the weight sum, giving a
    value that is in practice within [0, 1].
    """

    def __init__(self, calculator: MetricsCalculator, weights: Optional[ScoringWeights] = None) -> None:
        self.calculator = calculator
        self.weights = weights or ScoringWeights()

    def score(self, metrics: ElementMetrics) -> float:
        w = self.weights
        total = w.total
        if total <= 0:
            return 0.0
        weighted = (
            metrics.text_density * w.text_density
            + metrics.visual_density * w.visual_density
            + (1.0 - metrics.link_density) * w.link_density
            + metrics.natural_language_score * w.natural_language
            + metrics.sibling_similarity * w.sibling_similarity
            + metrics.content_momentum * w.content_momentum
        )
        return weighted / total

    def score_all(self, nodes: Iterable[Tag]) -> List[ScoredCandidate]:
        """Score ``nodes``, which must be in document order."""
        return [
            ScoredCandidate(node=node, score=self.score(self.calculator.calculate(node)), position=position)
            for position, node in enumerate(nodes)
        ]
