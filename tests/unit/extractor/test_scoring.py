"""
Unit tests for ScoringEngine.
"""

import pytest
from bs4 import BeautifulSoup

from pagetidy.config import ScoringWeights
from pagetidy.extractor.metrics import MetricsCalculator
from pagetidy.extractor.models import ElementMetrics
from pagetidy.extractor.scoring import ScoringEngine


@pytest.fixture
def element():
    return BeautifulSoup("<div>x</div>", "html.parser").div


def metrics(node, **values) -> ElementMetrics:
    fields = {
        "text_density": 0.0,
        "visual_density": 0.0,
        "link_density": 0.0,
        "natural_language_score": 0.0,
        "sibling_similarity": 0.0,
        "content_momentum": 0.0,
    }
    fields.update(values)
    return ElementMetrics(node=node, **fields)


class TestScoringEngine:
    """Test the weighted combination."""

    def test_default_weights_sum_to_six(self):
        assert ScoringWeights().total == pytest.approx(6.0)

    def test_zero_metrics_keep_link_term(self, element):
        """With nothing else present, (1 - link density) alone contributes."""
        engine = ScoringEngine(MetricsCalculator())
        assert engine.score(metrics(element)) == pytest.approx(1 / 6)

    def test_perfect_metrics(self, element):
        engine = ScoringEngine(MetricsCalculator())
        perfect = metrics(
            element,
            text_density=1.0,
            visual_density=1.0,
            natural_language_score=1.0,
            sibling_similarity=1.0,
            content_momentum=1.0,
        )
        assert engine.score(perfect) == pytest.approx(1.0)

    def test_links_lower_the_score(self, element):
        engine = ScoringEngine(MetricsCalculator())
        prose = metrics(element, natural_language_score=0.8)
        linky = metrics(element, natural_language_score=0.8, link_density=0.9)
        assert engine.score(linky) < engine.score(prose)

    def test_natural_language_dominates(self, element):
        engine = ScoringEngine(MetricsCalculator())
        language = engine.score(metrics(element, natural_language_score=1.0, link_density=1.0))
        density = engine.score(metrics(element, text_density=1.0, link_density=1.0))
        assert language > density

    def test_custom_weights(self, element):
        weights = ScoringWeights(
            text_density=1.0,
            visual_density=0.0,
            link_density=0.0,
            natural_language=0.0,
            sibling_similarity=0.0,
            content_momentum=0.0,
        )
        engine = ScoringEngine(MetricsCalculator(), weights)
        assert engine.score(metrics(element, text_density=0.4)) == pytest.approx(0.4)

    def test_zero_weight_total(self, element):
        weights = ScoringWeights(
            text_density=0.0,
            visual_density=0.0,
            link_density=0.0,
            natural_language=0.0,
            sibling_similarity=0.0,
            content_momentum=0.0,
        )
        engine = ScoringEngine(MetricsCalculator(), weights)
        assert engine.score(metrics(element, text_density=1.0)) == 0.0

    def test_score_all_assigns_positions(self):
        soup = BeautifulSoup("<div><p>One. Two.</p><p>Three</p></div>", "html.parser")
        nodes = [soup.div, *soup.find_all("p")]
        candidates = ScoringEngine(MetricsCalculator()).score_all(nodes)
        assert [c.position for c in candidates] == [0, 1, 2]
        assert [c.node for c in candidates] == nodes
        assert all(0.0 <= c.score <= 1.0 for c in candidates)
