"""
PageTidy Content Extraction Module

Locates the main readable content of a noisy HTML document and reduces it to
a clean, attribute-pruned fragment:

1. Selector shortcut: explicit article markup (ARIA roles, microdata, content classes)
2. Multi-metric scoring: text/visual/link density, natural-language cues,
   sibling similarity and content momentum, combined by fixed weights
3. Heuristic fallback: fast additive container scoring
4. Body fallback when nothing qualifies

The selected region is sanitized on a deep copy (ads, social widgets,
paywalls, related-content boundaries, hidden and UI elements removed,
attributes allow-listed) and paired with a title and an excerpt.
"""

from .blocks import BlockEnumerator
from .engine import ContentExtractor, TidyExtractor, extract
from .locator import CascadeLocator, HeuristicLocator, ScoringLocator, SelectorLocator, build_locator
from .metrics import MetricsCalculator
from .models import ElementMetrics, ExtractionResult, ScoredCandidate
from .protocols import ContentLocator, Extractor
from .sanitizer import Sanitizer, resolve_urls
from .scoring import ScoringEngine
from .selector import ContentSelector
from .title import TitleExtractor

__all__ = [
    "BlockEnumerator",
    "CascadeLocator",
    "ContentExtractor",
    "ContentLocator",
    "ContentSelector",
    "ElementMetrics",
    "ExtractionResult",
    "Extractor",
    "HeuristicLocator",
    "MetricsCalculator",
    "Sanitizer",
    "ScoredCandidate",
    "ScoringEngine",
    "ScoringLocator",
    "SelectorLocator",
    "TidyExtractor",
    "TitleExtractor",
    "build_locator",
    "extract",
    "resolve_urls",
]
