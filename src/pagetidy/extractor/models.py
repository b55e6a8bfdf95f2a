"""
Data models for extraction passes and results.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from bs4 import Tag


@dataclass(slots=True, frozen=True)
class ElementMetrics:
    """Independent content signals of one candidate element."""

    node: Tag
    text_density: float
    visual_density: float
    link_density: float
    natural_language_score: float
    sibling_similarity: float
    content_momentum: float

    @classmethod
    def empty(cls, node: Tag) -> ElementMetrics:
        return cls(
            node=node,
            text_density=0.0,
            visual_density=0.0,
            link_density=0.0,
            natural_language_score=0.0,
            sibling_similarity=0.0,
            content_momentum=0.0,
        )


@dataclass(slots=True, frozen=True)
class ScoredCandidate:
    """A candidate element, its combined score and its document-order index."""

    node: Tag
    score: float
    position: int


@dataclass(slots=True, frozen=True)
class ExtractionResult:
    """Result of HTML content extraction."""

    content: str
    title: Optional[str]
    excerpt: Optional[str]
