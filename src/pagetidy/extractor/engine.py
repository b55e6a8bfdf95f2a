"""
Content extraction engine.

``ContentExtractor`` wires the locator cascade, the sanitizer and the
title/excerpt heuristics together. It is stateless between calls: every
component holds only immutable configuration, and sanitization always runs
on deep copies, so the caller's tree is never mutated and concurrent calls
on different documents never interfere.
"""

from __future__ import annotations

import asyncio
import copy
from typing import List, Optional, Union

import structlog
from bs4 import Tag

from ..config import ExtractionConfig
from ..dom.layout import LayoutProvider, StaticLayout
from ..dom.parser import parse_html
from ..exceptions import ParseFailure
from ..observability import extraction_context
from .locator import CascadeLocator, build_locator
from .metrics import MetricsCalculator
from .models import ExtractionResult
from .sanitizer import Sanitizer, resolve_urls
from .scoring import ScoringEngine
from .selector import ContentSelector
from .title import TitleExtractor

logger = structlog.get_logger(__name__)

Document = Union[str, bytes, Tag]


class ContentExtractor:
    """
    Extracts the main readable content of an HTML document.

    Features:
    - Selector shortcut for explicitly marked-up articles
    - Multi-metric block scoring with greedy, decaying selection
    - Lightweight additive fallback scorer
    - Sanitization of an owned copy with attribute allow-listing
    - Title and excerpt heuristics
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        layout: Optional[LayoutProvider] = None,
    ) -> None:
        """
        Initialize the extractor.

        Args:
            config: Extraction configuration; defaults are used when omitted
            layout: Source of style and geometry facts; defaults to StaticLayout
        """
        self.config = config or ExtractionConfig()
        self.layout = layout or StaticLayout(self.config.patterns.compiled()["print_hidden"])

        self.calculator = MetricsCalculator(self.config.patterns, self.layout)
        self.scoring = ScoringEngine(self.calculator, self.config.weights)
        self.selector = ContentSelector(self.config.selection)
        self.locator: CascadeLocator = build_locator(
            self.config.locator, self.calculator, self.scoring, self.selector, self.layout
        )
        self.sanitizer = Sanitizer(self.config.sanitizer, self.config.patterns, self.layout)
        self.titles = TitleExtractor(self.config.excerpt)

    @classmethod
    def from_settings(cls, layout: Optional[LayoutProvider] = None) -> ContentExtractor:
        """Build an extractor from the lazily loaded global settings."""
        from ..config import settings

        return cls(settings.extraction, layout)

    def extract(self, document: Document, *, url: Optional[str] = None) -> Optional[ExtractionResult]:
        """
        Extract content, title and excerpt.

        Args:
            document: Raw HTML, or an already parsed tree (left untouched)
            url: Optional document URL used to resolve relative links

        Returns:
            ExtractionResult, or None when the document cannot be parsed
        """
        with extraction_context(url=url):
            try:
                root = self._parse(document)
            except ParseFailure as e:
                logger.warning("Could not parse HTML document", error=str(e))
                return None

            strategy, regions = self.locator.locate_with_strategy(root)
            fragments = self.clean(regions, url=url)
            content = "".join(str(fragment) for fragment in fragments)

            result = ExtractionResult(
                content=content,
                title=self.titles.title(root),
                excerpt=self.titles.excerpt(fragments),
            )
            logger.info(
                "Extraction completed",
                strategy=strategy,
                regions=len(regions),
                content_length=len(content),
                has_title=result.title is not None,
            )
            return result

    def clean(self, regions: List[Tag], *, url: Optional[str] = None) -> List[Tag]:
        """Sanitize deep copies of ``regions``; the originals are not touched."""
        fragments = []
        for region in regions:
            fragment = self.sanitizer.sanitize(copy.copy(region))
            if url:
                resolve_urls(fragment, url)
            fragments.append(fragment)
        return fragments

    def _parse(self, document: Document) -> Tag:
        if isinstance(document, Tag):
            return document
        return parse_html(document, self.config.parser.parser)


class TidyExtractor:
    """Async adapter that runs ContentExtractor in a worker thread."""

    name = "tidy"

    def __init__(self, engine: Optional[ContentExtractor] = None) -> None:
        self.engine = engine or ContentExtractor()

    async def extract(self, html: Union[str, bytes], *, url: Optional[str] = None) -> Optional[ExtractionResult]:
        """Extract content using the tidy engine.

        Args:
            html: HTML content to extract from
            url: Optional URL for context

        Returns:
            ExtractionResult, or None on failure
        """
        if not html or not html.strip():
            logger.warning("Empty HTML, nothing to extract", url=url)
            return None

        try:
            return await asyncio.to_thread(self.engine.extract, html, url=url)
        except Exception as e:
            logger.warning("Tidy extraction failed", url=url, error=str(e), error_type=type(e).__name__)
            return None


def extract(
    document: Document,
    *,
    url: Optional[str] = None,
    config: Optional[ExtractionConfig] = None,
) -> Optional[ExtractionResult]:
    """Convenience wrapper: one-off extraction with a fresh ContentExtractor."""
    return ContentExtractor(config).extract(document, url=url)
