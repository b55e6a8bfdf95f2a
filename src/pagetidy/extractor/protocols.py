"""
Protocols for pluggable extraction strategies.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Union, runtime_checkable

from bs4 import Tag

from .models import ExtractionResult


@runtime_checkable
class ContentLocator(Protocol):
    """Strategy that finds the main-content region(s) of a document."""

    name: str

    def locate(self, root: Tag) -> Optional[List[Tag]]:
        """Return the content region(s) in document order, or None.

        Args:
            root: Document (or subtree) to search. Never mutated.
        """
        ...


@runtime_checkable
class Extractor(Protocol):
    """Pluggable HTML-to-ExtractionResult strategy."""

    name: str

    async def extract(self, html: Union[str, bytes], *, url: Optional[str] = None) -> Optional[ExtractionResult]:
        """Extract content from an HTML string.

        Args:
            html: HTML content to extract from
            url: Optional URL used to resolve relative links

        Returns:
            ExtractionResult, or None when the document cannot be parsed
        """
        ...
