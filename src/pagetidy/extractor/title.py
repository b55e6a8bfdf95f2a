"""
Title and excerpt heuristics.
"""

from __future__ import annotations

from typing import Optional, Sequence

from bs4 import Tag

from ..config import ExcerptSettings
from ..dom.nodes import collapse_whitespace


class TitleExtractor:
    """Title from the source document, excerpt from the cleaned content."""

    def __init__(self, settings: Optional[ExcerptSettings] = None) -> None:
        self.settings = settings or ExcerptSettings()

    def title(self, document: Tag) -> Optional[str]:
        """OpenGraph title, else the first ``<h1>``, else ``<title>`` up to the first ``|``."""
        meta = document.find("meta", attrs={"property": "og:title"})
        if isinstance(meta, Tag):
            content = collapse_whitespace(str(meta.get("content") or ""))
            if content:
                return content

        for heading in document.find_all("h1"):
            text = collapse_whitespace(heading.get_text())
            if text:
                return text

        title = document.find("title")
        if isinstance(title, Tag):
            text = collapse_whitespace(title.get_text().split("|", 1)[0])
            if text:
                return text
        return None

    def excerpt(self, fragments: Sequence[Tag]) -> Optional[str]:
        text = self._first_paragraph(fragments)
        if not text:
            text = collapse_whitespace(" ".join(fragment.get_text(" ") for fragment in fragments))
        if not text:
            return None

        limit = self.settings.max_length
        if len(text) > limit:
            ellipsis = self.settings.ellipsis
            return text[: limit - len(ellipsis)] + ellipsis
        return text

    def _first_paragraph(self, fragments: Sequence[Tag]) -> str:
        for fragment in fragments:
            paragraphs = ([fragment] if fragment.name == "p" else []) + fragment.find_all("p")
            for paragraph in paragraphs:
                text = collapse_whitespace(paragraph.get_text())
                if text:
                    return text
        return ""
