"""
Error taxonomy of the extraction engine.

Only ``ParseFailure`` is ever visible to callers, and even then as a logged
``None`` result from ``ContentExtractor.extract``. The other errors are
raised and recovered inside the engine.
"""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for extraction errors."""


class ParseFailure(ExtractionError):
    """The input could not be turned into a document tree."""


class NoCandidateFound(ExtractionError):
    """A locator strategy found no acceptable content region."""


class LayoutUnavailable(ExtractionError):
    """Geometry or style facts cannot be computed in this environment."""
