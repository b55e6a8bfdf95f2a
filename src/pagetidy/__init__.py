"""
PageTidy - main-content extraction for noisy HTML.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config, ExtractionConfig
from .exceptions import ExtractionError, LayoutUnavailable, NoCandidateFound, ParseFailure
from .extractor import ContentExtractor, ExtractionResult, TidyExtractor, extract

__all__ = [
    "__version__",
    "Config",
    "ContentExtractor",
    "ExtractionConfig",
    "ExtractionError",
    "ExtractionResult",
    "LayoutUnavailable",
    "NoCandidateFound",
    "ParseFailure",
    "TidyExtractor",
    "extract",
]
