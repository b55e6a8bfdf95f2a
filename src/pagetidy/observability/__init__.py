"""Structured logging setup."""

from __future__ import annotations

from .logging import configure_logging, extraction_context

__all__ = ["configure_logging", "extraction_context"]
