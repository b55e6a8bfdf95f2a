"""Configuration models and the lazily loaded global settings."""

from .config import (
    Config,
    ExcerptSettings,
    ExtractionConfig,
    LazyConfig,
    LocatorSettings,
    MonitoringConfig,
    ParserSettings,
    PatternTables,
    SanitizerSettings,
    ScoringWeights,
    SelectionSettings,
    find_config_file,
    settings,
)

__all__ = [
    "Config",
    "ExcerptSettings",
    "ExtractionConfig",
    "LazyConfig",
    "LocatorSettings",
    "MonitoringConfig",
    "ParserSettings",
    "PatternTables",
    "SanitizerSettings",
    "ScoringWeights",
    "SelectionSettings",
    "find_config_file",
    "settings",
]
