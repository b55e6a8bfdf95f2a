"""
Configuration management for PageTidy using Pydantic.

Every tunable of the extraction engine (pattern tables, metric weights,
selection thresholds, sanitizer allow-lists) lives here as data so callers
can swap pattern sets per site or locale without touching the algorithms.
"""

from __future__ import annotations

import logging
import re
import threading
from pathlib import Path
from typing import Any, ClassVar, List, Literal, Optional, cast

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

LOCATOR_NAMES = ("selector", "scoring", "heuristic")

LOCATOR_PROFILES = {
    "thorough": ["selector", "scoring", "heuristic"],
    "fast": ["selector", "heuristic"],
}

# --- Nested Configuration Models ---


class PatternTables(BaseModel):
    """Regular expressions used to classify elements.

    Class/id patterns are matched case-insensitively against the element's
    class names and id joined by spaces. Text patterns are matched against
    whitespace-collapsed text.
    """

    positive: str = Field(
        default=r"article|content|main|post|body|text|blog|story",
        description="Class/id fragments that suggest primary content.",
    )
    unlikely: str = Field(
        default=(
            r"comment|meta|footer|footnote|(?<![a-z])nav|sidebar|banner|popup|menu|sponsor|shoutbox|widget"
            r"|(?<![a-z0-9])ads?(?![a-z0-9])"
        ),
        description="Class/id fragments that suggest boilerplate.",
    )
    unwanted: str = Field(
        default=(
            r"comments|share|social|follow|related|(?<![a-z0-9])author|byline|profile|avatar|clap"
            r"|(?<![a-z0-9])vote|bookmark|(?<![a-z0-9])response|reactions|tooltip|popup|modal"
            r"|(?<![a-z0-9])ads?(?![a-z0-9])|advertisement|promotion|subscribe|newsletter|toolbar"
            r"|timestamp|read-time|(?<![a-z0-9])(?:date|time|views|stats)(?![a-z0-9])"
        ),
        description="Class/id fragments removed outright by the sanitizer.",
    )
    chrome: str = Field(
        default=(
            r"(?<![a-z0-9])(?:icons?|btn|button|toolbar|dropdown|skip-link|sr-only|visually-hidden)(?![a-z0-9])"
        ),
        description="Class/id fragments of interface chrome.",
    )
    boundary: str = Field(
        default=(
            r"related|more-(?:stories|articles|from|news)|trending|recommend|also-like|read-next"
            r"|most-(?:read|popular)|outbrain|taboola"
        ),
        description="Class/id fragments of 'more content' sections that end the article.",
    )
    paywall_text: str = Field(
        default=(
            r"sign (?:up|in) to (?:continue|read)|subscribe to (?:continue|read|unlock)|continue reading"
            r"|create (?:a|an|your) (?:free )?account|already (?:a subscriber|have an account)"
            r"|log ?in to (?:continue|read)|members? only|for (?:paying )?subscribers only"
            r"|unlock (?:this|the full) (?:article|story)"
        ),
        description="Phrases that mark a subscription or login wall.",
    )
    auth_control: str = Field(
        default=(
            r"(?<![a-z])(?:sign ?(?:up|in)|log ?in|subscribe|register|create (?:an? )?account"
            r"|o?auth(?:entication|orize)?|sso)(?![a-z])"
            r"|continue with (?:google|apple|facebook|email|twitter|microsoft)"
        ),
        description="Text or class/id of authentication buttons and links.",
    )
    print_hidden: str = Field(
        default=r"(?<![a-z0-9])(?:noprint|no-print|d-print-none|hidden-print|print-hidden|print:hidden)(?![a-z0-9])",
        description="Class names that hide an element under print media.",
    )

    @field_validator("*")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Ensure every table entry is a valid regular expression."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"invalid pattern {v!r}: {e}") from e
        return v

    def compiled(self) -> dict[str, re.Pattern[str]]:
        """Compile all tables case-insensitively."""
        return {name: re.compile(pattern, re.IGNORECASE) for name, pattern in self.model_dump().items()}


class ScoringWeights(BaseModel):
    """Weights of the six element metrics in the combined score."""

    text_density: float = Field(default=1.5, ge=0)
    visual_density: float = Field(default=1.0, ge=0)
    link_density: float = Field(default=1.0, ge=0, description="Applied to (1 - link density).")
    natural_language: float = Field(default=2.0, ge=0)
    sibling_similarity: float = Field(default=0.5, ge=0)
    content_momentum: float = Field(default=1.0, ge=0)

    @property
    def total(self) -> float:
        return (
            self.text_density
            + self.visual_density
            + self.link_density
            + self.natural_language
            + self.sibling_similarity
            + self.content_momentum
        )


class SelectionSettings(BaseModel):
    """Greedy content-block selection thresholds."""

    score_floor: float = Field(default=0.5, ge=0.0, le=1.0, description="Absolute floor after the first block.")
    decay_factor: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Each accepted block must beat the previous accepted score times this factor.",
    )


class LocatorSettings(BaseModel):
    """Main-content locator configuration."""

    profile: Literal["thorough", "fast"] = Field(
        default="thorough", description="Named strategy order used when cascade_order is unset."
    )
    cascade_order: Optional[List[str]] = Field(default=None, description="Explicit strategy order.")
    content_selectors: List[str] = Field(
        default=[
            'main[role="main"]',
            "main",
            '[role="article"]',
            "article",
            '[itemprop="articleBody"]',
            ".post-content",
            ".article-content",
            "#article-content",
            ".content-article",
        ],
        description="CSS selectors with explicit 'this is the article' semantics, in priority order.",
    )
    block_tags: List[str] = Field(
        default=[
            "address", "article", "aside", "blockquote", "dd", "div", "dl", "dt", "figure", "footer", "form",
            "h1", "h2", "h3", "h4", "h5", "h6", "header", "li", "main", "nav", "ol", "p", "pre", "section",
            "table", "ul",
        ],
        description="Tags considered block-level candidates by the scoring strategy.",
    )
    heuristic_tags: List[str] = Field(
        default=["div", "section", "article", "main"],
        description="Tags scored by the lightweight heuristic strategy.",
    )

    @field_validator("cascade_order")
    @classmethod
    def validate_cascade_order(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        """Ensure an explicit cascade names known strategies only."""
        if v is None:
            return v
        if not v:
            raise ValueError("cascade_order must contain at least one locator")
        for name in v:
            if name not in LOCATOR_NAMES:
                raise ValueError(f"Invalid locator '{name}'. Available locators: {list(LOCATOR_NAMES)}")
        return v

    def resolved_order(self) -> List[str]:
        return list(self.cascade_order) if self.cascade_order else list(LOCATOR_PROFILES[self.profile])


class SanitizerSettings(BaseModel):
    """Cleanup passes applied to the selected region."""

    allowed_attributes: List[str] = Field(
        default=[
            "src", "srcset", "alt", "href", "title", "lang", "colspan", "rowspan", "rel", "cite",
            "content", "property", "name", "datetime", "type", "value",
        ],
        description="Attributes kept on every element; everything else is dropped.",
    )
    unwanted_tags: List[str] = Field(
        default=["script", "style", "noscript", "template", "link", "object", "embed", "speechify-ignore"],
    )
    unwanted_roles: List[str] = Field(default=["navigation", "complementary", "banner"])
    chrome_tags: List[str] = Field(default=["button", "input", "select", "textarea"])
    chrome_roles: List[str] = Field(default=["button", "toolbar", "menu", "menubar"])
    video_hosts: List[str] = Field(
        default=["youtube.com", "youtube-nocookie.com", "youtu.be", "vimeo.com"],
        description="iframe hosts kept by the sanitizer (subdomains included).",
    )
    empty_tags: List[str] = Field(default=["p", "div", "span"])
    media_tags: List[str] = Field(
        default=["img", "picture", "video", "audio", "iframe", "svg", "canvas", "math", "br", "hr", "table"],
        description="Descendants that keep an otherwise text-less element alive.",
    )
    boundary_min_links: int = Field(default=3, ge=0)
    boundary_link_density: float = Field(default=0.4, ge=0.0, le=1.0)
    repeated_min_children: int = Field(default=3, ge=2)
    repeated_tag_share: float = Field(default=0.7, ge=0.0, le=1.0)
    repeated_length_tolerance: float = Field(
        default=0.2, ge=0.0, description="Max relative deviation of child text length from the mean."
    )
    prose_tags: List[str] = Field(
        default=["p", "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "pre", "figure", "table", "br"],
        description="Children that never form a repeated teaser signature.",
    )


class ExcerptSettings(BaseModel):
    max_length: int = Field(default=160, ge=4)
    ellipsis: str = "..."


class ParserSettings(BaseModel):
    parser: str = Field(default="html.parser", description="BeautifulSoup tree builder (html.parser, lxml, ...).")


class ExtractionConfig(BaseModel):
    """Everything the extraction engine needs, injected as one object."""

    patterns: PatternTables = Field(default_factory=PatternTables)
    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    selection: SelectionSettings = Field(default_factory=SelectionSettings)
    locator: LocatorSettings = Field(default_factory=LocatorSettings)
    sanitizer: SanitizerSettings = Field(default_factory=SanitizerSettings)
    excerpt: ExcerptSettings = Field(default_factory=ExcerptSettings)
    parser: ParserSettings = Field(default_factory=ParserSettings)


class MonitoringConfig(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(default=None, description="Path to log file. If None, logs to console.")

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "PageTidy"
    version: str = "0.1.0"
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="PAGETIDY_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for path in (current_dir / "pagetidy.yaml", current_dir / "pagetidy.yml"):
        if path.exists():
            return path
    return None


# --- Lazy Configuration Loader ---


class LazyConfig:
    """
    Process-wide PageTidy settings, resolved on first attribute access.

    ``ContentExtractor.from_settings()`` reads ``settings.extraction`` through
    this proxy. The first access looks for ``pagetidy.yaml`` (or
    ``pagetidy.yml``) in the working directory, applies ``PAGETIDY_*``
    environment overrides, and keeps the result for later callers. A broken
    file is logged and replaced by defaults so that importing the package
    never fails on configuration.
    """

    _config: ClassVar[Config | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __getattr__(self, name: str) -> Any:
        cls = self.__class__
        if cls._config is None:
            with cls._lock:
                if cls._config is None:
                    cls._config = self._resolve()
        return getattr(cls._config, name)

    @classmethod
    def reset(cls) -> None:
        """Forget the resolved settings; the next access resolves them again."""
        with cls._lock:
            cls._config = None

    def _resolve(self) -> Config:
        config_path = find_config_file()
        if config_path is None:
            log.info("No pagetidy.yaml found in %s, using default extraction settings", Path.cwd())
        else:
            try:
                log.info("Loading PageTidy settings from %s", config_path)
                return Config.from_yaml(config_path)
            except (ValidationError, FileNotFoundError, yaml.YAMLError) as e:
                log.error(
                    "Invalid PageTidy settings in '%s', using defaults: %s",
                    config_path,
                    e,
                    exc_info=log.getEffectiveLevel() <= logging.DEBUG,
                )

        try:
            return Config()
        except ValidationError as e:
            # Only reachable through bad PAGETIDY_* environment values.
            log.critical("PageTidy environment settings are invalid: %s", e)
            raise RuntimeError(f"Invalid PAGETIDY_* environment settings: {e}") from e


# --- Global Settings Instance ---
settings: "Config" = cast("Config", LazyConfig())
