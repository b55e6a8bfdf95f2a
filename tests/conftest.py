"""
Shared fixtures for PageTidy tests.

Provides realistic HTML documents and ready-made extraction components.
"""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from pagetidy.config import ExtractionConfig
from pagetidy.extractor import ContentExtractor

SENTENCES = [
    "The river rose quickly after three days of steady rain in the valley.",
    "Farmers moved their animals to higher ground, and neighbours shared the work.",
    "Local officials said the bridge would stay closed until engineers inspected it.",
    "Nobody expected the water to reach the old mill; it had stood dry for decades.",
    "By Friday evening the level had dropped, leaving mud across the main road.",
    "Volunteers from nearby towns arrived with pumps, shovels and hot food.",
]


def prose(sentences: int = 5, offset: int = 0) -> str:
    """Deterministic prose of ``sentences`` sentences (about 13 words each)."""
    return " ".join(SENTENCES[(offset + i) % len(SENTENCES)] for i in range(sentences))


# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: End-to-end extraction tests")


# ============================================================================
# Document Fixtures
# ============================================================================


@pytest.fixture
def article_html() -> str:
    """An article marked up with <article class="post-content"> next to a link sidebar."""
    paragraphs = "\n".join(f"<p>{prose(5, offset=i)}</p>" for i in range(3))
    links = "\n".join(f'<a href="/section/{i}">Section {i}</a>' for i in range(5))
    return f"""
    <html>
    <head><title>River Report | Valley News</title></head>
    <body>
        <nav class="sidebar">
            {links}
        </nav>
        <article class="post-content">
            {paragraphs}
        </article>
    </body>
    </html>
    """


@pytest.fixture
def unmarked_html() -> str:
    """A page with no semantic content markup, so locating needs scoring."""
    paragraphs = "\n".join(f"<p>{prose(5, offset=i)}</p>" for i in range(3))
    items = "\n".join(f'<li><a href="/more/{i}">Item {i}</a></li>' for i in range(6))
    return f"""
    <html>
    <head><title>Unmarked</title></head>
    <body>
        <div id="page">
            <div class="story">
                {paragraphs}
            </div>
            <div class="links">
                <ul>
                    {items}
                </ul>
            </div>
        </div>
    </body>
    </html>
    """


@pytest.fixture
def soup_factory():
    """Parse an HTML snippet with the built-in parser."""

    def _parse(html: str) -> BeautifulSoup:
        return BeautifulSoup(html, "html.parser")

    return _parse


# ============================================================================
# Component Fixtures
# ============================================================================


@pytest.fixture
def extraction_config() -> ExtractionConfig:
    return ExtractionConfig()


@pytest.fixture
def extractor(extraction_config: ExtractionConfig) -> ContentExtractor:
    return ContentExtractor(extraction_config)


@pytest.fixture
def noisy_article_html() -> str:
    """A news page with explicit article markup and noise inside and around it."""
    menu = "".join(f'<a href="/topic/{i}">Topic {i}</a>' for i in range(6))
    related = "".join(f'<li><a href="/story/{i}">Other story {i}</a></li>' for i in range(5))
    return f"""
    <html>
    <head>
        <title>Flood update | Valley News</title>
        <meta property="og:title" content="Flood waters recede in the valley">
        <script>window.analytics = {{}};</script>
        <style>.ad {{ height: 250px }}</style>
    </head>
    <body>
        <header class="site-header"><nav class="main-nav">{menu}</nav></header>
        <div class="ad">Buy now and save</div>
        <article class="post-content" data-track="story" style="margin: 0">
            <h1>Flood waters recede</h1>
            <div class="byline">By Jane Doe</div>
            <span class="timestamp">2 hours ago</span>
            <p class="lead" onclick="track()">{prose(5)}</p>
            <!-- ad slot -->
            <div class="share-buttons"><button>Share</button><button>Tweet</button></div>
            <p>{prose(5, offset=1)} <a href="/river-map" target="_blank">See the map</a></p>
            <figure>
                <img src="/img/flood.jpg" alt="Flooded road" width="640" height="480">
                <figcaption>The main road on Friday.</figcaption>
            </figure>
            <img src="/pixel.gif" width="1" height="1">
            <div style="display: none">Hidden promo text</div>
            <script>track("read")</script>
            <p>{prose(5, offset=2)}</p>
            <div class="gate">
                <p>Subscribe to continue reading</p>
                <button>Sign in</button>
                <a href="/register">Create an account</a>
            </div>
            <section class="related-articles"><h2>Related</h2><ul>{related}</ul></section>
            <p></p>
        </article>
        <footer><p>Copyright Valley News</p></footer>
    </body>
    </html>
    """


@pytest.fixture
def noisy_unmarked_html() -> str:
    """A page without content markup whose story block must be found by scoring."""
    menu = "".join(f'<li><a href="/section/{i}">Section {i}</a></li>' for i in range(6))
    sidebar = "".join(f'<li><a href="/popular/{i}">Popular story {i}</a></li>' for i in range(5))
    paragraphs = "".join(f"<p>{prose(5, offset=i)}</p>" for i in range(4))
    return f"""
    <html>
    <head><title>Valley News</title></head>
    <body>
        <div id="top-menu" class="menu"><ul>{menu}</ul></div>
        <div id="container">
            <div class="story-body">
                {paragraphs}
                <div class="social-share">Share on social media</div>
                <p style="display: none">This paragraph is never shown to readers.</p>
            </div>
            <div class="sidebar">
                <div class="widget"><p>Short promo.</p></div>
                <ul>{sidebar}</ul>
            </div>
        </div>
        <div class="comments"><p>Great article!</p><p>Thanks for sharing.</p></div>
    </body>
    </html>
    """
