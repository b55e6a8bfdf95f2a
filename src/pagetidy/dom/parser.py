"""
HTML parsing boundary: raw markup in, BeautifulSoup tree out.
"""

from __future__ import annotations

from typing import Union

import structlog
from bs4 import BeautifulSoup, Tag

from ..exceptions import ParseFailure

logger = structlog.get_logger(__name__)


def parse_html(markup: Union[str, bytes], parser: str = "html.parser") -> BeautifulSoup:
    """Parse ``markup`` into a document tree.

    Raises:
        ParseFailure: if the input is not markup, is blank, or the parser fails.
    """
    if not isinstance(markup, (str, bytes)):
        raise ParseFailure(f"Expected str or bytes, got {type(markup).__name__}")
    if not markup.strip():
        raise ParseFailure("Empty HTML document")

    try:
        soup = BeautifulSoup(markup, parser)
    except Exception as e:
        raise ParseFailure(f"{parser} could not parse document: {e}") from e

    if soup.find(True) is None:
        # Bare text is treated as the content of an implied <body>.
        body = soup.new_tag("body")
        for child in list(soup.contents):
            body.append(child.extract())
        soup.append(body)
        logger.debug("Wrapped element-less document in body", length=len(markup))

    logger.debug("Parsed HTML document", parser=parser, length=len(markup))
    return soup


def document_body(document: Tag) -> Tag:
    """The ``<body>`` of ``document``, or the document itself when there is none."""
    body = document.find("body") if document.name != "body" else document
    return body if isinstance(body, Tag) else document
