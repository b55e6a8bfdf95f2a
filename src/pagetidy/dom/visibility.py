"""
Hidden-element detection shared by block enumeration and sanitization.
"""

from __future__ import annotations

from typing import Mapping, Optional

import structlog
from bs4 import Tag

from .layout import Box, LayoutProvider, parse_length

logger = structlog.get_logger(__name__)

# Offsets at or below this push an element off-screen.
OFFSCREEN_OFFSET = -999.0


def is_hidden(node: Tag, layout: LayoutProvider) -> bool:
    """Return True when ``node`` is not visible to a reader.

    Layout failures count as visible so one bad node never aborts a pass.
    """
    if node.has_attr("hidden"):
        return True
    if str(node.get("aria-hidden", "")).strip().lower() == "true":
        return True

    try:
        style = layout.style(node)
        box = layout.bounding_box(node)
    except Exception as e:
        logger.debug("Layout query failed, treating element as visible", tag=node.name, error=str(e))
        return False

    return _hidden_by_style(style, box)


def is_print_hidden(node: Tag, layout: LayoutProvider) -> bool:
    try:
        return layout.is_print_hidden(node)
    except Exception as e:
        logger.debug("Print layout query failed", tag=node.name, error=str(e))
        return False


def _hidden_by_style(style: Mapping[str, str], box: Optional[Box]) -> bool:
    if style.get("display") == "none":
        return True
    if style.get("visibility") in ("hidden", "collapse"):
        return True

    opacity = style.get("opacity")
    if opacity is not None:
        try:
            if float(opacity) == 0:
                return True
        except ValueError:
            pass

    width = box.width if box is not None else parse_length(style.get("width"))
    height = box.height if box is not None else parse_length(style.get("height"))
    if width == 0 and height == 0:
        return True

    if style.get("position") in ("absolute", "fixed"):
        for side in ("left", "top"):
            offset = parse_length(style.get(side))
            if offset is not None and offset <= OFFSCREEN_OFFSET:
                return True

    if parse_length(style.get("max-height")) == 0:
        return True

    if style.get("overflow") == "hidden" and (width == 0 or height == 0):
        return True

    return False
