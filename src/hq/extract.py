"""Content projections of a matched element."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from .serialize import to_html

if TYPE_CHECKING:
    from .node import ElementNode


class ContentMode(Enum):
    """Which part of a matched element is printed."""

    OUTER = "outer"  # the element's own tags and its subtree
    INNER = "inner"  # the subtree only
    TEXT = "text"  # concatenated text data


def extract(node: ElementNode, mode: ContentMode) -> str:
    """Project a matched element to a string.

    Never fails; void elements yield "" for INNER and TEXT.
    """
    if mode is ContentMode.OUTER:
        return to_html(node)
    if mode is ContentMode.INNER:
        return node.inner_html()
    # Adjacent text fragments are joined with nothing in between.
    return node.to_text(separator="", strip=False)
