"""The selection-and-render pipeline."""

from __future__ import annotations

import logging
from enum import Enum
from itertools import islice
from typing import TYPE_CHECKING, Any

from .extract import ContentMode, extract
from .parser import parse_fragment
from .render import render
from .selector import compile_selector

if TYPE_CHECKING:
    from .node import ElementNode
    from .selector import Selector

logger = logging.getLogger(__name__)


class SelectMode(Enum):
    """How many matches are visited."""

    ALL = "all"
    FIRST = "first"


class QueryOptions:
    __slots__ = ("content_mode", "include_synthetic_root", "indented", "select_mode")

    select_mode: SelectMode
    content_mode: ContentMode
    indented: bool
    include_synthetic_root: bool

    def __init__(
        self,
        select_mode: SelectMode = SelectMode.ALL,
        content_mode: ContentMode = ContentMode.OUTER,
        indented: bool = False,
        include_synthetic_root: bool = False,
    ) -> None:
        self.select_mode = select_mode
        self.content_mode = content_mode
        self.indented = indented
        self.include_synthetic_root = include_synthetic_root

    def __repr__(self) -> str:
        return (
            f"QueryOptions(select_mode={self.select_mode}, content_mode={self.content_mode}, "
            f"indented={self.indented}, include_synthetic_root={self.include_synthetic_root})"
        )


def select(root: Any, selector: Selector, mode: SelectMode = SelectMode.ALL) -> list[ElementNode]:
    """Collect matches under `root` in document order.

    FIRST stops the traversal at the first match instead of truncating a full
    result list.
    """
    matches = selector.select(root)
    if mode is SelectMode.FIRST:
        return list(islice(matches, 1))
    return list(matches)


def query_html(html: str, selector_text: str, options: QueryOptions | None = None) -> list[str]:
    """Run the whole pipeline and return one rendered string per match.

    Raises:
        SelectorError: If the selector is empty or invalid. Nothing is
            parsed or rendered in that case.
    """
    options = options or QueryOptions()
    selector = compile_selector(selector_text)
    root = parse_fragment(html)

    nodes = select(root, selector, options.select_mode)
    logger.debug("Selector %r matched %d node(s) (%s)", selector_text, len(nodes), options.select_mode.value)

    return [
        render(
            extract(node, options.content_mode),
            indented=options.indented,
            include_synthetic_root=options.include_synthetic_root,
        )
        for node in nodes
    ]
