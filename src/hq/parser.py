"""HTML fragment parsing.

html5lib does the tokenizing and tree construction (including the WHATWG error
recovery rules); this module converts the ElementTree it builds into hq nodes.
"""

from __future__ import annotations

import logging
import re
from typing import Any
from xml.etree import ElementTree

import html5lib

from .constants import ATTRIBUTE_PREFIXES, FRAGMENT_CONTAINER, NAMESPACES, SYNTHETIC_ROOT
from .node import CommentNode, ElementNode, SimpleDomNode, TextNode

logger = logging.getLogger(__name__)

_COMMENT_TAG = ElementTree.Comment("").tag
_QUALIFIED_NAME = re.compile(r"{([^}]*)}(.*)")

_TREE_BUILDER = html5lib.getTreeBuilder("etree", ElementTree)


class HTMLFragment:
    """A parsed HTML fragment.

    `root` is a `#document` node whose only child is the synthetic `html`
    element wrapping the fragment's top-level nodes.
    """

    __slots__ = ("errors", "root")

    errors: list[tuple[Any, str, dict[str, Any]]]
    root: SimpleDomNode

    def __init__(self, html: str | bytes | None) -> None:
        html_str: str
        if isinstance(html, (bytes, bytearray)):
            html_str = bytes(html).decode("utf-8", errors="replace")
        elif html is not None:
            html_str = str(html)
        else:
            html_str = ""

        parser = html5lib.HTMLParser(tree=_TREE_BUILDER, namespaceHTMLElements=False)
        fragment = parser.parseFragment(html_str, container=FRAGMENT_CONTAINER)
        self.errors = list(parser.errors)

        self.root = SimpleDomNode("#document")
        wrapper = ElementNode(SYNTHETIC_ROOT, synthetic=True)
        self.root.append_child(wrapper)
        _convert_children(fragment, wrapper)

        if self.errors:
            logger.debug("Recovered from %d parse error(s)", len(self.errors))
        logger.debug("Parsed fragment with %d top-level node(s)", len(wrapper.children))

    @property
    def wrapper(self) -> ElementNode:
        """The synthetic element holding the fragment's top-level nodes."""
        assert self.root.children is not None
        wrapper: ElementNode = self.root.children[0]
        return wrapper


def parse_fragment(html: str | bytes | None) -> SimpleDomNode:
    """Parse HTML text as a fragment and return the `#document` root.

    Parsing never fails: malformed markup is repaired by the HTML5 recovery
    rules.
    """
    return HTMLFragment(html).root


def _split_name(qualified: str) -> tuple[str | None, str]:
    match = _QUALIFIED_NAME.match(qualified)
    if match:
        return match.group(1), match.group(2)
    return None, qualified


def _convert_attrs(attrib: dict[str, str]) -> dict[str, str]:
    attrs: dict[str, str] = {}
    for key, value in attrib.items():
        uri, local = _split_name(key)
        prefix = ATTRIBUTE_PREFIXES.get(uri) if uri else None
        if prefix and prefix != local:
            attrs[f"{prefix}:{local}"] = value
        else:
            attrs[local] = value
    return attrs


def _convert_element(element: ElementTree.Element) -> ElementNode | CommentNode:
    if element.tag == _COMMENT_TAG:
        return CommentNode(element.text or "")

    uri, local = _split_name(element.tag)
    namespace = NAMESPACES.get(uri, uri) if uri else "html"
    node = ElementNode(local, _convert_attrs(dict(element.attrib)), namespace)
    _convert_children(element, node)
    return node


def _convert_children(element: ElementTree.Element, parent: ElementNode) -> None:
    # ElementTree keeps text as `text` (before the first child) and `tail`
    # (after each child); hq keeps it as sibling TextNodes.
    if element.text:
        parent.append_child(TextNode(element.text))
    for child in element:
        parent.append_child(_convert_element(child))
        if child.tail:
            parent.append_child(TextNode(child.tail))
