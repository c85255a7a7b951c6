"""HTML serialization utilities for hq DOM nodes.

This is the markup that the OUTER and INNER content modes produce: compact,
with no whitespace added between tokens, so that re-parsing it yields the
same tree.
"""

from __future__ import annotations

# ruff: noqa: PERF401

from typing import Any

from hq.constants import RAW_TEXT_ELEMENTS, VOID_ELEMENTS


def _escape_text(text: str | None) -> str:
    if not text:
        return ""
    return str(text).replace("&", "&amp;").replace("\xa0", "&nbsp;").replace("<", "&lt;").replace(">", "&gt;")


def _escape_attr_value(value: str | None) -> str:
    if value is None:
        return ""
    value = str(value)
    # '<' and '>' are legal inside a quoted attribute value.
    return value.replace("&", "&amp;").replace("\xa0", "&nbsp;").replace('"', "&quot;")


def serialize_start_tag(name: str, attrs: dict[str, str] | None) -> str:
    attrs = attrs or {}
    parts: list[str] = ["<", name]
    for key, value in attrs.items():
        parts.extend([" ", key, '="', _escape_attr_value(value), '"'])
    parts.append(">")
    return "".join(parts)


def serialize_end_tag(name: str) -> str:
    return f"</{name}>"


def to_html(node: Any) -> str:
    """Convert node to HTML string."""
    parts: list[str] = []
    _node_to_html(node, parts)
    return "".join(parts)


def _node_to_html(node: Any, parts: list[str]) -> None:
    """Helper to append the HTML for a node to `parts`."""
    name: str = node.name

    # Text node
    if name == "#text":
        parent = node.parent
        if parent is not None and parent.name in RAW_TEXT_ELEMENTS:
            parts.append(node.data or "")
        else:
            parts.append(_escape_text(node.data))
        return

    # Comment node
    if name == "#comment":
        parts.append(f"<!--{node.data or ''}-->")
        return

    # Document - just render children
    if name == "#document":
        for child in node.children or []:
            _node_to_html(child, parts)
        return

    # Element node
    parts.append(serialize_start_tag(name, node.attrs))

    # Void elements
    if name in VOID_ELEMENTS:
        return

    for child in node.children:
        _node_to_html(child, parts)
    parts.append(serialize_end_tag(name))
