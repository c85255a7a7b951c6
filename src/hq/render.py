"""Render markup fragments for output.

Every projected string goes back through the fragment parser before it is
printed, so OUTER and INNER markup is normalized the same way as any other
input, and a plain TEXT string (which parses to a single text node) comes out
unchanged.

Two layouts are supported:

- compact: one line per fragment, no whitespace added between tokens, text
  newlines collapsed to spaces and surrounding whitespace stripped;
- indented: one line per tag, text or comment, each prefixed with two spaces
  per tree depth (the document's children sit at depth 1).

Attribute values and text are printed as parsed, without re-escaping.
"""

from __future__ import annotations

import logging
from typing import Any

from .context import RenderContext
from .parser import parse_fragment

logger = logging.getLogger(__name__)


def render(fragment: str, indented: bool = False, include_synthetic_root: bool = False) -> str:
    """Re-parse `fragment` and render it; the result always ends with a newline
    (unless indented mode has nothing to print)."""
    return render_node(parse_fragment(fragment), indented=indented, include_synthetic_root=include_synthetic_root)


def render_node(node: Any, indented: bool = False, include_synthetic_root: bool = False) -> str:
    """Render an already parsed tree (usually a `#document` from `parse_fragment`)."""
    ctx = RenderContext(indented=indented, include_synthetic_root=include_synthetic_root)
    _render(node, ctx, 0)
    logger.debug("Rendered %d %s", len(ctx.lines), "line(s)" if indented else "token(s)")
    return ctx.output()


def _start_tag(node: Any) -> str:
    parts = ["<", node.name]
    for name, value in node.attrs.items():
        parts.append(f' {name}="{value}"')
    parts.append(">")
    return "".join(parts)


def _render(node: Any, ctx: RenderContext, depth: int) -> None:
    name: str = node.name

    if name == "#document":
        for child in node.children:
            _render(child, ctx, depth + 1)
        return

    if name == "#text":
        text: str = node.data
        if not text.strip():
            return
        if ctx.indented:
            ctx.emit(depth, text)
        else:
            ctx.emit(depth, text.replace("\n", " ").strip())
        return

    if name == "#comment":
        ctx.emit(depth, f"<!-- {node.data} -->")
        return

    show_tags = ctx.include_synthetic_root or not node.synthetic
    if show_tags:
        ctx.emit(depth, _start_tag(node))

    for child in node.children:
        _render(child, ctx, depth + 1)

    if show_tags:
        ctx.emit(depth, f"</{name}>")
