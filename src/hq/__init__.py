from .errors import HQError, InputError, SelectorError
from .extract import ContentMode, extract
from .node import CommentNode, ElementNode, SimpleDomNode, TextNode
from .parser import HTMLFragment, parse_fragment
from .query import QueryOptions, SelectMode, query_html, select
from .render import render, render_node
from .selector import Selector, compile_selector

__all__ = [
    "CommentNode",
    "ContentMode",
    "ElementNode",
    "HQError",
    "HTMLFragment",
    "InputError",
    "QueryOptions",
    "SelectMode",
    "Selector",
    "SelectorError",
    "SimpleDomNode",
    "TextNode",
    "compile_selector",
    "extract",
    "parse_fragment",
    "query_html",
    "render",
    "render_node",
    "select",
]
