"""Element and namespace tables shared by the parser, serializer and renderer."""

from __future__ import annotations

# Elements that never have children or an end tag.
VOID_ELEMENTS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Text inside these elements is serialized without entity escaping.
RAW_TEXT_ELEMENTS: frozenset[str] = frozenset(
    {
        "iframe",
        "noembed",
        "noframes",
        "noscript",
        "plaintext",
        "script",
        "style",
        "xmp",
    }
)

WHITESPACE: str = " \t\n\r\f"

# ElementTree namespace URI -> short namespace name used on ElementNode.
NAMESPACES: dict[str, str] = {
    "http://www.w3.org/1999/xhtml": "html",
    "http://www.w3.org/2000/svg": "svg",
    "http://www.w3.org/1998/Math/MathML": "math",
}

# Namespaced (foreign) attribute URI -> serialization prefix.
ATTRIBUTE_PREFIXES: dict[str, str] = {
    "http://www.w3.org/1999/xlink": "xlink",
    "http://www.w3.org/XML/1998/namespace": "xml",
    "http://www.w3.org/2000/xmlns/": "xmlns",
}

# Container element used as the fragment parsing context.
FRAGMENT_CONTAINER: str = "div"

# Local name of the implicit element that wraps a parsed fragment.
SYNTHETIC_ROOT: str = "html"
