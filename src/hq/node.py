from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .serialize import to_html

if TYPE_CHECKING:
    from collections.abc import Iterator


def _to_text_collect(node: Any, parts: list[str], strip: bool) -> None:
    name: str = node.name

    if name == "#text":
        data: str | None = node.data
        if not data:
            return
        if strip:
            data = data.strip()
            if not data:
                return
        parts.append(data)
        return

    if node.children:
        for child in node.children:
            _to_text_collect(child, parts, strip=strip)


class SimpleDomNode:
    """A container node: the document root.

    Elements, text and comments use the subclasses below; every node exposes
    `name`, `parent` and `children` so traversal code does not need to care
    which variant it holds.
    """

    __slots__ = ("attrs", "children", "data", "name", "namespace", "parent")

    name: str
    parent: SimpleDomNode | None
    attrs: dict[str, str] | None
    children: list[Any] | None
    data: str | None
    namespace: str | None

    def __init__(self, name: str, data: str | None = None, namespace: str | None = None) -> None:
        self.name = name
        self.parent = None
        self.data = data
        self.namespace = namespace
        self.attrs = None
        self.children = []

    def append_child(self, node: Any) -> None:
        if self.children is not None:
            self.children.append(node)
            node.parent = self

    def iter_descendants(self) -> Iterator[Any]:
        """Yield every descendant in document (pre-)order, excluding self."""
        stack: list[Any] = list(reversed(self.children or []))
        while stack:
            node = stack.pop()
            yield node
            if node.children:
                stack.extend(reversed(node.children))

    def to_text(self, separator: str = "", strip: bool = False) -> str:
        """Return the concatenated text of this node's descendants.

        - `separator` controls how text nodes are joined (default: nothing).
        - `strip=True` strips each text node and drops empty segments.
        """
        parts: list[str] = []
        _to_text_collect(self, parts, strip=strip)
        if not parts:
            return ""
        return separator.join(parts)

    @property
    def is_element(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class ElementNode(SimpleDomNode):
    __slots__ = ("synthetic",)

    children: list[Any]
    attrs: dict[str, str]
    synthetic: bool

    def __init__(
        self,
        name: str,
        attrs: dict[str, str] | None = None,
        namespace: str | None = "html",
        synthetic: bool = False,
    ) -> None:
        self.name = name
        self.parent = None
        self.data = None
        self.namespace = namespace
        self.children = []
        self.attrs = attrs if attrs is not None else {}
        self.synthetic = synthetic

    @property
    def is_element(self) -> bool:
        return True

    def inner_html(self) -> str:
        """Serialize this element's children, without its own tags."""
        return "".join(to_html(child) for child in self.children)

    def __repr__(self) -> str:
        return f"<ElementNode {self.name} {self.attrs!r}>"


class TextNode:
    __slots__ = ("data", "name", "namespace", "parent")

    data: str
    name: str
    namespace: None
    parent: SimpleDomNode | None

    def __init__(self, data: str) -> None:
        self.data = data
        self.parent = None
        self.name = "#text"
        self.namespace = None

    @property
    def children(self) -> list[Any]:
        """Return empty list for TextNode (leaf node)."""
        return []

    @property
    def is_element(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"<TextNode {self.data!r}>"


class CommentNode(TextNode):
    __slots__ = ()

    def __init__(self, data: str) -> None:
        super().__init__(data)
        self.name = "#comment"

    def __repr__(self) -> str:
        return f"<CommentNode {self.data!r}>"
