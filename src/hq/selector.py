# CSS Selector implementation for hq
# Supports the common subset of CSS selectors: type, universal, class, id,
# attribute, combinators, selector lists and structural pseudo-classes.

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from .constants import WHITESPACE
from .errors import SelectorError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .node import ElementNode

logger = logging.getLogger(__name__)

__all__ = ["Selector", "SelectorError", "compile_selector", "matches", "query"]


# Token types for the CSS selector lexer
class TokenType:
    TAG: str = "TAG"  # div, span, etc.
    ID: str = "ID"  # #foo
    CLASS: str = "CLASS"  # .bar
    UNIVERSAL: str = "UNIVERSAL"  # *
    ATTR_START: str = "ATTR_START"  # [
    ATTR_END: str = "ATTR_END"  # ]
    ATTR_OP: str = "ATTR_OP"  # =, ~=, |=, ^=, $=, *=
    STRING: str = "STRING"  # "value" or 'value' or unquoted
    COMBINATOR: str = "COMBINATOR"  # >, +, ~, or whitespace (descendant)
    COMMA: str = "COMMA"  # ,
    PSEUDO: str = "PSEUDO"  # :name
    ARGUMENT: str = "ARGUMENT"  # raw text between the parentheses of :name(...)
    EOF: str = "EOF"


class Token:
    __slots__ = ("pos", "type", "value")

    type: str
    value: str | None
    pos: int

    def __init__(self, token_type: str, value: str | None = None, pos: int = 0) -> None:
        self.type = token_type
        self.value = value
        self.pos = pos

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r})"


class SelectorTokenizer:
    """Tokenizes a CSS selector string into tokens."""

    __slots__ = ("length", "pos", "selector")

    selector: str
    pos: int
    length: int

    def __init__(self, selector: str) -> None:
        self.selector = selector
        self.pos = 0
        self.length = len(selector)

    def _peek(self, offset: int = 0) -> str:
        pos = self.pos + offset
        if pos < self.length:
            return self.selector[pos]
        return ""

    def _skip_whitespace(self) -> None:
        while self.pos < self.length and self.selector[self.pos] in WHITESPACE:
            self.pos += 1

    def _is_name_start(self, ch: str) -> bool:
        # CSS identifier start: letter, underscore, hyphen, or non-ASCII
        return ch.isalpha() or ch == "_" or ch == "-" or ord(ch) > 127

    def _is_name_char(self, ch: str) -> bool:
        return self._is_name_start(ch) or ch.isdigit()

    def _read_name(self, what: str) -> str:
        start = self.pos
        if start < self.length and self._is_name_start(self.selector[start]):
            while self.pos < self.length and self._is_name_char(self.selector[self.pos]):
                self.pos += 1
        name = self.selector[start : self.pos]
        if not name:
            raise SelectorError(f"Expected {what} at position {self.pos} in {self.selector!r}")
        return name

    def _read_string(self, quote: str) -> str:
        start_pos = self.pos
        self.pos += 1
        parts: list[str] = []
        while self.pos < self.length:
            ch = self.selector[self.pos]
            if ch == quote:
                self.pos += 1
                return "".join(parts)
            if ch == "\\" and self.pos + 1 < self.length:
                parts.append(self.selector[self.pos + 1])
                self.pos += 2
                continue
            parts.append(ch)
            self.pos += 1
        raise SelectorError(f"Unterminated string starting at position {start_pos} in {self.selector!r}")

    def _read_unquoted_attr_value(self) -> str:
        start = self.pos
        while self.pos < self.length and self._is_name_char(self.selector[self.pos]):
            self.pos += 1
        if start == self.pos:
            raise SelectorError(f"Expected attribute value at position {self.pos} in {self.selector!r}")
        return self.selector[start : self.pos]

    def _read_argument(self) -> str:
        # The argument is kept raw; :not() re-tokenizes it as a selector list.
        start = self.pos
        depth = 1
        while self.pos < self.length:
            ch = self.selector[self.pos]
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1
                if depth == 0:
                    arg = self.selector[start : self.pos]
                    self.pos += 1
                    return arg.strip()
            elif ch in "\"'":
                self._read_string(ch)
                continue
            self.pos += 1
        raise SelectorError(f"Expected ) at position {self.pos} in {self.selector!r}")

    def _read_attribute(self, tokens: list[Token]) -> None:
        tokens.append(Token(TokenType.ATTR_START, pos=self.pos))
        self.pos += 1
        self._skip_whitespace()
        tokens.append(Token(TokenType.TAG, self._read_name("attribute name").lower(), self.pos))
        self._skip_whitespace()

        ch = self._peek()
        if ch == "]":
            self.pos += 1
            tokens.append(Token(TokenType.ATTR_END, pos=self.pos))
            return

        if ch == "=":
            op = "="
            self.pos += 1
        elif ch and ch in "~|^$*" and self._peek(1) == "=":
            op = ch + "="
            self.pos += 2
        else:
            raise SelectorError(f"Unexpected character {ch!r} in attribute selector at position {self.pos}")
        tokens.append(Token(TokenType.ATTR_OP, op, self.pos))

        self._skip_whitespace()
        quote = self._peek()
        value = self._read_string(quote) if quote in ("'", '"') else self._read_unquoted_attr_value()
        tokens.append(Token(TokenType.STRING, value, self.pos))

        self._skip_whitespace()
        if self._peek() != "]":
            raise SelectorError(f"Expected ] at position {self.pos} in {self.selector!r}")
        self.pos += 1
        tokens.append(Token(TokenType.ATTR_END, pos=self.pos))

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []
        pending_whitespace = False

        while self.pos < self.length:
            ch = self.selector[self.pos]

            # Skip whitespace but remember it for combinator detection
            if ch in WHITESPACE:
                pending_whitespace = True
                self._skip_whitespace()
                continue

            if ch in ">+~":
                pending_whitespace = False
                tokens.append(Token(TokenType.COMBINATOR, ch, self.pos))
                self.pos += 1
                self._skip_whitespace()
                continue

            if ch == ",":
                pending_whitespace = False
                tokens.append(Token(TokenType.COMMA, pos=self.pos))
                self.pos += 1
                self._skip_whitespace()
                continue

            # Whitespace between two compound selectors is the descendant combinator.
            if pending_whitespace and tokens and tokens[-1].type not in (TokenType.COMBINATOR, TokenType.COMMA):
                tokens.append(Token(TokenType.COMBINATOR, " ", self.pos))
            pending_whitespace = False

            if ch == "*":
                tokens.append(Token(TokenType.UNIVERSAL, pos=self.pos))
                self.pos += 1
            elif ch == "#":
                self.pos += 1
                tokens.append(Token(TokenType.ID, self._read_name("identifier after #"), self.pos))
            elif ch == ".":
                self.pos += 1
                tokens.append(Token(TokenType.CLASS, self._read_name("class name after ."), self.pos))
            elif ch == "[":
                self._read_attribute(tokens)
            elif ch == ":":
                self.pos += 1
                if self._peek() == ":":
                    raise SelectorError(f"Pseudo-elements are not supported (position {self.pos})")
                name = self._read_name("pseudo-class name after :").lower()
                tokens.append(Token(TokenType.PSEUDO, name, self.pos))
                if self._peek() == "(":
                    self.pos += 1
                    tokens.append(Token(TokenType.ARGUMENT, self._read_argument(), self.pos))
            elif self._is_name_start(ch):
                # Tags are case-insensitive
                tokens.append(Token(TokenType.TAG, self._read_name("tag name").lower(), self.pos))
            else:
                raise SelectorError(f"Unexpected character {ch!r} at position {self.pos} in {self.selector!r}")

        tokens.append(Token(TokenType.EOF, pos=self.pos))
        return tokens


# AST Node types for parsed selectors


class SimpleSelector:
    """A single simple selector (tag, id, class, attribute, or pseudo-class)."""

    __slots__ = ("inner", "name", "nth", "operator", "type", "value")

    TYPE_TAG: str = "tag"
    TYPE_ID: str = "id"
    TYPE_CLASS: str = "class"
    TYPE_UNIVERSAL: str = "universal"
    TYPE_ATTR: str = "attr"
    TYPE_PSEUDO: str = "pseudo"

    type: str
    name: str | None
    operator: str | None
    value: str | None
    nth: tuple[int, int] | None
    inner: SelectorList | None

    def __init__(
        self,
        selector_type: str,
        name: str | None = None,
        operator: str | None = None,
        value: str | None = None,
        nth: tuple[int, int] | None = None,
        inner: SelectorList | None = None,
    ) -> None:
        self.type = selector_type
        self.name = name
        self.operator = operator
        self.value = value
        self.nth = nth  # (a, b) for the :nth-* family
        self.inner = inner  # compiled argument of :not()

    def __repr__(self) -> str:
        parts = [f"SimpleSelector({self.type!r}"]
        if self.name:
            parts.append(f", name={self.name!r}")
        if self.operator:
            parts.append(f", op={self.operator!r}")
        if self.value is not None:
            parts.append(f", value={self.value!r}")
        if self.nth is not None:
            parts.append(f", nth={self.nth!r}")
        if self.inner is not None:
            parts.append(f", inner={self.inner!r}")
        parts.append(")")
        return "".join(parts)


class CompoundSelector:
    """A sequence of simple selectors (e.g., div.foo#bar)."""

    __slots__ = ("selectors",)

    selectors: list[SimpleSelector]

    def __init__(self, selectors: list[SimpleSelector]) -> None:
        self.selectors = selectors

    def __repr__(self) -> str:
        return f"CompoundSelector({self.selectors!r})"


class ComplexSelector:
    """A chain of compound selectors with combinators."""

    __slots__ = ("parts",)

    # (combinator, compound) pairs; the first pair's combinator is None
    parts: list[tuple[str | None, CompoundSelector]]

    def __init__(self) -> None:
        self.parts = []

    def __repr__(self) -> str:
        return f"ComplexSelector({self.parts!r})"


class SelectorList:
    """A comma-separated list of complex selectors."""

    __slots__ = ("selectors",)

    selectors: list[ComplexSelector]

    def __init__(self, selectors: list[ComplexSelector]) -> None:
        self.selectors = selectors

    def __repr__(self) -> str:
        return f"SelectorList({self.selectors!r})"


_STRUCTURAL_PSEUDO_CLASSES: frozenset[str] = frozenset(
    {
        "empty",
        "first-child",
        "first-of-type",
        "last-child",
        "last-of-type",
        "only-child",
        "only-of-type",
        "root",
    }
)

_NTH_PSEUDO_CLASSES: frozenset[str] = frozenset(
    {
        "nth-child",
        "nth-last-child",
        "nth-last-of-type",
        "nth-of-type",
    }
)

_NTH_PATTERN = re.compile(
    r"^(?:(?P<a>[+-]?\d*)n(?:\s*(?P<sign>[+-])\s*(?P<b>\d+))?|(?P<int>[+-]?\d+))$",
)


def parse_nth_expression(expr: str) -> tuple[int, int]:
    """Parse an An+B expression like '2n+1', 'odd', 'even', '-n+3' or '3'."""
    text = expr.strip().lower()
    if text == "odd":
        return (2, 1)
    if text == "even":
        return (2, 0)

    match = _NTH_PATTERN.match(text)
    if not match:
        raise SelectorError(f"Invalid An+B expression: {expr!r}")

    if match.group("int") is not None:
        return (0, int(match.group("int")))

    a_part = match.group("a")
    if a_part in ("", "+"):
        a = 1
    elif a_part == "-":
        a = -1
    else:
        a = int(a_part)

    b = int(match.group("b") or 0)
    if match.group("sign") == "-":
        b = -b
    return (a, b)


class SelectorParser:
    """Parses a list of tokens into a selector AST."""

    __slots__ = ("pos", "tokens")

    tokens: list[Token]
    pos: int

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    def _peek(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def _expect(self, token_type: str) -> Token:
        token = self._peek()
        if token.type != token_type:
            raise SelectorError(f"Expected {token_type}, got {token.type} at position {token.pos}")
        return self._advance()

    def parse(self) -> SelectorList:
        """Parse a complete selector (possibly comma-separated list)."""
        selectors = [self._parse_complex_selector()]
        while self._peek().type == TokenType.COMMA:
            self._advance()
            selectors.append(self._parse_complex_selector())

        token = self._peek()
        if token.type != TokenType.EOF:
            raise SelectorError(f"Unexpected {token.type} at position {token.pos}")
        return SelectorList(selectors)

    def _parse_complex_selector(self) -> ComplexSelector:
        """Parse a complex selector (compound selectors with combinators)."""
        complex_sel = ComplexSelector()
        complex_sel.parts.append((None, self._parse_compound_selector()))

        while self._peek().type == TokenType.COMBINATOR:
            combinator = self._advance().value
            complex_sel.parts.append((combinator, self._parse_compound_selector()))

        return complex_sel

    def _parse_compound_selector(self) -> CompoundSelector:
        """Parse a compound selector (sequence of simple selectors)."""
        simple_selectors: list[SimpleSelector] = []

        while True:
            token = self._peek()

            if token.type in (TokenType.TAG, TokenType.UNIVERSAL):
                # A type or universal selector may only lead a compound selector.
                if simple_selectors:
                    raise SelectorError(f"Unexpected type selector at position {token.pos}")
                self._advance()
                if token.type == TokenType.TAG:
                    simple_selectors.append(SimpleSelector(SimpleSelector.TYPE_TAG, name=token.value))
                else:
                    simple_selectors.append(SimpleSelector(SimpleSelector.TYPE_UNIVERSAL))

            elif token.type == TokenType.ID:
                self._advance()
                simple_selectors.append(SimpleSelector(SimpleSelector.TYPE_ID, name=token.value))

            elif token.type == TokenType.CLASS:
                self._advance()
                simple_selectors.append(SimpleSelector(SimpleSelector.TYPE_CLASS, name=token.value))

            elif token.type == TokenType.ATTR_START:
                simple_selectors.append(self._parse_attribute_selector())

            elif token.type == TokenType.PSEUDO:
                simple_selectors.append(self._parse_pseudo_selector())

            else:
                break

        if not simple_selectors:
            token = self._peek()
            raise SelectorError(f"Expected selector at position {token.pos}, got {token.type}")
        return CompoundSelector(simple_selectors)

    def _parse_attribute_selector(self) -> SimpleSelector:
        """Parse an attribute selector [attr], [attr=value], etc."""
        self._expect(TokenType.ATTR_START)
        attr_name = self._expect(TokenType.TAG).value

        if self._peek().type == TokenType.ATTR_END:
            self._advance()
            return SimpleSelector(SimpleSelector.TYPE_ATTR, name=attr_name)

        operator = self._expect(TokenType.ATTR_OP).value
        value = self._expect(TokenType.STRING).value
        self._expect(TokenType.ATTR_END)
        return SimpleSelector(SimpleSelector.TYPE_ATTR, name=attr_name, operator=operator, value=value)

    def _parse_pseudo_selector(self) -> SimpleSelector:
        """Parse a pseudo-class selector like :first-child, :nth-child(2n) or :not(p)."""
        token = self._expect(TokenType.PSEUDO)
        name = token.value or ""
        arg: str | None = None
        if self._peek().type == TokenType.ARGUMENT:
            arg = self._advance().value

        if name in _STRUCTURAL_PSEUDO_CLASSES:
            if arg is not None:
                raise SelectorError(f":{name} does not take an argument")
            return SimpleSelector(SimpleSelector.TYPE_PSEUDO, name=name)

        if name in _NTH_PSEUDO_CLASSES:
            if not arg:
                raise SelectorError(f":{name}() requires an An+B argument")
            return SimpleSelector(SimpleSelector.TYPE_PSEUDO, name=name, nth=parse_nth_expression(arg))

        if name == "not":
            if not arg:
                raise SelectorError(":not() requires a selector argument")
            return SimpleSelector(SimpleSelector.TYPE_PSEUDO, name=name, inner=parse_selector(arg))

        raise SelectorError(f"Unsupported pseudo-class: :{name}")


class SelectorMatcher:
    """Matches parsed selectors against DOM nodes."""

    __slots__ = ()

    def matches(self, node: Any, selector: SelectorList) -> bool:
        """Check if a node matches a parsed selector list."""
        if not node.is_element:
            return False
        return any(
            self._matches_complex(node, complex_sel.parts, len(complex_sel.parts) - 1)
            for complex_sel in selector.selectors
        )

    def _matches_complex(self, node: Any, parts: list[tuple[str | None, CompoundSelector]], index: int) -> bool:
        """Match parts[:index + 1] with `node` as the subject of parts[index].

        Works right to left, backtracking over alternative ancestors/siblings
        for the descendant and general-sibling combinators.
        """
        combinator, compound = parts[index]
        if not self._matches_compound(node, compound):
            return False
        if index == 0:
            return True

        if combinator == ">":
            parent = _parent_element(node)
            return parent is not None and self._matches_complex(parent, parts, index - 1)

        if combinator == "+":
            sibling = _previous_element_sibling(node)
            return sibling is not None and self._matches_complex(sibling, parts, index - 1)

        if combinator == "~":
            sibling = _previous_element_sibling(node)
            while sibling is not None:
                if self._matches_complex(sibling, parts, index - 1):
                    return True
                sibling = _previous_element_sibling(sibling)
            return False

        # Descendant
        ancestor = _parent_element(node)
        while ancestor is not None:
            if self._matches_complex(ancestor, parts, index - 1):
                return True
            ancestor = _parent_element(ancestor)
        return False

    def _matches_compound(self, node: Any, compound: CompoundSelector) -> bool:
        """Match a compound selector (all simple selectors must match)."""
        return all(self._matches_simple(node, simple) for simple in compound.selectors)

    def _matches_simple(self, node: ElementNode, selector: SimpleSelector) -> bool:
        """Match a simple selector against an element."""
        sel_type = selector.type

        if sel_type == SimpleSelector.TYPE_UNIVERSAL:
            return True

        if sel_type == SimpleSelector.TYPE_TAG:
            # HTML tag names are case-insensitive
            return node.name.lower() == selector.name

        if sel_type == SimpleSelector.TYPE_ID:
            return node.attrs.get("id") == selector.name

        if sel_type == SimpleSelector.TYPE_CLASS:
            return selector.name in node.attrs.get("class", "").split()

        if sel_type == SimpleSelector.TYPE_ATTR:
            return self._matches_attribute(node, selector)

        return self._matches_pseudo(node, selector)

    def _matches_attribute(self, node: ElementNode, selector: SimpleSelector) -> bool:
        """Match an attribute selector."""
        # Attribute names are case-insensitive in HTML
        attr_value: str | None = None
        for name, value in node.attrs.items():
            if name.lower() == selector.name:
                attr_value = value
                break

        if attr_value is None:
            return False

        op = selector.operator
        if op is None:
            return True

        value = selector.value or ""

        if op == "=":
            return attr_value == value

        if op == "~=":
            return value in attr_value.split()

        if op == "|=":
            # Hyphen-separated prefix match (e.g., lang="en-US" matches [lang|=en])
            return attr_value == value or attr_value.startswith(value + "-")

        # An empty value never matches the substring operators.
        if not value:
            return False

        if op == "^=":
            return attr_value.startswith(value)

        if op == "$=":
            return attr_value.endswith(value)

        return value in attr_value  # *=

    def _matches_pseudo(self, node: ElementNode, selector: SimpleSelector) -> bool:
        """Match a pseudo-class selector."""
        name = selector.name

        if name == "not":
            assert selector.inner is not None
            return not self.matches(node, selector.inner)

        if name == "root":
            parent = node.parent
            return parent is not None and parent.name == "#document"

        if name == "empty":
            for child in node.children:
                if child.is_element:
                    return False
                if child.name == "#text" and child.data:
                    return False
            return True

        siblings = _element_siblings(node)
        if not siblings:
            return False

        if name in ("first-of-type", "last-of-type", "only-of-type", "nth-of-type", "nth-last-of-type"):
            node_name = node.name.lower()
            siblings = [sibling for sibling in siblings if sibling.name.lower() == node_name]

        position = next(i for i, sibling in enumerate(siblings) if sibling is node) + 1
        from_end = len(siblings) - position + 1

        if name in ("first-child", "first-of-type"):
            return position == 1

        if name in ("last-child", "last-of-type"):
            return from_end == 1

        if name in ("only-child", "only-of-type"):
            return len(siblings) == 1

        assert selector.nth is not None
        a, b = selector.nth
        if name in ("nth-child", "nth-of-type"):
            return _matches_nth(position, a, b)
        return _matches_nth(from_end, a, b)


def _matches_nth(index: int, a: int, b: int) -> bool:
    """Check if 1-based index matches An+B for some non-negative integer n."""
    if a == 0:
        return index == b
    diff = index - b
    if a > 0:
        return diff >= 0 and diff % a == 0
    return diff <= 0 and diff % a == 0


def _parent_element(node: Any) -> Any | None:
    parent = node.parent
    if parent is not None and parent.is_element:
        return parent
    return None


def _element_siblings(node: Any) -> list[Any]:
    """Element children of the node's parent, including the node itself."""
    parent = node.parent
    if parent is None:
        return []
    return [child for child in parent.children if child.is_element]


def _previous_element_sibling(node: Any) -> Any | None:
    """Get the previous element sibling, or None if node is the first one."""
    parent = node.parent
    if parent is None:
        return None

    prev: Any | None = None
    for child in parent.children:
        if child is node:
            return prev
        if child.is_element:
            prev = child
    return None


def parse_selector(selector_string: str) -> SelectorList:
    """Parse a CSS selector string into an AST."""
    if not selector_string or not selector_string.strip():
        raise SelectorError("Empty selector")

    tokens = SelectorTokenizer(selector_string.strip()).tokenize()
    return SelectorParser(tokens).parse()


# Global matcher instance
_matcher: SelectorMatcher = SelectorMatcher()


class Selector:
    """A compiled CSS selector.

    Compiling validates the whole selector up front, so evaluation never
    raises. The same instance can be evaluated against any number of trees.
    """

    __slots__ = ("_parsed", "text")

    text: str
    _parsed: SelectorList

    def __init__(self, text: str, parsed: SelectorList) -> None:
        self.text = text
        self._parsed = parsed

    def matches(self, node: Any) -> bool:
        """Return True if `node` is an element matching this selector."""
        return _matcher.matches(node, self._parsed)

    def select(self, root: Any) -> Iterator[ElementNode]:
        """Yield matching descendants of `root` in document order.

        `root` itself is never yielded, matching browser behavior for
        querySelectorAll.
        """
        for node in root.iter_descendants():
            if node.is_element and _matcher.matches(node, self._parsed):
                yield node

    def __repr__(self) -> str:
        return f"Selector({self.text!r})"


def compile_selector(selector_string: str) -> Selector:
    """
    Compile a CSS selector string.

    Args:
        selector_string: A CSS selector string

    Returns:
        A reusable compiled Selector

    Raises:
        SelectorError: If the selector is empty or invalid
    """
    parsed = parse_selector(selector_string)
    logger.debug("Compiled selector %r into %d alternative(s)", selector_string, len(parsed.selectors))
    return Selector(selector_string, parsed)


def query(root: Any, selector_string: str) -> list[ElementNode]:
    """Query the tree under `root`, returning all matching elements in document order."""
    return list(compile_selector(selector_string).select(root))


def matches(node: Any, selector_string: str) -> bool:
    """Check if a node matches a CSS selector."""
    return compile_selector(selector_string).matches(node)
