from hq.node import CommentNode, ElementNode, TextNode
from hq.parser import HTMLFragment, parse_fragment


def test_fragment_is_wrapped_in_synthetic_root() -> None:
    root = parse_fragment("<p>Hi</p>")
    assert root.name == "#document"
    assert len(root.children) == 1
    wrapper = root.children[0]
    assert isinstance(wrapper, ElementNode)
    assert wrapper.name == "html"
    assert wrapper.synthetic
    assert [child.name for child in wrapper.children] == ["p"]


def test_no_implicit_head_or_body() -> None:
    wrapper = HTMLFragment("<title>x</title><p>y</p>").wrapper
    assert [child.name for child in wrapper.children] == ["title", "p"]


def test_text_and_comments_keep_source_order() -> None:
    wrapper = HTMLFragment("a<!--c--><b>x</b>tail").wrapper
    kinds = [type(child) for child in wrapper.children]
    assert kinds == [TextNode, CommentNode, ElementNode, TextNode]
    assert wrapper.children[0].data == "a"
    assert wrapper.children[1].data == "c"
    assert wrapper.children[3].data == "tail"


def test_attribute_order_is_preserved() -> None:
    wrapper = HTMLFragment('<a z="1" b="2" m="3">x</a>').wrapper
    assert list(wrapper.children[0].attrs.items()) == [("z", "1"), ("b", "2"), ("m", "3")]


def test_entities_are_decoded() -> None:
    wrapper = HTMLFragment('<p title="a &amp; b">1 &lt; 2</p>').wrapper
    p = wrapper.children[0]
    assert p.attrs["title"] == "a & b"
    assert p.children[0].data == "1 < 2"


def test_unclosed_tags_are_closed() -> None:
    wrapper = HTMLFragment("<div><p>one<p>two").wrapper
    div = wrapper.children[0]
    assert [child.name for child in div.children] == ["p", "p"]
    assert div.children[0].to_text() == "one"
    assert div.children[1].to_text() == "two"


def test_stray_end_tag_is_ignored() -> None:
    fragment = HTMLFragment("<p>x</span></p>")
    p = fragment.wrapper.children[0]
    assert p.name == "p"
    assert p.to_text() == "x"
    assert fragment.errors


def test_unknown_tags_are_kept() -> None:
    wrapper = HTMLFragment("<my-widget data-x=1>hi</my-widget>").wrapper
    widget = wrapper.children[0]
    assert widget.name == "my-widget"
    assert widget.attrs == {"data-x": "1"}


def test_foreign_content_names() -> None:
    wrapper = HTMLFragment('<svg viewBox="0 0 1 1"><use xlink:href="#a"></use></svg>').wrapper
    svg = wrapper.children[0]
    assert svg.name == "svg"
    assert svg.namespace == "svg"
    assert svg.attrs == {"viewBox": "0 0 1 1"}
    assert svg.children[0].attrs == {"xlink:href": "#a"}


def test_doctype_is_dropped() -> None:
    wrapper = HTMLFragment("<!DOCTYPE html><p>x</p>").wrapper
    assert [child.name for child in wrapper.children] == ["p"]


def test_empty_and_bytes_input() -> None:
    assert HTMLFragment("").wrapper.children == []
    assert HTMLFragment(None).wrapper.children == []
    wrapper = HTMLFragment("<p>café</p>".encode()).wrapper
    assert wrapper.children[0].to_text() == "café"


def test_parent_links() -> None:
    wrapper = HTMLFragment("<ul><li>x</li></ul>").wrapper
    ul = wrapper.children[0]
    li = ul.children[0]
    assert li.parent is ul
    assert ul.parent is wrapper
    assert li.children[0].parent is li
