import pytest

from hq.parser import parse_fragment
from hq.render import render, render_node


@pytest.mark.parametrize(
    "fragment, expected",
    [
        ('<p class="a">Hi</p>', '<p class="a">Hi</p>\n'),
        ('<a href="/x" id="l" class="c">go</a>', '<a href="/x" id="l" class="c">go</a>\n'),
        ("<div> <p>x</p>\n  <p>y</p> </div>", "<div><p>x</p><p>y</p></div>\n"),
        ("<div><ul><li>1</li><li>2</li></ul></div>", "<div><ul><li>1</li><li>2</li></ul></div>\n"),
        ("<p>a<br>b</p>", "<p>a<br></br>b</p>\n"),
        ('<img src="x.png" alt="pic">', '<img src="x.png" alt="pic"></img>\n'),
        ("<p><input type=checkbox checked></p>", '<p><input type="checkbox" checked=""></input></p>\n'),
        ("<div><!--note--></div>", "<div><!-- note --></div>\n"),
        ("<p>line one\nline two</p>", "<p>line one line two</p>\n"),
        ("<p>  padded  </p>", "<p>padded</p>\n"),
        ("<p>a <b>bold</b> word</p>", "<p>a<b>bold</b>word</p>\n"),
        ("", "\n"),
        ("   \n  ", "\n"),
    ],
)
def test_compact(fragment: str, expected: str) -> None:
    assert render(fragment) == expected


@pytest.mark.parametrize(
    "text",
    ["Hi", "two words", "1 < 2", "a & b"],
)
def test_plain_text_passes_through(text: str) -> None:
    assert render(text) == text + "\n"
    assert render(text, indented=True) == "    " + text + "\n"


def test_plain_text_is_collapsed_in_compact_mode() -> None:
    assert render("  foo\n  bar  ") == "foo   bar\n"


def test_attribute_values_are_printed_as_parsed() -> None:
    assert render('<a href="?a=1&amp;b=2">x</a>') == '<a href="?a=1&b=2">x</a>\n'


def test_end_tags_are_added_for_unclosed_elements() -> None:
    assert render("<div><p>one<p>two") == "<div><p>one</p><p>two</p></div>\n"


def test_indented() -> None:
    expected = "    <div>\n      <p>\n        Hi\n      </p>\n      <br>\n      </br>\n      <!-- c -->\n    </div>\n"
    assert render("<div><p>Hi</p><br><!--c--></div>", indented=True) == expected


def test_indented_preserves_text_as_is() -> None:
    assert render("<div>  foo\n  bar</div>", indented=True) == "    <div>\n        foo\n  bar\n    </div>\n"


def test_indented_skips_whitespace_only_text() -> None:
    assert render("<ul>\n  <li>x</li>\n</ul>", indented=True) == "    <ul>\n      <li>\n        x\n      </li>\n    </ul>\n"


def test_indented_multiple_top_level_nodes() -> None:
    assert render("<b>1</b>tail<i>2</i>", indented=True) == (
        "    <b>\n      1\n    </b>\n    tail\n    <i>\n      2\n    </i>\n"
    )


def test_indented_empty_fragment_prints_nothing() -> None:
    assert render("", indented=True) == ""


def test_synthetic_root_toggle() -> None:
    assert render("<p>x</p>", include_synthetic_root=True) == "<html><p>x</p></html>\n"
    assert render("<p>x</p>", include_synthetic_root=False) == "<p>x</p>\n"
    assert render("<p>x</p>", indented=True, include_synthetic_root=True) == (
        "  <html>\n    <p>\n      x\n    </p>\n  </html>\n"
    )


def test_synthetic_root_is_identified_by_flag_not_name() -> None:
    # A literal <html> tag inside a fragment is dropped by the parser, so the
    # only html element left is the synthetic one.
    assert render('<html lang="en"><p>x</p></html>') == "<p>x</p>\n"


def test_render_node_renders_existing_tree() -> None:
    root = parse_fragment('<div id="a"><span>s</span></div>')
    div = root.children[0].children[0]
    assert render_node(div) == '<div id="a"><span>s</span></div>\n'
    assert render_node(div, indented=True) == '<div id="a">\n  <span>\n    s\n  </span>\n</div>\n'


@pytest.mark.parametrize("tag", ["br", "hr", "img", "input", "meta", "wbr"])
def test_void_elements_get_end_tags(tag: str) -> None:
    assert render(f"<{tag}>") == f"<{tag}></{tag}>\n"
    assert render(f"<{tag}>", indented=True) == f"    <{tag}>\n    </{tag}>\n"


def test_prefixed_foreign_attributes_keep_their_prefix() -> None:
    expected = '<svg><use xlink:href="#a"></use></svg>\n'
    assert render('<svg><use xlink:href="#a"></use></svg>') == expected
    assert render(expected) == expected
