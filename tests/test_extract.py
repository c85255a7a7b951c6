import pytest

from hq.extract import ContentMode, extract
from hq.parser import parse_fragment
from hq.selector import query


def _first(html: str, selector: str):
    return query(parse_fragment(html), selector)[0]


@pytest.mark.parametrize(
    "html, selector, mode, expected",
    [
        ('<p class="a" id="x">Hi <b>there</b></p>', "p", ContentMode.OUTER, '<p class="a" id="x">Hi <b>there</b></p>'),
        ('<p class="a" id="x">Hi <b>there</b></p>', "p", ContentMode.INNER, "Hi <b>there</b>"),
        ('<p class="a" id="x">Hi <b>there</b></p>', "p", ContentMode.TEXT, "Hi there"),
        ("<ul><li>One</li></ul>", "ul", ContentMode.INNER, "<li>One</li>"),
        ("<div>a<span>b</span>c<!--x-->d</div>", "div", ContentMode.TEXT, "abcd"),
        ("<div>a<!--x-->b</div>", "div", ContentMode.OUTER, "<div>a<!--x-->b</div>"),
        ("<div>  spaced\n  text </div>", "div", ContentMode.TEXT, "  spaced\n  text "),
        ('<img src="a.png" alt="">', "img", ContentMode.OUTER, '<img src="a.png" alt="">'),
        ('<img src="a.png">', "img", ContentMode.INNER, ""),
        ('<img src="a.png">', "img", ContentMode.TEXT, ""),
        ("<p>a<br>b</p>", "p", ContentMode.OUTER, "<p>a<br>b</p>"),
        ("<p></p>", "p", ContentMode.INNER, ""),
    ],
)
def test_extract(html: str, selector: str, mode: ContentMode, expected: str) -> None:
    assert extract(_first(html, selector), mode) == expected


def test_outer_escapes_markup_characters() -> None:
    node = _first('<p title="a &quot;b&quot; &amp; c">1 &lt; 2 &amp; 3 &gt; 0</p>', "p")
    assert extract(node, ContentMode.OUTER) == '<p title="a &quot;b&quot; &amp; c">1 &lt; 2 &amp; 3 &gt; 0</p>'
    assert extract(node, ContentMode.TEXT) == "1 < 2 & 3 > 0"


def test_raw_text_elements_are_not_escaped() -> None:
    node = _first("<div><script>if (a < b && c) {}</script></div>", "div")
    assert extract(node, ContentMode.INNER) == "<script>if (a < b && c) {}</script>"


def test_non_breaking_space_is_escaped() -> None:
    node = _first("<p>a&nbsp;b</p>", "p")
    assert extract(node, ContentMode.INNER) == "a&nbsp;b"
    assert extract(node, ContentMode.TEXT) == "a\xa0b"


@pytest.mark.parametrize(
    "html",
    [
        "<div><p>x</p><p>y</p></div>",
        '<div class="c"><img src="i"><!--note--> text <a href="#">l</a></div>',
        "<div></div>",
    ],
)
def test_outer_contains_inner(html: str) -> None:
    node = _first(html, "div")
    outer = extract(node, ContentMode.OUTER)
    inner = extract(node, ContentMode.INNER)
    assert inner in outer
    assert len(inner) < len(outer)


def test_outer_round_trips_through_parser() -> None:
    node = _first('<section z="1" a="2"><h2 id="t">Title</h2><p>Body &amp; more</p></section>', "section")
    reparsed = parse_fragment(extract(node, ContentMode.OUTER)).children[0].children[0]
    assert reparsed.name == "section"
    assert list(reparsed.attrs.items()) == [("z", "1"), ("a", "2")]
    assert [child.name for child in reparsed.children] == ["h2", "p"]
    assert reparsed.children[0].attrs == {"id": "t"}
    assert reparsed.to_text() == node.to_text() == "TitleBody & more"
