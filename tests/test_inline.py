"""Tests for inline markup parsing and rendering."""

from bs4 import BeautifulSoup

from issue_mdx.inline import (
    Bold,
    CodeSpan,
    Image,
    Link,
    Text,
    Unknown,
    escape_inline,
    escape_text,
    parse_inline,
    render_inline,
)
from issue_mdx.markdown import postprocess_markdown
from issue_mdx.models import ImageCatalog

EMPTY = ImageCatalog()


def _paragraph(markup: str):
    return BeautifulSoup(f"<p>{markup}</p>", "html.parser").p


def _render(markup: str, catalog: ImageCatalog = EMPTY) -> str:
    return postprocess_markdown(render_inline(parse_inline(_paragraph(markup)), catalog))


class TestParseInline:
    def test_builds_typed_nodes(self):
        nodes = parse_inline(_paragraph("Hello <strong>world</strong>"))
        assert nodes == [Text("Hello "), Bold([Text("world")])]

    def test_code_keeps_plain_text(self):
        nodes = parse_inline(_paragraph("<code>a <b>b</b></code>"))
        assert nodes == [CodeSpan("a b")]

    def test_anchor_with_href_is_link(self):
        nodes = parse_inline(_paragraph('<a href="u">x</a>'))
        assert nodes == [Link("u", [Text("x")])]

    def test_anchor_without_href_is_unknown(self):
        nodes = parse_inline(_paragraph('<a name="top">x</a>'))
        assert nodes == [Unknown("a", [Text("x")])]

    def test_image_keeps_markup(self):
        (node,) = parse_inline(_paragraph('<img src="http://x/a.png" alt="A">'))
        assert isinstance(node, Image)
        assert node.src == "http://x/a.png"
        assert node.alt == "A"
        assert node.markup.startswith("<img")

    def test_comments_are_dropped(self):
        assert parse_inline(_paragraph("a<!-- hidden -->b")) == [Text("a"), Text("b")]


class TestRenderInline:
    def test_code_span(self):
        assert _render("Use <code>npm i</code> now") == "Use `npm i` now"

    def test_emphasis(self):
        assert _render("<em>a</em> and <strong>b</strong>") == "*a* and **b**"

    def test_link_decodes_href_once(self):
        markup = '<a href="https://e.com/x?a=1&amp;b=2" rel="nofollow">site</a>'
        assert _render(markup) == "[site](https://e.com/x?a=1&b=2)"

    def test_nested_markup_inside_link(self):
        assert _render('<a href="u"><strong>x</strong></a>') == "[**x**](u)"

    def test_line_break(self):
        assert _render("a<br>b<br/>c") == "a\nb\nc"

    def test_unknown_tags_are_stripped(self):
        assert _render('<span class="x">hi</span> <kbd>K</kbd>') == "hi K"

    def test_anchor_without_href_keeps_text(self):
        assert _render('<a name="top">anchor</a>') == "anchor"

    def test_catalogued_image(self):
        catalog = ImageCatalog({"http://x/a.png": "ab12cd34ef.png"})
        assert _render('<img src="http://x/a.png" alt="pic">', catalog) == (
            "![pic](./images/ab12cd34ef.png)"
        )

    def test_linked_image(self):
        catalog = ImageCatalog({"https://x/a.png": "f.png"})
        markup = '<a href="https://x/full.png"><img src="https://x/a.png" alt="diagram"></a>'
        assert _render(markup, catalog) == "[![diagram](./images/f.png)](https://x/full.png)"

    def test_uncatalogued_image_left_as_markup(self):
        assert _render('<img src="http://x/missing.png">') == '<img src="http://x/missing.png"/>'

    def test_custom_image_prefix(self):
        catalog = ImageCatalog({"http://x/a.png": "a.png"})
        nodes = parse_inline(_paragraph('<img src="http://x/a.png">'))
        assert render_inline(nodes, catalog, image_prefix="assets") == "![](assets/a.png)"

    def test_escaped_text_is_decoded_exactly_once(self):
        assert _render("&amp;lt;b&amp;gt; &lt;i&gt;") == "&lt;b&gt; <i>"


class TestEscapeText:
    def test_escapes_markup_characters(self):
        assert escape_text("a < b & c > d") == "a &lt; b &amp; c &gt; d"

    def test_non_breaking_space_kept(self):
        assert escape_text("a\xa0b") == "a\xa0b"

    def test_inline_spells_non_breaking_space(self):
        assert escape_inline("a\xa0b <") == "a&nbsp;b &lt;"

    def test_paragraph_non_breaking_space_becomes_space(self):
        assert _render("a\xa0<code>b\xa0c</code>") == "a `b c`"

    def test_quotes_untouched(self):
        assert escape_text("\"it's\"") == "\"it's\""
