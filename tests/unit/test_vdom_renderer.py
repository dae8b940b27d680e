#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the render-tree compiler."""

import pytest

from md2vdom.ast import (
    HTML,
    BlockQuote,
    Break,
    Code,
    Definition,
    Delete,
    Emphasis,
    Footnote,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    Image,
    ImageReference,
    InlineCode,
    Link,
    LinkReference,
    List,
    ListItem,
    NodeData,
    Paragraph,
    Root,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    Unknown,
    Yaml,
)
from md2vdom.exceptions import InvalidOptionsError, MalformedNodeError
from md2vdom.options import VdomRendererOptions
from md2vdom.renderers.vdom import VdomRenderer
from md2vdom.vdom import Element, TextNode, to_html


def render_html(*children, **options) -> str:
    """Compile a root with ``children`` (unsanitized unless asked) and serialize it."""
    options.setdefault("sanitize", False)
    renderer = VdomRenderer(VdomRendererOptions(**options))
    return to_html(renderer.compile(Root(children=list(children))))


def para(*children) -> Paragraph:
    return Paragraph(children=list(children))


def text(value: str) -> Text:
    return Text(value=value)


@pytest.mark.unit
class TestBlockNodes:
    """Test compilation of block-level nodes."""

    def test_empty_document(self) -> None:
        assert render_html() == "<div></div>"

    def test_paragraphs_are_separated_by_lines(self) -> None:
        assert render_html(para(text("a")), para(text("b"))) == "<div><p>a</p>\n<p>b</p></div>"

    @pytest.mark.parametrize("depth,tag", [(1, "h1"), (3, "h3"), (6, "h6"), (9, "h6"), (0, "h1")])
    def test_heading_depth(self, depth, tag) -> None:
        assert render_html(Heading(depth=depth, children=[text("T")])) == f"<div><{tag}>T</{tag}></div>"

    def test_blockquote_is_loose(self) -> None:
        assert render_html(BlockQuote(children=[para(text("q"))])) == (
            "<div><blockquote>\n<p>q</p>\n</blockquote></div>"
        )

    def test_thematic_break(self) -> None:
        assert render_html(ThematicBreak()) == "<div><hr></div>"

    def test_html_is_literal_text(self) -> None:
        assert render_html(HTML(value="<b>x</b>")) == "<div>&lt;b&gt;x&lt;/b&gt;</div>"

    def test_yaml_and_definitions_render_nothing(self) -> None:
        html = render_html(
            Yaml(value="title: x"),
            Definition(identifier="a", url="/a"),
            FootnoteDefinition(identifier="unused-only-in-section", children=[]),
            para(text("body")),
        )
        assert html.startswith("<div><p>body</p>")


@pytest.mark.unit
class TestCode:
    """Test code block compilation."""

    def test_fenced_code_with_language(self) -> None:
        assert render_html(Code(value="foo()", lang="js")) == (
            '<div><pre><code class="language-js">foo()\n</code></pre></div>'
        )

    def test_empty_code(self) -> None:
        assert render_html(Code(value="")) == "<div><pre><code></code></pre></div>"

    def test_tabs_are_expanded(self) -> None:
        assert render_html(Code(value="\tx")) == "<div><pre><code>    x\n</code></pre></div>"
        assert render_html(Code(value="\tx"), tab_size=2) == "<div><pre><code>  x\n</code></pre></div>"

    def test_override_class_comes_first(self) -> None:
        code = Code(value="x", lang="js", data=NodeData(render_attributes={"className": ["foo"]}))
        assert render_html(code) == '<div><pre><code class="foo language-js">x\n</code></pre></div>'

    def test_sanitizer_keeps_only_language_class(self) -> None:
        code = Code(value="x", lang="py", data=NodeData(render_attributes={"className": "evil"}))
        assert render_html(code, sanitize=True) == '<div><pre><code class="language-py">x\n</code></pre></div>'

    def test_override_applies_to_code_element(self) -> None:
        code = Code(value="x", data=NodeData(render_attributes={"dataLine": "1"}))
        assert render_html(code) == '<div><pre><code data-line="1">x\n</code></pre></div>'

    def test_code_content_is_escaped(self) -> None:
        assert render_html(Code(value="<a>")) == "<div><pre><code>&lt;a&gt;\n</code></pre></div>"


@pytest.mark.unit
class TestLists:
    """Test list and list item compilation."""

    def test_tight_list_unwraps_paragraphs(self) -> None:
        tree = List(children=[ListItem(children=[para(text("a"))]), ListItem(children=[para(text("b"))])])
        assert render_html(tree) == "<div><ul>\n<li>a</li>\n<li>b</li>\n</ul></div>"

    def test_loose_list_keeps_paragraphs(self) -> None:
        tree = List(loose=True, children=[ListItem(children=[para(text("a"))])])
        assert render_html(tree) == "<div><ul>\n<li>\n<p>a</p>\n</li>\n</ul></div>"

    def test_item_with_several_children_is_loose(self) -> None:
        tree = List(children=[ListItem(children=[para(text("a")), para(text("b"))])])
        assert render_html(tree) == "<div><ul>\n<li>\n<p>a</p>\n<p>b</p>\n</li>\n</ul></div>"

    def test_ordered_list_start(self) -> None:
        assert render_html(List(ordered=True, start=3, children=[])) == '<div><ol start="3">\n</ol></div>'
        assert render_html(List(ordered=True, start=1, children=[])) == "<div><ol>\n</ol></div>"

    def test_empty_single_child(self) -> None:
        tree = List(children=[ListItem(children=[para()])])
        assert render_html(tree) == "<div><ul>\n<li></li>\n</ul></div>"

    def test_checked_task_item(self) -> None:
        tree = List(children=[ListItem(checked=True, children=[para(text("done"))])])
        assert render_html(tree) == (
            '<div><ul>\n<li><input type="checkbox" checked disabled> done</li>\n</ul></div>'
        )

    def test_unchecked_task_item(self) -> None:
        tree = List(children=[ListItem(checked=False, children=[para(text("todo"))])])
        assert render_html(tree) == '<div><ul>\n<li><input type="checkbox" disabled> todo</li>\n</ul></div>'

    def test_task_item_in_loose_list_goes_into_paragraph(self) -> None:
        tree = List(loose=True, children=[ListItem(checked=True, children=[para(text("done"))])])
        assert render_html(tree) == (
            '<div><ul>\n<li>\n<p><input type="checkbox" checked disabled> done</p>\n</li>\n</ul></div>'
        )

    def test_task_item_without_leading_paragraph_gets_one(self) -> None:
        tree = List(children=[ListItem(checked=False, children=[ThematicBreak()])])
        assert render_html(tree) == (
            '<div><ul>\n<li>\n<p><input type="checkbox" disabled> </p>\n<hr>\n</li>\n</ul></div>'
        )

    def test_checkbox_survives_default_sanitizer(self) -> None:
        tree = List(children=[ListItem(checked=True, children=[para(text("done"))])])
        assert render_html(tree, sanitize=True) == (
            '<div><ul>\n<li><input type="checkbox" checked disabled> done</li>\n</ul></div>'
        )


@pytest.mark.unit
class TestTables:
    """Test table compilation."""

    def test_aligned_table(self, aligned_table) -> None:
        assert render_html(aligned_table) == (
            "<div><table>\n"
            "<thead>\n<tr>\n<th align=\"left\">a</th>\n<th>b</th>\n</tr>\n</thead>\n"
            "<tbody>\n<tr>\n<td align=\"left\">1</td>\n<td>2</td>\n</tr>\n</tbody>\n"
            "</table></div>"
        )

    def test_short_rows_are_padded(self) -> None:
        table = Table(
            align=[None, "right"],
            children=[
                TableRow(children=[TableCell(children=[text("a")]), TableCell(children=[text("b")])]),
                TableRow(children=[TableCell(children=[text("1")])]),
            ],
        )
        tree = VdomRenderer(VdomRendererOptions(sanitize=False)).compile(Root(children=[table]))
        cells = [node for node in tree.children[0].children[3].children[1].children if isinstance(node, Element)]
        assert [cell.tag_name for cell in cells] == ["td", "td"]
        assert cells[1].properties == {"align": "right"}
        assert cells[1].children == []

    def test_rows_wider_than_alignment(self) -> None:
        table = Table(
            align=["left"],
            children=[TableRow(children=[TableCell(children=[text("a")]), TableCell(children=[text("b")])])],
        )
        assert '<th align="left">a</th>\n<th>b</th>' in render_html(table)

    def test_header_only_table(self) -> None:
        table = Table(children=[TableRow(children=[TableCell(children=[text("h")])])])
        assert render_html(table) == (
            "<div><table>\n<thead>\n<tr>\n<th>h</th>\n</tr>\n</thead>\n<tbody>\n</tbody>\n</table></div>"
        )

    def test_cell_overrides(self) -> None:
        cell = TableCell(children=[text("a")], data=NodeData(render_attributes={"colSpan": 2}))
        table = Table(children=[TableRow(children=[cell])])
        assert '<th colspan="2">a</th>' in render_html(table)


@pytest.mark.unit
class TestInlineNodes:
    """Test compilation of inline nodes."""

    def test_inline_formatting(self, emphasis_root) -> None:
        html = to_html(VdomRenderer(VdomRendererOptions(sanitize=False)).compile(emphasis_root))
        assert html == "<div><p><em>Emphasis</em>, <strong>importance</strong>, and <code>code</code>.</p></div>"

    def test_delete(self) -> None:
        assert render_html(para(Delete(children=[text("x")]))) == "<div><p><del>x</del></p></div>"

    def test_text_lines_are_trimmed(self) -> None:
        assert render_html(para(text("a  \n   b"))) == "<div><p>a\nb</p></div>"

    def test_inline_code_collapses_whitespace(self) -> None:
        assert render_html(para(InlineCode(value="a  \n b"))) == "<div><p><code>a b</code></p></div>"

    def test_break(self) -> None:
        assert render_html(para(text("a"), Break(), text("  b"))) == "<div><p>a<br>\nb</p></div>"

    def test_break_trims_first_text_of_following_element(self) -> None:
        html = render_html(para(text("a"), Break(), Emphasis(children=[text("  c")])))
        assert html == "<div><p>a<br>\n<em>c</em></p></div>"

    def test_link(self) -> None:
        link = Link(url="/a b", title="T", children=[text("x")])
        assert render_html(para(link)) == '<div><p><a href="/a%20b" title="T">x</a></p></div>'

    def test_image(self) -> None:
        assert render_html(para(Image(url="/i.png"))) == '<div><p><img src="/i.png" alt=""></p></div>'
        image = Image(url="/i.png", alt="pic", title="T")
        assert render_html(para(image)) == '<div><p><img src="/i.png" alt="pic" title="T"></p></div>'

    def test_render_overrides(self) -> None:
        strong = Strong(children=[text("x")], data=NodeData(render_name="b", render_attributes={"title": "t"}))
        assert render_html(para(strong)) == '<div><p><b title="t">x</b></p></div>'


@pytest.mark.unit
class TestReferences:
    """Test link and image reference resolution."""

    def test_resolved_link_reference(self) -> None:
        html = render_html(
            para(LinkReference(identifier="X", reference_type="full", label="X", children=[text("txt")])),
            Definition(identifier="x", url="/x", title="t"),
        )
        assert html == '<div><p><a href="/x" title="t">txt</a></p></div>'

    def test_resolved_image_reference(self) -> None:
        html = render_html(
            para(ImageReference(identifier="logo", reference_type="collapsed", alt="Logo")),
            Definition(identifier="LOGO", url="/logo.png"),
        )
        assert html == '<div><p><img src="/logo.png" alt="Logo"></p></div>'

    @pytest.mark.parametrize(
        "reference_type,label,expected",
        [("shortcut", None, "[missing]"), ("collapsed", None, "[missing][]"), ("full", "lbl", "[missing][lbl]")],
    )
    def test_dangling_link_reference_is_literal(self, reference_type, label, expected) -> None:
        reference = LinkReference(
            identifier="missing", reference_type=reference_type, label=label, children=[text("missing")]
        )
        assert render_html(para(reference)) == f"<div><p>{expected}</p></div>"

    def test_dangling_reference_keeps_inline_content(self) -> None:
        reference = LinkReference(identifier="a b", children=[Emphasis(children=[text("a")]), text(" b")])
        assert render_html(para(reference)) == "<div><p>[<em>a</em> b]</p></div>"

    def test_dangling_image_reference_is_literal(self) -> None:
        reference = ImageReference(identifier="x", reference_type="full", label="x", alt="alt")
        assert render_html(para(reference)) == "<div><p>![alt][x]</p></div>"

    def test_empty_target_reverts_shortcut_only(self) -> None:
        definition = Definition(identifier="e", url="")
        shortcut = LinkReference(identifier="e", reference_type="shortcut", children=[text("e")])
        full = LinkReference(identifier="e", reference_type="full", label="e", children=[text("f")])
        assert render_html(para(shortcut, text(" "), full), definition) == '<div><p>[e] <a href="">f</a></p></div>'


@pytest.mark.unit
class TestFootnotes:
    """Test footnote references and the footnotes section."""

    def test_inline_footnotes_get_incrementing_identifiers(self, two_footnotes_root) -> None:
        html = to_html(VdomRenderer(VdomRendererOptions(sanitize=False)).compile(two_footnotes_root))
        assert html == (
            "<div><p>Hello"
            '<sup id="fnref-1"><a href="#fn-1" class="footnote-ref">1</a></sup> and'
            '<sup id="fnref-2"><a href="#fn-2" class="footnote-ref">2</a></sup></p>\n'
            '<div class="footnotes">\n<hr>\n<ol>\n'
            '<li id="fn-1">\na\n<a href="#fnref-1" class="footnote-backref">↩</a>\n</li>\n'
            '<li id="fn-2">\nb\n<a href="#fnref-2" class="footnote-backref">↩</a>\n</li>\n'
            "</ol>\n</div></div>"
        )

    def test_explicit_footnote_definition(self) -> None:
        html = render_html(
            para(text("x"), FootnoteReference(identifier="n")),
            FootnoteDefinition(identifier="n", children=[para(text("note"))]),
        )
        assert html == (
            '<div><p>x<sup id="fnref-n"><a href="#fn-n" class="footnote-ref">n</a></sup></p>\n'
            '<div class="footnotes">\n<hr>\n<ol>\n'
            '<li id="fn-n">\n<p>note</p>\n<a href="#fnref-n" class="footnote-backref">↩</a>\n</li>\n'
            "</ol>\n</div></div>"
        )

    def test_inline_footnote_skips_taken_identifiers(self) -> None:
        html = render_html(
            para(Footnote(children=[text("inline")])),
            FootnoteDefinition(identifier="1", children=[para(text("explicit"))]),
        )
        assert '<sup id="fnref-2">' in html
        assert html.index('id="fn-1"') < html.index('id="fn-2"')

    def test_nested_inline_footnote_is_listed(self) -> None:
        root = Root(children=[para(Footnote(children=[text("a"), Footnote(children=[text("b")])]))])
        tree = VdomRenderer(VdomRendererOptions(sanitize=False)).compile(root)
        html = to_html(tree)
        assert 'id="fn-1"' in html
        assert 'id="fn-2"' in html

    def test_no_footnotes_no_section(self) -> None:
        assert "footnotes" not in render_html(para(text("x")))

    def test_backref_label(self) -> None:
        html = render_html(para(Footnote(children=[text("a")])), footnote_backref_label="back")
        assert '<a href="#fnref-1" class="footnote-backref">back</a>' in html

    def test_default_sanitizer_clobbers_ids(self, two_footnotes_root) -> None:
        html = to_html(VdomRenderer().compile(two_footnotes_root))
        assert '<sup id="user-content-fnref-1"><a href="#fn-1">1</a></sup>' in html
        assert '<li id="user-content-fn-1">' in html


@pytest.mark.unit
class TestUnknownNodes:
    """Test the fallback for node types without a compiler."""

    def test_unknown_literal(self) -> None:
        assert render_html(Unknown(node_type="custom", value="v")) == "<div><div>v</div></div>"

    def test_unknown_parent(self) -> None:
        node = Unknown(node_type="custom", children=[para(text("x"))])
        assert render_html(node) == "<div><div><p>x</p></div></div>"

    def test_unknown_with_overrides(self) -> None:
        node = Unknown(node_type="custom", value="v", data=NodeData(render_name="section"))
        assert render_html(node) == "<div><section>v</section></div>"

    def test_unknown_handler(self) -> None:
        def handler(node, compiler):
            return Element("aside", children=[TextNode(node.type), *compiler.visit_all(node)])

        node = Unknown(node_type="callout", children=[text("!")])
        assert render_html(node, unknown_handler=handler) == "<div><aside>callout!</aside></div>"


@pytest.mark.unit
class TestMalformedInput:
    """Test structurally invalid trees."""

    def test_child_without_type(self) -> None:
        with pytest.raises(MalformedNodeError) as exc_info:
            VdomRenderer().compile(Root(children=[{"value": "x"}]))
        assert exc_info.value.value == {"value": "x"}
        assert "Expected node" in str(exc_info.value)

    def test_non_node_root(self) -> None:
        with pytest.raises(MalformedNodeError):
            VdomRenderer().compile("not a node")

    def test_nested_malformed_child(self) -> None:
        with pytest.raises(MalformedNodeError):
            VdomRenderer().compile(Root(children=[para(text("ok"), None)]))

    def test_malformed_table_row(self) -> None:
        with pytest.raises(MalformedNodeError):
            VdomRenderer().compile(Root(children=[Table(children=["row"])]))

    def test_wrong_options_type(self) -> None:
        with pytest.raises(InvalidOptionsError):
            VdomRenderer(options={"sanitize": False})


@pytest.mark.unit
class TestSanitizeStage:
    """Test the container and sanitizer re-entry."""

    def test_sanitizer_removing_everything_keeps_container(self) -> None:
        root = Root(children=[para(Emphasis(children=[text("Emphasis")]), text("!"))])
        tree = VdomRenderer(VdomRendererOptions(sanitize={"tagNames": []})).compile(root)
        assert tree == Element("div", children=[TextNode("Emphasis!")])

    def test_sanitizer_returning_none(self) -> None:
        options = VdomRendererOptions(sanitizer=lambda tree, schema: None)
        assert VdomRenderer(options).compile(Root(children=[para(text("x"))])) == Element("div")

    def test_sanitizer_returning_other_element(self) -> None:
        options = VdomRendererOptions(sanitizer=lambda tree, schema: Element("section"))
        tree = VdomRenderer(options).compile(Root())
        assert tree == Element("div", children=[Element("section")])

    def test_custom_sanitizer_receives_schema(self) -> None:
        seen = []

        def sanitizer(tree, schema):
            seen.append(schema)
            return tree

        options = VdomRendererOptions(sanitize={"tagNames": ["p"]}, sanitizer=sanitizer)
        VdomRenderer(options).compile(Root())
        assert seen[0].tag_names == frozenset({"p"})

    def test_sanitize_false_skips_sanitizer(self) -> None:
        calls = []
        options = VdomRendererOptions(sanitize=False, sanitizer=lambda tree, schema: calls.append(tree))
        VdomRenderer(options).compile(Root())
        assert calls == []

    def test_unsafe_link_is_neutralized(self) -> None:
        root = Root(children=[para(Link(url="javascript:alert(1)", children=[text("x")]))])
        assert to_html(VdomRenderer().compile(root)) == "<div><p><a>x</a></p></div>"


@pytest.mark.unit
class TestRender:
    """Test compile_nodes and full rendering."""

    def test_compile_nodes(self) -> None:
        renderer = VdomRenderer()
        assert renderer.compile_nodes(text("a")) == TextNode("a")
        assert renderer.compile_nodes(Yaml(value="x")) is None
        assert renderer.compile_nodes(Break()) == [Element("br"), TextNode("\n")]

    def test_render_assigns_keys(self, emphasis_root) -> None:
        tree = VdomRenderer().render(emphasis_root)
        assert tree.key == "h-1"
        assert tree.children[0].key == "h-2"
        assert tree.children[0].children[0].key == "h-3"

    def test_render_with_prefix(self, emphasis_root) -> None:
        assert VdomRenderer(VdomRendererOptions(key_prefix="f-")).render(emphasis_root).key == "f-1"

    def test_render_with_factory(self, emphasis_root) -> None:
        def factory(tag_name, props, children):
            return (tag_name, props.get("key"), tuple(children))

        tag_name, key, children = VdomRenderer(VdomRendererOptions(element_factory=factory)).render(emphasis_root)
        assert (tag_name, key) == ("div", "h-1")
        assert children[0][0] == "p"
        assert children[0][2][0] == ("em", "h-3", ("Emphasis",))

    def test_render_is_deterministic(self, two_footnotes_root) -> None:
        renderer = VdomRenderer()
        assert renderer.render(two_footnotes_root) == renderer.render(two_footnotes_root)

    def test_shared_renderer_across_threads(self) -> None:
        from concurrent.futures import ThreadPoolExecutor

        documents = [
            Root(
                children=[
                    para(text(f"doc {count}"), *[Footnote(children=[text(f"note {n}")]) for n in range(count)]),
                    para(LinkReference(identifier=f"ref{count}", children=[text("link")])),
                    Definition(identifier=f"REF{count}", url=f"/doc/{count}"),
                ]
            )
            for count in range(1, 13)
        ]
        renderer = VdomRenderer()
        expected = [renderer.render(document) for document in documents]

        jobs = [index for _ in range(20) for index in range(len(documents))]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda index: (index, renderer.render(documents[index])), jobs))

        assert len(results) == len(jobs)
        for index, result in results:
            assert result == expected[index]

    def test_source_tree_is_not_modified(self, two_footnotes_root) -> None:
        before = repr(two_footnotes_root)
        VdomRenderer().render(two_footnotes_root)
        assert repr(two_footnotes_root) == before
