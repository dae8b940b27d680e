#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for render-tree materialization and HTML serialization."""

import pytest

from md2vdom.vdom import Element, TextNode, create_element, to_hyperscript, to_html


def sample_tree() -> Element:
    return Element(
        "div",
        children=[
            Element("p", children=[Element("em", children=[TextNode("Emphasis")]), TextNode("!")]),
            TextNode("\n"),
            Element("hr"),
        ],
    )


@pytest.mark.unit
class TestToHyperscript:
    """Test materialization through factories and components."""

    def test_default_factory_builds_elements_with_keys(self) -> None:
        root = to_hyperscript(sample_tree())
        assert isinstance(root, Element)
        assert root.key == "h-1"
        paragraph, separator, rule = root.children
        assert paragraph.key == "h-2"
        assert paragraph.children[0].key == "h-3"
        assert separator == TextNode("\n")
        assert rule.key == "h-4"

    def test_custom_prefix(self) -> None:
        assert to_hyperscript(sample_tree(), key_prefix="f-").key == "f-1"

    @pytest.mark.parametrize("prefix", [None, ""])
    def test_keys_disabled(self, prefix) -> None:
        root = to_hyperscript(sample_tree(), key_prefix=prefix)
        assert root.key is None
        assert root.children[0].key is None

    def test_keys_restart_per_call(self) -> None:
        tree = sample_tree()
        assert to_hyperscript(tree).key == to_hyperscript(tree).key == "h-1"

    def test_custom_factory_receives_hyperscript_arguments(self) -> None:
        calls = []

        def factory(tag_name, props, children):
            calls.append((tag_name, props, children))
            return {"tag": tag_name, "props": props, "children": children}

        tree = Element("p", children=[Element("input", {"type": "checkbox", "disabled": True}), TextNode(" x")])
        result = to_hyperscript(tree, create=factory)

        assert [call[0] for call in calls] == ["input", "p"]
        assert calls[0][1] == {"type": "checkbox", "attributes": {"disabled": True}, "key": "h-2"}
        assert result["children"][1] == " x"
        assert result["children"][0]["tag"] == "input"
        assert result["props"] == {"key": "h-1"}

    def test_text_children_are_strings(self) -> None:
        seen = []

        def factory(tag_name, props, children):
            seen.extend(children)
            return tag_name

        to_hyperscript(Element("p", children=[TextNode("a")]), create=factory)
        assert seen == ["a"]

    def test_component_replaces_element(self) -> None:
        components = {"em": lambda tag_name, props, children: Element("i", children=list(children))}
        root = to_hyperscript(sample_tree(), components=components)
        assert to_html(root) == "<div><p><i>Emphasis</i>!</p>\n<hr></div>"

    def test_component_list_is_spliced(self) -> None:
        components = {"em": lambda tag_name, props, children: children}
        root = to_hyperscript(sample_tree(), components=components)
        assert to_html(root) == "<div><p>Emphasis!</p>\n<hr></div>"

    def test_component_none_is_dropped(self) -> None:
        components = {"hr": lambda tag_name, props, children: None}
        root = to_hyperscript(sample_tree(), components=components)
        assert to_html(root) == "<div><p><em>Emphasis</em>!</p>\n</div>"

    def test_component_lookup_is_case_insensitive(self) -> None:
        components = {"EM": lambda tag_name, props, children: children}
        assert to_html(to_hyperscript(sample_tree(), components=components)).startswith("<div><p>Emphasis!")

    def test_component_still_consumes_key(self) -> None:
        components = {"em": lambda tag_name, props, children: children}
        root = to_hyperscript(sample_tree(), components=components)
        assert root.children[-1].key == "h-4"

    @pytest.mark.parametrize("tree", [None, [TextNode("a"), TextNode("b")], TextNode("a")])
    def test_non_element_root_is_wrapped(self, tree) -> None:
        root = to_hyperscript(tree)
        assert root.tag_name == "div"
        assert root.key == "h-1"


@pytest.mark.unit
class TestCreateElement:
    """Test the default element factory."""

    def test_folds_attributes_back(self) -> None:
        element = create_element("INPUT", {"type": "checkbox", "attributes": {"disabled": True}, "key": "k"}, [])
        assert element == Element("input", {"type": "checkbox", "disabled": True}, [], key="k")

    def test_wraps_string_children(self) -> None:
        assert create_element("p", {}, ["a"]).children == [TextNode("a")]


@pytest.mark.unit
class TestToHtml:
    """Test HTML serialization."""

    def test_boolean_and_overloaded_boolean(self) -> None:
        assert to_html(Element("a", {"href": "x.mp3", "download": True}, [TextNode("Click")])) == (
            '<a href="x.mp3" download>Click</a>'
        )
        assert to_html(Element("a", {"href": "x.mp3", "download": "song.mp3"})) == (
            '<a href="x.mp3" download="song.mp3"></a>'
        )

    def test_attribute_names_and_escaping(self) -> None:
        element = Element("label", {"htmlFor": "a", "className": "x", "title": 'say "hi"'}, [TextNode("<&>")])
        assert to_html(element) == '<label for="a" class="x" title="say &quot;hi&quot;">&lt;&amp;&gt;</label>'

    def test_void_elements(self) -> None:
        element = Element("p", children=[Element("br"), Element("img", {"src": "/a"})])
        assert to_html(element) == '<p><br><img src="/a"></p>'

    def test_lists_and_none(self) -> None:
        assert to_html([TextNode("a"), Element("b")]) == "a<b></b>"
        assert to_html(None) == ""

    def test_rejects_foreign_objects(self) -> None:
        with pytest.raises(TypeError):
            to_html(Element("p", children=[{"tag": "x"}]))
