#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/renderers/vdom.py
"""Render-tree compilation from source trees.

This module provides the VdomRenderer class which compiles an mdast-shaped
source tree into a generic virtual-element render tree, sanitizes it, and
materializes it through a hyperscript-style element factory.

Compilation of one document runs in three steps:

1. The node compiler indexes definitions and footnotes, then visits the tree
   and produces render nodes, finishing with the footnotes section.
2. The result is wrapped in a container ``div`` and, unless sanitizing is
   disabled, passed through the sanitizer. If the sanitizer removes the
   container, a fresh one is wrapped around what is left, so the result is
   always a single container element.
3. The tree is materialized with the configured components, element factory
   and key prefix.

All state lives on a per-call :class:`~md2vdom.renderers._resolver.CompileContext`;
a renderer instance can be shared between threads.

"""

from __future__ import annotations

import logging
from typing import Any, Optional, Union, cast

from md2vdom.ast.nodes import (
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
    Node,
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
    get_node_children,
    is_parent,
)
from md2vdom.ast.utils import table_column_count
from md2vdom.ast.visitors import NodeVisitor
from md2vdom.constants import (
    DEFAULT_CONTAINER_TAG,
    FOOTNOTE_BACKREF_CLASS,
    FOOTNOTE_ID_PREFIX,
    FOOTNOTE_REF_CLASS,
    FOOTNOTE_REF_ID_PREFIX,
    FOOTNOTE_SECTION_CLASS,
    LINE,
)
from md2vdom.exceptions import MalformedNodeError
from md2vdom.options.vdom import VdomRendererOptions
from md2vdom.renderers._resolver import CompileContext, DefinitionEntry, FootnoteEntry
from md2vdom.renderers._wrap_utils import wrap_in_lines
from md2vdom.renderers.base import BaseRenderer
from md2vdom.utils.html_sanitizer import sanitize
from md2vdom.utils.security import normalize_uri
from md2vdom.utils.text import collapse_whitespace, detab, trim_left, trim_lines
from md2vdom.vdom.factory import build, normalize_content
from md2vdom.vdom.hyperscript import to_hyperscript
from md2vdom.vdom.nodes import Element, RenderNode, TextNode, is_element, merge_adjacent_text

logger = logging.getLogger(__name__)

Compiled = Union[RenderNode, list[RenderNode], None]

_CLASS_KEYS = ("class", "className", "classname")


def _merge_class(data: Optional[NodeData], extra: str) -> tuple[dict[str, Any], Optional[NodeData]]:
    """Put ``extra`` into a class attribute, keeping any class from ``data`` in front of it."""
    if data is None or not data.render_attributes:
        return {"className": extra}, data

    overrides = dict(data.render_attributes)
    existing = [overrides.pop(key) for key in _CLASS_KEYS if overrides.get(key) is not None]
    if not existing:
        return {"className": extra}, data

    classes: list[str] = []
    for value in existing:
        classes.extend(value if isinstance(value, (list, tuple)) else [value])
    merged = " ".join(str(value) for value in [*classes, extra])
    return {"className": merged}, NodeData(render_name=data.render_name, render_attributes=overrides)


class _NodeCompiler(NodeVisitor):
    """Visitor that compiles source nodes into render nodes.

    One instance compiles one document. Every ``visit_*`` method returns a
    render node, a list of render nodes, or None for "no output".

    Custom ``unknown_handler`` callables receive the compiler and may use
    :meth:`visit`, :meth:`visit_all` and :meth:`unknown`.

    Parameters
    ----------
    context : CompileContext
        Per-call state: options, definition index, footnotes

    """

    def __init__(self, context: CompileContext):
        self.context = context
        self.options = context.options
        self._parents: list[Optional[Node]] = []

    @property
    def parent(self) -> Optional[Node]:
        """The parent of the node being compiled, if any."""
        return self._parents[-1] if self._parents else None

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def visit(self, node: Any, parent: Optional[Node] = None) -> Compiled:
        """Compile one node.

        Parameters
        ----------
        node : Node
            Node to compile
        parent : Node or None, default None
            Its parent

        Returns
        -------
        RenderNode, list of RenderNode, or None
            Compiled output

        Raises
        ------
        MalformedNodeError
            If ``node`` is not a node with a ``type`` discriminant

        """
        if not isinstance(node, Node) or not getattr(node, "type", None):
            raise MalformedNodeError(node)

        self._parents.append(parent)
        try:
            return self.dispatch(node)
        finally:
            self._parents.pop()

    def visit_all(self, parent: Node) -> list[RenderNode]:
        """Compile the children of ``parent`` and concatenate the results.

        Text right after a hard break loses its leading whitespace.

        Parameters
        ----------
        parent : Node
            Node whose children to compile

        Returns
        -------
        list of RenderNode
            Compiled children, flattened

        """
        values: list[RenderNode] = []
        previous: Optional[Node] = None

        for child in get_node_children(parent):
            value = self.visit(child, parent)

            if value is not None:
                if isinstance(previous, Break):
                    value = self._trim_after_break(value)
                if isinstance(value, list):
                    values.extend(value)
                else:
                    values.append(value)

            previous = child

        return values

    @staticmethod
    def _trim_after_break(value: Compiled) -> Compiled:
        if isinstance(value, TextNode):
            return TextNode(trim_left(value.value))
        if isinstance(value, Element) and value.children and isinstance(value.children[0], TextNode):
            value.children[0] = TextNode(trim_left(value.children[0].value))
        return value

    def unknown(self, node: Node) -> Element:
        """Render a generic container for a node without a dedicated compiler.

        The content is the compiled children when the node has children, else
        its literal value. Render overrides on the node apply as usual.
        """
        children = getattr(node, "children", None)
        content = self.visit_all(node) if children is not None else getattr(node, "value", None)
        return build(DEFAULT_CONTAINER_TAG, content=content, data=node.data)

    def visit_unknown(self, node: Unknown) -> Compiled:
        """Compile a node without a dedicated class through the unknown-node fallback."""
        logger.debug(f"No compiler for node type '{node.type}', using fallback")
        handler = self.options.unknown_handler
        if handler is not None:
            return handler(node, self)
        return self.unknown(node)

    def generic_visit(self, node: Node) -> Compiled:
        return self.unknown(node)

    # ------------------------------------------------------------------
    # Document
    # ------------------------------------------------------------------

    def visit_root(self, node: Root) -> list[RenderNode]:
        """Index references, compile the children, then append the footnotes section."""
        self.context.index(node)

        result = wrap_in_lines(self.visit_all(node))

        footnotes = self.footnotes()
        if footnotes is not None:
            result.append(TextNode(LINE))
            result.append(footnotes)

        return result

    def footnotes(self) -> Optional[Element]:
        """Render every collected footnote as an ordered list section.

        Footnote bodies may themselves contain inline footnotes; those are
        appended to the registry while rendering and listed as well.

        Returns
        -------
        Element or None
            The footnotes section, or None when there are no footnotes

        """
        registry = self.context.footnotes
        if not len(registry):
            return None

        items: list[RenderNode] = []
        index = 0
        while index < len(registry):
            items.append(self._footnote_item(registry[index]))
            index += 1

        return build(
            "div",
            {"className": FOOTNOTE_SECTION_CLASS},
            wrap_in_lines([build("hr"), build("ol", content=wrap_in_lines(items, loose=True))], loose=True),
        )

    def _footnote_item(self, entry: FootnoteEntry) -> Element:
        backref = Link(
            url=f"#{FOOTNOTE_REF_ID_PREFIX}{entry.identifier}",
            children=[Text(value=self.options.footnote_backref_label)],
            data=NodeData(render_attributes={"className": FOOTNOTE_BACKREF_CLASS}),
        )
        item = ListItem(
            children=[*entry.children, backref],
            data=NodeData(render_attributes={"id": f"{FOOTNOTE_ID_PREFIX}{entry.identifier}"}),
            source_location=entry.source_location,
        )
        return cast(Element, self.visit(item))

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_paragraph(self, node: Paragraph) -> Element:
        return build("p", content=self.visit_all(node), data=node.data)

    def visit_heading(self, node: Heading) -> Element:
        depth = min(max(int(node.depth), 1), 6)
        return build(f"h{depth}", content=self.visit_all(node), data=node.data)

    def visit_block_quote(self, node: BlockQuote) -> Element:
        return build("blockquote", content=wrap_in_lines(self.visit_all(node), loose=True), data=node.data)

    def visit_list(self, node: List) -> Element:
        """Render an ordered or unordered list; ``start`` only appears when it is not 1."""
        start = node.start if node.ordered and node.start is not None and node.start != 1 else None
        return build(
            "ol" if node.ordered else "ul",
            {"start": start},
            wrap_in_lines(self.visit_all(node), loose=True),
            node.data,
        )

    def visit_list_item(self, node: ListItem) -> Element:
        """Render a list item.

        Under a tight list, an item whose only child is a container is
        unwrapped: the grandchildren are compiled directly, so a tight item
        renders as ``<li>text</li>`` instead of ``<li><p>text</p></li>``.

        Task items get a disabled checkbox and a space in front of their
        content, inside the first paragraph unless the item was unwrapped.
        """
        parent = self.parent
        children = node.children
        single = not getattr(parent, "loose", False) and len(children) == 1 and is_parent(children[0])

        result = self.visit_all(children[0]) if single else self.visit_all(node)

        if node.checked is not None:
            checkbox: list[RenderNode] = [
                build("input", {"type": "checkbox", "checked": node.checked, "disabled": True}),
                TextNode(" "),
            ]
            if single:
                result[0:0] = checkbox
            else:
                if result and is_element(result[0], "p"):
                    first = cast(Element, result[0])
                else:
                    first = build("p")
                    result.insert(0, first)
                first.children[0:0] = checkbox

        content = result if single else wrap_in_lines(result, loose=True)
        return build("li", content=content, data=node.data)

    def visit_table(self, node: Table) -> Element:
        """Render a table; the first row is the header, alignment applies per column."""
        columns = table_column_count(node)
        rows: list[RenderNode] = []

        for index, row in enumerate(node.children):
            if not isinstance(row, Node):
                raise MalformedNodeError(row)
            name = "th" if index == 0 else "td"
            cells = get_node_children(row)
            out: list[RenderNode] = []

            for position in range(columns):
                cell = cells[position] if position < len(cells) else None
                if cell is not None and not isinstance(cell, Node):
                    raise MalformedNodeError(cell)
                align = node.align[position] if position < len(node.align) else None
                out.append(
                    build(
                        name,
                        {"align": align},
                        wrap_in_lines(self.visit_all(cell)) if cell is not None else [],
                        cell.data if cell is not None else None,
                    )
                )

            rows.append(build("tr", content=wrap_in_lines(out, loose=True), data=row.data))

        return build(
            "table",
            content=wrap_in_lines(
                [
                    build("thead", content=wrap_in_lines(rows[:1], loose=True)),
                    build("tbody", content=wrap_in_lines(rows[1:], loose=True)),
                ],
                loose=True,
            ),
            data=node.data,
        )

    def visit_table_row(self, node: TableRow) -> Element:
        return build("tr", content=wrap_in_lines(self.visit_all(node), loose=True), data=node.data)

    def visit_table_cell(self, node: TableCell) -> Element:
        return build("td", content=self.visit_all(node), data=node.data)

    def visit_code(self, node: Code) -> Element:
        """Render a code block as ``pre > code``; overrides apply to ``code``."""
        value = detab(node.value + LINE, self.options.tab_size) if node.value else ""

        attributes: dict[str, Any] = {}
        data = node.data
        if node.lang:
            attributes, data = _merge_class(data, f"language-{node.lang}")

        return build("pre", content=build("code", attributes, value, data))

    def visit_html(self, node: HTML) -> TextNode:
        # Raw HTML is never interpreted as markup
        return TextNode(node.value)

    def visit_thematic_break(self, node: ThematicBreak) -> Element:
        return build("hr", data=node.data)

    def visit_definition(self, node: Definition) -> None:
        return None

    def visit_footnote_definition(self, node: FootnoteDefinition) -> None:
        return None

    def visit_yaml(self, node: Yaml) -> None:
        return None

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> TextNode:
        return TextNode(trim_lines(node.value))

    def visit_emphasis(self, node: Emphasis) -> Element:
        return build("em", content=self.visit_all(node), data=node.data)

    def visit_strong(self, node: Strong) -> Element:
        return build("strong", content=self.visit_all(node), data=node.data)

    def visit_delete(self, node: Delete) -> Element:
        return build("del", content=self.visit_all(node), data=node.data)

    def visit_inline_code(self, node: InlineCode) -> Element:
        return build("code", content=collapse_whitespace(node.value), data=node.data)

    def visit_break(self, node: Break) -> list[RenderNode]:
        return [build("br", data=node.data), TextNode(LINE)]

    def visit_link(self, node: Link) -> Element:
        return build(
            "a",
            {"href": normalize_uri(node.url), "title": node.title},
            self.visit_all(node),
            node.data,
        )

    def visit_image(self, node: Image) -> Element:
        return build(
            "img",
            {"src": normalize_uri(node.url), "alt": node.alt or "", "title": node.title},
            data=node.data,
        )

    def _resolve_reference(
        self, node: Union[LinkReference, ImageReference]
    ) -> Union[DefinitionEntry, list[RenderNode]]:
        """Return the definition a reference points to, or literal text when it cannot be resolved.

        Without any definition every form reverts; a definition without a
        target only reverts shortcut references.
        """
        definition = self.context.definitions.get(node.identifier)
        if definition is not None and (definition.url or node.reference_type != "shortcut"):
            return definition

        logger.debug(f"Unresolved {node.reference_type} reference '{node.identifier}', rendering as text")

        if node.reference_type == "collapsed":
            suffix = "[]"
        elif node.reference_type == "full":
            suffix = f"[{node.label if node.label is not None else node.identifier}]"
        else:
            suffix = ""

        if isinstance(node, ImageReference):
            return [TextNode(f"![{node.alt or ''}]{suffix}")]

        return [TextNode("["), *self.visit_all(node), TextNode(f"]{suffix}")]

    def visit_link_reference(self, node: LinkReference) -> Compiled:
        resolved = self._resolve_reference(node)
        if isinstance(resolved, list):
            return resolved

        return build(
            "a",
            {"href": normalize_uri(resolved.url), "title": resolved.title},
            self.visit_all(node),
            node.data,
        )

    def visit_image_reference(self, node: ImageReference) -> Compiled:
        resolved = self._resolve_reference(node)
        if isinstance(resolved, list):
            return resolved

        return build(
            "img",
            {"src": normalize_uri(resolved.url), "alt": node.alt or "", "title": resolved.title},
            data=node.data,
        )

    def visit_footnote(self, node: Footnote) -> Element:
        """Register the inline footnote body and render a reference to it."""
        entry = self.context.footnotes.allocate(node.children, node.source_location)
        return self._footnote_reference(entry.identifier, None)

    def visit_footnote_reference(self, node: FootnoteReference) -> Element:
        return self._footnote_reference(node.identifier, node.data)

    @staticmethod
    def _footnote_reference(identifier: str, data: Optional[NodeData]) -> Element:
        link = build(
            "a",
            {"href": f"#{FOOTNOTE_ID_PREFIX}{identifier}", "className": FOOTNOTE_REF_CLASS},
            identifier,
        )
        return build("sup", {"id": f"{FOOTNOTE_REF_ID_PREFIX}{identifier}"}, [link], data)


class VdomRenderer(BaseRenderer):
    """Compile source trees into virtual-element render trees.

    Parameters
    ----------
    options : VdomRendererOptions or None, default = None
        Rendering options

    Examples
    --------
    Basic usage:

        >>> from md2vdom.ast import Emphasis, Paragraph, Root, Text
        >>> from md2vdom.renderers.vdom import VdomRenderer
        >>> from md2vdom.vdom import to_html
        >>> root = Root(children=[Paragraph(children=[Emphasis(children=[Text(value="Hi")])])])
        >>> to_html(VdomRenderer().render(root))
        '<div><p><em>Hi</em></p></div>'

    """

    def __init__(self, options: VdomRendererOptions | None = None):
        """Initialize the renderer with options."""
        BaseRenderer._validate_options_type(options, VdomRendererOptions, "vdom")
        options = options or VdomRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: VdomRendererOptions = options

    def compile_nodes(self, node: Node) -> Compiled:
        """Run the node compiler alone on ``node``.

        No container, no sanitizing, no materialization. Definitions and
        footnotes are only indexed when ``node`` is a ``Root``.

        Parameters
        ----------
        node : Node
            Node to compile

        Returns
        -------
        RenderNode, list of RenderNode, or None
            Compiled output

        Raises
        ------
        MalformedNodeError
            If the tree contains a value that is not a node

        """
        compiler = _NodeCompiler(CompileContext(options=self.options))
        return compiler.visit(node)

    def compile(self, root: Node) -> Element:
        """Compile ``root`` into a sanitized render tree.

        Parameters
        ----------
        root : Node
            Root of the source tree

        Returns
        -------
        Element
            Container element holding the document

        Raises
        ------
        MalformedNodeError
            If the tree contains a value that is not a node

        """
        tree = Element(DEFAULT_CONTAINER_TAG, children=normalize_content(self.compile_nodes(root)))

        schema = self.options.schema
        if schema is None:
            return tree

        sanitizer = self.options.sanitizer or sanitize
        result = sanitizer(tree, schema)

        if is_element(result, DEFAULT_CONTAINER_TAG):
            return result

        logger.debug("Sanitizer removed the container, wrapping the remaining nodes again")
        if result is None:
            children: list[RenderNode] = []
        elif isinstance(result, list):
            children = list(result)
        else:
            children = [result]
        return Element(DEFAULT_CONTAINER_TAG, children=merge_adjacent_text(children))

    def render(self, root: Node) -> Any:
        """Compile ``root`` and materialize it through the configured factory.

        Parameters
        ----------
        root : Node
            Root of the source tree

        Returns
        -------
        Any
            The container, as returned by the element factory (an
            :class:`~md2vdom.vdom.nodes.Element` with keys by default)

        Raises
        ------
        MalformedNodeError
            If the tree contains a value that is not a node

        """
        return to_hyperscript(
            self.compile(root),
            create=self.options.element_factory,
            components=self.options.components,
            key_prefix=self.options.key_prefix,
        )


__all__ = ["VdomRenderer"]
