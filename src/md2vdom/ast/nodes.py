#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/ast/nodes.py
"""Source-tree node classes for parsed Markdown documents.

This module defines the node hierarchy the compiler consumes. The shape follows
the mdast vocabulary used by Markdown parsers and host pipelines: every node
carries a ``type`` discriminant, container nodes hold ordered ``children`` and
leaf nodes hold a literal ``value``.

Source nodes are inputs only. The compiler reads them and never mutates them,
so one tree can be compiled any number of times, from any number of threads.

Node Hierarchy
--------------
Block-level nodes:
    - Root, Paragraph, Heading, BlockQuote, List, ListItem
    - Table, TableRow, TableCell, Code, HTML, ThematicBreak
    - Definition, FootnoteDefinition, Yaml

Inline nodes:
    - Text, Emphasis, Strong, Delete, InlineCode, Break
    - Link, Image, LinkReference, ImageReference
    - Footnote, FootnoteReference

Forward compatibility:
    - Unknown (any discriminant without a dedicated class)

Every node may carry a :class:`NodeData` side-channel with render overrides
(``render_name`` replaces the tag name, ``render_attributes`` is merged over the
default attributes).

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from md2vdom.constants import Alignment, ReferenceType


@dataclass(frozen=True)
class NodeData:
    """Render overrides attached to a source node.

    Parameters
    ----------
    render_name : str or None, default = None
        Tag name used instead of the compiler's default for this node
    render_attributes : dict, default = empty dict
        Attributes merged over the compiler's defaults (these win on collision)

    """

    render_name: Optional[str] = None
    render_attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class SourceLocation:
    """Source position of a node in the original Markdown text.

    Parameters
    ----------
    line : int or None, default = None
        1-indexed start line
    column : int or None, default = None
        1-indexed start column
    end_line : int or None, default = None
        1-indexed end line
    end_column : int or None, default = None
        1-indexed end column
    offset : int or None, default = None
        0-indexed start offset
    end_offset : int or None, default = None
        0-indexed end offset

    """

    line: Optional[int] = None
    column: Optional[int] = None
    end_line: Optional[int] = None
    end_column: Optional[int] = None
    offset: Optional[int] = None
    end_offset: Optional[int] = None


class Node(ABC):
    """Base class for all source-tree nodes.

    All nodes support the visitor pattern. ``type`` is the mdast discriminant
    string used in serialized trees.

    """

    type: ClassVar[str]
    data: Optional[NodeData]
    source_location: Optional[SourceLocation]

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Root(Node):
    """Root node of a parsed document.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the document
    data : NodeData or None, default = None
        Render overrides
    source_location : SourceLocation or None, default = None
        Source location information

    """

    type: ClassVar[str] = "root"

    children: list[Node] = field(default_factory=list)
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this root.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_root method

        Returns
        -------
        Any
            Result from visitor.visit_root(self)

        """
        return visitor.visit_root(self)


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content."""

    type: ClassVar[str] = "paragraph"

    children: list[Node] = field(default_factory=list)
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self)


@dataclass
class Heading(Node):
    """Heading node (h1-h6).

    Parameters
    ----------
    depth : int, default = 1
        Heading rank, 1 (most important) to 6
    children : list of Node, default = empty list
        Inline nodes representing heading text
    data : NodeData or None, default = None
        Render overrides
    source_location : SourceLocation or None, default = None
        Source location information

    """

    type: ClassVar[str] = "heading"

    depth: int = 1
    children: list[Node] = field(default_factory=list)
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this heading."""
        return visitor.visit_heading(self)


@dataclass
class BlockQuote(Node):
    """Block quote node containing other block elements."""

    type: ClassVar[str] = "blockquote"

    children: list[Node] = field(default_factory=list)
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this block quote."""
        return visitor.visit_block_quote(self)


@dataclass
class List(Node):
    """List node (ordered or unordered).

    Parameters
    ----------
    ordered : bool, default = False
        True for ordered lists, False for unordered
    start : int or None, default = None
        Starting number for ordered lists
    loose : bool, default = False
        Whether items are separated by blank lines (block-level rendering)
    children : list of ListItem, default = empty list
        List items
    data : NodeData or None, default = None
        Render overrides
    source_location : SourceLocation or None, default = None
        Source location information

    """

    type: ClassVar[str] = "list"

    ordered: bool = False
    start: Optional[int] = None
    loose: bool = False
    children: list[Node] = field(default_factory=list)
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_list method

        Returns
        -------
        Any
            Result from visitor.visit_list(self)

        """
        return visitor.visit_list(self)


@dataclass
class ListItem(Node):
    """List item node containing block content.

    Parameters
    ----------
    children : list of Node, default = empty list
        Block-level nodes in the list item
    checked : bool or None, default = None
        Task-list state; ``None`` means the item is not a task item
    loose : bool, default = False
        Whether the item itself was separated by blank lines
    data : NodeData or None, default = None
        Render overrides
    source_location : SourceLocation or None, default = None
        Source location information

    """

    type: ClassVar[str] = "listItem"

    children: list[Node] = field(default_factory=list)
    checked: Optional[bool] = None
    loose: bool = False
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list item."""
        return visitor.visit_list_item(self)


@dataclass
class Table(Node):
    """Table node (GFM extension).

    The first row is the header row. ``align`` holds one entry per column.

    Parameters
    ----------
    align : list of {'left', 'center', 'right', None}, default = empty list
        Column alignments, indexed by column position
    children : list of TableRow, default = empty list
        Table rows, header first
    data : NodeData or None, default = None
        Render overrides
    source_location : SourceLocation or None, default = None
        Source location information

    """

    type: ClassVar[str] = "table"

    align: list[Optional[Alignment]] = field(default_factory=list)
    children: list[Node] = field(default_factory=list)
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table."""
        return visitor.visit_table(self)


@dataclass
class TableRow(Node):
    """Table row node containing cells."""

    type: ClassVar[str] = "tableRow"

    children: list[Node] = field(default_factory=list)
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table row."""
        return visitor.visit_table_row(self)


@dataclass
class TableCell(Node):
    """Table cell node containing inline content."""

    type: ClassVar[str] = "tableCell"

    children: list[Node] = field(default_factory=list)
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table cell."""
        return visitor.visit_table_cell(self)


@dataclass
class Code(Node):
    """Code block node with optional language.

    Parameters
    ----------
    value : str, default = ""
        Code content (not parsed as markdown)
    lang : str or None, default = None
        Language from the fence info string
    meta : str or None, default = None
        Remainder of the info string after the language
    data : NodeData or None, default = None
        Render overrides (applied to the inner ``code`` element)
    source_location : SourceLocation or None, default = None
        Source location information

    """

    type: ClassVar[str] = "code"

    value: str = ""
    lang: Optional[str] = None
    meta: Optional[str] = None
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this code block."""
        return visitor.visit_code(self)


@dataclass
class HTML(Node):
    """Raw HTML node.

    The compiler never interprets ``value`` as markup; it is emitted as text.

    """

    type: ClassVar[str] = "html"

    value: str = ""
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this HTML node."""
        return visitor.visit_html(self)


@dataclass
class ThematicBreak(Node):
    """Thematic break (horizontal rule) node."""

    type: ClassVar[str] = "thematicBreak"

    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this thematic break."""
        return visitor.visit_thematic_break(self)


@dataclass
class Definition(Node):
    """Link/image definition node.

    Definitions produce no output of their own; references look them up by
    case-insensitive ``identifier``.

    Parameters
    ----------
    identifier : str, default = ""
        Normalized label used for lookups
    url : str, default = ""
        Link target
    title : str or None, default = None
        Optional advisory title
    label : str or None, default = None
        Label as written in the source
    data : NodeData or None, default = None
        Render overrides
    source_location : SourceLocation or None, default = None
        Source location information

    """

    type: ClassVar[str] = "definition"

    identifier: str = ""
    url: str = ""
    title: Optional[str] = None
    label: Optional[str] = None
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this definition."""
        return visitor.visit_definition(self)


@dataclass
class FootnoteDefinition(Node):
    """Footnote definition node.

    Parameters
    ----------
    identifier : str, default = ""
        Footnote identifier
    children : list of Node, default = empty list
        Footnote body
    label : str or None, default = None
        Label as written in the source
    data : NodeData or None, default = None
        Render overrides
    source_location : SourceLocation or None, default = None
        Source location information

    """

    type: ClassVar[str] = "footnoteDefinition"

    identifier: str = ""
    children: list[Node] = field(default_factory=list)
    label: Optional[str] = None
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this footnote definition."""
        return visitor.visit_footnote_definition(self)


@dataclass
class Yaml(Node):
    """Front-matter metadata node. Produces no output."""

    type: ClassVar[str] = "yaml"

    value: str = ""
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this front-matter node."""
        return visitor.visit_yaml(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Plain text node.

    Parameters
    ----------
    value : str, default = ""
        Literal text
    data : NodeData or None, default = None
        Render overrides
    source_location : SourceLocation or None, default = None
        Source location information

    """

    type: ClassVar[str] = "text"

    value: str = ""
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text node."""
        return visitor.visit_text(self)


@dataclass
class Emphasis(Node):
    """Emphasis (italic) node."""

    type: ClassVar[str] = "emphasis"

    children: list[Node] = field(default_factory=list)
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this emphasis node."""
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strong emphasis (bold) node."""

    type: ClassVar[str] = "strong"

    children: list[Node] = field(default_factory=list)
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strong node."""
        return visitor.visit_strong(self)


@dataclass
class Delete(Node):
    """Deleted (strikethrough) content node."""

    type: ClassVar[str] = "delete"

    children: list[Node] = field(default_factory=list)
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this delete node."""
        return visitor.visit_delete(self)


@dataclass
class InlineCode(Node):
    """Inline code span node."""

    type: ClassVar[str] = "inlineCode"

    value: str = ""
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline code node."""
        return visitor.visit_inline_code(self)


@dataclass
class Break(Node):
    """Hard line break node."""

    type: ClassVar[str] = "break"

    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this break."""
        return visitor.visit_break(self)


@dataclass
class Link(Node):
    """Hyperlink node.

    Parameters
    ----------
    url : str, default = ""
        Link target
    title : str or None, default = None
        Optional advisory title
    children : list of Node, default = empty list
        Inline nodes representing link text
    data : NodeData or None, default = None
        Render overrides
    source_location : SourceLocation or None, default = None
        Source location information

    """

    type: ClassVar[str] = "link"

    url: str = ""
    title: Optional[str] = None
    children: list[Node] = field(default_factory=list)
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link."""
        return visitor.visit_link(self)


@dataclass
class Image(Node):
    """Image node.

    Parameters
    ----------
    url : str, default = ""
        Image source
    title : str or None, default = None
        Optional advisory title
    alt : str or None, default = None
        Alternative text
    data : NodeData or None, default = None
        Render overrides
    source_location : SourceLocation or None, default = None
        Source location information

    """

    type: ClassVar[str] = "image"

    url: str = ""
    title: Optional[str] = None
    alt: Optional[str] = None
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image."""
        return visitor.visit_image(self)


@dataclass
class LinkReference(Node):
    """Link that refers to a :class:`Definition` by identifier.

    Parameters
    ----------
    identifier : str, default = ""
        Normalized label of the definition
    reference_type : {'shortcut', 'collapsed', 'full'}, default = 'shortcut'
        How the reference was written
    label : str or None, default = None
        Label as written in the source
    children : list of Node, default = empty list
        Inline nodes representing link text
    data : NodeData or None, default = None
        Render overrides
    source_location : SourceLocation or None, default = None
        Source location information

    """

    type: ClassVar[str] = "linkReference"

    identifier: str = ""
    reference_type: ReferenceType = "shortcut"
    label: Optional[str] = None
    children: list[Node] = field(default_factory=list)
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link reference."""
        return visitor.visit_link_reference(self)


@dataclass
class ImageReference(Node):
    """Image that refers to a :class:`Definition` by identifier."""

    type: ClassVar[str] = "imageReference"

    identifier: str = ""
    reference_type: ReferenceType = "shortcut"
    label: Optional[str] = None
    alt: Optional[str] = None
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image reference."""
        return visitor.visit_image_reference(self)


@dataclass
class Footnote(Node):
    """Inline footnote shorthand (``^[note]``).

    Compiling one allocates a new footnote definition with the lowest unused
    numeric identifier.

    """

    type: ClassVar[str] = "footnote"

    children: list[Node] = field(default_factory=list)
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this inline footnote."""
        return visitor.visit_footnote(self)


@dataclass
class FootnoteReference(Node):
    """Reference to a footnote definition."""

    type: ClassVar[str] = "footnoteReference"

    identifier: str = ""
    label: Optional[str] = None
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this footnote reference."""
        return visitor.visit_footnote_reference(self)


# ============================================================================
# Forward compatibility
# ============================================================================


@dataclass
class Unknown(Node):
    """Node whose discriminant has no dedicated class.

    Keeps whatever the host supplied so the compiler can render a generic
    container for it.

    Parameters
    ----------
    node_type : str
        The discriminant string as found in the source tree
    children : list of Node or None, default = None
        Child nodes, when the node is a container
    value : str or None, default = None
        Literal value, when the node is a leaf
    data : NodeData or None, default = None
        Render overrides
    source_location : SourceLocation or None, default = None
        Source location information

    """

    node_type: str = "unknown"
    children: Optional[list[Node]] = None
    value: Optional[str] = None
    data: Optional[NodeData] = None
    source_location: Optional[SourceLocation] = None

    @property  # type: ignore[override]
    def type(self) -> str:  # type: ignore[override]
        """Return the discriminant found in the source tree."""
        return self.node_type

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node."""
        return visitor.visit_unknown(self)


# ============================================================================
# Helpers
# ============================================================================


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    Examples
    --------
    >>> paragraph = Paragraph(children=[Text(value="Hello"), Strong(children=[Text(value="world")])])
    >>> len(get_node_children(paragraph))
    2

    """
    children = getattr(node, "children", None)
    if isinstance(children, list):
        return list(children)
    return []


def is_parent(node: Any) -> bool:
    """Return whether ``node`` is a container (has a ``children`` list)."""
    return isinstance(getattr(node, "children", None), list)


__all__ = [
    "NodeData",
    "SourceLocation",
    "Node",
    "Root",
    "Paragraph",
    "Heading",
    "BlockQuote",
    "List",
    "ListItem",
    "Table",
    "TableRow",
    "TableCell",
    "Code",
    "HTML",
    "ThematicBreak",
    "Definition",
    "FootnoteDefinition",
    "Yaml",
    "Text",
    "Emphasis",
    "Strong",
    "Delete",
    "InlineCode",
    "Break",
    "Link",
    "Image",
    "LinkReference",
    "ImageReference",
    "Footnote",
    "FootnoteReference",
    "Unknown",
    "get_node_children",
    "is_parent",
]
