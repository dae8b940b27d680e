#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/ast/__init__.py
"""Source-tree module for parsed Markdown documents.

The source tree is the compiler's input: an mdast-shaped tree produced by a
Markdown parser. This package defines it and the tools around it.

The module consists of several components:

- nodes: node classes representing document structure
- visitors: Visitor pattern implementation for tree traversal
- utils: traversal and text extraction helpers
- serialization: mdast JSON serialization and deserialization

Examples
--------
Basic usage:

    >>> from md2vdom.ast import Heading, Paragraph, Root, Text
    >>> from md2vdom.renderers.vdom import VdomRenderer
    >>>
    >>> root = Root(children=[
    ...     Heading(depth=1, children=[Text(value="Title")]),
    ...     Paragraph(children=[Text(value="Hello world")])
    ... ])
    >>> tree = VdomRenderer().compile(root)

"""

from __future__ import annotations

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
    SourceLocation,
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
from md2vdom.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast
from md2vdom.ast.utils import extract_text, iter_nodes, table_column_count, walk
from md2vdom.ast.visitors import NodeVisitor

__all__ = [
    # Base and side-channels
    "Node",
    "NodeData",
    "SourceLocation",
    # Block nodes
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
    # Inline nodes
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
    # Node helpers
    "get_node_children",
    "is_parent",
    # Visitors
    "NodeVisitor",
    # Serialization
    "ast_to_dict",
    "dict_to_ast",
    "ast_to_json",
    "json_to_ast",
    # Utilities
    "walk",
    "iter_nodes",
    "extract_text",
    "table_column_count",
]
