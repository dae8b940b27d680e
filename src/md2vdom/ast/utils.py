#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/ast/utils.py
"""Utility functions for working with source-tree nodes.

Functions
---------
walk : Yield every node of a tree in document (pre-) order
iter_nodes : Yield every node of a given class
extract_text : Extract plain text from a node or list of nodes
table_column_count : Number of columns a table renders with

Examples
--------
Collect every definition in a document:

    >>> from md2vdom.ast import Definition, Root
    >>> from md2vdom.ast.utils import iter_nodes
    >>> root = Root(children=[Definition(identifier="a", url="https://example.com")])
    >>> [d.identifier for d in iter_nodes(root, Definition)]
    ['a']

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, TypeVar, Union

from md2vdom.ast.nodes import get_node_children

if TYPE_CHECKING:
    from md2vdom.ast.nodes import Node, Table

N = TypeVar("N")


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in document order.

    Traversal is iterative so that deeply nested trees cannot exhaust the
    interpreter's recursion limit.

    Parameters
    ----------
    node : Node
        Root of the subtree to traverse

    Yields
    ------
    Node
        Each node, parents before their children

    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(get_node_children(current)))


def iter_nodes(node: Node, node_class: type[N]) -> Iterator[N]:
    """Yield every node in the tree that is an instance of ``node_class``."""
    for current in walk(node):
        if isinstance(current, node_class):
            yield current


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = "") -> str:
    """Extract plain text from a node or list of nodes.

    Literal values (``Text``, ``InlineCode``, ``Code`` and other leaf nodes
    with a string ``value``) are concatenated; image ``alt`` text is included.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = ""
        String used to join the text of sibling nodes

    Returns
    -------
    str
        Concatenated text content

    Examples
    --------
        >>> from md2vdom.ast import Emphasis, Paragraph, Text
        >>> para = Paragraph(children=[Text(value="Hello "), Emphasis(children=[Text(value="world")])])
        >>> extract_text(para)
        'Hello world'

    """
    if isinstance(node_or_nodes, list):
        return joiner.join(part for part in (extract_text(n, joiner=joiner) for n in node_or_nodes) if part)

    node = node_or_nodes
    value = getattr(node, "value", None)
    if isinstance(value, str):
        return value

    alt = getattr(node, "alt", None)
    if isinstance(alt, str):
        return alt

    return extract_text(get_node_children(node), joiner=joiner)


def table_column_count(table: Table) -> int:
    """Return the number of columns of ``table``.

    This is the larger of the alignment count and the widest row, so short
    rows are padded and columns without alignment still appear.

    Examples
    --------
    >>> from md2vdom.ast import Table, TableCell, TableRow
    >>> table_column_count(Table(align=["left"], children=[TableRow(children=[TableCell(), TableCell()])]))
    2

    """
    columns = len(table.align)
    for row in table.children:
        columns = max(columns, len(get_node_children(row)))
    return columns


__all__ = [
    "walk",
    "iter_nodes",
    "extract_text",
    "table_column_count",
]
