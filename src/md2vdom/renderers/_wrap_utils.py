#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/renderers/_wrap_utils.py
"""Line-wrap policy for sibling render nodes.

Separator text nodes between block siblings are what distinguish "tight"
inline flow from "loose" block flow in the render tree.
"""

from __future__ import annotations

from typing import Sequence

from md2vdom.constants import LINE
from md2vdom.vdom.nodes import RenderNode, TextNode


def wrap_in_lines(nodes: Sequence[RenderNode], loose: bool = False) -> list[RenderNode]:
    """Insert line separators between render nodes.

    A separator goes between every adjacent pair. When ``loose`` is set, one
    more goes before the first node and, if there are any nodes, one after
    the last; an empty loose sequence therefore yields a single separator.

    Parameters
    ----------
    nodes : sequence of RenderNode
        Sibling nodes
    loose : bool, default = False
        Whether to surround the nodes with separators as well

    Returns
    -------
    list of RenderNode
        A new list

    Examples
    --------
    >>> from md2vdom.vdom.nodes import TextNode
    >>> [n.value for n in wrap_in_lines([TextNode("a"), TextNode("b")])]
    ['a', '\\n', 'b']
    >>> [n.value for n in wrap_in_lines([], loose=True)]
    ['\\n']

    """
    result: list[RenderNode] = []

    if loose:
        result.append(TextNode(LINE))

    for index, node in enumerate(nodes):
        if index:
            result.append(TextNode(LINE))
        result.append(node)

    if loose and nodes:
        result.append(TextNode(LINE))

    return result
