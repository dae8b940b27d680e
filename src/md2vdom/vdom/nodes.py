#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/vdom/nodes.py
"""Render-tree node classes.

The render tree is the compiler's output: a backend-agnostic virtual element
tree made of two node kinds only.

- :class:`Element` has a tag name, an attribute map and ordered children
- :class:`TextNode` holds a literal string

Render nodes are allocated fresh for every compilation and are owned by the
caller once returned; nothing is shared with the source tree.

The attribute map of an element is keyed by canonical name (the DOM property
name when one exists, otherwise the kebab-cased attribute name). The split
into DOM properties and plain HTML attributes happens when the tree is
materialized, see :func:`md2vdom.vdom.properties.split_properties`.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional, Union


@dataclass
class TextNode:
    """Literal text in the render tree.

    Parameters
    ----------
    value : str
        The text

    """

    type: ClassVar[str] = "text"

    value: str = ""


@dataclass
class Element:
    """Element in the render tree.

    Parameters
    ----------
    tag_name : str
        Lower-case tag name
    properties : dict, default = empty dict
        Canonical attribute name to value. Values are strings, numbers or
        ``True``; absent attributes are simply not present.
    children : list of RenderNode, default = empty list
        Ordered child nodes
    key : str or None, default = None
        Reconciliation key, assigned during materialization

    """

    type: ClassVar[str] = "element"

    tag_name: str
    properties: dict[str, Any] = field(default_factory=dict)
    children: list[RenderNode] = field(default_factory=list)
    key: Optional[str] = None


RenderNode = Union[Element, TextNode]


def is_element(node: Any, tag_name: str | None = None) -> bool:
    """Return whether ``node`` is an Element, optionally with the given tag name."""
    if not isinstance(node, Element):
        return False
    return tag_name is None or node.tag_name == tag_name


def text_content(node: RenderNode | list[RenderNode]) -> str:
    """Return the concatenated text of a render node or list of render nodes."""
    if isinstance(node, list):
        return "".join(text_content(child) for child in node)
    if isinstance(node, TextNode):
        return node.value
    return "".join(text_content(child) for child in node.children)


def merge_adjacent_text(nodes: list[RenderNode]) -> list[RenderNode]:
    """Return ``nodes`` with each run of adjacent text nodes merged into one."""
    merged: list[RenderNode] = []
    for node in nodes:
        if isinstance(node, TextNode) and merged and isinstance(merged[-1], TextNode):
            merged[-1] = TextNode(merged[-1].value + node.value)
        else:
            merged.append(node)
    return merged


__all__ = [
    "Element",
    "TextNode",
    "RenderNode",
    "is_element",
    "text_content",
    "merge_adjacent_text",
]
