#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/vdom/factory.py
"""Element Factory: the single constructor for render-tree elements.

Every element the compiler emits is created by :func:`build`. It applies the
render overrides of the source node uniformly, whatever the node type:

- ``data.render_name`` replaces the default tag name
- ``data.render_attributes`` is merged over the default attributes, winning
  on collisions

All attributes, defaults and overrides alike, go through the Attribute
Mapper (:func:`md2vdom.vdom.properties.normalize_properties`).

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence, Union

from md2vdom.vdom.nodes import Element, RenderNode, TextNode
from md2vdom.vdom.properties import normalize_properties

if TYPE_CHECKING:
    from md2vdom.ast.nodes import NodeData

Content = Union[None, str, RenderNode, Sequence[RenderNode]]


def normalize_content(content: Content) -> list[RenderNode]:
    """Turn element content into a list of render nodes.

    Parameters
    ----------
    content : str, RenderNode, sequence of RenderNode, or None
        ``None`` and ``""`` give no children; any other string becomes a
        single text node

    Returns
    -------
    list of RenderNode
        A new list

    """
    if content is None:
        return []
    if isinstance(content, str):
        return [TextNode(content)] if content else []
    if isinstance(content, (Element, TextNode)):
        return [content]
    return list(content)


def build(
    name: str,
    attributes: Optional[Mapping[str, Any]] = None,
    content: Content = None,
    data: Optional["NodeData"] = None,
) -> Element:
    """Create an element from defaults and a node's render overrides.

    Parameters
    ----------
    name : str
        Default tag name
    attributes : Mapping or None, default = None
        Default attributes (any naming convention; ``None`` values are absent)
    content : str, RenderNode, sequence of RenderNode, or None, default = None
        Already-compiled children
    data : NodeData or None, default = None
        Render overrides from the source node

    Returns
    -------
    Element
        The new element

    Examples
    --------
    >>> from md2vdom.ast import NodeData
    >>> build("strong", content="hi", data=NodeData(render_name="b")).tag_name
    'b'
    >>> build("a", {"href": "x", "title": None}).properties
    {'href': 'x'}

    """
    render_name = data.render_name if data is not None else None
    overrides = data.render_attributes if data is not None else None

    return Element(
        tag_name=render_name or name,
        properties=normalize_properties(attributes, overrides),
        children=normalize_content(content),
    )


__all__ = [
    "Content",
    "normalize_content",
    "build",
]
