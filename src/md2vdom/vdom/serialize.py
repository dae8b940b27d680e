#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/vdom/serialize.py
"""HTML serialization of render trees.

:func:`to_html` turns a render tree into an HTML string. It exists for
inspection, debugging and tests; production consumers hand the tree to a UI
backend instead.

"""

from __future__ import annotations

import html
from typing import Any, Iterable

from md2vdom.constants import VOID_ELEMENTS
from md2vdom.vdom.nodes import Element, RenderNode, TextNode
from md2vdom.vdom.properties import attribute_name, classify


def _serialize_attributes(properties: dict[str, Any]) -> str:
    parts: list[str] = []
    for name, value in properties.items():
        classified = classify(name, value)
        if classified is None:
            continue
        attribute = attribute_name(classified.name)
        if classified.value is True:
            parts.append(f" {attribute}")
        else:
            parts.append(f' {attribute}="{html.escape(str(classified.value))}"')
    return "".join(parts)


def _serialize(node: Any, out: list[str]) -> None:
    if node is None:
        return
    if isinstance(node, list):
        for child in node:
            _serialize(child, out)
        return
    if isinstance(node, TextNode):
        out.append(html.escape(node.value, quote=False))
        return
    if isinstance(node, str):
        out.append(html.escape(node, quote=False))
        return
    if not isinstance(node, Element):
        raise TypeError(f"Cannot serialize {type(node).__name__} as HTML")

    out.append(f"<{node.tag_name}{_serialize_attributes(node.properties)}>")
    if node.tag_name in VOID_ELEMENTS:
        return
    _serialize(node.children, out)
    out.append(f"</{node.tag_name}>")


def to_html(node: RenderNode | Iterable[RenderNode] | None) -> str:
    """Serialize a render tree to HTML.

    Attribute names are mapped back from DOM names (``className`` becomes
    ``class``), boolean attributes are written bare, void elements get no
    closing tag, and text is escaped.

    Parameters
    ----------
    node : RenderNode, iterable of RenderNode, or None
        What to serialize

    Returns
    -------
    str
        HTML string

    Raises
    ------
    TypeError
        If the tree contains objects that are not render nodes (for example
        the output of a custom element factory)

    Examples
    --------
    >>> from md2vdom.vdom.nodes import Element, TextNode
    >>> to_html(Element("a", {"href": "x.mp3", "download": True}, [TextNode("Click")]))
    '<a href="x.mp3" download>Click</a>'

    """
    if node is not None and not isinstance(node, (Element, TextNode, str, list)):
        node = list(node)
    out: list[str] = []
    _serialize(node, out)
    return "".join(out)


__all__ = ["to_html"]
