#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/ast/serialization.py
"""JSON serialization and deserialization for source-tree nodes.

Host pipelines usually hand the compiler a tree produced by a JavaScript or
Python Markdown parser in mdast JSON form. This module converts that form to
and from the dataclass nodes in :mod:`md2vdom.ast.nodes`.

The JSON format is the mdast shape:

- ``type`` discriminant, ``children`` on containers, ``value`` on leaves
- variant fields (``depth``, ``ordered``, ``start``, ``loose``/``spread``,
  ``checked``, ``identifier``, ``label``, ``referenceType``, ``url``,
  ``title``, ``alt``, ``align``, ``lang``, ``meta``)
- ``position`` with ``start``/``end`` points
- ``data`` with ``renderName``/``renderAttributes`` (the hast-style
  ``hName``/``hProperties`` are accepted as aliases)

Discriminants without a dedicated class become :class:`~md2vdom.ast.nodes.Unknown`
nodes; a mapping without a ``type`` raises
:class:`~md2vdom.exceptions.MalformedNodeError`.

Examples
--------
Deserialize an mdast tree:

    >>> from md2vdom.ast.serialization import dict_to_ast
    >>> root = dict_to_ast({"type": "root", "children": [{"type": "text", "value": "Hi"}]})
    >>> root.children[0].value
    'Hi'

Serialize it back:

    >>> from md2vdom.ast.serialization import ast_to_json
    >>> ast_to_json(root)
    '{"type": "root", "children": [{"type": "text", "value": "Hi"}]}'

"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional

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
)
from md2vdom.constants import REFERENCE_TYPES
from md2vdom.exceptions import MalformedNodeError

logger = logging.getLogger(__name__)


# ============================================================================
# Serialization
# ============================================================================


def _serialize_data(data: Optional[NodeData]) -> Optional[dict[str, Any]]:
    """Serialize render overrides, or return None when there are none."""
    if data is None:
        return None
    result: dict[str, Any] = {}
    if data.render_name is not None:
        result["renderName"] = data.render_name
    if data.render_attributes:
        result["renderAttributes"] = dict(data.render_attributes)
    return result or None


def _serialize_position(location: Optional[SourceLocation]) -> Optional[dict[str, Any]]:
    """Serialize a source location as an mdast ``position``."""
    if location is None:
        return None

    def point(line: Optional[int], column: Optional[int], offset: Optional[int]) -> dict[str, int]:
        return {
            key: value
            for key, value in (("line", line), ("column", column), ("offset", offset))
            if value is not None
        }

    return {
        "start": point(location.line, location.column, location.offset),
        "end": point(location.end_line, location.end_column, location.end_offset),
    }


# Serialized field name -> node attribute, in output order. Attributes with a
# None value are omitted; ``children`` is handled separately.
_FIELDS: tuple[tuple[str, str], ...] = (
    ("depth", "depth"),
    ("ordered", "ordered"),
    ("start", "start"),
    ("loose", "loose"),
    ("checked", "checked"),
    ("align", "align"),
    ("identifier", "identifier"),
    ("label", "label"),
    ("referenceType", "reference_type"),
    ("url", "url"),
    ("title", "title"),
    ("alt", "alt"),
    ("lang", "lang"),
    ("meta", "meta"),
    ("value", "value"),
)


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert a source node to its mdast dictionary representation.

    Parameters
    ----------
    node : Node
        The node to convert

    Returns
    -------
    dict
        mdast-shaped dictionary

    Examples
    --------
    >>> from md2vdom.ast import Heading, Text
    >>> ast_to_dict(Heading(depth=2, children=[Text(value="Title")]))
    {'type': 'heading', 'depth': 2, 'children': [{'type': 'text', 'value': 'Title'}]}

    """
    result: dict[str, Any] = {"type": node.type}
    for key, attribute in _FIELDS:
        value = getattr(node, attribute, None)
        if value is None:
            continue
        if key == "align":
            value = list(value)
        elif key == "loose" and not value and not isinstance(node, List):
            # Item looseness is only interesting when set
            continue
        result[key] = value

    children = getattr(node, "children", None)
    if isinstance(children, list):
        result["children"] = [ast_to_dict(child) for child in children]

    data = _serialize_data(node.data)
    if data is not None:
        result["data"] = data

    position = _serialize_position(node.source_location)
    if position is not None:
        result["position"] = position

    return result


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize a source node to an mdast JSON string.

    Parameters
    ----------
    node : Node
        The node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON string representation

    """
    # Use ensure_ascii=False to preserve Unicode characters
    return json.dumps(ast_to_dict(node), indent=indent, ensure_ascii=False)


# ============================================================================
# Deserialization
# ============================================================================


def _deserialize_children(data: dict[str, Any]) -> list[Node]:
    """Recursively deserialize the ``children`` of a mapping."""
    children = data.get("children")
    if children is None:
        return []
    if not isinstance(children, list):
        raise MalformedNodeError(children, f"Expected a list of children, got `{children!r}`")
    return [dict_to_ast(child) for child in children]


def _deserialize_data(data: dict[str, Any]) -> Optional[NodeData]:
    """Read render overrides from the ``data`` side-channel."""
    raw = data.get("data")
    if not isinstance(raw, dict):
        return None

    render_name = next((raw[key] for key in ("renderName", "htmlName", "hName") if key in raw), None)
    render_attributes = next(
        (raw[key] for key in ("renderAttributes", "htmlAttributes", "hProperties") if key in raw), None
    )
    if render_name is None and not render_attributes:
        return None
    return NodeData(render_name=render_name, render_attributes=dict(render_attributes or {}))


def _deserialize_position(data: dict[str, Any]) -> Optional[SourceLocation]:
    """Read an mdast ``position`` into a SourceLocation."""
    position = data.get("position")
    if not isinstance(position, dict):
        return None
    start = position.get("start") or {}
    end = position.get("end") or {}
    return SourceLocation(
        line=start.get("line"),
        column=start.get("column"),
        end_line=end.get("line"),
        end_column=end.get("column"),
        offset=start.get("offset"),
        end_offset=end.get("offset"),
    )


def _common(data: dict[str, Any]) -> dict[str, Any]:
    """Keyword arguments shared by every node class."""
    return {"data": _deserialize_data(data), "source_location": _deserialize_position(data)}


def _url(data: dict[str, Any]) -> str:
    """Read a link target, accepting the older ``href``/``src``/``link`` names."""
    for key in ("url", "href", "src", "link"):
        value = data.get(key)
        if value is not None:
            return str(value)
    return ""


def _reference_type(data: dict[str, Any]) -> Any:
    """Read ``referenceType``, defaulting to ``shortcut`` for unrecognized values."""
    value = data.get("referenceType", data.get("reference_type", "shortcut"))
    if value not in REFERENCE_TYPES:
        logger.debug(f"Unknown reference type {value!r}, treating as shortcut")
        return "shortcut"
    return value


def _loose(data: dict[str, Any]) -> bool:
    return bool(data.get("loose", data.get("spread", False)))


def _container(node_class: type) -> Callable[[dict[str, Any]], Node]:
    """Build a deserializer for nodes that only have children."""

    def deserialize(data: dict[str, Any]) -> Node:
        return node_class(children=_deserialize_children(data), **_common(data))

    return deserialize


def _literal(node_class: type) -> Callable[[dict[str, Any]], Node]:
    """Build a deserializer for nodes that only have a value."""

    def deserialize(data: dict[str, Any]) -> Node:
        return node_class(value=str(data.get("value") or ""), **_common(data))

    return deserialize


def _void(node_class: type) -> Callable[[dict[str, Any]], Node]:
    """Build a deserializer for nodes without content."""

    def deserialize(data: dict[str, Any]) -> Node:
        return node_class(**_common(data))

    return deserialize


def _deserialize_heading(data: dict[str, Any]) -> Heading:
    """Deserialize Heading node."""
    return Heading(depth=int(data.get("depth", 1)), children=_deserialize_children(data), **_common(data))


def _deserialize_list(data: dict[str, Any]) -> List:
    """Deserialize List node."""
    start = data.get("start")
    return List(
        ordered=bool(data.get("ordered", False)),
        start=int(start) if start is not None else None,
        loose=_loose(data),
        children=_deserialize_children(data),
        **_common(data),
    )


def _deserialize_list_item(data: dict[str, Any]) -> ListItem:
    """Deserialize ListItem node."""
    checked = data.get("checked")
    return ListItem(
        children=_deserialize_children(data),
        checked=bool(checked) if checked is not None else None,
        loose=_loose(data),
        **_common(data),
    )


def _deserialize_table(data: dict[str, Any]) -> Table:
    """Deserialize Table node."""
    return Table(
        align=list(data.get("align") or []),
        children=_deserialize_children(data),
        **_common(data),
    )


def _deserialize_code(data: dict[str, Any]) -> Code:
    """Deserialize Code node."""
    return Code(
        value=str(data.get("value") or ""),
        lang=data.get("lang"),
        meta=data.get("meta"),
        **_common(data),
    )


def _deserialize_definition(data: dict[str, Any]) -> Definition:
    """Deserialize Definition node."""
    return Definition(
        identifier=str(data.get("identifier", "")),
        url=_url(data),
        title=data.get("title"),
        label=data.get("label"),
        **_common(data),
    )


def _deserialize_footnote_definition(data: dict[str, Any]) -> FootnoteDefinition:
    """Deserialize FootnoteDefinition node."""
    return FootnoteDefinition(
        identifier=str(data.get("identifier", "")),
        children=_deserialize_children(data),
        label=data.get("label"),
        **_common(data),
    )


def _deserialize_link(data: dict[str, Any]) -> Link:
    """Deserialize Link node."""
    return Link(url=_url(data), title=data.get("title"), children=_deserialize_children(data), **_common(data))


def _deserialize_image(data: dict[str, Any]) -> Image:
    """Deserialize Image node."""
    return Image(url=_url(data), title=data.get("title"), alt=data.get("alt"), **_common(data))


def _deserialize_link_reference(data: dict[str, Any]) -> LinkReference:
    """Deserialize LinkReference node."""
    return LinkReference(
        identifier=str(data.get("identifier", "")),
        reference_type=_reference_type(data),
        label=data.get("label"),
        children=_deserialize_children(data),
        **_common(data),
    )


def _deserialize_image_reference(data: dict[str, Any]) -> ImageReference:
    """Deserialize ImageReference node."""
    return ImageReference(
        identifier=str(data.get("identifier", "")),
        reference_type=_reference_type(data),
        label=data.get("label"),
        alt=data.get("alt"),
        **_common(data),
    )


def _deserialize_footnote_reference(data: dict[str, Any]) -> FootnoteReference:
    """Deserialize FootnoteReference node."""
    return FootnoteReference(identifier=str(data.get("identifier", "")), label=data.get("label"), **_common(data))


def _deserialize_unknown(data: dict[str, Any]) -> Unknown:
    """Deserialize a node whose discriminant has no dedicated class."""
    children = data.get("children")
    value = data.get("value")
    return Unknown(
        node_type=data["type"],
        children=_deserialize_children(data) if children is not None else None,
        value=str(value) if value is not None else None,
        **_common(data),
    )


# Dispatch table mapping discriminants to deserializer functions
_DESERIALIZATION_DISPATCH: dict[str, Callable[[dict[str, Any]], Node]] = {
    "root": _container(Root),
    "paragraph": _container(Paragraph),
    "heading": _deserialize_heading,
    "blockquote": _container(BlockQuote),
    "list": _deserialize_list,
    "listItem": _deserialize_list_item,
    "table": _deserialize_table,
    "tableRow": _container(TableRow),
    "tableCell": _container(TableCell),
    "code": _deserialize_code,
    "html": _literal(HTML),
    "thematicBreak": _void(ThematicBreak),
    "horizontalRule": _void(ThematicBreak),
    "thematicRule": _void(ThematicBreak),
    "definition": _deserialize_definition,
    "footnoteDefinition": _deserialize_footnote_definition,
    "yaml": _literal(Yaml),
    "text": _literal(Text),
    "emphasis": _container(Emphasis),
    "strong": _container(Strong),
    "delete": _container(Delete),
    "inlineCode": _literal(InlineCode),
    "break": _void(Break),
    "link": _deserialize_link,
    "image": _deserialize_image,
    "linkReference": _deserialize_link_reference,
    "imageReference": _deserialize_image_reference,
    "footnote": _container(Footnote),
    "footnoteReference": _deserialize_footnote_reference,
}


def dict_to_ast(data: Any) -> Node:
    """Convert an mdast dictionary back to a source node.

    Parameters
    ----------
    data : dict
        mdast-shaped dictionary

    Returns
    -------
    Node
        Reconstructed node

    Raises
    ------
    MalformedNodeError
        If ``data`` (or any descendant) is not a mapping with a string ``type``

    Examples
    --------
    >>> node = dict_to_ast({"type": "text", "value": "Hello"})
    >>> node.value
    'Hello'

    """
    if not isinstance(data, dict) or not isinstance(data.get("type"), str) or not data["type"]:
        raise MalformedNodeError(data)

    deserializer = _DESERIALIZATION_DISPATCH.get(data["type"])
    if deserializer is None:
        logger.debug(f"No node class for type '{data['type']}', keeping it as Unknown")
        return _deserialize_unknown(data)

    return deserializer(data)


def json_to_ast(json_str: str) -> Node:
    """Deserialize an mdast JSON string to a source node.

    Parameters
    ----------
    json_str : str
        JSON string representation

    Returns
    -------
    Node
        Reconstructed node

    Raises
    ------
    MalformedNodeError
        If the document (or any descendant) lacks a ``type`` discriminant
    json.JSONDecodeError
        If the JSON string is malformed

    """
    return dict_to_ast(json.loads(json_str))


__all__ = [
    "ast_to_dict",
    "dict_to_ast",
    "ast_to_json",
    "json_to_ast",
]
