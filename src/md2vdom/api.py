#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/api.py
"""Public entry points for compiling source trees.

:func:`to_vdom` compiles a source tree (a node, an mdast dict, or its JSON
text) into a materialized render tree; :func:`to_html` does the same and
serializes the result for inspection.

Options come from a :class:`~md2vdom.options.vdom.VdomRendererOptions`
instance, from keyword arguments, or both; keyword arguments win and may use
either the Python field names or the camelCase names of JavaScript hosts.
"""

from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Mapping, Optional, Union

from md2vdom.ast.nodes import Node
from md2vdom.ast.serialization import dict_to_ast, json_to_ast
from md2vdom.exceptions import MalformedNodeError
from md2vdom.options.vdom import _SETTING_ALIASES, VdomRendererOptions
from md2vdom.renderers.vdom import VdomRenderer
from md2vdom.vdom.serialize import to_html as _serialize_html

logger = logging.getLogger(__name__)

SourceTree = Union[Node, Mapping[str, Any], str]


def _resolve_source(source: SourceTree) -> Node:
    """Turn any accepted source representation into a node.

    Raises
    ------
    MalformedNodeError
        If ``source`` is none of a node, an mdast mapping or mdast JSON text

    """
    if isinstance(source, Node):
        return source
    if isinstance(source, str):
        logger.debug("Parsing source tree from JSON")
        return json_to_ast(source)
    if isinstance(source, Mapping):
        return dict_to_ast(dict(source))
    raise MalformedNodeError(source)


def _resolve_options(options: Optional[VdomRendererOptions], kwargs: dict[str, Any]) -> VdomRendererOptions:
    """Merge keyword overrides into ``options``; unknown names are skipped."""
    if not kwargs:
        return options or VdomRendererOptions()

    if options is None:
        return VdomRendererOptions.from_settings(kwargs)

    field_names = {f.name for f in fields(VdomRendererOptions)}
    updates: dict[str, Any] = {}
    for name, value in kwargs.items():
        field_name = _SETTING_ALIASES.get(name, name)
        if field_name not in field_names:
            logger.debug(f"Skipping unknown renderer option: {name}")
            continue
        updates[field_name] = value
    return options.create_updated(**updates)


def to_vdom(source: SourceTree, options: Optional[VdomRendererOptions] = None, **kwargs: Any) -> Any:
    """Compile a source tree into a render tree.

    Parameters
    ----------
    source : Node, Mapping or str
        Root of the source tree, as a node, an mdast mapping, or mdast JSON
    options : VdomRendererOptions or None, default None
        Rendering options
    **kwargs : Any
        Option overrides, for example ``sanitize=False`` or
        ``components={"em": ...}``. CamelCase names (``keyPrefix``, ``h``)
        are accepted.

    Returns
    -------
    Any
        The container element, as built by the element factory. With the
        default factory, an :class:`~md2vdom.vdom.nodes.Element`.

    Raises
    ------
    MalformedNodeError
        If the tree contains a value that is not a node
    InvalidOptionsError
        If an option value is invalid

    Examples
    --------
    >>> tree = to_vdom({"type": "root", "children": []})
    >>> tree.tag_name, tree.key
    ('div', 'h-1')

    """
    root = _resolve_source(source)
    renderer = VdomRenderer(_resolve_options(options, kwargs))
    return renderer.render(root)


def to_html(source: SourceTree, options: Optional[VdomRendererOptions] = None, **kwargs: Any) -> str:
    """Compile a source tree and serialize the render tree to HTML.

    Takes the same arguments as :func:`to_vdom`. A custom ``element_factory``
    or components must still return render nodes for serialization to work.

    Examples
    --------
    >>> to_html({"type": "root", "children": [{"type": "thematicBreak"}]})
    '<div><hr></div>'

    """
    return _serialize_html(to_vdom(source, options, **kwargs))


__all__ = ["SourceTree", "to_vdom", "to_html"]
