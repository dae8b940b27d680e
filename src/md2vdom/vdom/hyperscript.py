#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/vdom/hyperscript.py
"""Materialization of render trees through a hyperscript-style factory.

A render tree is backend-agnostic. To hand it to a concrete UI library, each
element is rebuilt bottom-up by calling a factory with the signature
``factory(tag_name, props, children)``, the calling convention shared by
virtual-dom, React and friends:

- ``props`` holds DOM properties by DOM name, an ``attributes`` mapping with
  the attribute-only values by HTML name (when there are any), and ``key``
  (when keys are enabled)
- ``children`` holds the already materialized children; text becomes a plain
  ``str``

Per-tag overrides ("components") are looked up by lower-cased tag name before
the factory is called. A component may return a single node, a list of nodes
(spliced into the parent), or ``None`` (dropped).

Keys are ``<prefix><n>`` where ``n`` counts elements in document (pre-)
order, starting at 1 for the root, and restarting for every call.

"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from md2vdom.constants import DEFAULT_CONTAINER_TAG, DEFAULT_KEY_PREFIX
from md2vdom.vdom.nodes import Element, RenderNode, TextNode
from md2vdom.vdom.properties import normalize_properties, split_properties

logger = logging.getLogger(__name__)

ElementFactory = Callable[[str, dict[str, Any], list[Any]], Any]


def create_element(tag_name: str, props: Mapping[str, Any], children: list[Any]) -> Element:
    """Build an :class:`Element` from hyperscript arguments.

    This is the default factory: it folds ``props`` (DOM properties, the
    ``attributes`` sub-mapping and ``key``) back into a canonical property
    map, and turns string children into text nodes.

    Parameters
    ----------
    tag_name : str
        Tag name
    props : Mapping
        Hyperscript properties
    children : list
        Materialized children (elements, text nodes, or strings)

    Returns
    -------
    Element
        The new element

    """
    remaining = dict(props)
    key = remaining.pop("key", None)
    attributes = remaining.pop("attributes", None)

    return Element(
        tag_name=tag_name.lower(),
        properties=normalize_properties(remaining, attributes),
        children=[TextNode(child) if isinstance(child, str) else child for child in children],
        key=key,
    )


class _Materializer:
    """Walk one render tree, calling the factory bottom-up."""

    def __init__(
        self,
        factory: ElementFactory,
        components: Mapping[str, ElementFactory],
        key_prefix: Optional[str],
    ):
        self.factory = factory
        self.components = {name.lower(): component for name, component in components.items()}
        self.key_prefix = key_prefix
        self.count = 0

    def h(self, tag_name: str, props: dict[str, Any], children: list[Any]) -> Any:
        component = self.components.get(tag_name.lower())
        if component is not None:
            return component(tag_name, props, children)
        return self.factory(tag_name, props, children)

    def element(self, node: Element) -> Any:
        dom_properties, attributes = split_properties(node.properties)
        props: dict[str, Any] = dict(dom_properties)
        if attributes:
            props["attributes"] = attributes

        if self.key_prefix:
            self.count += 1
            props["key"] = f"{self.key_prefix}{self.count}"

        children: list[Any] = []
        for child in node.children:
            result = self.node(child)
            if result is None:
                continue
            if isinstance(result, list):
                children.extend(item for item in result if item is not None)
            else:
                children.append(result)

        return self.h(node.tag_name, props, children)

    def node(self, node: RenderNode) -> Any:
        if isinstance(node, TextNode):
            return node.value
        return self.element(node)


def to_hyperscript(
    tree: RenderNode | list[RenderNode] | None,
    create: Optional[ElementFactory] = None,
    components: Optional[Mapping[str, ElementFactory]] = None,
    key_prefix: Optional[str] = DEFAULT_KEY_PREFIX,
) -> Any:
    """Materialize a render tree through a hyperscript factory.

    Parameters
    ----------
    tree : RenderNode, list of RenderNode, or None
        Tree to materialize. Anything but a single element is wrapped in a
        container element first.
    create : callable or None, default = None
        Low-level factory, ``create(tag_name, props, children)``. Defaults to
        :func:`create_element`.
    components : Mapping or None, default = None
        Lower-cased tag name to factory, used instead of ``create`` for that tag
    key_prefix : str or None, default = "h-"
        Prefix for element keys; ``None`` or ``""`` disables keys

    Returns
    -------
    Any
        Whatever the factory (or the root's component) returns

    Examples
    --------
    >>> from md2vdom.vdom.nodes import Element, TextNode
    >>> root = to_hyperscript(Element("div", children=[Element("em", children=[TextNode("hi")])]))
    >>> root.key, root.children[0].key
    ('h-1', 'h-2')

    """
    if not isinstance(tree, Element):
        logger.debug("Render tree root is not an element, wrapping it in a container")
        if tree is None:
            children: list[RenderNode] = []
        elif isinstance(tree, list):
            children = list(tree)
        else:
            children = [tree]
        tree = Element(DEFAULT_CONTAINER_TAG, children=children)

    materializer = _Materializer(create or create_element, components or {}, key_prefix)
    return materializer.element(tree)


__all__ = [
    "ElementFactory",
    "create_element",
    "to_hyperscript",
]
