#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/vdom/__init__.py
"""Render-tree module.

The render tree is the compiler's output: generic virtual elements that any
UI backend accepting an element/text union can consume.

- nodes: ``Element`` and ``TextNode``
- properties: the Attribute Mapper (DOM property vs. HTML attribute)
- factory: the Element Factory every element is built through
- hyperscript: materialization through ``factory(tag_name, props, children)``
- serialize: HTML output for inspection and tests

"""

from md2vdom.vdom.factory import build, normalize_content
from md2vdom.vdom.hyperscript import ElementFactory, create_element, to_hyperscript
from md2vdom.vdom.nodes import Element, RenderNode, TextNode, is_element, merge_adjacent_text, text_content
from md2vdom.vdom.properties import (
    ClassifiedProperty,
    Placement,
    PropertyInfo,
    classify,
    get_property_info,
    normalize_properties,
    split_properties,
)
from md2vdom.vdom.serialize import to_html

__all__ = [
    "Element",
    "TextNode",
    "RenderNode",
    "is_element",
    "merge_adjacent_text",
    "text_content",
    "ClassifiedProperty",
    "Placement",
    "PropertyInfo",
    "classify",
    "get_property_info",
    "normalize_properties",
    "split_properties",
    "build",
    "normalize_content",
    "ElementFactory",
    "create_element",
    "to_hyperscript",
    "to_html",
]
