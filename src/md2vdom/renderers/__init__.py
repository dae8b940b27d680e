#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/renderers/__init__.py
"""Renderers for source trees.

- BaseRenderer: abstract base class for renderers
- VdomRenderer: compile a source tree into a virtual-element render tree

Examples
--------
    >>> from md2vdom.ast import Paragraph, Root, Text
    >>> from md2vdom.options import VdomRendererOptions
    >>> from md2vdom.renderers import VdomRenderer
    >>> renderer = VdomRenderer(VdomRendererOptions(key_prefix="f-"))
    >>> renderer.render(Root(children=[Paragraph(children=[Text(value="x")])])).key
    'f-1'

"""

from md2vdom.renderers.base import BaseRenderer
from md2vdom.renderers.vdom import VdomRenderer

__all__ = [
    "BaseRenderer",
    "VdomRenderer",
]
