#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/__init__.py
"""md2vdom - compile Markdown syntax trees into virtual-element render trees.

md2vdom takes the mdast tree a Markdown parser produces and compiles it into
a generic render tree of elements and text, ready to be handed to any UI
backend that builds virtual DOM nodes from ``factory(tag_name, props,
children)`` calls.

Key Features
------------
- Complete mdast coverage, including GFM tables, task lists, strikethrough
  and footnotes
- Per-node render overrides through ``data.renderName`` and
  ``data.renderAttributes``
- GitHub-style sanitization by default, custom rule sets on demand
- Per-tag components and a pluggable element factory
- Deterministic, prefix-configurable element keys

Examples
--------
Compile an mdast tree:

    >>> from md2vdom import to_vdom
    >>> tree = to_vdom({
    ...     "type": "root",
    ...     "children": [{"type": "paragraph", "children": [{"type": "text", "value": "Hi"}]}],
    ... })
    >>> tree.children[0].tag_name
    'p'

Inspect the result as HTML:

    >>> from md2vdom import to_html
    >>> to_html({"type": "root", "children": []}, sanitize=False)
    '<div></div>'

See Also
--------
md2vdom.ast : source tree node definitions
md2vdom.vdom : render tree and materialization

"""

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "md2vdom requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from md2vdom.api import to_html, to_vdom  # noqa: E402
from md2vdom.exceptions import (  # noqa: E402
    InvalidOptionsError,
    MalformedNodeError,
    Md2VdomError,
    RenderingError,
    ValidationError,
)
from md2vdom.options import BaseRendererOptions, VdomRendererOptions  # noqa: E402
from md2vdom.renderers import VdomRenderer  # noqa: E402
from md2vdom.utils.html_sanitizer import DEFAULT_SCHEMA, Schema  # noqa: E402
from md2vdom.vdom import Element, TextNode, create_element  # noqa: E402

__all__ = [
    "__version__",
    # Entry points
    "to_vdom",
    "to_html",
    "VdomRenderer",
    # Options
    "BaseRendererOptions",
    "VdomRendererOptions",
    "Schema",
    "DEFAULT_SCHEMA",
    # Render tree
    "Element",
    "TextNode",
    "create_element",
    # Exceptions
    "Md2VdomError",
    "ValidationError",
    "InvalidOptionsError",
    "RenderingError",
    "MalformedNodeError",
]
