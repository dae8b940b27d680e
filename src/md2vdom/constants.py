#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/constants.py
"""Constants and default values for md2vdom.

This module centralizes the defaults used by the compiler, the render-tree
helpers, and the sanitizer so that options classes and tests share a single
source of truth.
"""

from __future__ import annotations

from typing import Literal

# Line separator inserted between block-level render nodes
LINE = "\n"

# Renderer defaults
DEFAULT_KEY_PREFIX = "h-"
DEFAULT_TAB_SIZE = 4
DEFAULT_SANITIZE = True
DEFAULT_CONTAINER_TAG = "div"

# Footnotes
FOOTNOTE_ID_PREFIX = "fn-"
FOOTNOTE_REF_ID_PREFIX = "fnref-"
FOOTNOTE_SECTION_CLASS = "footnotes"
FOOTNOTE_REF_CLASS = "footnote-ref"
FOOTNOTE_BACKREF_CLASS = "footnote-backref"
DEFAULT_FOOTNOTE_BACKREF_LABEL = "↩"

# Reference forms used by linkReference / imageReference nodes
ReferenceType = Literal["shortcut", "collapsed", "full"]
REFERENCE_TYPES = ("shortcut", "collapsed", "full")

Alignment = Literal["left", "center", "right"]

# Elements that never have children or a closing tag in HTML output
VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# URL handling
DANGEROUS_SCHEMES = {
    "javascript:",
    "vbscript:",
    "data:text/html",
    "data:text/javascript",
    "data:application/javascript",
    "data:application/x-javascript",
}

# Characters left untouched when normalizing a URI (reserved + unreserved)
URI_SAFE_CHARACTERS = "!#$&'()*+,-./:;=?@_~"

# Sanitizer defaults
DEFAULT_CLOBBER_PREFIX = "user-content-"
