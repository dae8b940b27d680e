#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/utils/__init__.py
"""Utility modules for md2vdom package.

This package contains the text helpers used while compiling, URL safety
checks, and the render-tree sanitizer.
"""

from md2vdom.utils.security import is_url_scheme_dangerous, normalize_uri
from md2vdom.utils.text import collapse_whitespace, detab, trim_left, trim_lines

__all__ = [
    "normalize_uri",
    "is_url_scheme_dangerous",
    "trim_lines",
    "collapse_whitespace",
    "detab",
    "trim_left",
]
