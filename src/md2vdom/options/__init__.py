#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/options/__init__.py
"""Configuration options for md2vdom.

Options are frozen dataclasses. Use ``create_updated`` to derive a modified
copy instead of mutating an instance.
"""

from __future__ import annotations

from md2vdom.options.base import BaseRendererOptions, CloneFrozenMixin
from md2vdom.options.vdom import VdomRendererOptions

__all__ = [
    "CloneFrozenMixin",
    "BaseRendererOptions",
    "VdomRendererOptions",
]
