#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/renderers/base.py
"""Base classes for source-tree renderers.

This module defines the abstract base class that renderers inherit from. A
renderer turns a source tree into some output; :class:`~md2vdom.renderers.vdom.VdomRenderer`
is the one that produces render trees.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from md2vdom.ast.nodes import Node
from md2vdom.exceptions import InvalidOptionsError
from md2vdom.options.base import BaseRendererOptions


class BaseRenderer(ABC):
    """Abstract base class for all renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Renderer-specific options

    Examples
    --------
    Creating a custom renderer:

        >>> from md2vdom.ast import extract_text
        >>> from md2vdom.renderers.base import BaseRenderer
        >>>
        >>> class WordCountRenderer(BaseRenderer):
        ...     def render(self, root):
        ...         return len(extract_text(root).split())

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render(self, root: Node) -> Any:
        """Render a source tree.

        Parameters
        ----------
        root : Node
            Root of the source tree (usually a ``Root`` node)

        Returns
        -------
        Any
            Renderer-specific output

        Raises
        ------
        MalformedNodeError
            If the tree contains a value that is not a node

        """
        pass

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseRendererOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                f"Invalid options type for '{renderer_name}' renderer: expected {expected_type.__name__}, "
                f"got {type(options).__name__}",
                parameter_name="options",
                parameter_value=options,
            )
