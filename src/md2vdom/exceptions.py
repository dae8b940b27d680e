#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/exceptions.py
"""Custom exceptions for the md2vdom library.

This module defines the exception classes raised while compiling a source
tree into a render tree. Compilation knows two kinds of failure only:
structurally invalid input, which aborts the whole call, and semantically
incomplete input (dangling references, unknown node types, a sanitizer that
removes everything), which is always handled in place and never raised.

Exception Hierarchy
-------------------
- Md2VdomError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (bad option values, wrong options class)

  - RenderingError (render-tree generation failures)
    - MalformedNodeError (a source node without a ``type`` discriminant)

"""

from typing import Any


class Md2VdomError(Exception):
    """Base exception class for all md2vdom-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Md2VdomError, ValueError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Raised for option values that fail validation, and for an options
    object of the wrong class handed to a renderer.

    ``parameter_name`` names the offending option field.
    """


class RenderingError(Md2VdomError):
    """Exception raised when producing a render tree fails.

    Parameters
    ----------
    message : str
        Description of the rendering error
    rendering_stage : str, optional
        Stage where rendering failed (e.g., "compile", "materialize")
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error with stage information."""
        super().__init__(message, original_error=original_error)
        self.rendering_stage = rendering_stage


class MalformedNodeError(RenderingError):
    """Exception raised when a source node has no ``type`` discriminant.

    Compilation cannot recover from such input: the offending value is
    reported and the whole call aborts.

    Parameters
    ----------
    value : any
        The value found where a source node was expected
    message : str, optional
        Custom error message. Defaults to ``Expected node, got `<value>` ``.

    Attributes
    ----------
    value : any
        The offending value

    """

    def __init__(self, value: Any, message: str | None = None):
        """Initialize the error with the offending value."""
        if message is None:
            message = f"Expected node, got `{value!r}`"
        super().__init__(message, rendering_stage="compile")
        self.value = value


__all__ = [
    "Md2VdomError",
    "ValidationError",
    "InvalidOptionsError",
    "RenderingError",
    "MalformedNodeError",
]
