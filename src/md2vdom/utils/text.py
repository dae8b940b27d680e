#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2vdom/utils/text.py
"""Text processing utilities for the compiler.

Functions
---------
trim_lines : Remove spaces and tabs around line endings
collapse_whitespace : Replace every whitespace run with a single space
detab : Expand tab characters to tab stops
trim_left : Remove leading whitespace

Examples
--------
    >>> from md2vdom.utils.text import collapse_whitespace, trim_lines
    >>> trim_lines("alpha  \\n   bravo")
    'alpha\\nbravo'
    >>> collapse_whitespace("foo \\n  bar")
    'foo bar'

"""

from __future__ import annotations

import re

from md2vdom.constants import DEFAULT_TAB_SIZE

_LINE_ENDING_PATTERN = re.compile(r"[ \t]*\n+[ \t]*")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_LEADING_WHITESPACE_PATTERN = re.compile(r"^\s+")


def trim_lines(value: str) -> str:
    """Remove spaces and tabs around line endings.

    Runs of consecutive line endings collapse into one.

    Parameters
    ----------
    value : str
        Text to trim

    Returns
    -------
    str
        Trimmed text

    """
    return _LINE_ENDING_PATTERN.sub("\n", value)


def collapse_whitespace(value: str) -> str:
    """Replace every run of whitespace (including line endings) with one space."""
    return _WHITESPACE_PATTERN.sub(" ", value)


def detab(value: str, tab_size: int = DEFAULT_TAB_SIZE) -> str:
    """Expand tab characters to spaces, aligned to ``tab_size`` columns.

    Columns restart at every line ending, so indentation inside code blocks
    lines up the way it did in the source.

    Parameters
    ----------
    value : str
        Text containing tabs
    tab_size : int, default = 4
        Distance between tab stops

    Returns
    -------
    str
        Text without tab characters

    Examples
    --------
        >>> detab("\\tfoo")
        '    foo'
        >>> detab("ab\\tc")
        'ab  c'

    """
    return value.expandtabs(tab_size)


def trim_left(value: str) -> str:
    """Remove leading whitespace."""
    return _LEADING_WHITESPACE_PATTERN.sub("", value)


__all__ = [
    "trim_lines",
    "collapse_whitespace",
    "detab",
    "trim_left",
]
